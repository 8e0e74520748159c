# engine_cache/core/invoke.py
"""
Bridges the two completion styles engines use (return value or
``callback(error, output)``) for callers that want a plain string back.
Only synchronous completion is supported.
"""
from pathlib import Path
from typing import Any, Mapping, Optional
import structlog

from engine_cache.core.engine import EngineDescriptor
from engine_cache.exceptions import EngineCacheError

log = structlog.get_logger(__name__)


class _Completion:
    def __init__(self):
        self.called = False
        self.error: Optional[BaseException] = None
        self.output: Any = None

    def __call__(self, error=None, output=None):
        self.called = True
        self.error = error
        self.output = output


def _finish(completion: _Completion, returned: Any) -> str:
    if completion.called:
        if completion.error is not None:
            if isinstance(completion.error, BaseException):
                raise completion.error
            raise EngineCacheError(str(completion.error))
        return "" if completion.output is None else str(completion.output)
    if returned is None:
        raise EngineCacheError("Engine returned nothing and never invoked its callback.")
    return str(returned)


def invoke_render(descriptor: EngineDescriptor, text: str, locals: Optional[Mapping[str, Any]] = None) -> str:
    completion = _Completion()
    returned = descriptor.render(text, dict(locals or {}), completion)
    return _finish(completion, returned)


def invoke_render_file(descriptor: EngineDescriptor, path: Path, locals: Optional[Mapping[str, Any]] = None) -> str:
    """Uses the engine's render_file when present, otherwise reads ``path`` and renders it."""
    if descriptor.render_file is None:
        log.debug("render_file_unavailable_reading_source", path=str(path), engine=descriptor.name)
        try:
            source = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise EngineCacheError(f"Failed to read template file {path}: {e}") from e
        return invoke_render(descriptor, source, locals)
    completion = _Completion()
    returned = descriptor.render_file(str(path), dict(locals or {}), completion)
    return _finish(completion, returned)
