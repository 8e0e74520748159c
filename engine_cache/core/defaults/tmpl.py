# engine_cache/core/defaults/tmpl.py
"""
Bundled ``.tmpl`` engine: mustache-style variable substitution backed by
Handlebars (pybars). ``{{name}}`` is HTML-escaped, ``{{{name}}}`` is raw.
"""
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Mapping, Optional
import pybars  # type: ignore
import structlog

from engine_cache.exceptions import TemplateError

log = structlog.get_logger(__name__)

_compiler = pybars.Compiler()


@lru_cache(maxsize=128)
def _compile(source: str):
    try:
        return _compiler.compile(source)
    except Exception as e:
        log.error("tmpl_compilation_failed", error=str(e))
        raise TemplateError(f"Failed to compile template: {e}") from e


def _render_string(source: str, locals: Optional[Mapping[str, Any]]) -> str:
    template_fn = _compile(source)
    try:
        return str(template_fn(dict(locals or {})))
    except Exception as e:
        log.error("tmpl_render_failed", error=str(e), context_keys=list((locals or {}).keys()))
        raise TemplateError(f"Template render failed: {e}") from e


def render(input: str, locals: Optional[Mapping[str, Any]] = None, callback: Optional[Callable] = None):
    """
    Interpolates ``locals`` into ``input``.

    With a callback, calls ``callback(None, output)`` or ``callback(error)``
    and returns None. Without one, returns the output or raises TemplateError.
    """
    if callback is None:
        return _render_string(input, locals)
    try:
        output = _render_string(input, locals)
    except TemplateError as e:
        callback(e)
        return None
    callback(None, output)
    return None


def render_file(path, locals: Optional[Mapping[str, Any]] = None, callback: Optional[Callable] = None):
    """Same contract as render(), reading the template from ``path``."""
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        err = TemplateError(f"Failed to read template file {path}: {e}")
        if callback is None:
            raise err from e
        callback(err)
        return None
    return render(source, locals, callback)
