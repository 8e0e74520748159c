# engine_cache/core/engine.py
"""
Engine descriptors and the normalization step that turns whatever a caller
hands to ``Engines.register`` into one canonical descriptor.

Accepted shapes:
  * a plain callable, used as ``render`` (or its own ``render`` attribute if it has one);
  * a mapping such as ``{"render": fn, "render_file": fn2, "options": {...}}``;
  * any object with a ``render`` attribute (modules, engine instances, descriptors).
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable
import structlog

from engine_cache.exceptions import InvalidEngineError

log = structlog.get_logger(__name__)

# Older engines (consolidate-style, express view engines) expose the file
# renderer under these names.
LEGACY_RENDER_FILE_NAMES = ("renderFile", "__express")


@runtime_checkable
class RenderEngine(Protocol):
    """Anything exposing a ``render(input, locals, callback)`` operation."""

    def render(self, input: str, locals: Optional[Mapping] = None, callback: Optional[Callable] = None) -> Any:
        ...


@dataclass
class EngineDescriptor:
    render: Callable[..., Any]
    render_file: Optional[Callable[..., Any]] = None
    options: Dict[str, Any] = field(default_factory=dict)
    source: Any = field(default=None, repr=False, compare=False)

    @property
    def name(self) -> str:
        """Human readable name of the object this descriptor was built from."""
        src = self.source if self.source is not None else self.render
        return getattr(src, "__name__", None) or type(src).__name__


def _member(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def has_render(obj: Any) -> bool:
    # ownership check used by Engines.load; callability is checked at registration.
    if isinstance(obj, Mapping):
        return "render" in obj
    return isinstance(obj, RenderEngine)


def adapt_legacy_engine(engine: Any) -> Optional[Callable[..., Any]]:
    """Returns the engine's file renderer, translating legacy attribute names."""
    render_file = _member(engine, "render_file")
    if render_file is not None:
        return render_file
    for legacy_name in LEGACY_RENDER_FILE_NAMES:
        candidate = _member(engine, legacy_name)
        if candidate is not None:
            log.debug("legacy_render_file_adapted", attribute=legacy_name)
            return candidate
    return None


def resolve_engine(engine: Any, options: Optional[Mapping] = None) -> EngineDescriptor:
    """
    Builds an EngineDescriptor from a registration argument.

    ``options`` is attached as the descriptor's options unless the engine
    carries its own ``options`` mapping. Raises InvalidEngineError when no
    callable ``render`` can be resolved; nothing is registered in that case.
    """
    if engine is None:
        raise InvalidEngineError("Engines are expected to have a `render` method, got None.")

    render = _member(engine, "render")
    if render is None and callable(engine) and not isinstance(engine, Mapping):
        render = engine

    if not callable(render):
        raise InvalidEngineError(
            f"Engines are expected to have a `render` method; {type(engine).__name__} has none.")

    own_options = _member(engine, "options")
    if isinstance(own_options, Mapping):
        resolved_options = own_options
    else:
        resolved_options = options if options is not None else {}

    render_file = adapt_legacy_engine(engine)
    if render_file is not None and not callable(render_file):
        log.warning("non_callable_render_file_ignored", engine=type(engine).__name__)
        render_file = None

    return EngineDescriptor(render=render, render_file=render_file, options=resolved_options, source=engine)
