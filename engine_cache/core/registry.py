# engine_cache/core/registry.py
"""
The Engines registry: an options store plus a cache of render engines keyed by
file extension, with a ``*`` wildcard engine used for unknown extensions.

Usage:
    engines = Engines({"cache": True})
    engines.register("hbs", handlebars_render)
    engines.get("hbs").render("{{a}}", {"a": 1})
"""
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union
import structlog

from engine_cache.core.defaults import DEFAULT_ENGINES
from engine_cache.core.engine import EngineDescriptor, has_render, resolve_engine
from engine_cache.util import WILDCARD, normalize_ext

log = structlog.get_logger(__name__)

_UNSET = object()


class Engines:
    """Registry of render engines by extension. Not thread-safe."""

    def __init__(self, options: Optional[Mapping] = None):
        self.options: Dict[str, Any] = {}
        self.cache: Dict[str, EngineDescriptor] = {}
        self.init(options)

    def init(self, options: Optional[Mapping] = None) -> None:
        """Discards all state, applies ``options`` and installs the default engines."""
        log.debug("engines_init", option_keys=list(options or {}))
        self.options = {}
        self.cache = {}
        self.extend(options)
        self.default_engines()

    def default_engines(self) -> None:
        for ext, engine in DEFAULT_ENGINES.items():
            self.register(ext, engine)

    def extend(self, obj: Optional[Mapping]) -> "Engines":
        if obj:
            self.options.update(obj)
        return self

    def option(self, key: Union[str, Mapping], value: Any = _UNSET) -> Any:
        """
        option("a")            -> current value of "a" (None if unset)
        option("a", True)      -> sets "a", returns the registry
        option({"a": True})    -> merges the mapping, returns the registry
        """
        if isinstance(key, Mapping):
            return self.extend(key)
        if value is _UNSET:
            return self.options.get(key)
        self.options[key] = value
        return self

    def register(self, ext: str, options: Any, engine: Any = _UNSET) -> "Engines":
        """
        Registers ``engine`` under ``ext``.

        register(ext, engine) or register(ext, options, engine). The engine is
        validated before the cache is touched; InvalidEngineError propagates.
        """
        if engine is _UNSET:
            engine, options = options, None
        descriptor = resolve_engine(engine, options)

        key = normalize_ext(ext)
        self.cache[key] = descriptor
        log.debug("engine_registered", ext=key, engine=descriptor.name,
                  has_render_file=descriptor.render_file is not None)
        return self

    def load(self, engines: Mapping) -> "Engines":
        """Registers every entry of ``engines`` that owns a ``render``; others are skipped."""
        for ext, engine in engines.items():
            if has_render(engine):
                self.register(ext, engine)
            else:
                log.debug("engine_load_skipped", ext=ext)
        return self

    def get(self, ext: Optional[str] = None) -> Any:
        """
        Without ``ext`` returns the live cache dict. With one, returns the
        matching descriptor, else the ``*`` descriptor, else None.

        A wildcard result does not say whether ``ext`` was unknown; compare
        against ``get("*")`` or use ``has()`` when that matters.
        """
        if not ext:
            return self.cache
        engine = self.cache.get(normalize_ext(ext))
        if engine is None:
            engine = self.cache.get(WILDCARD)
        return engine

    def has(self, ext: str) -> bool:
        """True only for an exact registration, ignoring the wildcard fallback."""
        return normalize_ext(ext) in self.cache

    def clear(self, ext: Optional[str] = None) -> None:
        if ext:
            removed = self.cache.pop(normalize_ext(ext), None)
            log.debug("engine_cleared", ext=normalize_ext(ext), removed=removed is not None)
        else:
            self.cache = {}
            log.debug("engine_cache_cleared")
