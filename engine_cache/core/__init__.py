# engine_cache/core/__init__.py
from .engine import EngineDescriptor, RenderEngine, adapt_legacy_engine, resolve_engine
from .registry import Engines
from .invoke import invoke_render, invoke_render_file

__all__ = [
    "Engines",
    "EngineDescriptor",
    "RenderEngine",
    "adapt_legacy_engine",
    "resolve_engine",
    "invoke_render",
    "invoke_render_file",
]
