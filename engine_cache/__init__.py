"""engine-cache: a registry of template render engines keyed by file extension."""

__version__ = "0.1.0"

from engine_cache.core.engine import EngineDescriptor, RenderEngine
from engine_cache.core.registry import Engines
from engine_cache.exceptions import (
    ConfigError,
    EngineCacheError,
    InvalidEngineError,
    OutputError,
    TemplateError,
)

__all__ = [
    "Engines",
    "EngineDescriptor",
    "RenderEngine",
    "EngineCacheError",
    "InvalidEngineError",
    "ConfigError",
    "TemplateError",
    "OutputError",
]
