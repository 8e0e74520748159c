from .settings import EngineCacheConfig
from .loader import build_config, engines_from_config, import_engine, load_and_merge_configs

__all__ = ["EngineCacheConfig", "build_config", "engines_from_config", "import_engine", "load_and_merge_configs"]
