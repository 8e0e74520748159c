# engine_cache/config/loader.py
"""
Handles loading and merging of configuration from TOML files, and turning
the result into a ready-to-use Engines registry.
"""
import importlib
import toml
from pathlib import Path
from typing import Any, Dict, Optional
import structlog

from engine_cache.core.registry import Engines
from engine_cache.exceptions import ConfigError

from .settings import EngineCacheConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".engine-cache.toml", "engine-cache.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "engine-cache"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

TABLE_KEYS = ("options", "locals", "engines")

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {file_path}: {e}") from e
    return data.get("tool", {}).get("engine-cache", {}) if file_path.name == "pyproject.toml" else data

def _merge_tables(target: Dict[str, Any], source: Dict[str, Any]):
    # tables merge key by key, anything else overwrites.
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            target[key] = {**target[key], **value}
        else:
            target[key] = value

def load_and_merge_configs(cwd: Optional[Path] = None, user_config_file: Optional[Path] = None) -> Dict[str, Any]:
    cwd = cwd or Path.cwd()
    user_config_file = user_config_file or USER_CONFIG_FILE
    merged_toml_data: Dict[str, Any] = {}
    if user_config_file.is_file():
        log.info("loading_user_global_config", path=str(user_config_file))
        merged_toml_data.update(_load_toml_file_data(user_config_file))

    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = cwd / filename
        if candidate.is_file():
            project_settings = _load_toml_file_data(candidate)
            if project_settings:
                log.info("loading_project_local_config", path=str(candidate))
                _merge_tables(merged_toml_data, project_settings)
                break
    if not merged_toml_data: log.debug("no_configuration_files_loaded")
    return merged_toml_data

def build_config(raw: Dict[str, Any], profile: Optional[str] = None) -> EngineCacheConfig:
    for key in TABLE_KEYS:
        if not isinstance(raw.get(key, {}), dict):
            raise ConfigError(f"Config key '{key}' must be a table, got {type(raw[key]).__name__}.")
    tables = {key: dict(raw.get(key) or {}) for key in TABLE_KEYS}

    profiles = raw.get("profiles", {})
    if not isinstance(profiles, dict):
        raise ConfigError(f"Config key 'profiles' must be a table, got {type(profiles).__name__}.")

    if profile:
        profile_values = profiles.get(profile)
        if profile_values and not isinstance(profile_values, dict):
            raise ConfigError(f"Profile '{profile}' must be a table, got {type(profile_values).__name__}.")
        if profile_values:
            log.info("applying_profile_settings", profile=profile)
            for key in TABLE_KEYS:
                if not isinstance(profile_values.get(key, {}), dict):
                    raise ConfigError(f"Profile '{profile}' key '{key}' must be a table.")
                tables[key].update(profile_values.get(key) or {})
        else:
            log.warning("profile_not_found_in_config_files", profile_name=profile)

    return EngineCacheConfig(
        options=tables["options"],
        locals=tables["locals"],
        engines={str(ext): str(path) for ext, path in tables["engines"].items()},
        profile=profile or "default",
    )

def import_engine(import_path: str) -> Any:
    # resolves "package.module:attr" (or "package.module.attr") to an object.
    module_name, sep, attr_path = import_path.partition(":")
    if not sep:
        module_name, _, attr_path = import_path.rpartition(".")
    if not module_name or not attr_path:
        raise ConfigError(f"Engine path '{import_path}' must look like 'module:attribute'.")
    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Could not import engine module '{module_name}': {e}") from e
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ConfigError(f"Engine '{import_path}' not found: {e}") from e
    log.debug("engine_imported", path=import_path)
    return obj

def engines_from_config(config: EngineCacheConfig) -> Engines:
    engines = Engines(config.options)
    for ext, import_path in config.engines.items():
        engines.register(ext, import_engine(import_path))
    log.info("engines_built_from_config", profile=config.profile, registered=sorted(engines.get()))
    return engines
