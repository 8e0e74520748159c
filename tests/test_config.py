import pytest
from pathlib import Path
from engine_cache.config.loader import build_config, engines_from_config, import_engine, load_and_merge_configs
from engine_cache.config.settings import EngineCacheConfig
from engine_cache.core.defaults import noop
from engine_cache.exceptions import ConfigError, InvalidEngineError


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    proj = tmp_path / "project"
    proj.mkdir()
    return proj

@pytest.fixture
def no_user_config(tmp_path: Path) -> Path:
    return tmp_path / "missing-user-config.toml"


def test_no_config_files(project_dir: Path, no_user_config: Path):
    assert load_and_merge_configs(project_dir, no_user_config) == {}

def test_project_file_merges_over_user_file(project_dir: Path, tmp_path: Path):
    user_file = tmp_path / "user.toml"
    user_file.write_text('[options]\na = 1\nb = 1\n[locals]\nwho = "user"\n')
    (project_dir / ".engine-cache.toml").write_text('[options]\nb = 2\n')

    raw = load_and_merge_configs(project_dir, user_file)
    assert raw["options"] == {"a": 1, "b": 2}
    assert raw["locals"] == {"who": "user"}

def test_first_project_file_wins(project_dir: Path, no_user_config: Path):
    (project_dir / ".engine-cache.toml").write_text('[options]\nsource = "dotfile"\n')
    (project_dir / "engine-cache.toml").write_text('[options]\nsource = "plain"\n')
    assert load_and_merge_configs(project_dir, no_user_config)["options"] == {"source": "dotfile"}

def test_pyproject_tool_table(project_dir: Path, no_user_config: Path):
    (project_dir / "pyproject.toml").write_text(
        '[project]\nname = "x"\n\n[tool.engine-cache.options]\nlayout = "base"\n')
    assert load_and_merge_configs(project_dir, no_user_config) == {"options": {"layout": "base"}}

def test_invalid_toml_raises_config_error(project_dir: Path, no_user_config: Path):
    (project_dir / ".engine-cache.toml").write_text("[options\n")
    with pytest.raises(ConfigError):
        load_and_merge_configs(project_dir, no_user_config)

def test_build_config_defaults():
    assert build_config({}) == EngineCacheConfig()

def test_build_config_applies_profile():
    raw = {
        "options": {"a": 1},
        "locals": {"who": "base"},
        "profiles": {"dev": {"options": {"debug": True}, "locals": {"who": "dev"}}},
    }
    config = build_config(raw, profile="dev")
    assert config.options == {"a": 1, "debug": True}
    assert config.locals == {"who": "dev"}
    assert config.profile == "dev"

def test_build_config_unknown_profile_keeps_base():
    config = build_config({"options": {"a": 1}}, profile="nope")
    assert config.options == {"a": 1}

def test_build_config_rejects_non_table():
    with pytest.raises(ConfigError, match="options"):
        build_config({"options": "oops"})

def test_import_engine_colon_and_dotted_forms():
    assert import_engine("engine_cache.core.defaults:noop") is noop
    assert import_engine("engine_cache.core.defaults.noop") is noop
    assert import_engine("engine_cache.core.defaults:noop.render") is noop.render

@pytest.mark.parametrize("path", ["noop", "no_such_module_xyz:engine", "engine_cache.core.defaults:missing"])
def test_import_engine_failures(path):
    with pytest.raises(ConfigError):
        import_engine(path)

def test_engines_from_config():
    config = EngineCacheConfig(options={"a": 1}, engines={"txt": "engine_cache.core.defaults:noop"})
    engines = engines_from_config(config)

    assert engines.option("a") == 1
    assert engines.has("txt")
    assert engines.get("txt").render is noop.render

def test_engines_from_config_invalid_engine():
    config = EngineCacheConfig(engines={"bad": "engine_cache.util:WILDCARD"})
    with pytest.raises(InvalidEngineError):
        engines_from_config(config)

@pytest.mark.parametrize("raw", [
    {"profiles": "x"},
    {"profiles": {"dev": "x"}},
    {"profiles": {"dev": {"options": 3}}},
])
def test_build_config_rejects_malformed_profiles(raw):
    with pytest.raises(ConfigError):
        build_config(raw, profile="dev")
