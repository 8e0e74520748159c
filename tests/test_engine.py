import types
import pytest
from engine_cache.core.engine import EngineDescriptor, RenderEngine, adapt_legacy_engine, has_render, resolve_engine
from engine_cache.exceptions import InvalidEngineError


def render(input, locals=None, callback=None):
    return input


def render_file(path, locals=None, callback=None):
    return path


def test_resolve_plain_callable():
    descriptor = resolve_engine(render)
    assert descriptor == EngineDescriptor(render=render)
    assert descriptor.source is render
    assert descriptor.name == "render"

def test_resolve_module_engine():
    module = types.ModuleType("fake_engine")
    module.render = render
    module.renderFile = render_file
    descriptor = resolve_engine(module, {"a": 1})

    assert descriptor.render is render
    assert descriptor.render_file is render_file
    assert descriptor.options == {"a": 1}
    assert descriptor.name == "fake_engine"

def test_express_legacy_name_is_adapted():
    assert adapt_legacy_engine({"render": render, "__express": render_file}) is render_file

def test_render_file_takes_precedence_over_legacy_names():
    def other(path, locals=None, callback=None):
        return None

    engine = {"render": render, "render_file": render_file, "renderFile": other, "__express": other}
    assert adapt_legacy_engine(engine) is render_file

def test_non_callable_render_file_is_dropped():
    assert resolve_engine({"render": render, "renderFile": "nope"}).render_file is None

def test_resolve_existing_descriptor():
    original = EngineDescriptor(render=render, render_file=render_file, options={"a": 1})
    descriptor = resolve_engine(original)
    assert descriptor.render is render
    assert descriptor.render_file is render_file
    assert descriptor.options == {"a": 1}

@pytest.mark.parametrize("engine", [None, {}, {"render": None}, {"render": 42}, object()])
def test_resolve_rejects_engines_without_render(engine):
    with pytest.raises(InvalidEngineError):
        resolve_engine(engine)

def test_invalid_engine_error_is_a_type_error():
    with pytest.raises(TypeError):
        resolve_engine({})

def test_render_engine_protocol():
    class Engine:
        def render(self, input, locals=None, callback=None):
            return input

    assert isinstance(Engine(), RenderEngine)
    assert not isinstance(object(), RenderEngine)

def test_has_render():
    assert has_render({"render": None})
    assert not has_render({"renderFile": render_file})
    assert not has_render(render)
