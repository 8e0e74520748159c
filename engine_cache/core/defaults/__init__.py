# engine_cache/core/defaults/__init__.py
"""
Engines installed by ``Engines.init``.
"""
from . import noop, tmpl

# ext -> engine module, in registration order
DEFAULT_ENGINES = {
    "tmpl": tmpl,
    "*": noop,
}

__all__ = ["DEFAULT_ENGINES", "noop", "tmpl"]
