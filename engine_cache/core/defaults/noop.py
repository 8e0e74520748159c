# engine_cache/core/defaults/noop.py
"""Bundled ``*`` fallback engine: returns its input unchanged."""

def render(input, locals=None, callback=None):
    if callback is not None:
        callback(None, input)
    return input
