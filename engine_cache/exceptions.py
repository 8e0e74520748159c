class EngineCacheError(Exception):
    # base exception for all application-specific errors.
    pass

class InvalidEngineError(EngineCacheError, TypeError):
    # an engine handed to register() has no callable `render`.
    pass

class ConfigError(EngineCacheError):
    # errors related to configuration or configured engine imports.
    pass

class TemplateError(EngineCacheError):
    # errors from the bundled template engine.
    pass

class OutputError(EngineCacheError):
    # errors during output operations.
    pass
