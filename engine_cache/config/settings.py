from dataclasses import dataclass, field
from typing import Any, Dict

@dataclass
class EngineCacheConfig:
    # holds the configuration for one registry, as read from toml files.
    options: Dict[str, Any] = field(default_factory=dict)   # seeded into Engines.options
    locals: Dict[str, Any] = field(default_factory=dict)    # template data used by the cli
    engines: Dict[str, str] = field(default_factory=dict)   # ext -> "module:attribute"
    profile: str = "default"
