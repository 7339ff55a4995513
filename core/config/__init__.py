"""Config package facade."""

from .loader import load_config
from .schema import (
    CatalogConfigBlock,
    ConfigError,
    ConsentConfigBlock,
    LoadedConfig,
    RuntimeConfig,
)
from .validate import validate_config

__all__ = [
    "ConfigError",
    "LoadedConfig",
    "RuntimeConfig",
    "CatalogConfigBlock",
    "ConsentConfigBlock",
    "load_config",
    "validate_config",
]
