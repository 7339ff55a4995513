from .base import (
    CatalogConfig,
    build_catalog_config,
    DeviceCatalog,
    register_catalog,
    create_catalog,
    create_catalog_from_loaded_config,
)

__all__ = [
    "CatalogConfig",
    "build_catalog_config",
    "DeviceCatalog",
    "register_catalog",
    "create_catalog",
    "create_catalog_from_loaded_config",
]
