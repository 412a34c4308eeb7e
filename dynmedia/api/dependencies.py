"""Dependency injection functions used by the API router."""

from functools import lru_cache

from dynmedia.config import Settings, settings
from dynmedia.core.catalog import AssetCatalog, load_catalog


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def get_catalog() -> AssetCatalog:
    """Catalog loaded once from the configured path."""
    return load_catalog(settings.CATALOG_PATH)
