"""
Catalog module: tagged garment records and the JSON loader.
"""

from catalog.loader import CatalogLoadError, load_catalog, parse_catalog
from catalog.models import CatalogItem, EntityMeta, SportMeta

__all__ = [
    "CatalogItem",
    "CatalogLoadError",
    "EntityMeta",
    "SportMeta",
    "load_catalog",
    "parse_catalog",
]
