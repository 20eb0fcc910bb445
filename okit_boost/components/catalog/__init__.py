"""
Catalog component - Platforms and boost services.
"""

from ._impl import (
    PLATFORMS,
    PUBLIC_SERVICE_COLUMNS,
    SERVICES,
    CatalogService,
    slugify_platform_id,
)

__all__ = [
    "CatalogService",
    "slugify_platform_id",
    "PLATFORMS",
    "SERVICES",
    "PUBLIC_SERVICE_COLUMNS",
]
