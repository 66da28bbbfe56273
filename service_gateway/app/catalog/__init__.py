"""
Catalog access layer for the gateway: enrichment rules and the cache-first
service behind the product routes.
"""

from .enrichment import Enricher
from .service import CatalogResult, CatalogService

__all__ = ["CatalogResult", "CatalogService", "Enricher"]
