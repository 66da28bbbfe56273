"""
Gateway caching package.

Provides the in-memory product cache used by the catalog routes to avoid
repeated upstream calls. Entries expire after a fixed TTL and can be
dropped wholesale by an administrator.
"""

from .cache_store import CacheEntry, CacheStore
from .keys import category_key, categories_key, normalize_sort, product_key, products_key

__all__ = [
    "CacheEntry",
    "CacheStore",
    "categories_key",
    "category_key",
    "normalize_sort",
    "product_key",
    "products_key",
]
