"""
Cache key derivation for catalog queries.

Every query shape owns a distinct prefix so keys from different shapes can
never collide. Parameters are normalized before formatting so logically
identical queries share one entry.
"""

from typing import Optional, Union


CATEGORIES_KEY = "categories"
SORT_ASC = "asc"
SORT_DESC = "desc"


def normalize_sort(sort: Optional[str]) -> str:
    """Canonical sort order; ValueError for anything but asc or desc."""
    value = (sort or SORT_DESC).strip().lower()
    if value not in (SORT_ASC, SORT_DESC):
        raise ValueError("sort must be 'asc' or 'desc'")
    return value


def products_key(limit: int, sort: str, category: Optional[str] = None) -> str:
    """Key for the product listing, with the optional category filter folded in.

    A filter is tagged ``cat:`` so that no filter value can produce the key
    of the unfiltered listing.
    """
    if category and category.strip():
        category_part = f"cat:{category.strip().lower()}"
    else:
        category_part = "all"
    return f"products_{limit}_{normalize_sort(sort)}_{category_part}"


def product_key(product_id: Union[int, str]) -> str:
    """Key for a single product lookup."""
    return f"product_{product_id}"


def category_key(category: str, limit: int, sort: str) -> str:
    """Key for the products-by-category listing.

    The category name is kept verbatim because the upstream lookup is
    case-sensitive.
    """
    return f"category_{category}_{limit}_{normalize_sort(sort)}"


def categories_key() -> str:
    """Key for the category listing."""
    return CATEGORIES_KEY
