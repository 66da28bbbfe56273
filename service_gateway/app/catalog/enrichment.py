"""
Enrichment rules applied to raw upstream catalog records before caching.
"""

from __future__ import annotations

import math
import random
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional


DEFAULT_BRL_RATE = 5.5
DISCOUNT_THRESHOLD = 100
DISCOUNT_RATE = 0.1
STOCK_RANGE = (1, 100)
PRODUCT_COUNT_RANGE = (5, 54)
RATING_GLYPH = "⭐"

_WHITESPACE = re.compile(r"\s+")


def format_timestamp(value: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    value = value or datetime.now(timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def slugify(name: str) -> str:
    """Lowercase ``name`` and replace whitespace runs with hyphens."""
    return _WHITESPACE.sub("-", name.strip().lower())


def price_of(record: Dict[str, Any]) -> float:
    """Numeric price of an upstream record; missing or non-numeric prices count as 0."""
    try:
        return float(record.get("price") or 0)
    except (TypeError, ValueError):
        return 0.0


def rating_stars(rating: Any) -> str:
    """One glyph per whole point of ``rating["rate"]``."""
    if not isinstance(rating, dict):
        return ""
    try:
        rate = float(rating.get("rate"))
    except (TypeError, ValueError):
        return ""
    return RATING_GLYPH * max(0, math.floor(rate))


class Enricher:
    """Pure transforms from upstream records to the enriched response shape.

    ``rng`` drives the simulated stock and product counts; pass a seeded
    ``random.Random`` for reproducible output.
    """

    def __init__(self, brl_rate: float = DEFAULT_BRL_RATE, rng: Optional[random.Random] = None):
        self.brl_rate = brl_rate
        self.rng = rng or random.Random()

    def product(self, record: Dict[str, Any], fetched_at: Optional[str] = None) -> Dict[str, Any]:
        """Derived identifier, fetch timestamp, BRL price and discount."""
        price = price_of(record)
        enriched = dict(record)
        enriched["internalId"] = f"PROD_{record.get('id')}"
        enriched["fetchedAt"] = fetched_at or format_timestamp()
        enriched["priceInBRL"] = f"{round(price * self.brl_rate, 2):.2f}"
        enriched["discount"] = DISCOUNT_RATE if price > DISCOUNT_THRESHOLD else 0
        return enriched

    def products(self, records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Enrich a listing; every record shares one fetch timestamp."""
        fetched_at = format_timestamp()
        return [self.product(record, fetched_at) for record in records]

    def product_detail(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Single-product enrichment, adding simulated stock and rating stars."""
        enriched = self.product(record)
        enriched["stock"] = self.rng.randint(*STOCK_RANGE)
        enriched["ratingStars"] = rating_stars(record.get("rating"))
        return enriched

    def categories(self, names: Iterable[str]) -> List[Dict[str, Any]]:
        """Turn upstream category names into described, slugged entries."""
        fetched_at = format_timestamp()
        return [
            {
                "name": name,
                "slug": slugify(name),
                "productCount": self.rng.randint(*PRODUCT_COUNT_RANGE),
                "description": f"Produtos da categoria {name}",
                "fetchedAt": fetched_at,
            }
            for name in names
        ]
