"""
Cache-first catalog access for the gateway product routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from shared.errors import NotFoundError, UpstreamUnavailableError
from shared.logging import get_logger

from service_gateway.app.auth import Principal
from service_gateway.app.caching import (
    CacheStore,
    categories_key,
    category_key,
    normalize_sort,
    product_key,
    products_key,
)
from service_gateway.app.caching.keys import SORT_DESC
from .enrichment import Enricher, price_of

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from service_gateway.app.adapters.upstream_catalog import UpstreamCatalogClient
    from shared.metrics import MetricsCollector


@dataclass(frozen=True)
class CatalogResult:
    """Payload returned by a catalog read plus whether it came from cache."""

    data: Any
    cached: bool
    total: Optional[int] = None
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the result to a JSON-friendly dictionary."""
        payload: Dict[str, Any] = {"data": self.data}
        if self.category is not None:
            payload["category"] = self.category
        if self.total is not None:
            payload["total"] = self.total
        payload["cached"] = self.cached
        return payload


class CatalogService:
    """Coordinates cache lookups, upstream fetches and enrichment.

    Every read follows the same path: derive the cache key, return the
    cached payload on a hit, otherwise fetch from upstream, enrich, store
    and return. Nothing is written to the cache unless both the fetch and
    the enrichment succeed. Concurrent misses on one key may each call
    upstream; the last writer wins.
    """

    def __init__(
        self,
        cache: CacheStore,
        upstream: "UpstreamCatalogClient",
        enricher: Optional[Enricher] = None,
        *,
        metrics: Optional["MetricsCollector"] = None,
    ) -> None:
        self.cache = cache
        self.upstream = upstream
        self.enricher = enricher or Enricher()
        self.metrics = metrics
        self.logger = get_logger("gateway.catalog")

    async def list_products(
        self,
        principal: Principal,
        limit: int = 10,
        sort: str = SORT_DESC,
        category: Optional[str] = None,
    ) -> CatalogResult:
        """List products, optionally narrowed to categories containing ``category``."""
        sort = normalize_sort(sort)
        key = products_key(limit, sort, category)

        async def load() -> List[Dict[str, Any]]:
            records = self._expect_list(
                await self.upstream.fetch("/products", params={"limit": limit, "sort": sort}),
                "/products",
            )
            if category and category.strip():
                needle = category.strip().lower()
                records = [
                    record for record in records
                    if needle in str(record.get("category", "")).lower()
                ]
            return self.enricher.products(records)

        data, cached = await self._cached("products", key, principal, load)
        return CatalogResult(data=data, cached=cached, total=len(data))

    async def get_product(self, principal: Principal, product_id: int) -> CatalogResult:
        """Fetch one product by upstream id; NotFoundError when it does not exist."""
        key = product_key(product_id)

        async def load() -> Dict[str, Any]:
            path = f"/products/{product_id}"
            try:
                record = await self.upstream.fetch(path)
            except NotFoundError as exc:
                raise NotFoundError("Produto não encontrado", details={"id": product_id}) from exc
            if not isinstance(record, dict):
                raise UpstreamUnavailableError(service="upstream_catalog", details=f"Unexpected payload for {path}")
            return self.enricher.product_detail(record)

        data, cached = await self._cached("product", key, principal, load)
        return CatalogResult(data=data, cached=cached)

    async def list_categories(self, principal: Principal) -> CatalogResult:
        """List upstream categories with slugs and simulated product counts."""
        key = categories_key()

        async def load() -> List[Dict[str, Any]]:
            names = self._expect_list(
                await self.upstream.fetch("/products/categories"),
                "/products/categories",
            )
            return self.enricher.categories(str(name) for name in names)

        data, cached = await self._cached("categories", key, principal, load)
        return CatalogResult(data=data, cached=cached, total=len(data))

    async def products_by_category(
        self,
        principal: Principal,
        category: str,
        limit: int = 10,
        sort: str = SORT_DESC,
    ) -> CatalogResult:
        """Products of one category ordered by price, truncated to ``limit``."""
        sort = normalize_sort(sort)
        key = category_key(category, limit, sort)

        async def load() -> List[Dict[str, Any]]:
            path = f"/products/category/{category}"
            records = self._expect_list(await self.upstream.fetch(path), path)
            # sorted() is stable, including with reverse=True
            ordered = sorted(records, key=price_of, reverse=sort == SORT_DESC)
            return self.enricher.products(ordered[:limit])

        data, cached = await self._cached("category", key, principal, load)
        return CatalogResult(data=data, cached=cached, total=len(data), category=category)

    async def _cached(
        self,
        shape: str,
        key: str,
        principal: Principal,
        loader: Callable[[], Awaitable[Any]],
    ) -> Tuple[Any, bool]:
        cached = self.cache.get(key)
        if cached is not None:
            self._count("cache_hits_total", shape)
            self.logger.debug("Catalog cache hit", key=key, user_id=principal.subject_id)
            return cached, True

        self._count("cache_misses_total", shape)
        self.logger.info("Catalog cache miss, fetching upstream", key=key, user_id=principal.subject_id)

        if self.metrics:
            with self.metrics.time_operation("upstream_request_duration_seconds", query_shape=shape):
                data = await loader()
        else:
            data = await loader()

        self.cache.put(key, data)
        return data, False

    def _count(self, metric_name: str, shape: str) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, query_shape=shape)

    @staticmethod
    def _expect_list(payload: Any, path: str) -> List[Any]:
        if not isinstance(payload, list):
            raise UpstreamUnavailableError(service="upstream_catalog", details=f"Unexpected payload for {path}")
        return payload
