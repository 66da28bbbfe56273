"""
Upstream catalog client for Gateway.
"""

from typing import Any, Dict, Optional

import httpx

from shared.logging import get_logger
from shared.errors import NotFoundError, UpstreamUnavailableError


DEFAULT_TIMEOUT_SECONDS = 10.0


class UpstreamCatalogClient:
    """Client for the third-party product catalog API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.logger = get_logger("gateway.upstream_catalog")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def fetch(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``path`` and return the decoded JSON body.

        Raises NotFoundError when the upstream reports 404 or answers with an
        empty body, and UpstreamUnavailableError for timeouts, transport
        failures, unexpected statuses and undecodable payloads.
        """
        try:
            response = await self._client.get(path, params=params)
        except httpx.TimeoutException as exc:
            self.logger.error("Upstream catalog timed out", path=path, params=params, timeout=self.timeout)
            raise UpstreamUnavailableError(
                service="upstream_catalog",
                details=f"Timeout after {self.timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.error("Upstream catalog transport error", path=path, params=params, error=str(exc))
            raise UpstreamUnavailableError(service="upstream_catalog", details=str(exc)) from exc

        if response.status_code == 404:
            self.logger.info("Upstream catalog resource not found", path=path)
            raise NotFoundError(details={"path": path})

        if response.status_code >= 400:
            self.logger.error(
                "Upstream catalog request failed",
                path=path,
                params=params,
                status_code=response.status_code,
                response=response.text[:500]
            )
            raise UpstreamUnavailableError(
                service="upstream_catalog",
                details=f"Unexpected status {response.status_code}"
            )

        if not response.content.strip():
            raise NotFoundError(details={"path": path})

        try:
            payload = response.json()
        except ValueError as exc:
            self.logger.error("Upstream catalog returned invalid JSON", path=path)
            raise UpstreamUnavailableError(service="upstream_catalog", details="Invalid JSON payload") from exc

        if payload is None:
            raise NotFoundError(details={"path": path})

        self.logger.debug("Upstream catalog response received", path=path, params=params)
        return payload

    async def ping(self) -> bool:
        """Return True when the upstream answers the category listing."""
        try:
            response = await self._client.get("/products/categories")
            return response.status_code == 200
        except httpx.HTTPError as exc:
            self.logger.error("Upstream catalog health check failed", error=str(exc))
            return False
