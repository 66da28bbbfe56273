"""
Auth service client for Gateway.
"""

from typing import Any, Dict, Optional, Tuple

import httpx

from shared.logging import get_logger
from shared.errors import UpstreamUnavailableError


class AuthClient:
    """Client for communicating with Auth service."""

    def __init__(
        self,
        auth_service_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.auth_service_url = auth_service_url.rstrip('/')
        self.logger = get_logger("gateway.auth_client")
        self._client = httpx.AsyncClient(
            base_url=self.auth_service_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def login(self, credentials: Dict[str, Any]) -> Tuple[int, Any]:
        """Forward a login request and return the auth service's status and body."""
        return await self._forward("POST", "/auth/login", json=credentials)

    async def verify(self, authorization: Optional[str]) -> Tuple[int, Any]:
        """Forward a token verification request."""
        return await self._forward("GET", "/auth/verify", headers=self._auth_headers(authorization))

    async def profile(self, authorization: Optional[str]) -> Tuple[int, Any]:
        """Forward a profile lookup."""
        return await self._forward("GET", "/auth/profile", headers=self._auth_headers(authorization))

    async def check_health(self) -> str:
        """Return 'ok' if the auth service health endpoint responds, otherwise 'error'."""
        try:
            response = await self._client.get("/health")
            return "ok" if response.status_code == 200 else "error"
        except httpx.HTTPError as exc:
            self.logger.error("Auth service health check failed", error=str(exc))
            return "error"

    async def _forward(self, method: str, path: str, **kwargs) -> Tuple[int, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            self.logger.error("Auth service HTTP error", path=path, error=str(exc))
            raise UpstreamUnavailableError(
                service="auth_service",
                message="Serviço de autenticação indisponível",
                details=str(exc)
            ) from exc

        try:
            body = response.json()
        except ValueError:
            self.logger.error("Auth service returned invalid JSON", path=path, status_code=response.status_code)
            raise UpstreamUnavailableError(
                service="auth_service",
                message="Serviço de autenticação indisponível",
                details="Invalid JSON payload"
            )

        return response.status_code, body

    @staticmethod
    def _auth_headers(authorization: Optional[str]) -> Dict[str, str]:
        return {"Authorization": authorization} if authorization else {}
