"""
End-to-end integration tests for complete system flow.

Both services run in-process: the gateway talks to the auth service through
an ASGI transport and to an in-memory upstream catalog.
"""

import httpx
import pytest

from service_auth.app.main import AuthService
from service_gateway.app.adapters import AuthClient
from service_gateway.app.main import GatewayService
from shared.test_helpers import FakeUpstreamCatalog, create_test_config


class TestEndToEndFlow:
    """End-to-end integration tests for complete system flow."""

    @pytest.fixture
    def auth_service(self):
        return AuthService(create_test_config("auth", 3001))

    @pytest.fixture
    def upstream(self):
        return FakeUpstreamCatalog()

    @pytest.fixture
    def gateway_service(self, auth_service, upstream):
        service = GatewayService(create_test_config("gateway", 3000))
        service.auth_client = AuthClient(
            "http://auth.test",
            transport=httpx.ASGITransport(app=auth_service.app),
        )
        service.upstream_client.fetch = upstream.fetch
        return service

    @pytest.fixture
    def gateway_client(self, gateway_service):
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=gateway_service.app),
            base_url="http://gateway.test",
        )

    async def _login(self, client, email):
        response = await client.post("/auth/login", json={"email": email, "password": "password"})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    @pytest.mark.asyncio
    async def test_complete_user_journey(self, gateway_client, upstream):
        """Login, cached reads, admin clear, then a fresh upstream fetch."""
        async with gateway_client as client:
            user = await self._login(client, "user@exemplo.com")
            admin = await self._login(client, "admin@exemplo.com")

            verify = await client.get("/auth/verify", headers=user)
            assert verify.status_code == 200
            assert verify.json()["user"]["role"] == "user"

            first = await client.get("/products", params={"limit": 2}, headers=user)
            assert first.status_code == 200
            assert first.json()["cached"] is False

            second = await client.get("/products", params={"limit": 2}, headers=user)
            assert second.json()["cached"] is True
            assert second.json()["data"] == first.json()["data"]

            forbidden = await client.delete("/cache", headers=user)
            assert forbidden.status_code == 403

            cleared = await client.delete("/cache", headers=admin)
            assert cleared.status_code == 200
            assert cleared.json()["clearedEntries"] >= 1

            third = await client.get("/products", params={"limit": 2}, headers=user)
            assert third.json()["cached"] is False

        assert upstream.calls == ["/products", "/products"]

    @pytest.mark.asyncio
    async def test_rejected_credentials_flow(self, gateway_client):
        async with gateway_client as client:
            login = await client.post("/auth/login", json={"email": "user@exemplo.com", "password": "nope"})
            assert login.status_code == 401
            assert login.json() == {"error": "Credenciais inválidas"}

            anonymous = await client.get("/products")
            assert anonymous.status_code == 401
            assert anonymous.json() == {"error": "Token de acesso necessário"}

            forged = await client.get("/categories", headers={"Authorization": "Bearer forged.token.value"})
            assert forged.status_code == 403
            assert forged.json() == {"error": "Token inválido"}

    @pytest.mark.asyncio
    async def test_profile_through_gateway(self, gateway_client):
        async with gateway_client as client:
            admin = await self._login(client, "admin@exemplo.com")

            profile = await client.get("/auth/profile", headers=admin)

            assert profile.status_code == 200
            assert profile.json()["user"]["email"] == "admin@exemplo.com"
