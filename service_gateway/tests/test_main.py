"""
Unit tests for Gateway main service.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from service_gateway.app.adapters import AuthClient
from service_gateway.app.main import GatewayService
from shared.errors import UpstreamUnavailableError
from shared.test_helpers import (
    FakeUpstreamCatalog,
    admin_header,
    create_test_config,
    user_header,
)


class TestGatewayService:
    """Test cases for GatewayService."""

    @pytest.fixture
    def upstream(self):
        return FakeUpstreamCatalog()

    @pytest.fixture
    def gateway_service(self, upstream):
        """Create GatewayService instance with an in-memory upstream."""
        service = GatewayService(create_test_config("gateway", 3000))
        service.upstream_client.fetch = upstream.fetch
        return service

    @pytest.fixture
    def client(self, gateway_service):
        """Create test client."""
        return TestClient(gateway_service.app)

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "gateway"
        assert data["message"] == "Catalog Gateway - API Gateway"

    def test_api_docs_endpoint(self, client):
        response = client.get("/api-docs")
        assert response.status_code == 200
        data = response.json()
        assert "GET /products" in data["endpoints"]["products"]
        assert data["examples"]["login"]["email"] == "user@exemplo.com"

    def test_health_endpoint(self, gateway_service, client):
        """Test health endpoint with dependency checks."""
        with patch.object(gateway_service, "_check_dependencies", AsyncMock(return_value={"auth": "ok", "upstream": "ok"})):
            response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "gateway"
        assert data["status"] == "ok"
        assert data["dependencies"] == {"auth": "ok", "upstream": "ok"}

    def test_health_degraded(self, gateway_service, client):
        with patch.object(gateway_service, "_check_dependencies", AsyncMock(return_value={"auth": "error", "upstream": "ok"})):
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    def test_metrics_endpoint(self, client):
        client.get("/")
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text
        assert "cache_hits_total" in response.text

    def test_request_id_header(self, client):
        response = client.get("/", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_products_require_token(self, client):
        response = client.get("/products")

        assert response.status_code == 401
        assert response.json() == {"error": "Token de acesso necessário"}

    def test_products_reject_invalid_token(self, client):
        response = client.get("/products", headers={"Authorization": "Bearer invalid"})

        assert response.status_code == 403
        assert response.json()["error"] == "Token inválido"

    def test_products_miss_then_hit(self, client, upstream):
        headers = user_header()

        first = client.get("/products?limit=2", headers=headers)
        second = client.get("/products?limit=2", headers=headers)

        assert first.status_code == 200
        body = first.json()
        assert body["message"] == "Produtos obtidos com sucesso"
        assert body["cached"] is False
        assert body["total"] == 2
        assert body["user"] == {"id": "2", "role": "user", "email": "user@exemplo.com"}
        assert second.json()["cached"] is True
        assert second.json()["data"] == body["data"]
        assert upstream.calls == ["/products"]

    @pytest.mark.parametrize("query", ["limit=0", "limit=101", "limit=abc", "sort=up"])
    def test_products_invalid_query(self, client, query):
        response = client.get(f"/products?{query}", headers=user_header())

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Parâmetros inválidos"
        assert body["details"][0]["loc"][0] == "query"
        assert "detail" not in body

    def test_unknown_route(self, client):
        response = client.get("/rota-inexistente")

        assert response.status_code == 404
        assert response.json() == {"error": "Rota não encontrada", "details": "GET /rota-inexistente"}

    def test_method_not_allowed_uses_error_shape(self, client):
        response = client.put("/products")

        assert response.status_code == 405
        assert "error" in response.json()

    def test_product_by_id(self, client):
        response = client.get("/products/1", headers=user_header())

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Produto obtido com sucesso"
        assert body["data"]["internalId"] == "PROD_1"
        assert body["data"]["ratingStars"] == "⭐⭐⭐"
        assert body["cached"] is False

    def test_product_not_found(self, client):
        response = client.get("/products/999", headers=user_header())

        assert response.status_code == 404
        assert response.json()["error"] == "Produto não encontrado"

    def test_product_id_must_be_positive_integer(self, client):
        assert client.get("/products/0", headers=user_header()).status_code == 422
        assert client.get("/products/abc", headers=user_header()).status_code == 422

    def test_products_by_category(self, client):
        response = client.get("/products/category/electronics?sort=asc&limit=3", headers=user_header())

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Produtos da categoria electronics obtidos com sucesso"
        assert body["category"] == "electronics"
        assert [item["id"] for item in body["data"]] == [9, 10, 11]

    def test_categories(self, client):
        response = client.get("/categories", headers=user_header())

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Categorias obtidas com sucesso"
        assert body["total"] == 4
        assert body["data"][0]["description"] == "Produtos da categoria electronics"

    def test_upstream_failure(self, gateway_service, client):
        gateway_service.upstream_client.fetch = AsyncMock(
            side_effect=UpstreamUnavailableError(service="upstream_catalog", details="Timeout after 10.0s")
        )

        response = client.get("/categories", headers=user_header())

        assert response.status_code == 500
        assert response.json() == {
            "error": "Erro ao buscar dados da API externa",
            "details": "Timeout after 10.0s",
        }
        assert len(gateway_service.cache) == 0

    @pytest.mark.parametrize("path", ["/cache", "/admin/cache"])
    def test_clear_cache_as_admin(self, client, path):
        client.get("/categories", headers=user_header())
        client.get("/products/1", headers=user_header())

        response = client.delete(path, headers=admin_header())

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Cache limpo com sucesso"
        assert body["clearedEntries"] == 2
        assert body["user"]["role"] == "admin"

    def test_clear_cache_as_user_forbidden(self, gateway_service, client):
        client.get("/categories", headers=user_header())

        response = client.delete("/cache", headers=user_header())

        assert response.status_code == 403
        assert response.json()["error"] == "Acesso negado. Apenas administradores podem limpar o cache."
        assert len(gateway_service.cache) == 1

    def test_cache_stats(self, client):
        client.get("/products/1", headers=user_header())

        response = client.get("/cache/stats", headers=admin_header())

        assert response.status_code == 200
        body = response.json()
        assert body["cacheSize"] == 1
        assert body["entries"][0]["key"] == "product_1"
        assert body["entries"][0]["approxByteSize"] > 0

    def test_cache_stats_forbidden_for_user(self, client):
        assert client.get("/admin/cache/stats", headers=user_header()).status_code == 403

    def test_login_is_proxied(self, gateway_service, client):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/auth/login"
            return httpx.Response(401, json={"error": "Credenciais inválidas"})

        gateway_service.auth_client = AuthClient("http://auth.test", transport=httpx.MockTransport(handler))

        response = client.post("/auth/login", json={"email": "user@exemplo.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json() == {"error": "Credenciais inválidas"}

    def test_auth_service_unavailable(self, gateway_service, client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        gateway_service.auth_client = AuthClient("http://auth.test", transport=httpx.MockTransport(handler))

        response = client.get("/auth/verify", headers=user_header())

        assert response.status_code == 500
        assert response.json()["error"] == "Serviço de autenticação indisponível"
