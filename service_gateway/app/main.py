"""
API Gateway service for the Catalog Gateway.
"""

from typing import Any, Dict, Literal, Optional

from fastapi import Body, Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from shared.base_service import BaseService
from shared.config import ServiceConfig, get_config
from shared.tokens import TokenSigner
from service_gateway.app.adapters import AuthClient, UpstreamCatalogClient
from service_gateway.app.auth import BearerAuthenticator, Principal
from service_gateway.app.caching import CacheStore
from service_gateway.app.catalog import CatalogService, Enricher
from service_gateway.app.domain import CacheAdmin


SortOrder = Literal["asc", "desc"]


class GatewayService(BaseService):
    """API Gateway service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None):
        super().__init__("gateway", 3000, config or get_config("gateway", 3000))

        self.authenticator = BearerAuthenticator(
            TokenSigner(
                self.config.jwt_secret,
                algorithm=self.config.jwt_algorithm,
                expires_in=self.config.jwt_expires_in_seconds,
            )
        )
        self.auth_client = AuthClient(self.config.auth_service_url)
        self.upstream_client = UpstreamCatalogClient(
            self.config.upstream_catalog_url,
            timeout=self.config.upstream_timeout_seconds,
        )
        self.cache = CacheStore(self.config.cache_ttl_seconds)
        self.catalog_service = CatalogService(
            self.cache,
            self.upstream_client,
            Enricher(brl_rate=self.config.brl_conversion_rate),
            metrics=self.metrics,
        )
        self.cache_admin = CacheAdmin(self.cache, metrics=self.metrics)

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.upstream_client.close()
            await self.auth_client.close()

        self._setup_gateway_routes()
        self._setup_auth_proxy_routes()
        self._setup_catalog_routes()
        self._setup_admin_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.gateway_service = self

    async def _principal(self, request: Request) -> Principal:
        """FastAPI dependency resolving the caller from the bearer token."""
        return self.authenticator.authenticate(request)

    async def _check_dependencies(self) -> Dict[str, str]:
        """Report reachability of the auth service and the upstream catalog."""
        upstream_ok = await self.upstream_client.ping()
        return {
            "auth": await self.auth_client.check_health(),
            "upstream": "ok" if upstream_ok else "error",
        }

    def _setup_gateway_routes(self):
        """Set up gateway-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "gateway",
                "message": "Catalog Gateway - API Gateway",
                "version": "1.0.0"
            }

        @self.app.get("/api-docs")
        async def api_docs():
            """Lightweight endpoint listing for API consumers."""
            return {
                "message": "API Gateway - Documentação",
                "version": "1.0.0",
                "endpoints": {
                    "auth": {
                        "POST /auth/login": "Autentica e retorna um token",
                        "GET /auth/verify": "Verifica um token",
                        "GET /auth/profile": "Perfil do usuário autenticado",
                    },
                    "products": {
                        "GET /products": "Lista produtos (limit, sort, category)",
                        "GET /products/{id}": "Busca produto por ID",
                        "GET /products/category/{category}": "Produtos por categoria (limit, sort)",
                        "GET /categories": "Lista categorias",
                    },
                    "admin": {
                        "DELETE /admin/cache": "Limpa o cache (admin)",
                        "GET /admin/cache/stats": "Estatísticas do cache (admin)",
                    },
                },
                "examples": {
                    "login": {"email": "user@exemplo.com", "password": "password"},
                    "products": "GET /products?limit=5&sort=desc",
                },
            }

    def _setup_auth_proxy_routes(self):
        """Forward authentication calls to the Auth service unchanged."""

        @self.app.post("/auth/login")
        async def login(credentials: Optional[Dict[str, Any]] = Body(None)):
            status_code, body = await self.auth_client.login(credentials or {})
            return JSONResponse(status_code=status_code, content=body)

        @self.app.get("/auth/verify")
        async def verify(request: Request):
            status_code, body = await self.auth_client.verify(request.headers.get("Authorization"))
            return JSONResponse(status_code=status_code, content=body)

        @self.app.get("/auth/profile")
        async def profile(request: Request):
            status_code, body = await self.auth_client.profile(request.headers.get("Authorization"))
            return JSONResponse(status_code=status_code, content=body)

    def _setup_catalog_routes(self):
        """Set up cached product catalog routes."""

        @self.app.get("/products")
        async def list_products(
            limit: int = Query(10, ge=1, le=100),
            sort: SortOrder = Query("desc"),
            category: Optional[str] = Query(None, min_length=1),
            principal: Principal = Depends(self._principal),
        ):
            """List enriched products."""
            result = await self.catalog_service.list_products(principal, limit=limit, sort=sort, category=category)
            return {
                "message": "Produtos obtidos com sucesso",
                **result.to_dict(),
                "user": principal.to_dict(),
            }

        @self.app.get("/products/category/{category}")
        async def products_by_category(
            category: str = Path(..., min_length=1),
            limit: int = Query(10, ge=1, le=100),
            sort: SortOrder = Query("desc"),
            principal: Principal = Depends(self._principal),
        ):
            """List enriched products of one category ordered by price."""
            result = await self.catalog_service.products_by_category(principal, category, limit=limit, sort=sort)
            return {
                "message": f"Produtos da categoria {category} obtidos com sucesso",
                **result.to_dict(),
                "user": principal.to_dict(),
            }

        @self.app.get("/products/{product_id}")
        async def get_product(
            product_id: int = Path(..., gt=0),
            principal: Principal = Depends(self._principal),
        ):
            """Fetch a single enriched product."""
            result = await self.catalog_service.get_product(principal, product_id)
            return {
                "message": "Produto obtido com sucesso",
                **result.to_dict(),
                "user": principal.to_dict(),
            }

        @self.app.get("/categories")
        async def list_categories(principal: Principal = Depends(self._principal)):
            """List enriched categories."""
            result = await self.catalog_service.list_categories(principal)
            return {
                "message": "Categorias obtidas com sucesso",
                **result.to_dict(),
                "user": principal.to_dict(),
            }

    def _setup_admin_routes(self):
        """Set up administrator-only cache routes."""

        @self.app.delete("/admin/cache")
        @self.app.delete("/cache")
        async def clear_cache(principal: Principal = Depends(self._principal)):
            """Drop every cached catalog entry."""
            cleared = self.cache_admin.clear_cache(principal)
            return {
                "message": "Cache limpo com sucesso",
                "clearedEntries": cleared,
                "user": principal.to_dict(),
            }

        @self.app.get("/admin/cache/stats")
        @self.app.get("/cache/stats")
        async def cache_stats(principal: Principal = Depends(self._principal)):
            """Report cache size and per-entry age and size."""
            stats = self.cache_admin.cache_stats(principal)
            return {
                "message": "Estatísticas do cache",
                "cacheSize": stats["size"],
                "entries": stats["entries"],
                "user": principal.to_dict(),
            }


def create_app(config: Optional[ServiceConfig] = None):
    """Create FastAPI application."""
    service = GatewayService(config)
    return service.app


if __name__ == "__main__":
    service = GatewayService()
    service.run()
