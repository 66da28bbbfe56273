"""
API Gateway Service package for the Catalog Gateway.

The gateway fronts client requests, enforcing:
- Authentication: HS256 bearer tokens issued by the Auth service
- Authorization: administrator-only cache management
- Caching: in-memory TTL cache in front of the upstream product catalog

Structure:
- app.main: FastAPI app, routes, and middleware wiring.
- app.adapters: HTTP clients for the Auth service and upstream catalog.
- app.auth: Bearer token authentication and principals.
- app.caching: Cache store and key derivation.
- app.catalog: Enrichment rules and the cache-first catalog service.
- app.domain: Administrative cache operations.
"""
