"""
HTTP adapters used by the gateway: the auth service and the upstream catalog.
"""

from .auth_client import AuthClient
from .upstream_catalog import UpstreamCatalogClient

__all__ = ["AuthClient", "UpstreamCatalogClient"]
