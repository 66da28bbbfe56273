"""
Administrative operations on the product cache.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

from shared.logging import get_logger

from service_gateway.app.auth import Principal
from service_gateway.app.caching import CacheStore

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


CLEAR_FORBIDDEN = "Acesso negado. Apenas administradores podem limpar o cache."
STATS_FORBIDDEN = "Acesso negado. Apenas administradores podem ver estatísticas do cache."


class CacheAdmin:
    """Role-gated clear and stats over the gateway cache."""

    def __init__(self, cache: CacheStore, *, metrics: Optional["MetricsCollector"] = None):
        self.cache = cache
        self.metrics = metrics
        self.logger = get_logger("gateway.cache_admin")

    def clear_cache(self, principal: Principal) -> int:
        """Remove every cache entry; only administrators may do this."""
        principal.require_admin(CLEAR_FORBIDDEN)

        cleared = self.cache.clear()
        self.logger.info("Cache cleared by administrator", user_id=principal.subject_id, cleared_entries=cleared)
        if self.metrics:
            self.metrics.increment_counter("cache_entries_cleared_total", amount=cleared)
            self.metrics.set_gauge("cache_size", 0)
        return cleared

    def cache_stats(self, principal: Principal) -> Dict[str, Any]:
        """Diagnostic snapshot of the cache; only administrators may read it."""
        principal.require_admin(STATS_FORBIDDEN)

        stats = self.cache.stats()
        if self.metrics:
            self.metrics.set_gauge("cache_size", stats["size"])
        return stats
