"""Get-or-compute cache gateway and the cache key schema"""

import logging
from datetime import date
from typing import Any, Callable, TypeVar, Union

from visiofex_reports.infrastructure.cache.store import CacheStore
from visiofex_reports.infrastructure.observability.metrics import cache_lookup_counter

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


# Key schema shared with data already cached by earlier deployments
def page_key(page: int, limit: int) -> str:
    return f"transactions_{page}_{limit}"


def all_transactions_key(limit: int, max_pages: int) -> str:
    return f"all_transactions_{limit}_{max_pages}"


def daily_key(start: Union[date, str], end: Union[date, str]) -> str:
    start_key = start.isoformat() if isinstance(start, date) else start
    end_key = end.isoformat() if isinstance(end, date) else end
    return f"daily_{start_key}_{end_key}"


class CacheGateway:
    """Namespaced get-or-compute wrapper over a CacheStore"""

    def __init__(self, store: CacheStore, namespace: str = "vxf_", default_ttl: int = 3600):
        self.store = store
        self.namespace = namespace
        self.default_ttl = default_ttl

    def _full_key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def get_or_compute(
        self,
        key: str,
        compute_fn: Callable[[], T],
        ttl: int | None = None,
        force: bool = False,
    ) -> T:
        """
        Return the cached value for key, computing and storing it on a miss.

        force=True skips the lookup but still stores the fresh value.
        Exceptions from compute_fn propagate and nothing is stored.
        """
        full_key = self._full_key(key)
        if force:
            cache_lookup_counter.labels(result="bypass").inc()
        else:
            cached = self.store.get(full_key, _MISSING)
            if cached is not _MISSING:
                cache_lookup_counter.labels(result="hit").inc()
                return cached
            cache_lookup_counter.labels(result="miss").inc()

        value = compute_fn()
        self.store.set(full_key, value, self.default_ttl if ttl is None else ttl)
        return value

    def purge(self, prefix: str = "") -> int:
        """Delete every entry under namespace + prefix"""
        deleted = self.store.delete_by_prefix(self._full_key(prefix))
        logger.info("Cache purged", extra={"prefix": self._full_key(prefix), "deleted": deleted})
        return deleted
