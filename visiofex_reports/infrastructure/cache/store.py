"""Key-value cache stores with per-entry TTL"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Protocol


class CacheStore(Protocol):
    """Storage capability the cache gateway depends on"""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, ttl: int) -> None: ...

    def delete_by_prefix(self, prefix: str) -> int: ...


@dataclass
class CacheEntry:
    key: str
    value: Any
    expires_at: float


class InMemoryCacheStore:
    """Process-local store; expired entries read as misses and are evicted on access"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return default
            return entry.value

    def set(self, key: str, value: Any, ttl: int) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, expires_at=self._clock() + ttl)

    def delete_by_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
