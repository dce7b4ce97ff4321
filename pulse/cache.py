"""
In-memory TTL cache.

Every cached value in Content Pulse (story lists, RSS articles, the unified
feed, daily trend snapshots and per-item analyses) lives in a TTLCache owned
by the service that computes it. Staleness is checked lazily on read; nothing
is evicted in the background.

    cache = TTLCache(ttl=300)          # five minute entries
    cache = TTLCache(ttl=None)         # permanent entries
    cache = TTLCache(ttl=None, max_size=1000)  # permanent, LRU-bounded
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional

# Sentinel meaning "use the cache's default TTL"
_DEFAULT = object()


@dataclass
class CacheEntry:
    """A cached value and the clock reading at insertion."""
    value: Any
    inserted_at: float
    ttl: Optional[float] = None

    def age(self, now: float) -> float:
        return now - self.inserted_at

    def is_fresh(self, now: float) -> bool:
        if self.ttl is None:
            return True
        return self.age(now) < self.ttl


class TTLCache:
    """
    Key/value cache with lazy TTL expiry and optional LRU bound.

    Attributes:
        ttl: Default lifetime in seconds, or None for entries that never expire.
        max_size: Maximum number of entries (0 means unbounded). When full,
            the least recently used entry is evicted.
    """

    def __init__(
        self,
        ttl: Optional[float] = None,
        max_size: int = 0,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl = ttl
        self.max_size = max_size
        self._clock = clock
        self._entries: "OrderedDict[Hashable, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the fresh value for key, or default if missing or stale."""
        entry = self.get_entry(key)
        return entry.value if entry is not None else default

    def get_entry(self, key: Hashable) -> Optional[CacheEntry]:
        """Return the fresh CacheEntry for key (stale entries are dropped)."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_fresh(self._clock()):
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return entry

    def set(self, key: Hashable, value: Any, ttl: Any = _DEFAULT) -> None:
        """
        Store value under key, replacing any previous entry.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Lifetime for this entry only. Omit to use the cache default;
                pass None for an entry that never expires.
        """
        entry_ttl = self.ttl if ttl is _DEFAULT else ttl
        with self._lock:
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock(), ttl=entry_ttl)
            self._entries.move_to_end(key)
            if self.max_size and len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def is_fresh(self, key: Hashable) -> bool:
        """Check whether key holds a fresh value, without touching LRU order."""
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and entry.is_fresh(self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.is_fresh(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"<TTLCache ttl={self.ttl!r} max_size={self.max_size} entries={len(self)}>"
