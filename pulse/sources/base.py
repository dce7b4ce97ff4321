"""
Base source abstraction for Content Pulse.

Defines the interface every upstream source implements and the result-set
caching they share.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional
import time

from pulse.cache import TTLCache


class Source(ABC):
    """
    Abstract base class for all content sources.

    Each source owns one TTLCache holding its last successful result set under
    a single key. A successful fetch replaces the whole set; a failed fetch
    leaves it untouched.

    Attributes:
        name: Unique identifier for this source (e.g., "hackernews", "rss").
    """

    RESULTS_KEY = "results"

    def __init__(
        self,
        cache_ttl: Optional[float] = None,
        cache: Optional[TTLCache] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._clock = clock
        self._cache = cache if cache is not None else TTLCache(ttl=cache_ttl, clock=clock)

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the unique name identifier for this source.

        Used as the prefix of every log line the source writes.
        """
        pass

    @abstractmethod
    def fetch_items(self, limit: int | None = None) -> List[Any]:
        """
        Fetch items from this source.

        Implementations should:
        - Serve the cached result set while it is fresh
        - Respect REQUEST_TIMEOUT from config
        - Gracefully skip items that cannot be normalized
        - Return an empty list on complete failure (don't raise exceptions)

        Args:
            limit: Maximum number of items to return.

        Returns:
            List of normalized items (may be empty if fetch fails).
        """
        pass

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def is_cached(self) -> bool:
        """Check whether a fresh result set is cached."""
        return self._cache.is_fresh(self.RESULTS_KEY)

    def cached_items(self) -> Optional[List[Any]]:
        """Return the fresh cached result set, or None."""
        return self._cache.get(self.RESULTS_KEY)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _store(self, items: List[Any]) -> None:
        self._cache.set(self.RESULTS_KEY, items)

    def _now(self) -> float:
        return self._clock()

    def __str__(self) -> str:
        return f"Source({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
