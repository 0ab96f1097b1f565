"""Time-bounded in-memory cache for match queries."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

import pendulum

from config.constants import DEFAULT_CACHE_TTL
from livefeed.models import Match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    matches: tuple[Match, ...]
    fetched_at: pendulum.DateTime


class QueryCache:
    """In-memory cache of match lists keyed by query.

    Entries expire ``ttl_seconds`` after they were stored. Stale entries are
    never purged proactively; they are ignored on read and replaced on the
    next store. The key space (sport x result type) is small, so memory
    stays bounded.

    A lock guards the underlying dict so concurrent callers can share one
    instance. Two callers missing on the same key both fetch and the last
    one to store wins.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_CACHE_TTL,
        clock: Callable[[], pendulum.DateTime] = pendulum.now,
    ):
        """Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry in seconds.
            clock: Returns the current instant; injectable for tests.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> list[Match] | None:
        """Return cached matches for ``key`` if still fresh.

        Args:
            key: Query cache key.

        Returns:
            A new list of the cached matches, or None on a miss or when the
            entry has expired.
        """
        with self._lock:
            entry = self._entries.get(key)

        if entry is None:
            return None

        age = (self._clock() - entry.fetched_at).total_seconds()
        if age >= self.ttl_seconds:
            logger.debug(f"Cache entry for {key} expired ({age:.0f}s old)")
            return None

        return list(entry.matches)

    def set(self, key: str, matches: list[Match]) -> None:
        """Store matches for ``key``, overwriting any previous entry."""
        entry = CacheEntry(matches=tuple(matches), fetched_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()
        logger.info("Match cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
