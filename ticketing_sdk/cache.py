"""
In-memory, time-bounded cache for events.

Entries are stamped with their insertion time and considered fresh for
``CACHE_TTL_SECONDS``. Expired entries are not evicted; single-key reads
treat them as absent until they are overwritten or the cache is cleared.

Note: This is per-instance caching. Each service owns its own cache and
no state is shared between instances or processes.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from .models import Event

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 300.0  # 5 minutes

Clock = Callable[[], float]


@dataclass(frozen=True)
class _CacheEntry:
    key: str
    value: Event
    inserted_at: float


class EventCache:
    """
    Concurrency-safe event cache keyed by event id.

    Every operation runs under a per-instance ``asyncio.Lock``, so a batch
    insert is never partially visible to a concurrent reader.
    """

    ttl: float = CACHE_TTL_SECONDS

    def __init__(self, clock: Clock = time.monotonic):
        """
        Initialize an empty cache.

        Args:
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._clock = clock
        self._entries: Dict[str, _CacheEntry] = {}
        self._lock = asyncio.Lock()

    async def get_all(self) -> Optional[List[Event]]:
        """
        Return every cached event, fresh or not.

        Batch reads deliberately skip the per-entry TTL check.

        Returns:
            List of events, or None if the cache is empty
        """
        async with self._lock:
            if not self._entries:
                return None
            return [entry.value for entry in self._entries.values()]

    async def get(self, key: str) -> Optional[Event]:
        """
        Return the event for a key if it was inserted less than TTL ago.

        Args:
            key: Event id

        Returns:
            The cached event, or None if missing or expired
        """
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.inserted_at >= self.ttl:
                logger.debug(f"Cache entry for {key} expired")
                return None
            return entry.value

    async def put_many(self, events: Iterable[Event]) -> None:
        """Insert or overwrite events, all stamped with one timestamp."""
        async with self._lock:
            now = self._clock()
            for event in events:
                self._entries[event.id] = _CacheEntry(event.id, event, now)

    async def put(self, event: Event) -> None:
        """Insert or overwrite a single event."""
        async with self._lock:
            self._entries[event.id] = _CacheEntry(event.id, event, self._clock())

    async def clear(self) -> None:
        """Remove all entries."""
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        # Physical entries, expired ones included
        return len(self._entries)
