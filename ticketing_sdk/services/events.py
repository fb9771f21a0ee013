"""
Event access service.

Arbitrates between the event cache and the transport for catalog reads, and
hands out live update subscriptions.
"""
import logging
from typing import List, Optional

from ..cache import EventCache
from ..endpoints import Endpoint
from ..models import Event
from ..subscription import Subscription
from ..transport import Transport

logger = logging.getLogger(__name__)


class EventService:
    """
    Cached access to the event catalog plus live update streams.

    - ``fetch_all()`` and ``fetch_one()`` serve from the cache when possible
      and write network results through to it
    - ``search()`` always goes to the network and never touches the cache
    - ``subscribe()`` opens a fresh transport stream per call

    Transport errors are propagated unchanged; nothing is retried here.
    """

    def __init__(
        self,
        transport: Transport,
        cache: Optional[EventCache] = None,
        max_queue_size: int = 1000,
    ):
        """
        Initialize the service.

        Args:
            transport: Transport used for requests and update streams
            cache: Event cache owned by this service (a new one if omitted)
            max_queue_size: Buffer size of each subscription
        """
        self._transport = transport
        self._cache = cache if cache is not None else EventCache()
        self._max_queue_size = max_queue_size

    async def fetch_all(self) -> List[Event]:
        """
        Return the event catalog.

        A non-empty cache is returned as-is without checking entry age.

        Raises:
            TransportError: If the network request fails
        """
        cached = await self._cache.get_all()
        if cached:
            logger.debug(f"Serving {len(cached)} events from cache")
            return cached

        events = await self._transport.request(Endpoint.events(), List[Event])
        await self._cache.put_many(events)
        logger.debug(f"Cached {len(events)} events from network")
        return events

    async def fetch_one(self, event_id: str) -> Event:
        """
        Return a single event, from the cache if it is still fresh.

        Args:
            event_id: ID of the event

        Raises:
            TransportError: If the network request fails
        """
        cached = await self._cache.get(event_id)
        if cached is not None:
            logger.debug(f"Cache hit for event {event_id}")
            return cached

        logger.debug(f"Cache miss for event {event_id}, fetching via {self._transport.name}")
        event = await self._transport.request(Endpoint.event(event_id), Event)
        await self._cache.put(event)
        return event

    async def search(self, query: str) -> List[Event]:
        """
        Search events. Results are neither read from nor written to the cache.

        Args:
            query: Free-text search query

        Raises:
            TransportError: If the network request fails
        """
        return await self._transport.request(Endpoint.search_events(query), List[Event])

    def subscribe(self, event_id: str) -> Subscription:
        """
        Subscribe to live updates for an event.

        Each call creates an independent subscription with its own transport
        stream.

        Args:
            event_id: ID of the event to follow

        Returns:
            A lazy, cancellable async iterator of EventUpdate
        """
        return Subscription(
            event_id,
            self._transport.open_stream,
            max_queue_size=self._max_queue_size,
        )

    async def clear_cache(self) -> None:
        """Drop every cached event."""
        await self._cache.clear()
