"""
Public client for the Ticketing SDK.

Usage:
    from ticketing_sdk import TicketingClient

    async with TicketingClient.from_settings() as client:
        events = await client.fetch_all_events()

        async with client.subscribe_to_updates(events[0].id) as updates:
            async for update in updates:
                print(update.kind, update.timestamp)
"""
import logging
from typing import List, Optional

from .cache import EventCache
from .config import Settings
from .models import (
    Event,
    Order,
    PaymentMethod,
    RefundRequest,
    RefundStatus,
    Ticket,
    TicketReservation,
)
from .services import EventService, OrderService, TicketService
from .subscription import Subscription
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


class TicketingClient:
    """
    Entry point to the ticketing platform.

    The transport and cache are injected at construction; each client owns
    its own cache unless one is passed explicitly.
    """

    def __init__(
        self,
        transport: Transport,
        cache: Optional[EventCache] = None,
        max_queue_size: int = 1000,
    ):
        """
        Initialize the client.

        Args:
            transport: Transport used by every service
            cache: Event cache (a new, private one if omitted)
            max_queue_size: Buffer size of each update subscription
        """
        self.transport = transport
        self.events = EventService(transport, cache, max_queue_size=max_queue_size)
        self.tickets = TicketService(transport)
        self.orders = OrderService(transport)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TicketingClient":
        """
        Build a client talking HTTP to the configured platform.

        Args:
            settings: SDK settings (read from the environment if omitted)
        """
        settings = settings or Settings()
        transport = HttpTransport(
            base_url=settings.base_url,
            api_key=settings.api_key,
            timeout=settings.timeout,
            stream_path=settings.stream_path,
            stream_connect_timeout=settings.stream_connect_timeout,
        )
        logger.debug(f"Created client for {settings.base_url} ({settings.environment})")
        return cls(transport, max_queue_size=settings.stream_max_queue_size)

    # =========================================================================
    # Events
    # =========================================================================

    async def fetch_all_events(self) -> List[Event]:
        """Fetch all available events."""
        return await self.events.fetch_all()

    async def fetch_event(self, event_id: str) -> Event:
        """Get event details by ID."""
        return await self.events.fetch_one(event_id)

    async def search_events(self, query: str) -> List[Event]:
        """Search events by query."""
        return await self.events.search(query)

    def subscribe_to_updates(self, event_id: str) -> Subscription:
        """Stream real-time updates for an event."""
        return self.events.subscribe(event_id)

    async def clear_cache(self) -> None:
        await self.events.clear_cache()

    # =========================================================================
    # Tickets
    # =========================================================================

    async def get_available_tickets(self, event_id: str) -> List[Ticket]:
        return await self.tickets.get_available_tickets(event_id)

    async def reserve_tickets(self, ticket_ids: List[str], event_id: str) -> TicketReservation:
        """Reserve tickets (held until the reservation expires)."""
        return await self.tickets.reserve_tickets(ticket_ids, event_id)

    async def get_ticket(self, ticket_id: str) -> Ticket:
        return await self.tickets.get_ticket(ticket_id)

    async def get_reservation(self, reservation_id: str) -> TicketReservation:
        return await self.tickets.get_reservation(reservation_id)

    async def cancel_reservation(self, reservation_id: str) -> None:
        await self.tickets.cancel_reservation(reservation_id)

    # =========================================================================
    # Orders
    # =========================================================================

    async def purchase_tickets(
        self,
        reservation: TicketReservation,
        payment_method: PaymentMethod,
    ) -> Order:
        return await self.orders.purchase_tickets(reservation, payment_method)

    async def get_order(self, order_id: str) -> Order:
        return await self.orders.get_order(order_id)

    async def get_user_orders(self, user_id: str) -> List[Order]:
        return await self.orders.get_user_orders(user_id)

    async def cancel_order(self, order_id: str) -> Order:
        return await self.orders.cancel_order(order_id)

    async def request_refund(self, order_id: str, reason: str) -> RefundRequest:
        return await self.orders.request_refund(order_id, reason)

    async def get_refund_status(self, order_id: str) -> RefundStatus:
        return await self.orders.get_refund_status(order_id)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """Close the underlying transport."""
        await self.transport.close()

    async def __aenter__(self) -> "TicketingClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
