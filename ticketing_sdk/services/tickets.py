"""
Ticket and reservation calls.
"""
from typing import List

from ..endpoints import Endpoint
from ..models import Ticket, TicketReservation
from ..transport import Transport


class TicketService:
    """Thin wrapper over the ticket and reservation endpoints (uncached)."""

    def __init__(self, transport: Transport):
        self._transport = transport

    async def get_available_tickets(self, event_id: str) -> List[Ticket]:
        """Get the tickets still available for an event."""
        return await self._transport.request(Endpoint.available_tickets(event_id), List[Ticket])

    async def reserve_tickets(self, ticket_ids: List[str], event_id: str) -> TicketReservation:
        """
        Reserve tickets, holding them until the reservation expires.

        Args:
            ticket_ids: IDs of the tickets to hold
            event_id: ID of the event the tickets belong to

        Returns:
            The created reservation
        """
        endpoint = Endpoint.reserve_tickets(event_id, ticket_ids)
        return await self._transport.request(endpoint, TicketReservation)

    async def get_ticket(self, ticket_id: str) -> Ticket:
        return await self._transport.request(Endpoint.ticket(ticket_id), Ticket)

    async def get_reservation(self, reservation_id: str) -> TicketReservation:
        """Check the status of a reservation."""
        return await self._transport.request(Endpoint.reservation(reservation_id), TicketReservation)

    async def cancel_reservation(self, reservation_id: str) -> None:
        """Release a reservation. The response body is ignored."""
        await self._transport.request(Endpoint.cancel_reservation(reservation_id))
