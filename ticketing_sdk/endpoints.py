"""
Request descriptors for the ticketing REST API.

An ``Endpoint`` is a plain value describing one call: HTTP method, path,
query parameters and JSON body. Transports turn it into an actual request.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from .models import PurchaseRequest, RefundRequestData

API_PREFIX = "/api/v1"


def _segment(value: str) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(str(value), safe="")


@dataclass(frozen=True)
class Endpoint:
    """
    Describes a single request/response exchange.

    Attributes:
        name: Short operation name (e.g. "events", "event")
        method: HTTP method
        path: Path relative to the transport's base URL
        params: Query parameters
        body: JSON-serializable request body
    """
    name: str
    method: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None

    @property
    def key(self) -> str:
        """Stable identifier of this call, used for logging and test doubles."""
        if self.params:
            query = "&".join(f"{k}={v}" for k, v in sorted(self.params.items()))
            return f"{self.method} {self.path}?{query}"
        return f"{self.method} {self.path}"

    # Events

    @classmethod
    def events(cls) -> "Endpoint":
        return cls("events", "GET", f"{API_PREFIX}/events")

    @classmethod
    def event(cls, event_id: str) -> "Endpoint":
        return cls("event", "GET", f"{API_PREFIX}/events/{_segment(event_id)}")

    @classmethod
    def search_events(cls, query: str) -> "Endpoint":
        return cls("search_events", "GET", f"{API_PREFIX}/events/search", params={"q": query})

    # Tickets

    @classmethod
    def available_tickets(cls, event_id: str) -> "Endpoint":
        return cls("available_tickets", "GET", f"{API_PREFIX}/events/{_segment(event_id)}/tickets")

    @classmethod
    def reserve_tickets(cls, event_id: str, ticket_ids: List[str]) -> "Endpoint":
        return cls(
            "reserve_tickets",
            "POST",
            f"{API_PREFIX}/events/{_segment(event_id)}/reserve",
            body={"ticket_ids": list(ticket_ids)},
        )

    @classmethod
    def ticket(cls, ticket_id: str) -> "Endpoint":
        return cls("ticket", "GET", f"{API_PREFIX}/tickets/{_segment(ticket_id)}")

    @classmethod
    def reservation(cls, reservation_id: str) -> "Endpoint":
        return cls("reservation", "GET", f"{API_PREFIX}/reservations/{_segment(reservation_id)}")

    @classmethod
    def cancel_reservation(cls, reservation_id: str) -> "Endpoint":
        return cls("cancel_reservation", "DELETE", f"{API_PREFIX}/reservations/{_segment(reservation_id)}/cancel")

    # Orders

    @classmethod
    def purchase_tickets(cls, request: PurchaseRequest) -> "Endpoint":
        return cls(
            "purchase_tickets",
            "POST",
            f"{API_PREFIX}/orders",
            body=request.model_dump(mode="json"),
        )

    @classmethod
    def order(cls, order_id: str) -> "Endpoint":
        return cls("order", "GET", f"{API_PREFIX}/orders/{_segment(order_id)}")

    @classmethod
    def user_orders(cls, user_id: str) -> "Endpoint":
        return cls("user_orders", "GET", f"{API_PREFIX}/users/{_segment(user_id)}/orders")

    @classmethod
    def cancel_order(cls, order_id: str) -> "Endpoint":
        return cls("cancel_order", "DELETE", f"{API_PREFIX}/orders/{_segment(order_id)}/cancel")

    @classmethod
    def request_refund(cls, order_id: str, data: RefundRequestData) -> "Endpoint":
        return cls(
            "request_refund",
            "POST",
            f"{API_PREFIX}/orders/{_segment(order_id)}/refund",
            body=data.model_dump(mode="json"),
        )

    @classmethod
    def refund_status(cls, order_id: str) -> "Endpoint":
        return cls("refund_status", "GET", f"{API_PREFIX}/orders/{_segment(order_id)}/refund/status")
