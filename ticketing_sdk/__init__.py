"""
Ticketing SDK - Python client for the ticketing platform.

Provides cached access to the event catalog, ticket and order calls, and
live per-event update streams.
"""
from .cache import CACHE_TTL_SECONDS, EventCache
from .client import TicketingClient
from .config import Settings
from .endpoints import Endpoint
from .errors import (
    BadRequestError,
    DecodeFailedError,
    InvalidAddressError,
    InvalidResponseError,
    NoConnectionError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    TransportError,
    TransportErrorKind,
    UnauthorizedError,
    UnknownStatusError,
    UpdateDecodeError,
)
from .models import (
    Event,
    EventStatus,
    EventUpdate,
    Order,
    OrderStatus,
    PaymentMethod,
    PaymentType,
    RefundRequest,
    RefundStatus,
    Ticket,
    TicketReservation,
    TicketType,
    UpdateKind,
    Venue,
)
from .services import EventService, OrderService, TicketService
from .subscription import Subscription, SubscriptionState
from .transport import HttpTransport, Transport

__version__ = "0.1.0"

__all__ = [
    # Client
    "TicketingClient",
    "Settings",
    # Services
    "EventService",
    "TicketService",
    "OrderService",
    "Subscription",
    "SubscriptionState",
    # Cache
    "EventCache",
    "CACHE_TTL_SECONDS",
    # Transport
    "Transport",
    "HttpTransport",
    "Endpoint",
    # Models
    "Event",
    "EventStatus",
    "EventUpdate",
    "UpdateKind",
    "Venue",
    "TicketType",
    "Ticket",
    "TicketReservation",
    "Order",
    "OrderStatus",
    "PaymentMethod",
    "PaymentType",
    "RefundRequest",
    "RefundStatus",
    # Errors
    "TransportError",
    "TransportErrorKind",
    "InvalidAddressError",
    "InvalidResponseError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "DecodeFailedError",
    "UnknownStatusError",
    "NoConnectionError",
    "UpdateDecodeError",
]
