"""
Pydantic DTOs for the Ticketing SDK.

These models mirror the JSON documents served by the ticketing platform.
Keys on the wire are snake_case; datetimes are ISO-8601 and monetary
amounts are parsed as ``Decimal``. All models are immutable.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseDTO(BaseModel):
    """
    Base configuration for all DTOs.

    - Instances are frozen (hashable, never mutated after decoding).
    - Allows population by field name or alias.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )


# =============================================================================
# Catalog
# =============================================================================


class Venue(BaseDTO):
    """Physical location hosting an event."""
    id: str = Field(..., description="Unique venue identifier.")
    name: str = Field(..., description="Display name of the venue.")
    address: str = Field(..., description="Street address.")
    city: str
    state: str
    capacity: int = Field(..., description="Maximum number of attendees.")


class TicketType(BaseDTO):
    """A class of tickets sold for an event (e.g. General Admission)."""
    id: str
    name: str
    description: str
    price: Decimal = Field(..., description="Face value of a single ticket.")
    available_count: int = Field(..., description="Tickets of this type still for sale.")


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ON_SALE = "onSale"
    SOLD_OUT = "soldOut"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


class Event(BaseDTO):
    """
    A ticketed event.

    Only ``id`` is significant for caching; the rest is payload.
    """
    id: str = Field(..., description="Unique event identifier (cache key).")
    name: str
    description: str
    venue: Venue
    date: datetime = Field(..., description="Start of the event.")
    doors: datetime = Field(..., description="Time the doors open.")
    image_url: Optional[str] = Field(default=None, description="Artwork URL, if any.")
    ticket_types: List[TicketType] = Field(default_factory=list)
    status: EventStatus


# =============================================================================
# Live updates
# =============================================================================


class UpdateKind(str, Enum):
    """Kinds of real-time changes streamed for an event."""
    TICKETS_AVAILABLE = "tickets_available"
    SOLD_OUT = "sold_out"
    PRICE_CHANGED = "price_changed"
    RESCHEDULED = "rescheduled"
    CANCELLED = "cancelled"


class EventUpdate(BaseDTO):
    """
    A single state change for an event, delivered live and never cached.

    Exactly one payload field is set, depending on ``kind``:
    ``count`` for tickets_available, ``new_price`` for price_changed and
    ``new_date`` for rescheduled. The other kinds carry no payload.
    """
    event_id: str
    kind: UpdateKind
    timestamp: datetime
    count: Optional[int] = None
    new_price: Optional[Decimal] = None
    new_date: Optional[datetime] = None


# =============================================================================
# Tickets & reservations
# =============================================================================


class Ticket(BaseDTO):
    id: str
    event_id: str
    section: str
    row: Optional[str] = None
    seat: Optional[str] = None
    price: Decimal
    type: TicketType
    available: bool


class TicketReservation(BaseDTO):
    """Tickets held for a limited time until purchased or released."""
    reservation_id: str
    tickets: List[Ticket]
    expires_at: datetime = Field(..., description="When the hold is released.")
    total: Decimal


# =============================================================================
# Orders, payments & refunds
# =============================================================================


class PaymentType(str, Enum):
    CREDIT_CARD = "creditCard"
    APPLE_PAY = "applePay"
    GOOGLE_PAY = "googlePay"
    PAYPAL = "paypal"


class PaymentMethod(BaseDTO):
    type: PaymentType
    token: str = Field(..., description="Opaque token issued by the payment provider.")


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class Order(BaseDTO):
    id: str
    tickets: List[Ticket]
    total: Decimal
    status: OrderStatus
    purchase_date: datetime
    qr_code: str


class RefundStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PROCESSED = "processed"
    DENIED = "denied"


class RefundRequest(BaseDTO):
    id: str
    order_id: str
    amount: Decimal
    reason: str
    status: RefundStatus
    request_date: datetime


class PurchaseRequest(BaseDTO):
    """Request body for purchasing a reservation."""
    reservation_id: str
    payment_method: PaymentMethod


class RefundRequestData(BaseDTO):
    """Request body for requesting a refund."""
    reason: str
