"""
Services wrapping the transport for each area of the ticketing API.
"""
from .events import EventService
from .orders import OrderService
from .tickets import TicketService

__all__ = ["EventService", "OrderService", "TicketService"]
