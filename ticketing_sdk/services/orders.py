"""
Order, payment and refund calls.
"""
from typing import List

from ..endpoints import Endpoint
from ..models import (
    Order,
    PaymentMethod,
    PurchaseRequest,
    RefundRequest,
    RefundRequestData,
    RefundStatus,
    TicketReservation,
)
from ..transport import Transport


class OrderService:
    """
    Thin wrapper over the order endpoints (uncached).

    Order history and cancellation normally require an authenticated user;
    the SDK only forwards its configured API key.
    """

    def __init__(self, transport: Transport):
        self._transport = transport

    async def purchase_tickets(
        self,
        reservation: TicketReservation,
        payment_method: PaymentMethod,
    ) -> Order:
        """
        Purchase the tickets held by a reservation.

        Args:
            reservation: Reservation returned by ``reserve_tickets``
            payment_method: Payment method to charge

        Returns:
            The created order
        """
        request = PurchaseRequest(
            reservation_id=reservation.reservation_id,
            payment_method=payment_method,
        )
        return await self._transport.request(Endpoint.purchase_tickets(request), Order)

    async def get_order(self, order_id: str) -> Order:
        return await self._transport.request(Endpoint.order(order_id), Order)

    async def get_user_orders(self, user_id: str) -> List[Order]:
        return await self._transport.request(Endpoint.user_orders(user_id), List[Order])

    async def cancel_order(self, order_id: str) -> Order:
        """Cancel an order, if still within the cancellation policy."""
        return await self._transport.request(Endpoint.cancel_order(order_id), Order)

    async def request_refund(self, order_id: str, reason: str) -> RefundRequest:
        """
        Request a refund for an order.

        Args:
            order_id: ID of the order to refund
            reason: Free-text reason shown to support staff

        Returns:
            The created refund request
        """
        endpoint = Endpoint.request_refund(order_id, RefundRequestData(reason=reason))
        return await self._transport.request(endpoint, RefundRequest)

    async def get_refund_status(self, order_id: str) -> RefundStatus:
        return await self._transport.request(Endpoint.refund_status(order_id), RefundStatus)
