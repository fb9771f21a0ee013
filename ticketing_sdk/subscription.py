"""
Live update subscriptions.

A ``Subscription`` is a cancellable, lazy async sequence of ``EventUpdate``
values for one event. It owns one transport stream, which a background pump
task opens on first use, decodes record by record and forwards through a
bounded queue in arrival order.

Usage:
    async with service.subscribe("E9") as updates:
        async for update in updates:
            print(update.kind)
"""
import asyncio
import logging
import weakref
from enum import Enum
from typing import AsyncIterator, Callable, Optional

from .errors import UpdateDecodeError
from .models import EventUpdate
from .transport import RawRecord
from .updates import decode_update

logger = logging.getLogger(__name__)

StreamOpener = Callable[[str], AsyncIterator[RawRecord]]

# Queue marker for the end of the stream
_END = object()


class SubscriptionState(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    CLOSED = "closed"


class _Channel:
    """State shared between a subscription and its pump task."""

    def __init__(self, event_id: str, max_queue_size: int):
        self.event_id = event_id
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue_size)
        self.state = SubscriptionState.IDLE


def _stop_pump(task: asyncio.Task, event_id: str) -> None:
    if task.done() or task.get_loop().is_closed():
        return
    logger.debug(f"Stopping update stream for abandoned subscription to event {event_id}")
    task.cancel()


class Subscription:
    """
    Cancellable async iterator over the updates of a single event.

    - Records are delivered in transport order, without deduplication
    - Malformed records are logged and dropped; the stream continues
    - The subscription ends when the transport stream ends or fails, or
      when ``cancel()`` is called. A closed subscription cannot be restarted.

    The transport stream is also released when the consuming task is
    cancelled while waiting for an update, and when an abandoned
    subscription is garbage collected (e.g. after a ``break`` out of a
    bare ``async for``). Prefer ``async with`` or an explicit ``cancel()``
    for prompt release.

    Attributes:
        event_id: The event this subscription follows
    """

    def __init__(
        self,
        event_id: str,
        open_stream: StreamOpener,
        max_queue_size: int = 1000,
    ):
        """
        Initialize the subscription. Nothing is opened until first use.

        Args:
            event_id: The event to follow
            open_stream: Callable returning the transport's raw record stream
            max_queue_size: Maximum number of undelivered updates buffered
        """
        self.event_id = event_id
        self._open_stream = open_stream
        self._channel = _Channel(event_id, max_queue_size)
        self._pump_task: Optional[asyncio.Task] = None
        self._finalizer: Optional[weakref.finalize] = None
        self._cancelled = False
        self._exhausted = False

    @property
    def state(self) -> SubscriptionState:
        """
        Current lifecycle state.

        CLOSED is reported once the consumer has received the end of the
        sequence, or after ``cancel()``. Updates still buffered when the
        transport stream ends keep the subscription in its previous state
        until they are consumed.
        """
        if self._cancelled or self._exhausted:
            return SubscriptionState.CLOSED
        return self._channel.state

    @property
    def is_closed(self) -> bool:
        """True when no further updates will be delivered."""
        return self.state == SubscriptionState.CLOSED

    # =========================================================================
    # Async iteration
    # =========================================================================

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> EventUpdate:
        if self._cancelled or self._exhausted:
            raise StopAsyncIteration

        self._start()

        try:
            item = await self._channel.queue.get()
        except asyncio.CancelledError:
            self._shutdown()
            raise

        if item is _END:
            self._exhausted = True
            raise StopAsyncIteration
        return item

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _start(self) -> None:
        if self._channel.state != SubscriptionState.IDLE:
            return
        self._channel.state = SubscriptionState.CONNECTING
        # The pump only sees the channel, so a dropped subscription can be collected
        self._pump_task = asyncio.create_task(
            _pump(self._channel, self._open_stream),
            name=f"subscription-{self.event_id}",
        )
        self._finalizer = weakref.finalize(self, _stop_pump, self._pump_task, self.event_id)
        self._finalizer.atexit = False

    def _shutdown(self) -> None:
        """Mark the subscription cancelled and stop the pump without waiting."""
        if self._cancelled:
            return
        self._cancelled = True

        queue = self._channel.queue
        while not queue.empty():
            queue.get_nowait()
        queue.put_nowait(_END)

        if self._finalizer is not None:
            self._finalizer()
        logger.debug(f"Subscription to event {self.event_id} cancelled")

    async def cancel(self) -> None:
        """
        Stop the subscription and release the transport stream.

        Undelivered updates are discarded and any waiting consumer is woken
        up with the end of the sequence. Calling this more than once is a
        no-op.
        """
        self._shutdown()

        if self._pump_task is not None and not self._pump_task.done():
            try:
                await self._pump_task
            except asyncio.CancelledError:
                pass

    async def aclose(self) -> None:
        """Alias of ``cancel()`` for async generator compatibility."""
        await self.cancel()

    async def __aenter__(self) -> "Subscription":
        """Async context manager entry; opens the stream."""
        if not self._cancelled:
            self._start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.cancel()


# =============================================================================
# Stream pump
# =============================================================================

async def _pump(channel: _Channel, open_stream: StreamOpener) -> None:
    """
    Read the transport stream and forward decoded updates.

    Runs until the stream ends, fails, or the task is cancelled. The stream
    is closed exactly once on every path.
    """
    event_id = channel.event_id
    stream = None
    try:
        logger.debug(f"Opening update stream for event {event_id}")
        stream = open_stream(event_id)

        async for record in stream:
            if channel.state == SubscriptionState.CONNECTING:
                channel.state = SubscriptionState.STREAMING

            try:
                update = decode_update(record)
            except UpdateDecodeError as e:
                logger.warning(f"Dropping malformed update for event {event_id}: {e}")
                continue

            logger.debug(f"Update for event {event_id}: {update.kind.value}")
            await channel.queue.put(update)

    except Exception as e:
        error_msg = str(e).strip()
        logger.warning(
            f"Update stream for event {event_id} terminated: "
            f"{error_msg or type(e).__name__}"
        )
    finally:
        if stream is not None:
            await _close_stream(stream, event_id)

    await channel.queue.put(_END)


async def _close_stream(stream: AsyncIterator[RawRecord], event_id: str) -> None:
    aclose = getattr(stream, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as e:
        logger.warning(f"Error closing update stream for event {event_id}: {e}")
