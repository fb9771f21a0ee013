"""
Pytest configuration and shared test doubles for the Ticketing SDK tests.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from ticketing_sdk.endpoints import Endpoint
from ticketing_sdk.errors import NoConnectionError, NotFoundError
from ticketing_sdk.models import Event, EventStatus, TicketType, Venue
from ticketing_sdk.transport import Transport


class FakeClock:
    """Manually advanced time source that counts how often it is read."""

    def __init__(self, now: float = 1000.0):
        self.now = now
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeStream:
    """
    Scripted raw record stream.

    Yields ``records`` in order. An Exception instance in ``records`` is
    raised instead of yielded. With ``hold_open`` the stream blocks after
    the last record until it is cancelled, like an idle connection.
    """

    def __init__(self, records: List[Any], hold_open: bool = False):
        self._records = list(records)
        self._index = 0
        self._hold_open = hold_open
        self.close_count = 0
        self.cancelled = False

    def __aiter__(self) -> "FakeStream":
        return self

    async def __anext__(self) -> Any:
        if self._index >= len(self._records):
            if self._hold_open:
                try:
                    await asyncio.Event().wait()
                except asyncio.CancelledError:
                    self.cancelled = True
                    raise
            raise StopAsyncIteration
        record = self._records[self._index]
        self._index += 1
        await asyncio.sleep(0)
        if isinstance(record, Exception):
            raise record
        return record

    async def aclose(self) -> None:
        self.close_count += 1


class FakeTransport(Transport):
    """
    In-memory transport returning canned responses keyed by endpoint.

    Unknown endpoints raise NotFoundError; ``offline`` makes every request
    raise NoConnectionError.
    """

    def __init__(self):
        self.responses: Dict[str, Any] = {}
        self.stream_records: Dict[str, List[Any]] = {}
        self.hold_streams_open = False
        self.offline = False
        self.requests: List[Endpoint] = []
        self.streams: List[FakeStream] = []
        self.closed = False

    def set_response(self, endpoint: Endpoint, response: Any) -> None:
        self.responses[endpoint.key] = response

    def set_stream(self, event_id: str, records: List[Any]) -> None:
        self.stream_records[event_id] = records

    def request_count(self, endpoint: Optional[Endpoint] = None) -> int:
        if endpoint is None:
            return len(self.requests)
        return sum(1 for e in self.requests if e.key == endpoint.key)

    async def request(self, endpoint, response_type=None):
        self.requests.append(endpoint)
        await asyncio.sleep(0)
        if self.offline:
            raise NoConnectionError()
        if endpoint.key not in self.responses:
            raise NotFoundError()
        response = self.responses[endpoint.key]
        if isinstance(response, Exception):
            raise response
        return response

    def open_stream(self, event_id):
        stream = FakeStream(self.stream_records.get(event_id, []), hold_open=self.hold_streams_open)
        self.streams.append(stream)
        return stream

    async def close(self) -> None:
        self.closed = True


def build_event(event_id: str = "event-1", name: str = "Mock Event", status: EventStatus = EventStatus.ON_SALE) -> Event:
    venue = Venue(
        id="venue-1",
        name="Mock Venue",
        address="123 Test Street",
        city="Test City",
        state="TS",
        capacity=1000,
    )
    ticket_type = TicketType(
        id="ticket-type-1",
        name="General Admission",
        description="Standard ticket",
        price=Decimal("50.00"),
        available_count=100,
    )
    date = datetime(2025, 11, 1, 20, 0, tzinfo=timezone.utc)
    return Event(
        id=event_id,
        name=name,
        description="A test event",
        venue=venue,
        date=date,
        doors=date - timedelta(hours=1),
        image_url=f"https://example.com/{event_id}.jpg",
        ticket_types=[ticket_type],
        status=status,
    )


def update_record(event_id: str, kind: str, data: Any = None, timestamp: str = "2025-10-09T12:00:00Z") -> Dict[str, Any]:
    record = {"event_id": event_id, "type": kind, "timestamp": timestamp}
    if data is not None:
        record["data"] = data
    return record


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def make_event():
    return build_event


@pytest.fixture
def make_record():
    return update_record
