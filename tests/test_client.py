"""
Tests for TicketingClient and Settings.
"""
import httpx
import pytest

from ticketing_sdk import TicketingClient
from ticketing_sdk.cache import EventCache
from ticketing_sdk.config import Settings
from ticketing_sdk.endpoints import Endpoint
from ticketing_sdk.models import UpdateKind
from ticketing_sdk.transport import HttpTransport


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("TICKETING_BASE_URL", "TICKETING_API_KEY", "TICKETING_ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.base_url == "http://localhost:8080"
        assert settings.timeout == 30.0
        assert settings.environment == "development"
        assert settings.stream_max_queue_size == 1000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TICKETING_BASE_URL", "https://api.tickets.example")
        monkeypatch.setenv("TICKETING_API_KEY", "key-123")
        monkeypatch.setenv("TICKETING_ENVIRONMENT", "production")
        monkeypatch.setenv("TICKETING_STREAM_MAX_QUEUE_SIZE", "10")

        settings = Settings(_env_file=None)

        assert settings.base_url == "https://api.tickets.example"
        assert settings.api_key == "key-123"
        assert settings.environment == "production"
        assert settings.stream_max_queue_size == 10


class TestTicketingClient:

    def test_from_settings_builds_http_transport(self):
        settings = Settings(
            _env_file=None,
            base_url="https://api.tickets.example/",
            api_key="key-123",
            timeout=5.0,
            stream_path="/stream",
        )

        client = TicketingClient.from_settings(settings)

        assert isinstance(client.transport, HttpTransport)
        assert client.transport.base_url == "https://api.tickets.example"
        assert client.transport.api_key == "key-123"
        assert client.transport.stream_path == "/stream"

    @pytest.mark.asyncio
    async def test_event_calls_go_through_cache(self, transport, make_event):
        transport.set_response(Endpoint.events(), [make_event("E1")])
        client = TicketingClient(transport)

        await client.fetch_all_events()
        event = await client.fetch_event("E1")

        assert event.id == "E1"
        assert transport.request_count() == 1

    @pytest.mark.asyncio
    async def test_clients_have_independent_caches(self, transport, make_event):
        transport.set_response(Endpoint.event("E1"), make_event("E1"))
        first = TicketingClient(transport)
        second = TicketingClient(transport)

        await first.fetch_event("E1")
        await second.fetch_event("E1")

        assert transport.request_count(Endpoint.event("E1")) == 2

    @pytest.mark.asyncio
    async def test_injected_cache_is_used(self, transport, make_event):
        cache = EventCache()
        await cache.put(make_event("E1"))
        client = TicketingClient(transport, cache=cache)

        assert (await client.fetch_event("E1")).id == "E1"
        assert transport.request_count() == 0

        await client.clear_cache()
        assert await cache.get_all() is None

    @pytest.mark.asyncio
    async def test_search_events(self, transport, make_event):
        transport.set_response(Endpoint.search_events("jazz"), [make_event("J1")])
        client = TicketingClient(transport)

        results = await client.search_events("jazz")

        assert [e.id for e in results] == ["J1"]

    @pytest.mark.asyncio
    async def test_subscribe_to_updates(self, transport, make_record):
        transport.set_stream("E9", [
            make_record("E9", "tickets_available", 50),
            make_record("E9", "price_changed", 60.00),
            make_record("E9", "sold_out"),
        ])
        client = TicketingClient(transport)

        async with client.subscribe_to_updates("E9") as updates:
            kinds = [update.kind async for update in updates]

        assert kinds == [UpdateKind.TICKETS_AVAILABLE, UpdateKind.PRICE_CHANGED, UpdateKind.SOLD_OUT]

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, transport):
        async with TicketingClient(transport):
            pass

        assert transport.closed


class TestTicketingClientOverHttp:
    """End-to-end through HttpTransport backed by httpx.MockTransport."""

    @pytest.mark.asyncio
    async def test_stream_updates_over_sse(self):
        body = (
            b'data: {"event_id": "E9", "type": "tickets_available", "timestamp": "2025-10-09T12:00:00Z", "data": 50}\n\n'
            b"data: garbage\n\n"
            b'data: {"event_id": "E9", "type": "price_changed", "timestamp": "2025-10-09T12:01:00Z", "data": 60.0}\n\n'
        )

        def handler(request):
            return httpx.Response(200, content=body)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = TicketingClient(HttpTransport(base_url="http://test-api", client=http_client))

        async with client:
            updates = [update async for update in client.subscribe_to_updates("E9")]

        assert [u.kind for u in updates] == [UpdateKind.TICKETS_AVAILABLE, UpdateKind.PRICE_CHANGED]
        assert updates[0].count == 50
