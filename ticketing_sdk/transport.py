"""
Transport layer for the Ticketing SDK.

A transport performs single request/response exchanges and opens long-lived
update streams. It knows nothing about caching; the services decide when to
call it.

``HttpTransport`` talks to the ticketing platform over HTTP using httpx and
receives live updates as Server-Sent Events (SSE).
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from .endpoints import Endpoint
from .errors import (
    DecodeFailedError,
    InvalidAddressError,
    InvalidResponseError,
    NoConnectionError,
    error_for_status,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A raw update record as produced by a transport stream (undecoded)
RawRecord = Union[str, bytes, Mapping[str, Any]]


class Transport(ABC):
    """
    Abstract base class for transports.

    Implementations may retry or back off internally; callers never do.
    """

    @abstractmethod
    async def request(self, endpoint: Endpoint, response_type: Optional[Type[T]] = None) -> T:
        """
        Perform a single request/response exchange.

        Args:
            endpoint: Descriptor of the call to perform
            response_type: Type to decode the response body into, or None to
                ignore the body

        Returns:
            The decoded response

        Raises:
            TransportError: On any transport, HTTP or decoding failure
        """
        pass

    @abstractmethod
    def open_stream(self, event_id: str) -> AsyncIterator[RawRecord]:
        """
        Open a long-lived stream of raw update records for an event.

        The returned iterator must release its connection when closed with
        ``aclose()`` or when the consuming task is cancelled.

        Args:
            event_id: The event to subscribe to
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the transport."""
        pass

    @property
    def name(self) -> str:
        """Return the transport name for logging."""
        return self.__class__.__name__


def decode_body(content: bytes, response_type: Type[T]) -> T:
    """
    Decode a JSON body into the requested type.

    Raises:
        DecodeFailedError: If the body is not JSON or does not match the type
    """
    try:
        return TypeAdapter(response_type).validate_json(content)
    except (ValidationError, ValueError) as e:
        raise DecodeFailedError(f"Failed to decode response: {e}") from e


class HttpTransport(Transport):
    """
    HTTP transport backed by ``httpx.AsyncClient``.

    Attributes:
        base_url: Base URL of the ticketing API
        stream_path: Path of the SSE update stream
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        api_key: str = "",
        timeout: float = 30.0,
        stream_path: str = "/api/v1/events/stream",
        stream_connect_timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: Base URL of the ticketing API (e.g., "http://localhost:8080")
            api_key: API key sent as a bearer token (omitted when empty)
            timeout: HTTP request timeout in seconds
            stream_path: Path of the SSE update stream
            stream_connect_timeout: Connect timeout for update streams
            client: Optional pre-configured httpx client (mainly for tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.stream_path = stream_path
        # SSE streams are long-lived: no read timeout
        self._stream_timeout = httpx.Timeout(
            connect=stream_connect_timeout,
            read=None,
            write=timeout,
            pool=None,
        )
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def request(self, endpoint: Endpoint, response_type: Optional[Type[T]] = None) -> T:
        url = f"{self.base_url}{endpoint.path}"
        logger.debug(f"{endpoint.name}: {endpoint.method} {url}")

        try:
            response = await self._client.request(
                endpoint.method,
                url,
                params=endpoint.params or None,
                json=endpoint.body,
                headers=self._headers(),
            )
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidAddressError(f"Invalid URL: {url}") from e
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            raise NoConnectionError() from e
        except httpx.TransportError as e:
            raise InvalidResponseError(f"Invalid response from server: {e}") from e

        error = error_for_status(response.status_code)
        if error is not None:
            logger.debug(f"{endpoint.name} ({endpoint.key}) failed with status {response.status_code}")
            raise error

        if response_type is None:
            return None
        return decode_body(response.content, response_type)

    async def open_stream(self, event_id: str) -> AsyncIterator[RawRecord]:
        """
        Stream raw update records for an event over SSE.

        Each SSE event's ``data:`` lines form one record. Heartbeats are
        skipped. Closing the generator closes the HTTP response.
        """
        url = f"{self.base_url}{self.stream_path}"
        headers = self._headers()
        headers["Accept"] = "text/event-stream"

        try:
            async with self._client.stream(
                "GET",
                url,
                params={"event_id": event_id},
                headers=headers,
                timeout=self._stream_timeout,
            ) as response:
                error = error_for_status(response.status_code)
                if error is not None:
                    raise error

                logger.info(f"Update stream opened for event {event_id}")

                event_type = None
                data_lines = []

                async for line in response.aiter_lines():
                    line = line.strip()

                    if not line:
                        # Empty line = end of event
                        if data_lines and event_type != "heartbeat":
                            yield "\n".join(data_lines)
                        event_type = None
                        data_lines = []
                        continue

                    if line.startswith("event:"):
                        event_type = line[6:].strip()
                    elif line.startswith("data:"):
                        data_lines.append(line[5:].strip())
                    # Ignore other fields (id, retry, comments)

                # Flush a trailing event without a terminating blank line
                if data_lines and event_type != "heartbeat":
                    yield "\n".join(data_lines)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidAddressError(f"Invalid URL: {url}") from e
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            raise NoConnectionError() from e
        finally:
            logger.info(f"Update stream closed for event {event_id}")

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
