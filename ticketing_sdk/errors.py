"""
Error types for the Ticketing SDK.

Transport errors are the only error surface of the SDK: every failed
request/response exchange raises a subclass of ``TransportError`` and the
services pass them through unchanged.

``UpdateDecodeError`` is a record-level failure used by the update stream.
It never escapes a subscription; malformed records are dropped.
"""
from enum import Enum
from typing import Optional


class TransportErrorKind(str, Enum):
    """Enumerated failure kinds of a single transport exchange."""
    INVALID_ADDRESS = "invalid_address"
    INVALID_RESPONSE = "invalid_response"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    DECODE_FAILED = "decode_failed"
    UNKNOWN = "unknown"
    NO_CONNECTION = "no_connection"


class TransportError(Exception):
    """Base exception for transport errors."""

    kind: TransportErrorKind = TransportErrorKind.UNKNOWN
    default_message = "Transport error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidAddressError(TransportError):
    """Raised when a request URL could not be built."""
    kind = TransportErrorKind.INVALID_ADDRESS
    default_message = "Invalid URL"


class InvalidResponseError(TransportError):
    """Raised when the server response could not be read."""
    kind = TransportErrorKind.INVALID_RESPONSE
    default_message = "Invalid response from server"


class BadRequestError(TransportError):
    kind = TransportErrorKind.BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(TransportError):
    kind = TransportErrorKind.UNAUTHORIZED
    default_message = "Unauthorized - check your API key"


class NotFoundError(TransportError):
    kind = TransportErrorKind.NOT_FOUND
    default_message = "Resource not found"


class RateLimitedError(TransportError):
    kind = TransportErrorKind.RATE_LIMITED
    default_message = "Rate limit exceeded"


class ServerError(TransportError):
    """Raised for any 5xx response."""
    kind = TransportErrorKind.SERVER_ERROR
    default_message = "Server error"

    def __init__(self, status_code: int = 500, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"Server error (status code: {status_code})")


class DecodeFailedError(TransportError):
    """Raised when a response body does not match the expected type."""
    kind = TransportErrorKind.DECODE_FAILED
    default_message = "Failed to decode response"


class UnknownStatusError(TransportError):
    """Raised for status codes outside the mapped set."""
    kind = TransportErrorKind.UNKNOWN

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"Unknown error (status code: {status_code})")


class NoConnectionError(TransportError):
    kind = TransportErrorKind.NO_CONNECTION
    default_message = "No internet connection"


class UpdateDecodeError(ValueError):
    """Raised when a raw update record cannot be turned into an EventUpdate."""
    pass


def error_for_status(status_code: int) -> Optional[TransportError]:
    """
    Map an HTTP status code to a transport error.

    Args:
        status_code: HTTP status code of the response

    Returns:
        The matching TransportError, or None for 2xx responses
    """
    if 200 <= status_code < 300:
        return None
    if status_code == 400:
        return BadRequestError()
    if status_code == 401:
        return UnauthorizedError()
    if status_code == 404:
        return NotFoundError()
    if status_code == 429:
        return RateLimitedError()
    if 500 <= status_code < 600:
        return ServerError(status_code)
    return UnknownStatusError(status_code)
