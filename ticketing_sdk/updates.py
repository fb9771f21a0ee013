"""
Decoding of raw update records into ``EventUpdate`` values.

Records arrive as JSON objects of the form::

    {"event_id": "E9", "type": "price_changed",
     "timestamp": "2025-10-09T12:00:00Z", "data": 60.0}

``data`` depends on ``type``: an integer count for tickets_available, a
number for price_changed, an ISO-8601 string for rescheduled, and nothing
for sold_out and cancelled. ``eventId`` and ``kind`` are accepted as
alternative key spellings.
"""
import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping

from pydantic import TypeAdapter, ValidationError

from .errors import UpdateDecodeError
from .models import EventUpdate, UpdateKind
from .transport import RawRecord

_datetime_adapter = TypeAdapter(datetime)


def _load(record: RawRecord) -> Mapping[str, Any]:
    if isinstance(record, Mapping):
        message = record
    else:
        try:
            message = json.loads(record)
        except (TypeError, ValueError) as e:
            raise UpdateDecodeError(f"Record is not valid JSON: {e}") from e
    if not isinstance(message, Mapping):
        raise UpdateDecodeError("Record is not a JSON object")
    return message


def _field(message: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if message.get(name) is not None:
            return message[name]
    raise UpdateDecodeError(f"Record is missing '{names[0]}'")


def _parse_datetime(value: Any, what: str) -> datetime:
    if not isinstance(value, str):
        raise UpdateDecodeError(f"Invalid {what}: {value!r}")
    try:
        return _datetime_adapter.validate_python(value)
    except ValidationError as e:
        raise UpdateDecodeError(f"Invalid {what}: {value!r}") from e


def decode_update(record: RawRecord) -> EventUpdate:
    """
    Decode one raw record.

    Args:
        record: JSON text, bytes or an already-parsed mapping

    Returns:
        The decoded EventUpdate

    Raises:
        UpdateDecodeError: If the record is malformed or of an unknown kind
    """
    message = _load(record)

    event_id = _field(message, "event_id", "eventId")
    if not isinstance(event_id, str):
        raise UpdateDecodeError(f"Invalid event id: {event_id!r}")

    raw_kind = _field(message, "type", "kind")
    try:
        kind = UpdateKind(raw_kind)
    except ValueError as e:
        raise UpdateDecodeError(f"Unknown update type: {raw_kind!r}") from e

    timestamp = _parse_datetime(_field(message, "timestamp"), "timestamp")
    data = message.get("data", message.get("payload"))

    payload: Dict[str, Any] = {}
    if kind == UpdateKind.TICKETS_AVAILABLE:
        if isinstance(data, bool) or not isinstance(data, int):
            raise UpdateDecodeError("Invalid tickets_available data")
        payload["count"] = data
    elif kind == UpdateKind.PRICE_CHANGED:
        if isinstance(data, bool) or not isinstance(data, (int, float, str)):
            raise UpdateDecodeError("Invalid price_changed data")
        try:
            # via str: 60.1 -> Decimal("60.1")
            payload["new_price"] = Decimal(str(data))
        except InvalidOperation as e:
            raise UpdateDecodeError("Invalid price_changed data") from e
        if not payload["new_price"].is_finite():
            raise UpdateDecodeError("Invalid price_changed data")
    elif kind == UpdateKind.RESCHEDULED:
        payload["new_date"] = _parse_datetime(data, "rescheduled data")

    return EventUpdate(event_id=event_id, kind=kind, timestamp=timestamp, **payload)
