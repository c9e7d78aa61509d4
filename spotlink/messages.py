"""Helpers for reading decoded metadata messages held as mappings."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import MINYEAR, datetime, timedelta, timezone
from typing import Any

from .errors import InvalidMessageError

Message = Mapping[str, Any]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def repeated(msg: Message | None, key: str) -> list[Any]:
    """Return the repeated field ``key`` of ``msg`` as a list, empty when absent."""
    value = msg.get(key) if msg else None
    if value is None:
        return []
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Sequence):
        raise InvalidMessageError(f"field {key!r} is not a repeated field")
    return list(value)


def submessage(msg: Message | None, key: str) -> Message:
    """Return the nested message ``key`` of ``msg``, or an empty message when absent."""
    value = msg.get(key) if msg else None
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidMessageError(f"field {key!r} is not a message")
    return value


def date_from_message(msg: Message | None) -> datetime:
    """Convert a date message into an aware UTC datetime.

    A missing month or day becomes 1; a missing year becomes the earliest
    year a datetime can hold.
    """
    msg = msg or {}
    year = msg.get("year") or MINYEAR
    month = msg.get("month")
    day = msg.get("day")
    try:
        return datetime(
            year,
            1 if month is None else month,
            1 if day is None else day,
            msg.get("hour") or 0,
            msg.get("minute") or 0,
            tzinfo=timezone.utc,
        )
    except (TypeError, ValueError) as exc:
        raise InvalidMessageError(f"invalid date: {exc}") from exc


def date_from_timestamp_ms(timestamp_ms: int) -> datetime:
    """Convert milliseconds since the Unix epoch into an aware UTC datetime."""
    try:
        return _EPOCH + timedelta(milliseconds=timestamp_ms)
    except (OverflowError, TypeError, ValueError) as exc:
        raise InvalidMessageError(f"invalid timestamp {timestamp_ms!r}: {exc}") from exc