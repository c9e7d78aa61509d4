"""Small metadata records shared by albums, artists, tracks and episodes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .audio_files import _file_id
from .errors import InvalidMessageError
from .messages import Message, date_from_message, repeated, submessage
from .restriction import Restriction

_GID_LENGTH = 16


def _item_id(msg: Message, key: str = "gid") -> str:
    """Return the hex form of the 16-byte id stored under ``key``."""
    value = msg.get(key)
    if not isinstance(value, (bytes, bytearray)) or len(value) != _GID_LENGTH:
        raise InvalidMessageError(f"invalid id in field {key!r}: {value!r}")
    return bytes(value).hex()


def _item_ids(messages: Iterable[Message]) -> list[str]:
    return [_item_id(msg) for msg in messages]


@dataclass(frozen=True)
class ContentRating:
    country: str
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "ContentRating":
        """Build a content rating from its message."""
        return cls(
            country=msg.get("country") or "",
            tags=[str(tag) for tag in repeated(msg, "tag")],
        )


@dataclass(frozen=True)
class Copyright:
    copyright_type: Any
    text: str

    @classmethod
    def from_message(cls, msg: Message) -> "Copyright":
        """Build a copyright notice from its message."""
        copyright_type = msg.get("type")
        return cls(
            copyright_type="P" if copyright_type is None else copyright_type,
            text=msg.get("text") or "",
        )


@dataclass(frozen=True)
class ExternalId:
    external_type: str
    id: str  # anything from a URL to an ISRC, EAN or UPC

    @classmethod
    def from_message(cls, msg: Message) -> "ExternalId":
        """Build an external id from its message."""
        return cls(
            external_type=msg.get("type") or "",
            id=msg.get("id") or "",
        )


@dataclass
class SalePeriod:
    restrictions: list[Restriction]
    start: datetime
    end: datetime

    @classmethod
    def from_message(cls, msg: Message) -> "SalePeriod":
        """Build a sale period from its message."""
        return cls(
            restrictions=[Restriction.from_message(r) for r in repeated(msg, "restriction")],
            start=date_from_message(submessage(msg, "start")),
            end=date_from_message(submessage(msg, "end")),
        )


def video_files_from_messages(files: Iterable[Message]) -> list[str]:
    """Return the hex file ids of a repeated video file field."""
    return [_file_id(file.get("file_id")) for file in files]