"""Items held by a playlist and the list that carries them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..errors import InvalidMessageError
from ..messages import Message, date_from_timestamp_ms, repeated, submessage
from .attribute import PlaylistAttributes, PlaylistItemAttributes
from .permission import Capabilities


def _item_uri(value: Any) -> str:
    """Validate an item uri of the form ``spotify:<type>:<id>``."""
    if not isinstance(value, str):
        raise InvalidMessageError(f"invalid item uri {value!r}")
    parts = value.split(":")
    if len(parts) < 3 or parts[0] != "spotify" or not parts[1] or not parts[2:] or not any(parts[2:]):
        raise InvalidMessageError(f"invalid item uri {value!r}")
    return value


def _revision_id(value: Any) -> str:
    """Return the hex form of a revision held as bytes."""
    if value is None:
        return ""
    if not isinstance(value, (bytes, bytearray)):
        raise InvalidMessageError(f"invalid revision {value!r}")
    return bytes(value).hex()


@dataclass
class PlaylistItem:
    id: str
    attributes: PlaylistItemAttributes = field(default_factory=PlaylistItemAttributes)

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistItem":
        """Build a playlist item from its message."""
        return cls(
            id=_item_uri(msg.get("uri")),
            attributes=PlaylistItemAttributes.from_message(submessage(msg, "attributes")),
        )


def _items(messages: list[Message]) -> list[PlaylistItem]:
    return [PlaylistItem.from_message(m) for m in messages]


@dataclass
class PlaylistMetaItem:
    revision: str
    attributes: PlaylistAttributes = field(default_factory=PlaylistAttributes)
    length: int = 0
    timestamp: datetime = field(default_factory=lambda: date_from_timestamp_ms(0))
    owner_username: str = ""
    has_abuse_reporting: bool = False
    capabilities: Capabilities = field(default_factory=Capabilities)

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistMetaItem":
        """Build a meta item from its message."""
        return cls(
            revision=_revision_id(msg.get("revision")),
            attributes=PlaylistAttributes.from_message(submessage(msg, "attributes")),
            length=msg.get("length") or 0,
            timestamp=date_from_timestamp_ms(msg.get("timestamp") or 0),
            owner_username=msg.get("owner_username") or "",
            has_abuse_reporting=bool(msg.get("abuse_reporting_enabled")),
            capabilities=Capabilities.from_message(submessage(msg, "capabilities")),
        )


@dataclass
class PlaylistItemList:
    position: int = 0
    is_truncated: bool = False
    items: list[PlaylistItem] = field(default_factory=list)
    meta_items: list[PlaylistMetaItem] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistItemList":
        """Build the list of items from its message."""
        return cls(
            position=msg.get("pos") or 0,
            is_truncated=bool(msg.get("truncated")),
            items=_items(repeated(msg, "items")),
            meta_items=[PlaylistMetaItem.from_message(m) for m in repeated(msg, "meta_items")],
        )