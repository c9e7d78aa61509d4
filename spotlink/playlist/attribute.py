"""Attributes of playlists and of the items they hold."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..images import PictureSize
from ..messages import Message, date_from_timestamp_ms, repeated, submessage


def format_attributes_from_messages(attributes: Iterable[Message]) -> dict[str, str]:
    """Collect key and value pairs; a repeated key keeps its last value."""
    return {
        (attribute.get("key") or ""): (attribute.get("value") or "")
        for attribute in attributes
    }


@dataclass
class PlaylistAttributes:
    name: str = ""
    description: str = ""
    picture: bytes = b""
    is_collaborative: bool = False
    pl3_version: str = ""
    is_deleted_by_owner: bool = False
    client_id: str = ""
    format: str = ""
    format_attributes: dict[str, str] = field(default_factory=dict)
    picture_sizes: list[PictureSize] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistAttributes":
        """Build playlist attributes from their message."""
        return cls(
            name=msg.get("name") or "",
            description=msg.get("description") or "",
            picture=bytes(msg.get("picture") or b""),
            is_collaborative=bool(msg.get("collaborative")),
            pl3_version=msg.get("pl3_version") or "",
            is_deleted_by_owner=bool(msg.get("deleted_by_owner")),
            client_id=msg.get("client_id") or "",
            format=msg.get("format") or "",
            format_attributes=format_attributes_from_messages(
                repeated(msg, "format_attributes")
            ),
            picture_sizes=[PictureSize.from_message(m) for m in repeated(msg, "picture_size")],
        )


@dataclass
class PlaylistItemAttributes:
    added_by: str = ""
    timestamp: datetime = field(default_factory=lambda: date_from_timestamp_ms(0))
    seen_at: datetime = field(default_factory=lambda: date_from_timestamp_ms(0))
    is_public: bool = False
    format_attributes: dict[str, str] = field(default_factory=dict)
    item_id: bytes = b""

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistItemAttributes":
        """Build item attributes from their message."""
        return cls(
            added_by=msg.get("added_by") or "",
            timestamp=date_from_timestamp_ms(msg.get("timestamp") or 0),
            seen_at=date_from_timestamp_ms(msg.get("seen_at") or 0),
            is_public=bool(msg.get("public")),
            format_attributes=format_attributes_from_messages(
                repeated(msg, "format_attributes")
            ),
            item_id=bytes(msg.get("item_id") or b""),
        )


@dataclass
class PlaylistPartialAttributes:
    values: PlaylistAttributes = field(default_factory=PlaylistAttributes)
    no_value: list[Any] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistPartialAttributes":
        """Build a partial set of playlist attributes from its message."""
        return cls(
            values=PlaylistAttributes.from_message(submessage(msg, "values")),
            no_value=repeated(msg, "no_value"),
        )


@dataclass
class PlaylistPartialItemAttributes:
    values: PlaylistItemAttributes = field(default_factory=PlaylistItemAttributes)
    no_value: list[Any] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistPartialItemAttributes":
        """Build a partial set of item attributes from its message."""
        return cls(
            values=PlaylistItemAttributes.from_message(submessage(msg, "values")),
            no_value=repeated(msg, "no_value"),
        )


@dataclass
class PlaylistUpdateAttributes:
    new_attributes: PlaylistPartialAttributes
    old_attributes: PlaylistPartialAttributes

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistUpdateAttributes":
        """Build a playlist attribute update from its message."""
        return cls(
            new_attributes=PlaylistPartialAttributes.from_message(
                submessage(msg, "new_attributes")
            ),
            old_attributes=PlaylistPartialAttributes.from_message(
                submessage(msg, "old_attributes")
            ),
        )


@dataclass
class PlaylistUpdateItemAttributes:
    index: int
    new_attributes: PlaylistPartialItemAttributes
    old_attributes: PlaylistPartialItemAttributes

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistUpdateItemAttributes":
        """Build an item attribute update from its message."""
        return cls(
            index=msg.get("index") or 0,
            new_attributes=PlaylistPartialItemAttributes.from_message(
                submessage(msg, "new_attributes")
            ),
            old_attributes=PlaylistPartialItemAttributes.from_message(
                submessage(msg, "old_attributes")
            ),
        )