"""Playlists and the selected list content they are read from."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from ..messages import Message, date_from_timestamp_ms, repeated, submessage
from .attribute import PlaylistAttributes
from .diff import PlaylistDiff
from .item import PlaylistItemList, _revision_id
from .permission import Capabilities

logger = logging.getLogger(__name__)

# Beyond this a millisecond timestamp is out of range; such values are in microseconds.
_MAX_TIMESTAMP_MS = 9295169800000


def normalise_timestamp(timestamp: int) -> int:
    """Return the timestamp in milliseconds, scaling down values given in microseconds."""
    if timestamp > _MAX_TIMESTAMP_MS:
        logger.warning("timestamp is very large; assuming it's in microseconds")
        return timestamp // 1000
    return timestamp


def _optional_diff(msg: Message, key: str) -> PlaylistDiff | None:
    if msg.get(key) is None:
        return None
    return PlaylistDiff.from_message(submessage(msg, key))


@dataclass
class SelectedListContent:
    revision: bytes = b""
    length: int = 0
    attributes: PlaylistAttributes = field(default_factory=PlaylistAttributes)
    contents: PlaylistItemList = field(default_factory=PlaylistItemList)
    diff: PlaylistDiff | None = None
    sync_result: PlaylistDiff | None = None
    resulting_revisions: list[str] = field(default_factory=list)
    has_multiple_heads: bool = False
    is_up_to_date: bool = False
    nonces: list[int] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: date_from_timestamp_ms(0))
    owner_username: str = ""
    has_abuse_reporting: bool = False
    capabilities: Capabilities = field(default_factory=Capabilities)
    geoblocks: list[Any] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "SelectedListContent":
        """Build the list content from its message."""
        return cls(
            revision=bytes(msg.get("revision") or b""),
            length=msg.get("length") or 0,
            attributes=PlaylistAttributes.from_message(submessage(msg, "attributes")),
            contents=PlaylistItemList.from_message(submessage(msg, "contents")),
            diff=_optional_diff(msg, "diff"),
            sync_result=_optional_diff(msg, "sync_result"),
            resulting_revisions=[
                _revision_id(r) for r in repeated(msg, "resulting_revisions")
            ],
            has_multiple_heads=bool(msg.get("multiple_heads")),
            is_up_to_date=bool(msg.get("up_to_date")),
            nonces=[int(n) for n in repeated(msg, "nonces")],
            timestamp=date_from_timestamp_ms(normalise_timestamp(msg.get("timestamp") or 0)),
            owner_username=msg.get("owner_username") or "",
            has_abuse_reporting=bool(msg.get("abuse_reporting_enabled")),
            capabilities=Capabilities.from_message(submessage(msg, "capabilities")),
            geoblocks=repeated(msg, "geoblock"),
        )


@dataclass
class Playlist:
    """A playlist, identified by its id together with its owner's username."""

    id: str
    owner_username: str
    revision: bytes
    length: int
    attributes: PlaylistAttributes
    contents: PlaylistItemList
    diff: PlaylistDiff | None
    sync_result: PlaylistDiff | None
    resulting_revisions: list[str]
    has_multiple_heads: bool
    is_up_to_date: bool
    nonces: list[int]
    timestamp: datetime
    has_abuse_reporting: bool
    capabilities: Capabilities
    geoblocks: list[Any]

    @classmethod
    def from_message(cls, msg: Message, playlist_id: str) -> "Playlist":
        """Build a playlist; the message has no id, so it is passed in."""
        content = SelectedListContent.from_message(msg)
        values = {f.name: getattr(content, f.name) for f in fields(content)}
        return cls(id=playlist_id, **values)

    def tracks(self) -> list[str]:
        """Ids of the items in the playlist, warning if the count is not the stated length."""
        tracks = [item.id for item in self.contents.items]
        if len(tracks) != self.length:
            logger.warning(
                "Got %d tracks, but the list should contain %d tracks.",
                len(tracks),
                self.length,
            )
        return tracks

    def name(self) -> str:
        """The playlist's name."""
        return self.attributes.name