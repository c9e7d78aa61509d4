"""Show metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .availability import Availability
from .common import Copyright, _item_id, _item_ids
from .errors import InvalidMessageError
from .images import Image, images_from_group
from .messages import Message, repeated, submessage
from .restriction import Restriction


def _trailer_uri(value: Any) -> str:
    uri = value or ""
    if not uri:
        return ""
    parts = uri.split(":")
    if len(parts) < 3 or parts[0] != "spotify" or not all(parts[1:]):
        raise InvalidMessageError(f"invalid trailer uri {uri!r}")
    return uri


@dataclass
class Show:
    id: str
    name: str = ""
    description: str = ""
    publisher: str = ""
    language: str = ""
    is_explicit: bool = False
    covers: list[Image] = field(default_factory=list)
    episodes: list[str] = field(default_factory=list)
    copyrights: list[Copyright] = field(default_factory=list)
    restrictions: list[Restriction] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    media_type: Any = "MIXED"
    consumption_order: Any = "SEQUENTIAL"
    availability: list[Availability] = field(default_factory=list)
    trailer_uri: str = ""
    has_music_and_talk: bool = False
    is_audiobook: bool = False

    @classmethod
    def from_message(cls, msg: Message) -> "Show":
        """Build a show from its message."""
        media_type = msg.get("media_type")
        consumption_order = msg.get("consumption_order")
        return cls(
            id=_item_id(msg),
            name=msg.get("name") or "",
            description=msg.get("description") or "",
            publisher=msg.get("publisher") or "",
            language=msg.get("language") or "",
            is_explicit=bool(msg.get("explicit")),
            covers=images_from_group(submessage(msg, "cover_image")),
            episodes=_item_ids(repeated(msg, "episode")),
            copyrights=[Copyright.from_message(m) for m in repeated(msg, "copyright")],
            restrictions=[Restriction.from_message(m) for m in repeated(msg, "restriction")],
            keywords=[str(k) for k in repeated(msg, "keyword")],
            media_type="MIXED" if media_type is None else media_type,
            consumption_order="SEQUENTIAL" if consumption_order is None else consumption_order,
            availability=[Availability.from_message(m) for m in repeated(msg, "availability")],
            trailer_uri=_trailer_uri(msg.get("trailer_uri")),
            has_music_and_talk=bool(msg.get("music_and_talk")),
            is_audiobook=bool(msg.get("is_audiobook")),
        )