"""Track metadata."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from .album import Album
from .artist import Artist, ArtistWithRole
from .audio_files import AudioFiles
from .availability import Availability
from .common import ContentRating, ExternalId, SalePeriod, _item_id, _item_ids
from .messages import Message, date_from_timestamp_ms, repeated, submessage
from .restriction import Restriction


def _licensor(msg: Message) -> uuid.UUID:
    raw = submessage(msg, "licensor").get("uuid")
    try:
        return uuid.UUID(bytes=bytes(raw))
    except (TypeError, ValueError):
        return uuid.UUID(int=0)


@dataclass
class Track:
    id: str
    album: Album
    name: str = ""
    artists: list[Artist] = field(default_factory=list)
    number: int = 0
    disc_number: int = 0
    duration: int = 0
    popularity: int = 0
    is_explicit: bool = False
    external_ids: list[ExternalId] = field(default_factory=list)
    restrictions: list[Restriction] = field(default_factory=list)
    files: AudioFiles = field(default_factory=AudioFiles)
    alternatives: list[str] = field(default_factory=list)
    sale_periods: list[SalePeriod] = field(default_factory=list)
    previews: AudioFiles = field(default_factory=AudioFiles)
    tags: list[str] = field(default_factory=list)
    earliest_live_timestamp: datetime = field(default_factory=lambda: date_from_timestamp_ms(0))
    has_lyrics: bool = False
    availability: list[Availability] = field(default_factory=list)
    licensor: uuid.UUID = field(default_factory=lambda: uuid.UUID(int=0))
    language_of_performance: list[str] = field(default_factory=list)
    content_ratings: list[ContentRating] = field(default_factory=list)
    original_title: str = ""
    version_title: str = ""
    artists_with_role: list[ArtistWithRole] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "Track":
        """Build a track from its message."""
        return cls(
            id=_item_id(msg),
            name=msg.get("name") or "",
            album=Album.from_message(submessage(msg, "album")),
            artists=[Artist.from_message(m) for m in repeated(msg, "artist")],
            number=msg.get("number") or 0,
            disc_number=msg.get("disc_number") or 0,
            duration=msg.get("duration") or 0,
            popularity=msg.get("popularity") or 0,
            is_explicit=bool(msg.get("explicit")),
            external_ids=[ExternalId.from_message(m) for m in repeated(msg, "external_id")],
            restrictions=[Restriction.from_message(m) for m in repeated(msg, "restriction")],
            files=AudioFiles.from_messages(repeated(msg, "file")),
            alternatives=_item_ids(repeated(msg, "alternative")),
            sale_periods=[SalePeriod.from_message(m) for m in repeated(msg, "sale_period")],
            previews=AudioFiles.from_messages(repeated(msg, "preview")),
            tags=[str(t) for t in repeated(msg, "tags")],
            earliest_live_timestamp=date_from_timestamp_ms(
                msg.get("earliest_live_timestamp") or 0
            ),
            has_lyrics=bool(msg.get("has_lyrics")),
            availability=[Availability.from_message(m) for m in repeated(msg, "availability")],
            licensor=_licensor(msg),
            language_of_performance=[str(x) for x in repeated(msg, "language_of_performance")],
            content_ratings=[
                ContentRating.from_message(m) for m in repeated(msg, "content_rating")
            ],
            original_title=msg.get("original_title") or "",
            version_title=msg.get("version_title") or "",
            artists_with_role=[
                ArtistWithRole.from_message(m) for m in repeated(msg, "artist_with_role")
            ],
        )