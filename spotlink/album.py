"""Album metadata and its discs."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .artist import Artist
from .availability import Availability
from .common import Copyright, ExternalId, SalePeriod, _item_id, _item_ids
from .images import Image, images_from_group
from .messages import Message, date_from_message, repeated, submessage
from .restriction import Restriction


@dataclass
class Disc:
    number: int
    name: str = ""
    tracks: list[str] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "Disc":
        """Build a disc from its message."""
        return cls(
            number=msg.get("number") or 0,
            name=msg.get("name") or "",
            tracks=_item_ids(repeated(msg, "track")),
        )


@dataclass
class Album:
    id: str
    name: str = ""
    artists: list[Artist] = field(default_factory=list)
    album_type: Any = "ALBUM"
    label: str = ""
    date: datetime = field(default_factory=lambda: date_from_message(None))
    popularity: int = 0
    genres: list[str] = field(default_factory=list)
    covers: list[Image] = field(default_factory=list)
    external_ids: list[ExternalId] = field(default_factory=list)
    discs: list[Disc] = field(default_factory=list)
    reviews: list[str] = field(default_factory=list)
    copyrights: list[Copyright] = field(default_factory=list)
    restrictions: list[Restriction] = field(default_factory=list)
    related: list[str] = field(default_factory=list)
    sale_periods: list[SalePeriod] = field(default_factory=list)
    cover_group: list[Image] = field(default_factory=list)
    original_title: str = ""
    version_title: str = ""
    type_str: str = ""
    availability: list[Availability] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "Album":
        """Build an album from its message."""
        album_type = msg.get("type")
        cover_group = submessage(msg, "cover_group")
        return cls(
            id=_item_id(msg),
            name=msg.get("name") or "",
            artists=[Artist.from_message(m) for m in repeated(msg, "artist")],
            album_type="ALBUM" if album_type is None else album_type,
            label=msg.get("label") or "",
            date=date_from_message(submessage(msg, "date")),
            popularity=msg.get("popularity") or 0,
            genres=[str(g) for g in repeated(msg, "genre")],
            covers=images_from_group(cover_group),
            external_ids=[ExternalId.from_message(m) for m in repeated(msg, "external_id")],
            discs=[Disc.from_message(m) for m in repeated(msg, "disc")],
            reviews=[str(r) for r in repeated(msg, "review")],
            copyrights=[Copyright.from_message(m) for m in repeated(msg, "copyright")],
            restrictions=[Restriction.from_message(m) for m in repeated(msg, "restriction")],
            related=_item_ids(repeated(msg, "related")),
            sale_periods=[SalePeriod.from_message(m) for m in repeated(msg, "sale_period")],
            cover_group=images_from_group(cover_group),
            original_title=msg.get("original_title") or "",
            version_title=msg.get("version_title") or "",
            type_str=msg.get("type_str") or "",
            availability=[Availability.from_message(m) for m in repeated(msg, "availability")],
        )

    def tracks(self) -> Iterator[str]:
        """Yield the track ids of every disc in order."""
        for disc in self.discs:
            yield from disc.tracks