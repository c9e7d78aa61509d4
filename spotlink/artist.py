"""Artist metadata and the collections an artist carries."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Union

from .availability import Availability
from .common import ExternalId, SalePeriod, _item_id, _item_ids
from .errors import InvalidMessageError
from .images import Image, images_from_group, images_from_messages
from .messages import Message, repeated, submessage
from .restriction import Restriction

_U16_MAX = 0xFFFF


def _u16(value: Any, what: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= _U16_MAX:
        raise InvalidMessageError(f"{what} out of range: {value!r}")
    return value


@dataclass(frozen=True)
class Decade:
    year: int


@dataclass(frozen=True)
class Timespan:
    start_year: int
    end_year: int | None = None


ActivityPeriod = Union[Decade, Timespan]


def activity_period_from_message(msg: Message) -> ActivityPeriod:
    """Build a decade or a timespan; any other combination of fields is an error."""
    has_decade = msg.get("decade") is not None
    has_start = msg.get("start_year") is not None
    has_end = msg.get("end_year") is not None
    if has_decade and not has_start and not has_end:
        return Decade(_u16(msg["decade"], "decade"))
    if not has_decade and has_start:
        return Timespan(
            start_year=_u16(msg["start_year"], "start year"),
            end_year=_u16(msg["end_year"], "end year") if has_end else None,
        )
    raise InvalidMessageError("ActivityPeriod is expected to be either a decade or timespan")


@dataclass
class TopTracks:
    country: str
    tracks: list[str] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "TopTracks":
        """Build a country's top tracks from its message."""
        return cls(
            country=msg.get("country") or "",
            tracks=_item_ids(repeated(msg, "track")),
        )


class CountryTopTracks(list):
    """Top tracks for several countries; an empty country means global."""

    def for_country(self, country: str) -> list[str]:
        """Top tracks for ``country``, falling back to the global list, else empty."""
        for top in self:
            if top.country == country:
                return list(top.tracks)
        for top in self:
            if not top.country:
                return list(top.tracks)
        return []


class AlbumGroups(list):
    """Groups of album ids, each group holding variants of the same album.

    The first id of a group is the current release.
    """

    def current_releases(self) -> Iterator[str]:
        """Yield the current release of every non-empty group."""
        for group in self:
            if group:
                yield group[0]


def _album_groups(messages: list[Message]) -> AlbumGroups:
    return AlbumGroups(_item_ids(repeated(group, "album")) for group in messages)


@dataclass
class Biography:
    text: str
    portraits: list[Image] = field(default_factory=list)
    portrait_group: list[list[Image]] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "Biography":
        """Build a biography from its message."""
        return cls(
            text=msg.get("text") or "",
            portraits=images_from_messages(repeated(msg, "portrait")),
            portrait_group=[images_from_group(g) for g in repeated(msg, "portrait_group")],
        )


@dataclass
class ArtistWithRole:
    id: str
    name: str
    role: Any = "ARTIST_ROLE_UNKNOWN"

    @classmethod
    def from_message(cls, msg: Message) -> "ArtistWithRole":
        """Build an artist credit from its message."""
        role = msg.get("role")
        return cls(
            id=_item_id(msg, "artist_gid"),
            name=msg.get("artist_name") or "",
            role="ARTIST_ROLE_UNKNOWN" if role is None else role,
        )


@dataclass
class Artist:
    id: str
    name: str = ""
    popularity: int = 0
    top_tracks: CountryTopTracks = field(default_factory=CountryTopTracks)
    albums: AlbumGroups = field(default_factory=AlbumGroups)
    singles: AlbumGroups = field(default_factory=AlbumGroups)
    compilations: AlbumGroups = field(default_factory=AlbumGroups)
    appears_on_albums: AlbumGroups = field(default_factory=AlbumGroups)
    genre: list[str] = field(default_factory=list)
    external_ids: list[ExternalId] = field(default_factory=list)
    portraits: list[Image] = field(default_factory=list)
    biographies: list[Biography] = field(default_factory=list)
    activity_periods: list[ActivityPeriod] = field(default_factory=list)
    restrictions: list[Restriction] = field(default_factory=list)
    related: list["Artist"] = field(default_factory=list)
    is_portrait_album_cover: bool = False
    portrait_group: list[Image] = field(default_factory=list)
    sales_periods: list[SalePeriod] = field(default_factory=list)
    availabilities: list[Availability] = field(default_factory=list)

    @classmethod
    def from_message(cls, msg: Message) -> "Artist":
        """Build an artist from its message."""
        return cls(
            id=_item_id(msg),
            name=msg.get("name") or "",
            popularity=msg.get("popularity") or 0,
            top_tracks=CountryTopTracks(
                TopTracks.from_message(m) for m in repeated(msg, "top_track")
            ),
            albums=_album_groups(repeated(msg, "album_group")),
            singles=_album_groups(repeated(msg, "single_group")),
            compilations=_album_groups(repeated(msg, "compilation_group")),
            appears_on_albums=_album_groups(repeated(msg, "appears_on_group")),
            genre=[str(g) for g in repeated(msg, "genre")],
            external_ids=[ExternalId.from_message(m) for m in repeated(msg, "external_id")],
            portraits=images_from_messages(repeated(msg, "portrait")),
            biographies=[Biography.from_message(m) for m in repeated(msg, "biography")],
            activity_periods=[
                activity_period_from_message(m) for m in repeated(msg, "activity_period")
            ],
            restrictions=[Restriction.from_message(m) for m in repeated(msg, "restriction")],
            related=[Artist.from_message(m) for m in repeated(msg, "related")],
            is_portrait_album_cover=bool(msg.get("is_portrait_album_cover")),
            portrait_group=images_from_group(submessage(msg, "portrait_group")),
            sales_periods=[SalePeriod.from_message(m) for m in repeated(msg, "sale_period")],
            availabilities=[
                Availability.from_message(m) for m in repeated(msg, "availability")
            ],
        )

    def albums_current(self) -> Iterator[str]:
        """Albums in their current release only."""
        return self.albums.current_releases()

    def singles_current(self) -> Iterator[str]:
        """Singles in their current release only."""
        return self.singles.current_releases()

    def compilations_current(self) -> Iterator[str]:
        """Compilations in their current release only."""
        return self.compilations.current_releases()

    def appears_on_albums_current(self) -> Iterator[str]:
        """Albums the artist appears on, in their current release only."""
        return self.appears_on_albums.current_releases()