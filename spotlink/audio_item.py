"""Playable audio items built from track or episode metadata."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Union

from .artist import ArtistWithRole
from .audio_files import AudioFiles
from .availability import UnavailabilityReason, available_for_user
from .episode import Episode
from .errors import ExplicitContentFilteredError, InvalidDurationError
from .images import Image
from .track import Track

DEFAULT_IMAGE_URL = "https://i.scdn.co/image/{file_id}"

_BASE62 = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
_BASE62_LENGTH = 22


def _to_base62(hex_id: str) -> str:
    value = int(hex_id, 16)
    digits = []
    for _ in range(_BASE62_LENGTH):
        value, rest = divmod(value, 62)
        digits.append(_BASE62[rest])
    return "".join(reversed(digits))


@dataclass(frozen=True)
class CoverImage:
    url: str
    size: Any
    width: int
    height: int


@dataclass
class TrackFields:
    artists: list[ArtistWithRole]
    album: str
    album_artists: list[str]
    popularity: int
    number: int
    disc_number: int


@dataclass
class EpisodeFields:
    description: str
    publish_time: datetime
    show_name: str


UniqueFields = Union[TrackFields, EpisodeFields]


def get_covers(images: Iterable[Image], image_url: str) -> list[CoverImage]:
    """Turn images into cover urls, widest first, skipping images without an id."""
    ordered = sorted(images, key=lambda image: image.width, reverse=True)
    return [
        CoverImage(
            url=image_url.replace("{file_id}", image.id),
            size=image.size,
            width=image.width,
            height=image.height,
        )
        for image in ordered
        if image.id
    ]


def _check_playable(duration: int, is_explicit: bool, filter_explicit: bool) -> None:
    if duration <= 0:
        raise InvalidDurationError(duration)
    if is_explicit and filter_explicit:
        raise ExplicitContentFilteredError()


@dataclass
class AudioItem:
    track_id: str
    uri: str
    files: AudioFiles
    name: str
    covers: list[CoverImage]
    language: list[str]
    duration_ms: int
    is_explicit: bool
    availability: UnavailabilityReason | None
    alternatives: list[str] | None
    unique_fields: UniqueFields

    @classmethod
    def from_track(
        cls,
        track: Track,
        country: str,
        attributes: Mapping[str, str],
        filter_explicit: bool = False,
        now: datetime | None = None,
    ) -> "AudioItem":
        """Build a playable item from a track, checking it against the user."""
        _check_playable(track.duration, track.is_explicit, filter_explicit)
        moment = now if now is not None else datetime.now(timezone.utc)
        image_url = attributes.get("image-url", DEFAULT_IMAGE_URL)

        if moment < track.earliest_live_timestamp:
            availability: UnavailabilityReason | None = UnavailabilityReason.EMBARGO
        else:
            availability = available_for_user(
                country, attributes, track.availability, track.restrictions, moment
            )

        return cls(
            track_id=track.id,
            uri=f"spotify:track:{_to_base62(track.id)}",
            files=track.files,
            name=track.name,
            covers=get_covers(track.album.covers, image_url),
            language=list(track.language_of_performance),
            duration_ms=track.duration,
            is_explicit=track.is_explicit,
            availability=availability,
            alternatives=list(track.alternatives) if track.alternatives else None,
            unique_fields=TrackFields(
                artists=list(track.artists_with_role),
                album=track.album.name,
                album_artists=[artist.name for artist in track.album.artists],
                popularity=min(max(track.popularity, 0), 100),
                number=max(track.number, 0),
                disc_number=max(track.disc_number, 0),
            ),
        )

    @classmethod
    def from_episode(
        cls,
        episode: Episode,
        country: str,
        attributes: Mapping[str, str],
        filter_explicit: bool = False,
        now: datetime | None = None,
    ) -> "AudioItem":
        """Build a playable item from an episode, checking it against the user."""
        _check_playable(episode.duration, episode.is_explicit, filter_explicit)
        image_url = attributes.get("image-url", DEFAULT_IMAGE_URL)
        return cls(
            track_id=episode.id,
            uri=f"spotify:episode:{_to_base62(episode.id)}",
            files=episode.audio,
            name=episode.name,
            covers=get_covers(episode.covers, image_url),
            language=[episode.language],
            duration_ms=episode.duration,
            is_explicit=episode.is_explicit,
            availability=available_for_user(
                country, attributes, episode.availability, episode.restrictions, now
            ),
            alternatives=None,
            unique_fields=EpisodeFields(
                description=episode.description,
                publish_time=episode.publish_time,
                show_name=episode.show_name,
            ),
        )