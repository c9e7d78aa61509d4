"""Lyrics documents as returned by the lyrics service."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any

from .errors import InvalidMessageError

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _field(obj: Any, key: str, kind: type) -> Any:
    if not isinstance(obj, dict):
        raise InvalidMessageError("expected a JSON object")
    try:
        value = obj[key]
    except KeyError:
        raise InvalidMessageError(f"missing field `{key}`") from None
    if kind is int:
        valid = (
            isinstance(value, int)
            and not isinstance(value, bool)
            and _I32_MIN <= value <= _I32_MAX
        )
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise InvalidMessageError(f"invalid value for field `{key}`: {value!r}")
    return value


class SyncType(enum.Enum):
    UNSYNCED = "UNSYNCED"
    LINE_SYNCED = "LINE_SYNCED"


@dataclass(frozen=True)
class Colors:
    background: int
    highlight_text: int
    text: int

    @classmethod
    def _from_obj(cls, obj: Any) -> "Colors":
        return cls(
            background=_field(obj, "background", int),
            highlight_text=_field(obj, "highlightText", int),
            text=_field(obj, "text", int),
        )


@dataclass(frozen=True)
class Line:
    start_time_ms: str
    end_time_ms: str
    words: str

    @classmethod
    def _from_obj(cls, obj: Any) -> "Line":
        return cls(
            start_time_ms=_field(obj, "startTimeMs", str),
            end_time_ms=_field(obj, "endTimeMs", str),
            words=_field(obj, "words", str),
        )


@dataclass(frozen=True)
class LyricsInner:
    fullscreen_action: str
    is_dense_typeface: bool
    is_rtl_language: bool
    language: str
    lines: tuple[Line, ...]
    provider: str
    provider_display_name: str
    provider_lyrics_id: str
    sync_lyrics_uri: str
    sync_type: SyncType

    @classmethod
    def _from_obj(cls, obj: Any) -> "LyricsInner":
        sync_type = _field(obj, "syncType", str)
        try:
            parsed_sync = SyncType(sync_type)
        except ValueError:
            raise InvalidMessageError(f"unknown sync type {sync_type!r}") from None
        return cls(
            fullscreen_action=_field(obj, "fullscreenAction", str),
            is_dense_typeface=_field(obj, "isDenseTypeface", bool),
            is_rtl_language=_field(obj, "isRtlLanguage", bool),
            language=_field(obj, "language", str),
            lines=tuple(Line._from_obj(line) for line in _field(obj, "lines", list)),
            provider=_field(obj, "provider", str),
            provider_display_name=_field(obj, "providerDisplayName", str),
            provider_lyrics_id=_field(obj, "providerLyricsId", str),
            sync_lyrics_uri=_field(obj, "syncLyricsUri", str),
            sync_type=parsed_sync,
        )


@dataclass(frozen=True)
class Lyrics:
    colors: Colors
    has_vocal_removal: bool
    lyrics: LyricsInner

    @classmethod
    def from_json(cls, data: str | bytes) -> "Lyrics":
        """Parse a lyrics JSON document; unknown keys are ignored."""
        try:
            obj = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidMessageError(f"invalid lyrics JSON: {exc}") from exc
        return cls(
            colors=Colors._from_obj(_field(obj, "colors", dict)),
            has_vocal_removal=_field(obj, "hasVocalRemoval", bool),
            lyrics=LyricsInner._from_obj(_field(obj, "lyrics", dict)),
        )