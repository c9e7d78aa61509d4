"""Annotations attached to a playlist: description, picture and abuse reporting."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from ..audio_item import _to_base62
from ..errors import InvalidMessageError
from ..images import TranscodedPicture
from ..messages import Message, repeated

_ANNOTATION_URI = "hm://playlist-annotate/v1/annotation/user/{}/playlist/{}"
_HEX_ID = re.compile(r"[0-9a-fA-F]{32}")


def annotation_uri(username: str, playlist_id: str) -> str:
    """Return the request uri for a user's annotation of a playlist given by its hex id."""
    if not isinstance(playlist_id, str) or not _HEX_ID.fullmatch(playlist_id):
        raise InvalidMessageError(f"invalid playlist id {playlist_id!r}")
    return _ANNOTATION_URI.format(username, _to_base62(playlist_id))


@dataclass
class PlaylistAnnotation:
    description: str = ""
    picture: str = ""
    transcoded_pictures: list[TranscodedPicture] = field(default_factory=list)
    has_abuse_reporting: bool = False
    abuse_report_state: Any = "OK"

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistAnnotation":
        """Build an annotation from its message."""
        state = msg.get("abuse_report_state")
        return cls(
            description=msg.get("description") or "",
            picture=msg.get("picture") or "",
            transcoded_pictures=[
                TranscodedPicture.from_message(m) for m in repeated(msg, "transcoded_picture")
            ],
            has_abuse_reporting=bool(msg.get("is_abuse_reporting_enabled")),
            abuse_report_state="OK" if state is None else state,
        )