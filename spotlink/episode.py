"""Podcast and audiobook episode metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .audio_files import AudioFiles
from .availability import Availability
from .common import ContentRating, _item_id, video_files_from_messages
from .images import Image, images_from_group
from .messages import Message, date_from_message, repeated, submessage
from .restriction import Restriction


@dataclass
class Episode:
    id: str
    name: str = ""
    duration: int = 0
    audio: AudioFiles = field(default_factory=AudioFiles)
    description: str = ""
    number: int = 0
    publish_time: datetime = field(default_factory=lambda: date_from_message(None))
    covers: list[Image] = field(default_factory=list)
    language: str = ""
    is_explicit: bool = False
    show_name: str = ""
    videos: list[str] = field(default_factory=list)
    video_previews: list[str] = field(default_factory=list)
    audio_previews: AudioFiles = field(default_factory=AudioFiles)
    restrictions: list[Restriction] = field(default_factory=list)
    freeze_frames: list[Image] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    allow_background_playback: bool = False
    availability: list[Availability] = field(default_factory=list)
    external_url: str = ""
    episode_type: Any = "FULL"
    has_music_and_talk: bool = False
    content_rating: list[ContentRating] = field(default_factory=list)
    is_audiobook_chapter: bool = False

    @classmethod
    def from_message(cls, msg: Message) -> "Episode":
        """Build an episode from its message."""
        episode_type = msg.get("type")
        return cls(
            id=_item_id(msg),
            name=msg.get("name") or "",
            duration=msg.get("duration") or 0,
            audio=AudioFiles.from_messages(repeated(msg, "audio")),
            description=msg.get("description") or "",
            number=msg.get("number") or 0,
            publish_time=date_from_message(submessage(msg, "publish_time")),
            covers=images_from_group(submessage(msg, "cover_image")),
            language=msg.get("language") or "",
            is_explicit=bool(msg.get("explicit")),
            show_name=submessage(msg, "show").get("name") or "",
            videos=video_files_from_messages(repeated(msg, "video")),
            video_previews=video_files_from_messages(repeated(msg, "video_preview")),
            audio_previews=AudioFiles.from_messages(repeated(msg, "audio_preview")),
            restrictions=[Restriction.from_message(m) for m in repeated(msg, "restriction")],
            freeze_frames=images_from_group(submessage(msg, "freeze_frame")),
            keywords=[str(k) for k in repeated(msg, "keyword")],
            allow_background_playback=bool(msg.get("allow_background_playback")),
            availability=[Availability.from_message(m) for m in repeated(msg, "availability")],
            external_url=msg.get("external_url") or "",
            episode_type="FULL" if episode_type is None else episode_type,
            has_music_and_talk=bool(msg.get("music_and_talk")),
            content_rating=[
                ContentRating.from_message(m) for m in repeated(msg, "content_rating")
            ],
            is_audiobook_chapter=bool(msg.get("is_audiobook_chapter")),
        )