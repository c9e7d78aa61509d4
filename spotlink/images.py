"""Images, picture sizes and transcoded pictures attached to metadata."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .audio_files import _file_id
from .messages import Message, repeated


@dataclass(frozen=True)
class Image:
    """One image file, identified by the hex form of its file id."""

    id: str
    size: Any = "DEFAULT"
    width: int = 0
    height: int = 0

    @classmethod
    def from_message(cls, msg: Message) -> "Image":
        """Build an image from its message."""
        size = msg.get("size")
        return cls(
            id=_file_id(msg.get("file_id")),
            size="DEFAULT" if size is None else size,
            width=msg.get("width") or 0,
            height=msg.get("height") or 0,
        )


def images_from_messages(messages: Iterable[Message]) -> list[Image]:
    """Convert a repeated image field into a list of images."""
    return [Image.from_message(msg) for msg in messages]


def images_from_group(group: Message | None) -> list[Image]:
    """Return the images held by an image group message."""
    return images_from_messages(repeated(group, "image"))


@dataclass(frozen=True)
class PictureSize:
    target_name: str
    url: str

    @classmethod
    def from_message(cls, msg: Message) -> "PictureSize":
        """Build a picture size from its message."""
        return cls(
            target_name=msg.get("target_name") or "",
            url=msg.get("url") or "",
        )


@dataclass(frozen=True)
class TranscodedPicture:
    target_name: str
    uri: str

    @classmethod
    def from_message(cls, msg: Message) -> "TranscodedPicture":
        """Build a transcoded picture from its message."""
        return cls(
            target_name=msg.get("target_name") or "",
            uri=msg.get("uri") or "",
        )