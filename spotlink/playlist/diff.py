"""Differences between two revisions of a playlist."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..messages import Message, repeated
from .item import _revision_id
from .operation import PlaylistOperation


@dataclass
class PlaylistDiff:
    from_revision: str = ""
    operations: list[PlaylistOperation] = field(default_factory=list)
    to_revision: str = ""

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistDiff":
        """Build a diff from its message; revisions are kept in hex."""
        return cls(
            from_revision=_revision_id(msg.get("from_revision")),
            operations=[PlaylistOperation.from_message(m) for m in repeated(msg, "ops")],
            to_revision=_revision_id(msg.get("to_revision")),
        )