"""Edit operations carried by playlist diffs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..messages import Message, repeated, submessage
from .attribute import PlaylistUpdateAttributes, PlaylistUpdateItemAttributes
from .item import PlaylistItem, _items


@dataclass
class PlaylistOperationAdd:
    from_index: int = 0
    items: list[PlaylistItem] = field(default_factory=list)
    add_last: bool = False
    add_first: bool = False

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistOperationAdd":
        """Build an add operation from its message."""
        return cls(
            from_index=msg.get("from_index") or 0,
            items=_items(repeated(msg, "items")),
            add_last=bool(msg.get("add_last")),
            add_first=bool(msg.get("add_first")),
        )


@dataclass
class PlaylistOperationMove:
    from_index: int = 0
    length: int = 0
    to_index: int = 0

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistOperationMove":
        """Build a move operation from its message."""
        return cls(
            from_index=msg.get("from_index") or 0,
            length=msg.get("length") or 0,
            to_index=msg.get("to_index") or 0,
        )


@dataclass
class PlaylistOperationRemove:
    from_index: int = 0
    length: int = 0
    items: list[PlaylistItem] = field(default_factory=list)
    has_items_as_key: bool = False

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistOperationRemove":
        """Build a remove operation from its message."""
        return cls(
            from_index=msg.get("from_index") or 0,
            length=msg.get("length") or 0,
            items=_items(repeated(msg, "items")),
            has_items_as_key=bool(msg.get("items_as_key")),
        )


@dataclass
class PlaylistOperation:
    kind: Any
    add: PlaylistOperationAdd
    rem: PlaylistOperationRemove
    mov: PlaylistOperationMove
    update_item_attributes: PlaylistUpdateItemAttributes
    update_list_attributes: PlaylistUpdateAttributes

    @classmethod
    def from_message(cls, msg: Message) -> "PlaylistOperation":
        """Build an operation; absent parts are read as empty messages."""
        kind = msg.get("kind")
        return cls(
            kind="KIND_UNKNOWN" if kind is None else kind,
            add=PlaylistOperationAdd.from_message(submessage(msg, "add")),
            rem=PlaylistOperationRemove.from_message(submessage(msg, "rem")),
            mov=PlaylistOperationMove.from_message(submessage(msg, "mov")),
            update_item_attributes=PlaylistUpdateItemAttributes.from_message(
                submessage(msg, "update_item_attributes")
            ),
            update_list_attributes=PlaylistUpdateAttributes.from_message(
                submessage(msg, "update_list_attributes")
            ),
        )