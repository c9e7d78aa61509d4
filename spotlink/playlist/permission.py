"""Capabilities a user holds on a playlist."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..messages import Message, repeated


@dataclass
class Capabilities:
    can_view: bool = False
    can_administrate_permissions: bool = False
    grantable_levels: list[Any] = field(default_factory=list)
    can_edit_metadata: bool = False
    can_edit_items: bool = False
    can_cancel_membership: bool = False

    @classmethod
    def from_message(cls, msg: Message) -> "Capabilities":
        """Build the capability set from its message."""
        return cls(
            can_view=bool(msg.get("can_view")),
            can_administrate_permissions=bool(msg.get("can_administrate_permissions")),
            grantable_levels=repeated(msg, "grantable_level"),
            can_edit_metadata=bool(msg.get("can_edit_metadata")),
            can_edit_items=bool(msg.get("can_edit_items")),
            can_cancel_membership=bool(msg.get("can_cancel_membership")),
        )