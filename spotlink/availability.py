"""Availability windows and the checks that decide if an item can be played."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .messages import Message, date_from_message, repeated, submessage
from .restriction import Restriction


class UnavailabilityReason(enum.Enum):
    BLACKLISTED = "blacklist present and country on it"
    EMBARGO = "available date is in the future"
    NO_DATA = "required data was not present"
    NOT_WHITELISTED = "whitelist present and country not on it"

    def __str__(self) -> str:
        return self.value


@dataclass
class Availability:
    catalogue_strs: list[str] = field(default_factory=list)
    start: datetime = field(default_factory=lambda: date_from_message(None))

    @classmethod
    def from_message(cls, msg: Message) -> "Availability":
        """Build an availability window from its message."""
        return cls(
            catalogue_strs=[str(c) for c in repeated(msg, "catalogue_str")],
            start=date_from_message(submessage(msg, "start")),
        )


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def available(
    availabilities: Sequence[Availability], now: datetime | None = None
) -> UnavailabilityReason | None:
    """Return ``None`` if any window has started, else the reason it is not available."""
    if not availabilities:
        # not all items have availability specified
        return None
    moment = _now(now)
    if not any(moment >= availability.start for availability in availabilities):
        return UnavailabilityReason.EMBARGO
    return None


def allowed_for_user(
    country: str, attributes: Mapping[str, str], restrictions: Iterable[Restriction]
) -> UnavailabilityReason | None:
    """Check the restrictions that apply to the user's catalogue against their country."""
    user_catalogue = attributes.get("catalogue", "premium")
    for restriction in restrictions:
        if user_catalogue not in restriction.catalogue_strs:
            continue
        # A restriction holds either a whitelist or a blacklist, never both.
        if restriction.countries_allowed is not None:
            if country in restriction.countries_allowed:
                return None
            return UnavailabilityReason.NOT_WHITELISTED
        if restriction.countries_forbidden is not None:
            if country in restriction.countries_forbidden:
                return UnavailabilityReason.BLACKLISTED
            return None
    return None


def available_for_user(
    country: str,
    attributes: Mapping[str, str],
    availabilities: Sequence[Availability],
    restrictions: Iterable[Restriction],
    now: datetime | None = None,
) -> UnavailabilityReason | None:
    """Combine the availability window and restriction checks."""
    reason = available(availabilities, now)
    if reason is not None:
        return reason
    return allowed_for_user(country, attributes, restrictions)