"""Country and catalogue restrictions attached to metadata items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidMessageError
from .messages import Message, repeated


def parse_country_codes(country_codes: str) -> list[str]:
    """Split a run of two-letter country codes into a list."""
    if len(country_codes) % 2:
        raise InvalidMessageError(f"country code list has odd length: {country_codes!r}")
    letters = iter(country_codes)
    return [first + second for first, second in zip(letters, letters)]


@dataclass
class Restriction:
    catalogues: list[Any] = field(default_factory=list)
    restriction_type: Any = 0
    catalogue_strs: list[str] = field(default_factory=list)
    countries_allowed: list[str] | None = None
    countries_forbidden: list[str] | None = None

    @classmethod
    def from_message(cls, msg: Message) -> "Restriction":
        """Build a restriction from its message."""
        allowed = msg.get("countries_allowed")
        forbidden = msg.get("countries_forbidden")
        restriction_type = msg.get("type")
        return cls(
            catalogues=repeated(msg, "catalogue"),
            restriction_type=0 if restriction_type is None else restriction_type,
            catalogue_strs=[str(c) for c in repeated(msg, "catalogue_str")],
            countries_allowed=None if allowed is None else parse_country_codes(allowed),
            countries_forbidden=None if forbidden is None else parse_country_codes(forbidden),
        )