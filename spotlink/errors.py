"""Errors raised while reading and checking metadata."""

from __future__ import annotations


class MetadataError(Exception):
    """Base class for metadata errors."""


class EmptyResponseError(MetadataError):
    """The metadata request returned no payload."""

    def __init__(self) -> None:
        super().__init__("empty response")


class NonPlayableError(MetadataError):
    """The requested item is not a track or an episode."""

    def __init__(self) -> None:
        super().__init__("audio item is non-playable when it should be")


class InvalidDurationError(MetadataError):
    """The audio item has a duration that is zero or negative."""

    def __init__(self, duration: int) -> None:
        super().__init__(f"audio item duration can not be: {duration}")
        self.duration = duration


class ExplicitContentFilteredError(MetadataError):
    """The item is explicit and the client filters explicit content."""

    def __init__(self) -> None:
        super().__init__("track is marked as explicit, which client setting forbids")


class InvalidMessageError(MetadataError, ValueError):
    """A metadata message holds a value that cannot be converted."""