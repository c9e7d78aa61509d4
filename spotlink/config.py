"""Playback configuration values and their textual forms."""

from __future__ import annotations

import enum
from dataclasses import dataclass


def _lookup(cls, key: str):
    for member in cls:
        if member.value == key:
            return member
    raise ValueError(f"invalid {cls.__name__} {key!r}")


class Bitrate(enum.Enum):
    BITRATE_96 = "96"
    BITRATE_160 = "160"
    BITRATE_320 = "320"

    @classmethod
    def parse(cls, text: str) -> "Bitrate":
        """Parse ``"96"``, ``"160"`` or ``"320"``."""
        return _lookup(cls, text)


class AudioFormat(enum.Enum):
    F64 = "F64"
    F32 = "F32"
    S32 = "S32"
    S24 = "S24"
    S24_3 = "S24_3"
    S16 = "S16"

    @classmethod
    def parse(cls, text: str) -> "AudioFormat":
        """Parse a format name, ignoring case."""
        return _lookup(cls, text.upper())

    def size(self) -> int:
        """Bytes taken by one sample in this format."""
        return {
            AudioFormat.F64: 8,
            AudioFormat.F32: 4,
            AudioFormat.S24_3: 3,
            AudioFormat.S16: 2,
        }.get(self, 4)  # S32 and S24 are both stored in 32 bits


class NormalisationType(enum.Enum):
    ALBUM = "album"
    TRACK = "track"
    AUTO = "auto"

    @classmethod
    def parse(cls, text: str) -> "NormalisationType":
        """Parse ``album``, ``track`` or ``auto``, ignoring case."""
        return _lookup(cls, text.lower())


class NormalisationMethod(enum.Enum):
    BASIC = "basic"
    DYNAMIC = "dynamic"

    @classmethod
    def parse(cls, text: str) -> "NormalisationMethod":
        """Parse ``basic`` or ``dynamic``, ignoring case."""
        return _lookup(cls, text.lower())


class VolumeCtrlKind(enum.Enum):
    CUBIC = "cubic"
    FIXED = "fixed"
    LINEAR = "linear"
    LOG = "log"


@dataclass(frozen=True)
class VolumeCtrl:
    """A volume control curve; cubic and log curves carry a range in dB."""

    kind: VolumeCtrlKind
    db_range: float | None = None

    MAX_VOLUME = 0xFFFF
    DEFAULT_DB_RANGE = 60.0

    @classmethod
    def parse(cls, text: str, db_range: float = DEFAULT_DB_RANGE) -> "VolumeCtrl":
        """Parse a curve name, ignoring case, giving it ``db_range`` where it takes one."""
        kind = _lookup(VolumeCtrlKind, text.lower())
        if kind in (VolumeCtrlKind.CUBIC, VolumeCtrlKind.LOG):
            return cls(kind, db_range)
        return cls(kind)

    @classmethod
    def default(cls) -> "VolumeCtrl":
        """The logarithmic curve over the default range."""
        return cls(VolumeCtrlKind.LOG, cls.DEFAULT_DB_RANGE)