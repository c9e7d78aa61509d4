"""Audio file formats and the mapping from format to file id."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from typing import Any

from .errors import InvalidMessageError
from .messages import Message

logger = logging.getLogger(__name__)


class AudioFileFormat(enum.Enum):
    OGG_VORBIS_96 = "OGG_VORBIS_96"
    OGG_VORBIS_160 = "OGG_VORBIS_160"
    OGG_VORBIS_320 = "OGG_VORBIS_320"
    MP3_96 = "MP3_96"
    MP3_160 = "MP3_160"
    MP3_160_ENC = "MP3_160_ENC"
    MP3_256 = "MP3_256"
    MP3_320 = "MP3_320"
    FLAC_FLAC = "FLAC_FLAC"


def _coerce_format(value: Any) -> AudioFileFormat:
    if isinstance(value, AudioFileFormat):
        return value
    try:
        return AudioFileFormat(value)
    except ValueError:
        raise InvalidMessageError(f"unknown audio file format {value!r}") from None


def _file_id(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    return str(value)


def is_ogg_vorbis(audio_format: AudioFileFormat) -> bool:
    return audio_format in (
        AudioFileFormat.OGG_VORBIS_320,
        AudioFileFormat.OGG_VORBIS_160,
        AudioFileFormat.OGG_VORBIS_96,
    )


def is_mp3(audio_format: AudioFileFormat) -> bool:
    return audio_format in (
        AudioFileFormat.MP3_320,
        AudioFileFormat.MP3_256,
        AudioFileFormat.MP3_160,
        AudioFileFormat.MP3_96,
        AudioFileFormat.MP3_160_ENC,
    )


def is_flac(audio_format: AudioFileFormat) -> bool:
    return audio_format is AudioFileFormat.FLAC_FLAC


class AudioFiles(dict):
    """Maps each available format to the hex id of its file."""

    @classmethod
    def from_messages(cls, files: Iterable[Message]) -> "AudioFiles":
        """Collect the files that state a format; later entries win on repeats."""
        result = cls()
        for file in files:
            file_id = _file_id(file.get("file_id"))
            audio_format = file.get("format")
            if audio_format is None:
                logger.debug("Ignoring file <%s> with unspecified format", file_id)
                continue
            result[_coerce_format(audio_format)] = file_id
        return result