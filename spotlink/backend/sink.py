"""Audio sinks: the errors they raise and the interface every sink provides."""

from __future__ import annotations

import abc
import struct
import sys
from collections.abc import Iterable
from typing import Union

from ..config import AudioFormat

Packet = Union[bytes, bytearray, memoryview, Iterable[float]]


class SinkError(Exception):
    """An audio sink failed."""

    prefix = "Audio Sink Error"

    def __init__(self, message: str) -> None:
        super().__init__(f"{self.prefix}: {message}")
        self.message = message


class NotConnectedError(SinkError):
    """The sink has no open output."""

    prefix = "Audio Sink Error Not Connected"


class ConnectionRefusedError_(SinkError):
    """The sink's output could not be opened."""

    prefix = "Audio Sink Error Connection Refused"


class OnWriteError(SinkError):
    """Writing to the sink's output failed."""

    prefix = "Audio Sink Error On Write"


class InvalidParamsError(SinkError):
    """The sink was configured with parameters it cannot use."""

    prefix = "Audio Sink Error Invalid Parameters"


class StateChangeError(SinkError):
    """The sink could not change between playing and stopped."""

    prefix = "Audio Sink Error Changing State"


def _scaled(sample: float, bits: int) -> int:
    scale = 1 << bits
    return min(max(round(sample * scale), -scale), scale - 1)


def samples_to_bytes(samples: Iterable[float], audio_format: AudioFormat) -> bytes:
    """Encode samples in the range -1.0 to 1.0 as native-order bytes of a format."""
    values = [float(s) for s in samples]
    count = len(values)
    if audio_format is AudioFormat.F64:
        return struct.pack(f"={count}d", *values)
    if audio_format is AudioFormat.F32:
        return struct.pack(f"={count}f", *values)
    if audio_format is AudioFormat.S32:
        return struct.pack(f"={count}i", *(_scaled(v, 31) for v in values))
    if audio_format is AudioFormat.S24:
        return struct.pack(f"={count}i", *(_scaled(v, 23) for v in values))
    if audio_format is AudioFormat.S24_3:
        return b"".join(
            _scaled(v, 23).to_bytes(3, sys.byteorder, signed=True) for v in values
        )
    if audio_format is AudioFormat.S16:
        return struct.pack(f"={count}h", *(_scaled(v, 15) for v in values))
    raise InvalidParamsError(f"unsupported audio format {audio_format!r}")


class Sink(abc.ABC):
    """An output for decoded audio.

    A packet is either raw bytes, passed through unchanged, or a sequence of
    samples that is encoded in the sink's format before it is written.
    """

    NAME = ""

    def __init__(self, audio_format: AudioFormat = AudioFormat.S16) -> None:
        self.format = audio_format

    def start(self) -> None:
        """Prepare the output for playback."""

    def stop(self) -> None:
        """Release the output after playback."""

    def write(self, packet: Packet) -> None:
        """Write one packet of audio."""
        if isinstance(packet, (bytes, bytearray, memoryview)):
            self.write_bytes(bytes(packet))
        else:
            self.write_bytes(samples_to_bytes(packet, self.format))

    @abc.abstractmethod
    def write_bytes(self, data: bytes) -> None:
        """Write encoded audio bytes to the output."""