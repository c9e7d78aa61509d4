"""Sink that writes raw audio to standard output or to a file."""

from __future__ import annotations

import logging
import os
import sys
from typing import BinaryIO

from ..config import AudioFormat
from .sink import ConnectionRefusedError_, NotConnectedError, OnWriteError, Sink

logger = logging.getLogger(__name__)

_USAGE = (
    "\nUsage:\n\nOutput to stdout:\n\n\t--backend pipe\n\n"
    "Output to file:\n\n\t--backend pipe --device {filename}\n"
)


class StdoutSink(Sink):
    """Writes audio bytes to a file, or to standard output when no file is given.

    A file is opened for writing and created if missing; it is not truncated.
    """

    NAME = "pipe"

    def __init__(self, file: str | None = None, audio_format: AudioFormat = AudioFormat.S16):
        if file == "?":
            print(_USAGE)
            raise SystemExit(0)
        super().__init__(audio_format)
        logger.info("Using StdoutSink (pipe) with format: %s", audio_format)
        self.file = file
        self._output: BinaryIO | None = None
        self._owns_output = False

    def start(self) -> None:
        """Open the output if it is not open yet."""
        if self._output is not None:
            return
        if self.file is None:
            self._output = sys.stdout.buffer
            self._owns_output = False
            return
        try:
            fd = os.open(self.file, os.O_WRONLY | os.O_CREAT, 0o666)
        except OSError as exc:
            raise ConnectionRefusedError_(
                f"<StdoutSink> File Path {self.file} Can Not be Opened and/or Created, {exc}"
            ) from exc
        self._output = os.fdopen(fd, "wb")
        self._owns_output = True

    def stop(self) -> None:
        """Flush and release the output."""
        output = self._output
        if output is None:
            raise NotConnectedError("<StdoutSink> The Output Stream is None")
        self._output = None
        try:
            output.flush()
        except OSError as exc:
            raise OnWriteError(
                f"<StdoutSink> Failed to Flush the Output Stream, {exc}"
            ) from exc
        finally:
            if self._owns_output:
                output.close()

    def write_bytes(self, data: bytes) -> None:
        """Write all of the data to the output."""
        if self._output is None:
            raise NotConnectedError("<StdoutSink> The Output Stream is None")
        try:
            self._output.write(data)
        except OSError as exc:
            raise OnWriteError(f"<StdoutSink> {exc}") from exc