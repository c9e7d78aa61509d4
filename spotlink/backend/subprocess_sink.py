"""Sink that pipes raw audio into the standard input of a shell command."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import BinaryIO

from ..config import AudioFormat
from .sink import (
    ConnectionRefusedError_,
    InvalidParamsError,
    NotConnectedError,
    OnWriteError,
    Sink,
    SinkError,
)

logger = logging.getLogger(__name__)

_USAGE = (
    "\nUsage:\n\nOutput to a Subprocess:\n\n"
    "\t--backend subprocess --device {shell_command}\n"
)


class SubprocessSink(Sink):
    """Starts a command and writes audio bytes to its standard input."""

    NAME = "subprocess"

    def __init__(
        self, shell_command: str | None = None, audio_format: AudioFormat = AudioFormat.S16
    ):
        if shell_command == "?":
            print(_USAGE)
            raise SystemExit(0)
        super().__init__(audio_format)
        logger.info("Using SubprocessSink with format: %s", audio_format)
        self.shell_command = shell_command
        self._child: subprocess.Popen | None = None

    def start(self) -> None:
        """Start the command if it is not running yet."""
        if self._child is not None:
            return
        command = self.shell_command
        if command is None:
            raise InvalidParamsError("<SubprocessSink> Missing Required Shell Command")
        try:
            args = shlex.split(command)
        except ValueError as exc:
            raise InvalidParamsError(
                f"<SubprocessSink> Failed to Parse Command args for {command}, {exc}"
            ) from exc
        if not args:
            raise InvalidParamsError("<SubprocessSink> Missing Required Shell Command")
        try:
            self._child = subprocess.Popen(args, stdin=subprocess.PIPE, bufsize=0)
        except OSError as exc:
            raise ConnectionRefusedError_(
                f"<SubprocessSink> Command {command} Can Not be Executed, {exc}"
            ) from exc

    def stop(self) -> None:
        """Close the command's input and end it, unless it has already exited."""
        child = self._child
        if child is None:
            raise NotConnectedError("<SubprocessSink> The Subprocess is None")
        self._child = None
        if child.poll() is not None:
            return
        stdin = child.stdin
        if stdin is None:
            raise NotConnectedError("<SubprocessSink> The Subprocess's stdin is None")
        child.stdin = None
        try:
            stdin.flush()
            stdin.close()
        except OSError as exc:
            raise OnWriteError(
                f"<SubprocessSink> Failed to Flush the Subprocess, {exc}"
            ) from exc
        try:
            child.kill()
        except OSError as exc:
            raise OnWriteError(f"<SubprocessSink> Failed to Kill the Subprocess, {exc}") from exc
        try:
            child.wait()
        except OSError as exc:
            raise OnWriteError(
                f"<SubprocessSink> Failed to Wait for the Subprocess to Exit, {exc}"
            ) from exc

    def _stdin(self) -> BinaryIO:
        if self._child is None:
            raise NotConnectedError("<SubprocessSink> The Subprocess is None")
        if self._child.stdin is None:
            raise NotConnectedError("<SubprocessSink> The Subprocess's stdin is None")
        return self._child.stdin

    def _try_restart(self, error: SinkError, restarted: bool) -> bool:
        """Restart the command once per write; raise the original error otherwise."""
        if not restarted:
            try:
                self.stop()
                self.start()
            except SinkError:
                pass
            else:
                return True
        raise error

    def write_bytes(self, data: bytes) -> None:
        """Write all of the data, restarting the command once if it stops accepting it."""
        view = memoryview(data)
        restarted = False
        start = 0
        while start < len(view):
            stdin = self._stdin()
            try:
                written = stdin.write(view[start:])
            except InterruptedError:
                continue
            except OSError as exc:
                restarted = self._try_restart(
                    OnWriteError(f"<SubprocessSink> {exc}"), restarted
                )
                continue
            if not written:
                restarted = self._try_restart(
                    OnWriteError(
                        "<SubprocessSink> The Subprocess is no longer able to accept Bytes"
                    ),
                    restarted,
                )
                continue
            start += written