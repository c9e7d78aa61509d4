import shlex
import sys
import time

import pytest

from spotlink.backend.sink import (
    ConnectionRefusedError_,
    InvalidParamsError,
    NotConnectedError,
)
from spotlink.backend.subprocess_sink import SubprocessSink
from spotlink.config import AudioFormat

COPY_SCRIPT = (
    "import sys\n"
    "out = open(sys.argv[1], 'wb', buffering=0)\n"
    "while True:\n"
    "    chunk = sys.stdin.buffer.read1(65536)\n"
    "    if not chunk:\n"
    "        break\n"
    "    out.write(chunk)\n"
)


def _wait_for_size(path, size, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if path.exists() and path.stat().st_size >= size:
            return path.read_bytes()
        time.sleep(0.02)
    return path.read_bytes() if path.exists() else b""


def test_pipes_bytes_to_command(tmp_path):
    target = tmp_path / "out.raw"
    command = shlex.join([sys.executable, "-c", COPY_SCRIPT, str(target)])
    sink = SubprocessSink(command, AudioFormat.S16)
    sink.start()
    payload = b"hello" * 100
    sink.write_bytes(payload)
    received = _wait_for_size(target, len(payload))
    sink.stop()
    assert received == payload
    with pytest.raises(NotConnectedError):
        sink.stop()


def test_missing_command():
    sink = SubprocessSink(None, AudioFormat.S16)
    with pytest.raises(InvalidParamsError):
        sink.start()


def test_unparseable_command():
    sink = SubprocessSink('"unterminated', AudioFormat.S16)
    with pytest.raises(InvalidParamsError):
        sink.start()


def test_command_that_cannot_run(tmp_path):
    sink = SubprocessSink(str(tmp_path / "no-such-program"), AudioFormat.S16)
    with pytest.raises(ConnectionRefusedError_):
        sink.start()


def test_stop_without_start():
    sink = SubprocessSink("cat", AudioFormat.S16)
    with pytest.raises(NotConnectedError):
        sink.stop()


def test_write_without_start():
    sink = SubprocessSink("cat", AudioFormat.S16)
    with pytest.raises(NotConnectedError):
        sink.write_bytes(b"data")


def test_question_mark_prints_usage(capsys):
    with pytest.raises(SystemExit) as info:
        SubprocessSink("?", AudioFormat.S16)
    assert info.value.code == 0
    assert "--backend subprocess" in capsys.readouterr().out