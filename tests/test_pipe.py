import struct

import pytest

from spotlink.backend.pipe import StdoutSink
from spotlink.backend.sink import ConnectionRefusedError_, NotConnectedError
from spotlink.config import AudioFormat


def test_writes_to_file(tmp_path):
    target = tmp_path / "out.raw"
    sink = StdoutSink(str(target), AudioFormat.S16)
    sink.start()
    sink.write_bytes(b"abc")
    sink.write_bytes(b"def")
    sink.stop()
    assert target.read_bytes() == b"abcdef"


def test_existing_file_is_not_truncated(tmp_path):
    target = tmp_path / "out.raw"
    target.write_bytes(b"abcdef")
    sink = StdoutSink(str(target), AudioFormat.S16)
    sink.start()
    sink.write_bytes(b"XY")
    sink.stop()
    assert target.read_bytes() == b"XYcdef"


def test_samples_are_encoded(tmp_path):
    target = tmp_path / "out.raw"
    sink = StdoutSink(str(target), AudioFormat.F64)
    sink.start()
    sink.write([0.5, -0.25])
    sink.stop()
    assert struct.unpack("=2d", target.read_bytes()) == (0.5, -0.25)


def test_writes_to_stdout(capsysbinary):
    sink = StdoutSink(None, AudioFormat.S16)
    sink.start()
    sink.write_bytes(b"raw audio")
    sink.stop()
    assert capsysbinary.readouterr().out == b"raw audio"


def test_stop_without_start():
    sink = StdoutSink(None, AudioFormat.S16)
    with pytest.raises(NotConnectedError):
        sink.stop()


def test_write_without_start():
    sink = StdoutSink(None, AudioFormat.S16)
    with pytest.raises(NotConnectedError):
        sink.write_bytes(b"x")


def test_second_stop_fails(tmp_path):
    sink = StdoutSink(str(tmp_path / "f"), AudioFormat.S16)
    sink.start()
    sink.stop()
    with pytest.raises(NotConnectedError):
        sink.stop()


def test_unopenable_file(tmp_path):
    sink = StdoutSink(str(tmp_path / "missing" / "out.raw"), AudioFormat.S16)
    with pytest.raises(ConnectionRefusedError_):
        sink.start()


def test_question_mark_prints_usage(capsys):
    with pytest.raises(SystemExit) as info:
        StdoutSink("?", AudioFormat.S16)
    assert info.value.code == 0
    assert "--backend pipe" in capsys.readouterr().out