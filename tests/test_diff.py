import pytest

from spotlink.errors import InvalidMessageError
from spotlink.playlist.diff import PlaylistDiff


def test_diff_from_message():
    diff = PlaylistDiff.from_message(
        {
            "from_revision": b"\x00\xff",
            "ops": [{"kind": "ADD"}, {"kind": "REM"}],
            "to_revision": b"\x10",
        }
    )
    assert diff.from_revision == "00ff"
    assert diff.to_revision == "10"
    assert [op.kind for op in diff.operations] == ["ADD", "REM"]


def test_empty_diff():
    diff = PlaylistDiff.from_message({})
    assert diff == PlaylistDiff()
    assert diff.operations == []


def test_revision_must_be_bytes():
    with pytest.raises(InvalidMessageError):
        PlaylistDiff.from_message({"from_revision": "abc"})