from datetime import datetime, timezone

import pytest

from spotlink.album import Album, Disc
from spotlink.errors import InvalidMessageError


def gid(n):
    return bytes([n]) * 16


def test_disc_from_message():
    disc = Disc.from_message({"number": 2, "name": "B", "track": [{"gid": gid(1)}]})
    assert disc == Disc(2, "B", [gid(1).hex()])


def test_disc_defaults():
    disc = Disc.from_message({})
    assert (disc.number, disc.name, disc.tracks) == (0, "", [])


def test_tracks_flattens_discs_in_order():
    album = Album("x", discs=[Disc(1, tracks=["a", "b"]), Disc(2, tracks=[]), Disc(3, tracks=["c"])])
    assert list(album.tracks()) == ["a", "b", "c"]


def test_album_from_message():
    msg = {
        "gid": gid(1),
        "name": "Record",
        "artist": [{"gid": gid(2), "name": "Band"}],
        "type": "SINGLE",
        "label": "Label",
        "date": {"year": 2001, "month": 3, "day": 4},
        "popularity": 40,
        "genre": ["pop"],
        "cover_group": {"image": [{"file_id": b"\x09" * 20, "width": 300}]},
        "disc": [
            {"number": 1, "track": [{"gid": gid(3)}, {"gid": gid(4)}]},
            {"number": 2, "track": [{"gid": gid(5)}]},
        ],
        "review": ["great"],
        "copyright": [{"type": "C", "text": "note"}],
        "related": [{"gid": gid(6)}],
        "type_str": "single",
    }
    album = Album.from_message(msg)
    assert album.id == gid(1).hex()
    assert album.name == "Record"
    assert album.artists[0].name == "Band"
    assert album.album_type == "SINGLE"
    assert album.date == datetime(2001, 3, 4, tzinfo=timezone.utc)
    assert list(album.tracks()) == [gid(3).hex(), gid(4).hex(), gid(5).hex()]
    assert album.covers == album.cover_group
    assert album.covers[0].width == 300
    assert album.related == [gid(6).hex()]
    assert album.copyrights[0].text == "note"
    assert album.reviews == ["great"]
    assert album.type_str == "single"


def test_album_defaults():
    album = Album.from_message({"gid": gid(1)})
    assert album.album_type == "ALBUM"
    assert album.discs == []
    assert list(album.tracks()) == []


def test_album_without_gid_fails():
    with pytest.raises(InvalidMessageError):
        Album.from_message({"name": "x"})


def test_album_with_bad_track_id_fails():
    with pytest.raises(InvalidMessageError):
        Album.from_message({"gid": gid(1), "disc": [{"track": [{"gid": b"\x01"}]}]})