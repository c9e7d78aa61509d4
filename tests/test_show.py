import pytest

from spotlink.errors import InvalidMessageError
from spotlink.show import Show

GID = bytes(range(16))
EPISODE_GID = bytes(range(32, 48))


def test_basic_fields():
    show = Show.from_message(
        {
            "gid": GID,
            "name": "Talk",
            "publisher": "Someone",
            "episode": [{"gid": EPISODE_GID}],
            "is_audiobook": True,
        }
    )
    assert show.id == GID.hex()
    assert show.publisher == "Someone"
    assert show.episodes == [EPISODE_GID.hex()]
    assert show.is_audiobook is True


def test_enum_defaults():
    show = Show.from_message({"gid": GID})
    assert show.media_type == "MIXED"
    assert show.consumption_order == "SEQUENTIAL"
    assert show.trailer_uri == ""


def test_trailer_uri_kept():
    uri = "spotify:episode:abc"
    show = Show.from_message({"gid": GID, "trailer_uri": uri})
    assert show.trailer_uri == uri


def test_malformed_trailer_uri_raises():
    with pytest.raises(InvalidMessageError):
        Show.from_message({"gid": GID, "trailer_uri": "not-a-uri"})


def test_bad_episode_id_raises():
    with pytest.raises(InvalidMessageError):
        Show.from_message({"gid": GID, "episode": [{"gid": b"short"}]})