import pytest

from spotlink.errors import InvalidMessageError
from spotlink.messages import date_from_timestamp_ms
from spotlink.playlist.item import PlaylistItem, PlaylistItemList, PlaylistMetaItem

TRACK_URI = "spotify:track:4uLU6hMCjMI75M1A2tKUQC"


def test_item_from_message():
    item = PlaylistItem.from_message({"uri": TRACK_URI, "attributes": {"added_by": "alice"}})
    assert item.id == TRACK_URI
    assert item.attributes.added_by == "alice"


@pytest.mark.parametrize("uri", [None, "", "spotify:track", "http:track:x", "spotify::abc"])
def test_item_with_invalid_uri_raises(uri):
    with pytest.raises(InvalidMessageError):
        PlaylistItem.from_message({"uri": uri})


def test_meta_item_from_message():
    meta = PlaylistMetaItem.from_message(
        {
            "revision": b"\x0a\x0b",
            "attributes": {"name": "List"},
            "length": 3,
            "timestamp": 1500000000000,
            "owner_username": "owner",
            "abuse_reporting_enabled": True,
            "capabilities": {"can_view": True},
        }
    )
    assert meta.revision == "0a0b"
    assert meta.attributes.name == "List"
    assert meta.length == 3
    assert meta.timestamp == date_from_timestamp_ms(1500000000000)
    assert meta.owner_username == "owner"
    assert meta.has_abuse_reporting is True
    assert meta.capabilities.can_view is True


def test_item_list_from_message():
    items = PlaylistItemList.from_message(
        {
            "pos": 2,
            "truncated": True,
            "items": [{"uri": TRACK_URI}, {"uri": "spotify:episode:abc"}],
            "meta_items": [{"revision": b"\x01"}],
        }
    )
    assert items.position == 2
    assert items.is_truncated is True
    assert [item.id for item in items.items] == [TRACK_URI, "spotify:episode:abc"]
    assert len(items.meta_items) == 1


def test_item_list_empty():
    items = PlaylistItemList.from_message({})
    assert items == PlaylistItemList()
    assert items.items == []