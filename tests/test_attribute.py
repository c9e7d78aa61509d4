import pytest

from spotlink.errors import InvalidMessageError
from spotlink.images import PictureSize
from spotlink.messages import date_from_timestamp_ms
from spotlink.playlist.attribute import (
    PlaylistAttributes,
    PlaylistItemAttributes,
    PlaylistPartialAttributes,
    PlaylistPartialItemAttributes,
    PlaylistUpdateAttributes,
    PlaylistUpdateItemAttributes,
    format_attributes_from_messages,
)


def test_format_attributes_later_key_wins():
    result = format_attributes_from_messages(
        [{"key": "k", "value": "first"}, {"key": "x", "value": "y"}, {"key": "k", "value": "last"}]
    )
    assert result == {"k": "last", "x": "y"}


def test_playlist_attributes_from_message():
    attrs = PlaylistAttributes.from_message(
        {
            "name": "Mix",
            "description": "desc",
            "picture": b"\x01\x02",
            "collaborative": True,
            "pl3_version": "v",
            "deleted_by_owner": True,
            "client_id": "client",
            "format": "fmt",
            "format_attributes": [{"key": "a", "value": "b"}],
            "picture_size": [{"target_name": "large", "url": "http://img.example.com/x"}],
        }
    )
    assert attrs.name == "Mix"
    assert attrs.picture == b"\x01\x02"
    assert attrs.is_collaborative is True
    assert attrs.is_deleted_by_owner is True
    assert attrs.format_attributes == {"a": "b"}
    assert attrs.picture_sizes == [PictureSize("large", "http://img.example.com/x")]


def test_playlist_attributes_empty():
    assert PlaylistAttributes.from_message({}) == PlaylistAttributes()


def test_item_attributes_timestamps():
    attrs = PlaylistItemAttributes.from_message(
        {
            "added_by": "someone",
            "timestamp": 1500000000000,
            "seen_at": 1600000000000,
            "public": True,
            "item_id": b"\xaa",
        }
    )
    assert attrs.added_by == "someone"
    assert attrs.timestamp == date_from_timestamp_ms(1500000000000)
    assert attrs.seen_at == date_from_timestamp_ms(1600000000000)
    assert attrs.is_public is True
    assert attrs.item_id == b"\xaa"


def test_item_attributes_bad_timestamp_raises():
    with pytest.raises(InvalidMessageError):
        PlaylistItemAttributes.from_message({"timestamp": 10**20})


def test_partial_attributes():
    partial = PlaylistPartialAttributes.from_message(
        {"values": {"name": "New"}, "no_value": ["LIST_DESCRIPTION"]}
    )
    assert partial.values.name == "New"
    assert partial.no_value == ["LIST_DESCRIPTION"]

    item_partial = PlaylistPartialItemAttributes.from_message(
        {"values": {"added_by": "bob"}, "no_value": ["ITEM_SEEN_AT"]}
    )
    assert item_partial.values.added_by == "bob"
    assert item_partial.no_value == ["ITEM_SEEN_AT"]


def test_update_attributes():
    update = PlaylistUpdateAttributes.from_message(
        {"new_attributes": {"values": {"name": "After"}}, "old_attributes": {"values": {"name": "Before"}}}
    )
    assert update.new_attributes.values.name == "After"
    assert update.old_attributes.values.name == "Before"


def test_update_item_attributes_defaults():
    update = PlaylistUpdateItemAttributes.from_message({"index": 4})
    assert update.index == 4
    assert update.new_attributes == PlaylistPartialItemAttributes()
    assert update.old_attributes.values.added_by == ""