import pytest

from spotlink.errors import InvalidMessageError
from spotlink.images import TranscodedPicture
from spotlink.playlist.annotation import PlaylistAnnotation, annotation_uri


def test_from_message_reads_all_fields():
    msg = {
        "description": "Songs for the road",
        "picture": "ab67706c0000",
        "transcoded_picture": [
            {"target_name": "default", "uri": "spotify:image:abc"},
            {"target_name": "large", "uri": "spotify:image:def"},
        ],
        "is_abuse_reporting_enabled": True,
        "abuse_report_state": "TAKEN_DOWN",
    }
    annotation = PlaylistAnnotation.from_message(msg)
    assert annotation.description == "Songs for the road"
    assert annotation.picture == "ab67706c0000"
    assert annotation.transcoded_pictures == [
        TranscodedPicture("default", "spotify:image:abc"),
        TranscodedPicture("large", "spotify:image:def"),
    ]
    assert annotation.has_abuse_reporting is True
    assert annotation.abuse_report_state == "TAKEN_DOWN"


def test_from_empty_message_gives_defaults():
    annotation = PlaylistAnnotation.from_message({})
    assert annotation == PlaylistAnnotation()
    assert annotation.abuse_report_state == "OK"
    assert annotation.transcoded_pictures == []


def test_annotation_uri_prefix_and_user():
    uri = annotation_uri("alice", "0" * 32)
    assert uri == "hm://playlist-annotate/v1/annotation/user/alice/playlist/" + "0" * 22


def test_annotation_uri_id_has_fixed_length():
    uri = annotation_uri("bob", "f" * 32)
    assert len(uri.rsplit("/", 1)[1]) == 22


@pytest.mark.parametrize("bad", ["", "abc", "g" * 32, "0" * 33])
def test_annotation_uri_rejects_bad_ids(bad):
    with pytest.raises(InvalidMessageError):
        annotation_uri("alice", bad)