import pytest

from spotlink.errors import InvalidMessageError
from spotlink.images import (
    Image,
    PictureSize,
    TranscodedPicture,
    images_from_group,
)


def test_image_from_message_keeps_fields():
    raw = b"\xab" * 20
    image = Image.from_message({"file_id": raw, "size": "LARGE", "width": 640, "height": 480})
    assert image.id == raw.hex()
    assert image.size == "LARGE"
    assert (image.width, image.height) == (640, 480)


def test_image_defaults():
    image = Image.from_message({})
    assert image.id == ""
    assert image.size == "DEFAULT"
    assert (image.width, image.height) == (0, 0)


def test_images_from_group_preserves_order():
    group = {"image": [{"file_id": bytes([i]) * 20, "width": i} for i in range(3)]}
    images = images_from_group(group)
    assert [image.width for image in images] == [0, 1, 2]
    assert [image.id for image in images] == [(bytes([i]) * 20).hex() for i in range(3)]


def test_images_from_missing_group_is_empty():
    assert images_from_group(None) == []
    assert images_from_group({}) == []


def test_images_from_group_rejects_non_repeated():
    with pytest.raises(InvalidMessageError):
        images_from_group({"image": "not a list"})


def test_picture_size():
    size = PictureSize.from_message({"target_name": "large", "url": "https://img.example.com/a"})
    assert size == PictureSize("large", "https://img.example.com/a")
    assert PictureSize.from_message({}) == PictureSize("", "")


def test_transcoded_picture():
    picture = TranscodedPicture.from_message(
        {"target_name": "default", "uri": "spotify:image:abc"}
    )
    assert picture.target_name == "default"
    assert picture.uri == "spotify:image:abc"