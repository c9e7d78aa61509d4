from spotlink.errors import (
    EmptyResponseError,
    ExplicitContentFilteredError,
    InvalidDurationError,
    InvalidMessageError,
    MetadataError,
    NonPlayableError,
)


def test_invalid_duration_message_and_value():
    err = InvalidDurationError(-5)
    assert str(err) == "audio item duration can not be: -5"
    assert err.duration == -5


def test_empty_response_message():
    assert str(EmptyResponseError()) == "empty response"


def test_non_playable_message():
    assert str(NonPlayableError()) == "audio item is non-playable when it should be"


def test_explicit_filtered_message():
    assert str(ExplicitContentFilteredError()) == (
        "track is marked as explicit, which client setting forbids"
    )


def test_errors_caught_as_metadata_error():
    err = EmptyResponseError()
    assert isinstance(err, MetadataError)
    assert str(err) == "empty response"


def test_invalid_message_is_value_error():
    err = InvalidMessageError("bad field")
    assert isinstance(err, ValueError)
    assert str(err) == "bad field"