import json

import pytest

from spotlink.errors import InvalidMessageError
from spotlink.lyrics import Line, Lyrics, SyncType

SAMPLE = {
    "colors": {"background": -9211021, "highlightText": -1, "text": -16777216},
    "hasVocalRemoval": False,
    "lyrics": {
        "fullscreenAction": "FULLSCREEN_LYRICS",
        "isDenseTypeface": False,
        "isRtlLanguage": False,
        "language": "en",
        "lines": [
            {"startTimeMs": "1000", "endTimeMs": "0", "words": "Hello", "syllables": []},
            {"startTimeMs": "2500", "endTimeMs": "0", "words": "World", "syllables": []},
        ],
        "provider": "Provider",
        "providerDisplayName": "Provider Name",
        "providerLyricsId": "12345",
        "syncLyricsUri": "",
        "syncType": "LINE_SYNCED",
        "alternatives": [],
    },
}


def test_parse_sample():
    lyrics = Lyrics.from_json(json.dumps(SAMPLE))
    assert lyrics.colors.highlight_text == -1
    assert lyrics.lyrics.sync_type is SyncType.LINE_SYNCED
    assert lyrics.lyrics.lines[1] == Line("2500", "0", "World")
    assert lyrics.lyrics.provider_display_name == "Provider Name"


def test_parse_bytes_matches_str():
    text = json.dumps(SAMPLE)
    assert Lyrics.from_json(text.encode()) == Lyrics.from_json(text)


def test_missing_field_raises():
    broken = json.loads(json.dumps(SAMPLE))
    del broken["lyrics"]["language"]
    with pytest.raises(InvalidMessageError, match="language"):
        Lyrics.from_json(json.dumps(broken))


def test_unknown_sync_type_raises():
    broken = json.loads(json.dumps(SAMPLE))
    broken["lyrics"]["syncType"] = "WORD_SYNCED"
    with pytest.raises(InvalidMessageError):
        Lyrics.from_json(json.dumps(broken))


def test_wrong_type_raises():
    broken = json.loads(json.dumps(SAMPLE))
    broken["hasVocalRemoval"] = "no"
    with pytest.raises(InvalidMessageError):
        Lyrics.from_json(json.dumps(broken))


def test_invalid_json_raises():
    with pytest.raises(InvalidMessageError):
        Lyrics.from_json("{not json")