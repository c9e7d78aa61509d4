from datetime import MINYEAR, datetime, timezone

import pytest

from spotlink.common import (
    ContentRating,
    Copyright,
    ExternalId,
    SalePeriod,
    video_files_from_messages,
)
from spotlink.errors import InvalidMessageError


def test_content_rating():
    rating = ContentRating.from_message({"country": "DE", "tag": ["explicit", "violence"]})
    assert rating.country == "DE"
    assert rating.tags == ["explicit", "violence"]


def test_content_rating_defaults():
    rating = ContentRating.from_message({})
    assert (rating.country, rating.tags) == ("", [])


def test_copyright():
    notice = Copyright.from_message({"type": "C", "text": "2001 Label"})
    assert notice == Copyright("C", "2001 Label")


def test_copyright_default_type():
    assert Copyright.from_message({"text": "x"}).copyright_type == "P"


def test_external_id():
    ext = ExternalId.from_message({"type": "isrc", "id": "USABC0000001"})
    assert ext.external_type == "isrc"
    assert ext.id == "USABC0000001"


def test_sale_period_dates_and_restrictions():
    period = SalePeriod.from_message(
        {
            "restriction": [{"catalogue_str": ["premium"], "countries_allowed": "SEDE"}],
            "start": {"year": 2020, "month": 5, "day": 1},
            "end": {"year": 2021, "month": 6, "day": 2},
        }
    )
    assert period.start == datetime(2020, 5, 1, tzinfo=timezone.utc)
    assert period.end == datetime(2021, 6, 2, tzinfo=timezone.utc)
    assert period.restrictions[0].countries_allowed == ["SE", "DE"]
    assert period.start < period.end


def test_sale_period_missing_dates():
    period = SalePeriod.from_message({})
    assert period.start.year == MINYEAR
    assert period.restrictions == []


def test_sale_period_invalid_date():
    with pytest.raises(InvalidMessageError):
        SalePeriod.from_message({"start": {"year": 2020, "month": 13}})


def test_video_files():
    ids = [bytes([1]) * 20, bytes([2]) * 20]
    result = video_files_from_messages([{"file_id": raw} for raw in ids])
    assert result == [raw.hex() for raw in ids]