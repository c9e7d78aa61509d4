import pytest

from spotlink.errors import EmptyResponseError
from spotlink.request import build_metrics_uri, first_payload


def test_uri_without_query():
    assert build_metrics_uri("hm://meta/x", "SE") == "hm://meta/x?country=SE"


def test_uri_with_query_uses_ampersand():
    assert build_metrics_uri("hm://meta/x?a=1", "SE") == "hm://meta/x?a=1&country=SE"


def test_product_appended():
    assert (
        build_metrics_uri("hm://meta/x", "DE", "premium")
        == "hm://meta/x?country=DE&product=premium"
    )


def test_first_payload_returned():
    assert first_payload([b"one", b"two"]) == b"one"


def test_empty_payload_raises():
    with pytest.raises(EmptyResponseError):
        first_payload([])