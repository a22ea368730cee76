from __future__ import annotations

import pytest

from barfeed.config import DEFAULT_LIMIT, MAX_LIMIT
from barfeed.errors import FeedValidationError
from barfeed.feed.validation import parse_coordinates, parse_limit, parse_page


def test_parses_string_coordinates():
    assert parse_coordinates("40.7128", "-74.0060") == (40.7128, -74.006)


def test_zero_coordinates_are_valid():
    assert parse_coordinates("0", "0") == (0.0, 0.0)
    assert parse_coordinates(0.0, "0.0") == (0.0, 0.0)


@pytest.mark.parametrize(
    "lat,lng",
    [
        (None, "1"),
        ("1", None),
        ("", "1"),
        ("abc", "1"),
        ("nan", "1"),
        ("1", "inf"),
        ("-Infinity", "1"),
        ("91", "0"),
        ("0", "-180.5"),
    ],
)
def test_rejects_bad_coordinates(lat, lng):
    with pytest.raises(FeedValidationError) as exc_info:
        parse_coordinates(lat, lng)
    assert exc_info.value.message == "Latitude and longitude are required."
    assert exc_info.value.http_status == 400


def test_page_defaults():
    assert parse_page(None) == 1
    assert parse_page("abc") == 1
    assert parse_page("0") == 1
    assert parse_page("-3") == 1
    assert parse_page("3") == 3


def test_limit_defaults_and_clamps():
    assert parse_limit(None) == DEFAULT_LIMIT
    assert parse_limit("0") == DEFAULT_LIMIT
    assert parse_limit("2.5") == DEFAULT_LIMIT
    assert parse_limit("7") == 7
    assert parse_limit(str(MAX_LIMIT + 100)) == MAX_LIMIT
