"""Tests for config.constants module."""

from config.constants import (
    DEFAULT_CACHE_TTL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SPORTS,
    FEED_POPULAR_SPORTS,
    LISTING_POPULAR_SPORTS,
    MONTH_NAMES,
    PROXY_URL,
)


def test_default_sports_list():
    """Test that the default sports list has the seven known sports."""
    assert isinstance(DEFAULT_SPORTS, list)
    assert DEFAULT_SPORTS == [
        "Football",
        "Basketball",
        "Tennis",
        "Baseball",
        "Hockey",
        "Soccer",
        "Softball",
    ]


def test_popular_sports_differ_by_tennis():
    """Test that only the listing page treats Tennis as popular."""
    assert LISTING_POPULAR_SPORTS - FEED_POPULAR_SPORTS == {"Tennis"}
    assert FEED_POPULAR_SPORTS < LISTING_POPULAR_SPORTS


def test_month_names():
    """Test that month names are in calendar order."""
    assert len(MONTH_NAMES) == 12
    assert MONTH_NAMES[0] == "January"
    assert MONTH_NAMES[9] == "October"


def test_defaults():
    """Test default timeout and cache lifetime."""
    assert DEFAULT_REQUEST_TIMEOUT == 10.0
    assert DEFAULT_CACHE_TTL == 300
    assert PROXY_URL.startswith("https://")
