"""Tests for livefeed.utils.date_parser module."""

import pendulum
import pytest

from livefeed.utils.date_parser import (
    from_epoch_ms,
    is_same_day,
    parse_note_datetime,
    parse_pub_date,
    resolve_month,
    to_epoch_ms,
)


class TestResolveMonth:
    """Tests for resolve_month function."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("October", 10),
            ("oct", 10),
            ("SEPT", 9),
            ("Ma", 3),
            ("j", 1),
            ("Ju", 6),
        ],
    )
    def test_prefixes(self, name, expected):
        assert resolve_month(name) == expected

    @pytest.mark.parametrize("name", ["", "Foo", "Octobers"])
    def test_unknown(self, name):
        assert resolve_month(name) is None


class TestParseNoteDatetime:
    """Tests for parse_note_datetime function."""

    def test_valid(self, now):
        result = parse_note_datetime("25", "Dec", "19:30", now)

        assert result == pendulum.datetime(2026, 12, 25, 19, 30, tz="UTC")

    def test_uses_reference_timezone(self):
        now = pendulum.datetime(2026, 10, 19, 12, 0, tz="Europe/Lisbon")

        result = parse_note_datetime("19", "October", "20:00", now)

        assert result.timezone_name == "Europe/Lisbon"
        assert result.hour == 20

    def test_unknown_month(self, now):
        assert parse_note_datetime("5", "Smarch", "10:00", now) is None

    def test_invalid_day(self, now):
        assert parse_note_datetime("31", "February", "10:00", now) is None

    def test_invalid_time(self, now):
        assert parse_note_datetime("1", "May", "25:00", now) is None


class TestParsePubDate:
    """Tests for parse_pub_date function."""

    def test_rfc2822(self):
        result = parse_pub_date("Mon, 19 Oct 2026 18:00:00 +0200")

        assert result == pendulum.datetime(2026, 10, 19, 16, 0, tz="UTC")

    def test_iso8601(self):
        result = parse_pub_date("2026-10-19T18:00:00+00:00")

        assert result == pendulum.datetime(2026, 10, 19, 18, 0, tz="UTC")

    def test_naive_is_utc(self):
        result = parse_pub_date("2026-10-19 18:00:00")

        assert result == pendulum.datetime(2026, 10, 19, 18, 0, tz="UTC")

    @pytest.mark.parametrize(
        "value",
        ["", "   ", "next tuesday-ish", "99999999999999999999"],
    )
    def test_unparsable(self, value):
        assert parse_pub_date(value) is None


def test_epoch_ms_conversion(now):
    ms = to_epoch_ms(now)

    assert ms == 1_792_422_000_000
    assert from_epoch_ms(ms, "UTC") == now


def test_is_same_day(now):
    assert is_same_day(to_epoch_ms(now.add(hours=8)), now)
    assert not is_same_day(to_epoch_ms(now.add(hours=9)), now)
    assert not is_same_day(to_epoch_ms(now.subtract(hours=16)), now)
