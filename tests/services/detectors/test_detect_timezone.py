"""Tests for time zone conversion detection."""

from datetime import datetime, timezone

from contour_engine.services.detectors.timezone import (
    convert_timezone,
    detect_timezone,
    find_timezone,
    get_timezone_list,
    parse_time,
)

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def _now() -> datetime:
    return FIXED_NOW


def test_conversion_across_midnight():
    """An evening in New York is the next morning in India."""
    result = detect_timezone("3pm est to ist", now=_now)
    assert result is not None
    assert result.from_time == "3:00 PM"
    assert result.to_time == "Fri 1:30 AM"
    assert result.day_shift == 1
    assert result.display == "3:00 PM EST = Fri 1:30 AM IST"


def test_now_in_zone():
    """``now in`` reports the current time in the target zone."""
    result = detect_timezone("now in tokyo", now=_now)
    assert result is not None
    assert result.is_now is True
    assert result.to_label == "JST"
    assert result.display == "Now in JST: Thu 9:00 PM"


def test_partial_conversion():
    """A trailing connector yields a partial result."""
    result = detect_timezone("noon utc to", now=_now)
    assert result is not None
    assert result.is_partial is True
    assert result.display == "12:00 PM UTC = ..."


def test_unknown_or_invalid_times():
    """Unknown zones and impossible times are rejected."""
    assert detect_timezone("3pm mars to est", now=_now) is None
    assert detect_timezone("13pm est to ist", now=_now) is None


def test_parse_time_forms():
    """12-hour, 24-hour and named times parse to hours and minutes."""
    assert parse_time("12am") == (0, 0)
    assert parse_time("12:30 pm") == (12, 30)
    assert parse_time("15:45") == (15, 45)
    assert parse_time("midnight") == (0, 0)
    assert parse_time("24:00") is None


def test_zone_lookup_and_listing():
    """Aliases resolve to their zone and labels are listed once."""
    zone = find_timezone("Hong Kong")
    assert zone is not None and zone.iana == "Asia/Hong_Kong"
    labels = [entry["label"] for entry in get_timezone_list()]
    assert len(labels) == len(set(labels))
    assert get_timezone_list()[0]["region"] == "Americas"


def test_convert_timezone_by_iana():
    """Direct conversion labels known zones and rejects unknown keys."""
    result = convert_timezone(9, 0, "Europe/London", "America/New_York", now=_now)
    assert result is not None
    assert result.to_time == "Thu 4:00 AM"
    assert convert_timezone(9, 0, "Nowhere/City", "UTC", now=_now) is None
