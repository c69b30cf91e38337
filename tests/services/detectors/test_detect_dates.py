"""Tests for date parsing and date arithmetic."""

from datetime import date

import pytest

from contour_engine.services.detectors.dates import compute_date, detect_date, format_date, parse_date

TODAY = date(2026, 10, 17)


def _today() -> date:
    return TODAY


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", TODAY),
        ("tomorrow", date(2026, 10, 18)),
        ("christmas", date(2026, 12, 25)),
        ("halloween", date(2026, 10, 31)),
        ("valentine's day", date(2027, 2, 14)),
        ("new years", date(2027, 1, 1)),
        ("2026-03-05", date(2026, 3, 5)),
        ("dec 25, 2027", date(2027, 12, 25)),
        ("25 december", date(2026, 12, 25)),
        ("jan 3", date(2027, 1, 3)),
        ("12/25/26", date(2026, 12, 25)),
    ],
)
def test_parse_date_forms(text, expected):
    """Named days and numeric forms resolve relative to today."""
    assert parse_date(text, TODAY) == expected


@pytest.mark.parametrize("text", ["2/30", "feb 30", "2026-13-01", "someday"])
def test_parse_date_rejects_impossible_dates(text):
    """Impossible or unknown dates yield None."""
    assert parse_date(text, TODAY) is None


def test_days_until_christmas():
    """Counting down to a holiday names the target day."""
    result = detect_date("days until christmas", today=_today)
    assert result is not None
    assert result.days == 69
    assert result.display == "69 days"
    assert result.subtitle == "until Friday, December 25, 2026"


def test_days_from_now_and_ago():
    """Relative offsets display the resulting date."""
    ahead = detect_date("30 days from now", today=_today)
    assert ahead.display == "Monday, November 16, 2026"
    assert ahead.subtitle == "30 days from now"
    behind = detect_date("10 days ago", today=_today)
    assert behind.display == "Wednesday, October 7, 2026"
    assert behind.target_date == date(2026, 10, 7)


def test_days_since_and_between():
    """Elapsed and span counts are absolute day counts."""
    since = detect_date("days since 2026-01-01", today=_today)
    assert since.days == 289
    between = detect_date("days between 2026-03-01 and 2026-01-01", today=_today)
    assert between.days == 59
    assert between.display == "59 days"


def test_partial_date_queries():
    """A keyword without a usable date is a partial result."""
    bare = detect_date("days until", today=_today)
    assert bare.is_partial is True
    assert bare.display == "Type a date..."
    unknown = detect_date("days until xyz", today=_today)
    assert unknown.is_partial is True
    assert unknown.display == "days until ..."
    assert detect_date("hello world", today=_today) is None


def test_compute_date_past_target_and_format():
    """A past target renders as days ago."""
    result = compute_date("until", date(2026, 10, 10), today=TODAY)
    assert result.days == -7
    assert result.display == "7 days ago"
    assert compute_date("between", date(2026, 1, 1), today=TODAY) is None
    assert format_date(date(2025, 12, 25)) == "Thursday, December 25, 2025"
