"""Date arithmetic: ``days until christmas``, ``30 days from now``, ``days between ...``."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Callable, Optional

from contour_engine.core.models import DateOperation, DateResult
from contour_engine.core.ports import Formatter
from contour_engine.services.formatting import DefaultFormatter

Today = Callable[[], date]

MONTHS: dict[str, int] = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "september": 9,
    "sept": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

DATE_OPERATIONS: tuple[tuple[DateOperation, str], ...] = (
    ("until", "Days until"),
    ("since", "Days since"),
    ("from_now", "From now"),
    ("ago", "Ago"),
    ("between", "Between"),
)

DATE_QUICK_PICKS: tuple[tuple[str, str], ...] = (
    ("Christmas", "christmas"),
    ("New Year", "new years"),
    ("Halloween", "halloween"),
    ("Valentine's", "valentine's"),
)

_MONTH = "|".join(sorted(MONTHS, key=len, reverse=True))
_ISO = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_MONTH_DAY = re.compile(rf"^({_MONTH})\s+(\d{{1,2}})(?:\s*,?\s*(\d{{4}}))?$", re.IGNORECASE)
_DAY_MONTH = re.compile(rf"^(\d{{1,2}})\s+({_MONTH})(?:\s*,?\s*(\d{{4}}))?$", re.IGNORECASE)
_SLASH = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?$")

_DAYS = r"(?:days?|how many days?)"
UNTIL_PATTERN = re.compile(rf"^{_DAYS}\s+(?:until|to|till|before)\s+(.+)$", re.IGNORECASE)
SINCE_PATTERN = re.compile(rf"^{_DAYS}\s+since\s+(.+)$", re.IGNORECASE)
FROM_NOW_PATTERN = re.compile(r"^(\d+)\s+days?\s+from\s+(?:now|today)$", re.IGNORECASE)
AGO_PATTERN = re.compile(r"^(\d+)\s+days?\s+ago$", re.IGNORECASE)
BETWEEN_PATTERN = re.compile(rf"^{_DAYS}\s+between\s+(.+?)\s+and\s+(.+)$", re.IGNORECASE)
KEYWORD_ONLY_PATTERN = re.compile(
    rf"^{_DAYS}\s+(?:until|to|till|before|since|between)\s*$", re.IGNORECASE
)

_DEFAULT_FORMATTER = DefaultFormatter()


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _next_occurrence(month: int, day: int, today: date) -> date:
    candidate = date(today.year, month, day)
    if candidate < today:
        candidate = date(today.year + 1, month, day)
    return candidate


def _month_and_day(month: int, day: int, year: Optional[str], today: date) -> Optional[date]:
    if not 1 <= day <= 31:
        return None
    if year:
        return _safe_date(int(year), month, day)
    candidate = _safe_date(today.year, month, day)
    if candidate is None:
        return None
    if candidate < today:
        return _safe_date(today.year + 1, month, day)
    return candidate


def parse_date(text: str, today: Optional[date] = None) -> Optional[date]:
    """Parse a named day or an ISO, month-day, day-month or slash date.

    Named holidays and month-day forms without a year resolve to their next
    occurrence. Impossible calendar dates yield ``None``.
    """
    current = today or date.today()
    trimmed = text.strip().lower()

    if trimmed == "today":
        return current
    if trimmed == "tomorrow":
        return current + timedelta(days=1)
    if trimmed == "yesterday":
        return current - timedelta(days=1)
    if re.match(r"^new\s+year'?s?$", trimmed):
        return date(current.year + 1, 1, 1)
    if re.match(r"^(?:christmas|xmas)$", trimmed):
        return _next_occurrence(12, 25, current)
    if re.match(r"^valentine'?s?(?:\s+day)?$", trimmed):
        return _next_occurrence(2, 14, current)
    if trimmed == "halloween":
        return _next_occurrence(10, 31, current)

    match = _ISO.match(trimmed)
    if match:
        return _safe_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    match = _MONTH_DAY.match(trimmed)
    if match:
        return _month_and_day(MONTHS[match.group(1)], int(match.group(2)), match.group(3), current)

    match = _DAY_MONTH.match(trimmed)
    if match:
        return _month_and_day(MONTHS[match.group(2)], int(match.group(1)), match.group(3), current)

    match = _SLASH.match(trimmed)
    if match:
        month, day = int(match.group(1)), int(match.group(2))
        year = int(match.group(3)) if match.group(3) else current.year
        if year < 100:
            year += 2000
        if 1 <= month <= 12 and 1 <= day <= 31:
            return _safe_date(year, month, day)
    return None


def format_date(value: date) -> str:
    """``Thursday, December 25, 2025``."""
    return f"{value.strftime('%A')}, {value.strftime('%B')} {value.day}, {value.year}"


def _shift(today: date, days: int) -> Optional[date]:
    try:
        return today + timedelta(days=days)
    except OverflowError:
        return None


def compute_date(
    operation: DateOperation,
    first: Optional[date] = None,
    second: Optional[date] = None,
    num_days: Optional[int] = None,
    *,
    today: Optional[date] = None,
    formatter: Optional[Formatter] = None,
) -> Optional[DateResult]:
    """Run one date operation on already-parsed inputs."""
    fmt = formatter or _DEFAULT_FORMATTER
    current = today or date.today()

    if operation == "until":
        if first is None:
            return None
        days = (first - current).days
        display = fmt.pluralize(days, "day") if days >= 0 else f"{fmt.pluralize(days, 'day')} ago"
        return DateResult(
            display=display,
            subtitle=f"until {format_date(first)}",
            days=days,
            type="until",
            target_date=first,
        )

    if operation == "since":
        if first is None:
            return None
        days = (current - first).days
        return DateResult(
            display=fmt.pluralize(days, "day"),
            subtitle=f"since {format_date(first)}",
            days=days,
            type="since",
            target_date=first,
        )

    if operation in ("from_now", "ago"):
        if num_days is None or num_days < 0:
            return None
        target = _shift(current, num_days if operation == "from_now" else -num_days)
        if target is None:
            return None
        suffix = "from now" if operation == "from_now" else "ago"
        return DateResult(
            display=format_date(target),
            subtitle=f"{fmt.pluralize(num_days, 'day')} {suffix}",
            days=num_days,
            type=operation,
            target_date=target,
        )

    if operation == "between":
        if first is None or second is None:
            return None
        days = abs((second - first).days)
        return DateResult(
            display=fmt.pluralize(days, "day"),
            subtitle=f"between {format_date(first)} and {format_date(second)}",
            days=days,
            type="between",
        )
    return None


def detect_date(
    text: str,
    formatter: Optional[Formatter] = None,
    today: Optional[Today] = None,
) -> Optional[DateResult]:
    current = today() if today else date.today()
    trimmed = text.strip().lower()

    def run(operation: DateOperation, *args, **kwargs) -> Optional[DateResult]:
        return compute_date(operation, *args, today=current, formatter=formatter, **kwargs)

    match = UNTIL_PATTERN.match(trimmed)
    if match:
        target = parse_date(match.group(1), current)
        if target is not None:
            return run("until", target)
        return DateResult(
            display="days until ...",
            subtitle="Type a date (e.g., Dec 25, christmas)",
            days=0,
            type="until",
            is_partial=True,
        )

    match = SINCE_PATTERN.match(trimmed)
    if match:
        target = parse_date(match.group(1), current)
        if target is not None:
            return run("since", target)

    match = FROM_NOW_PATTERN.match(trimmed)
    if match:
        result = run("from_now", num_days=int(match.group(1)))
        if result is not None:
            return result

    match = AGO_PATTERN.match(trimmed)
    if match:
        result = run("ago", num_days=int(match.group(1)))
        if result is not None:
            return result

    match = BETWEEN_PATTERN.match(trimmed)
    if match:
        first = parse_date(match.group(1), current)
        second = parse_date(match.group(2), current)
        if first is not None and second is not None:
            return run("between", first, second)

    if KEYWORD_ONLY_PATTERN.match(trimmed):
        return DateResult(
            display="Type a date...",
            subtitle="e.g., Dec 25, christmas, 2025-12-31",
            days=0,
            type="until",
            is_partial=True,
        )
    return None


__all__ = [
    "DATE_OPERATIONS",
    "DATE_QUICK_PICKS",
    "MONTHS",
    "compute_date",
    "detect_date",
    "format_date",
    "parse_date",
]
