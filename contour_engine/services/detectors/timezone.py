"""Time zone conversion detection: ``3pm est to ist``, ``now in tokyo``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, time, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from contour_engine.core.models import TimezoneResult
from contour_engine.core.ports import Formatter
from contour_engine.services.formatting import DefaultFormatter

Now = Callable[[], datetime]


@dataclass(slots=True, frozen=True)
class ZoneDef:
    """A named zone: typed aliases, display label and IANA key."""

    names: tuple[str, ...]
    label: str
    iana: str


def _zone(names: str, label: str, iana: str) -> ZoneDef:
    return ZoneDef(tuple(names.split("|")), label, iana)


TIMEZONES: tuple[ZoneDef, ...] = (
    # Americas
    _zone("est|eastern|et", "EST", "America/New_York"),
    _zone("cst|central|ct", "CST", "America/Chicago"),
    _zone("mst|mountain|mt", "MST", "America/Denver"),
    _zone("pst|pacific|pt", "PST", "America/Los_Angeles"),
    _zone("ast", "AST", "America/Halifax"),
    _zone("brt|brazil|brasilia", "BRT", "America/Sao_Paulo"),
    _zone("art|argentina|buenos aires", "ART", "America/Argentina/Buenos_Aires"),

    # Europe
    _zone("utc|gmt|greenwich", "UTC", "UTC"),
    _zone("gmt+0|gmt-0", "GMT", "UTC"),
    _zone("bst|british summer", "BST", "Europe/London"),
    _zone("cet|central european", "CET", "Europe/Paris"),
    _zone("eet|eastern european", "EET", "Europe/Bucharest"),
    _zone("msk|moscow", "MSK", "Europe/Moscow"),
    _zone("london", "London", "Europe/London"),
    _zone("paris", "Paris", "Europe/Paris"),
    _zone("berlin", "Berlin", "Europe/Berlin"),

    # Asia
    _zone("ist|india|indian", "IST", "Asia/Kolkata"),
    _zone("jst|japan|tokyo", "JST", "Asia/Tokyo"),
    _zone("cst china|cst+8|china|beijing|shanghai", "CST (China)", "Asia/Shanghai"),
    _zone("kst|korea|seoul", "KST", "Asia/Seoul"),
    _zone("sgt|singapore", "SGT", "Asia/Singapore"),
    _zone("hkt|hong kong", "HKT", "Asia/Hong_Kong"),
    _zone("pht|philippines|manila", "PHT", "Asia/Manila"),
    _zone("ict|indochina|bangkok", "ICT", "Asia/Bangkok"),
    _zone("wib|jakarta", "WIB", "Asia/Jakarta"),
    _zone("gst|gulf|dubai|uae", "GST", "Asia/Dubai"),
    _zone("pkt|pakistan|karachi", "PKT", "Asia/Karachi"),
    _zone("bst bangladesh|bangladesh|dhaka", "BST (BD)", "Asia/Dhaka"),

    # Oceania
    _zone("aest|aedt|australia|sydney", "AEST", "Australia/Sydney"),
    _zone("acst|adelaide", "ACST", "Australia/Adelaide"),
    _zone("awst|perth", "AWST", "Australia/Perth"),
    _zone("nzst|nzdt|new zealand|auckland", "NZST", "Pacific/Auckland"),

    # Africa / Middle East
    _zone("cat|central africa", "CAT", "Africa/Johannesburg"),
    _zone("eat|east africa|nairobi", "EAT", "Africa/Nairobi"),
    _zone("wat|west africa|lagos", "WAT", "Africa/Lagos"),
    _zone("ast arabia|riyadh|saudi", "AST (Arabia)", "Asia/Riyadh"),
)

POPULAR_TIMEZONES = ("EST", "PST", "UTC", "IST", "JST", "CET", "AEST", "SGT")

_REGIONS = {
    "America": "Americas",
    "Europe": "Europe",
    "Asia": "Asia",
    "Australia": "Oceania",
    "Pacific": "Oceania",
    "Africa": "Africa",
}

_ZONE_NAMES = sorted((name for zone in TIMEZONES for name in zone.names), key=len, reverse=True)
_TZ = "|".join(re.escape(name) for name in _ZONE_NAMES)
_TIME = r"(\d{1,2}(?::\d{2})?\s*(?:am|pm)?|noon|midnight)"

FULL_PATTERN = re.compile(rf"^{_TIME}\s+({_TZ})\s+(?:in|to)\s+({_TZ})\s*$", re.IGNORECASE)
NOW_PATTERN = re.compile(rf"^now\s+(?:in|at)\s+({_TZ})\s*$", re.IGNORECASE)
PARTIAL_PATTERN = re.compile(rf"^{_TIME}\s+({_TZ})\s+(?:in|to)\s*$", re.IGNORECASE)

_TIME_12H = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)$", re.IGNORECASE)
_TIME_24H = re.compile(r"^(\d{1,2}):(\d{2})$")

_DEFAULT_FORMATTER = DefaultFormatter()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def find_timezone(name: str) -> Optional[ZoneDef]:
    lower = name.strip().lower()
    return next((zone for zone in TIMEZONES if lower in zone.names), None)


def find_timezone_by_label(label: str) -> Optional[ZoneDef]:
    return next((zone for zone in TIMEZONES if zone.label == label), None)


def parse_time(text: str) -> Optional[tuple[int, int]]:
    """Parse ``3pm``, ``3:30 pm``, ``15:00``, ``noon`` or ``midnight`` into (hours, minutes)."""
    lowered = text.strip().lower()
    if lowered == "noon":
        return 12, 0
    if lowered == "midnight":
        return 0, 0

    match = _TIME_12H.match(lowered)
    if match:
        hours = int(match.group(1))
        minutes = int(match.group(2) or 0)
        if not 1 <= hours <= 12 or minutes > 59:
            return None
        if match.group(3) == "pm" and hours != 12:
            hours += 12
        if match.group(3) == "am" and hours == 12:
            hours = 0
        return hours, minutes

    match = _TIME_24H.match(lowered)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            return None
        return hours, minutes
    return None


def format_clock(hours: int, minutes: int) -> str:
    return f"{hours % 12 or 12}:{minutes:02d} {'PM' if hours >= 12 else 'AM'}"


def _convert(
    hours: int,
    minutes: int,
    from_iana: str,
    to_iana: str,
    now: datetime,
    formatter: Formatter,
) -> tuple[str, int]:
    source_zone = ZoneInfo(from_iana)
    source_day = now.astimezone(source_zone).date()
    moment = datetime.combine(source_day, time(hours, minutes), tzinfo=source_zone)
    converted = moment.astimezone(ZoneInfo(to_iana))
    return formatter.format_time_in_zone(moment, to_iana), (converted.date() - source_day).days


def detect_timezone(
    text: str,
    formatter: Optional[Formatter] = None,
    now: Now = _utc_now,
) -> Optional[TimezoneResult]:
    """Detect a time conversion; times are interpreted on today's date in the source zone."""
    fmt = formatter or _DEFAULT_FORMATTER
    trimmed = text.strip()

    match = NOW_PATTERN.match(trimmed)
    if match:
        target = find_timezone(match.group(1))
        if target is None:
            return None
        current = now()
        remote = fmt.format_time_in_zone(current, target.iana)
        return TimezoneResult(
            from_time=fmt.format_time(current.astimezone()),
            from_zone="local",
            from_label=fmt.local_zone_label(),
            to_time=remote,
            to_zone=target.names[0],
            to_label=target.label,
            display=f"Now in {target.label}: {remote}",
            is_now=True,
        )

    match = FULL_PATTERN.match(trimmed)
    if match:
        source = find_timezone(match.group(2))
        target = find_timezone(match.group(3))
        parsed = parse_time(match.group(1))
        if source is None or target is None or parsed is None:
            return None
        from_time = format_clock(*parsed)
        to_time, shift = _convert(*parsed, source.iana, target.iana, now(), fmt)
        return TimezoneResult(
            from_time=from_time,
            from_zone=source.names[0],
            from_label=source.label,
            to_time=to_time,
            to_zone=target.names[0],
            to_label=target.label,
            display=f"{from_time} {source.label} = {to_time} {target.label}",
            day_shift=shift,
        )

    match = PARTIAL_PATTERN.match(trimmed)
    if match:
        source = find_timezone(match.group(2))
        parsed = parse_time(match.group(1))
        if source is None or parsed is None:
            return None
        from_time = format_clock(*parsed)
        return TimezoneResult(
            from_time=from_time,
            from_zone=source.names[0],
            from_label=source.label,
            to_time="...",
            to_zone="",
            to_label="...",
            display=f"{from_time} {source.label} = ...",
            is_partial=True,
        )
    return None


def _region(iana: str) -> str:
    if iana == "UTC":
        return "Global"
    return _REGIONS.get(iana.split("/", 1)[0], "Other")


def get_timezone_list() -> list[dict[str, str]]:
    """One entry per distinct label, in table order."""
    seen: set[str] = set()
    options = []
    for zone in TIMEZONES:
        if zone.label in seen:
            continue
        seen.add(zone.label)
        options.append({"label": zone.label, "iana": zone.iana, "region": _region(zone.iana)})
    return options


def convert_timezone(
    hours: int,
    minutes: int,
    from_iana: str,
    to_iana: str,
    formatter: Optional[Formatter] = None,
    now: Now = _utc_now,
) -> Optional[TimezoneResult]:
    """Convert a wall time between two IANA zones, labelling them from the table when known."""
    fmt = formatter or _DEFAULT_FORMATTER
    try:
        to_time, shift = _convert(hours, minutes, from_iana, to_iana, now(), fmt)
    except (KeyError, ValueError):
        return None
    source = next((zone for zone in TIMEZONES if zone.iana == from_iana), None)
    target = next((zone for zone in TIMEZONES if zone.iana == to_iana), None)
    from_label = source.label if source else from_iana.rsplit("/", 1)[-1]
    to_label = target.label if target else to_iana.rsplit("/", 1)[-1]
    from_time = format_clock(hours, minutes)
    return TimezoneResult(
        from_time=from_time,
        from_zone=from_iana,
        from_label=from_label,
        to_time=to_time,
        to_zone=to_iana,
        to_label=to_label,
        display=f"{from_time} {from_label} = {to_time} {to_label}",
        day_shift=shift,
    )


__all__ = [
    "POPULAR_TIMEZONES",
    "TIMEZONES",
    "ZoneDef",
    "convert_timezone",
    "detect_timezone",
    "find_timezone",
    "find_timezone_by_label",
    "format_clock",
    "get_timezone_list",
    "parse_time",
]
