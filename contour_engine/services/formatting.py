"""Default locale formatting (en-US conventions)."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Mapping, Optional
from zoneinfo import ZoneInfo

_WIDE_PRECISION_CODES = frozenset({"BTC"})


def _clock_12h(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    period = "PM" if moment.hour >= 12 else "AM"
    return f"{hour}:{moment.minute:02d} {period}"


def group_number(value: float, max_decimals: int) -> str:
    """Thousands-grouped ``value`` with at most ``max_decimals`` decimals."""
    text = f"{value:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


class DefaultFormatter:
    """Formatter producing the same strings a US-English browser would."""

    def __init__(self, currency_symbols: Optional[Mapping[str, str]] = None) -> None:
        self._symbols = dict(currency_symbols or {})

    def format_time_in_zone(self, moment: datetime, zone: str) -> str:
        local = moment.astimezone(ZoneInfo(zone))
        return f"{local.strftime('%a')} {_clock_12h(local)}"

    def format_time(self, moment: datetime) -> str:
        return _clock_12h(moment)

    def format_currency(self, value: float, code: str) -> str:
        code = code.upper()
        symbol = self._symbols.get(code)
        if symbol is None:
            return f"{value:.2f} {code}"
        if code in _WIDE_PRECISION_CODES:
            amount = f"{abs(value):,.8f}".rstrip("0")
            whole, _, fraction = amount.partition(".")
            amount = f"{whole}.{fraction.ljust(2, '0')}"
        else:
            amount = f"{abs(value):,.2f}"
        sign = "-" if value < 0 and float(amount.replace(",", "")) != 0 else ""
        separator = " " if symbol[-1:].isalpha() else ""
        return f"{sign}{symbol}{separator}{amount}"

    def pluralize(self, count: int, word: str) -> str:
        magnitude = abs(count)
        return f"{magnitude:,} {word}{'' if magnitude == 1 else 's'}"

    def local_zone_label(self) -> str:
        name = time.tzname[0] if time.tzname else ""
        try:
            key = getattr(datetime.now().astimezone().tzinfo, "key", None)
        except (OSError, ValueError):
            key = None
        if key:
            return str(key).rsplit("/", 1)[-1]
        return name or "Local"


__all__ = ["DefaultFormatter", "group_number"]
