"""Small parsing and formatting helpers shared by the detectors."""

from __future__ import annotations

import re
from typing import Optional

from contour_engine.services.formatting import group_number

_LEADING_FLOAT = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_number(text: str) -> Optional[float]:
    """Parse the leading number of ``text`` after removing thousands separators.

    Trailing garbage is ignored, so ``"1.2.3"`` reads as ``1.2``.
    """
    match = _LEADING_FLOAT.match(text.replace(",", ""))
    if not match:
        return None
    return float(match.group(0))


def format_measure(value: float) -> str:
    """Grouped value with up to four decimals and float noise removed."""
    if float(value).is_integer():
        return f"{int(value):,}"
    rounded = round(value, 6)
    if rounded.is_integer():
        return f"{int(rounded):,}"
    return group_number(rounded, 4)


__all__ = ["format_measure", "parse_number"]
