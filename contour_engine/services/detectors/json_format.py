"""JSON pretty-printing, minifying and validation."""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from contour_engine.core.models import JsonFormatResult

_LOOKS_LIKE_JSON = re.compile(r"^\s*[\[{]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} in JSON")


def json_depth(value: Any, current: int = 0) -> int:
    if isinstance(value, dict):
        children = value.values()
    elif isinstance(value, list):
        children = value
    else:
        return current
    return max((json_depth(child, current + 1) for child in children), default=current)


def count_keys(value: Any) -> int:
    """Object keys at every nesting level; arrays contribute only their children."""
    if isinstance(value, dict):
        return len(value) + sum(count_keys(child) for child in value.values())
    if isinstance(value, list):
        return sum(count_keys(child) for child in value)
    return 0


def format_json(text: str) -> JsonFormatResult:
    trimmed = text.strip()
    if not trimmed:
        return JsonFormatResult(input=text, formatted="", minified="", is_valid=False, is_partial=True)

    try:
        parsed = json.loads(trimmed, parse_constant=_reject_constant)
    except ValueError as exc:
        return JsonFormatResult(
            input=trimmed,
            formatted=trimmed,
            minified=trimmed,
            is_valid=False,
            error=str(exc),
        )

    return JsonFormatResult(
        input=trimmed,
        formatted=json.dumps(parsed, indent=2, ensure_ascii=False),
        minified=json.dumps(parsed, separators=(",", ":"), ensure_ascii=False),
        is_valid=True,
        key_count=count_keys(parsed),
        depth=json_depth(parsed),
    )


def detect_json(text: str) -> Optional[JsonFormatResult]:
    """Only text opening with a bracket and containing a closing one is considered."""
    trimmed = text.strip()
    if not trimmed or not _LOOKS_LIKE_JSON.match(trimmed):
        return None
    if "}" not in trimmed and "]" not in trimmed:
        return None
    return format_json(trimmed)


__all__ = ["count_keys", "detect_json", "format_json", "json_depth"]
