"""Regular expression testing against a subject string."""

from __future__ import annotations

import re
from dataclasses import dataclass

from contour_engine.core.models import RegexMatch, RegexResult

_FLAG_BITS = {"g": 0, "i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}

REGEX_FLAGS = (
    ("g", "Global", "Find all matches"),
    ("i", "Case-insensitive", "Ignore case"),
    ("m", "Multiline", "^ and $ match line boundaries"),
    ("s", "Dotall", ". matches newlines"),
)


@dataclass(slots=True, frozen=True)
class RegexPreset:
    name: str
    pattern: str
    test: str


REGEX_PRESETS = (
    RegexPreset("Email", r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", "user@example.com hello@test.org"),
    RegexPreset("URL", r"https?://[^\s]+", "Visit https://example.com or http://test.org today"),
    RegexPreset("Phone", r"\+?\d[\d\s-]{7,}\d", "Call +1 555-123-4567 or 555 987 6543"),
    RegexPreset("IP Address", r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}", "Server at 192.168.1.1 and 10.0.0.1"),
)


def compile_flags(flags: str) -> int:
    bits = 0
    for flag in flags:
        if flag not in _FLAG_BITS:
            raise ValueError(f"Invalid flag '{flag}'")
        bits |= _FLAG_BITS[flag]
    return bits


def test_regex(pattern: str, subject: str, flags: str = "g") -> RegexResult:
    """All matches of ``pattern`` in ``subject``; an empty subject is a partial result."""
    if not pattern:
        return RegexResult(pattern=pattern, flags=flags, test_string=subject, is_partial=True)

    try:
        compiled = re.compile(pattern, compile_flags(flags))
    except (re.error, ValueError) as exc:
        return RegexResult(pattern=pattern, flags=flags, test_string=subject, is_valid=False, error=str(exc))

    matches: tuple[RegexMatch, ...] = ()
    if subject:
        matches = tuple(
            RegexMatch(
                match=found.group(0),
                index=found.start(),
                length=len(found.group(0)),
                groups=dict(found.groupdict()) if compiled.groupindex else None,
            )
            for found in compiled.finditer(subject)
        )

    return RegexResult(
        pattern=pattern,
        flags=flags,
        test_string=subject,
        matches=matches,
        is_partial=not subject,
    )


__all__ = ["REGEX_FLAGS", "REGEX_PRESETS", "RegexPreset", "compile_flags", "test_regex"]
