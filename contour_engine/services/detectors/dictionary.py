"""Dictionary lookup detection."""

from __future__ import annotations

import re
from typing import Optional

from contour_engine.core.models import DictionaryResult

_WORD = r"(\w[\w\s-]{0,30}?)"

WORD_MEANING_PATTERN = re.compile(rf"^{_WORD}\s+(?:meaning|means|definition)$", re.IGNORECASE | re.ASCII)
MEANING_OF_PATTERN = re.compile(
    rf"^(?:meaning|definition|meanings|definitions)\s+(?:of\s+)?{_WORD}$", re.IGNORECASE | re.ASCII
)
DEFINE_PATTERN = re.compile(rf"^define\s+{_WORD}$", re.IGNORECASE | re.ASCII)
QUESTION_PATTERN = re.compile(r"^(\w{2,30})\?$", re.IGNORECASE | re.ASCII)

# Inputs owned by other modules.
BLOCKLIST = re.compile(
    r"^(?:\d|#|rgb|hsl|translate|convert|random|roll|flip|uuid|password|timer|count|wc\s)",
    re.IGNORECASE,
)

STOP_WORDS = frozenset(
    "the a an is are was were be been am do does did it to in on at by for of if or and but "
    "not no so up my me we he she".split()
)

MAX_DEFINITIONS = 3
MAX_RELATED = 5

_PATTERNS = (WORD_MEANING_PATTERN, MEANING_OF_PATTERN, DEFINE_PATTERN, QUESTION_PATTERN)


def detect_dictionary(text: str) -> Optional[DictionaryResult]:
    trimmed = text.strip()
    if len(trimmed) < 2 or BLOCKLIST.match(trimmed):
        return None

    word = None
    for pattern in _PATTERNS:
        match = pattern.match(trimmed)
        if match:
            word = match.group(1).strip()
            break
    if not word:
        return None

    word = word.lower()
    if not 2 <= len(word) <= 40 or word in STOP_WORDS:
        return None
    return DictionaryResult(word=word, is_loading=True)


def lookup_word(word: str) -> DictionaryResult:
    """Loading placeholder for an explicit word."""
    return DictionaryResult(word=word.strip().lower(), is_loading=True)


__all__ = ["MAX_DEFINITIONS", "MAX_RELATED", "STOP_WORDS", "detect_dictionary", "lookup_word"]
