"""Text statistics: words, characters, sentences, paragraphs and reading time."""

from __future__ import annotations

import math
import re
from typing import Optional

from contour_engine.core.models import WordCountResult

READING_WPM = 238
SPEAKING_WPM = 150

PREFIX_PATTERN = re.compile(
    r"^(?:(?:count\s+(?:words|chars?|characters?)\s+(?:in\s+)?)|(?:word\s*count\s+)|(?:wc\s+))(.+)$",
    re.IGNORECASE | re.DOTALL,
)
_SENTENCE_END = re.compile(r"[.!?]+(?:\s|\Z)")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def count_words(text: str) -> int:
    return len(text.split())


def count_sentences(text: str) -> int:
    if not text.strip():
        return 0
    return len(_SENTENCE_END.findall(text)) or 1


def count_paragraphs(text: str) -> int:
    if not text.strip():
        return 0
    return len([p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]) or 1


def count_lines(text: str) -> int:
    if not text.strip():
        return 0
    return len([line for line in text.split("\n") if line.strip()])


def format_minutes(minutes: float) -> str:
    if minutes < 1:
        return "< 1 min"
    if minutes < 60:
        return f"{math.floor(minutes + 0.5)} min"
    hours = math.floor(minutes / 60)
    rest = math.floor(minutes % 60 + 0.5)
    return f"{hours}h {rest}m" if rest > 0 else f"{hours}h"


def analyze_text(text: str) -> WordCountResult:
    """Statistics for any text; used directly in focused mode."""
    words = count_words(text)
    return WordCountResult(
        text=text,
        characters=len(text),
        characters_no_spaces=len(re.sub(r"\s", "", text)),
        words=words,
        sentences=count_sentences(text),
        paragraphs=count_paragraphs(text),
        lines=count_lines(text),
        reading_time=format_minutes(words / READING_WPM),
        speaking_time=format_minutes(words / SPEAKING_WPM),
    )


def detect_word_count(text: str) -> Optional[WordCountResult]:
    trimmed = text.strip()
    if not trimmed:
        return None
    match = PREFIX_PATTERN.match(trimmed)
    if not match:
        return None
    body = match.group(1).strip()
    return analyze_text(body) if body else None


def stat_items(result: WordCountResult) -> list[tuple[str, str]]:
    """Label and value pairs in display order."""
    return [
        ("Words", f"{result.words:,}"),
        ("Characters", f"{result.characters:,}"),
        ("No Spaces", f"{result.characters_no_spaces:,}"),
        ("Sentences", f"{result.sentences:,}"),
        ("Paragraphs", f"{result.paragraphs:,}"),
        ("Lines", f"{result.lines:,}"),
        ("Reading", result.reading_time),
        ("Speaking", result.speaking_time),
    ]


__all__ = [
    "analyze_text",
    "count_lines",
    "count_paragraphs",
    "count_sentences",
    "count_words",
    "detect_word_count",
    "format_minutes",
    "stat_items",
]
