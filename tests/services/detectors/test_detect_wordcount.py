"""Tests for text statistics."""

from contour_engine.services.detectors.wordcount import (
    analyze_text,
    count_paragraphs,
    count_sentences,
    detect_word_count,
    format_minutes,
    stat_items,
)


def test_prefixes_trigger_analysis():
    """Explicit prefixes trigger word counting on the rest of the input."""
    for text in ("count words in Hello there world", "wc Hello there world", "word count Hello there world"):
        result = detect_word_count(text)
        assert result is not None
        assert result.words == 3
        assert result.text == "Hello there world"


def test_plain_text_is_ignored():
    """Text without a prefix is not a word-count request."""
    assert detect_word_count("Hello there world") is None
    assert detect_word_count("wc    ") is None


def test_statistics():
    """Characters, sentences, paragraphs and lines are counted."""
    text = "One two. Three four!\n\nFive six?\nSeven"
    result = analyze_text(text)
    assert result.words == 7
    assert result.characters == len(text)
    assert result.characters_no_spaces == len(text.replace(" ", "").replace("\n", ""))
    assert result.sentences == 3
    assert result.paragraphs == 2
    assert result.lines == 3
    assert result.reading_time == "< 1 min"


def test_sentence_and_paragraph_minimums():
    """Non-empty text always has at least one sentence and paragraph."""
    assert count_sentences("no punctuation here") == 1
    assert count_sentences("") == 0
    assert count_sentences("version 1.5 is out") == 1
    assert count_paragraphs("single") == 1


def test_format_minutes():
    """Reading times round to minutes and hours."""
    assert format_minutes(0.4) == "< 1 min"
    assert format_minutes(2.5) == "3 min"
    assert format_minutes(60) == "1h"
    assert format_minutes(95) == "1h 35m"


def test_stat_items_order():
    """Stats are listed in display order with grouping."""
    labels = [label for label, _ in stat_items(analyze_text("a " * 1500))]
    assert labels[0] == "Words" and labels[-1] == "Speaking"
    assert dict(stat_items(analyze_text("a " * 1500)))["Words"] == "1,500"
