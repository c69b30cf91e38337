"""Handler ids and per-intent detectors used in focused mode.

Focused mode bypasses the pipeline: the typed text goes only to the pinned
intent's own detector, which is usually more permissive (word count analyzes
any text, base64 and URL encode whatever is typed).
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Mapping, Optional

from contour_engine.core.exceptions import UnknownHandlerError
from contour_engine.core.intents import IntentId
from contour_engine.core.models import IntentResult
from contour_engine.core.ports import Formatter
from contour_engine.services import expression, graphing
from contour_engine.services.detectors import (
    base64_codec,
    color,
    currency,
    dates,
    dictionary,
    hashing,
    json_format,
    lorem,
    randomizer,
    regex_tester,
    timer,
    timezone,
    translator,
    units,
    url_codec,
    wordcount,
)

HANDLER_TO_MODULE: Mapping[str, IntentId] = {
    "calculator": IntentId.CALCULATOR,
    "unit-converter": IntentId.UNITS,
    "currency-converter": IntentId.CURRENCY,
    "timezone": IntentId.TIMEZONE,
    "color-converter": IntentId.COLOR,
    "date-calculator": IntentId.DATE,
    "timer": IntentId.TIMER,
    "random": IntentId.RANDOM,
    "word-count": IntentId.WORDCOUNT,
    "translator": IntentId.TRANSLATOR,
    "dictionary": IntentId.DICTIONARY,
    "lorem": IntentId.LOREM,
    "json-format": IntentId.JSON_FORMAT,
    "base64": IntentId.BASE64,
    "url-encode": IntentId.URL_ENCODE,
    "hash": IntentId.HASH,
    "regex": IntentId.REGEX,
    "graph-plotter": IntentId.GRAPH,
    "help": IntentId.HELP,
}

FocusedDetector = Callable[[str], Optional[IntentResult]]


def module_for_handler(handler: str) -> IntentId:
    try:
        return HANDLER_TO_MODULE[handler]
    except KeyError as exc:
        raise UnknownHandlerError(f"No module registered for handler '{handler}'") from exc


def _never(_: str) -> Optional[IntentResult]:
    return None


def focused_detectors(formatter: Optional[Formatter] = None) -> dict[IntentId, FocusedDetector]:
    return {
        IntentId.CALCULATOR: expression.evaluate_math,
        IntentId.UNITS: units.detect_units,
        IntentId.CURRENCY: partial(currency.detect_currency, formatter=formatter),
        IntentId.TIMEZONE: partial(timezone.detect_timezone, formatter=formatter),
        IntentId.COLOR: color.detect_color,
        IntentId.DATE: partial(dates.detect_date, formatter=formatter),
        IntentId.TIMER: timer.create_timer_state,
        IntentId.RANDOM: randomizer.detect_random,
        IntentId.WORDCOUNT: wordcount.analyze_text,
        IntentId.TRANSLATOR: translator.detect_translation,
        IntentId.DICTIONARY: dictionary.detect_dictionary,
        IntentId.LOREM: lorem.detect_lorem,
        IntentId.JSON_FORMAT: json_format.format_json,
        IntentId.BASE64: base64_codec.encode_base64,
        IntentId.URL_ENCODE: url_codec.encode_url,
        IntentId.HASH: hashing.create_hash_result,
        IntentId.REGEX: partial(regex_tester.test_regex, subject="", flags=""),
        IntentId.GRAPH: graphing.detect_graph,
        IntentId.HELP: _never,
    }


class FocusedRegistry:
    """Lookup of the detector used while a module is pinned."""

    def __init__(self, detectors: Mapping[IntentId, FocusedDetector]) -> None:
        self._detectors = dict(detectors)

    def register(self, intent: IntentId, detector: FocusedDetector) -> None:
        self._detectors[intent] = detector

    def detect(self, intent: IntentId, text: str) -> Optional[IntentResult]:
        """Result for ``text`` in the pinned module; empty input yields ``None``."""
        trimmed = text.strip()
        if not trimmed:
            return None
        detector = self._detectors.get(intent)
        if detector is None:
            return None
        return detector(trimmed)

    def handlers(self) -> Mapping[IntentId, FocusedDetector]:
        return dict(self._detectors)


def build_default_registry(formatter: Optional[Formatter] = None) -> FocusedRegistry:
    return FocusedRegistry(focused_detectors(formatter))


__all__ = [
    "FocusedDetector",
    "FocusedRegistry",
    "HANDLER_TO_MODULE",
    "build_default_registry",
    "focused_detectors",
    "module_for_handler",
]
