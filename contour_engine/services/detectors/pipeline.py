"""Priority-ordered free-text detection.

Several patterns overlap (``100 f`` could be a temperature or a mass), so the
order is policy: the first detector returning a result wins and no scoring
happens across detectors.
"""

from __future__ import annotations

from datetime import date, datetime
from functools import partial
from typing import Callable, Iterable, Optional, Sequence

from contour_engine.core.intents import IntentId
from contour_engine.core.logging import get_logger, truncate_for_log
from contour_engine.core.models import IntentResult
from contour_engine.core.ports import Formatter
from contour_engine.services import expression, graphing
from contour_engine.services.detectors import (
    base64_codec,
    color,
    currency,
    dates,
    dictionary,
    json_format,
    lorem,
    randomizer,
    timezone,
    translator,
    units,
    url_codec,
    wordcount,
)

logger = get_logger(__name__)

Detector = Callable[[str], Optional[IntentResult]]


class DetectorPipeline:
    """Run ``(intent, detector)`` pairs in order and return the first hit."""

    def __init__(self, detectors: Iterable[tuple[IntentId, Detector]] = ()) -> None:
        self._detectors: list[tuple[IntentId, Detector]] = list(detectors)

    def register(self, intent: IntentId, detector: Detector, *, before: Optional[IntentId] = None) -> None:
        """Append ``detector``, or insert it ahead of the entry for ``before``."""
        entry = (intent, detector)
        if before is None:
            self._detectors.append(entry)
            return
        for index, (existing, _) in enumerate(self._detectors):
            if existing is before:
                self._detectors.insert(index, entry)
                return
        raise KeyError(before)

    def unregister(self, intent: IntentId) -> None:
        self._detectors = [entry for entry in self._detectors if entry[0] is not intent]

    def order(self) -> Sequence[IntentId]:
        return tuple(intent for intent, _ in self._detectors)

    def detect(self, text: str) -> Optional[IntentResult]:
        trimmed = text.strip()
        if not trimmed:
            return None
        for intent, detector in self._detectors:
            result = detector(trimmed)
            if result is not None:
                logger.debug(
                    "[contour] %s matched '%s' (partial=%s)",
                    intent.value,
                    truncate_for_log(trimmed),
                    result.is_partial,
                )
                return result
        return None


def _calculator(text: str) -> Optional[IntentResult]:
    if not expression.is_math_expression(text):
        return None
    return expression.evaluate_math(text)


def default_detectors(
    formatter: Optional[Formatter] = None,
    now: Optional[Callable[[], datetime]] = None,
    today: Optional[Callable[[], date]] = None,
) -> list[tuple[IntentId, Detector]]:
    """The standard order, broadest (calculator) last."""
    timezone_detector = partial(timezone.detect_timezone, formatter=formatter)
    if now is not None:
        timezone_detector = partial(timezone.detect_timezone, formatter=formatter, now=now)
    return [
        (IntentId.COLOR, color.detect_color),
        (IntentId.UNITS, units.detect_units),
        (IntentId.CURRENCY, partial(currency.detect_currency, formatter=formatter)),
        (IntentId.TIMEZONE, timezone_detector),
        (IntentId.DATE, partial(dates.detect_date, formatter=formatter, today=today)),
        (IntentId.RANDOM, randomizer.detect_random),
        (IntentId.TRANSLATOR, translator.detect_translation),
        (IntentId.DICTIONARY, dictionary.detect_dictionary),
        (IntentId.WORDCOUNT, wordcount.detect_word_count),
        (IntentId.LOREM, lorem.detect_lorem),
        (IntentId.JSON_FORMAT, json_format.detect_json),
        (IntentId.BASE64, base64_codec.detect_base64),
        (IntentId.URL_ENCODE, url_codec.detect_url_encoded),
        (IntentId.GRAPH, graphing.detect_graph),
        (IntentId.CALCULATOR, _calculator),
    ]


def build_default_pipeline(
    formatter: Optional[Formatter] = None,
    now: Optional[Callable[[], datetime]] = None,
    today: Optional[Callable[[], date]] = None,
) -> DetectorPipeline:
    return DetectorPipeline(default_detectors(formatter, now, today))


__all__ = ["Detector", "DetectorPipeline", "build_default_pipeline", "default_detectors"]
