"""Async completion of network-backed results.

Currency, translation and dictionary detectors return loading placeholders;
the resolvers here consult the cache first, then the provider, and convert
every :class:`ProviderError` into inline ``error`` text. Nothing raises out of
a resolver.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from contour_engine.core.exceptions import ProviderError
from contour_engine.core.logging import get_logger, truncate_for_log
from contour_engine.core.models import (
    CurrencyResult,
    DictionaryEntry,
    DictionaryMeaning,
    DictionaryResult,
    TranslationPayload,
    TranslationResult,
)
from contour_engine.core.ports import (
    DictionaryProvider,
    ExchangeRateProvider,
    Formatter,
    TranslationProvider,
)
from contour_engine.services.cache_manager import (
    CURRENCY_CACHE,
    DICTIONARY_CACHE,
    TRANSLATION_CACHE,
    CacheManager,
)
from contour_engine.services.detectors.currency import CURRENCY_SYMBOLS
from contour_engine.services.detectors.dictionary import MAX_DEFINITIONS, MAX_RELATED
from contour_engine.services.detectors.translator import LANGUAGES
from contour_engine.services.formatting import DefaultFormatter

logger = get_logger(__name__)

RATES_BASE = "USD"

UNABLE_TO_FETCH_RATES = "Unable to fetch rates"
CURRENCY_NOT_SUPPORTED = "Currency not supported"

_RATES = TypeAdapter(dict[str, float])
_TRANSLATION = TypeAdapter(TranslationPayload)
_DICTIONARY = TypeAdapter(DictionaryEntry)

_LANGUAGE_BY_CODE = {lang.code: lang for lang in LANGUAGES}


def translation_cache_key(text: str, source: str, target: str) -> str:
    return f"{source}:{target}:{text.strip().lower()}"


def _trim_meanings(meanings: tuple[DictionaryMeaning, ...]) -> tuple[DictionaryMeaning, ...]:
    return tuple(
        dataclasses.replace(
            meaning,
            definitions=meaning.definitions[:MAX_DEFINITIONS],
            synonyms=meaning.synonyms[:MAX_RELATED],
            antonyms=meaning.antonyms[:MAX_RELATED],
        )
        for meaning in meanings
    )


class ResolutionService:
    """Cache-backed resolvers for the three remote intents."""

    def __init__(
        self,
        cache: CacheManager,
        *,
        exchange_rates: Optional[ExchangeRateProvider] = None,
        translation: Optional[TranslationProvider] = None,
        dictionary: Optional[DictionaryProvider] = None,
        formatter: Optional[Formatter] = None,
    ) -> None:
        self._cache = cache
        self._exchange_rates = exchange_rates
        self._translation = translation
        self._dictionary = dictionary
        self._formatter = formatter or DefaultFormatter(currency_symbols=CURRENCY_SYMBOLS)

    # --- currency -----------------------------------------------------------

    async def _rates(self) -> Optional[Mapping[str, float]]:
        if self._exchange_rates is None:
            return None
        provider = self._exchange_rates
        store = self._cache.cache(CURRENCY_CACHE)

        async def fetch() -> dict[str, float]:
            return dict(await provider.fetch_rates(RATES_BASE))

        try:
            payload, cached = await store.get_or_fetch(RATES_BASE, fetch)
            rates = _RATES.validate_python(payload)
        except ProviderError as exc:
            logger.warning("[resolve] currency rates unavailable: %s", exc)
            return None
        except ValidationError:
            logger.warning("[resolve] discarding malformed cached rates")
            store.discard(RATES_BASE)
            return None
        logger.info("[resolve] currency rates loaded count=%d cached=%s", len(rates), cached)
        return rates

    async def resolve_currency(self, result: CurrencyResult) -> CurrencyResult:
        if result.is_partial or not result.to_currency:
            return result

        fmt = self._formatter
        rates = await self._rates()
        if rates is None:
            return dataclasses.replace(
                result,
                is_loading=False,
                error=UNABLE_TO_FETCH_RATES,
                display=f"{fmt.format_currency(result.from_value, result.from_currency)} = (offline)",
            )

        from_rate = rates.get(result.from_currency)
        to_rate = rates.get(result.to_currency)
        if not from_rate or not to_rate:
            return dataclasses.replace(result, is_loading=False, error=CURRENCY_NOT_SUPPORTED)

        converted = result.from_value / from_rate * to_rate
        return dataclasses.replace(
            result,
            to_value=converted,
            rate=to_rate / from_rate,
            is_loading=False,
            display=(
                f"{fmt.format_currency(result.from_value, result.from_currency)} = "
                f"{fmt.format_currency(converted, result.to_currency)}"
            ),
        )

    # --- translation --------------------------------------------------------

    async def resolve_translation(self, result: TranslationResult) -> TranslationResult:
        if result.is_partial:
            return result
        if self._translation is None:
            return dataclasses.replace(result, is_loading=False, error="Translation service unavailable")

        provider = self._translation
        store = self._cache.cache(TRANSLATION_CACHE)
        source = "en" if result.source_lang_code == "auto" else result.source_lang_code
        key = translation_cache_key(result.source_text, result.source_lang_code, result.target_lang_code)

        async def fetch() -> dict[str, Any]:
            payload = await provider.translate(result.source_text, source, result.target_lang_code)
            return _TRANSLATION.dump_python(payload, mode="json")

        try:
            raw, cached = await store.get_or_fetch(key, fetch)
            payload = _TRANSLATION.validate_python(raw)
        except ProviderError as exc:
            logger.warning(
                "[resolve] translation failed text='%s': %s", truncate_for_log(result.source_text), exc
            )
            return dataclasses.replace(result, is_loading=False, error=exc.message)
        except ValidationError:
            logger.warning("[resolve] discarding malformed cached translation key=%s", truncate_for_log(key))
            store.discard(key)
            return dataclasses.replace(result, is_loading=False, error="Translation failed")

        logger.info("[resolve] translation target=%s cached=%s", result.target_lang_code, cached)
        resolved = dataclasses.replace(result, translated_text=payload.translated_text, is_loading=False)
        detected = _LANGUAGE_BY_CODE.get(payload.detected_lang or "")
        if detected is not None:
            resolved = dataclasses.replace(
                resolved, source_lang=detected.name, source_lang_code=detected.code
            )
        return resolved

    # --- dictionary ---------------------------------------------------------

    async def resolve_dictionary(self, result: DictionaryResult) -> DictionaryResult:
        if self._dictionary is None:
            return dataclasses.replace(result, is_loading=False, error="Dictionary service unavailable")

        provider = self._dictionary
        store = self._cache.cache(DICTIONARY_CACHE)
        key = result.word.lower()

        async def fetch() -> dict[str, Any]:
            entry = await provider.lookup(result.word)
            trimmed = dataclasses.replace(entry, word=result.word, meanings=_trim_meanings(entry.meanings))
            return _DICTIONARY.dump_python(trimmed, mode="json")

        try:
            raw, cached = await store.get_or_fetch(key, fetch)
            entry = _DICTIONARY.validate_python(raw)
        except ProviderError as exc:
            logger.info("[resolve] dictionary miss word=%s: %s", result.word, exc.message)
            return DictionaryResult(word=result.word, error=exc.message)
        except ValidationError:
            logger.warning("[resolve] discarding malformed cached entry word=%s", result.word)
            store.discard(key)
            return dataclasses.replace(result, is_loading=False, error="No definitions found")

        logger.info("[resolve] dictionary word=%s meanings=%d cached=%s", result.word, len(entry.meanings), cached)
        return DictionaryResult(
            word=entry.word,
            meanings=entry.meanings,
            phonetic=entry.phonetic,
            phonetic_audio=entry.phonetic_audio,
        )


__all__ = [
    "CURRENCY_NOT_SUPPORTED",
    "RATES_BASE",
    "ResolutionService",
    "UNABLE_TO_FETCH_RATES",
    "translation_cache_key",
]
