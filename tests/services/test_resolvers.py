"""Tests for cache-backed resolution of currency, translation and dictionary results."""

from __future__ import annotations

import asyncio

from contour_engine.core.config import Settings
from contour_engine.services.cache_manager import CURRENCY_CACHE, DICTIONARY_CACHE, build_cache_manager
from contour_engine.services.detectors.currency import detect_currency
from contour_engine.services.detectors.dictionary import lookup_word
from contour_engine.services.detectors.translator import detect_translation, translate_direct
from contour_engine.services.resolvers import (
    CURRENCY_NOT_SUPPORTED,
    RATES_BASE,
    UNABLE_TO_FETCH_RATES,
    ResolutionService,
)

# pylint: disable=missing-function-docstring,redefined-outer-name


def _service(kv, **providers) -> ResolutionService:
    return ResolutionService(build_cache_manager(kv, Settings(_env_file=None)), **providers)


def test_currency_conversion_uses_rates(kv, fake_rates) -> None:
    """A loading placeholder resolves into a converted amount."""
    placeholder = detect_currency("100 usd to eur")
    assert placeholder is not None and placeholder.is_loading
    resolved = asyncio.run(_service(kv, exchange_rates=fake_rates).resolve_currency(placeholder))
    assert resolved.is_loading is False
    assert resolved.to_value == 50.0
    assert resolved.rate == 0.5
    assert resolved.display == "$100.00 = €50.00"


def test_currency_displays_do_not_redetect(kv, fake_rates) -> None:
    """Neither the loading nor the converted display parses as a new request."""
    service = _service(kv, exchange_rates=fake_rates)
    for text in ("100 usd to eur", "£2,500 to jpy", "1 usd = gbp"):
        placeholder = detect_currency(text)
        assert placeholder is not None and placeholder.is_loading
        resolved = asyncio.run(service.resolve_currency(placeholder))
        assert resolved.to_value is not None
        assert detect_currency(placeholder.display) is None
        assert detect_currency(resolved.display) is None


def test_currency_rates_are_cached(kv, fake_rates) -> None:
    """Rates are fetched once and then served from the currency cache."""
    service = _service(kv, exchange_rates=fake_rates)
    first = detect_currency("10 gbp to usd")
    second = detect_currency("5 eur to jpy")
    assert first is not None and second is not None

    async def run():
        return await service.resolve_currency(first), await service.resolve_currency(second)

    gbp, eur = asyncio.run(run())
    assert fake_rates.calls == [RATES_BASE]
    assert gbp.to_value == 12.5
    assert eur.to_value == 1500.0


def test_currency_offline(kv, fakes) -> None:
    """Provider failure yields the offline display and an error."""
    placeholder = detect_currency("100 usd to eur")
    assert placeholder is not None
    resolved = asyncio.run(
        _service(kv, exchange_rates=fakes.Rates(error="Network error")).resolve_currency(placeholder)
    )
    assert resolved.error == UNABLE_TO_FETCH_RATES
    assert resolved.display == "$100.00 = (offline)"
    assert resolved.to_value is None


def test_currency_not_supported(kv, fakes) -> None:
    """A code missing from the rate table is reported as unsupported."""
    placeholder = detect_currency("100 usd to eur")
    assert placeholder is not None
    resolved = asyncio.run(
        _service(kv, exchange_rates=fakes.Rates(rates={"USD": 1.0})).resolve_currency(placeholder)
    )
    assert resolved.error == CURRENCY_NOT_SUPPORTED


def test_corrupt_cached_rates_are_discarded(kv, fake_rates) -> None:
    """A cached payload that is not a rate table is removed."""
    service = _service(kv, exchange_rates=fake_rates)
    cache = service._cache.cache(CURRENCY_CACHE)  # pylint: disable=protected-access
    cache.set(RATES_BASE, "garbage")
    placeholder = detect_currency("1 usd to eur")
    assert placeholder is not None
    resolved = asyncio.run(service.resolve_currency(placeholder))
    assert resolved.error == UNABLE_TO_FETCH_RATES
    assert RATES_BASE not in cache.keys()


def test_partial_currency_is_untouched(kv, fake_rates) -> None:
    """Partial placeholders are returned as-is."""
    partial = detect_currency("100 usd to")
    assert partial is not None and partial.is_partial
    assert asyncio.run(_service(kv, exchange_rates=fake_rates).resolve_currency(partial)) is partial
    assert fake_rates.calls == []


def test_translation_auto_source_and_detection(kv, fakes) -> None:
    """Auto source is sent as English; a detected language replaces Auto."""
    translator = fakes.Translator(detected="fr")
    placeholder = detect_translation("bonjour in spanish")
    assert placeholder is not None
    resolved = asyncio.run(_service(kv, translation=translator).resolve_translation(placeholder))
    assert translator.calls == [("bonjour", "en", "es")]
    assert resolved.translated_text == "bonjour [es]"
    assert resolved.source_lang == "French"
    assert resolved.source_lang_code == "fr"
    assert resolved.is_loading is False


def test_translation_cached_by_text_and_pair(kv, fake_translator) -> None:
    """The same text and language pair is translated once."""
    service = _service(kv, translation=fake_translator)
    placeholder = translate_direct("Hello", "en", "de")

    async def run():
        await service.resolve_translation(placeholder)
        return await service.resolve_translation(translate_direct("hello ", "en", "de"))

    resolved = asyncio.run(run())
    assert len(fake_translator.calls) == 1
    assert resolved.translated_text == "Hello [de]"


def test_translation_error_is_inline(kv, fakes) -> None:
    """Provider errors become the result's error text."""
    placeholder = translate_direct("hello", "en", "de")
    resolved = asyncio.run(
        _service(kv, translation=fakes.Translator(error="Translation failed")).resolve_translation(placeholder)
    )
    assert resolved.error == "Translation failed"
    assert resolved.translated_text is None


def test_missing_providers_report_unavailable(kv) -> None:
    """Without providers the results carry an unavailable error."""
    service = _service(kv)
    translation = asyncio.run(service.resolve_translation(translate_direct("hi", "en", "fr")))
    dictionary = asyncio.run(service.resolve_dictionary(lookup_word("cat")))
    assert translation.error == "Translation service unavailable"
    assert dictionary.error == "Dictionary service unavailable"


def test_dictionary_lookup_trims_and_caches(kv, fake_dictionary) -> None:
    """Definitions and related words are capped and the entry is cached."""
    service = _service(kv, dictionary=fake_dictionary)

    async def run():
        await service.resolve_dictionary(lookup_word("Serendipity"))
        return await service.resolve_dictionary(lookup_word("serendipity"))

    resolved = asyncio.run(run())
    assert fake_dictionary.calls == ["serendipity"]
    assert resolved.is_loading is False
    assert resolved.phonetic == "/ˌsɛɹ.ənˈdɪp.ɪ.ti/"
    meaning = resolved.meanings[0]
    assert len(meaning.definitions) == 3
    assert len(meaning.synonyms) == 5
    assert "serendipity" in service._cache.cache(DICTIONARY_CACHE).keys()  # pylint: disable=protected-access


def test_dictionary_unknown_word(kv, fake_dictionary) -> None:
    """Unknown words resolve to a not-found error."""
    resolved = asyncio.run(_service(kv, dictionary=fake_dictionary).resolve_dictionary(lookup_word("zzxq")))
    assert resolved.error == 'No definition found for "zzxq"'
    assert resolved.meanings == ()
