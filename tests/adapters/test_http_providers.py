"""Tests for the httpx providers using ``httpx.MockTransport``."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from contour_engine.adapters.http_providers import (
    NETWORK_ERROR,
    ExchangeRateApiProvider,
    FreeDictionaryProvider,
    MyMemoryTranslationProvider,
)
from contour_engine.core.exceptions import ProviderError, ProviderNotFoundError


def _transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


def test_rates_payload_parsed() -> None:
    """The base currency is upper-cased into the path and rates returned."""
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json={"base": "USD", "rates": {"USD": 1, "EUR": 0.92}})

    provider = ExchangeRateApiProvider("https://rates.test/v4/latest/", transport=_transport(handler))
    rates = asyncio.run(provider.fetch_rates("usd"))
    assert rates == {"USD": 1.0, "EUR": 0.92}
    assert seen == ["/v4/latest/USD"]


def test_rates_http_error_and_bad_body() -> None:
    """Error statuses and malformed bodies become provider errors."""
    failing = ExchangeRateApiProvider(
        "https://rates.test", transport=_transport(lambda request: httpx.Response(503))
    )
    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(failing.fetch_rates("USD"))
    assert excinfo.value.message == "Unable to fetch rates"

    garbled = ExchangeRateApiProvider(
        "https://rates.test", transport=_transport(lambda request: httpx.Response(200, text="<html>"))
    )
    with pytest.raises(ProviderError):
        asyncio.run(garbled.fetch_rates("USD"))


def test_timeout_becomes_network_error() -> None:
    """Transport timeouts surface the network error message."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    provider = ExchangeRateApiProvider("https://rates.test", transport=_transport(handler))
    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(provider.fetch_rates("USD"))
    assert excinfo.value.message == NETWORK_ERROR


def test_mymemory_translation() -> None:
    """The langpair parameter is sent and the detected language kept."""
    params: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        params.update(request.url.params)
        return httpx.Response(
            200,
            json={
                "responseStatus": 200,
                "responseData": {"translatedText": "Hola", "detectedLanguage": "en"},
            },
        )

    provider = MyMemoryTranslationProvider("https://mt.test/get", transport=_transport(handler))
    payload = asyncio.run(provider.translate("Hello", "en", "es"))
    assert payload.translated_text == "Hola"
    assert payload.detected_lang == "en"
    assert params == {"q": "Hello", "langpair": "en|es"}


def test_mymemory_failure_status_uses_message() -> None:
    """A non-200 response status reports the service's own text."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"responseStatus": "403", "responseData": {"translatedText": "INVALID LANGUAGE PAIR"}},
        )

    provider = MyMemoryTranslationProvider("https://mt.test/get", transport=_transport(handler))
    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(provider.translate("Hello", "en", "xx"))
    assert excinfo.value.message == "INVALID LANGUAGE PAIR"


def test_dictionary_entry_mapping() -> None:
    """Phonetic text and audio fall back to the phonetics list."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url).endswith("/ice%20cream")
        return httpx.Response(
            200,
            json=[
                {
                    "word": "ice cream",
                    "phonetics": [{"text": "/aɪs kɹiːm/"}, {"audio": "https://audio.test/ice.mp3"}],
                    "meanings": [
                        {
                            "partOfSpeech": "noun",
                            "definitions": [{"definition": "A frozen dessert.", "example": "Two scoops."}],
                            "synonyms": ["gelato"],
                        }
                    ],
                }
            ],
        )

    provider = FreeDictionaryProvider("https://dict.test/api/v2/entries/en", transport=_transport(handler))
    entry = asyncio.run(provider.lookup("ice cream"))
    assert entry.word == "ice cream"
    assert entry.phonetic == "/aɪs kɹiːm/"
    assert entry.phonetic_audio == "https://audio.test/ice.mp3"
    meaning = entry.meanings[0]
    assert meaning.part_of_speech == "noun"
    assert meaning.definitions[0].example == "Two scoops."
    assert meaning.synonyms == ("gelato",)


def test_dictionary_not_found_and_server_error() -> None:
    """404 is a not-found error; other failures are generic provider errors."""
    missing = FreeDictionaryProvider(
        "https://dict.test", transport=_transport(lambda request: httpx.Response(404, json={"title": "No"}))
    )
    with pytest.raises(ProviderNotFoundError) as excinfo:
        asyncio.run(missing.lookup("qwzx"))
    assert excinfo.value.message == 'No definition found for "qwzx"'

    broken = FreeDictionaryProvider(
        "https://dict.test", transport=_transport(lambda request: httpx.Response(500))
    )
    with pytest.raises(ProviderError) as server_error:
        asyncio.run(broken.lookup("word"))
    assert not isinstance(server_error.value, ProviderNotFoundError)
    assert server_error.value.message == "Dictionary service unavailable"
