"""httpx-backed providers for exchange rates, translation and dictionary lookups.

Every failure surfaces as :class:`ProviderError` carrying the short message
shown inline on the result.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, ValidationError

from contour_engine.core.exceptions import ProviderError, ProviderNotFoundError
from contour_engine.core.logging import get_logger, truncate_for_log
from contour_engine.core.models import (
    DictionaryDefinition,
    DictionaryEntry,
    DictionaryMeaning,
    TranslationPayload,
)

logger = get_logger(__name__)

NETWORK_ERROR = "Network error: check connection"

_HTTP_ERROR_THRESHOLD = 400
_HTTP_NOT_FOUND = 404


class _HttpProvider:
    """Shared client construction; ``transport`` lets tests plug in ``httpx.MockTransport``."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _get(self, url: str, params: Optional[Mapping[str, str]] = None) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.get(url, params=params)
        except httpx.TimeoutException as exc:
            logger.warning("[provider] timeout url=%s", url)
            raise ProviderError(NETWORK_ERROR, detail=f"timeout calling {url}") from exc
        except httpx.HTTPError as exc:
            logger.warning("[provider] request failed url=%s: %s", url, exc)
            raise ProviderError(NETWORK_ERROR, detail=str(exc)) from exc

    @staticmethod
    def _json(response: httpx.Response, message: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("[provider] unparsable body: %s", truncate_for_log(response.text))
            raise ProviderError(message, detail="unparsable response body") from exc


# --- exchange rates ---------------------------------------------------------


class RatesResponse(BaseModel):
    rates: dict[str, float]


class ExchangeRateApiProvider(_HttpProvider):
    """Rates from an exchangerate-api style endpoint: ``GET {base_url}/{BASE}``."""

    async def fetch_rates(self, base: str) -> Mapping[str, float]:
        url = f"{self._base_url}/{base.upper()}"
        response = await self._get(url)
        if response.status_code >= _HTTP_ERROR_THRESHOLD:
            logger.warning("[provider] rates status=%s", response.status_code)
            raise ProviderError("Unable to fetch rates", detail=f"HTTP {response.status_code}")
        try:
            payload = RatesResponse.model_validate(self._json(response, "Unable to fetch rates"))
        except ValidationError as exc:
            raise ProviderError("Unable to fetch rates", detail="malformed rates payload") from exc
        logger.info("[provider] rates base=%s count=%d", base, len(payload.rates))
        return payload.rates


# --- translation ------------------------------------------------------------


class _MyMemoryData(BaseModel):
    translated_text: Optional[str] = Field(default=None, alias="translatedText")
    detected_language: Optional[str] = Field(default=None, alias="detectedLanguage")


class MyMemoryResponse(BaseModel):
    response_status: Union[int, str] = Field(default=0, alias="responseStatus")
    response_data: Optional[_MyMemoryData] = Field(default=None, alias="responseData")


class MyMemoryTranslationProvider(_HttpProvider):
    """MyMemory translation API; ``source`` must be a concrete language code."""

    async def translate(self, text: str, source: str, target: str) -> TranslationPayload:
        response = await self._get(self._base_url, params={"q": text, "langpair": f"{source}|{target}"})
        if response.status_code >= _HTTP_ERROR_THRESHOLD:
            logger.warning("[provider] translation status=%s", response.status_code)
            raise ProviderError("Translation service unavailable", detail=f"HTTP {response.status_code}")
        try:
            payload = MyMemoryResponse.model_validate(self._json(response, "Translation failed"))
        except ValidationError as exc:
            raise ProviderError("Translation failed", detail="malformed translation payload") from exc

        data = payload.response_data
        if str(payload.response_status) == "200" and data is not None and data.translated_text:
            logger.info("[provider] translated %s->%s text='%s'", source, target, truncate_for_log(text))
            return TranslationPayload(translated_text=data.translated_text, detected_lang=data.detected_language)
        message = (data.translated_text if data else None) or "Translation failed"
        raise ProviderError(message, detail=f"status {payload.response_status}")


# --- dictionary -------------------------------------------------------------


class _Definition(BaseModel):
    definition: str = ""
    example: Optional[str] = None


class _Meaning(BaseModel):
    part_of_speech: str = Field(default="", alias="partOfSpeech")
    definitions: list[_Definition] = Field(default_factory=list)
    synonyms: list[str] = Field(default_factory=list)
    antonyms: list[str] = Field(default_factory=list)


class _Phonetic(BaseModel):
    text: Optional[str] = None
    audio: Optional[str] = None


class DictionaryApiEntry(BaseModel):
    word: str = ""
    phonetic: Optional[str] = None
    phonetics: list[_Phonetic] = Field(default_factory=list)
    meanings: list[_Meaning] = Field(default_factory=list)

    def to_entry(self, word: str) -> DictionaryEntry:
        phonetic = self.phonetic or ""
        audio = ""
        for item in self.phonetics:
            if item.text and not phonetic:
                phonetic = item.text
            if item.audio and not audio:
                audio = item.audio
        meanings = tuple(
            DictionaryMeaning(
                part_of_speech=meaning.part_of_speech,
                definitions=tuple(
                    DictionaryDefinition(definition=d.definition, example=d.example)
                    for d in meaning.definitions
                ),
                synonyms=tuple(meaning.synonyms),
                antonyms=tuple(meaning.antonyms),
            )
            for meaning in self.meanings
        )
        return DictionaryEntry(
            word=word,
            meanings=meanings,
            phonetic=phonetic or None,
            phonetic_audio=audio or None,
        )


class FreeDictionaryProvider(_HttpProvider):
    """dictionaryapi.dev lookups: ``GET {base_url}/{word}``."""

    async def lookup(self, word: str) -> DictionaryEntry:
        url = f"{self._base_url}/{quote(word, safe='')}"
        response = await self._get(url)
        if response.status_code == _HTTP_NOT_FOUND:
            logger.info("[provider] dictionary miss word=%s", word)
            raise ProviderNotFoundError(f'No definition found for "{word}"')
        if response.status_code >= _HTTP_ERROR_THRESHOLD:
            logger.warning("[provider] dictionary status=%s", response.status_code)
            raise ProviderError("Dictionary service unavailable", detail=f"HTTP {response.status_code}")

        data = self._json(response, "No definitions found")
        if not isinstance(data, list) or not data:
            raise ProviderError("No definitions found")
        try:
            entry = DictionaryApiEntry.model_validate(data[0])
        except ValidationError as exc:
            raise ProviderError("No definitions found", detail="malformed dictionary payload") from exc
        logger.info("[provider] dictionary word=%s meanings=%d", word, len(entry.meanings))
        return entry.to_entry(word)


__all__ = [
    "DictionaryApiEntry",
    "ExchangeRateApiProvider",
    "FreeDictionaryProvider",
    "MyMemoryTranslationProvider",
    "NETWORK_ERROR",
]
