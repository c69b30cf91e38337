"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults; tests never write to the real data dir.
"""
from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Mapping, Optional

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="contour-tests-"))
os.environ.setdefault("CONTOUR_DATA_DIR", str(_TMP_ROOT / "data"))
os.environ.setdefault("CONTOUR_LOG_DIR", str(_TMP_ROOT / "logs"))
os.environ.setdefault("CONTOUR_LOG_LEVEL", "warning")

# pylint: disable=wrong-import-position
from contour_engine.adapters.kv_store import MemoryKeyValueStore  # noqa: E402
from contour_engine.core.exceptions import ProviderError, ProviderNotFoundError  # noqa: E402
from contour_engine.core.models import (  # noqa: E402
    DictionaryDefinition,
    DictionaryEntry,
    DictionaryMeaning,
    TranslationPayload,
)

# pylint: disable=missing-function-docstring,missing-class-docstring


class FakeRates:
    def __init__(self, rates: Optional[Mapping[str, float]] = None, error: Optional[str] = None) -> None:
        self.rates = dict(rates or {"USD": 1.0, "EUR": 0.5, "GBP": 0.8, "JPY": 150.0})
        self.error = error
        self.calls: list[str] = []

    async def fetch_rates(self, base: str) -> Mapping[str, float]:
        self.calls.append(base)
        if self.error:
            raise ProviderError(self.error)
        return self.rates


class FakeTranslator:
    def __init__(self, detected: Optional[str] = None, error: Optional[str] = None) -> None:
        self.detected = detected
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    async def translate(self, text: str, source: str, target: str) -> TranslationPayload:
        self.calls.append((text, source, target))
        if self.error:
            raise ProviderError(self.error)
        return TranslationPayload(translated_text=f"{text} [{target}]", detected_lang=self.detected)


class FakeDictionary:
    def __init__(self, known: Optional[set[str]] = None) -> None:
        self.known = known if known is not None else {"serendipity"}
        self.calls: list[str] = []

    async def lookup(self, word: str) -> DictionaryEntry:
        self.calls.append(word)
        if word not in self.known:
            raise ProviderNotFoundError(f'No definition found for "{word}"')
        definitions = tuple(DictionaryDefinition(f"sense {i}") for i in range(5))
        return DictionaryEntry(
            word=word,
            phonetic="/ˌsɛɹ.ənˈdɪp.ɪ.ti/",
            meanings=(
                DictionaryMeaning(
                    part_of_speech="noun",
                    definitions=definitions,
                    synonyms=tuple(f"syn{i}" for i in range(8)),
                ),
            ),
        )


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def fake_rates() -> FakeRates:
    return FakeRates()


@pytest.fixture
def fake_translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def fake_dictionary() -> FakeDictionary:
    return FakeDictionary()


@pytest.fixture
def fakes() -> SimpleNamespace:
    """Provider fake classes for tests that need non-default construction."""
    return SimpleNamespace(Rates=FakeRates, Translator=FakeTranslator, Dictionary=FakeDictionary)
