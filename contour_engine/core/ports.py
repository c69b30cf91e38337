"""Protocol definitions for the engine's external collaborators."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from datetime import datetime
from typing import Callable, Mapping, Optional, Protocol

from contour_engine.core.models import DictionaryEntry, TranslationPayload


class ExchangeRateProvider(Protocol):
    """Port returning exchange rates relative to a base currency."""

    async def fetch_rates(self, base: str) -> Mapping[str, float]:
        """Return ``{code: units of code per one base}``.

        Raises:
            ProviderError: when the rates cannot be fetched.
        """
        ...


class TranslationProvider(Protocol):
    """Port translating short texts between languages."""

    async def translate(self, text: str, source: str, target: str) -> TranslationPayload:
        """Translate ``text`` from ``source`` (a code or ``"auto"``) into ``target``."""
        ...


class DictionaryProvider(Protocol):
    """Port looking up English word definitions."""

    async def lookup(self, word: str) -> DictionaryEntry:
        """Return the entry for ``word``.

        Raises:
            ProviderNotFoundError: when the word is unknown.
            ProviderError: for any other failure.
        """
        ...


class ClipboardSink(Protocol):
    """Port receiving text the user chose to copy."""

    def copy(self, text: str) -> None:
        """Place ``text`` on the clipboard."""
        ...


class PersistentKV(Protocol):
    """Port for small string blobs that survive restarts."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None``."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...


class NotificationSink(Protocol):
    """Port for best-effort user alerts."""

    def notify(self, title: str, body: str) -> None:
        """Show an alert; failures must not propagate."""
        ...


class ActionSink(Protocol):
    """Port receiving command actions handled outside the engine."""

    def navigate(self, path: str) -> None:
        """Route the host application to ``path``."""
        ...

    def switch_mode(self, mode: str) -> None:
        """Put the host application into ``mode``."""
        ...

    def open_external(self, url: str) -> None:
        """Open ``url`` outside the application."""
        ...


class IntervalHandle(Protocol):
    """Opaque handle returned by a scheduler."""

    def cancel(self) -> None:
        """Stop further invocations."""
        ...


class Scheduler(Protocol):
    """Port equivalent to ``setInterval``/``clearInterval``."""

    def set_interval(self, callback: Callable[[], None], seconds: float) -> IntervalHandle:
        """Invoke ``callback`` every ``seconds`` until the handle is cancelled."""
        ...

    def clear_interval(self, handle: IntervalHandle) -> None:
        """Cancel ``handle``; cancelling twice is allowed."""
        ...


class Formatter(Protocol):
    """Port for locale-sensitive formatting."""

    def format_time_in_zone(self, moment: datetime, zone: str) -> str:
        """Render ``moment`` as a short weekday and 12-hour time in ``zone``."""
        ...

    def format_time(self, moment: datetime) -> str:
        """Render the wall-clock time of ``moment`` in 12-hour form."""
        ...

    def format_currency(self, value: float, code: str) -> str:
        """Render an amount in ``code``."""
        ...

    def pluralize(self, count: int, word: str) -> str:
        """Render ``count`` with ``word`` in singular or plural form."""
        ...

    def local_zone_label(self) -> str:
        """Short label for the host's local zone."""
        ...


__all__ = [
    "ExchangeRateProvider",
    "TranslationProvider",
    "DictionaryProvider",
    "ClipboardSink",
    "PersistentKV",
    "NotificationSink",
    "ActionSink",
    "IntervalHandle",
    "Scheduler",
    "Formatter",
]
