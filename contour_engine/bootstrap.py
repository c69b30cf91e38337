"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from typing import Optional

from contour_engine.adapters.http_providers import (
    ExchangeRateApiProvider,
    FreeDictionaryProvider,
    MyMemoryTranslationProvider,
)
from contour_engine.adapters.kv_store import TinyDBKeyValueStore
from contour_engine.adapters.sinks import LoggingActionSink, LoggingClipboard, LoggingNotificationSink
from contour_engine.core.config import Settings, settings as default_settings
from contour_engine.core.ports import PersistentKV, Scheduler
from contour_engine.services import ServiceContainer, build_engine
from contour_engine.services.detectors.currency import CURRENCY_SYMBOLS
from contour_engine.services.formatting import DefaultFormatter
from contour_engine.services.orchestrator import ContourEngine
from contour_engine.services.scheduling import AsyncioScheduler


def build_default_service_container(
    app_settings: Optional[Settings] = None,
    scheduler: Optional[Scheduler] = None,
    kv: Optional[PersistentKV] = None,
) -> ServiceContainer:
    """Return the default service container wired to production adapters."""

    cfg = app_settings or default_settings
    timeout = cfg.HTTP_TIMEOUT_SECONDS
    return ServiceContainer(
        kv=kv or TinyDBKeyValueStore(cfg.CONTOUR_DATA_DIR / cfg.CONTOUR_KV_FILENAME),
        scheduler=scheduler or AsyncioScheduler(),
        formatter=DefaultFormatter(currency_symbols=CURRENCY_SYMBOLS),
        exchange_rates=ExchangeRateApiProvider(cfg.EXCHANGE_RATE_API_URL, timeout=timeout),
        translation=MyMemoryTranslationProvider(cfg.TRANSLATION_API_URL, timeout=timeout),
        dictionary=FreeDictionaryProvider(cfg.DICTIONARY_API_URL, timeout=timeout),
        clipboard=LoggingClipboard(),
        notifications=LoggingNotificationSink(),
        actions=LoggingActionSink(),
    )


def build_default_engine(
    app_settings: Optional[Settings] = None,
    scheduler: Optional[Scheduler] = None,
    kv: Optional[PersistentKV] = None,
) -> tuple[ContourEngine, ServiceContainer]:
    """Build the production container and an engine on top of it."""

    services = build_default_service_container(app_settings, scheduler, kv)
    return build_engine(services, app_settings), services


__all__ = ["build_default_engine", "build_default_service_container"]
