"""Engine service layer: detectors, resolution, commands and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from contour_engine.core.ports import (
    ActionSink,
    ClipboardSink,
    DictionaryProvider,
    ExchangeRateProvider,
    Formatter,
    NotificationSink,
    PersistentKV,
    Scheduler,
    TranslationProvider,
)

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from contour_engine.core.config import Settings

    from .cache_manager import CacheManager
    from .orchestrator import ContourEngine


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of the collaborators an engine is built from."""

    kv: PersistentKV
    scheduler: Scheduler
    formatter: Optional[Formatter] = None
    exchange_rates: Optional[ExchangeRateProvider] = None
    translation: Optional[TranslationProvider] = None
    dictionary: Optional[DictionaryProvider] = None
    clipboard: Optional[ClipboardSink] = None
    notifications: Optional[NotificationSink] = None
    actions: Optional[ActionSink] = None
    cache: Optional["CacheManager"] = None


def build_engine(services: ServiceContainer, app_settings: Optional["Settings"] = None) -> "ContourEngine":
    """Assemble a :class:`ContourEngine` from ``services``.

    A cache manager is created from the settings (and stored on the
    container) when the container does not already carry one.
    """

    # pylint: disable=import-outside-toplevel
    from contour_engine.core.config import settings as default_settings

    from .cache_manager import build_cache_manager
    from .commands import RecentCommands
    from .detectors.pipeline import build_default_pipeline
    from .detectors.registry import build_default_registry
    from .orchestrator import ContourEngine
    from .resolvers import ResolutionService

    cfg = app_settings or default_settings
    if services.cache is None:
        services.cache = build_cache_manager(services.kv, cfg)

    resolution = ResolutionService(
        services.cache,
        exchange_rates=services.exchange_rates,
        translation=services.translation,
        dictionary=services.dictionary,
        formatter=services.formatter,
    )
    return ContourEngine(
        pipeline=build_default_pipeline(services.formatter),
        registry=build_default_registry(services.formatter),
        scheduler=services.scheduler,
        resolution=resolution,
        recents=RecentCommands(services.kv, cfg.MAX_RECENT_COMMANDS),
        clipboard=services.clipboard,
        notifications=services.notifications,
        actions=services.actions,
        notifications_enabled=cfg.NOTIFICATIONS_ENABLED,
    )


__all__ = ["ServiceContainer", "build_engine"]
