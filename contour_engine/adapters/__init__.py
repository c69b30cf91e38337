"""Infrastructure adapter exports."""

from .http_providers import ExchangeRateApiProvider, FreeDictionaryProvider, MyMemoryTranslationProvider
from .kv_store import MemoryKeyValueStore, TinyDBKeyValueStore
from .sinks import LoggingActionSink, LoggingClipboard, LoggingNotificationSink

__all__ = [
    "ExchangeRateApiProvider",
    "FreeDictionaryProvider",
    "MyMemoryTranslationProvider",
    "MemoryKeyValueStore",
    "TinyDBKeyValueStore",
    "LoggingActionSink",
    "LoggingClipboard",
    "LoggingNotificationSink",
]
