"""Clipboard, notification and action sinks that log what they receive.

The command-line front end has no clipboard or desktop notifications, so
these record the values and write them to the structured log.
"""

from __future__ import annotations

from contour_engine.core.logging import get_logger, truncate_for_log

logger = get_logger(__name__)


class LoggingClipboard:
    """Keeps every copied value; ``last`` is the most recent."""

    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def last(self) -> str | None:
        return self.history[-1] if self.history else None

    def copy(self, text: str) -> None:
        self.history.append(text)
        logger.info("[contour] copied '%s'", truncate_for_log(text))


class LoggingNotificationSink:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def notify(self, title: str, body: str) -> None:
        self.sent.append((title, body))
        logger.info("[timer] notification title=%s body=%s", title, body)


class LoggingActionSink:
    def __init__(self) -> None:
        self.actions: list[tuple[str, str]] = []

    def navigate(self, path: str) -> None:
        self.actions.append(("navigate", path))
        logger.info("[commands] navigate path=%s", path)

    def switch_mode(self, mode: str) -> None:
        self.actions.append(("mode", mode))
        logger.info("[commands] switch mode=%s", mode)

    def open_external(self, url: str) -> None:
        self.actions.append(("external", url))
        logger.info("[commands] open url=%s", url)


__all__ = ["LoggingActionSink", "LoggingClipboard", "LoggingNotificationSink"]
