"""Interval schedulers backing the timer tick."""

# pylint: disable=missing-function-docstring

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Optional

from contour_engine.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class AsyncioInterval:
    """Repeating ``call_later`` chain on a running event loop."""

    callback: Callable[[], None]
    seconds: float
    loop: asyncio.AbstractEventLoop
    _handle: Optional[asyncio.TimerHandle] = field(default=None, init=False)
    cancelled: bool = field(default=False, init=False)

    def start(self) -> None:
        self._handle = self.loop.call_later(self.seconds, self._fire)

    def _fire(self) -> None:
        if self.cancelled:
            return
        # Reschedule first so a callback that cancels the interval wins.
        self._handle = self.loop.call_later(self.seconds, self._fire)
        self.callback()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler:
    """``Scheduler`` implementation for code running inside an asyncio loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def set_interval(self, callback: Callable[[], None], seconds: float) -> AsyncioInterval:
        loop = self._loop or asyncio.get_running_loop()
        interval = AsyncioInterval(callback=callback, seconds=seconds, loop=loop)
        interval.start()
        logger.debug("[timer] interval scheduled every %.1fs", seconds)
        return interval

    def clear_interval(self, handle: AsyncioInterval) -> None:
        handle.cancel()


@dataclass(slots=True)
class ManualInterval:
    """Interval registered with a :class:`ManualScheduler`."""

    callback: Callable[[], None]
    seconds: float
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler advanced explicitly, for tests and the CLI dry run."""

    def __init__(self) -> None:
        self.intervals: list[ManualInterval] = []

    def set_interval(self, callback: Callable[[], None], seconds: float) -> ManualInterval:
        interval = ManualInterval(callback=callback, seconds=seconds)
        self.intervals.append(interval)
        return interval

    def clear_interval(self, handle: ManualInterval) -> None:
        handle.cancel()

    @property
    def active(self) -> list[ManualInterval]:
        return [interval for interval in self.intervals if not interval.cancelled]

    def tick(self, count: int = 1) -> None:
        """Fire every live interval ``count`` times."""
        for _ in range(count):
            for interval in list(self.active):
                if not interval.cancelled:
                    interval.callback()


__all__ = ["AsyncioInterval", "AsyncioScheduler", "ManualInterval", "ManualScheduler"]
