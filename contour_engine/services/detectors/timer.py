"""Countdown timer parsing and state transitions.

The timer is only reachable from focused mode; the orchestrator owns the
interval and feeds :func:`tick_timer` once per second.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Optional

from contour_engine.core.models import TimerState

MAX_BARE_SECONDS = 86400

_COLON = re.compile(r"^(\d+):(\d{2})(?::(\d{2}))?$")
_UNITS = re.compile(r"^(?:(\d+)\s*h)?\s*(?:(\d+)\s*m(?:in)?)?\s*(?:(\d+)\s*s(?:ec)?)?$")
_BARE = re.compile(r"^(\d+)$")


def parse_duration(text: str) -> Optional[int]:
    """Parse ``5m``, ``1h30m``, ``90s``, ``2m30sec``, ``5:00``, ``1:30:00`` or ``300`` into seconds."""
    trimmed = text.strip().lower()
    if not trimmed:
        return None

    match = _COLON.match(trimmed)
    if match:
        if match.group(3):
            hours, minutes, seconds = (int(part) for part in match.groups())
            if minutes > 59 or seconds > 59:
                return None
            return hours * 3600 + minutes * 60 + seconds
        minutes, seconds = int(match.group(1)), int(match.group(2))
        if seconds > 59:
            return None
        return minutes * 60 + seconds

    match = _UNITS.match(trimmed)
    if match and any(match.groups()):
        hours, minutes, seconds = (int(part or 0) for part in match.groups())
        total = hours * 3600 + minutes * 60 + seconds
        return total if total > 0 else None

    match = _BARE.match(trimmed)
    if match:
        value = int(match.group(1))
        if 0 < value <= MAX_BARE_SECONDS:
            return value
    return None


def format_duration(seconds: int) -> str:
    """``H:MM:SS`` when there are hours, otherwise ``M:SS``."""
    seconds = max(0, seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration_label(seconds: int) -> str:
    """Human label such as ``1h 30m``; zero renders as ``0s``."""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def timer_for_seconds(seconds: int) -> TimerState:
    return TimerState(
        total_seconds=seconds,
        remaining_seconds=seconds,
        is_running=False,
        is_complete=False,
        label=format_duration_label(seconds),
        display=format_duration(seconds),
        progress=1.0,
    )


def create_timer_state(text: str) -> Optional[TimerState]:
    seconds = parse_duration(text)
    if seconds is None or seconds <= 0:
        return None
    return timer_for_seconds(seconds)


def tick_timer(state: TimerState) -> TimerState:
    """Advance a running timer by one second; completion is terminal."""
    if not state.is_running or state.is_complete:
        return state
    remaining = state.remaining_seconds - 1
    if remaining <= 0:
        return dataclasses.replace(
            state,
            remaining_seconds=0,
            is_running=False,
            is_complete=True,
            display="0:00",
            progress=0.0,
        )
    return dataclasses.replace(
        state,
        remaining_seconds=remaining,
        display=format_duration(remaining),
        progress=remaining / state.total_seconds,
    )


def reset_timer_state(state: TimerState) -> TimerState:
    return dataclasses.replace(
        state,
        remaining_seconds=state.total_seconds,
        is_running=False,
        is_complete=False,
        display=format_duration(state.total_seconds),
        progress=1.0,
    )


def detect_timer(text: str) -> Optional[tuple[int, str]]:
    """Return ``(seconds, label)`` for a duration, or ``None``."""
    seconds = parse_duration(text)
    if seconds is None or seconds <= 0:
        return None
    return seconds, format_duration_label(seconds)


__all__ = [
    "create_timer_state",
    "detect_timer",
    "format_duration",
    "format_duration_label",
    "parse_duration",
    "reset_timer_state",
    "tick_timer",
    "timer_for_seconds",
]
