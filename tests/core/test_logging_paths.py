"""Tests for choosing the log directory: override, repo logs, then temp dir."""

from __future__ import annotations

import pathlib
import tempfile
from types import SimpleNamespace

import pytest

from contour_engine.core import logging as core_logging

# pylint: disable=missing-function-docstring,protected-access,redefined-outer-name


@pytest.fixture
def layout(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> SimpleNamespace:
    """Point the resolver at throwaway override, repo and temp locations."""
    dirs = SimpleNamespace(
        override=tmp_path / "override",
        repo_logs=tmp_path / "repo" / "logs",
        temp_logs=tmp_path / "tmp" / "contour-logs",
    )
    monkeypatch.setattr(core_logging, "ROOT_DIR", tmp_path / "repo")
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path / "tmp"))
    return dirs


def _deny_mkdir(monkeypatch: pytest.MonkeyPatch, blocked: set[pathlib.Path]) -> None:
    original = pathlib.Path.mkdir

    def mkdir(path: pathlib.Path, *args, **kwargs):
        if path in blocked:
            raise PermissionError(f"read-only: {path}")
        return original(path, *args, **kwargs)

    monkeypatch.setattr(pathlib.Path, "mkdir", mkdir)


@pytest.mark.parametrize(
    "configured, blocked, expected",
    [
        (True, (), "override"),
        (False, (), "repo_logs"),
        (True, ("override",), "repo_logs"),
        (True, ("override", "repo_logs"), "temp_logs"),
        (False, ("repo_logs",), "temp_logs"),
    ],
)
def test_first_writable_candidate_wins(layout, monkeypatch, configured, blocked, expected) -> None:
    """Unwritable candidates are skipped in precedence order."""
    log_dir = layout.override if configured else None
    monkeypatch.setattr(core_logging, "settings", SimpleNamespace(CONTOUR_LOG_DIR=log_dir))
    _deny_mkdir(monkeypatch, {getattr(layout, name) for name in blocked})

    resolved = core_logging._resolve_logs_dir()

    assert resolved == getattr(layout, expected)
    assert resolved.is_dir()


def test_no_writable_candidate_raises(layout, monkeypatch) -> None:
    monkeypatch.setattr(core_logging, "settings", SimpleNamespace(CONTOUR_LOG_DIR=layout.override))
    _deny_mkdir(monkeypatch, {layout.override, layout.repo_logs, layout.temp_logs})

    with pytest.raises(PermissionError, match="writable logs directory"):
        core_logging._resolve_logs_dir()
