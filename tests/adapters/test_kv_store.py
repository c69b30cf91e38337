"""Tests for the TinyDB and in-memory key-value stores."""

from __future__ import annotations

from pathlib import Path

from tinydb import TinyDB

from contour_engine.adapters.kv_store import KV_TABLE, MemoryKeyValueStore, TinyDBKeyValueStore


def test_tinydb_store_roundtrip(tmp_path: Path) -> None:
    """Values upsert by key and survive reopening the file."""
    path = tmp_path / "nested" / "kv.json"
    store = TinyDBKeyValueStore(path)
    assert store.get("missing") is None
    store.set("a", "1")
    store.set("a", "2")
    store.set("b", "3")
    assert store.get("a") == "2"
    assert sorted(store.keys()) == ["a", "b"]
    store.delete("b")
    store.delete("b")
    store.close()

    reopened = TinyDBKeyValueStore(path)
    assert reopened.path == path
    assert reopened.get("a") == "2"
    assert reopened.get("b") is None
    reopened.close()


def test_tinydb_store_ignores_non_string_values(tmp_path: Path) -> None:
    path = tmp_path / "kv.json"
    db = TinyDB(str(path))
    db.table(KV_TABLE).insert({"key": "weird", "value": 42})
    db.close()

    store = TinyDBKeyValueStore(path)
    assert store.get("weird") is None
    store.close()


def test_memory_store() -> None:
    """The memory store copies its initial mapping."""
    initial = {"x": "1"}
    store = MemoryKeyValueStore(initial)
    store.set("y", "2")
    store.delete("x")
    store.delete("nope")
    assert initial == {"x": "1"}
    assert store.keys() == ["y"]
    assert store.get("y") == "2"
