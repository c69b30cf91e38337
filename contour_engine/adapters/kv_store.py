"""``PersistentKV`` implementations: TinyDB on disk and an in-memory dict."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, cast

from tinydb import Query, TinyDB

from contour_engine.core.logging import get_logger

# Provide a QueryLike alias for static checkers; at runtime use Any.
if TYPE_CHECKING:  # pragma: no cover - typing only
    from tinydb.queries import QueryLike  # type: ignore
else:
    QueryLike = Any  # type: ignore[misc,assignment]

logger = get_logger(__name__)

KV_TABLE = "kv"


class TinyDBKeyValueStore:
    """String blobs stored as ``{"key": ..., "value": ...}`` documents."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._path = path
        self._db = TinyDB(str(path))
        self._table = self._db.table(KV_TABLE)
        logger.info("[kv] opened %s", path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Optional[str]:
        q = Query()
        doc = self._table.get(cast(QueryLike, q.key == key))
        if not doc:
            return None
        value = cast(dict[str, Any], doc).get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        q = Query()
        self._table.upsert({"key": key, "value": value}, cast(QueryLike, q.key == key))

    def delete(self, key: str) -> None:
        q = Query()
        self._table.remove(cast(QueryLike, q.key == key))

    def keys(self) -> list[str]:
        return [str(doc.get("key")) for doc in self._table.all()]

    def close(self) -> None:
        self._db.close()


class MemoryKeyValueStore:
    """Process-local store for tests and ephemeral runs."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


__all__ = ["KV_TABLE", "MemoryKeyValueStore", "TinyDBKeyValueStore"]
