"""Cached dashboard query results and their invalidation."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from .database import get_connection, initialize_database

_LOG = logging.getLogger(__name__)


class CacheKeyError(RuntimeError):
    """Raised when a cache key cannot be encoded."""


def encode_key(key: Sequence[Any]) -> str:
    if isinstance(key, (str, bytes)) or not isinstance(key, Sequence):
        key = [key]
    try:
        return json.dumps(list(key), sort_keys=True, separators=(",", ":"))
    except TypeError as exc:
        raise CacheKeyError(f"Cache key is not JSON serialisable: {key!r}") from exc


def decode_key(raw: str) -> list[Any]:
    return json.loads(raw)


class QueryCache:
    """Keyed store of query results.

    Keys are sequences, compared element by element; invalidating ``("owner",)``
    marks ``("owner", 7)`` and every other key beginning with ``"owner"`` stale.
    """

    def __init__(self, db_path: str = ":memory:") -> None:
        self.conn = get_connection(db_path)
        initialize_database(self.conn)

    def close(self) -> None:
        self.conn.close()

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------
    def set(self, key: Sequence[Any], data: Any) -> dict:
        raw_key = encode_key(key)
        self.conn.execute(
            """
            INSERT INTO query_cache(cache_key, data, is_stale, updated_at, invalidated_at)
            VALUES (?, ?, 0, CURRENT_TIMESTAMP, NULL)
            ON CONFLICT(cache_key) DO UPDATE SET
                data = excluded.data,
                is_stale = 0,
                updated_at = CURRENT_TIMESTAMP,
                invalidated_at = NULL
            """,
            (raw_key, json.dumps(data)),
        )
        self.conn.commit()
        return self.get(key)

    def get(self, key: Sequence[Any]) -> dict | None:
        row = self.conn.execute(
            "SELECT * FROM query_cache WHERE cache_key = ?", (encode_key(key),)
        ).fetchone()
        return self._hydrate(row) if row else None

    def remove(self, key: Sequence[Any]) -> bool:
        cur = self.conn.execute("DELETE FROM query_cache WHERE cache_key = ?", (encode_key(key),))
        self.conn.commit()
        return cur.rowcount > 0

    def entries(self) -> list[dict]:
        rows = self.conn.execute("SELECT * FROM query_cache ORDER BY cache_key").fetchall()
        return [self._hydrate(row) for row in rows]

    def keys(self) -> list[list[Any]]:
        return [entry["key"] for entry in self.entries()]

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------
    def invalidate(self, key: Sequence[Any]) -> int:
        """Mark every entry whose key starts with ``key`` as stale."""

        prefix = decode_key(encode_key(key))
        matched = [
            row["cache_key"]
            for row in self.conn.execute("SELECT cache_key FROM query_cache").fetchall()
            if decode_key(row["cache_key"])[: len(prefix)] == prefix
        ]
        if matched:
            self.conn.executemany(
                """
                UPDATE query_cache
                SET is_stale = 1, invalidated_at = CURRENT_TIMESTAMP
                WHERE cache_key = ?
                """,
                [(raw,) for raw in matched],
            )
            self.conn.commit()
        _LOG.debug("invalidated %d entries for %s", len(matched), prefix)
        return len(matched)

    def _hydrate(self, row: dict) -> dict:
        return {
            "key": decode_key(row["cache_key"]),
            "data": json.loads(row["data"]) if row["data"] is not None else None,
            "stale": bool(row["is_stale"]),
            "updated_at": row["updated_at"],
            "invalidated_at": row["invalidated_at"],
        }


__all__ = ["CacheKeyError", "QueryCache", "decode_key", "encode_key"]
