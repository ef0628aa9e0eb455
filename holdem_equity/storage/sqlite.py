"""
sqlite.py

Equity results persisted in a single sqlite table. Win/tie/lose arrays are
stored as JSON text; timestamps are epoch milliseconds.
"""
from __future__ import annotations
import json
import os
import sqlite3
from typing import List, Optional, Tuple

from ..helpers.results import EquityResult
from ..logging_config import get_logger
from .base import THIRTY_DAYS_MS, CacheRow, EquityStore, StoreError, now_ms

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS equity_cache (
    key TEXT PRIMARY KEY,
    win TEXT NOT NULL,
    tie TEXT NOT NULL,
    lose TEXT NOT NULL,
    samples INTEGER NOT NULL,
    created_at INTEGER NOT NULL,
    last_accessed INTEGER NOT NULL,
    access_count INTEGER DEFAULT 0
);
CREATE INDEX IF NOT EXISTS idx_equity_last_accessed ON equity_cache(last_accessed);
CREATE INDEX IF NOT EXISTS idx_equity_access_count ON equity_cache(access_count);
"""


class SQLiteEquityStore(EquityStore):
    def __init__(self, path: str = "equity_cache.db"):
        self.path = path
        try:
            if path != ":memory:":
                parent = os.path.dirname(os.path.abspath(path))
                os.makedirs(parent, exist_ok=True)
            self._conn = sqlite3.connect(path)
            self._conn.executescript(SCHEMA)
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"cannot open equity store at {path}: {e}") from e
        logger.debug("opened equity store %s", path)

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            with self._conn:
                return self._conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def get(self, key: str) -> Optional[CacheRow]:
        row = self._execute(
            "SELECT key, win, tie, lose, samples, created_at, last_accessed, access_count "
            "FROM equity_cache WHERE key = ?",
            (key,),
        ).fetchone()
        if row is None:
            return None
        try:
            return CacheRow(
                key=row[0],
                win=json.loads(row[1]),
                tie=json.loads(row[2]),
                lose=json.loads(row[3]),
                samples=int(row[4]),
                created_at=int(row[5]),
                last_accessed=int(row[6]),
                access_count=int(row[7] or 0),
            )
        except (ValueError, TypeError) as e:
            raise StoreError(f"corrupt row for {key}: {e}") from e

    def put(self, key: str, result: EquityResult) -> None:
        t = now_ms()
        self._execute(
            "INSERT OR REPLACE INTO equity_cache "
            "(key, win, tie, lose, samples, created_at, last_accessed, access_count) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, 0)",
            (key, json.dumps(list(result.win)), json.dumps(list(result.tie)),
             json.dumps(list(result.lose)), int(result.samples), t, t),
        )

    def touch(self, key: str) -> None:
        self._execute(
            "UPDATE equity_cache SET last_accessed = ?, access_count = access_count + 1 WHERE key = ?",
            (now_ms(), key),
        )

    def clear(self) -> None:
        self._execute("DELETE FROM equity_cache")

    def count(self) -> int:
        return int(self._execute("SELECT COUNT(*) FROM equity_cache").fetchone()[0])

    def total_accesses(self) -> int:
        total = self._execute("SELECT SUM(access_count) FROM equity_cache").fetchone()[0]
        return int(total or 0)

    def most_accessed(self, limit: int = 10) -> List[Tuple[str, int]]:
        rows = self._execute(
            "SELECT key, access_count FROM equity_cache ORDER BY access_count DESC, key LIMIT ?",
            (int(limit),),
        ).fetchall()
        return [(k, int(c or 0)) for k, c in rows]

    def cleanup(self, max_age_ms: int = THIRTY_DAYS_MS) -> int:
        cutoff = now_ms() - max_age_ms
        cur = self._execute("DELETE FROM equity_cache WHERE last_accessed < ?", (cutoff,))
        return cur.rowcount

    def vacuum(self) -> None:
        try:
            self._conn.execute("VACUUM")
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def close(self) -> None:
        try:
            self._conn.close()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
