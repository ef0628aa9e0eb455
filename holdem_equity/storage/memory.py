from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from ..helpers.results import EquityResult
from .base import THIRTY_DAYS_MS, CacheRow, EquityStore, now_ms


class InMemoryEquityStore(EquityStore):
    """Dict-backed store for tests and throwaway runs."""

    def __init__(self):
        self._rows: Dict[str, CacheRow] = {}

    def get(self, key: str) -> Optional[CacheRow]:
        return self._rows.get(key)

    def put(self, key: str, result: EquityResult) -> None:
        t = now_ms()
        self._rows[key] = CacheRow(
            key=key,
            win=list(result.win),
            tie=list(result.tie),
            lose=list(result.lose),
            samples=result.samples,
            created_at=t,
            last_accessed=t,
            access_count=0,
        )

    def touch(self, key: str) -> None:
        row = self._rows.get(key)
        if row is not None:
            row.access_count += 1
            row.last_accessed = now_ms()

    def clear(self) -> None:
        self._rows.clear()

    def count(self) -> int:
        return len(self._rows)

    def total_accesses(self) -> int:
        return sum(r.access_count for r in self._rows.values())

    def most_accessed(self, limit: int = 10) -> List[Tuple[str, int]]:
        rows = sorted(self._rows.values(), key=lambda r: r.access_count, reverse=True)
        return [(r.key, r.access_count) for r in rows[:limit]]

    def cleanup(self, max_age_ms: int = THIRTY_DAYS_MS) -> int:
        cutoff = now_ms() - max_age_ms
        stale = [k for k, r in self._rows.items() if r.last_accessed < cutoff]
        for k in stale:
            del self._rows[k]
        return len(stale)
