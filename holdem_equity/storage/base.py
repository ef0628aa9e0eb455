from __future__ import annotations
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..helpers.results import EquityResult

THIRTY_DAYS_MS = 30 * 24 * 60 * 60 * 1000


class StoreError(RuntimeError):
    """Any failure of the backing store (I/O, corrupt row, closed connection)."""


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class CacheRow:
    key: str
    win: List[float]
    tie: List[float]
    lose: List[float]
    samples: int
    created_at: int
    last_accessed: int
    access_count: int = 0

    def to_result(self) -> EquityResult:
        return EquityResult(win=list(self.win), tie=list(self.tie), lose=list(self.lose), samples=self.samples)


class EquityStore(ABC):
    """
    Persisted key -> EquityResult repository.

    Rows carry epoch-millisecond timestamps and an access counter so old or
    cold entries can be pruned. Implementations raise StoreError on failure.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[CacheRow]:
        ...

    @abstractmethod
    def put(self, key: str, result: EquityResult) -> None:
        """Insert or replace; resets the access counter."""

    @abstractmethod
    def touch(self, key: str) -> None:
        """Bump access_count and last_accessed; no-op for unknown keys."""

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    @abstractmethod
    def total_accesses(self) -> int:
        ...

    @abstractmethod
    def most_accessed(self, limit: int = 10) -> List[Tuple[str, int]]:
        ...

    @abstractmethod
    def cleanup(self, max_age_ms: int = THIRTY_DAYS_MS) -> int:
        """Delete rows not accessed within max_age_ms; returns how many went."""

    def close(self) -> None:
        pass
