"""
lookup.py

Canonical scenario keys and the two-level equity cache:

  hot layer   LRUTable in process memory
  store       EquityStore (sqlite by default), survives restarts

Results are stored in key order (holes sorted by their signature) and
remapped to the caller's player order on the way out, so the same
scenario asked with the players swapped shares one entry.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..engine.equity import EquityEngine, HoleLike, OptionsLike, coerce_options, parse_players, prepare_scenario
from ..helpers.cache import LRUTable
from ..helpers.cards import Card, CardLike, parse_cards
from ..helpers.results import EquityOptions, EquityResult
from ..logging_config import get_logger
from .base import THIRTY_DAYS_MS, EquityStore, StoreError
from .sqlite import SQLiteEquityStore

logger = get_logger(__name__)

KEY_PREFIX = "equity"


def _card_sort_key(c: Card) -> Tuple[int, str]:
    return (-c.rank, c.suit)


def _signature(cards: Iterable[Card]) -> str:
    return "".join(c.code for c in sorted(cards, key=_card_sort_key))


def _options_token(options: EquityOptions) -> str:
    if options.mode == "exact":
        return "exact"
    if options.mode == "mc":
        return f"mc:{options.iterations}"
    return f"auto:{options.exact_max_combos}:{options.iterations}"


def canonical_order(players: Iterable[HoleLike]) -> List[int]:
    """Caller indices of the holes in the order they appear in the key."""
    sigs = [_signature(h) for h in parse_players(players)]
    return sorted(range(len(sigs)), key=lambda i: sigs[i])


def _inverse(order: Sequence[int]) -> List[int]:
    inv = [0] * len(order)
    for pos, caller in enumerate(order):
        inv[caller] = pos
    return inv


def create_equity_key(
    players: Iterable[HoleLike],
    board: Iterable[CardLike] = (),
    dead: Iterable[CardLike] = (),
    options: OptionsLike = None,
) -> str:
    holes = sorted(_signature(h) for h in parse_players(players))
    board_sig = _signature(parse_cards(board))
    dead_sig = _signature(parse_cards(dead))
    opts = coerce_options(options)
    return f"{KEY_PREFIX}:{'|'.join(holes)}:{board_sig}:{dead_sig}:{_options_token(opts)}"


class EquityCache:
    """
    Front for EquityEngine backed by a persisted store.

    Store failures never surface: reads degrade to misses and writes are
    dropped, both logged at WARNING.
    """

    def __init__(self, store: EquityStore, engine: Optional[EquityEngine] = None, hot_capacity: int = 1000):
        self.store = store
        self.engine = engine or EquityEngine()
        self.hot: LRUTable[str, EquityResult] = LRUTable(hot_capacity)
        self.hits = 0
        self.misses = 0

    @classmethod
    def from_settings(cls, settings) -> "EquityCache":
        return cls(
            SQLiteEquityStore(settings.cache_db),
            engine=EquityEngine.from_settings(settings),
            hot_capacity=settings.hot_cache_size,
        )

    def _touch(self, key: str) -> None:
        try:
            self.store.touch(key)
        except StoreError as e:
            logger.warning("equity store touch failed for %s: %s", key, e)

    def get(self, key: str) -> Optional[EquityResult]:
        """Result in key order, or None."""
        result = self.hot.get(key)
        if result is not None:
            self.hits += 1
            self._touch(key)
            return result

        try:
            row = self.store.get(key)
        except StoreError as e:
            logger.warning("equity store read failed for %s: %s", key, e)
            row = None
        if row is None:
            self.misses += 1
            return None

        result = row.to_result()
        self.hits += 1
        self._touch(key)
        self.hot.put(key, result)
        return result

    def set(self, key: str, result: EquityResult) -> None:
        try:
            self.store.put(key, result)
        except StoreError as e:
            logger.warning("equity store write failed for %s: %s", key, e)
        self.hot.put(key, result)

    def compute(
        self,
        players: Iterable[HoleLike],
        board: Iterable[CardLike] = (),
        options: OptionsLike = None,
        dead: Iterable[CardLike] = (),
    ) -> Tuple[EquityResult, bool]:
        """(result in caller order, from_cache)."""
        ps, b, d = prepare_scenario(players, board, dead)
        opts = coerce_options(options)

        key = create_equity_key(ps, b, d, opts)
        order = canonical_order(ps)

        cached = self.get(key)
        if cached is not None:
            logger.debug("equity cache hit %s", key)
            return cached.reordered(_inverse(order)), True

        logger.debug("equity cache miss %s", key)
        result = self.engine.compute_prepared(ps, b, opts, d)
        self.set(key, result.reordered(order))
        return result, False

    def clear(self) -> None:
        self.store.clear()
        self.hot.clear()
        self.hits = self.misses = 0

    def stats(self, top: int = 10) -> Dict[str, Any]:
        return {
            "size": self.store.count(),
            "memory_cache_size": len(self.hot),
            "max_memory_cache_size": self.hot.capacity,
            "total_accesses": self.store.total_accesses(),
            "most_accessed": [{"key": k, "count": c} for k, c in self.store.most_accessed(top)],
            "hits": self.hits,
            "misses": self.misses,
        }

    def cleanup(self, max_age_ms: int = THIRTY_DAYS_MS) -> int:
        removed = self.store.cleanup(max_age_ms)
        if removed:
            self.hot.clear()
        logger.info("equity cache cleanup removed %d rows", removed)
        return removed
