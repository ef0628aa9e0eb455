# scripts/seed_equity_cache.py
from __future__ import annotations

import argparse
import time
from typing import List, Tuple

from holdem_equity.config import Settings
from holdem_equity.engine.equity import EquityEngine
from holdem_equity.engine.numba_backend import NumbaBackend
from holdem_equity.helpers.cards import Card
from holdem_equity.helpers.ranges import opponent_hole, top_hands
from holdem_equity.helpers.results import EquityOptions
from holdem_equity.logging_config import configure_logging, get_logger
from holdem_equity.storage.lookup import EquityCache, create_equity_key
from holdem_equity.storage.sqlite import SQLiteEquityStore

logger = get_logger("scripts.seed_equity_cache")

Matchup = Tuple[str, Tuple[Card, Card], str, Tuple[Card, Card]]


def build_matchups(count: int) -> List[Matchup]:
    hands = top_hands(count)
    out: List[Matchup] = []
    for i in range(len(hands)):
        for j in range(i + 1, len(hands)):
            n1, h1 = hands[i]
            n2, h2 = hands[j]
            out.append((n1, h1, n2, opponent_hole(h1, h2)))
    return out


def seed(cache: EquityCache, matchups: List[Matchup], mode: str = "exact") -> dict:
    options = EquityOptions(mode=mode)
    total = len(matchups)
    cached = computed = failed = 0
    t0 = time.perf_counter()

    for n, (n1, h1, n2, h2) in enumerate(matchups, start=1):
        key = create_equity_key([h1, h2], (), (), options)
        if cache.store.get(key) is not None:
            cached += 1
            if n % 10 == 0 or n == total:
                logger.info("[%d/%d] %s vs %s (cached)", n, total, n1, n2)
            continue
        try:
            res, _ = cache.compute([h1, h2], (), options)
        except ValueError as e:
            failed += 1
            logger.error("failed %s vs %s: %s", n1, n2, e)
            continue
        computed += 1
        elapsed = time.perf_counter() - t0
        rate = n / elapsed if elapsed > 0 else 0.0
        eta = (total - n) / rate if rate > 0 else 0.0
        logger.info(
            "[%d/%d] %s vs %s win=%.4f tie=%.4f | %.1f/s eta %.0fs",
            n, total, n1, n2, res.win[0], res.tie[0], rate, eta,
        )

    return {
        "matchups": total,
        "cached": cached,
        "computed": computed,
        "failed": failed,
        "seconds": round(time.perf_counter() - t0, 1),
        "entries": cache.store.count(),
    }


def main() -> None:
    ap = argparse.ArgumentParser(description="Precompute heads-up preflop equities into the cache store")
    ap.add_argument("--hands", type=int, default=50, help="number of starting-hand classes, premium first")
    ap.add_argument("--db", type=str, default=None, help="overrides HOLDEM_CACHE_DB")
    ap.add_argument("--mode", choices=["exact", "mc", "auto"], default="exact")
    args = ap.parse_args()

    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_file)

    store = SQLiteEquityStore(args.db or settings.cache_db)
    engine = EquityEngine.from_settings(settings)
    for b in engine.backends:
        if isinstance(b, NumbaBackend) and b.available():
            b.warmup()

    cache = EquityCache(store, engine=engine, hot_capacity=settings.hot_cache_size)
    matchups = build_matchups(args.hands)
    print(f"Seeding {len(matchups)} matchups from the top {args.hands} starting hands into {store.path}")
    summary = seed(cache, matchups, mode=args.mode)
    store.close()

    print("=" * 60)
    print("Seeding complete:", summary)


if __name__ == "__main__":
    main()
