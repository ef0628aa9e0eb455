"""
cli.py

Command line front end. Every subcommand prints one JSON document on stdout.

  holdem-equity evaluate --hole "14h 14d" --board "14c 13s 2h 7d 9c"
  holdem-equity compare  --hole1 "14h 13h" --hole2 "12c 12d" --board "..."
  holdem-equity equity   --player "14h 14d" --player "13h 13d" [--board ...]
  holdem-equity outs     --hero "9h 8h" --villain "14c 14d" --board "..."
  holdem-equity cache    stats|clear|cleanup
"""
from __future__ import annotations
import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from .config import Settings
from .engine.equity import EquityEngine
from .helpers.cards import format_cards, parse_board, parse_cards, parse_hole
from .helpers.errors import HoldemError
from .helpers.evaluator import HandEvaluator, compare_hands, describe_rank, evaluate_best
from .helpers.outs import calculate_turn_outs
from .helpers.results import EquityOptions
from .logging_config import configure_logging, get_logger
from .storage.base import StoreError
from .storage.lookup import EquityCache

logger = get_logger(__name__)

DAY_MS = 24 * 60 * 60 * 1000


def _emit(doc: Dict[str, Any]) -> None:
    print(json.dumps(doc, indent=2))


def cmd_evaluate(args: argparse.Namespace, settings: Settings) -> int:
    ev = HandEvaluator(capacity=64)
    rank, best5 = evaluate_best(parse_hole(args.hole), parse_board(args.board), ev)
    _emit({
        "rank": rank.to_dict(),
        "name": rank.name,
        "description": describe_rank(rank),
        "best_five": [str(c) for c in best5],
    })
    return 0


def cmd_compare(args: argparse.Namespace, settings: Settings) -> int:
    ev = HandEvaluator(capacity=64)
    h1, h2, board = parse_hole(args.hole1), parse_hole(args.hole2), parse_board(args.board)
    res = compare_hands(h1, h2, board, ev)
    r1, _ = evaluate_best(h1, board, ev)
    r2, _ = evaluate_best(h2, board, ev)
    outcome = "hand1_wins" if res > 0 else "hand2_wins" if res < 0 else "tie"
    _emit({
        "result": outcome,
        "hand1": {"rank": r1.to_dict(), "description": describe_rank(r1)},
        "hand2": {"rank": r2.to_dict(), "description": describe_rank(r2)},
    })
    return 0


def cmd_equity(args: argparse.Namespace, settings: Settings) -> int:
    players = [parse_cards(p) for p in (args.player or [])]
    board = parse_board(args.board)
    dead = parse_board(args.dead)
    options = EquityOptions(
        mode=args.mode,
        iterations=args.iterations,
        exact_max_combos=args.exact_max_combos,
        seed=args.seed,
    )

    if args.no_cache:
        result = EquityEngine.from_settings(settings).compute_equity(players, board, options, dead)
        from_cache = False
    else:
        cache = EquityCache.from_settings(settings)
        try:
            result, from_cache = cache.compute(players, board, options, dead)
        finally:
            cache.store.close()

    doc = result.to_dict()
    doc["players"] = [format_cards(p) for p in players]
    doc["from_cache"] = from_cache
    _emit(doc)
    return 0


def cmd_outs(args: argparse.Namespace, settings: Settings) -> int:
    res = calculate_turn_outs(parse_cards(args.hero), parse_cards(args.villain), parse_board(args.board))
    _emit(res.to_dict())
    return 0


def cmd_cache(args: argparse.Namespace, settings: Settings) -> int:
    cache = EquityCache.from_settings(settings)
    try:
        if args.action == "stats":
            _emit(cache.stats(top=args.top))
        elif args.action == "clear":
            cache.clear()
            _emit({"cleared": True})
        else:
            removed = cache.cleanup(args.days * DAY_MS)
            _emit({"removed": removed})
    finally:
        cache.store.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="holdem-equity", description="Texas Hold'em equity tools")
    ap.add_argument("--log-level", type=str, default=None, help="overrides HOLDEM_LOG_LEVEL")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("evaluate", help="best hand from 2 hole cards + 5 board cards")
    p.add_argument("--hole", required=True)
    p.add_argument("--board", required=True)
    p.set_defaults(func=cmd_evaluate)

    p = sub.add_parser("compare", help="compare two holes on a complete board")
    p.add_argument("--hole1", required=True)
    p.add_argument("--hole2", required=True)
    p.add_argument("--board", required=True)
    p.set_defaults(func=cmd_compare)

    p = sub.add_parser("equity", help="win/tie/lose fractions for 2+ holes")
    p.add_argument("--player", action="append", help="hole cards, repeat once per player")
    p.add_argument("--board", default="")
    p.add_argument("--dead", default="")
    p.add_argument("--mode", choices=["exact", "mc", "auto"], default="auto")
    p.add_argument("--iterations", type=int, default=10_000)
    p.add_argument("--exact-max-combos", type=int, default=200_000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--no-cache", action="store_true")
    p.set_defaults(func=cmd_equity)

    p = sub.add_parser("outs", help="river outs for hero against villain on the turn")
    p.add_argument("--hero", required=True)
    p.add_argument("--villain", required=True)
    p.add_argument("--board", required=True)
    p.set_defaults(func=cmd_outs)

    p = sub.add_parser("cache", help="inspect or prune the persisted equity cache")
    p.add_argument("action", choices=["stats", "clear", "cleanup"])
    p.add_argument("--top", type=int, default=10)
    p.add_argument("--days", type=int, default=30)
    p.set_defaults(func=cmd_cache)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level, settings.log_file)

    try:
        return args.func(args, settings)
    except HoldemError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except StoreError as e:
        logger.error("equity store unavailable: %s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
