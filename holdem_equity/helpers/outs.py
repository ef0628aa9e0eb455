from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .cards import Card, CardLike, ensure_distinct, make_deck, parse_cards
from .errors import InvalidOutsInput
from .evaluator import CATEGORY, CATEGORY_NAMES, HandEvaluator, compare_ranks

SUPPRESS_TIE_AT = 0.50
SUPPRESS_WIN_AT = 0.45

# 0..9 are plain hand categories; 10+ name the draw that got there
FLUSH_COMPLETION = 10
STRAIGHT_COMPLETION = 11
PAIR_IMPROVEMENT = 12
TWO_PAIR_IMPROVEMENT = 13
SET_IMPROVEMENT = 14

OUT_CATEGORY_NAMES = dict(CATEGORY_NAMES)
OUT_CATEGORY_NAMES.update({
    FLUSH_COMPLETION: "flush_draw_completion",
    STRAIGHT_COMPLETION: "straight_draw_completion",
    PAIR_IMPROVEMENT: "pair_improvement",
    TWO_PAIR_IMPROVEMENT: "two_pair_improvement",
    SET_IMPROVEMENT: "set_improvement",
})


@dataclass(frozen=True)
class Out:
    card: Card
    category: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "card": self.card.code,
            "rank": self.card.rank,
            "suit": self.card.suit,
            "category": self.category,
            "category_name": OUT_CATEGORY_NAMES[self.category],
        }


@dataclass(frozen=True)
class OutsSuppression:
    reason: str
    baseline_win: float
    baseline_tie: float

    def to_dict(self) -> Dict[str, Any]:
        return {"reason": self.reason, "baseline_win": self.baseline_win, "baseline_tie": self.baseline_tie}


@dataclass
class OutsResult:
    baseline_win: float
    baseline_tie: float
    baseline_lose: float
    total_river_cards: int
    win_outs: List[Out] = field(default_factory=list)
    tie_outs: List[Out] = field(default_factory=list)
    suppressed: Optional[OutsSuppression] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suppressed": self.suppressed.to_dict() if self.suppressed else None,
            "win_outs": [o.to_dict() for o in self.win_outs],
            "tie_outs": [o.to_dict() for o in self.tie_outs],
            "baseline_win": self.baseline_win,
            "baseline_tie": self.baseline_tie,
            "baseline_lose": self.baseline_lose,
            "total_river_cards": self.total_river_cards,
        }


def suppression_reason(baseline_win: float, baseline_tie: float) -> Optional[str]:
    if baseline_tie >= SUPPRESS_TIE_AT:
        return "board_tie"
    if baseline_win >= SUPPRESS_WIN_AT:
        return "hero_favored"
    return None


def improvement_category(before: int, after: int, river: Card, hero: Sequence[Card]) -> int:
    """Tag an out with what the river did for hero's hand."""
    if after == CATEGORY["flush"] and before < after:
        return FLUSH_COMPLETION
    if after == CATEGORY["straight"] and before < after:
        return STRAIGHT_COMPLETION
    if after == CATEGORY["trips"] and before < after:
        pocket_pair = hero[0].rank == hero[1].rank
        if pocket_pair and river.rank == hero[0].rank:
            return SET_IMPROVEMENT
    if after == CATEGORY["two_pair"] and before < after:
        return TWO_PAIR_IMPROVEMENT
    if after == CATEGORY["pair"] and before < after:
        return PAIR_IMPROVEMENT
    return after


def calculate_turn_outs(
    hero: Iterable[CardLike],
    villain: Iterable[CardLike],
    board: Iterable[CardLike],
    evaluator: Optional[HandEvaluator] = None,
) -> OutsResult:
    h = parse_cards(hero)
    v = parse_cards(villain)
    b = parse_cards(board)
    if len(h) != 2:
        raise InvalidOutsInput(f"Hero must have exactly 2 cards, got {len(h)}")
    if len(v) != 2:
        raise InvalidOutsInput(f"Villain must have exactly 2 cards, got {len(v)}")
    if len(b) != 4:
        raise InvalidOutsInput(f"Board must have exactly 4 cards (turn), got {len(b)}")
    known = h + v + b
    ensure_distinct(known)

    ev = evaluator or HandEvaluator(capacity=4096)
    rivers = make_deck(exclude=known)

    hero_now = ev.evaluate(h + b)
    current = compare_ranks(hero_now, ev.evaluate(v + b))

    wins = ties = 0
    win_outs: List[Out] = []
    tie_outs: List[Out] = []
    for river in rivers:
        full = b + [river]
        hero_rank = ev.evaluate7(h + full)
        res = compare_ranks(hero_rank, ev.evaluate7(v + full))
        if res > 0:
            wins += 1
            if current <= 0:
                cat = improvement_category(hero_now.category, hero_rank.category, river, h)
                win_outs.append(Out(river, cat))
        elif res == 0:
            ties += 1
            if current < 0:
                cat = improvement_category(hero_now.category, hero_rank.category, river, h)
                tie_outs.append(Out(river, cat))

    total = len(rivers)
    bw, bt = wins / total, ties / total
    bl = 1.0 - bw - bt

    reason = suppression_reason(bw, bt)
    if reason is not None:
        return OutsResult(
            baseline_win=bw,
            baseline_tie=bt,
            baseline_lose=bl,
            total_river_cards=total,
            suppressed=OutsSuppression(reason, bw, bt),
        )

    return OutsResult(
        baseline_win=bw,
        baseline_tie=bt,
        baseline_lose=bl,
        total_river_cards=total,
        win_outs=win_outs,
        tie_outs=tie_outs,
    )
