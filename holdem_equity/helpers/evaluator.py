from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from functools import lru_cache, total_ordering
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .cache import LRUTable
from .cards import Card, CardLike, ensure_distinct, parse_cards
from .errors import InvalidHandSize

CATEGORY = {
    "high_card": 0,
    "pair": 1,
    "two_pair": 2,
    "trips": 3,
    "straight": 4,
    "flush": 5,
    "full_house": 6,
    "quads": 7,
    "straight_flush": 8,
    "royal_flush": 9,
}
CATEGORY_NAMES = {v: k for k, v in CATEGORY.items()}

RANK_WORDS = {
    2: ("Two", "Twos"), 3: ("Three", "Threes"), 4: ("Four", "Fours"),
    5: ("Five", "Fives"), 6: ("Six", "Sixes"), 7: ("Seven", "Sevens"),
    8: ("Eight", "Eights"), 9: ("Nine", "Nines"), 10: ("Ten", "Tens"),
    11: ("Jack", "Jacks"), 12: ("Queen", "Queens"), 13: ("King", "Kings"),
    14: ("Ace", "Aces"),
}


def compare_ranks(a: "HandRank", b: "HandRank") -> int:
    """-1 if a < b, 0 if equal, 1 if a > b. Shorter tiebreaks are zero padded."""
    if a.category != b.category:
        return 1 if a.category > b.category else -1
    ta, tb = a.tiebreak, b.tiebreak
    for i in range(max(len(ta), len(tb))):
        x = ta[i] if i < len(ta) else 0
        y = tb[i] if i < len(tb) else 0
        if x != y:
            return 1 if x > y else -1
    return 0


@total_ordering
@dataclass(frozen=True)
class HandRank:
    category: int
    tiebreak: Tuple[int, ...] = ()

    def __lt__(self, other: "HandRank") -> bool:
        return compare_ranks(self, other) < 0

    @property
    def name(self) -> str:
        return CATEGORY_NAMES[self.category]

    @property
    def score(self) -> int:
        """
        Single int ordered exactly like compare_ranks:
          bits [category:4][t0:4][t1:4][t2:4][t3:4][t4:4]
        """
        s = self.category
        for i in range(5):
            s = (s << 4) | (self.tiebreak[i] if i < len(self.tiebreak) else 0)
        return s

    def to_dict(self) -> Dict[str, object]:
        return {"category": self.category, "name": self.name, "tiebreak": list(self.tiebreak)}


def straight_high(values: Iterable[int]) -> Optional[int]:
    present = set(values)
    if 14 in present:
        present.add(1)  # ace low
    for high in range(14, 4, -1):
        if all((high - i) in present for i in range(5)):
            return high
    return None


@lru_cache(maxsize=16_384)
def _classify_5(vals: Tuple[int, ...], is_flush: bool) -> HandRank:
    # vals sorted descending
    counts = Counter(vals)
    groups = sorted(counts.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
    pattern = [n for _, n in groups]
    sh = straight_high(vals) if len(counts) == 5 else None

    if sh is not None and is_flush:
        if sh == 14:
            return HandRank(CATEGORY["royal_flush"])
        return HandRank(CATEGORY["straight_flush"], (sh,))
    if pattern == [4, 1]:
        return HandRank(CATEGORY["quads"], (groups[0][0], groups[1][0]))
    if pattern == [3, 2]:
        return HandRank(CATEGORY["full_house"], (groups[0][0], groups[1][0]))
    if is_flush:
        return HandRank(CATEGORY["flush"], vals)
    if sh is not None:
        return HandRank(CATEGORY["straight"], (sh,))
    if pattern == [3, 1, 1]:
        return HandRank(CATEGORY["trips"], tuple(g[0] for g in groups))
    if pattern == [2, 2, 1]:
        return HandRank(CATEGORY["two_pair"], tuple(g[0] for g in groups))
    if pattern == [2, 1, 1, 1]:
        return HandRank(CATEGORY["pair"], tuple(g[0] for g in groups))
    return HandRank(CATEGORY["high_card"], vals)


def evaluate_5(cards5: Sequence[Card]) -> HandRank:
    if len(cards5) != 5:
        raise InvalidHandSize(5, len(cards5), "evaluate_5")
    s0 = cards5[0].suit
    is_flush = all(c.suit == s0 for c in cards5)
    vals = tuple(sorted((c.rank for c in cards5), reverse=True))
    return _classify_5(vals, is_flush)


def best_five(cards: Sequence[Card]) -> List[Card]:
    if not (5 <= len(cards) <= 7):
        raise InvalidHandSize("5 to 7", len(cards), "best_five")
    best = None
    best_combo: Tuple[Card, ...] = ()
    for combo in combinations(cards, 5):
        r = evaluate_5(combo)
        if best is None or compare_ranks(r, best) > 0:
            best, best_combo = r, combo
    return sorted(best_combo, key=lambda c: (c.rank, c.suit), reverse=True)


class HandEvaluator:
    """
    Best-hand evaluator with an explicit memo.

    The memo key is suit-isomorphism invariant: the sorted ranks of all cards
    plus the sorted ranks of the cards in the one suit holding five or more of
    them (at most one suit can, for 7 cards or fewer). Every other suit detail
    is irrelevant to the best hand, so relabeling suits or reordering cards
    hits the same entry, and two hands with the same key always rank equal.
    """

    def __init__(self, cache: Optional[LRUTable] = None, capacity: int = 200_000):
        self.cache: LRUTable = cache if cache is not None else LRUTable(capacity=capacity)

    @staticmethod
    def signature(cards: Sequence[Card]) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        vals = tuple(sorted((c.rank for c in cards), reverse=True))
        by_suit: Dict[str, List[int]] = {}
        for c in cards:
            by_suit.setdefault(c.suit, []).append(c.rank)
        flush: Tuple[int, ...] = ()
        for ranks in by_suit.values():
            if len(ranks) >= 5:
                flush = tuple(sorted(ranks, reverse=True))
                break
        return vals, flush

    def _best(self, cards: Sequence[Card]) -> HandRank:
        key = self.signature(cards)
        hit = self.cache.get(key)
        if hit is not None:
            return hit
        best = None
        for combo in combinations(cards, 5):
            r = evaluate_5(combo)
            if best is None or compare_ranks(r, best) > 0:
                best = r
        self.cache.put(key, best)
        return best

    def evaluate7(self, cards: Sequence[Card]) -> HandRank:
        if len(cards) != 7:
            raise InvalidHandSize(7, len(cards), "evaluate7")
        return self._best(cards)

    def evaluate(self, cards: Sequence[Card]) -> HandRank:
        if not (5 <= len(cards) <= 7):
            raise InvalidHandSize("5 to 7", len(cards), "evaluate")
        return self._best(cards)

    @staticmethod
    def compare(a: HandRank, b: HandRank) -> int:
        return compare_ranks(a, b)

    def cache_size(self) -> int:
        return len(self.cache)

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> Dict[str, int]:
        return self.cache.stats()


def winners(ranks: Sequence[HandRank]) -> List[int]:
    best = ranks[0]
    out = [0]
    for i in range(1, len(ranks)):
        c = compare_ranks(ranks[i], best)
        if c > 0:
            best = ranks[i]
            out = [i]
        elif c == 0:
            out.append(i)
    return out


def evaluate_best(
    hand: Iterable[CardLike],
    board: Iterable[CardLike],
    evaluator: Optional[HandEvaluator] = None,
) -> Tuple[HandRank, List[Card]]:
    h = parse_cards(hand)
    b = parse_cards(board)
    if len(h) != 2:
        raise InvalidHandSize(2, len(h), "hole")
    if len(b) != 5:
        raise InvalidHandSize(5, len(b), "board")
    cards = h + b
    ensure_distinct(cards)
    ev = evaluator or HandEvaluator(capacity=64)
    return ev.evaluate7(cards), best_five(cards)


def compare_hands(hand1, hand2, board, evaluator: Optional[HandEvaluator] = None) -> int:
    ev = evaluator or HandEvaluator(capacity=64)
    ensure_distinct(parse_cards(hand1) + parse_cards(hand2) + parse_cards(board))
    r1, _ = evaluate_best(hand1, board, ev)
    r2, _ = evaluate_best(hand2, board, ev)
    return compare_ranks(r1, r2)


def describe_rank(rank: HandRank) -> str:
    """Human-readable hand description."""
    one = lambda r: RANK_WORDS[r][0]
    many = lambda r: RANK_WORDS[r][1]
    tb = rank.tiebreak
    cat = rank.category

    if cat == CATEGORY["royal_flush"]:
        return "Royal Flush"
    if cat == CATEGORY["straight_flush"]:
        return f"Straight Flush, {one(tb[0])} high"
    if cat == CATEGORY["quads"]:
        return f"Four {many(tb[0])}, {one(tb[1])} kicker"
    if cat == CATEGORY["full_house"]:
        return f"Full House, {many(tb[0])} full of {many(tb[1])}"
    if cat == CATEGORY["flush"]:
        return f"Flush, {one(tb[0])} high"
    if cat == CATEGORY["straight"]:
        return f"Straight, {one(tb[0])} high"
    if cat == CATEGORY["trips"]:
        return f"Three {many(tb[0])}"
    if cat == CATEGORY["two_pair"]:
        return f"Two Pair, {many(tb[0])} and {many(tb[1])}, {one(tb[2])} kicker"
    if cat == CATEGORY["pair"]:
        return f"Pair of {many(tb[0])}"
    return f"High Card, {one(tb[0])}"
