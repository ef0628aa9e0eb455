from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple

from .cards import Card, RANK_LETTERS, RANK_VALUES

# Classes the cache seeder computes first (premium pairs, broadways, suited aces)
PREMIUM_ORDER: Tuple[str, ...] = (
    "AA", "KK", "QQ", "JJ", "TT", "99", "88", "77", "66", "55", "44", "33", "22",
    "AKs", "AQs", "AJs", "ATs", "KQs", "KJs", "QJs", "JTs",
    "AKo", "AQo", "AJo", "KQo",
    "A9s", "A8s", "A7s", "A6s", "A5s", "A4s", "A3s", "A2s",
    "KTs", "QTs", "T9s", "98s", "87s", "76s", "65s", "54s",
)


def _letter(rank: int) -> str:
    return RANK_LETTERS.get(rank, str(rank))


def hand_class(hole: Sequence[Card]) -> str:
    c1, c2 = hole
    hi, lo = (c1, c2) if c1.rank >= c2.rank else (c2, c1)
    if hi.rank == lo.rank:
        return _letter(hi.rank) * 2
    return f"{_letter(hi.rank)}{_letter(lo.rank)}{'s' if hi.suit == lo.suit else 'o'}"


def starting_hands() -> Iterator[Tuple[str, Tuple[Card, Card]]]:
    """
    All 169 preflop classes with one representative hole each.
      pairs   -> hearts + diamonds
      suited  -> both hearts
      offsuit -> hearts + diamonds
    """
    ranks = sorted(RANK_VALUES, reverse=True)
    for r in ranks:
        yield _letter(r) * 2, (Card(r, "h"), Card(r, "d"))
    for i, hi in enumerate(ranks):
        for lo in ranks[i + 1:]:
            yield f"{_letter(hi)}{_letter(lo)}s", (Card(hi, "h"), Card(lo, "h"))
    for i, hi in enumerate(ranks):
        for lo in ranks[i + 1:]:
            yield f"{_letter(hi)}{_letter(lo)}o", (Card(hi, "h"), Card(lo, "d"))


def top_hands(count: int = 50) -> List[Tuple[str, Tuple[Card, Card]]]:
    by_name = dict(starting_hands())
    ordered = [n for n in PREMIUM_ORDER if n in by_name]
    ordered += [n for n in by_name if n not in PREMIUM_ORDER]
    return [(n, by_name[n]) for n in ordered[:count]]


def opponent_hole(hero: Tuple[Card, Card], villain: Tuple[Card, Card]) -> Tuple[Card, Card]:
    """Re-suit villain's representative so it shares no card with hero."""
    used = set(hero)
    suits = "schd"
    out: List[Card] = []
    for c in villain:
        if c not in used and c not in out:
            out.append(c)
            continue
        for s in suits:
            alt = Card(c.rank, s)
            if alt not in used and alt not in out:
                out.append(alt)
                break
    if villain[0].suit == villain[1].suit and out[0].suit != out[1].suit:
        # keep suited classes suited
        for s in "schd":
            a, b = Card(out[0].rank, s), Card(out[1].rank, s)
            if a not in used and b not in used:
                out = [a, b]
                break
    elif villain[0].suit != villain[1].suit and out[0].suit == out[1].suit:
        for s in "schd":
            alt = Card(out[1].rank, s)
            if s != out[0].suit and alt not in used and alt != out[0]:
                out[1] = alt
                break
    return out[0], out[1]
