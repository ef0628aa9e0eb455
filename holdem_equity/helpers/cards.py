from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .errors import DuplicateCard, InvalidCardFormat

SUITS = "cdhs"
SUIT_INDEX = {s: i for i, s in enumerate(SUITS)}  # c=0 d=1 h=2 s=3
RANK_VALUES = tuple(range(2, 15))  # 2..14, 14 = ace

RANK_LETTERS = {10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"}
LETTER_TO_RANK = {"T": 10, "J": 11, "Q": 12, "K": 13, "A": 14}

CardLike = Union[str, "Card"]
Hole = Tuple["Card", "Card"]


@dataclass(frozen=True, order=True)
class Card:
    rank: int
    suit: str

    def __post_init__(self) -> None:
        if not isinstance(self.rank, int) or self.rank not in RANK_VALUES:
            raise InvalidCardFormat(self.rank, "rank must be 2..14")
        if self.suit not in SUIT_INDEX:
            raise InvalidCardFormat(self.suit, "suit must be one of c, d, h, s")

    def __str__(self) -> str:
        return f"{RANK_LETTERS.get(self.rank, str(self.rank))}{self.suit}"

    @property
    def code(self) -> str:
        """Numeric notation, e.g. ``14h``."""
        return f"{self.rank}{self.suit}"

    @property
    def suit_index(self) -> int:
        return SUIT_INDEX[self.suit]

    @staticmethod
    def from_str(s: str) -> "Card":
        return parse_card(s)


def parse_card(text: str) -> Card:
    if not isinstance(text, str):
        raise InvalidCardFormat(text, "expected a string")
    s = text.strip()
    if len(s) < 2 or len(s) > 3:
        raise InvalidCardFormat(text)
    rank_part, suit = s[:-1].upper(), s[-1].lower()
    if suit not in SUIT_INDEX:
        raise InvalidCardFormat(text, "suit must be one of c, d, h, s")
    if rank_part in LETTER_TO_RANK:
        rank = LETTER_TO_RANK[rank_part]
    elif rank_part.isdigit():
        rank = int(rank_part)
    else:
        raise InvalidCardFormat(text)
    if rank not in RANK_VALUES:
        raise InvalidCardFormat(text, "rank must be 2..14")
    return Card(rank, suit)


def parse_cards(cards: Union[str, Iterable[CardLike]]) -> List[Card]:
    if isinstance(cards, str):
        cards = cards.split()
    out: List[Card] = []
    for x in cards:
        out.append(x if isinstance(x, Card) else parse_card(x))
    return out


def parse_hole(text: Union[str, Iterable[CardLike]]) -> Hole:
    cs = parse_cards(text)
    if len(cs) != 2:
        raise InvalidCardFormat(text, "a hole is exactly 2 cards")
    return cs[0], cs[1]


def parse_board(text: Union[str, Iterable[CardLike], None]) -> List[Card]:
    if text is None:
        return []
    return parse_cards(text)


FULL_DECK: Tuple[Card, ...] = tuple(Card(r, s) for s in SUITS for r in RANK_VALUES)


def make_deck(exclude: Iterable[Card] = ()) -> List[Card]:
    dead = set(exclude)
    return [c for c in FULL_DECK if c not in dead]


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(str(c) for c in cards)


def ensure_distinct(cards: Iterable[Card]) -> None:
    seen = set()
    for c in cards:
        if c in seen:
            raise DuplicateCard(c)
        seen.add(c)
