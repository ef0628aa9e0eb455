from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..helpers.cards import Card, Hole
from ..helpers.results import EquityResult


class EquityBackend(ABC):
    """
    Strategy for exhaustive enumeration of board completions.

    The engine asks each backend, in priority order, whether it is available
    in this process and whether it takes a given call; the first one that
    answers yes to both does the work. Every backend must return the same
    numbers as the pure Python enumerator (floating-point tolerance only).
    """

    name: str = "abstract"

    def available(self) -> bool:
        return True

    @abstractmethod
    def supports(self, board_len: int, combos: int) -> bool:
        ...

    @abstractmethod
    def enumerate(self, players: Sequence[Hole], board: Sequence[Card], deck: Sequence[Card]) -> EquityResult:
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def select_backend(backends: Sequence[EquityBackend], board_len: int, combos: int) -> Optional[EquityBackend]:
    for b in backends:
        if b.available() and b.supports(board_len, combos):
            return b
    return None
