from __future__ import annotations
from typing import List, Optional, Sequence

from ..helpers.cards import Card, Hole
from ..helpers.combos import iter_combinations
from ..helpers.evaluator import HandEvaluator, HandRank
from ..helpers.results import EquityResult, ShowdownTally
from .base import EquityBackend


class PythonBackend(EquityBackend):
    """Reference enumerator; takes every scenario."""

    name = "python"

    def __init__(self, evaluator: Optional[HandEvaluator] = None):
        self.evaluator = evaluator or HandEvaluator()

    def supports(self, board_len: int, combos: int) -> bool:
        return True

    def enumerate(self, players: Sequence[Hole], board: Sequence[Card], deck: Sequence[Card]) -> EquityResult:
        missing = 5 - len(board)
        n_players = len(players)
        tally = ShowdownTally(n_players)
        evaluate7 = self.evaluator.evaluate7

        # one 7-card buffer per player: [hole0, hole1, board..., completion...]
        hands: List[List[Card]] = []
        for hole in players:
            hands.append([hole[0], hole[1], *board] + [None] * missing)  # type: ignore[list-item]
        start = 2 + len(board)
        ranks: List[HandRank] = [None] * n_players  # type: ignore[list-item]

        for completion in iter_combinations(deck, missing):
            for p in range(n_players):
                h = hands[p]
                h[start:] = completion
                ranks[p] = evaluate7(h)
            tally.add(ranks)
        return tally.result()
