from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .errors import InvalidOptions
from .evaluator import HandRank, winners

MODES = ("exact", "mc", "auto")
DEFAULT_ITERATIONS = 10_000
DEFAULT_EXACT_MAX_COMBOS = 200_000


@dataclass(frozen=True)
class EquityOptions:
    mode: str = "auto"
    iterations: int = DEFAULT_ITERATIONS
    exact_max_combos: int = DEFAULT_EXACT_MAX_COMBOS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise InvalidOptions(f"mode must be one of {', '.join(MODES)}, got {self.mode!r}")
        if int(self.iterations) <= 0:
            raise InvalidOptions("iterations must be positive")
        if int(self.exact_max_combos) <= 0:
            raise InvalidOptions("exact_max_combos must be positive")

    @staticmethod
    def from_dict(d: Optional[Mapping[str, Any]]) -> "EquityOptions":
        d = d or {}
        max_combos = d.get("exact_max_combos", d.get("exactMaxCombos"))
        return EquityOptions(
            mode=d.get("mode") or "auto",
            iterations=int(d.get("iterations") or DEFAULT_ITERATIONS),
            exact_max_combos=int(max_combos or DEFAULT_EXACT_MAX_COMBOS),
            seed=d.get("seed"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "iterations": self.iterations,
            "exact_max_combos": self.exact_max_combos,
            "seed": self.seed,
        }


@dataclass
class EquityResult:
    win: List[float]
    tie: List[float]
    lose: List[float]
    samples: int

    def to_dict(self) -> Dict[str, Any]:
        return {"win": list(self.win), "tie": list(self.tie), "lose": list(self.lose), "samples": self.samples}

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "EquityResult":
        return EquityResult(
            win=[float(x) for x in d["win"]],
            tie=[float(x) for x in d["tie"]],
            lose=[float(x) for x in d["lose"]],
            samples=int(d["samples"]),
        )

    def reordered(self, order: Sequence[int]) -> "EquityResult":
        """New result whose position i holds this result's position order[i]."""
        return EquityResult(
            win=[self.win[j] for j in order],
            tie=[self.tie[j] for j in order],
            lose=[self.lose[j] for j in order],
            samples=self.samples,
        )

    def check(self, tol: float = 1e-9) -> None:
        for i in range(len(self.win)):
            total = self.win[i] + self.tie[i] + self.lose[i]
            assert abs(total - 1.0) <= tol, f"player {i}: win+tie+lose = {total}"
        share = sum(self.win) + sum(self.tie)
        assert abs(share - 1.0) <= tol, f"sum of win+tie = {share}"


@dataclass(slots=True)
class ShowdownTally:
    """
    Accumulates showdown outcomes per board completion.
      single best hand -> +1 win for that player
      N-way tie        -> +1/N tie credit for each tied player
    """
    num_players: int
    wins: List[float] = field(default_factory=list)
    ties: List[float] = field(default_factory=list)
    n: int = 0

    def __post_init__(self) -> None:
        if not self.wins:
            self.wins = [0.0] * self.num_players
        if not self.ties:
            self.ties = [0.0] * self.num_players

    def add(self, ranks: Sequence[HandRank]) -> None:
        self.add_winners(winners(ranks))

    def add_winners(self, best: Sequence[int]) -> None:
        self.n += 1
        if len(best) == 1:
            self.wins[best[0]] += 1.0
        else:
            share = 1.0 / len(best)
            for i in best:
                self.ties[i] += share

    def result(self) -> EquityResult:
        if self.n == 0:
            raise ValueError("no showdowns recorded")
        win = [w / self.n for w in self.wins]
        tie = [t / self.n for t in self.ties]
        lose = [1.0 - w - t for w, t in zip(win, tie)]
        return EquityResult(win=win, tie=tie, lose=lose, samples=self.n)
