from __future__ import annotations
import random
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..helpers.cards import Card, CardLike, Hole, ensure_distinct, make_deck, parse_cards
from ..helpers.combos import n_choose_k
from ..helpers.errors import BoardTooLarge, InsufficientDeck, InvalidHandSize, TooFewPlayers
from ..helpers.evaluator import HandEvaluator, HandRank
from ..helpers.results import EquityOptions, EquityResult, ShowdownTally
from ..logging_config import get_logger
from .base import EquityBackend, select_backend
from .numba_backend import NumbaBackend
from .python_backend import PythonBackend

logger = get_logger(__name__)

HoleLike = Union[str, Iterable[CardLike]]
OptionsLike = Union[EquityOptions, Mapping[str, Any], None]


def parse_players(players: Iterable[HoleLike]) -> List[Hole]:
    """Parse each hole; sizes are checked later by validate_scenario()."""
    return [tuple(parse_cards(p)) for p in players]  # type: ignore[misc]


def validate_scenario(players: Sequence[Hole], board: Sequence[Card], dead: Sequence[Card]) -> None:
    if len(players) < 2:
        raise TooFewPlayers(len(players))
    for hole in players:
        if len(hole) != 2:
            raise InvalidHandSize(2, len(hole), "hole")
    if len(board) > 5:
        raise BoardTooLarge(len(board))
    known: List[Card] = []
    for hole in players:
        known.extend(hole)
    known.extend(board)
    known.extend(dead)
    ensure_distinct(known)


def remaining_deck(players: Sequence[Hole], board: Sequence[Card], dead: Sequence[Card]) -> List[Card]:
    known = set(board) | set(dead)
    for hole in players:
        known.update(hole)
    return make_deck(exclude=known)


def coerce_options(options: OptionsLike) -> EquityOptions:
    if options is None:
        return EquityOptions()
    if isinstance(options, EquityOptions):
        return options
    return EquityOptions.from_dict(options)


def prepare_scenario(
    players: Iterable[HoleLike],
    board: Iterable[CardLike] = (),
    dead: Iterable[CardLike] = (),
) -> Tuple[List[Hole], List[Card], List[Card]]:
    ps = parse_players(players)
    b = parse_cards(board)
    d = parse_cards(dead)
    validate_scenario(ps, b, d)
    return ps, b, d


def default_backends(evaluator: Optional[HandEvaluator] = None, settings=None) -> List[EquityBackend]:
    """Priority order: compiled preflop enumerator first, Python enumerator as the catch-all."""
    if settings is None:
        native = NumbaBackend()
    else:
        native = NumbaBackend(min_combos=settings.native_min_combos, enabled=settings.native_enabled)
    return [native, PythonBackend(evaluator)]


class EquityEngine:
    """
    Win/tie/lose fractions for 2+ known holes.

    5-card board -> one showdown
    otherwise    -> exact enumeration or Monte Carlo over the missing cards,
                    chosen by options.mode (auto compares C(deck, missing)
                    against options.exact_max_combos)
    """

    def __init__(
        self,
        evaluator: Optional[HandEvaluator] = None,
        backends: Optional[Sequence[EquityBackend]] = None,
        native_min_combos: int = 50_000,
    ):
        self.evaluator = evaluator or HandEvaluator()
        if backends is None:
            backends = [NumbaBackend(min_combos=native_min_combos), PythonBackend(self.evaluator)]
        self.backends: List[EquityBackend] = list(backends)

    @classmethod
    def from_settings(cls, settings) -> "EquityEngine":
        evaluator = HandEvaluator(capacity=settings.eval_cache_size)
        return cls(evaluator=evaluator, backends=default_backends(evaluator, settings))

    def compute_equity(
        self,
        players: Iterable[HoleLike],
        board: Iterable[CardLike] = (),
        options: OptionsLike = None,
        dead: Iterable[CardLike] = (),
    ) -> EquityResult:
        ps, b, d = prepare_scenario(players, board, dead)
        opts = coerce_options(options)
        return self.compute_prepared(ps, b, opts, d)

    def compute_prepared(
        self,
        players: Sequence[Hole],
        board: Sequence[Card],
        options: EquityOptions,
        dead: Sequence[Card],
    ) -> EquityResult:
        """Same as compute_equity for inputs already run through prepare_scenario()."""
        if len(board) == 5:
            return self._showdown(players, board)

        missing = 5 - len(board)
        deck = remaining_deck(players, board, dead)
        if len(deck) < missing:
            raise InsufficientDeck(missing, len(deck))

        combos = n_choose_k(len(deck), missing)
        if options.mode == "exact":
            exact = True
        elif options.mode == "mc":
            exact = False
        else:
            exact = combos <= options.exact_max_combos

        if exact:
            return self._enumerate(players, board, deck, combos)
        return self._monte_carlo(players, board, deck, options.iterations, options.seed)

    def _showdown(self, players: Sequence[Hole], board: Sequence[Card]) -> EquityResult:
        tally = ShowdownTally(len(players))
        tally.add([self.evaluator.evaluate7([h[0], h[1], *board]) for h in players])
        logger.debug("showdown: %d players on a complete board", len(players))
        return tally.result()

    def _enumerate(self, players: Sequence[Hole], board: Sequence[Card], deck: Sequence[Card], combos: int) -> EquityResult:
        backend = select_backend(self.backends, len(board), combos)
        if backend is None:
            backend = PythonBackend(self.evaluator)
        logger.debug("exact enumeration: %d combos via %s backend", combos, backend.name)
        return backend.enumerate(players, board, deck)

    def _monte_carlo(
        self,
        players: Sequence[Hole],
        board: Sequence[Card],
        deck: Sequence[Card],
        iterations: int,
        seed: Optional[int],
    ) -> EquityResult:
        rng = random.Random(seed)
        work = list(deck)
        n = len(work)
        missing = 5 - len(board)
        n_players = len(players)
        evaluate7 = self.evaluator.evaluate7
        tally = ShowdownTally(n_players)

        hands = [[h[0], h[1], *board] + [None] * missing for h in players]
        start = 2 + len(board)
        ranks: List[HandRank] = [None] * n_players  # type: ignore[list-item]

        for _ in range(int(iterations)):
            # Fisher-Yates over the first `missing` slots is enough to draw them uniformly
            for i in range(missing):
                j = rng.randrange(i, n)
                work[i], work[j] = work[j], work[i]
            for p in range(n_players):
                h = hands[p]
                h[start:] = work[:missing]
                ranks[p] = evaluate7(h)
            tally.add(ranks)

        logger.debug("monte carlo: %d iterations, seed=%s", iterations, seed)
        return tally.result()


def compute_equity(
    players: Iterable[HoleLike],
    board: Iterable[CardLike] = (),
    options: OptionsLike = None,
    dead: Iterable[CardLike] = (),
    engine: Optional[EquityEngine] = None,
) -> EquityResult:
    eng = engine or EquityEngine()
    return eng.compute_equity(players, board, options, dead)
