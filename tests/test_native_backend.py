import random

import pytest

from holdem_equity.engine.base import select_backend
from holdem_equity.engine.equity import EquityEngine, default_backends, remaining_deck
from holdem_equity.engine.numba_backend import NumbaBackend, score_cards
from holdem_equity.engine.python_backend import PythonBackend
from holdem_equity.config import Settings
from holdem_equity.helpers.cards import FULL_DECK, parse_cards, parse_hole
from holdem_equity.helpers.evaluator import HandEvaluator
from holdem_equity.helpers.results import EquityOptions


def test_packed_score_matches_evaluator():
    rng = random.Random(3)
    ev = HandEvaluator()
    for _ in range(500):
        cards = rng.sample(FULL_DECK, 7)
        assert score_cards(cards) == ev.evaluate7(cards).score


@pytest.mark.parametrize("text", [
    "Ah Kh Qh Jh Th 2c 3d",   # royal
    "Ah 2h 3h 4h 5h 9d Kc",   # steel wheel
    "Ks Kd Kh 9c 9d 9h 2s",   # two trips
    "7s 7d 7h 7c Kd Kc Ks",   # quads + trips
    "Ah Ad Kh Kd Qh Qd 2s",   # three pairs
    "Ah 2d 3c 4s 5h 6d Kc",   # six-high beats the wheel
])
def test_packed_score_edge_hands(text):
    cards = parse_cards(text)
    assert score_cards(cards) == HandEvaluator().evaluate7(cards).score


def test_numba_matches_python_enumerator_on_flop():
    players = [parse_hole("Ah Kh"), parse_hole("Qc Qd"), parse_hole("9s 8s")]
    board = parse_cards("Jh 7s 2h")
    deck = remaining_deck(players, board, [])
    py = PythonBackend().enumerate(players, board, deck)
    nb = NumbaBackend().enumerate(players, board, deck)
    assert nb.samples == py.samples == 903          # C(43, 2)
    for a, b in zip(nb.win + nb.tie + nb.lose, py.win + py.tie + py.lose):
        assert a == pytest.approx(b, abs=1e-12)


def test_backend_negotiation():
    numba_backend, python_backend = default_backends(HandEvaluator())
    assert numba_backend.supports(0, 1_712_304)
    assert not numba_backend.supports(3, 990)
    assert not numba_backend.supports(0, 10)
    assert select_backend([numba_backend, python_backend], 3, 990) is python_backend
    assert select_backend([numba_backend, python_backend], 0, 1_712_304) is numba_backend

    off = default_backends(None, Settings(native_enabled=False))
    assert not off[0].available()
    assert select_backend(off, 0, 1_712_304) is off[1]


def test_preflop_exact_runs_on_native_kernel():
    res = EquityEngine().compute_equity(["14h 14d", "13h 13d"], "", EquityOptions(mode="exact"))
    assert res.samples == 1_712_304
    assert 0.80 < res.win[0] < 0.85
    res.check()
