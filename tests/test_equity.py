import pytest

from holdem_equity.engine.equity import EquityEngine, compute_equity
from holdem_equity.helpers.cards import Card, make_deck, parse_cards
from holdem_equity.helpers.errors import (
    BoardTooLarge,
    DuplicateCard,
    InsufficientDeck,
    InvalidHandSize,
    InvalidOptions,
    TooFewPlayers,
)
from holdem_equity.helpers.results import EquityOptions, EquityResult, ShowdownTally

FLOP = "2c 7s 9d"


def test_complete_board_single_winner():
    res = compute_equity(["14h 14d", "13h 13d"], "14c 14s 13c 2h 3h")
    assert res.win == [1.0, 0.0]
    assert res.tie == [0.0, 0.0]
    assert res.lose == [0.0, 1.0]
    assert res.samples == 1


def test_complete_board_board_plays_straight_flush():
    res = compute_equity(["14c 13c", "14d 13d"], "12h 11h 10h 9h 8h")
    assert res.tie == [0.5, 0.5]
    assert res.win == [0.0, 0.0]
    res.check()


def test_three_way_split_on_quads_board():
    res = compute_equity(["2h 3h", "2d 3d", "2c 3c"], "14h 14d 14c 14s 13h")
    assert res.samples == 1
    for t in res.tie:
        assert t == pytest.approx(1 / 3)
    for lo in res.lose:
        assert lo == pytest.approx(2 / 3)
    res.check()


def test_validation_order():
    with pytest.raises(TooFewPlayers):
        compute_equity(["14h 14d 2c"])          # too few wins over bad hole size
    with pytest.raises(InvalidHandSize):
        compute_equity(["14h 14d 2c", "13h 13d"], "2s 3s 4s 5s 6s 7s")
    with pytest.raises(BoardTooLarge):
        compute_equity(["14h 14d", "13h 13d"], "14h 3s 4s 5s 6s 7s")
    with pytest.raises(DuplicateCard):
        compute_equity(["14h 14d", "14h 13d"], options={"mode": "warp"})
    with pytest.raises(InvalidOptions):
        compute_equity(["14h 14d", "13h 13d"], options={"mode": "warp"})


def test_duplicate_across_board_and_dead():
    with pytest.raises(DuplicateCard) as e:
        compute_equity(["14h 14d", "13h 13d"], FLOP, dead=["9d"])
    assert e.value.card == Card(9, "d")


def test_insufficient_deck():
    holes = parse_cards("14h 14d 13h 13d")
    dead = make_deck(exclude=holes)[:46]
    with pytest.raises(InsufficientDeck):
        compute_equity([holes[:2], holes[2:]], dead=dead)


def test_exact_flop_enumeration():
    res = compute_equity(["14h 14d", "13h 13d"], FLOP, {"mode": "exact"})
    assert res.samples == 990      # C(45, 2)
    assert res.win[0] > 0.85
    res.check()


def test_exact_and_monte_carlo_agree():
    engine = EquityEngine()
    players = ["14h 13h", "12c 12d"]
    exact = engine.compute_equity(players, FLOP, EquityOptions(mode="exact"))
    mc = engine.compute_equity(players, FLOP, EquityOptions(mode="mc", iterations=10_000, seed=7))
    assert mc.samples == 10_000
    assert abs(mc.win[0] - exact.win[0]) < 0.03
    assert abs(mc.tie[0] - exact.tie[0]) < 0.03
    mc.check()


def test_monte_carlo_is_reproducible_with_seed():
    opts = EquityOptions(mode="mc", iterations=2_000, seed=11)
    a = compute_equity(["14h 14d", "9c 8c"], "", opts)
    b = compute_equity(["14h 14d", "9c 8c"], "", opts)
    assert a.to_dict() == b.to_dict()


def test_auto_mode_switches_on_combination_count():
    players = ["14h 14d", "13h 13d"]
    turn = FLOP + " 4h"
    exact = compute_equity(players, turn)                                   # 44 rivers
    assert exact.samples == 44
    sampled = compute_equity(players, turn, EquityOptions(exact_max_combos=10, iterations=500, seed=1))
    assert sampled.samples == 500


def test_swapping_players_swaps_results():
    a = compute_equity(["14h 14d", "13h 13d"], FLOP, {"mode": "exact"})
    b = compute_equity(["13h 13d", "14h 14d"], FLOP, {"mode": "exact"})
    assert b.win == pytest.approx([a.win[1], a.win[0]])
    assert b.tie == pytest.approx([a.tie[1], a.tie[0]])


def test_options_validation_and_camel_case():
    assert EquityOptions.from_dict({"exactMaxCombos": 5}).exact_max_combos == 5
    assert EquityOptions.from_dict(None) == EquityOptions()
    with pytest.raises(InvalidOptions):
        EquityOptions(iterations=0)
    with pytest.raises(InvalidOptions):
        EquityOptions(exact_max_combos=-1)


def test_result_helpers():
    r = EquityResult(win=[0.7, 0.2], tie=[0.1, 0.0], lose=[0.2, 0.8], samples=10)
    flipped = r.reordered([1, 0])
    assert flipped.win == [0.2, 0.7]
    assert EquityResult.from_dict(r.to_dict()) == r


def test_showdown_tally_splits_ties():
    t = ShowdownTally(3)
    t.add_winners([0])
    t.add_winners([1, 2])
    res = t.result()
    assert res.win == [0.5, 0.0, 0.0]
    assert res.tie == [0.0, 0.25, 0.25]
    res.check()
    with pytest.raises(ValueError):
        ShowdownTally(2).result()
