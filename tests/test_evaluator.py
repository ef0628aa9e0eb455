import random
from itertools import combinations

import pytest

from holdem_equity.helpers.cards import FULL_DECK, Card, parse_cards
from holdem_equity.helpers.errors import InvalidHandSize
from holdem_equity.helpers.evaluator import (
    HandEvaluator,
    HandRank,
    compare_hands,
    compare_ranks,
    describe_rank,
    evaluate_5,
    evaluate_best,
    winners,
)


def _rank7(text):
    return HandEvaluator(capacity=16).evaluate7(parse_cards(text))


def test_straight_flush_beats_flush():
    board = ["Qs", "Js", "Ts", "2d", "3c"]
    hero = ["As", "Ks"]      # royal
    vill = ["Ah", "Kh"]      # just broadway straight (not flush)
    assert compare_hands(hero, vill, board) == 1


def test_pair_vs_high_card():
    board = ["2s", "7d", "Jh", "4c", "9c"]
    hero = ["Jc", "3d"]      # pair of J
    vill = ["Ah", "Kd"]      # high card
    assert compare_hands(hero, vill, board) == 1


def test_evaluate_best_returns_expected_shape():
    rank, best5 = evaluate_best(["Ah", "Ad"], ["7c", "8d", "9s", "2c", "3h"])
    assert rank.name == "pair"
    assert rank.tiebreak == (14, 9, 8, 7)
    assert len(best5) == 5


def test_evaluate_best_needs_full_board():
    with pytest.raises(InvalidHandSize):
        evaluate_best(["Ah", "Ad"], ["7c", "8d", "9s"])


@pytest.mark.parametrize("cards,name,tiebreak", [
    ("Ah Kh Qh Jh Th 2c 3d", "royal_flush", ()),
    ("Ah 2h 3h 4h 5h 9d Kc", "straight_flush", (5,)),
    ("Ah 2d 3c 4s 5h 9d Kc", "straight", (5,)),
    ("7s 7d 7h 7c Ad Kc 2s", "quads", (7, 14)),
    ("Ks Kd Kh 9c 9d 9h 2s", "full_house", (13, 9)),
    ("2h 5h 9h Jh Kh Td Qc", "flush", (13, 11, 9, 5, 2)),
    ("Ah Ad Kh Kd Qh Qd 2s", "two_pair", (14, 13, 12)),
    ("8c 8d 8h Ac Kd 2s 4h", "trips", (8, 14, 13)),
    ("9c 9d Ac Kd 7s 4h 2c", "pair", (9, 14, 13, 7)),
    ("Ac Jd 9s 7h 5c 3d 2h", "high_card", (14, 11, 9, 7, 5)),
])
def test_seven_card_categories(cards, name, tiebreak):
    r = _rank7(cards)
    assert r.name == name
    assert r.tiebreak == tiebreak


def test_evaluate7_matches_brute_force():
    rng = random.Random(7)
    ev = HandEvaluator()
    for _ in range(300):
        cards = rng.sample(FULL_DECK, 7)
        expected = max(evaluate_5(c) for c in combinations(cards, 5))
        assert compare_ranks(ev.evaluate7(cards), expected) == 0


def test_compare_ranks_is_total_order_and_matches_score():
    rng = random.Random(11)
    ev = HandEvaluator()
    ranks = [ev.evaluate7(rng.sample(FULL_DECK, 7)) for _ in range(60)]
    for a in ranks:
        assert compare_ranks(a, a) == 0
        for b in ranks:
            ab = compare_ranks(a, b)
            assert ab == -compare_ranks(b, a)
            assert ab == (a.score > b.score) - (a.score < b.score)
            for c in ranks[:10]:
                if ab > 0 and compare_ranks(b, c) > 0:
                    assert compare_ranks(a, c) > 0


def test_compare_ranks_pads_with_zero():
    assert compare_ranks(HandRank(0, (14,)), HandRank(0, (14, 0))) == 0
    assert compare_ranks(HandRank(1, (2,)), HandRank(0, (14, 13, 12, 11, 9))) == 1


def test_memo_is_suit_permutation_invariant():
    ev = HandEvaluator(capacity=128)
    cards = parse_cards("Ah 9h 4h 2h Kh 9c 3d")
    relabel = {"c": "d", "d": "h", "h": "s", "s": "c"}
    permuted = [Card(c.rank, relabel[c.suit]) for c in reversed(cards)]
    assert ev.evaluate7(cards) == ev.evaluate7(permuted)
    assert ev.cache_size() == 1
    assert ev.cache_stats()["hits"] == 1


def test_evaluator_rejects_wrong_sizes_and_clears():
    ev = HandEvaluator(capacity=8)
    with pytest.raises(InvalidHandSize):
        ev.evaluate7(parse_cards("Ah Kh Qh Jh Th 2c"))
    with pytest.raises(InvalidHandSize):
        ev.evaluate(parse_cards("Ah Kh Qh Jh"))
    assert ev.evaluate(parse_cards("Ah Kh Qh Jh 9c 2d")).name == "high_card"
    ev.clear_cache()
    assert ev.cache_size() == 0


def test_winners_returns_all_tied_indices():
    a = HandRank(2, (14, 13, 5))
    b = HandRank(2, (14, 13, 5))
    c = HandRank(1, (14, 13, 12, 11))
    assert winners([c, a, b]) == [1, 2]
    assert winners([a, c]) == [0]


def test_describe_rank():
    assert describe_rank(HandRank(6, (14, 13))) == "Full House, Aces full of Kings"
    assert describe_rank(HandRank(9)) == "Royal Flush"
    assert describe_rank(HandRank(1, (14, 13, 12, 11))) == "Pair of Aces"
    assert describe_rank(HandRank(8, (9,))) == "Straight Flush, Nine high"
