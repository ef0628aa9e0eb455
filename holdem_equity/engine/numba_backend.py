"""
numba_backend.py

Compiled exhaustive enumerator. Cards travel as parallel rank/suit int64
arrays; 7-card hands are scored directly (no 21-subset loop) into the same
packed integer as HandRank.score, so a larger score is a stronger hand.
"""
from __future__ import annotations
import time
from typing import Sequence

import numpy as np
from numba import njit

from ..helpers.cards import Card, Hole
from ..helpers.results import EquityResult
from ..logging_config import get_logger
from .base import EquityBackend

logger = get_logger(__name__)

WHEEL_MASK = (1 << 14) | (1 << 2) | (1 << 3) | (1 << 4) | (1 << 5)


@njit
def _straight_high(mask):
    for high in range(14, 5, -1):
        m = 0x1F << (high - 4)
        if (mask & m) == m:
            return high
    if (mask & WHEEL_MASK) == WHEEL_MASK:
        return 5
    return 0


@njit
def score7(ranks, suits):
    """
    Packed score for 7 cards:
      bits [category:4][t0:4][t1:4][t2:4][t3:4][t4:4]
    """
    counts = np.zeros(15, np.int64)
    suit_counts = np.zeros(4, np.int64)
    for i in range(7):
        counts[ranks[i]] += 1
        suit_counts[suits[i]] += 1

    flush_suit = -1
    for s in range(4):
        if suit_counts[s] >= 5:
            flush_suit = s

    # a 5+ card suit rules out quads and full houses among 7 cards
    if flush_suit >= 0:
        fmask = 0
        for i in range(7):
            if suits[i] == flush_suit:
                fmask |= 1 << ranks[i]
        sh = _straight_high(fmask)
        if sh == 14:
            return 9 << 20
        if sh > 0:
            return (8 << 20) | (sh << 16)
        score = 5 << 20
        shift = 16
        for r in range(14, 1, -1):
            if shift < 0:
                break
            if fmask & (1 << r):
                score |= r << shift
                shift -= 4
        return score

    quad = 0
    trip = 0
    trip2 = 0
    pair1 = 0
    pair2 = 0
    mask = 0
    for r in range(14, 1, -1):
        c = counts[r]
        if c > 0:
            mask |= 1 << r
        if c == 4:
            quad = r
        elif c == 3:
            if trip == 0:
                trip = r
            elif trip2 == 0:
                trip2 = r
        elif c == 2:
            if pair1 == 0:
                pair1 = r
            elif pair2 == 0:
                pair2 = r

    if quad > 0:
        kicker = 0
        for r in range(14, 1, -1):
            if r != quad and counts[r] > 0:
                kicker = r
                break
        return (7 << 20) | (quad << 16) | (kicker << 12)

    if trip > 0 and (trip2 > 0 or pair1 > 0):
        second = trip2 if trip2 > pair1 else pair1
        return (6 << 20) | (trip << 16) | (second << 12)

    sh = _straight_high(mask)
    if sh > 0:
        return (4 << 20) | (sh << 16)

    if trip > 0:
        score = (3 << 20) | (trip << 16)
        shift = 12
        for r in range(14, 1, -1):
            if shift < 8:
                break
            if counts[r] == 1:
                score |= r << shift
                shift -= 4
        return score

    if pair2 > 0:
        kicker = 0
        for r in range(14, 1, -1):
            if r != pair1 and r != pair2 and counts[r] > 0:
                kicker = r
                break
        return (2 << 20) | (pair1 << 16) | (pair2 << 12) | (kicker << 8)

    if pair1 > 0:
        score = (1 << 20) | (pair1 << 16)
        shift = 12
        for r in range(14, 1, -1):
            if shift < 4:
                break
            if counts[r] == 1:
                score |= r << shift
                shift -= 4
        return score

    score = 0
    shift = 16
    for r in range(14, 1, -1):
        if shift < 0:
            break
        if counts[r] == 1:
            score |= r << shift
            shift -= 4
    return score


@njit
def _enumerate_kernel(hole_ranks, hole_suits, board_ranks, board_suits, deck_ranks, deck_suits):
    n_players = hole_ranks.shape[0]
    n_board = board_ranks.shape[0]
    n = deck_ranks.shape[0]
    k = 5 - n_board

    wins = np.zeros(n_players, np.float64)
    ties = np.zeros(n_players, np.float64)
    scores = np.zeros(n_players, np.int64)
    hand_r = np.zeros(7, np.int64)
    hand_s = np.zeros(7, np.int64)
    for j in range(n_board):
        hand_r[2 + j] = board_ranks[j]
        hand_s[2 + j] = board_suits[j]

    idx = np.arange(k)
    total = 0
    while True:
        for j in range(k):
            hand_r[2 + n_board + j] = deck_ranks[idx[j]]
            hand_s[2 + n_board + j] = deck_suits[idx[j]]

        best = -1
        n_best = 0
        for p in range(n_players):
            hand_r[0] = hole_ranks[p, 0]
            hand_r[1] = hole_ranks[p, 1]
            hand_s[0] = hole_suits[p, 0]
            hand_s[1] = hole_suits[p, 1]
            s = score7(hand_r, hand_s)
            scores[p] = s
            if s > best:
                best = s
                n_best = 1
            elif s == best:
                n_best += 1

        if n_best == 1:
            for p in range(n_players):
                if scores[p] == best:
                    wins[p] += 1.0
        else:
            share = 1.0 / n_best
            for p in range(n_players):
                if scores[p] == best:
                    ties[p] += share
        total += 1

        i = k - 1
        while i >= 0 and idx[i] == i + n - k:
            i -= 1
        if i < 0:
            break
        idx[i] += 1
        for j in range(i + 1, k):
            idx[j] = idx[j - 1] + 1

    return wins, ties, total


def _cards_to_arrays(cards: Sequence[Card]):
    ranks = np.array([c.rank for c in cards], dtype=np.int64)
    suits = np.array([c.suit_index for c in cards], dtype=np.int64)
    return ranks, suits


def score_cards(cards: Sequence[Card]) -> int:
    if len(cards) != 7:
        raise ValueError("score_cards expects exactly 7 cards")
    r, s = _cards_to_arrays(cards)
    return int(score7(r, s))


class NumbaBackend(EquityBackend):
    """
    JIT-compiled enumerator for the all-preflop case, where a heads-up
    scenario already has C(48, 5) = 1,712,304 completions.
    """

    name = "numba"

    def __init__(self, min_combos: int = 50_000, enabled: bool = True):
        self.min_combos = int(min_combos)
        self.enabled = bool(enabled)
        self._warm = False

    def available(self) -> bool:
        return self.enabled

    def supports(self, board_len: int, combos: int) -> bool:
        return board_len == 0 and combos >= self.min_combos

    def warmup(self) -> None:
        if self._warm:
            return
        t0 = time.perf_counter()
        deck = [Card(r, s) for s in "cd" for r in range(2, 8)]
        self.enumerate([(Card(14, "h"), Card(14, "s")), (Card(13, "h"), Card(13, "s"))], deck[:1], deck[1:])
        self._warm = True
        logger.info("Numba equity kernel compiled in %.3fs", time.perf_counter() - t0)

    def enumerate(self, players: Sequence[Hole], board: Sequence[Card], deck: Sequence[Card]) -> EquityResult:
        hole_ranks = np.array([[h[0].rank, h[1].rank] for h in players], dtype=np.int64)
        hole_suits = np.array([[h[0].suit_index, h[1].suit_index] for h in players], dtype=np.int64)
        board_ranks, board_suits = _cards_to_arrays(board)
        deck_ranks, deck_suits = _cards_to_arrays(deck)

        wins, ties, total = _enumerate_kernel(
            hole_ranks, hole_suits, board_ranks, board_suits, deck_ranks, deck_suits
        )
        self._warm = True
        total = int(total)
        win = [float(w) / total for w in wins]
        tie = [float(t) / total for t in ties]
        lose = [1.0 - w - t for w, t in zip(win, tie)]
        return EquityResult(win=win, tie=tie, lose=lose, samples=total)
