from itertools import combinations

from holdem_equity.helpers.combos import iter_combinations, n_choose_k


def test_matches_itertools_in_lexicographic_order():
    pool = list("abcdef")
    got = [tuple(c) for c in iter_combinations(pool, 3)]
    assert got == list(combinations(pool, 3))


def test_edge_sizes():
    assert [list(c) for c in iter_combinations([1, 2, 3], 0)] == [[]]
    assert list(iter_combinations([1, 2], 3)) == []
    assert [tuple(c) for c in iter_combinations([1, 2], 2)] == [(1, 2)]


def test_working_list_is_reused():
    seen = list(iter_combinations([1, 2, 3], 2))
    assert all(x is seen[0] for x in seen)


def test_n_choose_k():
    assert n_choose_k(52, 5) == 2_598_960
    assert n_choose_k(48, 5) == 1_712_304
    assert n_choose_k(3, 5) == 0
