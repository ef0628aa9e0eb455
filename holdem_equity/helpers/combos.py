from __future__ import annotations
import math
from typing import Iterator, List, Sequence, TypeVar

T = TypeVar("T")


def n_choose_k(n: int, k: int) -> int:
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


def iter_combinations(pool: Sequence[T], k: int) -> Iterator[List[T]]:
    """
    Yield every k-combination of ``pool`` in lexicographic index order.

    One working list of length k is allocated up front and mutated in place
    between yields, so consumers must copy it if they need to keep it.
    """
    n = len(pool)
    if k < 0 or k > n:
        return
    idx = list(range(k))
    out = [pool[i] for i in idx]
    yield out
    while True:
        i = k - 1
        while i >= 0 and idx[i] == i + n - k:
            i -= 1
        if i < 0:
            return
        idx[i] += 1
        out[i] = pool[idx[i]]
        for j in range(i + 1, k):
            idx[j] = idx[j - 1] + 1
            out[j] = pool[idx[j]]
        yield out
