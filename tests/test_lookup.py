import itertools

import pytest

from holdem_equity.engine.equity import EquityEngine
from holdem_equity.helpers.results import EquityOptions
from holdem_equity.storage.base import StoreError
from holdem_equity.storage.lookup import EquityCache, canonical_order, create_equity_key
from holdem_equity.storage.memory import InMemoryEquityStore

FLOP = "2c 7s 9d"


class BrokenStore(InMemoryEquityStore):
    def get(self, key):
        raise StoreError("disk on fire")

    def put(self, key, result):
        raise StoreError("disk on fire")

    def touch(self, key):
        raise StoreError("disk on fire")


def test_key_format():
    key = create_equity_key(["14h 14d", "13h 13d"], "", "", {"mode": "exact"})
    assert key == "equity:13d13h|14d14h:::exact"
    assert create_equity_key(["14h 14d", "13h 13d"], options={"mode": "mc", "iterations": 5000}).endswith(":mc:5000")
    assert create_equity_key(["14h 14d", "13h 13d"]).endswith(":auto:200000:10000")
    assert create_equity_key(["14h 14d", "13h 13d"], FLOP, ["5h"]) == \
        "equity:13d13h|14d14h:9d7s2c:5h:auto:200000:10000"


def test_key_invariant_under_reordering():
    holes = [["14h", "14d"], ["13h", "13d"], ["9c", "8c"]]
    board = ["2c", "7s", "9d"]
    dead = ["5h", "4s"]
    expected = create_equity_key(holes, board, dead)
    for perm in itertools.permutations(holes):
        flipped = [list(reversed(h)) for h in perm]
        assert create_equity_key(flipped, list(reversed(board)), list(reversed(dead))) == expected


def test_canonical_order():
    assert canonical_order(["14h 14d", "13h 13d"]) == [1, 0]
    assert canonical_order(["13h 13d", "14h 14d"]) == [0, 1]


def test_cached_result_comes_back_in_caller_order():
    cache = EquityCache(InMemoryEquityStore(), engine=EquityEngine())
    first, hit = cache.compute(["14h 14d", "13h 13d"], FLOP, {"mode": "exact"})
    assert hit is False
    second, hit = cache.compute(["13d 13h", "14d 14h"], FLOP, {"mode": "exact"})
    assert hit is True
    assert second.win == pytest.approx([first.win[1], first.win[0]])
    assert second.lose == pytest.approx([first.lose[1], first.lose[0]])
    assert second.samples == first.samples == 990


def test_validation_runs_before_lookup():
    store = InMemoryEquityStore()
    cache = EquityCache(store)
    with pytest.raises(ValueError):
        cache.compute(["14h 14d"])
    assert store.count() == 0


def test_store_failures_degrade_to_misses():
    cache = EquityCache(BrokenStore())
    opts = EquityOptions(mode="exact")
    res, hit = cache.compute(["14h 14d", "13h 13d"], FLOP, opts)
    assert hit is False
    res.check()
    again, hit = cache.compute(["14h 14d", "13h 13d"], FLOP, opts)
    assert hit is True                  # served by the hot layer
    assert again.win == res.win


def test_store_promotes_into_hot_layer_and_stats():
    store = InMemoryEquityStore()
    cache = EquityCache(store, hot_capacity=1)
    opts = {"mode": "exact"}
    cache.compute(["14h 14d", "13h 13d"], FLOP, opts)
    cache.compute(["12h 12d", "11h 11d"], FLOP, opts)       # evicts the first from the hot layer
    assert len(cache.hot) == 1

    _, hit = cache.compute(["14h 14d", "13h 13d"], FLOP, opts)
    assert hit is True
    key = create_equity_key(["14h 14d", "13h 13d"], FLOP, (), opts)
    assert key in cache.hot

    stats = cache.stats()
    assert stats["size"] == 2
    assert stats["memory_cache_size"] == 1
    assert stats["max_memory_cache_size"] == 1
    assert stats["hits"] == 1
    assert stats["misses"] == 2
    assert stats["total_accesses"] == 1
    assert stats["most_accessed"][0] == {"key": key, "count": 1}

    cache.clear()
    assert cache.stats()["size"] == 0
    assert len(cache.hot) == 0
