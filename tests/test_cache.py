"""Tests for the in-memory TTL cache."""

import pytest
from unittest.mock import patch

from lolstats import cache as cache_mod
from lolstats.cache import AggregationCache, TTLCache, account_key, icon_key


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return TTLCache(max_keys=3, default_ttl=60, clock=clock)


class TestTTLCache:

    def test_round_trip_before_expiry(self, store, clock):
        store.set("k", {"v": 1}, ttl=10)
        clock.advance(9.9)
        assert store.get("k") == {"v": 1}

    def test_absent_after_expiry(self, store, clock):
        store.set("k", "v", ttl=10)
        clock.advance(10)
        assert store.get("k") is None
        assert "k" not in store.keys()

    def test_default_ttl(self, store, clock):
        store.set("k", "v")
        clock.advance(59)
        assert store.has("k")
        clock.advance(1)
        assert not store.has("k")

    def test_hit_and_miss_counters(self, store):
        store.set("a", 1)
        store.get("a")
        store.get("a")
        store.get("missing")

        stats = store.stats()
        assert (stats.keys, stats.hits, stats.misses) == (1, 2, 1)
        assert stats.hit_rate == pytest.approx(66.666, rel=1e-3)
        assert stats.to_dict()["hitRate"] == 66.7

    def test_has_does_not_count(self, store):
        store.set("a", 1)
        store.has("a")
        store.has("b")
        assert store.stats().hits == 0
        assert store.stats().misses == 0

    def test_capacity_purges_expired_first(self, store, clock):
        store.set("old", 1, ttl=5)
        store.set("b", 2)
        store.set("c", 3)
        clock.advance(5)

        store.set("d", 4)

        assert sorted(store.keys()) == ["b", "c", "d"]

    def test_capacity_evicts_oldest(self, store, clock):
        for key in ("a", "b", "c"):
            store.set(key, key)
            clock.advance(1)

        store.set("d", "d")

        assert store.keys() == ["b", "c", "d"]

    def test_overwrite_refreshes_age(self, store):
        store.set("a", 1)
        store.set("b", 2)
        store.set("c", 3)
        store.set("a", 10)

        store.set("d", 4)

        assert store.get("a") == 10
        assert store.get("b") is None

    def test_delete_and_purge(self, store, clock):
        store.set("a", 1, ttl=1)
        store.set("b", 2)
        assert store.delete("b") is True
        assert store.delete("b") is False
        clock.advance(2)
        assert store.purge_expired() == 1
        assert len(store) == 0


class TestAggregationCache:

    def test_key_namespaces(self):
        assert account_key("Faker#KR1", "asia") == "account:Faker#KR1:asia"
        assert icon_key(29) == "icon:29"

    def test_account_and_icon_ttls(self, clock):
        agg = AggregationCache(TTLCache(clock=clock), account_ttl=100, icon_ttl=10)
        agg.cache_account("Faker#KR1", "asia", {"data": 1})
        agg.cache_icon(29, b"png")

        clock.advance(50)
        assert agg.get_account("Faker#KR1", "asia") == {"data": 1}
        assert agg.get_icon(29) is None
        assert agg.keys() == ["account:Faker#KR1:asia"]

    def test_regions_do_not_collide(self, clock):
        agg = AggregationCache(TTLCache(clock=clock))
        agg.cache_account("Faker#KR1", "asia", "A")
        assert agg.get_account("Faker#KR1", "europe") is None


@pytest.mark.asyncio
async def test_log_stats_periodically_logs_when_non_empty(caplog):
    agg = AggregationCache(TTLCache())
    agg.cache_account("Faker#KR1", "asia", "A")
    agg.get_account("Faker#KR1", "asia")

    sleeps = 0

    async def fake_sleep(_):
        nonlocal sleeps
        sleeps += 1
        if sleeps > 1:
            raise RuntimeError("stop")

    with patch.object(cache_mod.asyncio, "sleep", side_effect=fake_sleep):
        with caplog.at_level("INFO", logger="lolstats.cache"):
            with pytest.raises(RuntimeError):
                await cache_mod.log_stats_periodically(agg, interval=60)

    assert "1 keys, 1 hits, 0 misses" in caplog.text
