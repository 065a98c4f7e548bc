import json
import re

import pytest

from shop_personalization import (
    CacheKeys,
    CacheStore,
    JsonFileKeyValueStore,
    MemoryKeyValueStore,
)
from shop_personalization.config import CacheConfig


@pytest.fixture
def cache(store, clock):
    return CacheStore(store, CacheConfig(), clock)


def test_set_then_get_returns_value(cache):
    cache.set("k", {"a": 1}, 1000)
    assert cache.get("k") == {"a": 1}


def test_set_writes_both_tiers(cache, store, clock):
    result = cache.set("k", "v", 10)

    assert result.ok
    assert cache.get_stats()["memory_keys"] == ["k"]
    stored = json.loads(store.get_item("cache_k"))
    assert stored == {"value": "v", "expiry": clock.now + 10, "timestamp": clock.now}


def test_entry_expires_after_ttl(cache, store, clock):
    cache.set("k", "v", 10)

    clock.advance(9)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") == "v"

    clock.advance(1)
    assert cache.get("k") is None
    assert store.get_item("cache_k") is None
    assert cache.get_stats()["memory_size"] == 0


def test_get_missing_returns_default(cache):
    assert cache.get("nope") is None
    assert cache.get("nope", default=[]) == []


def test_memory_capacity_evicts_first_inserted_key(store, clock):
    cache = CacheStore(store, CacheConfig(MEMORY_CAPACITY=50), clock)

    for i in range(51):
        cache.set(f"k{i}", i)

    stats = cache.get_stats()
    assert stats["memory_size"] == 50
    assert "k0" not in stats["memory_keys"]
    assert stats["memory_keys"][0] == "k1"
    assert len([k for k in store.keys() if k.startswith("cache_")]) == 51


def test_evicted_key_is_promoted_back_from_durable_tier(store, clock):
    cache = CacheStore(store, CacheConfig(MEMORY_CAPACITY=2), clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert "a" not in cache.get_stats()["memory_keys"]

    assert cache.get("a") == 1
    assert cache.get_stats()["memory_keys"] == ["c", "a"]


def test_get_does_not_refresh_eviction_order(store, clock):
    cache = CacheStore(store, CacheConfig(MEMORY_CAPACITY=2), clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)

    assert cache.get_stats()["memory_keys"] == ["b", "c"]


def test_reset_existing_key_keeps_insertion_position(store, clock):
    cache = CacheStore(store, CacheConfig(MEMORY_CAPACITY=2), clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)
    cache.set("c", 3)

    assert cache.get_stats()["memory_keys"] == ["b", "c"]


def test_new_instance_reads_durable_tier(store, clock):
    CacheStore(store, CacheConfig(), clock).set("catalog", [1, 2, 3])

    fresh = CacheStore(store, CacheConfig(), clock)
    assert fresh.get_stats()["memory_size"] == 0
    assert fresh.get("catalog") == [1, 2, 3]
    assert fresh.get_stats()["memory_keys"] == ["catalog"]


def test_expired_durable_entry_is_removed_not_promoted(store, clock):
    CacheStore(store, CacheConfig(), clock).set("k", "v", 5)
    clock.advance(6)

    fresh = CacheStore(store, CacheConfig(), clock)
    assert fresh.get("k") is None
    assert fresh.get_stats()["memory_size"] == 0
    assert store.get_item("cache_k") is None


def test_malformed_durable_entry_is_a_miss(cache, store):
    store.set_item("cache_bad", "{not json")
    store.set_item("cache_partial", json.dumps({"value": 1}))

    assert cache.get("bad") is None
    assert cache.get("partial") is None


def test_durable_write_failure_degrades_to_memory(failing_store, clock):
    cache = CacheStore(failing_store, CacheConfig(), clock)

    result = cache.set("k", "v")

    assert not result.ok
    assert cache.get("k") == "v"


def test_quota_exceeded_keeps_memory_copy(clock):
    cache = CacheStore(MemoryKeyValueStore(quota_bytes=40), CacheConfig(), clock)

    result = cache.set("big", "x" * 100)

    assert not result.ok
    assert cache.get("big") == "x" * 100


def test_unserializable_value_is_memory_only(cache, store):
    marker = object()
    result = cache.set("obj", marker)

    assert not result.ok
    assert cache.get("obj") is marker
    assert store.get_item("cache_obj") is None


def test_undecodable_durable_file_is_a_miss(tmp_path, clock):
    store = JsonFileKeyValueStore(tmp_path)
    store._path("cache_k").write_bytes(b"\xff\xfe{bad")
    cache = CacheStore(store, CacheConfig(), clock)

    assert cache.get("k", "fallback") == "fallback"


def test_unencodable_value_keeps_memory_copy(tmp_path, clock):
    cache = CacheStore(JsonFileKeyValueStore(tmp_path), CacheConfig(), clock)

    result = cache.set("k", "\ud800")

    assert not result.ok
    assert cache.get("k") == "\ud800"
    assert list(tmp_path.iterdir()) == []


def test_failing_store_never_raises(failing_store, clock):
    cache = CacheStore(failing_store, CacheConfig(), clock)

    assert cache.get("missing") is None
    cache.remove("missing")
    cache.clear()
    assert cache.invalidate_pattern(r".*") == 0


def test_remove_deletes_both_tiers(cache, store):
    cache.set("k", "v")
    cache.remove("k")

    assert cache.get("k") is None
    assert store.get_item("cache_k") is None


def test_clear_only_touches_prefixed_keys(cache, store):
    store.set_item("ud_recommendation_events", "{}")
    cache.set("a", 1)
    cache.set("b", 2)

    cache.clear()

    assert cache.get_stats()["memory_size"] == 0
    assert store.keys() == ["ud_recommendation_events"]


@pytest.mark.parametrize(
    "matcher",
    [
        r"^category:",
        re.compile(r"^category:"),
        CacheKeys.family("category:"),
        lambda key: key.startswith("category:"),
    ],
)
def test_invalidate_pattern_removes_matching_keys(store, clock, matcher):
    cache = CacheStore(store, CacheConfig(MEMORY_CAPACITY=2), clock)
    cache.set(CacheKeys.category_products("robes"), [1])
    cache.set(CacheKeys.category_products("chaussures"), [2])
    cache.set(CacheKeys.product("1"), {"id": "1"})
    # category:robes는 메모리에서 축출되어 영속 계층에만 있음

    removed = cache.invalidate_pattern(matcher)

    assert removed == 2
    assert cache.get("category:robes") is None
    assert cache.get("category:chaussures") is None
    assert cache.get("product:1") == {"id": "1"}
    assert sorted(store.keys()) == ["cache_product:1"]


def test_invalidate_pattern_matches_unprefixed_key(cache, store):
    cache.set("cache_like", 1)
    cache.set("other", 2)

    assert cache.invalidate_pattern(r"^cache_") == 1
    assert cache.get("other") == 2


def test_invalidate_pattern_rejects_unknown_matcher(cache):
    with pytest.raises(TypeError):
        cache.invalidate_pattern(42)


def test_get_or_set_calls_fetcher_once(cache):
    calls = []

    def fetcher():
        calls.append(1)
        return ["p-1", "p-2"]

    assert cache.get_or_set(CacheKeys.POPULAR_PRODUCTS, fetcher, 1000) == ["p-1", "p-2"]
    assert cache.get_or_set(CacheKeys.POPULAR_PRODUCTS, fetcher, 1000) == ["p-1", "p-2"]
    assert len(calls) == 1


def test_get_or_set_caches_falsy_values(cache):
    calls = []

    def fetcher():
        calls.append(1)
        return None

    cache.get_or_set("empty", fetcher)
    cache.get_or_set("empty", fetcher)
    assert len(calls) == 1


def test_get_or_set_propagates_fetcher_error(cache):
    def fetcher():
        raise RuntimeError("catalog down")

    with pytest.raises(RuntimeError):
        cache.get_or_set("k", fetcher)
    assert cache.get("k") is None
