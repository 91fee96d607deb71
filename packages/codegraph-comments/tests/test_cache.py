"""
Cache layer tests: bounded LRU, identity-scoped cache, registry.
"""

import gc
import threading

import pytest

from codegraph_comments.cache import (
    CacheRegistry,
    IdentityCache,
    LRUCache,
    clear_all_caches,
    get_default_caches,
)


class _Owner:
    pass


class TestLRUCache:
    """Bounded LRU behavior."""

    def test_get_missing_returns_default(self):
        cache = LRUCache(max_size=2)
        assert cache.get("missing") is None
        assert cache.get("missing", "fallback") == "fallback"

    def test_set_and_get(self):
        cache = LRUCache(max_size=2)
        cache.set("a", 1)
        assert cache.get("a") == 1
        assert cache.has("a")

    def test_never_exceeds_capacity(self):
        cache = LRUCache(max_size=3)
        for i in range(10):
            cache.set(i, i * i)
            assert cache.size() <= 3
        assert len(cache) == 3

    def test_first_inserted_evicted(self):
        """capacity + 1 distinct keys without re-access evict the first key."""
        cache = LRUCache(max_size=3)
        for key in ("a", "b", "c", "d"):
            cache.set(key, key.upper())

        assert not cache.has("a")
        assert [k for k in cache.keys()] == ["b", "c", "d"]

    def test_get_refreshes_recency(self):
        cache = LRUCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)

        assert cache.has("a")
        assert not cache.has("b")

    def test_update_existing_does_not_evict(self):
        cache = LRUCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)

        assert cache.size() == 2
        assert cache.get("a") == 10
        assert cache.get("b") == 2

    def test_delete(self):
        cache = LRUCache(max_size=2)
        cache.set("a", 1)
        assert cache.delete("a") is True
        assert cache.delete("a") is False

    def test_stats(self):
        cache = LRUCache(max_size=4)
        cache.set("a", 1)
        cache.get("a")
        cache.get("a")
        cache.get("b")

        stats = cache.stats()
        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.size == 1
        assert stats.max_size == 4
        assert stats.hit_rate == pytest.approx(2 / 3)

    def test_clear_resets_entries_and_stats(self):
        cache = LRUCache(max_size=2)
        cache.set("a", 1)
        cache.get("a")
        cache.clear()

        assert cache.size() == 0
        assert cache.stats().hits == 0

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_capacity(self, size):
        with pytest.raises(ValueError):
            LRUCache(max_size=size)

    def test_concurrent_access_stays_bounded(self):
        cache = LRUCache(max_size=50)

        def worker(offset):
            for i in range(500):
                cache.set((offset, i), i)
                cache.get((offset, i // 2))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert cache.size() == 50


class TestIdentityCache:
    """Entries tied to owner lifetime."""

    def test_set_get_by_identity(self):
        cache = IdentityCache()
        owner = _Owner()
        other = _Owner()
        cache.set(owner, "value")

        assert cache.get(owner) == "value"
        assert cache.get(other) is None
        assert cache.has(owner)

    def test_entry_released_with_owner(self):
        cache = IdentityCache()
        owner = _Owner()
        cache.set(owner, [1, 2, 3])
        assert len(cache) == 1

        del owner
        gc.collect()

        assert len(cache) == 0

    def test_unreferenceable_owner_is_not_cached(self):
        cache = IdentityCache()
        owner = {"not": "weakrefable"}

        cache.set(owner, "value")

        assert cache.get(owner) is None
        assert not cache.has(owner)
        assert cache.delete(owner) is False

    def test_delete(self):
        cache = IdentityCache()
        owner = _Owner()
        cache.set(owner, 1)
        assert cache.delete(owner) is True
        assert not cache.has(owner)


class TestCacheRegistry:
    def test_regex_compiled_once(self):
        caches = CacheRegistry()
        first = caches.regex(r"^TODO")
        second = caches.regex(r"^TODO")

        assert first is second
        assert first.is_valid
        assert first.search("TODO: later")

    def test_regex_flags_are_part_of_key(self):
        import re

        caches = CacheRegistry()
        assert caches.regex("todo") is not caches.regex("todo", re.IGNORECASE)

    def test_invalid_regex_cached_as_error(self):
        caches = CacheRegistry()
        result = caches.regex("(unclosed")

        assert not result.is_valid
        assert result.error
        assert result.search("(unclosed") is False
        assert caches.regex("(unclosed") is result

    def test_regex_cache_bounded(self):
        caches = CacheRegistry(regex_cache_size=2)
        for pattern in ("a", "b", "c"):
            caches.regex(pattern)
        assert caches.regexes.size() == 2

    def test_clear(self):
        caches = CacheRegistry()
        caches.regex("a")
        caches.comment_contexts.set("k", "v")
        caches.clear()

        stats = caches.stats()
        assert stats["regex"].size == 0
        assert stats["comment_context"].size == 0

    def test_default_registry_is_shared(self):
        assert get_default_caches() is get_default_caches()
        get_default_caches().regex("shared")
        clear_all_caches()
        assert get_default_caches().regexes.size() == 0
