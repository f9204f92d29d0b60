from datetime import timedelta

import pytest

from app.utils.cache import POST_CACHE, POSTS_CACHE, BaseCacheManager, CacheManager


@pytest.fixture
def cache() -> CacheManager:
    return CacheManager(default_ttl=timedelta(minutes=5))


async def test_set_then_get(cache) -> None:
    await cache.set_cached_data(POST_CACHE, "abc", {"title": "Backend Engineer"})

    assert await cache.get_cached_data(POST_CACHE, "abc") == {"title": "Backend Engineer"}
    assert await cache.get_cached_data(POSTS_CACHE, "abc") is None


async def test_evict_removes_single_entry(cache) -> None:
    await cache.set_cached_data(POST_CACHE, "a", 1)
    await cache.set_cached_data(POST_CACHE, "b", 2)

    await cache.evict(POST_CACHE, "a")

    assert await cache.get_cached_data(POST_CACHE, "a") is None
    assert await cache.get_cached_data(POST_CACHE, "b") == 2


async def test_clear_cache_only_touches_named_cache(cache) -> None:
    await cache.set_cached_data(POSTS_CACHE, "page:1", {"totalElements": 1})
    await cache.set_cached_data(POSTS_CACHE, "page:2", {"totalElements": 1})
    await cache.set_cached_data(POST_CACHE, "abc", {"title": "x"})

    deleted = await cache.clear_cache(POSTS_CACHE)

    assert deleted == 2
    assert cache.get_cache_status() == {"total_caches": {POSTS_CACHE: 0, POST_CACHE: 1}}


async def test_expired_entry_is_dropped(cache) -> None:
    await cache.set_cached_data(POST_CACHE, "abc", "stale")
    cache.caches[POST_CACHE]["abc"]["created_time"] -= timedelta(minutes=10)

    assert await cache.get_cached_data(POST_CACHE, "abc") is None
    assert "abc" not in cache.caches[POST_CACHE]


def test_generate_cache_key_sorts_keyword_arguments() -> None:
    first = BaseCacheManager.generate_cache_key(page=1, search="dev", statuses=["Opening", "Pending"])
    second = BaseCacheManager.generate_cache_key(statuses=["Opening", "Pending"], search="dev", page=1)

    assert first == second


def test_generate_cache_key_values_with_separators_do_not_collide() -> None:
    combined = BaseCacheManager.generate_cache_key(page=1, search="foo:to_date:2024-01-01")
    separate = BaseCacheManager.generate_cache_key(page=1, search="foo", to_date="2024-01-01")

    assert combined != separate
