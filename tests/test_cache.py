import threading
import time

import pytest

from worldgen.cache import SeedCache, cache_stats, clear_caches, get_rivers, river_cache
from worldgen.settings import WorldSettings


def test_lru_eviction():
    built = []

    def builder(seed, settings):
        built.append(seed)
        return {"seed": seed}

    settings = WorldSettings(max_cached_seeds=2)
    cache = SeedCache("test model", builder)
    first = cache.get(1, settings)
    cache.get(2, settings)
    assert cache.get(1, settings) is first
    cache.get(3, settings)  # evicts seed 2, the least recently used
    assert len(cache) == 2
    assert (1, settings) in cache
    assert (2, settings) not in cache
    cache.get(2, settings)
    assert built == [1, 2, 3, 2]


def test_settings_are_part_of_the_key():
    cache = SeedCache("test model", lambda seed, settings: object())
    a = cache.get(1, WorldSettings())
    b = cache.get(1, WorldSettings(ocean_fraction=0.4))
    assert a is not b
    assert cache.get(1, WorldSettings()) is a


def test_concurrent_requests_build_once():
    calls = []
    lock = threading.Lock()

    def slow_builder(seed, settings):
        with lock:
            calls.append(seed)
        time.sleep(0.05)
        return object()

    cache = SeedCache("slow model", slow_builder)
    settings = WorldSettings()
    results = []

    def worker():
        results.append(cache.get(7, settings))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert calls == [7], f"Expected one build, got {len(calls)}"
    assert len(results) == 8
    assert all(r is results[0] for r in results)


def test_failed_build_is_not_published():
    attempts = []

    def flaky(seed, settings):
        attempts.append(seed)
        if len(attempts) == 1:
            raise RuntimeError("boom")
        return "ok"

    cache = SeedCache("flaky model", flaky)
    settings = WorldSettings()
    with pytest.raises(RuntimeError):
        cache.get(1, settings)
    assert len(cache) == 0
    assert cache.get(1, settings) == "ok"


def test_concurrent_river_builds_share_one_system(small_settings):
    clear_caches()
    before = river_cache.builds
    systems = []

    def worker():
        systems.append(get_rivers(4242, small_settings))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert river_cache.builds - before == 1
    assert all(s is systems[0] for s in systems)
    assert len(systems) == 4
    assert len(systems[0].sources) > 0 and len(systems[0].segments) > 0
    assert cache_stats()["rivers"] == 1
