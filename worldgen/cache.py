from __future__ import annotations

"""
cache.py

Bounded per-seed caches for the expensive, read-only world models.

Each entry is keyed by (seed, settings). A model is built at most once per key
at a time, and only the finished model is ever published, so concurrent chunk
requests for a new seed wait on one build instead of racing several.
"""

import logging
import threading
from collections import OrderedDict
from typing import Callable, Dict, Generic, Tuple, TypeVar

from .continents import ContinentModel
from .fields import TileFieldModel
from .rivers import RiverSystem, build_river_system
from .settings import WorldSettings

logger = logging.getLogger("worldgen.cache")
logger.addHandler(logging.NullHandler())

T = TypeVar("T")
CacheKey = Tuple[int, WorldSettings]


class SeedCache(Generic[T]):
    """
    LRU cache of per-seed models.

    ``get`` returns the cached model or builds it with ``builder``. The
    least-recently-used entry is evicted once the cache holds more than
    ``settings.max_cached_seeds`` entries.
    """

    def __init__(self, name: str, builder: Callable[[int, WorldSettings], T]) -> None:
        self.name = name
        self._builder = builder
        self._entries: "OrderedDict[CacheKey, T]" = OrderedDict()
        self._lock = threading.Lock()
        self._build_locks: Dict[CacheKey, threading.Lock] = {}
        self.builds = 0

    def _lookup(self, key: CacheKey):
        # Caller holds self._lock.
        if key in self._entries:
            self._entries.move_to_end(key)
            return True, self._entries[key]
        return False, None

    def get(self, seed: int, settings: WorldSettings) -> T:
        key = (seed, settings)
        with self._lock:
            found, value = self._lookup(key)
            if found:
                return value
            build_lock = self._build_locks.setdefault(key, threading.Lock())

        with build_lock:
            with self._lock:
                found, value = self._lookup(key)
                if found:
                    return value
            try:
                value = self._builder(seed, settings)
                with self._lock:
                    self._entries[key] = value
                    self._entries.move_to_end(key)
                    self.builds += 1
                    while len(self._entries) > max(1, settings.max_cached_seeds):
                        old_seed, _old_settings = next(iter(self._entries))
                        self._entries.popitem(last=False)
                        logger.debug("Evicted %s for seed %d", self.name, old_seed)
            finally:
                with self._lock:
                    self._build_locks.pop(key, None)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries


def _build_continents(seed: int, settings: WorldSettings) -> ContinentModel:
    return ContinentModel(seed, settings)


def _build_fields(seed: int, settings: WorldSettings) -> TileFieldModel:
    return TileFieldModel(seed, settings, continent_cache.get(seed, settings))


def _build_rivers(seed: int, settings: WorldSettings) -> RiverSystem:
    return build_river_system(seed, settings, field_cache.get(seed, settings))


continent_cache: SeedCache[ContinentModel] = SeedCache("continent model", _build_continents)
field_cache: SeedCache[TileFieldModel] = SeedCache("tile noise model", _build_fields)
river_cache: SeedCache[RiverSystem] = SeedCache("river system", _build_rivers)


def get_continents(seed: int, settings: WorldSettings) -> ContinentModel:
    return continent_cache.get(seed, settings)


def get_fields(seed: int, settings: WorldSettings) -> TileFieldModel:
    return field_cache.get(seed, settings)


def get_rivers(seed: int, settings: WorldSettings) -> RiverSystem:
    return river_cache.get(seed, settings)


def clear_caches() -> None:
    """Drop every cached model. Later requests rebuild identical models."""
    for cache in (continent_cache, field_cache, river_cache):
        cache.clear()
    logger.debug("Cleared all per-seed caches")


def cache_stats() -> Dict[str, int]:
    """Number of cached entries per model type."""
    return {
        "continents": len(continent_cache),
        "tile_noise": len(field_cache),
        "rivers": len(river_cache),
    }


__all__ = [
    "SeedCache",
    "cache_stats",
    "clear_caches",
    "continent_cache",
    "field_cache",
    "get_continents",
    "get_fields",
    "get_rivers",
    "river_cache",
]
