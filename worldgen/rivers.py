from __future__ import annotations

"""
rivers.py

River and lake network for one seed.

The network is computed once over a fixed reference region, independent of
which chunks are later requested, and published as an immutable RiverSystem.
Chunk generation only ever reads from it, which is what lets rivers cross
chunk borders even though every chunk is assembled in isolation.

Build steps:
  A) Scan land on a jittered coarse grid and score candidate sources by
     elevation rank and suitability noise.
  B) Greedily accept the best candidates subject to spacing and a cap.
  C) Trace each source down the drainage surface until it cycles, reaches
     ocean, hits a local minimum or runs out of steps; carve lakes on the way.
  D) Classify every path tile into a river-segment shape.
  E) Scatter standalone lakes away from the traced rivers.
"""

import logging
import math
import random
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import DefaultDict, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .fields import TileFieldModel
from .noise import NoiseField
from .rng import coord_unit, make_rng, stable_hash
from .settings import WorldSettings
from .tile import Coordinate, RiverSegment

logger = logging.getLogger("worldgen.rivers")
logger.addHandler(logging.NullHandler())

_SOURCE_NOISE_OFFSET = 9000
_MEANDER_OFFSET = 9100
_LAKE_NOISE_OFFSET = 9200
_SOURCE_TAG = 0x5011
_STANDALONE_TAG = 0x1A4E
_JITTER_X_TAG = 0x71
_JITTER_Y_TAG = 0x72

# 8-connected neighbourhood, in a fixed order so ties resolve deterministically.
NEIGHBORS_8: Tuple[Tuple[int, int], ...] = (
    (0, -1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
)


class RiverTier(Enum):
    STREAM = "stream"
    MEDIUM = "medium"
    REGIONAL = "regional"
    CONTINENTAL = "continental"


class StopReason(Enum):
    OCEAN = "ocean"
    CYCLE = "cycle"
    MINIMUM = "minimum"
    BUDGET = "budget"


@dataclass(frozen=True)
class TierProfile:
    """Length budget and lake behaviour for one river tier."""

    tier: RiverTier
    max_steps: int
    mid_lake_chance: float
    terminal_lake_chance: float
    lake_radius: int


TIER_PROFILES: Tuple[TierProfile, ...] = (
    TierProfile(RiverTier.STREAM, 60, 0.0, 0.15, 2),
    TierProfile(RiverTier.MEDIUM, 150, 0.05, 0.3, 3),
    TierProfile(RiverTier.REGIONAL, 300, 0.08, 0.45, 4),
    TierProfile(RiverTier.CONTINENTAL, 600, 0.1, 0.6, 6),
)

# Upper score bound of every tier except the last.
_TIER_CUTS: Tuple[float, ...] = (0.35, 0.6, 0.85)


@dataclass(frozen=True)
class RiverPath:
    source: Coordinate
    tier: RiverTier
    coords: Tuple[Coordinate, ...]
    stop_reason: StopReason


@dataclass(frozen=True)
class StandaloneLake:
    """A lake not connected to any traced river."""

    center: Coordinate
    radius: int


def classify_tier(height: float, draw: float) -> TierProfile:
    """
    Pick a tier from the source's height rank among scanned land, in [0, 1],
    and a per-source draw in [0, 1). Higher sources are more likely to become
    long rivers.
    """
    height = max(0.0, min(1.0, height))
    score = 0.6 * height + 0.4 * draw
    for cut, profile in zip(_TIER_CUTS, TIER_PROFILES):
        if score < cut:
            return profile
    return TIER_PROFILES[-1]


# ─────────────────────────────────────────────────────────────────────────────
# == SEGMENT CLASSIFICATION ==

_BENDS: Dict[Tuple[str, str], RiverSegment] = {
    ("N", "E"): RiverSegment.BEND_NE,
    ("N", "W"): RiverSegment.BEND_NW,
    ("S", "E"): RiverSegment.BEND_SE,
    ("S", "W"): RiverSegment.BEND_SW,
}


def _sides(dx: int, dy: int) -> Set[str]:
    """Tile sides a link towards (dx, dy) passes through. y grows southwards."""
    sides: Set[str] = set()
    if dx > 0:
        sides.add("E")
    elif dx < 0:
        sides.add("W")
    if dy > 0:
        sides.add("S")
    elif dy < 0:
        sides.add("N")
    return sides


def classify_segment(
    coord: Coordinate,
    prev: Optional[Coordinate] = None,
    nxt: Optional[Coordinate] = None,
) -> RiverSegment:
    """
    Shape of the river at ``coord`` given its path neighbours. Path endpoints
    pass only one neighbour and are classified by that single direction.

    Raises:
        ValueError: If neither neighbour is given.
    """
    links = [(p[0] - coord[0], p[1] - coord[1]) for p in (prev, nxt) if p is not None]
    if not links:
        raise ValueError(f"River tile {coord} has no path neighbours")

    sides: Set[str] = set()
    for dx, dy in links:
        sides |= _sides(dx, dy)
    vertical = sides & {"N", "S"}
    horizontal = sides & {"E", "W"}

    if not vertical:
        return RiverSegment.HORIZONTAL
    if not horizontal:
        return RiverSegment.VERTICAL
    if len(vertical) == 2 and len(horizontal) == 2:
        # Straight diagonal: bend towards the downstream neighbour.
        dx, dy = links[-1]
        return _BENDS[(_sides(0, dy).pop(), _sides(dx, 0).pop())]
    if len(vertical) == 2:
        return RiverSegment.VERTICAL
    if len(horizontal) == 2:
        return RiverSegment.HORIZONTAL
    return _BENDS[(vertical.pop(), horizontal.pop())]


def classify_path(path: List[Coordinate]) -> List[RiverSegment]:
    """Segment shape for every coordinate of a path of two or more tiles."""
    result: List[RiverSegment] = []
    last = len(path) - 1
    for i, coord in enumerate(path):
        prev = path[i - 1] if i > 0 else None
        nxt = path[i + 1] if i < last else None
        result.append(classify_segment(coord, prev, nxt))
    return result


# ─────────────────────────────────────────────────────────────────────────────
# == PUBLISHED SYSTEM ==

class RiverSystem:
    """
    Immutable river and lake network of one seed. Lookups never mutate state
    and never re-run the build.
    """

    __slots__ = (
        "seed",
        "sources",
        "paths",
        "segments",
        "lake_tiles",
        "standalone_lakes",
        "standalone_lake_tiles",
    )

    def __init__(
        self,
        seed: int,
        sources: Iterable[Coordinate],
        paths: Iterable[RiverPath],
        segments: Dict[Coordinate, RiverSegment],
        lake_tiles: Iterable[Coordinate],
        standalone_lakes: Iterable[StandaloneLake],
        standalone_lake_tiles: Iterable[Coordinate],
    ) -> None:
        self.seed = seed
        self.sources: Tuple[Coordinate, ...] = tuple(sources)
        self.paths: Tuple[RiverPath, ...] = tuple(paths)
        self.segments: Mapping[Coordinate, RiverSegment] = MappingProxyType(dict(segments))
        self.lake_tiles: frozenset = frozenset(lake_tiles)
        self.standalone_lakes: Tuple[StandaloneLake, ...] = tuple(standalone_lakes)
        self.standalone_lake_tiles: frozenset = frozenset(standalone_lake_tiles)

    def river_segment_at(self, x: int, y: int) -> RiverSegment:
        return self.segments.get((x, y), RiverSegment.NONE)

    def is_lake(self, x: int, y: int) -> bool:
        coord = (x, y)
        return coord in self.lake_tiles or coord in self.standalone_lake_tiles

    def __repr__(self) -> str:
        return (
            f"RiverSystem(seed={self.seed}, sources={len(self.sources)}, "
            f"river_tiles={len(self.segments)}, lake_tiles={len(self.lake_tiles)}, "
            f"standalone_lakes={len(self.standalone_lakes)})"
        )


# ─────────────────────────────────────────────────────────────────────────────
# == BUILD ==

class _SpatialIndex:
    """Bucketed point set answering 'is anything within radius' queries."""

    def __init__(self, cell: int) -> None:
        self.cell = max(1, cell)
        self._buckets: DefaultDict[Tuple[int, int], List[Coordinate]] = defaultdict(list)

    def add(self, coord: Coordinate) -> None:
        self._buckets[(coord[0] // self.cell, coord[1] // self.cell)].append(coord)

    def near(self, coord: Coordinate, radius: float) -> bool:
        x, y = coord
        r2 = radius * radius
        span = int(math.ceil(radius / self.cell))
        bx, by = x // self.cell, y // self.cell
        for gy in range(by - span, by + span + 1):
            for gx in range(bx - span, bx + span + 1):
                for px, py in self._buckets.get((gx, gy), ()):
                    if (px - x) ** 2 + (py - y) ** 2 <= r2:
                        return True
        return False


class _RiverBuilder:
    """Scratch state for one build; discarded once the RiverSystem is published."""

    def __init__(self, seed: int, settings: WorldSettings, fields: TileFieldModel) -> None:
        self.seed = seed
        self.rs = settings.rivers
        self.fields = fields
        self.source_noise = NoiseField(stable_hash(seed, _SOURCE_NOISE_OFFSET))
        self.meander = NoiseField(stable_hash(seed, _MEANDER_OFFSET))
        self.lake_noise = NoiseField(stable_hash(seed, _LAKE_NOISE_OFFSET))
        self._elevation_cache: Dict[Coordinate, float] = {}
        self._drainage_cache: Dict[Coordinate, float] = {}
        self.height_rank: Dict[Coordinate, float] = {}
        self.segments: Dict[Coordinate, RiverSegment] = {}
        self.lake_tiles: Set[Coordinate] = set()

    def elevation(self, x: int, y: int) -> float:
        coord = (x, y)
        elev = self._elevation_cache.get(coord)
        if elev is None:
            elev = self.fields.elevation(x, y)
            self._elevation_cache[coord] = elev
        return elev

    def drainage(self, x: int, y: int) -> float:
        coord = (x, y)
        value = self._drainage_cache.get(coord)
        if value is None:
            value = self.fields.continents.drainage(x, y)
            self._drainage_cache[coord] = value
        return value

    # Step A -----------------------------------------------------------------
    def scan_sources(self) -> List[Tuple[float, Coordinate]]:
        """
        Score jittered land samples; keep those above the source threshold.

        Height is the sample's elevation rank among all land the scan found,
        so scores spread over [0, 1] whatever the seed's elevation range.
        """
        rs = self.rs
        stride = max(1, rs.source_stride)
        weight = rs.source_elevation_weight
        land: List[Tuple[float, Coordinate]] = []
        for gy in range(rs.region_min, rs.region_max, stride):
            for gx in range(rs.region_min, rs.region_max, stride):
                x = gx + int(coord_unit(self.seed, gx, gy, _JITTER_X_TAG) * stride)
                y = gy + int(coord_unit(self.seed, gx, gy, _JITTER_Y_TAG) * stride)
                elev = self.elevation(x, y)
                if elev >= 0.5:
                    land.append((elev, (x, y)))

        land.sort()
        top = max(1, len(land) - 1)
        candidates: List[Tuple[float, Coordinate]] = []
        for rank, (_elev, (x, y)) in enumerate(land):
            height = rank / top if len(land) > 1 else 1.0
            self.height_rank[(x, y)] = height
            suitability = (self.source_noise.sample(x * rs.source_scale, y * rs.source_scale) + 1.0) / 2.0
            score = weight * height + (1.0 - weight) * suitability
            if score > rs.source_threshold:
                candidates.append((score, (x, y)))
        return candidates

    # Step B -----------------------------------------------------------------
    def select_sources(self, candidates: List[Tuple[float, Coordinate]]) -> List[Coordinate]:
        """Best score first; reject candidates closer than ``source_spacing`` to an accepted one."""
        rs = self.rs
        ordered = sorted(candidates, key=lambda c: (-c[0], c[1]))
        index = _SpatialIndex(rs.source_spacing)
        accepted: List[Coordinate] = []
        for _score, coord in ordered:
            if len(accepted) >= rs.max_sources:
                break
            if index.near(coord, rs.source_spacing - 1e-9):
                continue
            accepted.append(coord)
            index.add(coord)
        return accepted

    # Step C -----------------------------------------------------------------
    def downhill_step(self, coord: Coordinate, height: float) -> Optional[Coordinate]:
        """
        Neighbour with the largest positive drop in the drainage surface,
        ranked with a small meander perturbation. None if no neighbour is lower.
        """
        rs = self.rs
        x, y = coord
        best: Optional[Coordinate] = None
        best_score = 0.0
        for dx, dy in NEIGHBORS_8:
            nx, ny = x + dx, y + dy
            drop = height - self.drainage(nx, ny)
            if drop <= 0.0:
                continue
            score = drop + self.meander.sample(nx * rs.meander_scale, ny * rs.meander_scale) * rs.meander_strength
            if best is None or score > best_score:
                best = (nx, ny)
                best_score = score
        return best

    def trace(self, source: Coordinate, profile: TierProfile) -> Tuple[List[Coordinate], StopReason]:
        """
        Follow the drainage surface downhill from ``source`` while the tiles
        stay on land; the ocean tile itself is never included.
        """
        path = [source]
        visited = {source}
        current = source
        current_height = self.drainage(*source)
        reason = StopReason.BUDGET
        for _ in range(profile.max_steps):
            nxt = self.downhill_step(current, current_height)
            if nxt is None:
                reason = StopReason.MINIMUM
                break
            if nxt in visited:
                reason = StopReason.CYCLE
                break
            if self.elevation(*nxt) < 0.5:
                reason = StopReason.OCEAN
                break
            path.append(nxt)
            visited.add(nxt)
            current, current_height = nxt, self.drainage(*nxt)
        return path, reason

    def carve_lake(self, center: Coordinate, radius: int, *, irregular: bool = True) -> Set[Coordinate]:
        """
        Tiles of a lake around ``center``. The boundary is the base radius
        stretched by angular and radial noise and, for irregular lakes, by a
        basin bonus for tiles lower than the centre. Only land at or below
        ``lake_max_elevation`` is included.
        """
        rs = self.rs
        cx, cy = center
        center_elev = self.elevation(cx, cy)
        reach = int(math.ceil(radius * 2.2)) + 1
        ox = cx * 0.173
        oy = cy * 0.173
        tiles: Set[Coordinate] = set()
        for y in range(cy - reach, cy + reach + 1):
            for x in range(cx - reach, cx + reach + 1):
                elev = self.elevation(x, y)
                if elev < 0.5 or elev > rs.lake_max_elevation:
                    continue
                dx, dy = x - cx, y - cy
                dist = math.hypot(dx, dy)
                stretch = self.lake_noise.sample(x * 0.31 + 5.3, y * 0.31 - 2.1) * 0.15
                if irregular and dist > 0.0:
                    angle = math.atan2(dy, dx)
                    # Sampled on circles so the boundary has no seam at +-pi.
                    stretch += self.lake_noise.sample(ox + math.cos(angle) * 1.1, oy + math.sin(angle) * 1.1) * 0.35
                    stretch += self.lake_noise.sample(
                        ox + math.cos(angle * 3.0) * 0.6 + 17.5, oy + math.sin(angle * 3.0) * 0.6
                    ) * 0.2
                    stretch += min(0.5, max(0.0, center_elev - elev) * rs.lake_basin_bonus)
                if dist <= radius * (1.0 + stretch):
                    tiles.add((x, y))
        return tiles

    def place_river_lakes(
        self,
        path: List[Coordinate],
        reason: StopReason,
        profile: TierProfile,
        rng: random.Random,
    ) -> None:
        rs = self.rs
        interval = max(1, rs.mid_lake_interval)
        for i in range(interval, len(path) - 1, interval):
            if rng.random() < profile.mid_lake_chance:
                self.lake_tiles |= self.carve_lake(path[i], max(1, profile.lake_radius // 2))

        end = path[-1]
        if reason is StopReason.MINIMUM and len(path) >= rs.min_lake_path:
            self.lake_tiles |= self.carve_lake(end, profile.lake_radius)
        elif reason is not StopReason.OCEAN and rng.random() < profile.terminal_lake_chance:
            self.lake_tiles |= self.carve_lake(end, max(1, profile.lake_radius - 1))

    # Step D -----------------------------------------------------------------
    def mark_segments(self, path: List[Coordinate]) -> None:
        """Record segment shapes; the first river to claim a tile keeps it."""
        if len(path) < 2:
            return
        for coord, segment in zip(path, classify_path(path)):
            self.segments.setdefault(coord, segment)

    # Step E -----------------------------------------------------------------
    def scatter_standalone_lakes(self, paths: List[RiverPath]) -> Tuple[List[StandaloneLake], Set[Coordinate]]:
        rs = self.rs
        rng = make_rng(self.seed, _STANDALONE_TAG)
        rivers = _SpatialIndex(max(1, rs.standalone_lake_river_clearance))
        for path in paths:
            for coord in path.coords:
                rivers.add(coord)

        lakes: List[StandaloneLake] = []
        tiles: Set[Coordinate] = set()
        for _ in range(rs.standalone_lake_attempts):
            if len(lakes) >= rs.standalone_lake_count:
                break
            # Draw everything up front so rejections do not shift later candidates.
            x = rng.randrange(rs.region_min, rs.region_max)
            y = rng.randrange(rs.region_min, rs.region_max)
            radius = rng.randint(2, 5)
            accept = rng.random()

            elev = self.elevation(x, y)
            if not rs.standalone_lake_min_elev <= elev <= rs.standalone_lake_max_elev:
                continue
            if rivers.near((x, y), rs.standalone_lake_river_clearance):
                continue
            spacing = rs.standalone_lake_spacing
            if any((lake.center[0] - x) ** 2 + (lake.center[1] - y) ** 2 < spacing * spacing for lake in lakes):
                continue
            suitability = (self.lake_noise.sample(x * 0.02 + 91.0, y * 0.02 - 13.0) + 1.0) / 2.0
            if suitability < 0.45 or accept >= rs.standalone_lake_chance:
                continue
            lakes.append(StandaloneLake((x, y), radius))
            tiles |= self.carve_lake((x, y), radius, irregular=False)
        return lakes, tiles

    def build(self) -> RiverSystem:
        candidates = self.scan_sources()
        sources = self.select_sources(candidates)
        paths: List[RiverPath] = []
        for source in sources:
            rng = make_rng(self.seed, _SOURCE_TAG, source[0], source[1])
            profile = classify_tier(self.height_rank[source], rng.random())
            coords, reason = self.trace(source, profile)
            self.mark_segments(coords)
            self.place_river_lakes(coords, reason, profile, rng)
            paths.append(RiverPath(source, profile.tier, tuple(coords), reason))

        standalone, standalone_tiles = self.scatter_standalone_lakes(paths)
        logger.debug(
            "Built river system for seed %d: %d candidates, %d sources, %d river tiles, "
            "%d lake tiles, %d standalone lakes",
            self.seed,
            len(candidates),
            len(sources),
            len(self.segments),
            len(self.lake_tiles),
            len(standalone),
        )
        return RiverSystem(
            seed=self.seed,
            sources=sources,
            paths=paths,
            segments=self.segments,
            lake_tiles=self.lake_tiles,
            standalone_lakes=standalone,
            standalone_lake_tiles=standalone_tiles,
        )


def build_river_system(seed: int, settings: WorldSettings, fields: TileFieldModel) -> RiverSystem:
    """Run the full source-scan, trace and lake build for one seed."""
    return _RiverBuilder(seed, settings, fields).build()


__all__ = [
    "NEIGHBORS_8",
    "RiverPath",
    "RiverSystem",
    "RiverTier",
    "StandaloneLake",
    "StopReason",
    "TIER_PROFILES",
    "TierProfile",
    "build_river_system",
    "classify_path",
    "classify_segment",
    "classify_tier",
]
