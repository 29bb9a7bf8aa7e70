"""Hierarchical level-of-detail clipmap over Morton-coded regions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Set, Tuple

from ampkit.region import RegionId
from ampkit.vecmath import Number, Vec2

MAX_LOD_LEVELS = 8
"""Maximum number of LOD levels supported by the clipmap."""

BASE_LOD_SIZE = 100.0
"""Size of the finest LOD level, in world units."""

LOD_SIZE_MULTIPLIER = 2.0
"""Size ratio between consecutive LOD levels."""

CLIPMAP_RINGS = 4
"""Number of rings in each clipmap level."""

RING_SIZE = 16
"""Size of each clipmap ring, in regions."""

LOD_TRANSITION_DISTANCE = 0.7
"""Fraction of the base size the center must move before regions are recomputed."""

LOD_HYSTERESIS = 0.1
"""Hysteresis factor for LOD transitions, to prevent flickering."""

_U8_MAX = 255
_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


def _to_u8(value: float) -> int:
    """Saturating float-to-byte conversion: NaN and negatives become 0."""
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= _U8_MAX:
        return _U8_MAX
    return int(value)


def _to_i32(value: float) -> int:
    """Saturating float-to-int32 conversion: NaN becomes 0."""
    if math.isnan(value):
        return 0
    if value <= _I32_MIN:
        return _I32_MIN
    if value >= _I32_MAX:
        return _I32_MAX
    return int(value)


@dataclass
class ClipmapConfig:
    """Settings of the clipmap LOD system."""

    max_levels: int = MAX_LOD_LEVELS
    base_size: float = BASE_LOD_SIZE
    size_multiplier: float = LOD_SIZE_MULTIPLIER
    rings: int = CLIPMAP_RINGS
    ring_size: int = RING_SIZE
    transition_distance: float = LOD_TRANSITION_DISTANCE
    hysteresis: float = LOD_HYSTERESIS

    def __post_init__(self) -> None:
        if not 1 <= self.max_levels <= _U8_MAX:
            raise ValueError("max_levels must be between 1 and 255")
        if self.base_size <= 0.0:
            raise ValueError("base_size must be positive")
        if self.size_multiplier <= 0.0:
            raise ValueError("size_multiplier must be positive")
        if self.rings < 0:
            raise ValueError("rings must not be negative")
        if self.ring_size < 1:
            raise ValueError("ring_size must be at least 1")


class HierarchicalClipmap:
    """Tracks which regions are active at each level of detail around a center."""

    def __init__(self, config: ClipmapConfig | None = None, center: Vec2 = Vec2.ZERO) -> None:
        self._config = config if config is not None else ClipmapConfig()
        self._center = center
        self._previous_center = center
        self._active: List[List[RegionId]] = [[] for _ in range(self._config.max_levels)]
        self._active_sets: List[Set[RegionId]] = [set() for _ in range(self._config.max_levels)]
        self._update_active_regions()

    @property
    def center(self) -> Vec2:
        """Current center position."""
        return self._center

    @property
    def previous_center(self) -> Vec2:
        """Center position before the last accepted move."""
        return self._previous_center

    @property
    def config(self) -> ClipmapConfig:
        return self._config

    def update_center(self, new_center: Vec2) -> bool:
        """Move the center; regions are recomputed only if it moved far enough.

        Returns True if the clipmap was updated.
        """
        distance = (new_center - self._center).length()
        threshold = self._config.base_size * self._config.transition_distance
        if distance > threshold:
            self._previous_center = self._center
            self._center = new_center
            self._update_active_regions()
            return True
        return False

    def active_regions(self, level: int) -> Tuple[RegionId, ...]:
        """Active regions at ``level``; empty for a level outside the clipmap."""
        if 0 <= level < self._config.max_levels:
            return tuple(self._active[level])
        return ()

    def all_active_regions(self) -> List[Tuple[int, RegionId]]:
        """Every active region paired with its level, finest level first."""
        return [
            (level, region_id)
            for level, regions in enumerate(self._active)
            for region_id in regions
        ]

    def calculate_lod_level(self, distance: Number) -> int:
        """The LOD level suited to a distance from the center (0 is finest)."""
        config = self._config
        if distance <= config.base_size:
            return 0
        normalized = distance / config.base_size
        denominator = math.log2(config.size_multiplier)
        numerator = math.log2(normalized)
        if denominator == 0.0:
            raw = math.copysign(math.inf, numerator) if numerator != 0.0 else math.nan
        else:
            raw = math.floor(numerator / denominator)
        return min(_to_u8(raw), config.max_levels - 1)

    def level_size(self, level: int) -> float:
        """World size covered by one level."""
        return self._config.base_size * self._config.size_multiplier**level

    def should_load_region(self, region_id: RegionId, level: int) -> bool:
        """True if ``region_id`` is active at ``level``."""
        if not 0 <= level < self._config.max_levels:
            return False
        return region_id in self._active_sets[level]

    def _update_active_regions(self) -> None:
        config = self._config
        radius = (config.rings * config.ring_size) // 2
        offsets = range(-radius, radius + 1)
        for level in range(config.max_levels):
            region_size = self.level_size(level) / config.ring_size
            center_x = _to_i32(math.floor(self._center.x / region_size))
            center_y = _to_i32(math.floor(self._center.y / region_size))
            regions = [
                RegionId.from_coords(center_x + dx, center_y + dy)
                for dx in offsets
                for dy in offsets
                if center_x + dx >= 0 and center_y + dy >= 0
            ]
            self._active[level] = regions
            self._active_sets[level] = set(regions)