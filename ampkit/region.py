"""Spatial regions identified by 2D Morton codes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from ampkit.morton import morton_decode_2d, morton_encode_2d
from ampkit.vecmath import Number, Vec2

_U32_MAX = (1 << 32) - 1
_U64 = (1 << 64) - 1


def _to_u32(value: float) -> int:
    """Saturating float-to-unsigned conversion: NaN and negatives become 0."""
    if math.isnan(value):
        return 0
    if value <= 0.0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


@dataclass(frozen=True, order=True)
class RegionId:
    """Identifier of a region: the Morton code of its grid coordinates."""

    code: int

    @classmethod
    def from_coords(cls, x: int, y: int) -> RegionId:
        return cls(morton_encode_2d(x, y))

    def to_coords(self) -> Tuple[int, int]:
        return morton_decode_2d(self.code)

    def parent(self) -> RegionId:
        """The region one level up in the hierarchy."""
        return RegionId(self.code >> 2)

    def children(self) -> Tuple[RegionId, RegionId, RegionId, RegionId]:
        """The four regions one level down in the hierarchy."""
        base = (self.code << 2) & _U64
        return tuple(RegionId(base + i) for i in range(4))

    def level(self) -> int:
        """Depth of this region in the hierarchy, from the code's bit length."""
        return (self.code & _U64).bit_length() // 2

    def neighbors(self) -> List[RegionId]:
        """The up to eight surrounding regions with non-negative coordinates."""
        x, y = self.to_coords()
        return [
            RegionId.from_coords(x + dx, y + dy)
            for dx in (-1, 0, 1)
            for dy in (-1, 0, 1)
            if (dx, dy) != (0, 0) and x + dx >= 0 and y + dy >= 0
        ]

    def __str__(self) -> str:
        x, y = self.to_coords()
        return f"Region({x}, {y})"


@dataclass
class RegionBounds:
    """Axis-aligned rectangle covered by a region."""

    min: Vec2
    max: Vec2

    def center(self) -> Vec2:
        return (self.min + self.max) * 0.5

    def size(self) -> Vec2:
        return self.max - self.min

    def contains_point(self, point: Vec2) -> bool:
        return (
            self.min.x <= point.x <= self.max.x
            and self.min.y <= point.y <= self.max.y
        )

    def intersects(self, other: RegionBounds) -> bool:
        return (
            self.min.x <= other.max.x
            and self.max.x >= other.min.x
            and self.min.y <= other.max.y
            and self.max.y >= other.min.y
        )


def _cell(x: int, y: int, scale: float, level: int) -> Region:
    low = Vec2(x * scale, y * scale)
    return Region(RegionId.from_coords(x, y), RegionBounds(low, low + Vec2.splat(scale)), level)


@dataclass
class Region:
    """A region with its identifier, bounds and level of detail."""

    id: RegionId
    bounds: RegionBounds
    level: int

    @staticmethod
    def _scale(level: int, region_size: Number) -> float:
        if level < 0:
            raise ValueError("level must not be negative")
        return region_size * float(1 << level)

    @classmethod
    def from_world_coords(cls, world_pos: Vec2, level: int, region_size: Number) -> Region:
        """The region at ``level`` that holds a world position."""
        scale = cls._scale(level, region_size)
        grid_x = _to_u32(math.floor(world_pos.x / scale))
        grid_y = _to_u32(math.floor(world_pos.y / scale))
        return _cell(grid_x, grid_y, scale, level)

    @classmethod
    def regions_in_area(cls, area: RegionBounds, level: int, region_size: Number) -> List[Region]:
        """Every region at ``level`` whose grid cell touches ``area``."""
        scale = cls._scale(level, region_size)
        min_x = _to_u32(math.floor(area.min.x / scale))
        max_x = _to_u32(math.ceil(area.max.x / scale))
        min_y = _to_u32(math.floor(area.min.y / scale))
        max_y = _to_u32(math.ceil(area.max.y / scale))
        return [
            _cell(x, y, scale, level)
            for x in range(min_x, max_x + 1)
            for y in range(min_y, max_y + 1)
        ]