"""Axis-aligned bounding boxes and spheres with intersection tests."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ampkit.vecmath import Number, Vec3


@dataclass
class Aabb:
    """Axis-aligned bounding box; the default box is empty (inverted bounds)."""

    min: Vec3 = field(default_factory=lambda: Vec3.splat(math.inf))
    max: Vec3 = field(default_factory=lambda: Vec3.splat(-math.inf))

    @classmethod
    def from_corners(cls, a: Vec3, b: Vec3) -> Aabb:
        """Build a box from two opposite corners given in any order."""
        return cls(a.min(b), a.max(b))

    @classmethod
    def from_center_half_extents(cls, center: Vec3, half_extents: Vec3) -> Aabb:
        return cls(center - half_extents, center + half_extents)

    @classmethod
    def empty(cls) -> Aabb:
        """A box that contains nothing and grows to fit whatever is added."""
        return cls(Vec3.splat(math.inf), Vec3.splat(-math.inf))

    @classmethod
    def infinite(cls) -> Aabb:
        """A box that contains everything."""
        return cls(Vec3.splat(-math.inf), Vec3.splat(math.inf))

    def center(self) -> Vec3:
        return (self.min + self.max) * 0.5

    def size(self) -> Vec3:
        return self.max - self.min

    def half_extents(self) -> Vec3:
        return self.size() * 0.5

    def is_empty(self) -> bool:
        return any(lo > hi for lo, hi in zip(self.min, self.max))

    def contains_point(self, point: Vec3) -> bool:
        return all(lo <= p <= hi for p, lo, hi in zip(point, self.min, self.max))

    def contains_aabb(self, other: Aabb) -> bool:
        """True if ``other`` lies wholly inside this box."""
        return all(o >= s for o, s in zip(other.min, self.min)) and all(
            o <= s for o, s in zip(other.max, self.max)
        )

    def intersects_aabb(self, other: Aabb) -> bool:
        return all(a <= b for a, b in zip(self.min, other.max)) and all(
            a >= b for a, b in zip(self.max, other.min)
        )

    def intersects_sphere(self, sphere: Sphere) -> bool:
        closest = sphere.center.clamp(self.min, self.max)
        distance_squared = (sphere.center - closest).length_squared()
        return distance_squared <= sphere.radius * sphere.radius

    def expand_to_include_point(self, point: Vec3) -> None:
        """Grow the box in place so that it contains ``point``."""
        if self.is_empty():
            self.min = point
            self.max = point
        else:
            self.min = self.min.min(point)
            self.max = self.max.max(point)

    def expand_to_include_aabb(self, other: Aabb) -> None:
        """Grow the box in place so that it contains ``other``."""
        if other.is_empty():
            return
        if self.is_empty():
            self.min = other.min
            self.max = other.max
        else:
            self.min = self.min.min(other.min)
            self.max = self.max.max(other.max)

    def grow(self, amount: Number) -> None:
        """Push every face outward by ``amount``."""
        growth = Vec3.splat(amount)
        self.min = self.min - growth
        self.max = self.max + growth


@dataclass
class Sphere:
    """A sphere; a negative radius is clamped to zero."""

    center: Vec3 = field(default_factory=lambda: Vec3.ZERO)
    radius: float = 0.0

    def __post_init__(self) -> None:
        self.radius = max(self.radius, 0.0)

    def contains_point(self, point: Vec3) -> bool:
        return (point - self.center).length_squared() <= self.radius * self.radius

    def contains_sphere(self, other: Sphere) -> bool:
        distance = (self.center - other.center).length()
        return distance + other.radius <= self.radius

    def intersects_sphere(self, other: Sphere) -> bool:
        distance_squared = (self.center - other.center).length_squared()
        radius_sum = self.radius + other.radius
        return distance_squared <= radius_sum * radius_sum

    def bounding_box(self) -> Aabb:
        radius_vec = Vec3.splat(self.radius)
        return Aabb.from_corners(self.center - radius_vec, self.center + radius_vec)

    def expand_to_include_point(self, point: Vec3) -> None:
        """Grow the radius in place so that the sphere contains ``point``."""
        distance = (point - self.center).length()
        if distance > self.radius:
            self.radius = distance

    def expand_to_include_sphere(self, other: Sphere) -> None:
        """Grow the radius in place so that the sphere contains ``other``."""
        required = (other.center - self.center).length() + other.radius
        if required > self.radius:
            self.radius = required