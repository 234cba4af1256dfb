"""Vectors and grid cells in world space."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Vec3:
    """A 3D vector; the ground is the XZ plane with Y up."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def with_x(self, x: float) -> Vec3:
        return replace(self, x=x)

    def with_y(self, y: float) -> Vec3:
        return replace(self, y=y)

    def with_z(self, z: float) -> Vec3:
        return replace(self, z=z)

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vec3:
        """Unit vector in the same direction; NaN components for a zero vector."""
        length = self.length()
        if length == 0.0:
            return Vec3(math.nan, math.nan, math.nan)
        return self / length

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def distance(self, other: Vec3) -> float:
        return (self - other).length()

    def project_onto(self, other: Vec3) -> Vec3:
        """Projection onto ``other``; NaN components when ``other`` is zero."""
        denom = other.dot(other)
        if denom == 0.0:
            return Vec3(math.nan, math.nan, math.nan)
        return other * (self.dot(other) / denom)

    def angle_between(self, other: Vec3) -> float:
        denom = math.sqrt(self.dot(self) * other.dot(other))
        if denom == 0.0:
            return math.nan
        cosine = max(-1.0, min(1.0, self.dot(other) / denom))
        return math.acos(cosine)


def lerp(a, b, t):
    """Linear interpolation between ``a`` and ``b``."""
    return a + (b - a) * t


@dataclass(frozen=True)
class GridCell:
    """One unit square of the grid, addressed by integer X and Z."""

    x: int
    y: int

    @classmethod
    def at(cls, location: Vec3) -> GridCell:
        """The cell under a world position."""
        return cls(math.floor(location.x), math.floor(location.z))

    def center(self) -> Vec3:
        return Vec3(self.x + 0.5, 0.0, self.y + 0.5)

    def max_corner(self) -> Vec3:
        return Vec3(self.x + 1.0, 0.0, self.y + 1.0)

    def min_corner(self) -> Vec3:
        return Vec3(float(self.x), 0.0, float(self.y))