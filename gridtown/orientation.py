"""Grid axes and compass directions."""

from __future__ import annotations

from enum import Enum

from gridtown.geometry import Vec3


class GAxis(Enum):
    """The axis a road runs along."""

    X = "X"
    Z = "Z"

    @classmethod
    def default(cls) -> GAxis:
        return cls.X


class GDir(Enum):
    """A direction on the grid."""

    NORTH = "North"
    SOUTH = "South"
    WEST = "West"
    EAST = "East"

    def inverse(self) -> GDir:
        return _INVERSE[self]

    def index(self) -> int:
        """Slot of this direction in a four-way intersection."""
        return _INDEX[self]

    def binary_index(self) -> int:
        """Slot of this direction at one of a road segment's two ends."""
        return _BINARY_INDEX[self]

    def as_vec3(self) -> Vec3:
        return _VECTORS[self]


_INVERSE = {
    GDir.NORTH: GDir.SOUTH,
    GDir.SOUTH: GDir.NORTH,
    GDir.WEST: GDir.EAST,
    GDir.EAST: GDir.WEST,
}

_INDEX = {GDir.NORTH: 0, GDir.SOUTH: 1, GDir.WEST: 2, GDir.EAST: 3}

_BINARY_INDEX = {GDir.NORTH: 0, GDir.SOUTH: 1, GDir.WEST: 0, GDir.EAST: 1}

_VECTORS = {
    GDir.NORTH: Vec3(0.0, 0.0, 1.0),
    GDir.SOUTH: Vec3(0.0, 0.0, -1.0),
    GDir.WEST: Vec3(1.0, 0.0, 0.0),
    GDir.EAST: Vec3(-1.0, 0.0, 0.0),
}