"""components.spatial — Points and directions in venue space.

All coordinates are in metres.  See ``core.constants`` for the axes.
``Vec3`` is immutable; movement code builds a new one each tick.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0        # m
    y: float = 0.0        # m
    z: float = 0.0        # m

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> Vec3:
        return Vec3(self.x * k, self.y * k, self.z * k)

    def __getitem__(self, axis: int) -> float:
        return (self.x, self.y, self.z)[axis]

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def planar_length(self) -> float:
        """Horizontal (x/z) length, ignoring height."""
        return math.hypot(self.x, self.z)

    def normalized(self) -> Vec3:
        d = self.length()
        if d < 1e-9:
            return Vec3()
        return Vec3(self.x / d, self.y / d, self.z / d)

    def with_y(self, y: float) -> Vec3:
        return Vec3(self.x, y, self.z)
