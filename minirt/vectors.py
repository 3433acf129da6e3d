"""Four-component vectors used for points, directions and colours."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec:
    """A homogeneous vector: ``w`` is 1 for points and 0 for directions."""

    x: float
    y: float
    z: float
    w: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __add__(self, other: Vec) -> Vec:
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Vec) -> Vec:
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Vec:
        return self.scale(-1.0)

    def scale(self, factor: float) -> Vec:
        """Multiply every component by ``factor``."""
        return Vec(self.x * factor, self.y * factor, self.z * factor, self.w * factor)

    def hadamard(self, other: Vec) -> Vec:
        """Component-wise product, used to blend colours."""
        return Vec(self.x * other.x, self.y * other.y, self.z * other.z, self.w * other.w)

    def dot(self, other: Vec) -> float:
        """Dot product over all four components."""
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def length(self) -> float:
        """Euclidean length over all four components."""
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vec:
        """Return the vector scaled to unit length.

        A zero vector yields NaN components, as IEEE division does.
        """
        length = self.length()
        if length == 0.0:
            return Vec(*(math.nan for _ in range(4)))
        return Vec(self.x / length, self.y / length, self.z / length, self.w / length)

    def cross(self, other: Vec) -> Vec:
        """Cross product of the first three components; ``w`` is 0."""
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
            0.0,
        )