"""Square matrices and the 4x4 transforms built from them."""

from __future__ import annotations

import math
from dataclasses import dataclass

from minirt.vectors import Vec


class SingularMatrixError(ValueError):
    """Raised when a matrix with a zero determinant is inverted."""


@dataclass(frozen=True)
class Matrix:
    """An immutable square matrix stored as a tuple of rows."""

    rows: tuple[tuple[float, ...], ...]

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(v) for v in row) for row in self.rows)
        if not rows or any(len(row) != len(rows) for row in rows):
            raise ValueError("a matrix must be square and non-empty")
        object.__setattr__(self, "rows", rows)

    @property
    def size(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> tuple[float, ...]:
        return self.rows[index]

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if other.size != self.size:
            raise ValueError("matrix sizes differ")
        columns = list(zip(*other.rows))
        return Matrix(
            tuple(
                tuple(sum(a * b for a, b in zip(row, col)) for col in columns)
                for row in self.rows
            )
        )

    def transform(self, vec: Vec) -> Vec:
        """Multiply this 4x4 matrix by a column vector."""
        if self.size != 4:
            raise ValueError("only a 4x4 matrix transforms a vector")
        values = tuple(vec)
        return Vec(*(sum(m * v for m, v in zip(row, values)) for row in self.rows))

    def transpose(self) -> Matrix:
        return Matrix(tuple(zip(*self.rows)))

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return the matrix with ``row`` and ``col`` removed."""
        if self.size < 2:
            raise ValueError("a 1x1 matrix has no submatrix")
        return Matrix(
            tuple(
                tuple(v for j, v in enumerate(values) if j != col)
                for i, values in enumerate(self.rows)
                if i != row
            )
        )

    def determinant(self) -> float:
        if self.size == 1:
            return self.rows[0][0]
        return sum(value * self.cofactor(0, col) for col, value in enumerate(self.rows[0]))

    def cofactor(self, row: int, col: int) -> float:
        minor = self.submatrix(row, col).determinant()
        return minor if (row + col) % 2 == 0 else -minor

    def scale(self, factor: float) -> Matrix:
        return Matrix(tuple(tuple(v * factor for v in row) for row in self.rows))

    def inverse(self) -> Matrix:
        det = self.determinant()
        if det == 0:
            raise SingularMatrixError("matrix is not invertible")
        cofactors = Matrix(
            tuple(
                tuple(self.cofactor(i, j) for j in range(self.size))
                for i in range(self.size)
            )
        )
        return cofactors.transpose().scale(1.0 / det)


def identity(x: float = 1.0, y: float = 1.0, z: float = 1.0) -> Matrix:
    """A 4x4 scaling matrix; with the defaults, the identity."""
    return Matrix(
        (
            (x, 0.0, 0.0, 0.0),
            (0.0, y, 0.0, 0.0),
            (0.0, 0.0, z, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
    )


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        (
            (1.0, 0.0, 0.0, x),
            (0.0, 1.0, 0.0, y),
            (0.0, 0.0, 1.0, z),
            (0.0, 0.0, 0.0, 1.0),
        )
    )


def normal_rotation_matrix(normal: Vec) -> Matrix:
    """Rotation that turns the object-space up axis (0, 1, 0) towards ``normal``."""
    up = Vec(0.0, 1.0, 0.0, 0.0)
    angle = math.acos(normal.dot(up))
    axis = normal.cross(up)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    t = 1.0 - cos_a
    ax, ay, az = axis.x, axis.y, axis.z
    return Matrix(
        (
            (cos_a + ax * ax * t, ax * ay * t - az * sin_a, ax * az * t + ay * sin_a, 0.0),
            (ay * az * t + az * sin_a, cos_a + ay * ay * t, ay * az * t - ax * sin_a, 0.0),
            (az * ax * t - ay * sin_a, az * ay * t + ax * sin_a, cos_a + az * az * t, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
    )


def calculate_orientation(left: Vec, true_up: Vec, forward: Vec, origin: Vec) -> Matrix:
    """Combine a camera basis and position into a world-to-view matrix."""
    basis = Matrix(
        (
            (left.x, left.y, left.z, 0.0),
            (true_up.x, true_up.y, true_up.z, 0.0),
            (-forward.x, -forward.y, -forward.z, 0.0),
            (0.0, 0.0, 0.0, 1.0),
        )
    )
    return basis @ translation(-origin.x, -origin.y, -origin.z)


def view_transform(origin: Vec, target: Vec, up: Vec) -> Matrix:
    """World-to-view matrix for an eye at ``origin`` looking at ``target``."""
    forward = (target - origin).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    return calculate_orientation(left, true_up, forward, origin)