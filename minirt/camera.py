"""Rays and the camera that casts one through every pixel."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from minirt.matrix import Matrix, identity, view_transform
from minirt.vectors import Vec

_WORLD_UP = Vec(0.0, 1.0, 0.0, 0.0)


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and a direction."""

    origin: Vec
    direction: Vec

    def position(self, t: float) -> Vec:
        """The point at distance ``t`` along the ray."""
        return self.origin + self.direction.scale(t)

    def transformed(self, matrix: Matrix) -> Ray:
        """The ray in the object space of a shape with transform ``matrix``."""
        inverse = matrix.inverse()
        return Ray(inverse.transform(self.origin), inverse.transform(self.direction))


def camera_up(orientation: Vec) -> Vec:
    """An up vector perpendicular to ``orientation``, close to world up."""
    return orientation.cross(_WORLD_UP).cross(orientation)


@dataclass
class Camera:
    """A pinhole camera; call :meth:`setup` before casting rays."""

    view_point: Vec
    orientation: Vec
    fov: float
    transform: Matrix = field(default_factory=identity, init=False)
    origin: Vec = field(default=Vec(0.0, 0.0, 0.0, 1.0), init=False)
    pixel_size: float = field(default=0.0, init=False)
    half_width: float = field(default=0.0, init=False)
    half_height: float = field(default=0.0, init=False)

    def setup(self, width: int, height: int) -> Camera:
        """Compute the view transform and pixel geometry for an image size."""
        target = self.view_point + self.orientation
        view = view_transform(self.view_point, target, camera_up(self.orientation))
        self.transform = view.inverse()
        half_view = math.tan(math.radians(self.fov) / 2)
        aspect = width / height
        if aspect >= 1:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2) / width
        self.origin = self.transform.transform(Vec(0.0, 0.0, 0.0, 1.0))
        return self

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """The ray from the camera through the centre of pixel ``(x, y)``."""
        x_offset = (x + 0.5) * self.pixel_size
        y_offset = (y + 0.5) * self.pixel_size
        on_canvas = Vec(self.half_width - x_offset, self.half_height - y_offset, -1.0, 1.0)
        pixel = self.transform.transform(on_canvas)
        return Ray(self.origin, (pixel - self.origin).normalize())