"""Ray intersections and surface normals of spheres, planes and cylinders."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from minirt.camera import Ray
from minirt.scene import Cylinder, Plane, Shape, Sphere
from minirt.vectors import Vec

EPSILON = 0.00001

_OBJECT_ORIGIN = Vec(0.0, 0.0, 0.0, 1.0)
_PLANE_NORMAL = Vec(0.0, 1.0, 0.0, 0.0)


@dataclass(frozen=True)
class Intersection:
    """A point where a ray meets a shape, ``t`` units along the ray."""

    t: float
    shape: Shape


def _quadratic_roots(a: float, b: float, discriminant: float) -> tuple[float, float]:
    root = math.sqrt(discriminant)
    return (-b - root) / (2 * a), (-b + root) / (2 * a)


def intersect_sphere(sphere: Sphere, ray: Ray) -> list[Intersection]:
    """Both points where ``ray`` crosses ``sphere``, or none if it misses."""
    local = ray.transformed(sphere.transform)
    sphere_to_ray = local.origin - _OBJECT_ORIGIN
    a = local.direction.dot(local.direction)
    b = 2 * local.direction.dot(sphere_to_ray)
    c = sphere_to_ray.dot(sphere_to_ray) - 1
    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return []
    t0, t1 = _quadratic_roots(a, b, discriminant)
    return [Intersection(t0, sphere), Intersection(t1, sphere)]


def intersect_plane(plane: Plane, ray: Ray) -> list[Intersection]:
    """The point where ``ray`` crosses ``plane``; none if it runs parallel."""
    local = ray.transformed(plane.transform)
    if abs(local.direction.y) < EPSILON:
        return []
    return [Intersection(-local.origin.y / local.direction.y, plane)]


def intersect_cylinder(cylinder: Cylinder, ray: Ray) -> list[Intersection]:
    """Points where ``ray`` crosses the side of ``cylinder`` within its height."""
    local = ray.transformed(cylinder.transform)
    origin, direction = local.origin, local.direction
    a = direction.x ** 2 + direction.z ** 2
    b = 2 * origin.x * direction.x + 2 * origin.z * direction.z
    c = origin.x ** 2 + origin.z ** 2 - 1.0
    discriminant = b ** 2 - 4 * a * c
    if discriminant < 0 or abs(a) < EPSILON:
        return []
    top = cylinder.height / 2.0
    bottom = -top
    hits = []
    for t in sorted(_quadratic_roots(a, b, discriminant)):
        y = origin.y + t * direction.y
        if bottom < y < top:
            hits.append(Intersection(t, cylinder))
    return hits


def intersect(shape: Shape, ray: Ray) -> list[Intersection]:
    """Intersections of ``ray`` with any kind of shape."""
    if isinstance(shape, Sphere):
        return intersect_sphere(shape, ray)
    if isinstance(shape, Plane):
        return intersect_plane(shape, ray)
    if isinstance(shape, Cylinder):
        return intersect_cylinder(shape, ray)
    raise TypeError(f"not a shape: {type(shape).__name__}")


def intersect_all(shapes: Iterable[Shape], ray: Ray) -> list[Intersection]:
    """Intersections of ``ray`` with every shape, in the order of the shapes."""
    return [found for shape in shapes for found in intersect(shape, ray)]


def hit(intersections: Iterable[Intersection]) -> Intersection | None:
    """The nearest intersection that is not behind the ray's origin."""
    ahead = [found for found in intersections if found.t >= 0]
    if not ahead:
        return None
    return min(ahead, key=lambda found: found.t)


def cylinder_normal(height: float, point: Vec) -> Vec:
    """Object-space normal of a cylinder at ``point``, caps included."""
    top = height / 2.0
    bottom = -top
    dist = point.x ** 2 + point.z ** 2
    if dist < 1 and point.y >= top - EPSILON:
        return Vec(0.0, 1.0, 0.0, 0.0)
    if dist < 1 and point.y <= bottom + EPSILON:
        return Vec(0.0, -1.0, 0.0, 0.0)
    return Vec(point.x, 0.0, point.z, 0.0)


def object_normal(shape: Shape, point: Vec) -> Vec:
    """Unnormalised normal of ``shape`` at an object-space ``point``."""
    if isinstance(shape, Sphere):
        return point - _OBJECT_ORIGIN
    if isinstance(shape, Plane):
        return _PLANE_NORMAL
    if isinstance(shape, Cylinder):
        return cylinder_normal(shape.height, point)
    raise TypeError(f"not a shape: {type(shape).__name__}")


def normal_at(shape: Shape, world_point: Vec) -> Vec:
    """Unit world-space normal of ``shape`` at ``world_point``."""
    inverse = shape.transform.inverse()
    local_normal = object_normal(shape, inverse.transform(world_point))
    world = inverse.transpose().transform(local_normal)
    return Vec(world.x, world.y, world.z, 0.0).normalize()