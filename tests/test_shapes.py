import math

import pytest

from minirt.camera import Ray
from minirt.matrix import SingularMatrixError
from minirt.scene import Cylinder, Plane, Sphere
from minirt.shapes import (
    EPSILON,
    Intersection,
    cylinder_normal,
    hit,
    intersect,
    intersect_all,
    intersect_cylinder,
    intersect_plane,
    intersect_sphere,
    normal_at,
    object_normal,
)
from minirt.vectors import Vec

WHITE = Vec(1.0, 1.0, 1.0, 0.0)
ORIGIN = Vec(0.0, 0.0, 0.0, 1.0)
UP = Vec(0.0, 1.0, 0.0, 0.0)


def point(x, y, z):
    return Vec(x, y, z, 1.0)


def direction(x, y, z):
    return Vec(x, y, z, 0.0)


def unit_sphere(radius=1.0):
    return Sphere(Vec(0.0, 0.0, 0.0, 0.0), radius, WHITE)


def flat_plane():
    return Plane(Vec(0.0, 0.0, 0.0, 0.0), UP, WHITE)


def upright_cylinder(height=2.0):
    return Cylinder(Vec(0.0, 0.0, 0.0, 0.0), UP, 1.0, height, WHITE)


def test_sphere_intersections_lie_on_surface():
    sphere = unit_sphere(2.0)
    ray = Ray(point(0, 0, -10), direction(0, 0, 1))
    found = intersect_sphere(sphere, ray)
    assert len(found) == 2
    assert found[0].t < found[1].t
    for item in found:
        assert item.shape is sphere
        assert (ray.position(item.t) - ORIGIN).length() == pytest.approx(2.0)


def test_sphere_miss():
    ray = Ray(point(0, 5, -5), direction(0, 0, 1))
    assert intersect_sphere(unit_sphere(), ray) == []


def test_sphere_from_inside_has_one_hit_ahead():
    sphere = unit_sphere()
    ray = Ray(ORIGIN, direction(0, 0, 1))
    found = intersect_sphere(sphere, ray)
    assert found[0].t < 0 < found[1].t
    nearest = hit(found)
    assert nearest == found[1]


def test_degenerate_sphere_raises():
    sphere = unit_sphere(0.0)
    with pytest.raises(SingularMatrixError):
        intersect_sphere(sphere, Ray(point(0, 0, -5), direction(0, 0, 1)))


def test_plane_parallel_ray_misses():
    ray = Ray(point(0, 1, 0), direction(1, 0, 0))
    assert intersect_plane(flat_plane(), ray) == []


def test_plane_hit_from_above():
    plane = flat_plane()
    ray = Ray(point(0, 3, 0), direction(0, -1, 0))
    found = intersect_plane(plane, ray)
    assert len(found) == 1
    assert found[0].shape is plane
    assert ray.position(found[0].t).y == pytest.approx(0.0)


def test_cylinder_side_intersections():
    cylinder = upright_cylinder()
    ray = Ray(point(-5, 0, 0), direction(1, 0, 0))
    found = intersect_cylinder(cylinder, ray)
    assert len(found) == 2
    assert found[0].t <= found[1].t
    for item in found:
        p = ray.position(item.t)
        assert p.x ** 2 + p.z ** 2 == pytest.approx(1.0)


def test_cylinder_ray_along_axis_misses():
    ray = Ray(point(0, -5, 0), direction(0, 1, 0))
    assert intersect_cylinder(upright_cylinder(), ray) == []


def test_cylinder_ray_outside_height_misses():
    ray = Ray(point(-5, 3, 0), direction(1, 0, 0))
    assert intersect_cylinder(upright_cylinder(), ray) == []


def test_cylinder_missed_sideways():
    ray = Ray(point(-5, 0, 3), direction(1, 0, 0))
    assert intersect_cylinder(upright_cylinder(), ray) == []


def test_intersect_dispatches_by_shape():
    ray = Ray(point(0, 0, -5), direction(0, 0, 1))
    sphere = unit_sphere()
    assert intersect(sphere, ray) == intersect_sphere(sphere, ray)


def test_intersect_rejects_unknown_shape():
    with pytest.raises(TypeError):
        intersect(object(), Ray(ORIGIN, direction(0, 0, 1)))


def test_intersect_all_keeps_shape_order():
    sphere = unit_sphere()
    plane = flat_plane()
    ray = Ray(point(0, 5, 0), direction(0, -1, 0))
    found = intersect_all([sphere, plane], ray)
    assert [item.shape for item in found] == [sphere, sphere, plane]


def test_hit_empty_and_all_behind():
    sphere = unit_sphere()
    assert hit([]) is None
    assert hit([Intersection(-2.0, sphere), Intersection(-1.0, sphere)]) is None


def test_hit_picks_smallest_non_negative():
    sphere = unit_sphere()
    items = [
        Intersection(5.0, sphere),
        Intersection(-3.0, sphere),
        Intersection(0.0, sphere),
        Intersection(2.0, sphere),
    ]
    assert hit(items) is items[2]


def test_cylinder_normal_caps_and_side():
    assert cylinder_normal(2.0, point(0, 1, 0)) == Vec(0.0, 1.0, 0.0, 0.0)
    assert cylinder_normal(2.0, point(0, -1, 0)) == Vec(0.0, -1.0, 0.0, 0.0)
    side = cylinder_normal(2.0, point(1, 0.5, 0))
    assert side.y == 0.0 and side.x == 1.0


def test_cylinder_normal_near_cap_within_epsilon():
    near_top = point(0.5, 1.0 - EPSILON / 2, 0)
    assert cylinder_normal(2.0, near_top) == UP


def test_object_normal_of_plane_is_up():
    assert object_normal(flat_plane(), point(3, 0, 7)) == UP


def test_object_normal_rejects_unknown_shape():
    with pytest.raises(TypeError):
        object_normal("sphere", ORIGIN)


def test_sphere_normal_points_outward():
    sphere = unit_sphere()
    k = 1 / math.sqrt(3)
    normal = normal_at(sphere, point(k, k, k))
    assert normal.length() == pytest.approx(1.0)
    assert normal.x == pytest.approx(k)
    assert normal.y == pytest.approx(k)
    assert normal.z == pytest.approx(k)
    assert normal.w == 0.0


def test_plane_normal_anywhere_is_up():
    normal = normal_at(flat_plane(), point(4, 0, -2))
    assert normal.x == pytest.approx(0.0)
    assert normal.y == pytest.approx(1.0)
    assert normal.z == pytest.approx(0.0)


def test_cylinder_world_normal_is_unit_and_horizontal():
    normal = normal_at(upright_cylinder(), point(0, 0.2, 1))
    assert normal.length() == pytest.approx(1.0)
    assert normal.y == pytest.approx(0.0)
    assert normal.z == pytest.approx(1.0)