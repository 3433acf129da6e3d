"""Shading, shadows and drawing a scene into an image."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from os import PathLike

from minirt.camera import Ray
from minirt.scene import HEIGHT, WIDTH, Scene, Shape
from minirt.shapes import EPSILON, Intersection, hit, intersect_all, normal_at
from minirt.vectors import Vec

_BLACK = Vec(0.0, 0.0, 0.0, 0.0)

Image = list[list[int]]


@dataclass(frozen=True)
class Computations:
    """What shading needs to know about the point a ray hit."""

    t: float
    shape: Shape
    position: Vec
    eye: Vec
    normal: Vec
    over_point: Vec
    inside: bool

    @property
    def color(self) -> Vec:
        return self.shape.color


def reflect(v: Vec, n: Vec) -> Vec:
    """Reflect ``v`` about the normal ``n``."""
    return v - n.scale(2.0 * v.dot(n))


def prepare_computations(hit: Intersection, ray: Ray) -> Computations:
    """Gather position, eye vector and normal at the hit point.

    When the normal points away from the eye the hit is on the inside
    and the normal is flipped.
    """
    position = ray.position(hit.t)
    eye = -ray.direction
    normal = normal_at(hit.shape, position)
    inside = normal.dot(eye) < 0
    if inside:
        normal = -normal
    over_point = position + normal.scale(EPSILON)
    return Computations(hit.t, hit.shape, position, eye, normal, over_point, inside)


def _shadow_direction(path: Vec) -> Vec:
    length = path.length()
    return Vec(path.x / length, path.y / length, path.z / length, 0.0)


def shadow_hit(point: Vec, path: Vec, shapes: Iterable[Shape]) -> Intersection | None:
    """The nearest shape met going from ``point`` along ``path``."""
    ray = Ray(point, _shadow_direction(path))
    return hit(intersect_all(shapes, ray))


def is_shadowed(comps: Computations, scene: Scene) -> bool:
    """True if a shape lies between the hit point and the light."""
    path = scene.light.point - comps.over_point
    distance = path.dot(path)
    blocker = shadow_hit(comps.over_point, path, scene.shapes)
    return blocker is not None and blocker.t < distance


def lighting(comps: Computations, in_shadow: bool, scene: Scene) -> Vec:
    """Phong colour of the hit point, each channel capped at 1."""
    light = scene.light
    effective = comps.color.hadamard(light.intensity)
    light_v = (light.point - comps.over_point).normalize()
    ambient = effective.scale(light.ambient)
    light_dot_normal = comps.normal.dot(light_v)
    diffuse = _BLACK
    specular = _BLACK
    if light_dot_normal >= 0 and not in_shadow:
        diffuse = effective.scale(light.diffuse * light_dot_normal)
        reflect_dot_eye = reflect(-light_v, comps.normal).dot(comps.eye)
        if reflect_dot_eye > 0:
            factor = light.specular * reflect_dot_eye ** light.shininess
            specular = light.intensity.scale(factor)
    total = diffuse + specular + ambient
    return Vec(min(total.x, 1.0), min(total.y, 1.0), min(total.z, 1.0), total.w)


def pixel_color(scene: Scene, x: int, y: int) -> Vec:
    """Colour seen through pixel ``(x, y)``; black where nothing is hit."""
    ray = scene.camera.ray_for_pixel(x, y)
    nearest = hit(intersect_all(scene.shapes, ray))
    if nearest is None:
        return _BLACK
    comps = prepare_computations(nearest, ray)
    return lighting(comps, is_shadowed(comps, scene), scene)


def color_to_int(rgb: Vec) -> int:
    """Pack a colour with channels in [0, 1] into 0xRRGGBB."""
    return (
        (int(255.99 * rgb.x) << 16)
        + (int(255.99 * rgb.y) << 8)
        + int(255.99 * rgb.z)
    )


def render(scene: Scene, width: int = WIDTH, height: int = HEIGHT) -> Image:
    """Render ``scene`` into rows of packed 0xRRGGBB pixels, top row first."""
    scene.camera.setup(width, height)
    return [
        [color_to_int(pixel_color(scene, x, y)) for x in range(width)]
        for y in range(height)
    ]


def write_ppm(image: Sequence[Sequence[int]], path: str | PathLike[str]) -> None:
    """Write packed pixels as a binary PPM (P6) file."""
    if not image or not image[0]:
        raise ValueError("image is empty")
    width = len(image[0])
    if any(len(row) != width for row in image):
        raise ValueError("image rows differ in length")
    data = bytearray(f"P6\n{width} {len(image)}\n255\n".encode("ascii"))
    for row in image:
        for pixel in row:
            data += bytes(((pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF, pixel & 0xFF))
    with open(path, "wb") as handle:
        handle.write(data)