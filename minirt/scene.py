"""Reading a scene description into ambient light, camera, light and shapes."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from os import PathLike
from typing import Union

from minirt.camera import Camera
from minirt.errors import (
    ERR_CAMERA_ORIENTATION,
    ERR_ILLEGAL_CHAR,
    ERR_LIGHT_TWICE,
    ERR_OPEN,
    ErrorFlags,
    SceneError,
)
from minirt.matrix import (
    Matrix,
    SingularMatrixError,
    identity,
    normal_rotation_matrix,
    translation,
)
from minirt.parsing import (
    line_has_illegal_char,
    out_of_range,
    parse_coords,
    split_fields,
    str_to_double,
)
from minirt.vectors import Vec

WIDTH = 600
HEIGHT = 600

_ZERO = Vec(0.0, 0.0, 0.0, 0.0)
_WHITE = Vec(1.0, 1.0, 1.0, 0.0)


def _unit_color(rgb: Vec) -> Vec:
    """Scale a 0-255 colour to the 0-1 range; ``w`` is kept."""
    return Vec(rgb.x / 255, rgb.y / 255, rgb.z / 255, rgb.w)


def sphere_transform(radius: float, center: Vec) -> Matrix:
    """Object-to-world matrix of a sphere: scale applied after translation."""
    return identity(radius, radius, radius) @ translation(center.x, center.y, center.z)


def plane_transform(position: Vec, normal: Vec) -> Matrix:
    """Object-to-world matrix of a plane through ``position``."""
    return translation(position.x, position.y, position.z) @ normal_rotation_matrix(normal)


def cylinder_transform(height: float, radius: float, position: Vec, normal: Vec) -> Matrix:
    """Object-to-world matrix of a cylinder of the given size."""
    placed = translation(position.x, position.y, position.z) @ identity(
        radius, height * 0.5, radius
    )
    return normal_rotation_matrix(normal) @ placed


def light_intensity(rgb: Vec, ratio: float) -> Vec:
    """Light intensity tinted by the ambient colour at the ambient ratio."""
    tint = rgb.normalize().scale(ratio)
    total = _WHITE + tint
    return Vec(total.x, total.y, total.z, 0.0)


@dataclass
class Ambient:
    """Ambient lighting: a ratio in [0, 1] and a colour in [0, 1]."""

    ratio: float
    rgb: Vec


@dataclass
class Light:
    """The point light and the Phong parameters used with it."""

    point: Vec
    bright: float
    intensity: Vec = _ZERO
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.4
    shininess: float = 40.0


@dataclass
class Sphere:
    """A sphere; ``index`` numbers the spheres of a scene from 0."""

    center: Vec
    radius: float
    color: Vec
    index: int = 0
    transform: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.transform = sphere_transform(self.radius, self.center)


@dataclass
class Plane:
    """A plane; ``index`` numbers the planes of a scene from 0."""

    position: Vec
    normal: Vec
    color: Vec
    index: int = 0
    transform: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.transform = plane_transform(self.position, self.normal)


@dataclass
class Cylinder:
    """A capped cylinder; ``index`` numbers the cylinders of a scene from 0."""

    position: Vec
    normal: Vec
    radius: float
    height: float
    color: Vec
    index: int = 0
    transform: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.transform = cylinder_transform(self.height, self.radius, self.position, self.normal)


Shape = Union[Sphere, Plane, Cylinder]


@dataclass
class Scene:
    """A complete scene ready to be rendered."""

    ambient: Ambient
    camera: Camera
    light: Light
    shapes: list[Shape] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class _MissingField(Exception):
    """A scene line has fewer fields than its element needs."""


class _SceneBuilder:
    """Collects elements line by line and records what is wrong with them."""

    def __init__(self) -> None:
        self.errors = ErrorFlags()
        self.ambient: Ambient | None = None
        self.camera: Camera | None = None
        self.light: Light | None = None
        self.ambient_seen = False
        self.camera_seen = False
        self.light_seen = False
        self.shapes: list[Shape] = []
        self.warnings: list[str] = []
        self._handlers: dict[str, Callable[[list[str]], None]] = {
            "A": self._ambient,
            "C": self._camera,
            "L": self._light,
            "sp": self._sphere,
            "pl": self._plane,
            "cy": self._cylinder,
        }

    def feed(self, line: str) -> None:
        fields = split_fields(line)
        if len(fields) == 1 or self.errors.any():
            return
        if len(fields) < 3:
            self.errors.line_error = True
            return
        handler = self._handlers.get(fields[0])
        if handler is None:
            return
        try:
            handler(fields)
        except _MissingField:
            self.errors.line_error = True

    def finish(self) -> Scene:
        if not (self.ambient_seen and self.camera_seen and self.light_seen) or not self.shapes:
            self.errors.minimum_args = True
        self.errors.raise_first()
        assert self.ambient is not None and self.camera is not None and self.light is not None
        try:
            self.camera.setup(WIDTH, HEIGHT)
        except SingularMatrixError as err:
            raise SceneError(ERR_CAMERA_ORIENTATION) from err
        self.light.intensity = light_intensity(self.ambient.rgb, self.ambient.ratio)
        return Scene(self.ambient, self.camera, self.light, self.shapes, self.warnings)

    @staticmethod
    def _field(fields: list[str], index: int) -> str:
        try:
            return fields[index]
        except IndexError:
            raise _MissingField from None

    def _number(self, fields: list[str], index: int) -> float:
        return str_to_double(self._field(fields, index))

    def _coords(self, fields: list[str], index: int, flag: str) -> Vec:
        text = self._field(fields, index)
        try:
            return parse_coords(text)
        except ValueError:
            setattr(self.errors, flag, True)
            return _ZERO

    def _count(self, kind: type) -> int:
        return sum(isinstance(shape, kind) for shape in self.shapes)

    def _ambient(self, fields: list[str]) -> None:
        if self.ambient_seen:
            self.errors.multiple_ambient = True
            return
        self.ambient_seen = True
        rgb = self._coords(fields, 2, "rgb")
        self.ambient = Ambient(0.0, rgb)
        if out_of_range(rgb, 0, 255):
            self.errors.ambient_color = True
            return
        self.ambient.rgb = _unit_color(rgb)
        ratio = self._number(fields, 1)
        self.ambient.ratio = ratio
        if ratio < 0 or ratio > 1:
            self.errors.ambient_ratio = True

    def _camera(self, fields: list[str]) -> None:
        if self.camera_seen:
            self.errors.multiple_camera = True
            return
        self.camera_seen = True
        view_point = self._coords(fields, 1, "camera_view_point")
        orientation = self._coords(fields, 2, "camera_orientation")
        self.camera = Camera(view_point, orientation, 0.0)
        if out_of_range(orientation, -1, 1) or self.errors.any():
            self.errors.camera_orientation = True
            return
        fov = self._number(fields, 3)
        self.camera.fov = fov
        if fov < 0 or fov > 180 or self.errors.any():
            self.errors.camera_fov = True

    def _light(self, fields: list[str]) -> None:
        if self.light_seen:
            self.warnings.append(ERR_LIGHT_TWICE)
            return
        self.light_seen = True
        point = self._coords(fields, 1, "light_point")
        bright = self._number(fields, 2)
        if bright < 0 or bright > 1:
            self.errors.light_bright = True
        self.light = Light(point, bright)

    def _sphere(self, fields: list[str]) -> None:
        center = self._coords(fields, 1, "sp_coord")
        center = Vec(center.x - 2, center.y, center.z, center.w)
        radius = self._number(fields, 2) / 2
        color = self._coords(fields, 3, "rgb")
        if self.errors.any():
            return
        if out_of_range(color, 0, 255):
            self.errors.rgb = True
            return
        self.shapes.append(Sphere(center, radius, _unit_color(color), self._count(Sphere)))

    def _plane(self, fields: list[str]) -> None:
        position = self._coords(fields, 1, "pl_coord")
        normal = self._coords(fields, 2, "pl_normalized")
        color = self._coords(fields, 3, "rgb")
        if self.errors.any():
            return
        if out_of_range(color, 0, 255):
            self.errors.rgb = True
            return
        if out_of_range(normal, -1.0, 1.0):
            self.errors.pl_normalized = True
            return
        self.shapes.append(Plane(position, normal, _unit_color(color), self._count(Plane)))

    def _cylinder(self, fields: list[str]) -> None:
        position = self._coords(fields, 1, "cy_coord")
        normal = self._coords(fields, 2, "cy_coord")
        radius = self._number(fields, 3) / 2
        height = self._number(fields, 4)
        color = self._coords(fields, 5, "cy_coord")
        if out_of_range(normal, -1, 1):
            self.errors.cy_coord = True
        if out_of_range(color, 0, 255):
            self.errors.rgb = True
        if self.errors.any():
            return
        self.shapes.append(
            Cylinder(position, normal, radius, height, _unit_color(color), self._count(Cylinder))
        )


def parse_lines(lines: Iterable[str]) -> Scene:
    """Build a scene from the lines of a description, line endings included.

    Raises SceneError for the first problem found, in reporting order.
    """
    lines = list(lines)
    if any(line_has_illegal_char(line) for line in lines):
        raise SceneError(ERR_ILLEGAL_CHAR)
    builder = _SceneBuilder()
    for line in lines:
        builder.feed(line)
    return builder.finish()


def parse_scene(path: str | PathLike[str]) -> Scene:
    """Read and parse the scene file at ``path``."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            lines = handle.readlines()
    except OSError as err:
        raise SceneError(ERR_OPEN) from err
    return parse_lines(lines)