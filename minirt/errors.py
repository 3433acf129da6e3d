"""Scene error flags, their messages and the order they are reported in."""

from __future__ import annotations

from dataclasses import dataclass, fields

ERR_VIEWPOINT = "miniRT: Invalid View Point"
ERR_DIRP = "miniRT: Invalid Direction Vector"
ERR_BRIGHT = "miniRT: Invalid Brightness"
ERR_NORMALIZED = "miniRT: Invalid Normalized Vector"
ERR_LIGHT = "miniRT: Invalid Light"
ERR_SPHERE = "miniRT: Invalid Sphere"
ERR_PLANE = "miniRT: Invalid Plane"
ERR_CYLINDER = "miniRT: Invalid Cylinder"
ERR_RGB = "miniRT: Invalid RGB"

ERR_FILE = "miniRT: File Error"
ERR_ARGUMENTS = "miniRT: Invalid Arguments"
ERR_OPEN = "miniRT: Open Error"
ERR_ILLEGAL_CHAR = "miniRT: Illegal Character"
ERR_MULTIPLE_AMBIENT = "miniRT: Ambient already defined"
ERR_AMBIENT_COLOR = "miniRT: Invalid Ambient Color"
ERR_AMBIENT_RATIO = "miniRT: Invalid Ambient Ratio"
ERR_MULTIPLE_CAMERA = "miniRT: Multiple Camera"
ERR_CAMERA_VIEW_POINT = "miniRT: Invalid Camera View Point"
ERR_CAMERA_ORIENTATION = "miniRT: Invalid Camera Orientation"
ERR_CAMERA_FOV = "miniRT: Invalid Camera FOV"
ERR_LINE = "miniRT: Invalid Line"
ERR_LIGHT_POINT = "miniRT: Invalid Light Point"
ERR_LIGHT_INTENSITY = "miniRT: Invalid Light Intensity"
ERR_LIGHT_TWICE = "miniRT: Light already defined"
ERR_MISSING = "miniRT: Missing Arguments"


class SceneError(Exception):
    """A scene description that cannot be rendered."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# Flags in the order they are reported, each with its message.
_REPORT_ORDER: tuple[tuple[tuple[str, ...], str], ...] = (
    (("multiple_ambient",), ERR_MULTIPLE_AMBIENT),
    (("rgb",), ERR_RGB),
    (("ambient_color",), ERR_AMBIENT_COLOR),
    (("ambient_ratio",), ERR_AMBIENT_RATIO),
    (("multiple_camera",), ERR_MULTIPLE_CAMERA),
    (("camera_view_point",), ERR_CAMERA_VIEW_POINT),
    (("camera_orientation",), ERR_CAMERA_ORIENTATION),
    (("camera_fov",), ERR_CAMERA_FOV),
    (("sp_coord",), ERR_SPHERE),
    (("pl_coord", "pl_normalized"), ERR_PLANE),
    (("cy_coord",), ERR_CYLINDER),
    (("line_error",), ERR_LINE),
    (("light_point",), ERR_LIGHT_POINT),
    (("light_bright",), ERR_LIGHT_INTENSITY),
    (("minimum_args",), ERR_MISSING),
)


@dataclass
class ErrorFlags:
    """Problems found while reading a scene, one flag per kind."""

    line_error: bool = False
    multiple_ambient: bool = False
    ambient_color: bool = False
    rgb: bool = False
    ambient_ratio: bool = False
    multiple_camera: bool = False
    camera_view_point: bool = False
    camera_orientation: bool = False
    camera_fov: bool = False
    light_point: bool = False
    light_bright: bool = False
    sp_coord: bool = False
    pl_coord: bool = False
    pl_normalized: bool = False
    cy_coord: bool = False
    minimum_args: bool = False

    def any(self) -> bool:
        """True if a line of the file was faulty.

        Missing elements are checked once the whole file is read and do
        not count here.
        """
        return any(
            getattr(self, f.name) for f in fields(self) if f.name != "minimum_args"
        )

    def first_message(self) -> str | None:
        """The message of the first flag set, in reporting order."""
        for names, message in _REPORT_ORDER:
            if any(getattr(self, name) for name in names):
                return message
        return None

    def raise_first(self) -> None:
        """Raise :class:`SceneError` for the first flag set, if any."""
        message = self.first_message()
        if message is not None:
            raise SceneError(message)


def format_error(message: str) -> str:
    """Text printed for an error; empty for an empty message."""
    if not message:
        return ""
    return f"Error\n{message}\n"