"""Command line entry point: read a scene, render it and save the image."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from minirt.errors import ERR_ARGUMENTS, SceneError, format_error
from minirt.parsing import has_rt_extension
from minirt.render import render, write_ppm
from minirt.scene import HEIGHT, WIDTH, parse_scene


class _ArgumentError(Exception):
    """The command line could not be understood."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _ArgumentError(message)


def _build_parser() -> _Parser:
    parser = _Parser(prog="minirt", description="Render a .rt scene to a PPM image.")
    parser.add_argument("scene", nargs="*", help="scene description ending in .rt")
    parser.add_argument(
        "-o",
        "--output",
        help="image file to write (default: the scene path with a .ppm suffix)",
    )
    parser.add_argument("--width", type=int, default=WIDTH, help="image width in pixels")
    parser.add_argument("--height", type=int, default=HEIGHT, help="image height in pixels")
    return parser


def _report(message: str) -> None:
    sys.stdout.write(format_error(message))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the renderer; returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = _build_parser().parse_args(list(argv))
    except _ArgumentError:
        _report(ERR_ARGUMENTS)
        return 0
    if (
        len(args.scene) != 1
        or not has_rt_extension(args.scene[0])
        or args.width <= 0
        or args.height <= 0
    ):
        _report(ERR_ARGUMENTS)
        return 0

    scene_path = Path(args.scene[0])
    try:
        scene = parse_scene(scene_path)
    except SceneError as err:
        _report(err.message)
        return 1
    for warning in scene.warnings:
        _report(warning)

    image = render(scene, args.width, args.height)
    output = Path(args.output) if args.output else scene_path.with_suffix(".ppm")
    write_ppm(image, output)
    return 0


if __name__ == "__main__":
    sys.exit(main())