"""A small ray tracer that renders .rt scene files to PPM images."""

__version__ = "1.0.0"