"""Low-level helpers for reading fields of a scene description."""

from __future__ import annotations

import re

from minirt.vectors import Vec

_SPACES = " \t\n\v\f\r"
_DIGITS = re.compile(r"[0-9]*")
_LEGAL = frozenset("0123456789-., \t\n\r")
_FIELD_SEPARATOR = re.compile(r"[ \t]")


def _digits(text: str) -> tuple[str, str]:
    """Split ``text`` into its leading ASCII digits and the rest."""
    run = _DIGITS.match(text).group()
    return run, text[len(run):]


def str_to_double(text: str) -> float:
    """Read a decimal number from the start of ``text``.

    Leading white space and one sign are accepted; reading stops at the
    first character that does not belong to the number, and text that
    holds no number reads as 0.
    """
    rest = text.lstrip(_SPACES)
    sign = 1.0
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1.0
        rest = rest[1:]
    integer, rest = _digits(rest)
    number = 0.0
    for digit in integer:
        number = number * 10 + int(digit)
    if rest.startswith("."):
        fraction, _ = _digits(rest[1:])
        value = 0.0
        scale = 1.0
        for digit in fraction:
            value = value * 10 + int(digit)
            scale /= 10
        number += value * scale
    return sign * number


def parse_coords(text: str) -> Vec:
    """Read ``x,y,z`` into a vector with ``w`` = 0.

    Raises ValueError unless there are exactly three values.
    """
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise ValueError(f"expected three comma-separated values in {text!r}")
    x, y, z = (str_to_double(part) for part in parts)
    return Vec(x, y, z, 0.0)


def legal_char(character: str) -> bool:
    """True for characters allowed in the values of a scene line."""
    return character in _LEGAL


def line_has_illegal_char(line: str) -> bool:
    """True if a character past the two-letter identifier is not allowed."""
    return any(not legal_char(ch) for ch in line[2:])


def out_of_range(vec: Vec, low: float, high: float) -> bool:
    """True if ``x``, ``y`` or ``z`` lies outside ``[low, high]``."""
    return any(value < low or value > high for value in (vec.x, vec.y, vec.z))


def split_fields(line: str) -> list[str]:
    """Split a scene line on spaces and tabs, dropping empty fields.

    Other characters, a trailing newline included, stay in the fields.
    """
    return [field for field in _FIELD_SEPARATOR.split(line) if field]


def has_rt_extension(path: str) -> bool:
    """True if the text from the last dot of ``path`` is exactly ``.rt``."""
    dot = path.rfind(".")
    return dot != -1 and path[dot:] == ".rt"