"""Hilbert's space-filling curve by direct subdivision.

The curve is built from four shapes, each a square with one side missing
(named for the open side). A shape is replaced at the next level by four
smaller shapes, one per quadrant of its square. The replacement rules must
be followed in order for consecutive points to be adjacent.

Points lie in the unit square with the origin in the top-left corner.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Mapping
from types import MappingProxyType

from curvegen.geometry import Point

# Deepest supported subdivision; 4**8 points.
CURVE_MAX_DEPTH = 8


class Shape(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Quadrant(enum.Enum):
    TL = "top-left"
    TR = "top-right"
    BL = "bottom-left"
    BR = "bottom-right"


Rule = tuple[Quadrant, Shape]

GRAMMAR: Mapping[Shape, tuple[Rule, Rule, Rule, Rule]] = MappingProxyType(
    {
        Shape.UP: (
            (Quadrant.TR, Shape.RIGHT),
            (Quadrant.BR, Shape.UP),
            (Quadrant.BL, Shape.UP),
            (Quadrant.TL, Shape.LEFT),
        ),
        Shape.DOWN: (
            (Quadrant.BL, Shape.LEFT),
            (Quadrant.TL, Shape.DOWN),
            (Quadrant.TR, Shape.DOWN),
            (Quadrant.BR, Shape.RIGHT),
        ),
        Shape.LEFT: (
            (Quadrant.BL, Shape.DOWN),
            (Quadrant.BR, Shape.LEFT),
            (Quadrant.TR, Shape.LEFT),
            (Quadrant.TL, Shape.UP),
        ),
        Shape.RIGHT: (
            (Quadrant.TR, Shape.UP),
            (Quadrant.TL, Shape.RIGHT),
            (Quadrant.BL, Shape.RIGHT),
            (Quadrant.BR, Shape.DOWN),
        ),
    }
)

_OFFSETS: Mapping[Quadrant, tuple[int, int]] = MappingProxyType(
    {
        Quadrant.TL: (-1, -1),
        Quadrant.TR: (1, -1),
        Quadrant.BL: (-1, 1),
        Quadrant.BR: (1, 1),
    }
)


def to_quadrant(pt: Point, quad: Quadrant, level: int) -> Point:
    """Move ``pt`` by 2**-level toward ``quad``."""
    s = math.pow(2, -level)
    dx, dy = _OFFSETS[quad]
    return (pt[0] + dx * s, pt[1] + dy * s)


def construct(depth: int) -> list[Point]:
    """Return the points of the Hilbert curve at ``depth``, in curve order."""
    if depth < 0:
        raise ValueError("depth must be >= 0")
    dots: list[Point] = []
    _visit((0.5, 0.5), Shape.DOWN, 0, depth, dots)
    return dots


def _visit(
    pos: Point, shape: Shape, level: int, depth: int, dots: list[Point]
) -> None:
    if level >= depth:
        dots.append(pos)
        return

    for quad, next_shape in GRAMMAR[shape]:
        _visit(to_quadrant(pos, quad, level + 2), next_shape, level + 1, depth, dots)


CURVES: Mapping[str, int] = MappingProxyType({"hilbert": CURVE_MAX_DEPTH})


def curve_names() -> list[str]:
    return list(CURVES)
