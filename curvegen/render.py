"""Render pipeline: validate a request, build geometry, serialize it as SVG.

Request fields may arrive as strings (from a URL or command line) or as
numbers; everything is validated before any geometry is computed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from curvegen import hilbert
from curvegen.cache import RenderCache
from curvegen.catalog import effective_max_depth, lookup
from curvegen.config import Settings
from curvegen.errors import (
    InvalidColor,
    InvalidDepth,
    InvalidPrecision,
    InvalidThickness,
    UnknownSystem,
)
from curvegen.expansion import expand
from curvegen.geometry import STEP_FACTOR, Polyline, bounding_box, stroke_width
from curvegen.svg import assemble_document
from curvegen.turtle import execute, initial_turtle

MIN_PRECISION = 1
MAX_PRECISION = 15

DEFAULT_DEPTH = 2
DEFAULT_THICKNESS = 3.0
DEFAULT_COLOR = "black"
DEFAULT_PRECISION = 3


@dataclass(frozen=True)
class RenderOptions:
    depth: int
    thickness: float
    color: str
    precision: int


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            return None
    return None


def _parse_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def validate_options(
    max_depth: int, depth: Any, thickness: Any, color: Any, precision: Any
) -> RenderOptions:
    """Check raw request fields and return them as typed options.

    Out-of-range values are rejected, never clamped.
    """
    d = _parse_int(depth)
    if d is None:
        raise InvalidDepth(depth, "not an integer")
    if d < 0 or d > max_depth:
        raise InvalidDepth(depth, f"must be between 0 and {max_depth}")

    t = _parse_float(thickness)
    if t is None or not math.isfinite(t) or t <= 0:
        raise InvalidThickness(thickness, "must be a positive number")

    if not isinstance(color, str) or color == "":
        raise InvalidColor(color, "must be a non-empty string")

    p = _parse_int(precision)
    if p is None or not MIN_PRECISION <= p <= MAX_PRECISION:
        raise InvalidPrecision(
            precision, f"must be an integer from {MIN_PRECISION} to {MAX_PRECISION}"
        )

    return RenderOptions(depth=d, thickness=t, color=color, precision=p)


def _document(
    polylines: list[Polyline], opts: RenderOptions, settings: Settings
) -> str:
    view = bounding_box(
        polylines,
        opts.thickness,
        pad_factor=settings.pad_factor,
        square=settings.square,
        include_origin=settings.include_origin,
    )
    width = stroke_width(opts.thickness, view, settings.step_factor)
    return assemble_document(view, polylines, width, opts.color, opts.precision)


def system_polylines(
    name: str, effective_depth: int, step_factor: float
) -> list[Polyline]:
    """Expand and draw a catalog system at an internal depth."""
    grammar = lookup(name)
    symbols = expand(grammar.axiom, grammar.rules, effective_depth)
    turtle = initial_turtle(grammar, effective_depth, step_factor)
    return execute(symbols, turtle, grammar.angle)


def render_system(
    name: str,
    depth: Any = DEFAULT_DEPTH,
    thickness: Any = DEFAULT_THICKNESS,
    color: Any = DEFAULT_COLOR,
    precision: Any = DEFAULT_PRECISION,
    *,
    settings: Settings | None = None,
    cache: RenderCache | None = None,
) -> str:
    """Render the named Lindenmayer system and return an SVG document."""
    settings = settings or Settings()
    grammar = lookup(name)
    opts = validate_options(
        effective_max_depth(grammar), depth, thickness, color, precision
    )
    effective_depth = grammar.min_depth + opts.depth

    # Cached geometry is drawn at the default scale only.
    if settings.step_factor != STEP_FACTOR:
        cache = None

    polylines = cache.get(name, effective_depth) if cache is not None else None
    if polylines is None:
        polylines = system_polylines(name, effective_depth, settings.step_factor)
        if cache is not None:
            cache.put(name, effective_depth, polylines)

    return _document(polylines, opts, settings)


def render_curve(
    name: str,
    depth: Any = DEFAULT_DEPTH,
    thickness: Any = DEFAULT_THICKNESS,
    color: Any = DEFAULT_COLOR,
    precision: Any = DEFAULT_PRECISION,
    *,
    settings: Settings | None = None,
) -> str:
    """Render a space-filling curve built by direct subdivision."""
    settings = settings or Settings()
    if not isinstance(name, str) or name not in hilbert.CURVES:
        raise UnknownSystem(name, "not a direct-construction curve")
    opts = validate_options(hilbert.CURVES[name], depth, thickness, color, precision)

    scale = settings.step_factor
    points = [(x * scale, y * scale) for x, y in hilbert.construct(opts.depth)]
    return _document([points], opts, settings)


def render(
    name: str,
    depth: Any = DEFAULT_DEPTH,
    thickness: Any = DEFAULT_THICKNESS,
    color: Any = DEFAULT_COLOR,
    precision: Any = DEFAULT_PRECISION,
    *,
    direct: bool = False,
    settings: Settings | None = None,
    cache: RenderCache | None = None,
) -> str:
    """Render by name from either catalog.

    ``direct`` selects the subdivision curves instead of the grammars.
    """
    if direct:
        return render_curve(
            name, depth, thickness, color, precision, settings=settings
        )
    return render_system(
        name, depth, thickness, color, precision, settings=settings, cache=cache
    )
