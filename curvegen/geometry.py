"""Bounding boxes and stroke scaling for rendered polylines."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

Point = tuple[float, float]
Polyline = list[Point]

# Rough size of a drawing in user units, whatever the depth.
STEP_FACTOR = 600.0

# Padding around the drawing, as a multiple of the stroke thickness.
PAD_FACTOR = 0.8


@dataclass(frozen=True)
class Viewport:
    x: float
    y: float
    width: float
    height: float


def bounding_box(
    polylines: Sequence[Sequence[Point]],
    thickness: float,
    *,
    pad_factor: float = PAD_FACTOR,
    square: bool = False,
    include_origin: bool = True,
) -> Viewport:
    """Return a viewport enclosing every point, padded for the stroke.

    With ``include_origin`` the running bounds start at (0, 0), so the box
    always touches the origin even if the curve never visits it. This
    matches the published renderings; pass False to fit the points only.
    """
    if include_origin:
        min_x = min_y = max_x = max_y = 0.0
    else:
        first = next((pl[0] for pl in polylines if pl), (0.0, 0.0))
        min_x, min_y = first
        max_x, max_y = first

    for pl in polylines:
        for x, y in pl:
            if x < min_x:
                min_x = x
            if x > max_x:
                max_x = x
            if y < min_y:
                min_y = y
            if y > max_y:
                max_y = y

    edge = pad_factor * thickness
    min_x -= edge
    min_y -= edge
    max_x += edge
    max_y += edge
    width = max_x - min_x
    height = max_y - min_y

    if square:
        if width < height:
            min_x -= (height - width) / 2
            width = height
        elif height < width:
            min_y -= (width - height) / 2
            height = width

    return Viewport(min_x, min_y, width, height)


def stroke_width(
    thickness: float, viewport: Viewport, step_factor: float = STEP_FACTOR
) -> float:
    """Scale ``thickness`` to the size of the drawing."""
    return thickness * max(viewport.width, viewport.height) / step_factor
