"""SVG serialization."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from curvegen.geometry import Point, Viewport

SVG_NS = "http://www.w3.org/2000/svg"


def fmt(value: float, precision: int) -> str:
    """Format ``value`` with ``precision`` decimals, minus trailing zeros.

    >>> fmt(3.0, 2)
    '3'
    >>> fmt(3.14159, 2)
    '3.14'
    """
    s = f"{value:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    # Normalise -0.0 and small negatives so they never produce "-0".
    if s in ("-0", "", "-"):
        s = "0"
    return s


def _escape_attr(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def assemble_document(
    viewport: Viewport,
    polylines: Sequence[Sequence[Point]],
    thickness: float,
    color: str,
    precision: int,
) -> str:
    """Return an SVG document with one polyline per entry of ``polylines``.

    ``thickness`` is the already-scaled stroke width. Every number in the
    document is formatted with :func:`fmt` at the same precision.
    """
    view_box = " ".join(
        fmt(v, precision)
        for v in (viewport.x, viewport.y, viewport.width, viewport.height)
    )
    style_attr = (
        f'fill="none" stroke="{_escape_attr(color)}" '
        f'stroke-width="{fmt(thickness, precision)}" stroke-linecap="square"'
    )

    lines: list[str] = [f'<svg xmlns="{SVG_NS}" viewBox="{view_box}">']
    for pl in polylines:
        pts = " ".join(f"{fmt(x, precision)},{fmt(y, precision)}" for x, y in pl)
        lines.append(f'  <polyline points="{pts}" {style_attr} />')
    lines.append("</svg>")
    return "\n".join(lines)


def write_svg(document: str, out_path: str) -> None:
    """Write ``document`` as a standalone SVG file ("-" for stdout)."""
    text = '<?xml version="1.0" encoding="UTF-8"?>\n' + document + "\n"
    if out_path == "-":
        sys.stdout.write(text)
        return

    os.makedirs(os.path.dirname(os.path.abspath(out_path)) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(text)
