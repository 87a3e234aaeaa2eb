"""Turtle interpretation of expanded symbol sequences.

Screen coordinates grow downward, so a heading of pi/2 moves the turtle
toward smaller y values.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, replace

from curvegen.catalog import Grammar
from curvegen.errors import StackUnderflow
from curvegen.geometry import STEP_FACTOR, Point, Polyline


@dataclass(frozen=True)
class TurtleState:
    x: float
    y: float
    heading: float
    step: float

    @property
    def pos(self) -> Point:
        return (self.x, self.y)

    def advanced(self) -> TurtleState:
        return replace(
            self,
            x=self.x + self.step * math.cos(self.heading),
            y=self.y - self.step * math.sin(self.heading),
        )

    def turned(self, delta: float) -> TurtleState:
        return replace(self, heading=self.heading + delta)


def initial_turtle(
    grammar: Grammar, effective_depth: int, step_factor: float = STEP_FACTOR
) -> TurtleState:
    """Return the turtle to start from when drawing ``grammar``.

    The step shrinks with depth at the grammar's growth rate, so the whole
    curve stays near ``step_factor`` in size.
    """
    step = step_factor * math.pow(grammar.base, -effective_depth)
    if grammar.turn:
        heading = grammar.start * effective_depth
    else:
        heading = grammar.start
    return TurtleState(x=0.0, y=0.0, heading=heading, step=step)


def execute(
    symbols: Iterable[str], turtle: TurtleState, angle: float
) -> list[Polyline]:
    """Interpret ``symbols`` and return the visited points as polylines.

    Uppercase letters draw forward, "+" and "-" turn by ``angle``, and "["
    and "]" save and restore the turtle. Every "]" ends the current polyline
    and starts a new one at the restored position. Other symbols are ignored.
    """
    polylines: list[Polyline] = []
    stack: list[TurtleState] = []
    points: Polyline = [turtle.pos]

    for sym in symbols:
        if sym.isupper():
            turtle = turtle.advanced()
            points.append(turtle.pos)
        elif sym == "+":
            turtle = turtle.turned(angle)
        elif sym == "-":
            turtle = turtle.turned(-angle)
        elif sym == "[":
            stack.append(turtle)
        elif sym == "]":
            if not stack:
                raise StackUnderflow("']' with no matching '['")
            turtle = stack.pop()
            if points:
                polylines.append(points)
            points = [turtle.pos]

    if points:
        polylines.append(points)
    return polylines
