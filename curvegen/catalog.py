"""Named Lindenmayer systems.

Each grammar carries its axiom and rewrite rules together with the turtle
settings needed to draw it:

  angle     turn applied by "+" and "-", in radians
  start     initial heading, in radians (standard position)
  turn      if true, the initial heading is multiplied by the effective depth
  base      b in size ~ b^depth, used to keep the drawing a constant size
  min_depth internal depth that corresponds to a requested depth of 0
  max_depth deepest internal depth that may be rendered

The catalog is built once at import time and exposed read-only.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from curvegen.errors import UnknownSystem


@dataclass(frozen=True)
class Grammar:
    name: str
    axiom: str
    rules: Mapping[str, str] = field(hash=False)
    angle: float
    start: float
    base: float
    min_depth: int
    max_depth: int
    turn: bool = False
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.base <= 0:
            raise ValueError(f"{self.name}: base must be > 0")
        if self.min_depth > self.max_depth:
            raise ValueError(f"{self.name}: min_depth must be <= max_depth")
        # Freeze the rule table so that no caller can mutate a shared grammar.
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))


def effective_max_depth(grammar: Grammar) -> int:
    """Largest depth a caller may request for ``grammar``."""
    return grammar.max_depth - grammar.min_depth


_GRAMMARS = (
    Grammar(
        name="koch",
        axiom="F++F++F",
        rules={"F": "F-F++F-F"},
        angle=math.pi / 3,
        start=0.0,
        base=3,
        min_depth=0,
        max_depth=7,
        description="Koch snowflake",
    ),
    Grammar(
        name="hilbert",
        axiom="a",
        rules={"a": "+bF-aFa-Fb+", "b": "-aF+bFb+Fa-"},
        angle=math.pi / 2,
        start=0.0,
        base=2,
        min_depth=1,
        max_depth=8,
        description="Hilbert curve",
    ),
    Grammar(
        name="peano",
        axiom="a",
        rules={
            "a": "aFbFa-F-bFaFb+F+aFbFa",
            "b": "bFaFb+F+aFbFa-F-bFaFb",
        },
        angle=math.pi / 2,
        start=math.pi / 2,
        base=3,
        min_depth=1,
        max_depth=5,
        description="Peano curve",
    ),
    Grammar(
        name="gosper",
        axiom="A",
        rules={"A": "A-B--B+A++AA+B-", "B": "+A-BB--B-A++A+B"},
        angle=math.pi / 3,
        start=math.pi / 9,
        base=2.6,
        min_depth=0,
        max_depth=5,
        turn=True,
        description="Gosper flowsnake",
    ),
    Grammar(
        name="sierpinski",
        axiom="A",
        rules={"A": "+B-A-B+", "B": "-A+B+A-"},
        angle=math.pi / 3,
        start=0.0,
        base=2,
        min_depth=1,
        max_depth=9,
        description="Sierpinski arrowhead",
    ),
    Grammar(
        name="rings",
        axiom="F+F+F+F",
        rules={"F": "FF+F+F+F+F+F-F"},
        angle=math.pi / 2,
        start=-37 * math.pi / 360,
        base=3,
        min_depth=0,
        max_depth=5,
        turn=True,
        description="Rings",
    ),
    Grammar(
        name="tree",
        axiom="A",
        rules={"A": "B[+A]-A", "B": "BB"},
        angle=math.pi / 4,
        start=math.pi / 2,
        base=1.9,
        min_depth=0,
        max_depth=9,
        description="Binary tree",
    ),
    Grammar(
        name="plant",
        axiom="a",
        rules={"a": "F+[[a]-a]-F[-Fa]+a", "F": "FF"},
        angle=25.0 / 180.0 * math.pi,
        start=math.pi / 4,
        base=2,
        min_depth=1,
        max_depth=7,
        description="Fractal plant",
    ),
    Grammar(
        name="willow",
        axiom="a",
        rules={"a": "bFF[+a]c", "b": "bF", "c": "bFF[-a]a"},
        angle=math.pi / 6,
        start=80.0 / 180.0 * math.pi,
        base=1.3,
        min_depth=1,
        max_depth=12,
        description="Willow",
    ),
    Grammar(
        name="dragon",
        axiom="Fa",
        rules={"a": "a-bF-", "b": "+Fa+b"},
        angle=math.pi / 2,
        start=math.pi / 4,
        base=1.4,
        min_depth=0,
        max_depth=15,
        turn=True,
        description="Heighway dragon",
    ),
    Grammar(
        name="island",
        axiom="F+F+F+F",
        rules={"F": "F+F-F-FF+F+F-F"},
        angle=math.pi / 2,
        start=math.pi / 4,
        base=4,
        min_depth=0,
        max_depth=4,
        description="Quadratic Koch island",
    ),
)

CATALOG: Mapping[str, Grammar] = MappingProxyType({g.name: g for g in _GRAMMARS})


def lookup(name: str) -> Grammar:
    try:
        return CATALOG[name]
    except (KeyError, TypeError):
        raise UnknownSystem(name, "not in the catalog") from None


def system_names() -> list[str]:
    return list(CATALOG)
