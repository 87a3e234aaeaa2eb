"""Command-line front end.

Run:
  curvegen render koch 3 koch.svg --thickness 2 --color navy
  curvegen render hilbert 4 hilbert.svg --direct
  curvegen list
  curvegen info dragon
  curvegen --help
"""

from __future__ import annotations

import argparse
import sys

from curvegen import hilbert
from curvegen.cache import FileRenderCache
from curvegen.catalog import CATALOG, effective_max_depth, lookup
from curvegen.config import Settings, load_settings
from curvegen.errors import ConfigError, RenderError
from curvegen.expansion import stream_expand
from curvegen.log import configure_logging, get_logger
from curvegen.render import (
    DEFAULT_COLOR,
    DEFAULT_DEPTH,
    DEFAULT_PRECISION,
    DEFAULT_THICKNESS,
    render,
)
from curvegen.svg import write_svg

logger = get_logger(__name__)

HELP_EPILOG = r"""
CURVES

  Lindenmayer systems are drawn by rewriting their axiom DEPTH times and
  walking the result with a turtle. Run "curvegen list" for the catalog.

  With --direct, NAME refers to a curve built by recursive subdivision
  instead (currently "hilbert").

OPTIONS

  DEPTH must be an integer from 0 to the curve's maximum depth. Thickness is
  relative to the size of the drawing, so the stroke looks the same at every
  depth. Precision is the number of decimal places written for coordinates
  (1 to 15).

SETTINGS FILE

  --settings reads a JSON object with any of:

    step_factor     approximate size of the drawing (default 600)
    pad_factor      padding per unit of thickness (default 0.8)
    square          force a square viewBox (default false)
    include_origin  keep the origin inside the viewBox (default true)
    cache_dir       directory for cached geometry (default none)
    log_level       DEBUG, INFO, WARNING, ERROR or CRITICAL
    log_format      "console" or "json"
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="curvegen",
        description="Render self-similar curves as SVG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument("--settings", help="Path to a JSON settings file.")
    p.add_argument(
        "--log-level",
        default=None,
        help="Override the log level from the settings file.",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser(
        "render",
        help="Render a curve to an SVG file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pr.add_argument("name", help="Curve name.")
    pr.add_argument(
        "depth",
        nargs="?",
        default=str(DEFAULT_DEPTH),
        help=f"Recursion depth (default {DEFAULT_DEPTH}).",
    )
    pr.add_argument("output", help='Path to write the SVG output ("-" for stdout).')
    pr.add_argument("--thickness", default=str(DEFAULT_THICKNESS))
    pr.add_argument("--color", default=DEFAULT_COLOR)
    pr.add_argument("--precision", default=str(DEFAULT_PRECISION))
    pr.add_argument(
        "--direct",
        action="store_true",
        help="Use the subdivision curves instead of the Lindenmayer systems.",
    )
    pr.add_argument(
        "--square",
        action="store_true",
        default=None,
        help="Force a square viewBox.",
    )
    pr.add_argument("--cache-dir", help="Cache rendered geometry in this directory.")

    sub.add_parser("list", help="List the available curves.")

    pi = sub.add_parser("info", help="Describe a Lindenmayer system.")
    pi.add_argument("name", help="System name.")

    return p


# -------------------------
# Commands
# -------------------------


def cmd_render(args: argparse.Namespace, settings: Settings) -> None:
    settings = settings.with_overrides(square=args.square, cache_dir=args.cache_dir)
    cache = FileRenderCache(settings.cache_dir) if settings.cache_dir else None

    document = render(
        args.name,
        args.depth,
        args.thickness,
        args.color,
        args.precision,
        direct=args.direct,
        settings=settings,
        cache=cache,
    )
    write_svg(document, args.output)
    logger.info(
        "Rendered curve", name=args.name, depth=args.depth, output=args.output
    )


def cmd_list() -> None:
    for name, grammar in CATALOG.items():
        print(f"{name:<12} 0..{effective_max_depth(grammar):<3} {grammar.description}")
    for name, max_depth in hilbert.CURVES.items():
        print(f"{name:<12} 0..{max_depth:<3} subdivision (--direct)")


def cmd_info(name: str) -> None:
    grammar = lookup(name)

    print(f"name: {grammar.name}")
    print(f"axiom: {grammar.axiom}")
    for sym, body in grammar.rules.items():
        print(f"rule: {sym} -> {body}")
    print(f"angle: {grammar.angle:.6g} rad")
    print(f"start: {grammar.start:.6g} rad{' (scaled by depth)' if grammar.turn else ''}")
    print(f"base: {grammar.base}")
    print(f"depths: 0..{effective_max_depth(grammar)} (skips {grammar.min_depth})")
    for depth in range(effective_max_depth(grammar) + 1):
        level = grammar.min_depth + depth
        count = sum(1 for _ in stream_expand(grammar.axiom, grammar.rules, level))
        print(f"  depth {depth}: {count} symbols")


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        settings = load_settings(args.settings)
        configure_logging(args.log_level or settings.log_level, settings.log_format)

        if args.cmd == "render":
            cmd_render(args, settings)
        elif args.cmd == "list":
            cmd_list()
        elif args.cmd == "info":
            cmd_info(args.name)
        else:
            raise AssertionError("unreachable")
    except RenderError as e:
        print(f"Render error: {e}", file=sys.stderr)
        return 2
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
