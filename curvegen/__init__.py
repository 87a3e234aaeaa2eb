"""Render Lindenmayer systems and space-filling curves as SVG."""

from curvegen.cache import FileRenderCache, RenderCache
from curvegen.catalog import Grammar, effective_max_depth, lookup, system_names
from curvegen.config import Settings, load_settings
from curvegen.errors import (
    ConfigError,
    InvalidColor,
    InvalidDepth,
    InvalidPrecision,
    InvalidThickness,
    RenderError,
    StackUnderflow,
    UnknownSystem,
)
from curvegen.render import (
    RenderOptions,
    render,
    render_curve,
    render_system,
    validate_options,
)

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "FileRenderCache",
    "Grammar",
    "InvalidColor",
    "InvalidDepth",
    "InvalidPrecision",
    "InvalidThickness",
    "RenderCache",
    "RenderError",
    "RenderOptions",
    "Settings",
    "StackUnderflow",
    "UnknownSystem",
    "effective_max_depth",
    "load_settings",
    "lookup",
    "render",
    "render_curve",
    "render_system",
    "system_names",
    "validate_options",
]
