"""Error types raised by the renderer.

Validation failures are ``RenderError`` subclasses carrying the failure kind
and the offending value, so a front end can report them without parsing the
message. ``StackUnderflow`` signals an unbalanced branch in an expanded
sequence and is never a user error.
"""

from __future__ import annotations

from typing import Any


class ConfigError(ValueError):
    pass


class RenderError(ValueError):
    kind = "RenderError"

    def __init__(self, value: Any, reason: str = "") -> None:
        self.value = value
        self.reason = reason
        msg = f"{self.kind}: {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class UnknownSystem(RenderError):
    kind = "UnknownSystem"


class InvalidDepth(RenderError):
    kind = "InvalidDepth"


class InvalidThickness(RenderError):
    kind = "InvalidThickness"


class InvalidColor(RenderError):
    kind = "InvalidColor"


class InvalidPrecision(RenderError):
    kind = "InvalidPrecision"


class StackUnderflow(AssertionError):
    pass


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)
