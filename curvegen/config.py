"""Renderer settings.

Settings are read from an optional JSON file, for example:

    {
      "step_factor": 600,
      "pad_factor": 0.8,
      "square": false,
      "include_origin": true,
      "cache_dir": "cache",
      "log_level": "INFO",
      "log_format": "console"
    }

Every key is optional; unknown keys are rejected.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, fields, replace
from typing import Any, cast

from curvegen.errors import ConfigError, _require
from curvegen.geometry import PAD_FACTOR, STEP_FACTOR
from curvegen.log import LOG_FORMATS


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    return float(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_bool(x: Any, path: str) -> bool:
    _require(isinstance(x, bool), f"{path} must be a boolean")
    return cast(bool, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


@dataclass(frozen=True)
class Settings:
    step_factor: float = STEP_FACTOR
    pad_factor: float = PAD_FACTOR
    square: bool = False
    include_origin: bool = True
    cache_dir: str | None = None
    log_level: str = "INFO"
    log_format: str = "console"

    def with_overrides(self, **changes: Any) -> Settings:
        """Return a copy with every non-None value in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_settings(obj: Any) -> Settings:
    obj = _as_dict(obj, "root")
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(obj) - known)
    _require(not unknown, f"unknown settings: {', '.join(unknown)}")

    defaults = Settings()

    step_factor = _as_float(obj.get("step_factor", defaults.step_factor), "step_factor")
    _require(
        math.isfinite(step_factor) and step_factor > 0, "step_factor must be finite and > 0"
    )

    pad_factor = _as_float(obj.get("pad_factor", defaults.pad_factor), "pad_factor")
    _require(
        math.isfinite(pad_factor) and pad_factor >= 0, "pad_factor must be finite and >= 0"
    )

    cache_dir = obj.get("cache_dir")
    if cache_dir is not None:
        cache_dir = _as_str(cache_dir, "cache_dir")
        _require(len(cache_dir) > 0, "cache_dir must be non-empty")

    log_level = _as_str(obj.get("log_level", defaults.log_level), "log_level").upper()
    _require(log_level in _LOG_LEVELS, f"log_level must be one of {_LOG_LEVELS}")

    log_format = _as_str(obj.get("log_format", defaults.log_format), "log_format")
    _require(log_format in LOG_FORMATS, f"log_format must be one of {LOG_FORMATS}")

    return Settings(
        step_factor=step_factor,
        pad_factor=pad_factor,
        square=_as_bool(obj.get("square", defaults.square), "square"),
        include_origin=_as_bool(
            obj.get("include_origin", defaults.include_origin), "include_origin"
        ),
        cache_dir=cache_dir,
        log_level=log_level,
        log_format=log_format,
    )


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def load_settings(path: str | None) -> Settings:
    if path is None:
        return Settings()
    return parse_settings(load_json(path))
