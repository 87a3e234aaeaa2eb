"""On-disk memoization of rendered geometry.

The cache is an optimization only: a failed read is reported as a miss and
a failed write is logged and dropped, so rendering never depends on it.
"""

from __future__ import annotations

import contextlib
import math
import os
import pickle
import re
import tempfile
from typing import Any, Protocol

from curvegen.geometry import Polyline
from curvegen.log import get_logger

logger = get_logger(__name__)


class RenderCache(Protocol):
    def get(self, name: str, depth: int) -> list[Polyline] | None: ...

    def put(self, name: str, depth: int, polylines: list[Polyline]) -> None: ...


_UNSAFE = re.compile(r"[^A-Za-z0-9_.]")


def cache_key(name: str, depth: int) -> str:
    """Return a file name for ``(name, depth)`` that is safe on any filesystem."""
    safe = _UNSAFE.sub(lambda m: f"%{ord(m.group()):02x}", name)
    return f"{safe}-{depth}.pickle"


def _is_coord(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _is_polylines(obj: Any) -> bool:
    return isinstance(obj, list) and all(
        isinstance(pl, list)
        and all(
            isinstance(p, tuple) and len(p) == 2 and all(_is_coord(v) for v in p)
            for p in pl
        )
        for pl in obj
    )


class FileRenderCache:
    """One pickle file per (name, depth) in ``directory``.

    Entries are written to a temporary file and renamed into place, so a
    reader sees either the old entry, the new one, or none at all.
    """

    def __init__(self, directory: str) -> None:
        self.directory = directory
        self.logger = logger.bind(cache_dir=directory)

    def path_for(self, name: str, depth: int) -> str:
        return os.path.join(self.directory, cache_key(name, depth))

    def get(self, name: str, depth: int) -> list[Polyline] | None:
        path = self.path_for(name, depth)
        try:
            with open(path, "rb") as f:
                obj = pickle.load(f)
        except FileNotFoundError:
            self.logger.debug("Cache miss", name=name, depth=depth)
            return None
        except Exception as e:  # unpickling corrupt data can raise nearly anything
            self.logger.warning(
                "Cache read failed", name=name, depth=depth, error=str(e)
            )
            return None

        if not _is_polylines(obj):
            self.logger.warning("Cache entry malformed", name=name, depth=depth)
            return None

        self.logger.debug("Cache hit", name=name, depth=depth)
        return obj

    def put(self, name: str, depth: int, polylines: list[Polyline]) -> None:
        path = self.path_for(name, depth)
        tmp_path = None
        try:
            os.makedirs(self.directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.directory, prefix=".tmp-", suffix=".pickle"
            )
            with os.fdopen(fd, "wb") as f:
                pickle.dump(polylines, f, protocol=pickle.HIGHEST_PROTOCOL)
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            self.logger.warning(
                "Cache write failed", name=name, depth=depth, error=str(e)
            )
        finally:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)
