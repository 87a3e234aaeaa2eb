#!/usr/bin/env python3
import pickle
import re

import pytest

from curvegen.cache import FileRenderCache
from curvegen.catalog import CATALOG, effective_max_depth
from curvegen.config import Settings
from curvegen.errors import (
    InvalidColor,
    InvalidDepth,
    InvalidPrecision,
    InvalidThickness,
    RenderError,
    UnknownSystem,
)
from curvegen.geometry import Polyline
from curvegen.render import (
    RenderOptions,
    render,
    render_curve,
    render_system,
    validate_options,
)


def _view_box(doc: str) -> list[float]:
    m = re.search(r'viewBox="([^"]+)"', doc)
    assert m is not None
    return [float(v) for v in m.group(1).split()]


class StubCache:
    def __init__(self, polylines: list[Polyline] | None = None) -> None:
        self.polylines = polylines
        self.puts: list[tuple[str, int]] = []

    def get(self, name: str, depth: int) -> list[Polyline] | None:
        return self.polylines

    def put(self, name: str, depth: int, polylines: list[Polyline]) -> None:
        self.puts.append((name, depth))


class TestValidateOptions:
    def test_accepts_strings(self) -> None:
        opts = validate_options(7, "3", "2.5", "navy", "4")
        assert opts == RenderOptions(depth=3, thickness=2.5, color="navy", precision=4)

    def test_accepts_numbers(self) -> None:
        opts = validate_options(7, 0, 1, "black", 15)
        assert opts == RenderOptions(depth=0, thickness=1.0, color="black", precision=15)

    @pytest.mark.parametrize("depth", ["-1", -1, 8, "8", "abc", "", "1.5", 1.5, True, None])
    def test_invalid_depth(self, depth) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(InvalidDepth) as exc:
            validate_options(7, depth, 3, "black", 3)
        assert exc.value.value == depth

    @pytest.mark.parametrize("thickness", ["0", 0, -1, "-1", "x", "", "nan", "inf", None])
    def test_invalid_thickness(self, thickness) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(InvalidThickness):
            validate_options(7, 1, thickness, "black", 3)

    @pytest.mark.parametrize("color", ["", None, 3])
    def test_invalid_color(self, color) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(InvalidColor):
            validate_options(7, 1, 3, color, 3)

    @pytest.mark.parametrize("precision", [0, 16, "0", "-1", "x", "2.5", None])
    def test_invalid_precision(self, precision) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(InvalidPrecision):
            validate_options(7, 1, 3, "black", precision)

    def test_error_carries_kind(self) -> None:
        with pytest.raises(RenderError) as exc:
            validate_options(7, 1, 3, "", 3)
        assert exc.value.kind == "InvalidColor"
        assert "InvalidColor" in str(exc.value)


class TestRenderSystem:
    def test_koch_depth_zero(self) -> None:
        doc = render_system("koch", 0, 3, "black", 3)
        assert doc.count("<polyline") == 1
        assert 'points="0,0 600,0 300,-519.615 0,0"' in doc
        assert 'viewBox="-2.4 -522.015 604.8 524.415"' in doc
        assert 'stroke="black"' in doc
        assert 'stroke-width="3.024"' in doc
        x, y, w, h = _view_box(doc)
        assert w > 0 and h > 0

    def test_depth_beyond_max(self) -> None:
        for name, grammar in CATALOG.items():
            with pytest.raises(InvalidDepth):
                render_system(name, effective_max_depth(grammar) + 1)

    def test_unknown_system(self) -> None:
        with pytest.raises(UnknownSystem):
            render_system("nope", 1)

    def test_every_system_renders(self) -> None:
        for name in CATALOG:
            for depth in (0, 1):
                doc = render_system(name, depth, 1, "black", 2)
                assert doc.startswith("<svg")
                assert "<polyline" in doc

    def test_branching_system_yields_many_polylines(self) -> None:
        doc = render_system("tree", 2, 1, "green", 2)
        # A -> B[+A]-A at two levels has three pops.
        assert doc.count("<polyline") == 4

    def test_deterministic(self) -> None:
        a = render_system("dragon", 4, "2", "red", "5")
        b = render_system("dragon", 4, "2", "red", "5")
        assert a == b

    def test_square_setting(self) -> None:
        doc = render_system("koch", 1, settings=Settings(square=True))
        _, _, w, h = _view_box(doc)
        assert w == pytest.approx(h, abs=1e-3)

    def test_step_factor_setting(self) -> None:
        doc = render_system("koch", 0, 3, "black", 3, settings=Settings(step_factor=60))
        assert 'points="0,0 60,0 30,-51.962 0,0"' in doc


class TestRenderCacheUse:
    def test_cache_hit_is_used(self) -> None:
        cache = StubCache([[(0.0, 0.0), (1.0, 1.0)]])
        doc = render_system("koch", 3, 1, "black", 2, cache=cache)
        assert 'points="0,0 1,1"' in doc
        assert cache.puts == []

    def test_miss_is_stored_at_effective_depth(self) -> None:
        cache = StubCache()
        render_system("hilbert", 0, cache=cache)
        assert cache.puts == [("hilbert", 1)]

    def test_cache_skipped_for_custom_scale(self) -> None:
        cache = StubCache([[(0.0, 0.0), (1.0, 1.0)]])
        doc = render_system(
            "koch", 0, 1, "black", 2, settings=Settings(step_factor=60), cache=cache
        )
        assert 'points="0,0 1,1"' not in doc
        assert cache.puts == []

    def test_file_cache_idempotent(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        cache = FileRenderCache(str(tmp_path))
        uncached = render_system("plant", 2, 2, "black", 4)
        first = render_system("plant", 2, 2, "black", 4, cache=cache)
        second = render_system("plant", 2, 2, "black", 4, cache=cache)
        assert (tmp_path / "plant-3.pickle").exists()
        assert first == second == uncached

    def test_corrupt_cache_falls_back(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        (tmp_path / "koch-2.pickle").write_bytes(b"\x00garbage")
        cache = FileRenderCache(str(tmp_path))
        assert render_system("koch", 2, cache=cache) == render_system("koch", 2)

    def test_non_numeric_cache_entry_falls_back(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        with open(tmp_path / "koch-1.pickle", "wb") as f:
            pickle.dump([[("x", "y")]], f)
        cache = FileRenderCache(str(tmp_path))
        assert render_system("koch", 1, cache=cache) == render_system("koch", 1)

    def test_validation_precedes_cache(self) -> None:
        cache = StubCache()
        with pytest.raises(InvalidThickness):
            render_system("koch", 1, "-3", cache=cache)
        assert cache.puts == []


class TestRenderCurve:
    def test_hilbert_depth_one(self) -> None:
        doc = render_curve("hilbert", 1, 3, "black", 3)
        assert doc.count("<polyline") == 1
        assert 'points="150,450 150,150 450,150 450,450"' in doc

    def test_hilbert_depth_zero(self) -> None:
        doc = render_curve("hilbert", 0)
        assert 'points="300,300"' in doc

    def test_unknown_curve(self) -> None:
        with pytest.raises(UnknownSystem):
            render_curve("koch", 1)

    def test_depth_bounds(self) -> None:
        with pytest.raises(InvalidDepth):
            render_curve("hilbert", 9)
        with pytest.raises(InvalidDepth):
            render_curve("hilbert", -1)


class TestRender:
    def test_dispatch(self) -> None:
        assert render("hilbert", 2, direct=True) == render_curve("hilbert", 2)
        assert render("hilbert", 2) == render_system("hilbert", 2)
        assert render("hilbert", 2) != render("hilbert", 2, direct=True)
