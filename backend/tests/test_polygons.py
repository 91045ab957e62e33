"""
Tests for per-segment stroke polygon emission.

Each polygon is a closed loop walking the upper edge, the far end, the
lower edge and the near end of its segment.  Open path ends are squared
off at the endpoints; joins come from the join solver.
"""

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from gradient_stroke.services.errors import DegenerateVectorError
from gradient_stroke.services.polygons import emit_polygon
from gradient_stroke.services.segments import SampledPoint, SegmentContext, build_segments


def _sp(x: float, y: float, t: float = 0.0) -> SampledPoint:
    return SampledPoint(x=x, y=y, t=t)


def _samples(coords):
    n = len(coords)
    return [SampledPoint(x=x, y=y, t=i / (n - 1)) for i, (x, y) in enumerate(coords)]


def test_isolated_segment_is_rectangle() -> None:
    ctx = SegmentContext(prev=None, start=_sp(0.0, 0.0, 0.0), end=_sp(10.0, 0.0, 1.0), next=None)
    poly = emit_polygon(ctx, 1.0)
    assert poly.points == ((0.0, 1.0), (10.0, 1.0), (10.0, -1.0), (0.0, -1.0))
    assert poly.t == 0.5


def test_straight_neighbours_keep_rectangle() -> None:
    ctx = SegmentContext(
        prev=_sp(-5.0, 0.0), start=_sp(0.0, 0.0), end=_sp(5.0, 0.0), next=_sp(10.0, 0.0)
    )
    poly = emit_polygon(ctx, 2.0)
    assert poly.points == ((0.0, 2.0), (5.0, 2.0), (5.0, -2.0), (0.0, -2.0))


def test_adjacent_polygons_share_join_points() -> None:
    pts = _samples([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (20.0, 12.0)])
    first, second, _ = [emit_polygon(ctx, 1.0) for ctx in build_segments(pts, False)]
    # first: [start-upper, end-upper, end-lower, start-lower]
    # second: [start-upper, end-upper, end-lower, start-lower]
    assert first.points[1] == second.points[0]
    assert first.points[2] == second.points[-1]


def test_sharp_turns_bevel_one_side_each() -> None:
    """Hairpin turns at both ends bevel the outer side: 4 + 1 + 1 points."""
    ctx = SegmentContext(
        prev=_sp(8.0, 2.0), start=_sp(0.0, 0.0), end=_sp(10.0, 0.0), next=_sp(2.0, 2.0)
    )
    poly = emit_polygon(ctx, 1.0)
    assert len(poly.points) == 6
    for x, y in poly.points:
        assert math.isfinite(x) and math.isfinite(y)


def test_reversal_produces_square_caps() -> None:
    """Scenario: (0,0) -> (10,0) -> (0,0) with width 2 caps both ends 2r out."""
    pts = _samples([(0.0, 0.0), (10.0, 0.0), (0.0, 0.0)])
    contexts = build_segments(pts, is_closed=True)
    poly = emit_polygon(contexts[0], 1.0)
    expected = [(-2.0, 1.0), (12.0, 1.0), (12.0, -1.0), (-2.0, -1.0)]
    assert len(poly.points) == len(expected)
    for actual, want in zip(poly.points, expected):
        assert actual == pytest.approx(want)
    xs = [p[0] for p in poly.points]
    # The cap extends 2r = 2 beyond each end of the 10-unit segment.
    assert max(xs) - 10.0 == pytest.approx(2.0)
    assert 0.0 - min(xs) == pytest.approx(2.0)


def test_polygon_vertex_count_bounds() -> None:
    """Every polygon of a jagged path is closed with four to eight vertices."""
    coords = [
        (0.0, 0.0), (10.0, 0.0), (12.0, 1.0), (2.0, 2.0), (3.0, 10.0),
        (3.5, -5.0), (20.0, 0.0), (21.0, 0.2), (5.0, 0.1), (0.0, 0.0),
    ]
    for closed in (False, True):
        for ctx in build_segments(_samples(coords), closed):
            poly = emit_polygon(ctx, 1.5)
            assert 4 <= len(poly.points) <= 8
            for x, y in poly.points:
                assert math.isfinite(x) and math.isfinite(y)


def test_coincident_points_raise_instead_of_nan() -> None:
    ctx = SegmentContext(prev=None, start=_sp(1.0, 1.0), end=_sp(1.0, 1.0), next=None)
    with pytest.raises(DegenerateVectorError):
        emit_polygon(ctx, 1.0)
