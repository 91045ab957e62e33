"""
Tests for line-join classification and geometry.

The joins are computed on the left-hand side of ``p0 -> p1 -> p2``; a
right turn therefore puts that side on the outside of the corner and a
left turn on the inside.
"""

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from gradient_stroke.services.joins import JoinKind, JoinResult, solve_join
from gradient_stroke.services.sampling import PolylinePath, sample_path
from gradient_stroke.services.vector import diff, length


def _right_turn(angle_deg: float, arm: float = 10.0):
    """Corner at the origin turning clockwise by ``angle_deg``."""
    a = math.radians(angle_deg)
    return (-arm, 0.0), (0.0, 0.0), (arm * math.cos(a), -arm * math.sin(a))


def _turn_for_miter(miter: float, r: float) -> float:
    """Turning angle (degrees) whose outer miter length equals ``miter``."""
    return math.degrees(2.0 * math.acos(r / miter))


def test_straight_continuation_is_parallel_same() -> None:
    """A straight run offsets exactly by r with no lateral deviation."""
    join = solve_join((0.0, 0.0), (5.0, 0.0), (10.0, 0.0), 1.0)
    assert join.kind is JoinKind.PARALLEL_SAME
    assert join.points == ((0.0, 1.0), (5.0, 1.0), (10.0, 1.0))

    # The other side of the stroke, via the reversed triple.
    other = solve_join((10.0, 0.0), (5.0, 0.0), (0.0, 0.0), 1.0)
    assert other.kind is JoinKind.PARALLEL_SAME
    assert other.points[1] == (5.0, -1.0)


def test_reversal_yields_square_cap() -> None:
    """Doubling back projects a cap 2r past the corner along the incoming direction."""
    r = 1.0
    join = solve_join((0.0, 0.0), (10.0, 0.0), (0.0, 0.0), r)
    assert join.kind is JoinKind.PARALLEL_REVERSED
    assert len(join.points) == 3
    left, centre, right = join.points
    assert centre == (12.0, 0.0)
    assert left == (12.0, 1.0)
    assert right == (12.0, -1.0)
    assert length(diff((10.0, 0.0), centre)) == pytest.approx(2 * r)


def test_outer_right_angle_is_pointed() -> None:
    join = solve_join((-10.0, 0.0), (0.0, 0.0), (0.0, -10.0), 1.0)
    assert join.kind is JoinKind.POINTED
    assert len(join.points) == 3
    assert join.points[1] == pytest.approx((1.0, 1.0))
    assert join.points[0] == pytest.approx((-10.0, 1.0))
    assert join.points[2] == pytest.approx((1.0, -10.0))


def test_inner_right_angle_uses_raw_intersection() -> None:
    join = solve_join((-10.0, 0.0), (0.0, 0.0), (0.0, 10.0), 1.0)
    assert join.kind is JoinKind.POINTED
    assert join.points[1] == pytest.approx((-1.0, 1.0))


@pytest.mark.parametrize("r", [0.5, 1.0, 3.0])
def test_miter_limit_boundary(r: float) -> None:
    """Miters up to 2r stay pointed; anything longer is beveled."""
    eps = 1e-6
    below = solve_join(*_right_turn(_turn_for_miter(2 * r - eps, r), arm=50.0), r)
    assert below.kind is JoinKind.POINTED
    assert len(below.points) == 3
    assert length(below.points[1]) == pytest.approx(2 * r - eps, abs=1e-9)

    above = solve_join(*_right_turn(_turn_for_miter(2 * r + eps, r), arm=50.0), r)
    assert above.kind is JoinKind.BEVELED
    assert len(above.points) == 5


def test_bevel_geometry() -> None:
    """The bevel cut sits 2r from the corner and meets both offset edges."""
    r = 1.0
    p0, p1, p2 = _right_turn(150.0)
    join = solve_join(p0, p1, p2, r)
    assert join.kind is JoinKind.BEVELED
    p0_padded, left_meeting, cutting, right_meeting, p2_padded = join.points
    assert length(diff(p1, cutting)) == pytest.approx(2 * r)
    # Left meeting point lies on the offset of p0 -> p1 (y = r).
    assert left_meeting[1] == pytest.approx(r)
    # Right meeting point lies on the offset line through p2_padded.
    a = math.radians(150.0)
    direction = (math.cos(a), -math.sin(a))
    rel = diff(p2_padded, right_meeting)
    assert rel[0] * direction[1] - rel[1] * direction[0] == pytest.approx(0.0, abs=1e-9)
    # Both meeting points are equidistant from the cut point.
    assert length(diff(cutting, left_meeting)) == pytest.approx(length(diff(cutting, right_meeting)))


def test_inner_trim_on_short_segments() -> None:
    """A sharp inner corner on short segments is trimmed towards the corner."""
    r = 1.0
    p0, p1, p2 = (9.75, 0.0), (10.0, 0.0), (10.0, 0.25)
    join = solve_join(p0, p1, p2, r)
    assert join.kind is JoinKind.INNER_TRIM
    x, y = join.points[1]
    assert math.isfinite(x) and math.isfinite(y)
    h = math.sqrt(0.5)
    assert (x, y) == pytest.approx((9.875 - h, 0.125 + h))
    # Closer to the corner than the untrimmed intersection at (9, 1).
    assert length(diff(p1, (x, y))) < length(diff(p1, (9.0, 1.0)))


def test_inner_corner_within_threshold_is_not_trimmed() -> None:
    # ratio = (9 - 9.5) / 0.5 = -1, which does not pass the threshold.
    join = solve_join((9.5, 0.0), (10.0, 0.0), (10.0, 0.5), 1.0)
    assert join.kind is JoinKind.POINTED
    assert join.points[1] == pytest.approx((9.0, 1.0))


def test_join_result_rejects_other_lengths() -> None:
    with pytest.raises(ValueError):
        JoinResult(JoinKind.POINTED, ((0.0, 0.0), (1.0, 1.0)))


def test_finely_sampled_diagonal_is_parallel_same() -> None:
    """Rounding in sampled diagonal coordinates must not turn a straight run into a corner."""
    samples = sample_path(PolylinePath([(0.0, 0.0), (1000.0, 371.3)]), 0.1)
    r = 1.0
    normal = (-371.3 / math.hypot(1000.0, 371.3), 1000.0 / math.hypot(1000.0, 371.3))
    for a, b, c in zip(samples, samples[1:], samples[2:]):
        join = solve_join(a.xy, b.xy, c.xy, r)
        assert join.kind is JoinKind.PARALLEL_SAME
        jx, jy = join.points[1]
        # The join sits on the offset edge, r to the left of the line.
        assert jx * normal[0] + jy * normal[1] == pytest.approx(r, abs=1e-6)


def test_diagonal_reversal_with_rounding_is_capped() -> None:
    join = solve_join((1.1, 0.7), (4.4, 2.8), (2.2, 1.4), 0.5)
    assert join.kind is JoinKind.PARALLEL_REVERSED


def test_slight_kink_is_a_corner() -> None:
    join = solve_join((0.0, 0.0), (10.0, 0.0), (20.0, 1e-6), 1.0)
    assert join.kind is JoinKind.POINTED
    assert all(math.isfinite(c) for c in join.points[1])
