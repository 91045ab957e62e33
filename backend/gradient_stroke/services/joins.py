"""
Line-join geometry for polyline strokes.

Given three consecutive path points ``p0 -> p1 -> p2`` and the stroke
half-width ``r``, :func:`solve_join` works out where the offset edge on
the left-hand side of ``p0 -> p1`` meets the offset edge on the
left-hand side of ``p1 -> p2``.  Calling it with the triple reversed
(``p2 -> p1 -> p0``) gives the join on the other side of the stroke.

The result always has three or five points so callers can index into
fixed positions:

* three points ``[p0Padded, join, p2Padded]`` for straight
  continuations, pointed (mitered) corners and inner corners;
* five points ``[p0Padded, leftMeeting, cuttingPoint, rightMeeting,
  p2Padded]`` when an outer miter exceeds the miter limit and is
  beveled;
* three cap points ``[leftCap, centreCap, rightCap]`` when the path
  turns back on itself, forming a square cap projected ``2r`` past
  ``p1``.

Inner corners on very short segments would push the raw intersection of
the offset edges far behind the corner and make the stroke polygon fold
over itself.  Those joins are trimmed back towards the corner; the
``INNER_TRIM_RATIO`` threshold is an empirical heuristic and does not
guarantee a simple polygon for arbitrarily sharp inner turns.

Per-join debug logging is enabled through the ``STROKE_DEBUG``
environment variable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .vector import (
    Point,
    cross,
    diff,
    dot,
    length,
    line_intersection,
    midpoint,
    offset,
    orthogonal_unit,
    unit,
)

logger = logging.getLogger(__name__)

# Miter limit expressed in multiples of the half-width.
MITER_LIMIT_FACTOR: float = 2.0

# Edges count as parallel when the sine of the angle between them is
# at most this value.
PARALLEL_TOLERANCE: float = 1e-9

# Inner joins whose intersection lies further back than this fraction
# of the incoming segment (measured from its padded start) are trimmed.
INNER_TRIM_RATIO: float = -1.0


class JoinKind(str, Enum):
    POINTED = "pointed"
    BEVELED = "beveled"
    PARALLEL_SAME = "parallel_same"
    PARALLEL_REVERSED = "parallel_reversed"
    INNER_TRIM = "inner_trim"


@dataclass(frozen=True)
class JoinResult:
    """Join points at the middle vertex of a three-point run."""

    kind: JoinKind
    points: Tuple[Point, ...]

    def __post_init__(self) -> None:
        if len(self.points) not in (3, 5):
            raise ValueError(f"Join must have 3 or 5 points, got {len(self.points)}")

    @property
    def is_beveled(self) -> bool:
        return len(self.points) == 5


def _are_parallel(d01: Point, d12: Point) -> bool:
    """True when the edge directions differ by at most a rounding error.

    The cross product is scaled by both lengths so the test does not
    depend on segment length or on where the segments sit in the plane.
    """
    return abs(cross(d01, d12)) <= PARALLEL_TOLERANCE * length(d01) * length(d12)


def _fraction_along(start: Point, end: Point, p: Point) -> float:
    """Signed position of ``p`` along ``start -> end`` (0 at start, 1 at end).

    ``p`` is assumed to be on the line; the axis with the larger delta is
    used so the division is never by zero.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) >= abs(dy):
        return (p[0] - start[0]) / dx
    return (p[1] - start[1]) / dy


def solve_join(p0: Point, p1: Point, p2: Point, r: float) -> JoinResult:
    """Compute the left-hand join geometry at ``p1``.

    Args:
        p0: Point before the corner.
        p1: Corner point.
        p2: Point after the corner.
        r: Half of the stroke width; must be positive.

    Returns:
        JoinResult: Classified join with three or five points.

    Raises:
        DegenerateVectorError: If ``p0 == p1`` or ``p1 == p2``.
    """
    u01 = orthogonal_unit(p0, p1)
    u12 = orthogonal_unit(p1, p2)
    miter_limit = MITER_LIMIT_FACTOR * r

    p0_padded = offset(p0, u01, r)
    p1_padded_left = offset(p1, u01, r)
    p1_padded_right = offset(p1, u12, r)
    p2_padded = offset(p2, u12, r)

    d01 = diff(p0, p1)
    d12 = diff(p1, p2)
    if _are_parallel(d01, d12) and dot(d01, d12) > 0.0:
        return JoinResult(JoinKind.PARALLEL_SAME, (p0_padded, p1_padded_right, p2_padded))

    if _are_parallel(d01, d12):
        # The path doubles back on itself; project a square cap ahead of p1.
        d = unit(diff(p0, p1))
        return JoinResult(
            JoinKind.PARALLEL_REVERSED,
            (
                offset(p1_padded_left, d, miter_limit),
                offset(p1, d, miter_limit),
                offset(p1_padded_right, d, miter_limit),
            ),
        )

    intersection = line_intersection(p0_padded, p1_padded_left, p1_padded_right, p2_padded)
    ratio = _fraction_along(p0_padded, p1_padded_left, intersection)

    if ratio > 1.0:
        miter_length = length(diff(p1, intersection))
        if miter_length <= miter_limit:
            result = JoinResult(JoinKind.POINTED, (p0_padded, intersection, p2_padded))
        else:
            miter_dir = unit(diff(p1, intersection))
            cutting_point = offset(p1, miter_dir, miter_limit)
            cutting_dir = orthogonal_unit(p1, cutting_point)
            cutting_end = offset(cutting_point, cutting_dir, 1.0)
            left_meeting = line_intersection(p0_padded, p1_padded_left, cutting_point, cutting_end)
            right_meeting = line_intersection(p2_padded, p1_padded_right, cutting_point, cutting_end)
            result = JoinResult(
                JoinKind.BEVELED,
                (p0_padded, left_meeting, cutting_point, right_meeting, p2_padded),
            )
    elif ratio < INNER_TRIM_RATIO:
        join_point = offset(midpoint(p0, p2), unit(diff(p1, intersection)), r)
        result = JoinResult(JoinKind.INNER_TRIM, (p0_padded, join_point, p2_padded))
    else:
        result = JoinResult(JoinKind.POINTED, (p0_padded, intersection, p2_padded))

    if os.getenv("STROKE_DEBUG"):
        logger.debug(
            "join at %s: kind=%s ratio=%.6g intersection=%s",
            p1,
            result.kind.value,
            ratio,
            intersection,
        )
    return result
