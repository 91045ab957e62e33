"""
2D vector primitives used by the stroke geometry.

Points and vectors are plain ``(x, y)`` tuples of floats so that the
join and polygon code can stay free of any array library.  Every
function here is pure.  Operations that would otherwise divide by zero
raise a :class:`~.errors.GeometryError` subclass instead of returning
NaN coordinates.
"""

from __future__ import annotations

import math
from typing import Tuple

from .errors import DegenerateVectorError, ParallelLinesError

Point = Tuple[float, float]


def length(v: Point) -> float:
    """Euclidean length of ``v``."""
    return math.hypot(v[0], v[1])


def diff(a: Point, b: Point) -> Point:
    """Vector from ``a`` to ``b`` (``b - a``)."""
    return (b[0] - a[0], b[1] - a[1])


def unit(v: Point) -> Point:
    """Scale ``v`` to unit length.

    Raises:
        DegenerateVectorError: If ``v`` has zero length.
    """
    ln = length(v)
    if ln == 0.0:
        raise DegenerateVectorError(f"Cannot normalise zero-length vector {v!r}")
    return (v[0] / ln, v[1] / ln)


def rotate90(v: Point) -> Point:
    """Rotate ``v`` by 90 degrees counter-clockwise."""
    return (-v[1], v[0])


def orthogonal_unit(p0: Point, p1: Point) -> Point:
    """Unit vector perpendicular to the line ``p0 -> p1``.

    The vector points to the left of the direction of travel (in a
    y-up frame), i.e. ``(p0.y - p1.y, p1.x - p0.x)`` normalised.
    """
    return unit(rotate90(diff(p0, p1)))


def offset(p: Point, u: Point, d: float) -> Point:
    """Offset point ``p`` by distance ``d`` along direction ``u``."""
    return (p[0] + u[0] * d, p[1] + u[1] * d)


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


def cross(a: Point, b: Point) -> float:
    """Z component of the cross product of ``a`` and ``b``."""
    return a[0] * b[1] - a[1] * b[0]


def dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1]


def line_intersection(a: Point, b: Point, c: Point, d: Point) -> Point:
    """Intersection of the infinite lines through ``a-b`` and ``c-d``.

    Uses the determinant ratio of the two direction vectors.  Callers
    are expected to have ruled out parallel lines beforehand; an exact
    zero denominator raises rather than producing infinities.

    Raises:
        ParallelLinesError: If the lines are exactly parallel.
    """
    ab_dx = b[0] - a[0]
    ab_dy = b[1] - a[1]
    cd_dx = d[0] - c[0]
    cd_dy = d[1] - c[1]
    denom = ab_dy * cd_dx - ab_dx * cd_dy
    if denom == 0.0:
        raise ParallelLinesError(
            f"Lines {a!r}-{b!r} and {c!r}-{d!r} are parallel"
        )
    ua = (ab_dx * (c[1] - a[1]) - ab_dy * (c[0] - a[0])) / denom
    return (c[0] + ua * cd_dx, c[1] + ua * cd_dy)
