"""
Stroke-outline polygon for a single path segment.

:func:`emit_polygon` walks around the segment ``start -> end`` of a
:class:`~.segments.SegmentContext`: along the upper (left-hand) edge
from the start join to the end join, across the end, and back along the
lower edge.  Joins are delegated to :func:`~.joins.solve_join`; open
path ends fall back to square ends at the segment endpoints.

Adjacent polygons share their join points exactly, so the polygons tile
the stroke without gaps in exact arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .joins import JoinKind, JoinResult, solve_join
from .segments import SegmentContext
from .vector import Point, offset, orthogonal_unit


@dataclass(frozen=True)
class StrokePolygon:
    """Closed outline of one stroke segment.

    Attributes:
        points: Polygon vertices; the edge from the last vertex back to
            the first is implied.
        t: Representative path position of the segment in ``[0, 1]``.
    """

    points: Tuple[Point, ...]
    t: float


def _outgoing_side(join: JoinResult) -> List[Point]:
    """Join points on the edge leaving the corner (``p1 -> p2``)."""
    if join.kind is JoinKind.PARALLEL_REVERSED:
        return [join.points[2]]
    if join.is_beveled:
        return [join.points[2], join.points[3]]
    return [join.points[1]]


def _incoming_side(join: JoinResult) -> List[Point]:
    """Join points on the edge arriving at the corner (``p0 -> p1``)."""
    if join.kind is JoinKind.PARALLEL_REVERSED:
        return [join.points[0]]
    if join.is_beveled:
        return [join.points[1], join.points[2]]
    return [join.points[1]]


def emit_polygon(context: SegmentContext, r: float) -> StrokePolygon:
    """Build the stroke outline polygon of ``context.start -> context.end``.

    Args:
        context: Segment with its optional neighbours.
        r: Half of the stroke width.

    Returns:
        StrokePolygon: Between four and eight vertices tagged with the
        segment's ``t``.

    Raises:
        DegenerateVectorError: If two consecutive points of the context
            coincide.
    """
    p0 = context.prev.xy if context.prev is not None else None
    p1 = context.start.xy
    p2 = context.end.xy
    p3 = context.next.xy if context.next is not None else None
    u12 = orthogonal_unit(p1, p2)

    points: List[Point] = []

    # Upper edge, start.
    if p0 is not None:
        points.extend(_outgoing_side(solve_join(p0, p1, p2, r)))
    else:
        points.append(offset(p1, u12, r))

    # Upper edge end, then lower edge end.
    if p3 is not None:
        points.extend(_incoming_side(solve_join(p1, p2, p3, r)))
        points.extend(_outgoing_side(solve_join(p3, p2, p1, r)))
    else:
        points.append(offset(p2, u12, r))
        points.append(offset(p2, u12, -r))

    # Lower edge, start.
    if p0 is not None:
        points.extend(_incoming_side(solve_join(p2, p1, p0, r)))
    else:
        points.append(offset(p1, u12, -r))

    return StrokePolygon(points=tuple(points), t=context.t)
