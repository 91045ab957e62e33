"""
Sample points and per-segment neighbourhoods.

A sampled path is an ordered list of :class:`SampledPoint` objects.
:func:`build_segments` turns it into one :class:`SegmentContext` per
consecutive pair of samples.  Each context also carries the sample
before and after the pair so the polygon emitter can compute the joins
at both ends of the segment.  On an open path those neighbours are
``None`` at the two ends; on a closed path they wrap around the seam
where the first and last samples coincide.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .vector import Point, diff, length


@dataclass(frozen=True)
class SampledPoint:
    """A point on the source path and its normalised arc-length position."""

    x: float
    y: float
    t: float

    @property
    def xy(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class SegmentContext:
    """The samples around the segment ``start -> end``.

    Attributes:
        prev: Sample preceding ``start`` or ``None`` at the start of an
            open path.
        start: First sample of the segment.
        end: Second sample of the segment.
        next: Sample following ``end`` or ``None`` at the end of an
            open path.
    """

    prev: Optional[SampledPoint]
    start: SampledPoint
    end: SampledPoint
    next: Optional[SampledPoint]

    @property
    def t(self) -> float:
        """Representative position of the segment, used for coloring."""
        return (self.start.t + self.end.t) / 2.0


def is_path_closed(points: Sequence[SampledPoint], epsilon: float) -> bool:
    """Return True if the first and last samples lie within ``epsilon``."""
    if len(points) < 2:
        return False
    return length(diff(points[0].xy, points[-1].xy)) < epsilon


def build_segments(points: Sequence[SampledPoint], is_closed: bool) -> List[SegmentContext]:
    """Group ``points`` into overlapping four-sample segment contexts.

    ``n`` points produce ``n - 1`` contexts.  For a closed path the
    neighbour before the first segment is the second-to-last sample and
    the neighbour after the last segment is the second sample (the last
    sample duplicates the first one).
    """
    n = len(points)
    before_seam = points[n - 2] if is_closed and n >= 2 else None
    after_seam = points[1] if is_closed and n >= 2 else None
    contexts: List[SegmentContext] = []
    for i in range(n - 1):
        contexts.append(
            SegmentContext(
                prev=points[i - 1] if i > 0 else before_seam,
                start=points[i],
                end=points[i + 1],
                next=points[i + 2] if i + 2 < n else after_seam,
            )
        )
    return contexts
