"""
Path-geometry providers and uniform arc-length sampling.

The stroke engine only needs two things from a path: its total length
and the point found at a given distance along it.  Those two queries
make up the :class:`PathGeometry` protocol.  Two providers are
included:

* :class:`PolylinePath` for explicit vertex lists.  Cumulative segment
  lengths are precomputed with numpy so each lookup is a binary search.
* :class:`SvgPath` for SVG path data (``d`` attributes).  Parsing,
  curve length and inverse arc-length are delegated to
  ``svgpathtools``.

:func:`sample_path` turns either provider into evenly spaced
:class:`~.segments.SampledPoint` objects, always including both
endpoints.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Protocol, Sequence

import numpy as np
from svgpathtools import parse_path

from .errors import GeometryError, InvalidConfigError
from .segments import SampledPoint
from .vector import Point

logger = logging.getLogger(__name__)

# Upper bound on the number of samples a single path may be split into.
MAX_SAMPLES: int = 1_000_000


class PathGeometry(Protocol):
    """Arc-length queries the sampler needs from a path."""

    def total_length(self) -> float:
        ...

    def point_at_length(self, distance: float) -> Point:
        ...


class PolylinePath:
    """Piecewise-linear path through a list of vertices.

    Args:
        points: Two or more ``(x, y)`` vertices.
        closed: When True the first vertex is appended again so the
            path returns to its start.
    """

    def __init__(self, points: Iterable[Sequence[float]], closed: bool = False) -> None:
        pts = np.asarray([(float(p[0]), float(p[1])) for p in points], dtype=float)
        if pts.ndim != 2 or len(pts) < 2:
            raise GeometryError("A polyline path needs at least two points")
        if closed:
            pts = np.vstack([pts, pts[:1]])
        self._points = pts
        seg_lengths = np.hypot(np.diff(pts[:, 0]), np.diff(pts[:, 1]))
        self._cumulative = np.concatenate([[0.0], np.cumsum(seg_lengths)])

    def total_length(self) -> float:
        return float(self._cumulative[-1])

    def point_at_length(self, distance: float) -> Point:
        total = self.total_length()
        s = min(max(float(distance), 0.0), total)
        last = len(self._points) - 2
        idx = int(np.searchsorted(self._cumulative, s, side="right")) - 1
        idx = min(max(idx, 0), last)
        seg_start = self._cumulative[idx]
        seg_len = self._cumulative[idx + 1] - seg_start
        a = self._points[idx]
        b = self._points[idx + 1]
        if seg_len == 0.0:
            return (float(a[0]), float(a[1]))
        frac = (s - seg_start) / seg_len
        return (float(a[0] + (b[0] - a[0]) * frac), float(a[1] + (b[1] - a[1]) * frac))


class SvgPath:
    """Path described by SVG path data, e.g. ``"M0,0 C50,0 50,100 100,100"``."""

    def __init__(self, d: str) -> None:
        self.d = d
        self._path = parse_path(d)
        if len(self._path) == 0:
            raise GeometryError("SVG path data contains no drawable segments")
        self._length = float(self._path.length())

    def total_length(self) -> float:
        return self._length

    def point_at_length(self, distance: float) -> Point:
        if distance <= 0.0:
            z = self._path.point(0.0)
        elif distance >= self._length:
            z = self._path.point(1.0)
        else:
            z = self._path.point(self._path.ilength(distance))
        return (float(z.real), float(z.imag))


def sample_path(geometry: PathGeometry, resolution: float) -> List[SampledPoint]:
    """Sample ``geometry`` at evenly spaced arc-length locations.

    ``ceil(length / resolution) + 1`` samples are taken so the spacing
    never exceeds ``resolution`` and the final sample sits exactly on
    the path's end.  ``t`` is the normalised arc-length position.

    Args:
        geometry: Path-geometry provider.
        resolution: Maximum distance between samples; must be positive.

    Raises:
        ValueError: If ``resolution`` is not positive.
        InvalidConfigError: If the path would need more than
            ``MAX_SAMPLES`` samples at this resolution.

    Returns:
        List of sampled points ordered by ``t``.  A zero-length path
        yields a single sample.
    """
    if resolution <= 0:
        raise ValueError("resolution must be positive")
    total = geometry.total_length()
    if total <= 0.0:
        x, y = geometry.point_at_length(0.0)
        return [SampledPoint(x=x, y=y, t=0.0)]
    count = max(1, math.ceil(total / resolution))
    if count + 1 > MAX_SAMPLES:
        raise InvalidConfigError(
            f"Resolution {resolution:g} would split a path of length {total:g} "
            f"into more than {MAX_SAMPLES} samples"
        )
    locations = np.linspace(0.0, total, count + 1)
    samples: List[SampledPoint] = []
    for s in locations:
        x, y = geometry.point_at_length(float(s))
        samples.append(SampledPoint(x=x, y=y, t=float(s) / total))
    logger.debug("Sampled path of length %.6g into %d points", total, len(samples))
    return samples
