"""
Gradient-along-a-stroke driver.

This module ties the pieces together:

1. sample the path geometry at the configured resolution;
2. drop degenerate samples (see below) and detect whether the path is
   closed;
3. build the per-segment contexts and emit one outline polygon each;
4. paint every polygon with ``color(t)`` for its segment and, when
   requested, a hairline outline of the same color to hide seams;
5. hand the painted polygons to the renderer.

Degenerate samples: two consecutive samples that coincide leave the
segment between them without a direction, and the join formulas cannot
resolve it.  The driver therefore drops every sample that lies within
``resolution * CLOSED_EPSILON_FACTOR`` of the previously kept sample
before building segments.  The neighbouring segments keep their own
directions, so the stroke simply continues across the dropped point.

Everything here is recomputed per call; no state is kept between
calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .errors import InvalidConfigError, PathGeometryUnavailableError
from .polygons import StrokePolygon, emit_polygon
from .render import HAIRLINE_STROKE_WIDTH, Renderer, StyledPolygon
from .sampling import PathGeometry, sample_path
from .segments import SampledPoint, build_segments, is_path_closed
from .vector import diff, length

logger = logging.getLogger(__name__)

# Closed-path and duplicate-sample tolerance, as a fraction of the
# sampling resolution.
CLOSED_EPSILON_FACTOR: float = 1.0 / 1000.0

ColorFunction = Callable[[float], str]


@dataclass
class GradientConfig:
    """Options controlling how a path is turned into gradient polygons.

    Attributes:
        resolution: Sampling interval along the path, in path units.
            Smaller values give smoother joins at higher cost.
        width: Stroke width, in path units.
        use_stroke: Outline each polygon with a hairline of its fill
            color to hide anti-aliasing seams between neighbours.
        temp_display: Suppress fills (debugging aid).
        stroke_width: Width of the seam outline in device pixels.
    """

    resolution: float
    width: float
    use_stroke: bool = False
    temp_display: bool = False
    stroke_width: float = HAIRLINE_STROKE_WIDTH

    def __post_init__(self) -> None:
        if not self.resolution > 0:
            raise InvalidConfigError(f"resolution must be positive, got {self.resolution}")
        if not self.width > 0:
            raise InvalidConfigError(f"width must be positive, got {self.width}")
        if not self.stroke_width > 0:
            raise InvalidConfigError(f"stroke_width must be positive, got {self.stroke_width}")

    @property
    def radius(self) -> float:
        return self.width / 2.0

    @property
    def epsilon(self) -> float:
        return self.resolution * CLOSED_EPSILON_FACTOR


@dataclass
class StrokeOutline:
    """Unpainted polygons for a sampled path."""

    polygons: List[StrokePolygon]
    samples: List[SampledPoint]
    closed: bool
    dropped_samples: int = 0


@dataclass
class GradientResult:
    """Painted polygons plus a summary of how they were produced."""

    polygons: List[StyledPolygon]
    path_length: float
    sample_count: int
    closed: bool
    dropped_samples: int = 0
    metadata: dict = field(default_factory=dict)


def drop_coincident_samples(samples: Sequence[SampledPoint], epsilon: float) -> Tuple[List[SampledPoint], int]:
    """Remove samples lying within ``epsilon`` of the previously kept one.

    Returns:
        ``(kept, dropped_count)``.
    """
    kept: List[SampledPoint] = []
    for sample in samples:
        if kept and length(diff(kept[-1].xy, sample.xy)) <= epsilon:
            continue
        kept.append(sample)
    return kept, len(samples) - len(kept)


def outline_samples(samples: Sequence[SampledPoint], width: float, resolution: float) -> StrokeOutline:
    """Compute the stroke polygons for already-sampled path points."""
    config = GradientConfig(resolution=resolution, width=width)
    kept, dropped = drop_coincident_samples(samples, config.epsilon)
    if dropped:
        logger.debug("Dropped %d coincident samples", dropped)
    closed = is_path_closed(kept, config.epsilon)
    if len(kept) < 2:
        return StrokeOutline(polygons=[], samples=kept, closed=False, dropped_samples=dropped)
    r = config.radius
    polygons = [emit_polygon(ctx, r) for ctx in build_segments(kept, closed)]
    return StrokeOutline(polygons=polygons, samples=kept, closed=closed, dropped_samples=dropped)


def paint_polygons(
    polygons: Sequence[StrokePolygon],
    color: ColorFunction,
    config: GradientConfig,
) -> List[StyledPolygon]:
    """Attach fill and optional seam stroke colors to each polygon."""
    styled: List[StyledPolygon] = []
    for poly in polygons:
        seg_color = color(poly.t)
        styled.append(
            StyledPolygon(
                polygon=poly,
                fill=None if config.temp_display else seg_color,
                stroke=seg_color if config.use_stroke else None,
                stroke_width=config.stroke_width,
            )
        )
    return styled


def build_gradient(
    geometry: Optional[PathGeometry],
    color: ColorFunction,
    config: GradientConfig,
) -> GradientResult:
    """Sample ``geometry`` and produce painted gradient polygons.

    Raises:
        PathGeometryUnavailableError: If ``geometry`` is ``None``.
    """
    if geometry is None:
        raise PathGeometryUnavailableError("A path-geometry provider is required")
    path_length = geometry.total_length()
    samples = sample_path(geometry, config.resolution)
    outline = outline_samples(samples, config.width, config.resolution)
    styled = paint_polygons(outline.polygons, color, config)
    logger.info(
        "Built %d gradient polygons from %d samples (length=%.6g, closed=%s)",
        len(styled),
        len(outline.samples),
        path_length,
        outline.closed,
    )
    return GradientResult(
        polygons=styled,
        path_length=path_length,
        sample_count=len(outline.samples),
        closed=outline.closed,
        dropped_samples=outline.dropped_samples,
        metadata={
            "resolution": config.resolution,
            "width": config.width,
            "useStroke": config.use_stroke,
            "tempDisplay": config.temp_display,
        },
    )


def make_path_gradient(
    geometry: Optional[PathGeometry],
    renderer: Renderer,
    color: ColorFunction,
    config: GradientConfig,
) -> Any:
    """Render a gradient stroke along ``geometry`` with ``renderer``.

    Returns whatever ``renderer.render`` returns (an SVG document for
    :class:`~.render.SvgRenderer`).
    """
    result = build_gradient(geometry, color, config)
    return renderer.render(result.polygons)
