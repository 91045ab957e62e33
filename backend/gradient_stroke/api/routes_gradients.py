"""
Routes for rendering gradient strokes.

``POST /gradients`` returns the painted stroke polygons as JSON and
``POST /gradients/svg`` returns the same polygons as a standalone SVG
document.  Both accept a :class:`~.models.GradientRequest` describing
the path (polyline vertices or SVG path data), the stroke settings and
the color stops.  Nothing is stored between requests.
"""

from __future__ import annotations

import logging
from typing import Tuple

from fastapi import APIRouter, HTTPException, Response

from .models import GradientPolygon, GradientRequest, GradientResponse
from ..services.colors import ColorRamp
from ..services.errors import ColorRampError, GeometryError, StrokeGradientError
from ..services.render import PolygonListRenderer, SvgRenderer
from ..services.sampling import PathGeometry, PolylinePath, SvgPath
from ..services.stroke_gradient import GradientConfig, GradientResult, build_gradient

logger = logging.getLogger(__name__)

router = APIRouter()


def _geometry_for_request(body: GradientRequest) -> PathGeometry:
    if body.d is not None:
        try:
            return SvgPath(body.d)
        except GeometryError:
            raise
        except Exception as exc:
            # svgpathtools raises a variety of errors for malformed data
            raise GeometryError(f"Invalid SVG path data: {exc}") from exc
    return PolylinePath([(p.x, p.y) for p in body.points or []], closed=body.closed)


def _run(body: GradientRequest) -> Tuple[GradientResult, PathGeometry]:
    """Build the gradient for a request, mapping failures to HTTP 400."""
    try:
        geometry = _geometry_for_request(body)
        color = ColorRamp((stop.offset, stop.color) for stop in body.stops)
        config = GradientConfig(
            resolution=body.resolution,
            width=body.width,
            use_stroke=body.useStroke,
            temp_display=body.tempDisplay,
            stroke_width=body.strokeWidth,
        )
        return build_gradient(geometry, color, config), geometry
    except (GeometryError, StrokeGradientError, ColorRampError) as exc:
        logger.warning("gradient request rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/gradients", response_model=GradientResponse)
async def create_gradient(body: GradientRequest) -> GradientResponse:
    """Compute the gradient polygons for a path.

    Returns:
        GradientResponse: One polygon per sampled segment, in path order,
        plus metadata about the sampling.
    """
    result, _ = _run(body)
    polygons = [GradientPolygon(**item) for item in PolygonListRenderer().render(result.polygons)]
    metadata = dict(result.metadata)
    metadata.update(
        {
            "pathLength": result.path_length,
            "sampleCount": result.sample_count,
            "polygonCount": len(polygons),
            "closed": result.closed,
            "droppedSamples": result.dropped_samples,
        }
    )
    return GradientResponse(polygons=polygons, metadata=metadata)


@router.post("/gradients/svg")
async def create_gradient_svg(body: GradientRequest) -> Response:
    """Render the gradient polygons as an SVG document."""
    result, geometry = _run(body)
    source = geometry.d if isinstance(geometry, SvgPath) else None
    svg = SvgRenderer(source_path_data=source).render(result.polygons)
    return Response(content=svg, media_type="image/svg+xml")
