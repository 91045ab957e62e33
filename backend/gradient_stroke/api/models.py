"""
Pydantic data models for the gradient stroke API.

These models define the shapes of requests and responses used by the
backend.  Keeping the schemas separate from the routes makes the API
contract explicit and lets FastAPI validate request bodies (positive
widths and resolutions, at least one color stop, etc.) before any
geometry runs.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class PathPoint(BaseModel):
    """Single 2D vertex of a polyline path."""

    x: float
    y: float


class ColorStop(BaseModel):
    """Color at a normalised position along the path."""

    offset: float = Field(..., ge=0.0, le=1.0, description="Position along the path (0–1)")
    color: str = Field(..., description="Hex color such as '#ff8800'")


def _default_stops() -> List[ColorStop]:
    return [ColorStop(offset=0.0, color="#000000"), ColorStop(offset=1.0, color="#ffffff")]


class GradientRequest(BaseModel):
    """Request body for rendering a gradient stroke.

    Exactly one of ``points`` (a polyline) or ``d`` (SVG path data) must
    be supplied.
    """

    points: Optional[List[PathPoint]] = Field(
        default=None,
        description="Polyline vertices defining the path",
    )
    d: Optional[str] = Field(
        default=None,
        description="SVG path data defining the path, e.g. 'M0,0 C50,0 50,100 100,100'",
    )
    closed: bool = Field(
        default=False,
        description="Close the polyline back to its first vertex (ignored for SVG path data)",
    )
    resolution: float = Field(
        ..., gt=0.0, description="Sampling interval along the path, in path units"
    )
    width: float = Field(..., gt=0.0, description="Stroke width, in path units")
    useStroke: bool = Field(
        default=False,
        description="Outline each polygon with a hairline of its own color to hide seams",
    )
    tempDisplay: bool = Field(
        default=False,
        description="Suppress polygon fills (debugging aid)",
    )
    strokeWidth: float = Field(
        default=1.0, gt=0.0, description="Width of the seam outline in device pixels"
    )
    stops: List[ColorStop] = Field(
        default_factory=_default_stops,
        min_length=1,
        description="Color stops of the gradient along the path",
    )

    @model_validator(mode="after")
    def _check_path_source(self) -> "GradientRequest":
        if (self.points is None) == (self.d is None):
            raise ValueError("Provide exactly one of 'points' or 'd'")
        if self.points is not None and len(self.points) < 2:
            raise ValueError("'points' must contain at least two vertices")
        return self


class GradientPolygon(BaseModel):
    """One painted stroke segment polygon."""

    points: List[List[float]] = Field(..., description="Closed loop of [x, y] vertices")
    t: float = Field(..., description="Representative path position of the segment (0–1)")
    fill: Optional[str] = Field(default=None, description="Fill color, or null when suppressed")
    stroke: Optional[str] = Field(default=None, description="Seam stroke color, if enabled")
    strokeWidth: Optional[float] = Field(default=None, description="Seam stroke width in pixels")


class GradientResponse(BaseModel):
    """Response returned after rendering a gradient stroke."""

    polygons: List[GradientPolygon] = Field(..., description="Ordered stroke polygons")
    metadata: Dict[str, Any] = Field(
        ..., description="Summary such as path length, sample count and closed flag"
    )
