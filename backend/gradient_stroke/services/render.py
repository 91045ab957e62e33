"""
Renderers for styled stroke polygons.

The driver never draws anything itself: it hands the list of
:class:`StyledPolygon` objects to a :class:`Renderer` and returns
whatever the renderer produces.  Two renderers are provided:

* :class:`SvgRenderer` serialises each polygon as an SVG ``<path>``
  (``M`` to the first vertex, ``L`` to every other vertex, ``Z``) and
  wraps them in a standalone SVG document.
* :class:`PolygonListRenderer` returns JSON-ready dictionaries for the
  API.

Seam strokes are drawn as hairlines with
``vector-effect: non-scaling-stroke`` so they stay one device pixel
wide regardless of the viewBox scale.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple
from xml.sax.saxutils import quoteattr

from .polygons import StrokePolygon
from .vector import Point

# Width of the seam-hiding outline in CSS pixels.
HAIRLINE_STROKE_WIDTH: float = 1.0

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


@dataclass(frozen=True)
class StyledPolygon:
    """A stroke polygon together with its paint.

    ``fill`` is ``None`` when fills are suppressed (temporary display
    mode) and ``stroke`` is ``None`` unless seam strokes are enabled.
    """

    polygon: StrokePolygon
    fill: Optional[str]
    stroke: Optional[str] = None
    stroke_width: float = HAIRLINE_STROKE_WIDTH

    @property
    def points(self) -> Tuple[Point, ...]:
        return self.polygon.points

    @property
    def t(self) -> float:
        return self.polygon.t


class Renderer(Protocol):
    def render(self, polygons: Sequence[StyledPolygon]) -> Any:
        ...


def _fmt(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def polygon_path_data(points: Sequence[Point], precision: int = 4) -> str:
    """Serialise a closed point loop as SVG path data."""
    commands = []
    for i, (x, y) in enumerate(points):
        commands.append(("M" if i == 0 else "L") + f"{_fmt(x, precision)},{_fmt(y, precision)}")
    return "".join(commands) + "Z"


def polygon_style(polygon: StyledPolygon) -> str:
    parts = [f"fill:{polygon.fill if polygon.fill is not None else 'none'}"]
    if polygon.stroke is not None:
        parts.append(f"stroke:{polygon.stroke}")
        parts.append(f"stroke-width:{_fmt(polygon.stroke_width, 4)}px")
        parts.append("vector-effect:non-scaling-stroke")
    return ";".join(parts)


def bounding_box(polygons: Sequence[StyledPolygon]) -> Optional[Tuple[float, float, float, float]]:
    """Return ``(min_x, min_y, max_x, max_y)`` over all vertices."""
    xs = [p[0] for poly in polygons for p in poly.points]
    ys = [p[1] for poly in polygons for p in poly.points]
    if not xs:
        return None
    return min(xs), min(ys), max(xs), max(ys)


class SvgRenderer:
    """Render styled polygons into an SVG document string.

    Args:
        view_box: Explicit ``(min_x, min_y, width, height)``.  When
            omitted the polygons' bounding box plus ``padding`` is used.
        padding: Margin added around the computed bounding box.
        precision: Decimal places kept in path coordinates.
        source_path_data: Optional ``d`` attribute of the template path.
            It is emitted hidden (``display:none``) ahead of the
            polygons so the document still carries the source curve.
    """

    def __init__(
        self,
        view_box: Optional[Tuple[float, float, float, float]] = None,
        padding: float = 1.0,
        precision: int = 4,
        source_path_data: Optional[str] = None,
    ) -> None:
        self.view_box = view_box
        self.padding = padding
        self.precision = precision
        self.source_path_data = source_path_data

    def path_elements(self, polygons: Sequence[StyledPolygon]) -> List[str]:
        return [
            f"<path d={quoteattr(polygon_path_data(poly.points, self.precision))} "
            f"style={quoteattr(polygon_style(poly))}/>"
            for poly in polygons
        ]

    def _resolve_view_box(self, polygons: Sequence[StyledPolygon]) -> Tuple[float, float, float, float]:
        if self.view_box is not None:
            return self.view_box
        bbox = bounding_box(polygons)
        if bbox is None:
            return (0.0, 0.0, 1.0, 1.0)
        min_x, min_y, max_x, max_y = bbox
        pad = self.padding
        return (min_x - pad, min_y - pad, (max_x - min_x) + 2 * pad, (max_y - min_y) + 2 * pad)

    def render(self, polygons: Sequence[StyledPolygon]) -> str:
        vb = " ".join(_fmt(v, self.precision) for v in self._resolve_view_box(polygons))
        lines = [f'<svg xmlns="{SVG_NAMESPACE}" viewBox="{vb}">']
        if self.source_path_data is not None:
            lines.append(f"<path d={quoteattr(self.source_path_data)} style=\"display:none\"/>")
        lines.append("<g>")
        lines.extend(self.path_elements(polygons))
        lines.append("</g>")
        lines.append("</svg>")
        return "\n".join(lines)


class PolygonListRenderer:
    """Render styled polygons as plain dictionaries."""

    def render(self, polygons: Sequence[StyledPolygon]) -> List[Dict[str, Any]]:
        return [
            {
                "points": [[x, y] for x, y in poly.points],
                "t": poly.t,
                "fill": poly.fill,
                "stroke": poly.stroke,
                "strokeWidth": poly.stroke_width if poly.stroke is not None else None,
            }
            for poly in polygons
        ]
