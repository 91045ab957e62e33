"""
Exception types raised by the gradient stroke services.

Geometry helpers raise :class:`GeometryError` subclasses for inputs the
closed-form formulas cannot resolve (zero-length vectors, exactly
parallel lines).  The driver raises :class:`StrokeGradientError`
subclasses for missing collaborators and invalid configuration.  The
API layer translates both families into HTTP 400 responses.
"""

from __future__ import annotations


class GeometryError(ValueError):
    """Raised for impossible geometry operations."""


class DegenerateVectorError(GeometryError):
    """Raised when a direction is requested for a zero-length vector."""


class ParallelLinesError(GeometryError):
    """Raised when intersecting two exactly parallel lines."""


class StrokeGradientError(Exception):
    """Base class for failures of the gradient stroke driver."""


class PathGeometryUnavailableError(StrokeGradientError):
    """Raised when no path-geometry provider was supplied."""


class InvalidConfigError(StrokeGradientError):
    """Raised when the gradient configuration is out of range."""


class ColorRampError(ValueError):
    """Raised for malformed color stops."""
