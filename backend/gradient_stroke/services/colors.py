"""
Color ramps used as the stroke color function.

The stroke driver accepts any ``Callable[[float], str]``.  The API
builds one from a list of color stops with :class:`ColorRamp`, which
linearly interpolates RGB channels between the two stops surrounding a
position and clamps to the first/last stop outside their range.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import Iterable, List, Sequence, Tuple

from .errors import ColorRampError

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

DEFAULT_STOPS: List[Tuple[float, str]] = [(0.0, "#000000"), (1.0, "#ffffff")]


def parse_hex_color(value: str) -> RGB:
    """Parse ``#rgb`` or ``#rrggbb`` (leading ``#`` optional)."""
    match = _HEX_RE.match(value.strip())
    if not match:
        raise ColorRampError(f"Invalid hex color '{value}'")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def format_hex_color(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


class ColorRamp:
    """Piecewise-linear color function over ``[0, 1]``.

    Args:
        stops: ``(offset, color)`` pairs.  Offsets must lie in
            ``[0, 1]``; they are sorted before use.  At least one stop
            is required.
    """

    def __init__(self, stops: Iterable[Tuple[float, str]]) -> None:
        parsed = sorted(
            ((float(off), parse_hex_color(color)) for off, color in stops),
            key=lambda stop: stop[0],
        )
        if not parsed:
            raise ColorRampError("A color ramp needs at least one stop")
        for off, _ in parsed:
            if not 0.0 <= off <= 1.0:
                raise ColorRampError(f"Stop offset {off} is outside [0, 1]")
        self._offsets: Sequence[float] = [off for off, _ in parsed]
        self._colors: Sequence[RGB] = [rgb for _, rgb in parsed]

    def __call__(self, t: float) -> str:
        offsets = self._offsets
        colors = self._colors
        if t <= offsets[0]:
            return format_hex_color(colors[0])
        if t >= offsets[-1]:
            return format_hex_color(colors[-1])
        hi = bisect_right(offsets, t)
        lo = hi - 1
        span = offsets[hi] - offsets[lo]
        frac = (t - offsets[lo]) / span if span > 0 else 0.0
        rgb = tuple(
            int(round(a + (b - a) * frac)) for a, b in zip(colors[lo], colors[hi])
        )
        return format_hex_color(rgb)  # type: ignore[arg-type]
