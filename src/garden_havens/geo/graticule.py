"""Longitude/latitude reference grid, laid out like ``d3.geoGraticule``."""

from __future__ import annotations

import math
from typing import Any

_EPSILON = 1e-6

# Major lines span the full globe; minor lines stop short of the poles.
MAJOR_EXTENT = ((-180.0, -90.0 + _EPSILON), (180.0, 90.0 - _EPSILON))
MINOR_EXTENT = ((-180.0, -80.0 - _EPSILON), (180.0, 80.0 + _EPSILON))
MAJOR_STEP = (90.0, 360.0)


def _frange(start: float, stop: float, step: float) -> list[float]:
    """Values from start (inclusive) to stop (exclusive), like ``d3.range``."""
    count = max(0, math.ceil((stop - start) / step))
    return [start + i * step for i in range(count)]


def _meridian(x: float, y0: float, y1: float, precision: float) -> list[list[float]]:
    ys = [*_frange(y0, y1 - _EPSILON, precision), y1]
    return [[x, y] for y in ys]


def _parallel(y: float, x0: float, x1: float, precision: float) -> list[list[float]]:
    xs = [*_frange(x0, x1 - _EPSILON, precision), x1]
    return [[x, y] for x in xs]


def graticule(step: tuple[float, float] = (10.0, 10.0), precision: float = 2.5) -> dict[str, Any]:
    """MultiLineString of meridians and parallels.

    Args:
        step: Minor grid spacing in degrees (longitude, latitude).
        precision: Sampling interval along each line, in degrees.
    """
    (big_x0, big_y0), (big_x1, big_y1) = MAJOR_EXTENT
    (x0, y0), (x1, y1) = MINOR_EXTENT
    big_dx, big_dy = MAJOR_STEP
    dx, dy = step

    lines: list[list[list[float]]] = []
    for x in _frange(math.ceil(big_x0 / big_dx) * big_dx, big_x1, big_dx):
        lines.append(_meridian(x, big_y0, big_y1, precision))
    for y in _frange(math.ceil(big_y0 / big_dy) * big_dy, big_y1, big_dy):
        lines.append(_parallel(y, big_x0, big_x1, precision))
    for x in _frange(math.ceil(x0 / dx) * dx, x1, dx):
        if abs(math.fmod(x, big_dx)) > _EPSILON:
            lines.append(_meridian(x, y0, y1, precision))
    for y in _frange(math.ceil(y0 / dy) * dy, y1, dy):
        if abs(math.fmod(y, big_dy)) > _EPSILON:
            lines.append(_parallel(y, x0, x1, precision))
    return {"type": "MultiLineString", "coordinates": lines}
