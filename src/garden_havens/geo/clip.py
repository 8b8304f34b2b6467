"""Clipping of projected lines and polygons.

Two clip regions are needed:

  - the horizon of an orthographic globe (a circle on screen)
  - the antimeridian of an equirectangular map (the left/right map edges)

Lines are simply cut. Polygon rings are cut into *runs* that start and end on
the clip boundary, then rejoined by walking along that boundary: clockwise
(increasing screen angle, y down) for exterior rings and counter-clockwise for
holes, matching the d3 winding convention of the world atlas data.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from garden_havens.geo.projection import (
    EquirectangularProjection,
    OrthographicProjection,
    Position,
    Vector,
)

# Spacing of the points interpolated along the horizon circle.
CIRCLE_STEP = math.radians(6)
ANTIMERIDIAN_EPSILON = 1e-9

Fill = Callable[[float, float, int], list[Position]]


@dataclass
class _Run:
    """A visible stretch of a ring, entering and leaving on the clip boundary."""

    points: list[Position]
    start: float
    end: float


def _finite_positions(coords: Sequence[Sequence[float]]) -> list[tuple[float, float]]:
    out: list[tuple[float, float]] = []
    for c in coords:
        if len(c) < 2:
            continue
        lon, lat = float(c[0]), float(c[1])
        if math.isfinite(lon) and math.isfinite(lat):
            out.append((lon, lat))
    return out


def _open_ring(points: list[tuple[float, float]]) -> list[tuple[float, float]]:
    if len(points) > 1 and points[0] == points[-1]:
        return points[:-1]
    return points


def _rejoin(runs: list[_Run], perimeter: float, direction: int, fill: Fill) -> list[list[Position]]:
    """Chain runs into closed rings by walking the clip boundary."""
    rings: list[list[Position]] = []
    remaining = set(range(len(runs)))
    while remaining:
        first = min(remaining)
        k = first
        ring: list[Position] = []
        while True:
            remaining.discard(k)
            run = runs[k]
            ring.extend(run.points)
            candidates = remaining | {first}
            nxt = min(
                candidates,
                key=lambda j, end=run.end: ((runs[j].start - end) * direction) % perimeter,
            )
            ring.extend(fill(run.end, runs[nxt].start, direction))
            if nxt == first:
                break
            k = nxt
        rings.append(ring)
    return rings


# =============================================================================
# Orthographic horizon
# =============================================================================


def _horizon_crossing(a: Vector, b: Vector) -> Vector:
    """Point where the great-circle arc a→b meets the horizon plane x = 0."""
    denom = b[0] - a[0]
    t = b[0] / denom if denom != 0 else 0.5
    y = a[1] * t + b[1] * (1 - t)
    z = a[2] * t + b[2] * (1 - t)
    norm = math.hypot(y, z)
    if norm == 0:
        return (0.0, 1.0, 0.0)
    return (0.0, y / norm, z / norm)


def clip_line_to_hemisphere(
    projection: OrthographicProjection, line: Sequence[Sequence[float]]
) -> list[list[Position]]:
    """Visible pieces of a line on the globe, cut exactly at the horizon."""
    vectors = [projection.rotated_vector(p) for p in _finite_positions(line)]
    visible = OrthographicProjection.is_visible_vector
    to_pixel = projection.vector_to_pixel

    pieces: list[list[Position]] = []
    current: list[Position] = []
    prev: Vector | None = None
    for v in vectors:
        if prev is not None:
            if visible(prev) and not visible(v):
                current.append(to_pixel(_horizon_crossing(prev, v)))
                pieces.append(current)
                current = []
            elif not visible(prev) and visible(v):
                current = [to_pixel(_horizon_crossing(prev, v))]
        if visible(v):
            current.append(to_pixel(v))
        prev = v
    pieces.append(current)
    return [p for p in pieces if len(p) >= 2]


def clip_ring_to_hemisphere(
    projection: OrthographicProjection,
    ring: Sequence[Sequence[float]],
    *,
    hole: bool = False,
) -> list[list[Position]]:
    """Visible part of a polygon ring, closed along the horizon circle."""
    vectors = [projection.rotated_vector(p) for p in _open_ring(_finite_positions(ring))]
    if len(vectors) < 3:
        return []
    visible = OrthographicProjection.is_visible_vector
    to_pixel = projection.vector_to_pixel
    flags = [visible(v) for v in vectors]

    if all(flags):
        return [[to_pixel(v) for v in vectors]]
    if not any(flags):
        return []

    n = len(vectors)
    start = next(i for i in range(n) if flags[i] and not flags[i - 1])
    order = vectors[start:] + vectors[:start]
    angle = projection.screen_angle

    runs: list[_Run] = []
    entry = to_pixel(_horizon_crossing(order[-1], order[0]))
    current: list[Position] | None = [entry]
    for i in range(n):
        a = order[i]
        b = order[(i + 1) % n]
        if visible(a):
            assert current is not None
            current.append(to_pixel(a))
            if not visible(b):
                exit_ = to_pixel(_horizon_crossing(a, b))
                current.append(exit_)
                runs.append(_Run(current, angle(current[0]), angle(exit_)))
                current = None
        elif visible(b) and i < n - 1:
            current = [to_pixel(_horizon_crossing(a, b))]

    def fill(start_angle: float, end_angle: float, direction: int) -> list[Position]:
        delta = ((end_angle - start_angle) * direction) % math.tau
        points: list[Position] = []
        step = CIRCLE_STEP
        while step < delta:
            points.append(projection.horizon_point(start_angle + direction * step))
            step += CIRCLE_STEP
        return points

    return _rejoin(runs, math.tau, -1 if hole else 1, fill)


# =============================================================================
# Equirectangular antimeridian
# =============================================================================

# Perimeter parameter of the map rectangle, clockwise from the top-left
# corner in radian units: top edge [0, 2pi], right [2pi, 3pi],
# bottom [3pi, 5pi], left [5pi, 6pi].
_RECT_PERIMETER = 6 * math.pi
_RECT_CORNERS = (
    (0.0, (-math.pi, math.pi / 2)),
    (2 * math.pi, (math.pi, math.pi / 2)),
    (3 * math.pi, (math.pi, -math.pi / 2)),
    (5 * math.pi, (-math.pi, -math.pi / 2)),
)


def _edge_param(lam: float, phi: float) -> float:
    if lam > 0:
        return 2 * math.pi + (math.pi / 2 - phi)
    return 5 * math.pi + (phi + math.pi / 2)


def _on_antimeridian(lam: float) -> bool:
    return abs(abs(lam) - math.pi) < ANTIMERIDIAN_EPSILON


def _crosses(a: tuple[float, float], b: tuple[float, float]) -> bool:
    if abs(b[0] - a[0]) <= math.pi:
        return False
    # A segment running along the antimeridian itself is an edge, not a crossing
    return not (_on_antimeridian(a[0]) and _on_antimeridian(b[0]))


def _crossing_phi(a: tuple[float, float], b: tuple[float, float]) -> tuple[float, float]:
    """Side (+pi/-pi) of ``a`` and the interpolated latitude at the crossing."""
    side = math.pi if a[0] > 0 else -math.pi
    b_lam = b[0] + (2 * math.pi if a[0] > 0 else -2 * math.pi)
    span = b_lam - a[0]
    t = (side - a[0]) / span if span != 0 else 0.0
    return side, a[1] + t * (b[1] - a[1])


def cut_line_at_antimeridian(
    projection: EquirectangularProjection, line: Sequence[Sequence[float]]
) -> list[list[Position]]:
    """Pieces of a line split where it wraps across longitude ±180."""
    points = [projection.rotated_radians(p) for p in _finite_positions(line)]
    to_pixel = projection.radians_to_pixel
    pieces: list[list[Position]] = []
    current: list[Position] = []
    prev: tuple[float, float] | None = None
    for p in points:
        if prev is not None and _crosses(prev, p):
            side, phi = _crossing_phi(prev, p)
            current.append(to_pixel(side, phi))
            pieces.append(current)
            current = [to_pixel(-side, phi)]
        current.append(to_pixel(*p))
        prev = p
    pieces.append(current)
    return [p for p in pieces if len(p) >= 2]


def cut_ring_at_antimeridian(
    projection: EquirectangularProjection,
    ring: Sequence[Sequence[float]],
    *,
    hole: bool = False,
) -> list[list[Position]]:
    """Polygon ring split at the antimeridian and closed along the map edges."""
    points = [projection.rotated_radians(p) for p in _open_ring(_finite_positions(ring))]
    if len(points) < 3:
        return []
    to_pixel = projection.radians_to_pixel
    n = len(points)
    crossings = [_crosses(points[i - 1], points[i]) for i in range(n)]
    if not any(crossings):
        return [[to_pixel(*p) for p in points]]

    start = crossings.index(True)
    order = points[start:] + points[:start]

    side, phi = _crossing_phi(order[-1], order[0])
    current: list[Position] = [to_pixel(-side, phi)]
    current_start = _edge_param(-side, phi)
    runs: list[_Run] = []
    for i in range(n):
        a = order[i]
        b = order[(i + 1) % n]
        current.append(to_pixel(*a))
        if _crosses(a, b):
            side, phi = _crossing_phi(a, b)
            current.append(to_pixel(side, phi))
            runs.append(_Run(current, current_start, _edge_param(side, phi)))
            current = [to_pixel(-side, phi)]
            current_start = _edge_param(-side, phi)

    def fill(start_s: float, end_s: float, direction: int) -> list[Position]:
        span = ((end_s - start_s) * direction) % _RECT_PERIMETER
        passed = []
        for s, (lam, phi_c) in _RECT_CORNERS:
            offset = ((s - start_s) * direction) % _RECT_PERIMETER
            if 0 < offset < span:
                passed.append((offset, to_pixel(lam, phi_c)))
        return [p for _, p in sorted(passed)]

    return _rejoin(runs, _RECT_PERIMETER, -1 if hole else 1, fill)
