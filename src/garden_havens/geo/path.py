"""GeoJSON geometry to SVG path data, through a projection."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from garden_havens.geo.clip import (
    clip_line_to_hemisphere,
    clip_ring_to_hemisphere,
    cut_line_at_antimeridian,
    cut_ring_at_antimeridian,
)
from garden_havens.geo.projection import (
    EquirectangularProjection,
    OrthographicProjection,
    Position,
    Projection,
)

Piece = tuple[list[Position], bool]


def format_number(value: float) -> str:
    """Compact decimal with at most three fractional digits."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _svg_path(pieces: Sequence[Piece]) -> str:
    parts: list[str] = []
    for points, closed in pieces:
        coords = "L".join(f"{format_number(x)},{format_number(y)}" for x, y in points)
        parts.append(f"M{coords}{'Z' if closed else ''}")
    return "".join(parts)


class GeoPath:
    """Callable turning a GeoJSON object into an SVG ``d`` attribute.

    The projection decides how lines and rings are clipped: the globe cuts at
    the horizon, the flat map at the antimeridian. Anything else is projected
    point by point, dropping points that do not project.
    """

    def __init__(self, projection: Projection) -> None:
        self.projection = projection

    def __call__(self, obj: Mapping[str, Any] | None) -> str:
        if obj is None:
            return ""
        return _svg_path(list(self._pieces(obj)))

    # -------------------------------------------------------------------------

    def _pieces(self, obj: Mapping[str, Any]) -> Iterator[Piece]:
        kind = obj.get("type")
        if kind == "FeatureCollection":
            for feature in obj.get("features", []):
                yield from self._pieces(feature)
        elif kind == "Feature":
            geometry = obj.get("geometry")
            if geometry:
                yield from self._pieces(geometry)
        elif kind == "GeometryCollection":
            for geometry in obj.get("geometries", []):
                yield from self._pieces(geometry)
        elif kind == "LineString":
            yield from self._line(obj["coordinates"])
        elif kind == "MultiLineString":
            for line in obj["coordinates"]:
                yield from self._line(line)
        elif kind == "Polygon":
            yield from self._polygon(obj["coordinates"])
        elif kind == "MultiPolygon":
            for polygon in obj["coordinates"]:
                yield from self._polygon(polygon)
        # Points are drawn as circles by the renderers, never as paths

    def _line(self, line: Sequence[Sequence[float]]) -> Iterator[Piece]:
        proj = self.projection
        if isinstance(proj, OrthographicProjection):
            pieces = clip_line_to_hemisphere(proj, line)
        elif isinstance(proj, EquirectangularProjection):
            pieces = cut_line_at_antimeridian(proj, line)
        else:
            pieces = [self._plain(line)]
        for piece in pieces:
            if len(piece) >= 2:
                yield piece, False

    def _polygon(self, rings: Sequence[Sequence[Sequence[float]]]) -> Iterator[Piece]:
        proj = self.projection
        for index, ring in enumerate(rings):
            hole = index > 0
            if isinstance(proj, OrthographicProjection):
                pieces = clip_ring_to_hemisphere(proj, ring, hole=hole)
            elif isinstance(proj, EquirectangularProjection):
                pieces = cut_ring_at_antimeridian(proj, ring, hole=hole)
            else:
                pieces = [self._plain(ring[:-1] if ring and ring[0] == ring[-1] else ring)]
            for piece in pieces:
                if len(piece) >= 3:
                    yield piece, True

    def _plain(self, coords: Sequence[Sequence[float]]) -> list[Position]:
        projected = (self.projection((c[0], c[1])) for c in coords)
        return [p for p in projected if p is not None]
