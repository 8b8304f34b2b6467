"""Geographic value types shared by the globe and range map renderers."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

# =============================================================================
# Coordinates
# =============================================================================


@dataclass(frozen=True)
class GeoCoordinate:
    """A (longitude, latitude) pair in degrees."""

    lon: float
    lat: float

    def __post_init__(self) -> None:
        if not (-180.0 <= self.lon <= 180.0):
            msg = f"Longitude out of range: {self.lon}"
            raise ValueError(msg)
        if not (-90.0 <= self.lat <= 90.0):
            msg = f"Latitude out of range: {self.lat}"
            raise ValueError(msg)
        # -180 and 180 are the same meridian; keep the (-180, 180] convention
        if self.lon == -180.0:
            object.__setattr__(self, "lon", 180.0)

    @classmethod
    def normalized(cls, lon: float, lat: float) -> GeoCoordinate:
        """Build a coordinate, wrapping longitude into (-180, 180]."""
        wrapped = math.fmod(lon + 180.0, 360.0)
        if wrapped <= 0:
            wrapped += 360.0
        return cls(lon=wrapped - 180.0, lat=max(-90.0, min(90.0, lat)))

    def as_tuple(self) -> tuple[float, float]:
        return (self.lon, self.lat)


def to_vector(lon: float, lat: float) -> tuple[float, float, float]:
    """Unit vector for a lon/lat pair in degrees."""
    lam = math.radians(lon)
    phi = math.radians(lat)
    cos_phi = math.cos(phi)
    return (cos_phi * math.cos(lam), cos_phi * math.sin(lam), math.sin(phi))


def geo_distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    """Great-circle angular distance between two lon/lat points, in radians."""
    lam0, phi0 = math.radians(a[0]), math.radians(a[1])
    lam1, phi1 = math.radians(b[0]), math.radians(b[1])
    delta = lam1 - lam0
    sin_phi0, cos_phi0 = math.sin(phi0), math.cos(phi0)
    sin_phi1, cos_phi1 = math.sin(phi1), math.cos(phi1)
    x = cos_phi1 * math.sin(delta)
    y = cos_phi0 * sin_phi1 - sin_phi0 * cos_phi1 * math.cos(delta)
    z = sin_phi0 * sin_phi1 + cos_phi0 * cos_phi1 * math.cos(delta)
    return math.atan2(math.hypot(x, y), z)


def spherical_centroid(coords: Iterable[GeoCoordinate]) -> GeoCoordinate | None:
    """Mean direction of a set of coordinates, or None when there are none.

    Antipodal sets with no meaningful mean fall back to the plain average.
    """
    sx = sy = sz = 0.0
    points = list(coords)
    if not points:
        return None
    for c in points:
        x, y, z = to_vector(c.lon, c.lat)
        sx += x
        sy += y
        sz += z
    norm = math.sqrt(sx * sx + sy * sy + sz * sz)
    if norm < 1e-12:
        lon = sum(c.lon for c in points) / len(points)
        lat = sum(c.lat for c in points) / len(points)
        return GeoCoordinate.normalized(lon, lat)
    lon = math.degrees(math.atan2(sy, sx))
    lat = math.degrees(math.asin(max(-1.0, min(1.0, sz / norm))))
    return GeoCoordinate.normalized(lon, lat)


# =============================================================================
# Occurrences
# =============================================================================


def _finite_pair(raw: Any) -> tuple[float, float] | None:
    if not isinstance(raw, (list, tuple)) or len(raw) < 2:
        return None
    try:
        lon = float(raw[0])
        lat = float(raw[1])
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return None
    return lon, lat


@dataclass(frozen=True)
class OccurrenceFeature:
    """A single geotagged observation record drawn on the range map."""

    coordinate: GeoCoordinate | None
    country: str | None = None
    year: int | None = None
    basis_of_record: str | None = None

    @classmethod
    def from_geojson(cls, feature: Mapping[str, Any]) -> OccurrenceFeature:
        """Parse a GeoJSON point feature.

        A missing, non-numeric or out-of-range coordinate is kept as ``None``
        rather than rejected, so the overlay still gets one mark per record.
        """
        geometry = feature.get("geometry") or {}
        props = feature.get("properties") or {}
        pair = _finite_pair(geometry.get("coordinates"))
        coordinate: GeoCoordinate | None = None
        if pair is not None:
            try:
                coordinate = GeoCoordinate(lon=pair[0], lat=pair[1])
            except ValueError:
                coordinate = None
        return cls(
            coordinate=coordinate,
            country=props.get("country"),
            year=props.get("year"),
            basis_of_record=props.get("basisOfRecord"),
        )

    @classmethod
    def coerce(cls, value: OccurrenceFeature | Mapping[str, Any]) -> OccurrenceFeature:
        """Accept either a parsed feature or its GeoJSON mapping."""
        if isinstance(value, OccurrenceFeature):
            return value
        return cls.from_geojson(value)

    def to_geojson(self) -> dict[str, Any]:
        coordinates = list(self.coordinate.as_tuple()) if self.coordinate else None
        return {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": coordinates},
            "properties": {
                "country": self.country,
                "year": self.year,
                "basisOfRecord": self.basis_of_record,
            },
        }

    @property
    def tooltip(self) -> str:
        country = self.country or "Unknown"
        year = self.year or "Unknown year"
        return f"{country}, {year}"
