"""TopoJSON decoding for the world boundary dataset.

A topology stores each shared polygon edge once, as an *arc*. Geometries
reference arcs by index (``~i`` for a reversed arc), and coordinates may be
quantized and delta-encoded under a ``transform``. Decoding gives:

  - ``countries``: a GeoJSON FeatureCollection of country polygons
  - ``interior_borders``: arcs shared by two different countries
  - ``coastlines``: arcs bordering only one country

The mesh split mirrors ``topojson.mesh(topology, object, filter)`` with
``a !== b`` (borders) and ``a === b`` (coasts).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

Position = tuple[float, float]
Line = tuple[Position, ...]
ArcFilter = Callable[[Mapping[str, Any], Mapping[str, Any]], bool]


class TopologyError(ValueError):
    """Raised when a document is not a usable TopoJSON topology."""


# =============================================================================
# Arc decoding
# =============================================================================


def _decode_arcs(topology: Mapping[str, Any]) -> list[Line]:
    """Absolute lon/lat positions for every arc in the topology."""
    raw_arcs = topology.get("arcs")
    if not isinstance(raw_arcs, list):
        msg = "Topology has no 'arcs' array"
        raise TopologyError(msg)

    transform = topology.get("transform")
    if transform is None:
        return [tuple((float(p[0]), float(p[1])) for p in arc) for arc in raw_arcs]

    sx, sy = transform["scale"]
    tx, ty = transform["translate"]
    decoded: list[Line] = []
    for arc in raw_arcs:
        x = y = 0
        points: list[Position] = []
        for p in arc:
            x += p[0]
            y += p[1]
            points.append((x * sx + tx, y * sy + ty))
        decoded.append(tuple(points))
    return decoded


def _decode_point(topology: Mapping[str, Any], position: Sequence[float]) -> Position:
    transform = topology.get("transform")
    if transform is None:
        return (float(position[0]), float(position[1]))
    sx, sy = transform["scale"]
    tx, ty = transform["translate"]
    return (position[0] * sx + tx, position[1] * sy + ty)


def _arc_points(arcs: list[Line], index: int) -> Line:
    if index < 0:
        return tuple(reversed(arcs[~index]))
    return arcs[index]


def _join_arcs(arcs: list[Line], indexes: Sequence[int]) -> list[Position]:
    """Concatenate arcs into one line, dropping each shared junction point."""
    points: list[Position] = []
    for i in indexes:
        arc = _arc_points(arcs, i)
        if points:
            points.extend(arc[1:])
        else:
            points.extend(arc)
    return points


def _ring(arcs: list[Line], indexes: Sequence[int]) -> list[list[float]]:
    points = _join_arcs(arcs, indexes)
    # A degenerate ring still needs four positions to stay valid GeoJSON
    while len(points) < 4 and points:
        points.append(points[0])
    return [list(p) for p in points]


# =============================================================================
# Geometry / feature conversion
# =============================================================================


def _geometry(
    topology: Mapping[str, Any], arcs: list[Line], obj: Mapping[str, Any]
) -> dict[str, Any] | None:
    kind = obj.get("type")
    if kind is None:
        return None
    if kind == "GeometryCollection":
        return {
            "type": "GeometryCollection",
            "geometries": [
                g for g in (_geometry(topology, arcs, o) for o in obj.get("geometries", [])) if g
            ],
        }
    if kind == "Point":
        return {"type": "Point", "coordinates": list(_decode_point(topology, obj["coordinates"]))}
    if kind == "MultiPoint":
        return {
            "type": "MultiPoint",
            "coordinates": [list(_decode_point(topology, p)) for p in obj["coordinates"]],
        }
    if kind == "LineString":
        return {
            "type": "LineString",
            "coordinates": [list(p) for p in _join_arcs(arcs, obj["arcs"])],
        }
    if kind == "MultiLineString":
        return {
            "type": "MultiLineString",
            "coordinates": [[list(p) for p in _join_arcs(arcs, line)] for line in obj["arcs"]],
        }
    if kind == "Polygon":
        return {"type": "Polygon", "coordinates": [_ring(arcs, r) for r in obj["arcs"]]}
    if kind == "MultiPolygon":
        return {
            "type": "MultiPolygon",
            "coordinates": [[_ring(arcs, r) for r in polygon] for polygon in obj["arcs"]],
        }
    msg = f"Unsupported TopoJSON geometry type: {kind}"
    raise TopologyError(msg)


def _feature(
    topology: Mapping[str, Any], arcs: list[Line], obj: Mapping[str, Any]
) -> dict[str, Any]:
    feature: dict[str, Any] = {
        "type": "Feature",
        "properties": dict(obj.get("properties") or {}),
        "geometry": _geometry(topology, arcs, obj),
    }
    if "id" in obj:
        feature["id"] = obj["id"]
    return feature


def feature(topology: Mapping[str, Any], obj: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a topology object to a GeoJSON Feature or FeatureCollection."""
    arcs = _decode_arcs(topology)
    if obj.get("type") == "GeometryCollection":
        return {
            "type": "FeatureCollection",
            "features": [_feature(topology, arcs, o) for o in obj.get("geometries", [])],
        }
    return _feature(topology, arcs, obj)


# =============================================================================
# Mesh
# =============================================================================


def _collect_arc_owners(
    obj: Mapping[str, Any],
    owners: dict[int, list[Mapping[str, Any]]],
    geometry: Mapping[str, Any] | None = None,
) -> None:
    """Record, for each arc index, every geometry whose boundary uses it."""
    kind = obj.get("type")
    if kind == "GeometryCollection":
        for child in obj.get("geometries", []):
            _collect_arc_owners(child, owners)
        return

    geom = geometry if geometry is not None else obj

    def visit(indexes: Sequence[int]) -> None:
        for i in indexes:
            owners.setdefault(~i if i < 0 else i, []).append(geom)

    if kind == "LineString":
        visit(obj["arcs"])
    elif kind in ("MultiLineString", "Polygon"):
        for line in obj["arcs"]:
            visit(line)
    elif kind == "MultiPolygon":
        for polygon in obj["arcs"]:
            for ring in polygon:
                visit(ring)


def mesh(
    topology: Mapping[str, Any],
    obj: Mapping[str, Any],
    arc_filter: ArcFilter | None = None,
) -> dict[str, Any]:
    """MultiLineString of the object's arcs, each emitted once.

    ``arc_filter(a, b)`` receives the first and last geometry using an arc
    (the same geometry twice when only one uses it).
    """
    arcs = _decode_arcs(topology)
    owners: dict[int, list[Mapping[str, Any]]] = {}
    _collect_arc_owners(obj, owners)

    lines: list[list[list[float]]] = []
    for index in sorted(owners):
        geoms = owners[index]
        if arc_filter is not None and not arc_filter(geoms[0], geoms[-1]):
            continue
        lines.append([list(p) for p in arcs[index]])
    return {"type": "MultiLineString", "coordinates": lines}


def _shared(a: Mapping[str, Any], b: Mapping[str, Any]) -> bool:
    return a is not b


def _unshared(a: Mapping[str, Any], b: Mapping[str, Any]) -> bool:
    return a is b


# =============================================================================
# World boundaries
# =============================================================================


@dataclass(frozen=True)
class WorldBoundaries:
    """Decoded country polygons plus the border/coastline meshes.

    Built once and shared read-only by every renderer.
    """

    countries: Mapping[str, Any]
    interior_borders: Mapping[str, Any]
    coastlines: Mapping[str, Any]

    @classmethod
    def from_topology(
        cls, topology: Mapping[str, Any], object_name: str = "countries"
    ) -> WorldBoundaries:
        if topology.get("type") != "Topology":
            msg = "Document is not a TopoJSON Topology"
            raise TopologyError(msg)
        objects = topology.get("objects") or {}
        obj = objects.get(object_name)
        if obj is None:
            available = ", ".join(sorted(objects)) or "none"
            msg = f"Topology has no object '{object_name}' (available: {available})"
            raise TopologyError(msg)

        countries = feature(topology, obj)
        if countries["type"] != "FeatureCollection":
            countries = {"type": "FeatureCollection", "features": [countries]}
        boundaries = cls(
            countries=countries,
            interior_borders=mesh(topology, obj, _shared),
            coastlines=mesh(topology, obj, _unshared),
        )
        logger.debug(
            "Decoded %d countries, %d border arcs, %d coastline arcs",
            len(boundaries.features),
            len(boundaries.interior_borders["coordinates"]),
            len(boundaries.coastlines["coordinates"]),
        )
        return boundaries

    @classmethod
    def load(cls, path: Path, object_name: str = "countries") -> WorldBoundaries:
        """Read a TopoJSON file from disk."""
        with path.open(encoding="utf-8") as f:
            topology = json.load(f)
        logger.info("Loaded world topology from %s", path)
        return cls.from_topology(topology, object_name)

    @property
    def features(self) -> list[Mapping[str, Any]]:
        features: list[Mapping[str, Any]] = self.countries["features"]
        return features

