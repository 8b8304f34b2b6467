"""Shared fixtures: a two-country topology small enough to reason about by hand.

Country A covers lon 0..10, lat 0..10 and country B lon 10..20, lat 0..10.
They share the edge at lon 10 (arc 0); arcs 1 and 2 are coastline. Exterior
rings are clockwise, as in the world atlas data.
"""

from __future__ import annotations

from typing import Any

import pytest

from garden_havens.geo.topology import WorldBoundaries

SAMPLE_TOPOLOGY: dict[str, Any] = {
    "type": "Topology",
    "objects": {
        "countries": {
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Polygon", "id": "A", "properties": {"name": "Alpha"}, "arcs": [[1, 0]]},
                {"type": "Polygon", "id": "B", "properties": {"name": "Beta"}, "arcs": [[-1, 2]]},
            ],
        }
    },
    "arcs": [
        [[10, 10], [10, 0]],
        [[10, 0], [0, 0], [0, 10], [10, 10]],
        [[10, 10], [20, 10], [20, 0], [10, 0]],
    ],
}


def occurrence(
    lon: float | None, lat: float | None, country: str = "X", year: int = 2020
) -> dict[str, Any]:
    """GeoJSON point feature shaped like the GBIF datasource output."""
    coordinates = None if lon is None or lat is None else [lon, lat]
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": coordinates},
        "properties": {"country": country, "year": year, "basisOfRecord": "HUMAN_OBSERVATION"},
    }


@pytest.fixture
def sample_topology() -> dict[str, Any]:
    return SAMPLE_TOPOLOGY


@pytest.fixture
def boundaries() -> WorldBoundaries:
    return WorldBoundaries.from_topology(SAMPLE_TOPOLOGY)


@pytest.fixture
def make_occurrence() -> Any:
    return occurrence
