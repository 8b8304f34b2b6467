"""Geographic rendering: projections, clipping, and map scenes.

Pure Python, no markup. Renderers here build a declarative
:class:`~garden_havens.geo.scene.Scene`; ``renderers/svg.py`` turns scenes
into SVG.

Public API:
  - globe: create_globe, GlobeHandle, rotation_from_drag, Idle, Dragging
  - range_map: create_range_map, RangeMapHandle
  - topology: WorldBoundaries, TopologyError
  - models: GeoCoordinate, OccurrenceFeature, geo_distance, spherical_centroid
  - projection: OrthographicProjection, EquirectangularProjection
  - surface: Container, RenderSurface
"""

from __future__ import annotations

from functools import lru_cache

from garden_havens.geo.globe import Dragging, GlobeHandle, Idle, create_globe, rotation_from_drag
from garden_havens.geo.models import (
    GeoCoordinate,
    OccurrenceFeature,
    geo_distance,
    spherical_centroid,
)
from garden_havens.geo.projection import EquirectangularProjection, OrthographicProjection
from garden_havens.geo.range_map import RangeMapHandle, create_range_map
from garden_havens.geo.scene import LayerKind, Scene
from garden_havens.geo.surface import Container, RenderSurface
from garden_havens.geo.topology import TopologyError, WorldBoundaries


@lru_cache(maxsize=1)
def default_boundaries() -> WorldBoundaries:
    """World atlas cached by the fetch flow, shared by every renderer."""
    from garden_havens.config import get_settings
    from garden_havens.datasources.world_atlas import WORLD_TOPOLOGY_PATH
    from garden_havens.store import DataStore

    topology = DataStore(get_settings().data_dir).read(WORLD_TOPOLOGY_PATH)
    if topology is None:
        msg = "World atlas is not cached. Run 'garden-havens refresh' first."
        raise FileNotFoundError(msg)
    return WorldBoundaries.from_topology(topology)


__all__ = [
    "Container",
    "Dragging",
    "EquirectangularProjection",
    "GeoCoordinate",
    "GlobeHandle",
    "Idle",
    "LayerKind",
    "OccurrenceFeature",
    "OrthographicProjection",
    "RangeMapHandle",
    "RenderSurface",
    "Scene",
    "TopologyError",
    "WorldBoundaries",
    "create_globe",
    "create_range_map",
    "default_boundaries",
    "geo_distance",
    "rotation_from_drag",
    "spherical_centroid",
]
