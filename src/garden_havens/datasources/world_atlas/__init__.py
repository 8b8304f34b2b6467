"""World atlas (country boundaries) data source.

Public API:
  - client: fetch_countries_topology, WORLD_TOPOLOGY_PATH
"""

from garden_havens.datasources.world_atlas.client import (
    WORLD_TOPOLOGY_PATH,
    fetch_countries_topology,
)

__all__ = ["WORLD_TOPOLOGY_PATH", "fetch_countries_topology"]
