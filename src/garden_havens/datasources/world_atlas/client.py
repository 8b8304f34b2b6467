"""World atlas TopoJSON download.

Natural Earth 1:110m country boundaries packaged by ``world-atlas`` on npm
and served from the jsDelivr CDN.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from garden_havens.config import WORLD_ATLAS_URL
from garden_havens.geo.topology import TopologyError
from garden_havens.services.http import session

logger = logging.getLogger(__name__)

# Where the fetch flow caches the topology inside the data store
WORLD_TOPOLOGY_PATH = Path("reference/world/countries-110m.json")


def fetch_countries_topology(url: str = WORLD_ATLAS_URL) -> dict[str, Any]:
    """
    Download the countries TopoJSON document.

    Raises:
        requests.RequestException: On network failure or a non-2xx status.
        TopologyError: If the body is not a TopoJSON Topology.
    """
    resp = session.get(url)
    resp.raise_for_status()
    topology: dict[str, Any] = resp.json()
    if not isinstance(topology, dict) or topology.get("type") != "Topology":
        msg = f"{url} did not return a TopoJSON Topology"
        raise TopologyError(msg)
    logger.info("Downloaded world topology from %s", url)
    return topology
