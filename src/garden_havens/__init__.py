"""Garden Havens - species cards with globes and range maps.

Architecture::

    geo/           Projections, TopoJSON, clipping, globe + range map scenes
    datasources/   External APIs (GBIF species/occurrences, world atlas CDN)
    store.py       Tiered cache with TTL (reference → live → derived)
    reference/     Static data (species catalog, IUCN categories)
    renderers/     Pure data → SVG/HTML (scenes, species cards, settings panel)
    flows/         Prefect orchestration (fetch checks freshness, build renders site)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources → store (cache) → geo scenes → renderers → derived/site/

Extension points (see each package's docstring for step-by-step guides):
  - New data source:   datasources/__init__.py
  - New UI module:     renderers/__init__.py
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
