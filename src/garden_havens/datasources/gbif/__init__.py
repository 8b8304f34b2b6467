"""GBIF (Global Biodiversity Information Facility) data source.

Looks up catalog species on the GBIF backbone, their IUCN Red List category,
and a page of georeferenced occurrences for the range map. Every public
function logs and degrades to None / [] on failure so a card can still be
rendered without that section.

Public API:
  - species: get_taxon_key, get_iucn_status
  - occurrences: fetch_occurrences
  - client: API URLs, shared constants
"""

from garden_havens.datasources.gbif.client import API_BASE, MAX_OCCURRENCE_LIMIT
from garden_havens.datasources.gbif.occurrences import fetch_occurrences
from garden_havens.datasources.gbif.species import get_iucn_status, get_taxon_key

__all__ = [
    "API_BASE",
    "MAX_OCCURRENCE_LIMIT",
    "fetch_occurrences",
    "get_iucn_status",
    "get_taxon_key",
]
