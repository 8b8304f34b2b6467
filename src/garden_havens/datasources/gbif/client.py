"""GBIF API client constants and shared request helper.

API docs:
  - Species: https://techdocs.gbif.org/en/openapi/v1/species
  - Occurrence: https://techdocs.gbif.org/en/openapi/v1/occurrence
"""

from __future__ import annotations

from typing import Any

from garden_havens.services.http import session

API_BASE = "https://api.gbif.org/v1"
SPECIES_API = f"{API_BASE}/species"
OCCURRENCE_SEARCH_API = f"{API_BASE}/occurrence/search"

# A name match below this confidence is treated as no match
MIN_MATCH_CONFIDENCE = 90

# GBIF caps occurrence search pages at 300 records
MAX_OCCURRENCE_LIMIT = 300


def get_json(url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
    """GET a GBIF endpoint and decode the JSON body.

    Raises:
        requests.RequestException: On network failure or a non-2xx status.
        ValueError: If the body is not a JSON object.
    """
    resp = session.get(url, params=params)
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, dict):
        msg = f"Expected a JSON object from {url}, got {type(data).__name__}"
        raise ValueError(msg)
    return data
