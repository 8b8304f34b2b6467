"""Georeferenced occurrence records."""

from __future__ import annotations

import logging
from typing import Any

import requests

from garden_havens.datasources.gbif import client
from garden_havens.geo.models import OccurrenceFeature

logger = logging.getLogger(__name__)


def _parse_occurrence(result: dict[str, Any]) -> OccurrenceFeature | None:
    """Map one search result to a feature. Returns None if a coordinate is missing."""
    lat = result.get("decimalLatitude")
    lon = result.get("decimalLongitude")
    if lat is None or lon is None:
        return None

    return OccurrenceFeature.from_geojson(
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [lon, lat]},
            "properties": {
                "country": result.get("country") or "Unknown",
                "year": result.get("year") or None,
                "basisOfRecord": result.get("basisOfRecord") or "Unknown",
            },
        }
    )


def fetch_occurrences(
    taxon_key: int, limit: int = client.MAX_OCCURRENCE_LIMIT
) -> list[OccurrenceFeature]:
    """
    Fetch occurrences that carry coordinates for a taxon.

    Args:
        taxon_key: GBIF backbone usage key.
        limit: Maximum records to request (GBIF allows up to 300 per page).

    Returns:
        One feature per record with both coordinates, or an empty list when
        the request fails.
    """
    params: dict[str, Any] = {
        "taxonKey": taxon_key,
        "hasCoordinate": "true",
        "limit": min(limit, client.MAX_OCCURRENCE_LIMIT),
    }

    try:
        data = client.get_json(client.OCCURRENCE_SEARCH_API, params=params)
    except (requests.RequestException, ValueError):
        logger.exception("Error fetching GBIF occurrences for key %s", taxon_key)
        return []

    occurrences: list[OccurrenceFeature] = []
    for result in data.get("results") or []:
        parsed = _parse_occurrence(result)
        if parsed is not None:
            occurrences.append(parsed)

    logger.info("Fetched %d occurrences for taxonKey %s", len(occurrences), taxon_key)
    return occurrences
