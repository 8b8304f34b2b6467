"""Name matching and conservation status lookups."""

from __future__ import annotations

import logging

import requests

from garden_havens.datasources.gbif import client

logger = logging.getLogger(__name__)


def get_taxon_key(binomial: str) -> int | None:
    """
    Match a binomial name to a GBIF backbone taxon key.

    Only a confident (> 90), ACCEPTED match with a usage key counts.

    Args:
        binomial: Scientific name, e.g. ``"Pica pica"``.

    Returns:
        The ``usageKey``, or None when there is no confident match or the
        request fails.
    """
    try:
        data = client.get_json(f"{client.SPECIES_API}/match", params={"name": binomial})
    except (requests.RequestException, ValueError):
        logger.exception("GBIF taxon key lookup failed for %r", binomial)
        return None

    usage_key = data.get("usageKey")
    confidence = data.get("confidence") or 0
    if confidence > client.MIN_MATCH_CONFIDENCE and data.get("status") == "ACCEPTED" and usage_key:
        logger.info("Found GBIF key %s for %r", usage_key, binomial)
        return int(usage_key)

    logger.warning("No confident GBIF match found for %r", binomial)
    return None


def get_iucn_status(taxon_key: int) -> str | None:
    """
    Fetch the IUCN Red List category for a taxon.

    Returns:
        The category code (e.g. ``"LC"``), or None when GBIF has none or the
        request fails.
    """
    try:
        data = client.get_json(f"{client.SPECIES_API}/{taxon_key}/iucnRedListCategory")
    except (requests.RequestException, ValueError):
        logger.exception("Error fetching IUCN status for key %s", taxon_key)
        return None

    code = data.get("code")
    return str(code) if code else None
