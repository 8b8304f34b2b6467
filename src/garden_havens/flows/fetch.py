"""
Prefect flow for fetching data from external sources.

Two sources, both free and keyless:
  - world-atlas TopoJSON from jsDelivr (reference tier, 90-day TTL)
  - GBIF taxon key, IUCN status and occurrences per species (live tier, 24h TTL)

Run locally:
    python -m garden_havens.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m garden_havens.flows.fetch
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from prefect import flow, task

from garden_havens.config import get_settings
from garden_havens.datasources import gbif, world_atlas
from garden_havens.datasources.world_atlas import WORLD_TOPOLOGY_PATH
from garden_havens.flows import gbif_profile_path
from garden_havens.reference.catalog import DEFAULT_SPECIES
from garden_havens.schemas import SpeciesProfile
from garden_havens.store import DataStore

# Data store with tiered directories
store = DataStore(get_settings().data_dir)

WORLD_TOPOLOGY_TTL = timedelta(days=90)
GBIF_PROFILE_TTL = timedelta(hours=24)


@task(name="fetch-world-topology", retries=2, retry_delay_seconds=5)
def fetch_world_topology(url: str) -> dict[str, Any]:
    """Download the world atlas countries topology."""
    return world_atlas.fetch_countries_topology(url)


@task(name="save-world-topology")
def save_world_topology(topology: dict[str, Any], url: str) -> Path:
    """Save the world topology via store."""
    return store.write(
        WORLD_TOPOLOGY_PATH,
        topology,
        source="world-atlas (jsdelivr)",
        valid_until=datetime.now(UTC) + WORLD_TOPOLOGY_TTL,
        url=url,
    )


@task(name="fetch-species-profile", retries=2, retry_delay_seconds=5)
def fetch_species_profile(binomial: str, occurrence_limit: int = 300) -> dict[str, Any]:
    """
    Look up one species on GBIF.

    Each lookup degrades on its own: no taxon key means no status and no
    occurrences, but the profile is still returned for the card header.
    """
    taxon_key = gbif.get_taxon_key(binomial)
    iucn_status = None
    occurrences: list[dict[str, Any]] = []
    if taxon_key is not None:
        iucn_status = gbif.get_iucn_status(taxon_key)
        occurrences = [
            o.to_geojson() for o in gbif.fetch_occurrences(taxon_key, limit=occurrence_limit)
        ]

    profile = SpeciesProfile(
        binomial=binomial,
        taxon_key=taxon_key,
        iucn_status=iucn_status,
        occurrences=occurrences,
    )
    return profile.model_dump(mode="json")


@task(name="save-species-profile")
def save_species_profile(profile: dict[str, Any]) -> Path:
    """Save a species profile via store."""
    return store.write(
        gbif_profile_path(profile["binomial"]),
        profile,
        source="api.gbif.org",
        valid_until=datetime.now(UTC) + GBIF_PROFILE_TTL,
        binomial=profile["binomial"],
    )


@flow(name="fetch-data", log_prints=True)
def fetch_all(
    species: Sequence[str] = DEFAULT_SPECIES,
    occurrence_limit: int | None = None,
) -> dict[str, Any]:
    """
    Fetch all data sources.

    This is the main Prefect flow that orchestrates data fetching.
    Checks freshness before fetching and skips sources that are still valid.
    """
    settings = get_settings()
    limit = occurrence_limit if occurrence_limit is not None else settings.occurrence_limit
    results: dict[str, Any] = {"species": {}}

    # --- World atlas ---
    if store.is_fresh(WORLD_TOPOLOGY_PATH):
        print("World topology is fresh, skipping fetch.")
    else:
        print(f"Fetching world topology from {settings.world_topology_url}...")
        topology = fetch_world_topology(settings.world_topology_url)
        path = save_world_topology(topology, settings.world_topology_url)
        print(f"Saved world topology to {path}")

    # --- GBIF, one profile per species ---
    for binomial in species:
        profile_path = gbif_profile_path(binomial)
        if store.is_fresh(profile_path):
            print(f"GBIF data for {binomial} is fresh, skipping fetch.")
            profile = store.read(profile_path) or {}
        else:
            print(f"Fetching GBIF data for {binomial}...")
            profile = fetch_species_profile(binomial, limit)
            if profile.get("taxon_key") is None:
                # Not cached, so the next run retries the match
                print(f"No GBIF match for {binomial}; not caching.")
            else:
                saved = save_species_profile(profile)
                print(f"Saved {len(profile['occurrences'])} occurrences to {saved}")

        results["species"][binomial] = len(profile.get("occurrences", []))

    return results


if __name__ == "__main__":
    result = fetch_all()
    print(f"Flow complete: {result}")
