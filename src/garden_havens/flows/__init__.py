"""
Prefect flows for the site pipeline.

Flows:
- fetch: Download the world atlas and per-species GBIF data into the store
- build: Render species cards from cached data into a static site

Usage (local):
    python -m garden_havens.flows.fetch
    python -m garden_havens.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m garden_havens.flows.fetch
"""

from __future__ import annotations

from pathlib import Path

from garden_havens.schemas import species_slug


def gbif_profile_path(binomial: str) -> Path:
    """Store path for one species' cached GBIF profile."""
    return Path("live/gbif") / f"{species_slug(binomial)}.json"
