"""
Prefect flow for building static site from fetched data.

Turns the cached world atlas and GBIF profiles into one HTML page of species
cards plus the settings panel.

Run locally:
    python -m garden_havens.flows.build
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from prefect import flow, task

from garden_havens.config import get_settings
from garden_havens.datasources.world_atlas import WORLD_TOPOLOGY_PATH
from garden_havens.flows import gbif_profile_path
from garden_havens.geo.topology import WorldBoundaries
from garden_havens.i18n import messages_for
from garden_havens.preferences import Preferences, PreferencesStore
from garden_havens.reference.catalog import DEFAULT_SPECIES
from garden_havens.renderers import render_template
from garden_havens.renderers.settings_panel import build_settings_panel_html
from garden_havens.renderers.species_card import build_species_card_html
from garden_havens.schemas import SpeciesProfile
from garden_havens.store import DataStore

# Store and output paths
store = DataStore(get_settings().data_dir)
SITE_DIR = store.derived / "site"

preferences_store = PreferencesStore(get_settings().preferences_path)


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-world-boundaries")
def load_world_boundaries() -> WorldBoundaries | None:
    """Decode the cached world topology, or None if it was never fetched."""
    topology = store.read(WORLD_TOPOLOGY_PATH)
    if topology is None:
        return None
    return WorldBoundaries.from_topology(topology)


@task(name="load-species-profiles")
def load_species_profiles(species: Sequence[str]) -> list[SpeciesProfile]:
    """Load cached GBIF profiles; uncached species get an empty profile."""
    profiles: list[SpeciesProfile] = []
    for binomial in species:
        data = store.read(gbif_profile_path(binomial))
        if data is None:
            profiles.append(SpeciesProfile(binomial=binomial))
        else:
            profiles.append(SpeciesProfile.model_validate(data))
    return profiles


@task(name="load-preferences")
def load_preferences() -> Preferences:
    return preferences_store.load()


# =============================================================================
# Main build task and flow
# =============================================================================


@task(name="build-html")
def build_html(
    profiles: list[SpeciesProfile],
    boundaries: WorldBoundaries,
    preferences: Preferences,
    locale: str = "en",
    updated: str = "",
) -> str:
    """Build the HTML page: one card per profile, then the settings panel."""
    settings = get_settings()
    cards = [
        build_species_card_html(
            profile,
            preferences,
            boundaries,
            locale=locale,
            globe_diameter=settings.globe_diameter,
            range_map_width=settings.range_map_width,
        )
        for profile in profiles
    ]
    return render_template(
        "base.html.j2",
        locale=locale,
        t=messages_for(locale),
        username=preferences.wikimedia_username,
        cards=cards,
        settings_panel=build_settings_panel_html(preferences, locale),
        updated=updated,
    )


@task(name="write-site")
def write_site(html: str) -> Path:
    """Write HTML to site directory."""
    SITE_DIR.mkdir(parents=True, exist_ok=True)
    output_path = SITE_DIR / "index.html"
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path


@flow(name="build-site", log_prints=True)
def build_all(species: Sequence[str] = DEFAULT_SPECIES) -> dict[str, Any]:
    """
    Build static site from fetched data.

    This is the main Prefect flow that generates the static site.
    """
    print("Loading world boundaries...")
    boundaries = load_world_boundaries()
    if boundaries is None:
        print("No world topology found. Run fetch flow first.")
        return {"error": "no data"}

    print("Loading species profiles...")
    profiles = load_species_profiles(list(species))
    missing = [p.binomial for p in profiles if p.taxon_key is None]
    if missing:
        print(f"No GBIF data for: {', '.join(missing)}")

    preferences = load_preferences()
    locale = get_settings().locale

    print(f"Rendering {len(profiles)} species cards ({locale})...")
    updated = datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC")
    html = build_html(profiles, boundaries, preferences, locale, updated)
    output = write_site(html)
    print(f"Site written to {output}")

    return {"cards": len(profiles), "missing": missing, "output": str(output)}


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
