"""
Tests for the build flow module and renderer modules.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from garden_havens.datasources.world_atlas import WORLD_TOPOLOGY_PATH
from garden_havens.flows import build
from garden_havens.preferences import Preferences, PreferencesStore
from garden_havens.renderers.settings_panel import build_settings_panel_html
from garden_havens.renderers.species_card import build_species_card_html, globe_center
from garden_havens.schemas import SpeciesProfile
from garden_havens.store import DataStore

if TYPE_CHECKING:
    from pathlib import Path

    from garden_havens.geo.topology import WorldBoundaries


def write_envelope(base_dir: Path, path: str, data: object, source: str = "test") -> None:
    """Write test data in the metadata envelope format."""
    full = base_dir / path
    full.parent.mkdir(parents=True, exist_ok=True)
    envelope = {
        "meta": {"source": source, "fetched_at": "2026-02-04T12:00:00+00:00"},
        "data": data,
    }
    full.write_text(json.dumps(envelope))


@pytest.fixture
def profile(make_occurrence: Any) -> SpeciesProfile:
    return SpeciesProfile(
        binomial="Felis catus",
        taxon_key=2435035,
        iucn_status="LC",
        occurrences=[make_occurrence(0, 0, country="Kenya"), make_occurrence(10, 10)],
    )


@pytest.fixture
def site_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> DataStore:
    """Point the build flow's store, output dir and preferences at tmp_path."""
    ds = DataStore(tmp_path)
    monkeypatch.setattr(build, "store", ds)
    monkeypatch.setattr(build, "SITE_DIR", tmp_path / "derived" / "site")
    monkeypatch.setattr(build, "preferences_store", PreferencesStore(tmp_path / "prefs.json"))
    return ds


# =============================================================================
# Renderers
# =============================================================================


class TestGlobeCenter:
    """Test where a card's globe faces."""

    def test_centroid_of_occurrences(self, make_occurrence: Any) -> None:
        profile = SpeciesProfile(
            binomial="A b", occurrences=[make_occurrence(10, 0), make_occurrence(20, 0)]
        )
        center = globe_center(profile)
        assert center.lon == pytest.approx(15)
        assert center.lat == pytest.approx(0, abs=1e-9)

    def test_no_occurrences_faces_origin(self) -> None:
        center = globe_center(SpeciesProfile(binomial="A b"))
        assert (center.lon, center.lat) == (0.0, 0.0)

    def test_unprojectable_occurrences_ignored(self, make_occurrence: Any) -> None:
        profile = SpeciesProfile(
            binomial="A b", occurrences=[make_occurrence(None, None), make_occurrence(30, 20)]
        )
        center = globe_center(profile)
        assert center.lon == pytest.approx(30)
        assert center.lat == pytest.approx(20)


class TestSpeciesCard:
    """Test species card HTML."""

    def test_all_sections(self, profile: SpeciesProfile, boundaries: WorldBoundaries) -> None:
        html = build_species_card_html(profile, Preferences(), boundaries)
        assert 'id="card-felis_catus"' in html
        assert "<em>Felis catus</em>" in html
        assert 'href="https://www.gbif.org/species/2435035"' in html
        assert 'id="Felis_catus-orthographic-globe"' in html
        assert 'id="Felis_catus-range-map"' in html
        assert "Least Concern (LC)" in html
        assert "Taxon range (2)" in html
        assert "<title>Kenya, 2020</title>" in html

    def test_hide_globe(self, profile: SpeciesProfile, boundaries: WorldBoundaries) -> None:
        html = build_species_card_html(profile, Preferences(show_taxon_image=False), boundaries)
        assert "orthographic-globe" not in html
        assert "range-map" in html

    def test_hide_range(self, profile: SpeciesProfile, boundaries: WorldBoundaries) -> None:
        html = build_species_card_html(profile, Preferences(show_taxon_range=False), boundaries)
        assert "range-map" not in html
        assert "orthographic-globe" in html

    def test_hide_status(self, profile: SpeciesProfile, boundaries: WorldBoundaries) -> None:
        prefs = Preferences(show_conservation_status=False)
        html = build_species_card_html(profile, prefs, boundaries)
        assert "iucn-badge" not in html

    def test_no_status_no_badge(self, boundaries: WorldBoundaries) -> None:
        html = build_species_card_html(SpeciesProfile(binomial="A b"), Preferences(), boundaries)
        assert "iucn-badge" not in html
        assert "gbif-link" not in html

    def test_sizes(self, profile: SpeciesProfile, boundaries: WorldBoundaries) -> None:
        html = build_species_card_html(
            profile, Preferences(), boundaries, globe_diameter=150, range_map_width=600
        )
        assert 'width="150" height="150"' in html
        assert 'viewBox="0 0 600 300"' in html

    def test_locale(self, profile: SpeciesProfile, boundaries: WorldBoundaries) -> None:
        html = build_species_card_html(profile, Preferences(), boundaries, locale="es")
        assert "Rango del taxón (2)" in html

    def test_binomial_is_escaped(self, boundaries: WorldBoundaries) -> None:
        html = build_species_card_html(
            SpeciesProfile(binomial="A <b>"), Preferences(show_taxon_image=False), boundaries
        )
        assert "<em>A &lt;b&gt;</em>" in html


class TestSettingsPanel:
    """Test settings panel HTML."""

    def test_toggles_reflect_preferences(self) -> None:
        html = build_settings_panel_html(Preferences(show_taxon_range=False))
        assert 'name="showTaxonImage" checked' in html
        assert 'name="showTaxonRange" disabled' in html
        assert 'name="showConservationStatus" checked' in html

    def test_username(self) -> None:
        html = build_settings_panel_html(Preferences(wikimedia_username="Yug"))
        assert 'value="Yug"' in html

    def test_translated_labels(self) -> None:
        html = build_settings_panel_html(Preferences(), locale="fr")
        assert "Paramètres de visibilité" in html
        assert "Image du taxon" in html


# =============================================================================
# Flow tasks
# =============================================================================


class TestLoadWorldBoundaries:
    """Test loading the cached topology."""

    def test_exists(
        self, tmp_path: Path, site_store: DataStore, sample_topology: dict[str, Any]
    ) -> None:
        write_envelope(tmp_path, str(WORLD_TOPOLOGY_PATH), sample_topology)
        boundaries = build.load_world_boundaries()
        assert boundaries is not None
        assert len(boundaries.features) == 2

    def test_not_exists(self, site_store: DataStore) -> None:
        assert build.load_world_boundaries() is None


class TestLoadSpeciesProfiles:
    """Test loading cached GBIF profiles."""

    def test_cached_and_missing(self, tmp_path: Path, site_store: DataStore) -> None:
        write_envelope(
            tmp_path,
            "live/gbif/felis_catus.json",
            {"binomial": "Felis catus", "taxon_key": 1, "iucn_status": "LC", "occurrences": []},
            source="api.gbif.org",
        )
        cat, magpie = build.load_species_profiles(["Felis catus", "Pica pica"])
        assert cat.taxon_key == 1
        assert magpie.binomial == "Pica pica"
        assert magpie.taxon_key is None


class TestLoadPreferences:
    """Test reading stored preferences."""

    def test_defaults(self, site_store: DataStore) -> None:
        assert build.load_preferences() == Preferences()

    def test_stored(self, tmp_path: Path, site_store: DataStore) -> None:
        (tmp_path / "prefs.json").write_text(json.dumps({"showTaxonImage": False}))
        assert build.load_preferences().show_taxon_image is False


class TestBuildHtml:
    """Test assembling the full page."""

    def test_page(self, profile: SpeciesProfile, boundaries: WorldBoundaries) -> None:
        html = build.build_html(
            [profile, SpeciesProfile(binomial="Pica pica")],
            boundaries,
            Preferences(wikimedia_username="Yug"),
            updated="2026-02-04 12:00 UTC",
        )
        assert html.startswith("<!DOCTYPE html>")
        assert '<html lang="en">' in html
        assert html.count('class="species-card"') == 2
        assert 'class="settings-panel"' in html
        assert '<div class="user">Yug</div>' in html
        assert "Updated 2026-02-04 12:00 UTC" in html

    def test_cards_not_double_escaped(
        self, profile: SpeciesProfile, boundaries: WorldBoundaries
    ) -> None:
        html = build.build_html([profile], boundaries, Preferences())
        assert "&lt;article" not in html
        assert "<svg " in html


class TestWriteSite:
    """Test writing the output page."""

    def test_write_site(self, tmp_path: Path, site_store: DataStore) -> None:
        output = build.write_site("<html></html>")
        assert output == tmp_path / "derived" / "site" / "index.html"
        assert output.read_text() == "<html></html>"


class TestBuildAllFlow:
    """Test the main build flow."""

    def test_no_topology(self, site_store: DataStore) -> None:
        assert build.build_all(["Felis catus"]) == {"error": "no data"}

    def test_build_all(
        self, tmp_path: Path, site_store: DataStore, sample_topology: dict[str, Any]
    ) -> None:
        write_envelope(tmp_path, str(WORLD_TOPOLOGY_PATH), sample_topology)
        write_envelope(
            tmp_path,
            "live/gbif/felis_catus.json",
            {"binomial": "Felis catus", "taxon_key": 1, "iucn_status": "LC", "occurrences": []},
        )

        result = build.build_all(["Felis catus", "Pica pica"])

        assert result["cards"] == 2
        assert result["missing"] == ["Pica pica"]
        index = tmp_path / "derived" / "site" / "index.html"
        assert result["output"] == str(index)
        assert "Felis catus" in index.read_text()
