"""Tests for static reference data and the species profile schema."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from garden_havens.reference import CATEGORIES, DEFAULT_SPECIES, VALID_CATEGORIES, category_info
from garden_havens.schemas import IucnCode, SpeciesProfile, species_slug


class TestIucnCategories:
    """Test Red List category lookup."""

    def test_all_codes_present(self) -> None:
        assert set(VALID_CATEGORIES) == {code.value for code in IucnCode}

    def test_least_concern(self) -> None:
        info = category_info("LC")
        assert info.name == "Least Concern"
        assert info.color == "#60C659"

    def test_lookup_is_forgiving(self) -> None:
        assert category_info(" vu ") is CATEGORIES["VU"]

    @pytest.mark.parametrize("code", [None, "", "XX"])
    def test_unknown_reads_as_not_evaluated(self, code: str | None) -> None:
        assert category_info(code).code == "NE"


class TestCatalog:
    """Test the default species list."""

    def test_binomials(self) -> None:
        assert "Felis catus" in DEFAULT_SPECIES
        assert all(len(name.split()) >= 2 for name in DEFAULT_SPECIES)

    def test_unique_slugs(self) -> None:
        slugs = [species_slug(name) for name in DEFAULT_SPECIES]
        assert len(set(slugs)) == len(slugs)


class TestSpeciesSlug:
    """Test filesystem-safe names."""

    @pytest.mark.parametrize(
        ("binomial", "slug"),
        [
            ("Felis catus", "felis_catus"),
            ("Canis lupus familiaris", "canis_lupus_familiaris"),
            ("  Pica  pica ", "pica_pica"),
            ("Quercus × robur", "quercus_robur"),
        ],
    )
    def test_slug(self, binomial: str, slug: str) -> None:
        assert species_slug(binomial) == slug


class TestSpeciesProfile:
    """Test the cached GBIF profile model."""

    def test_minimal(self) -> None:
        profile = SpeciesProfile(binomial="Felis catus")
        assert profile.taxon_key is None
        assert profile.iucn_status is None
        assert profile.occurrences == []
        assert profile.slug == "felis_catus"

    def test_empty_binomial_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SpeciesProfile(binomial="  ")

    def test_known_status(self) -> None:
        profile = SpeciesProfile(binomial="Felis catus", iucn_status="LC")
        assert profile.iucn_status is IucnCode.LEAST_CONCERN

    def test_unknown_status_is_not_evaluated(self) -> None:
        profile = SpeciesProfile(binomial="Felis catus", iucn_status="LR/lc")
        assert profile.iucn_status is IucnCode.NOT_EVALUATED

    def test_json_round_trip(self, make_occurrence: object) -> None:
        profile = SpeciesProfile(
            binomial="Felis catus",
            taxon_key=2435035,
            iucn_status="LC",
            occurrences=[make_occurrence(1, 2)],  # type: ignore[operator]
        )
        dumped = profile.model_dump(mode="json")
        assert dumped["iucn_status"] == "LC"
        assert SpeciesProfile.model_validate(dumped) == profile

    def test_features(self, make_occurrence: object) -> None:
        profile = SpeciesProfile(
            binomial="Felis catus",
            occurrences=[make_occurrence(1, 2), make_occurrence(None, None)],  # type: ignore[operator]
        )
        first, second = profile.features
        assert first.coordinate is not None
        assert first.coordinate.as_tuple() == (1.0, 2.0)
        assert second.coordinate is None
