"""
Domain models for Garden Havens.

Pydantic models for data cached between the fetch and build flows.
These define the canonical schema - datasources normalize API responses to these.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from garden_havens.geo.models import OccurrenceFeature

# =============================================================================
# Conservation status
# =============================================================================


class IucnCode(StrEnum):
    """IUCN Red List category codes as reported by GBIF."""

    EXTINCT = "EX"
    EXTINCT_IN_THE_WILD = "EW"
    CRITICALLY_ENDANGERED = "CR"
    ENDANGERED = "EN"
    VULNERABLE = "VU"
    NEAR_THREATENED = "NT"
    LEAST_CONCERN = "LC"
    DATA_DEFICIENT = "DD"
    NOT_EVALUATED = "NE"


# =============================================================================
# Species
# =============================================================================


def species_slug(binomial: str) -> str:
    """Filesystem/id-safe name, e.g. ``felis_catus``."""
    return re.sub(r"[^a-z0-9]+", "_", binomial.lower()).strip("_")


class SpeciesProfile(BaseModel):
    """Everything GBIF told us about one catalog species."""

    model_config = {"str_strip_whitespace": True}

    binomial: str = Field(..., min_length=1, description="Scientific binomial name")
    taxon_key: int | None = Field(default=None, description="GBIF backbone usageKey")
    iucn_status: IucnCode | None = None
    occurrences: list[dict[str, Any]] = Field(
        default_factory=list, description="GeoJSON point features"
    )

    @field_validator("iucn_status", mode="before")
    @classmethod
    def _unknown_status_is_not_evaluated(cls, value: Any) -> Any:
        if value is None or value in {code.value for code in IucnCode}:
            return value
        return IucnCode.NOT_EVALUATED

    @property
    def slug(self) -> str:
        return species_slug(self.binomial)

    @property
    def features(self) -> list[OccurrenceFeature]:
        return [OccurrenceFeature.from_geojson(o) for o in self.occurrences]
