"""
Persisted display preferences.

Which species card sections to show, plus the Wikimedia username, kept in a
small JSON file under the data directory. Keys match the names the settings
panel and the stored file use::

    {"showTaxonImage": true, "showTaxonRange": true,
     "showConservationStatus": false, "wikimedia-username": "Yug"}

Every change is written back immediately. A missing file, a corrupt file, or
a single bad value falls back to the default for just that key.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path  # noqa: TC003
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class Preferences(BaseModel):
    """Card section visibility and Wikimedia identity."""

    model_config = ConfigDict(populate_by_name=True, strict=True, frozen=True)

    show_taxon_image: bool = Field(default=True, alias="showTaxonImage")
    show_taxon_range: bool = Field(default=True, alias="showTaxonRange")
    show_conservation_status: bool = Field(default=True, alias="showConservationStatus")
    wikimedia_username: str = Field(default="", alias="wikimedia-username")

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def _storage_key(field_name: str) -> str:
    alias = Preferences.model_fields[field_name].alias
    return alias or field_name


class PreferencesStore:
    """Load/save :class:`Preferences` from a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read_raw(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError:
            logger.warning("Preferences file %s is not valid JSON, using defaults", self.path)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Preferences file %s is not a JSON object, using defaults", self.path)
            return {}
        return raw

    def load(self) -> Preferences:
        """Stored preferences, each key validated on its own."""
        raw = self._read_raw()
        values: dict[str, Any] = {}
        for name in Preferences.model_fields:
            key = _storage_key(name)
            if key not in raw:
                continue
            try:
                Preferences.model_validate({key: raw[key]})
            except ValidationError:
                logger.warning("Ignoring invalid stored preference %s=%r", key, raw[key])
                continue
            values[key] = raw[key]
        return Preferences.model_validate(values)

    def save(self, preferences: Preferences) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(preferences.to_storage(), f, indent=2, ensure_ascii=False)
        return self.path

    def update(self, **changes: Any) -> Preferences:
        """Apply changes (by field name) and persist them.

        Raises:
            pydantic.ValidationError: If a new value has the wrong type.
        """
        merged = {**self.load().model_dump(), **changes}
        preferences = Preferences.model_validate(merged)
        self.save(preferences)
        logger.info("Saved preferences to %s", self.path)
        return preferences
