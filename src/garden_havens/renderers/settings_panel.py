"""Settings panel: card visibility toggles and the Wikimedia username."""

from __future__ import annotations

from typing import TYPE_CHECKING

from garden_havens.i18n import DEFAULT_LOCALE, messages_for
from garden_havens.renderers import render_template

if TYPE_CHECKING:
    from garden_havens.preferences import Preferences

# (storage key, field name) in display order
VISIBILITY_TOGGLES: tuple[tuple[str, str], ...] = (
    ("showTaxonImage", "show_taxon_image"),
    ("showTaxonRange", "show_taxon_range"),
    ("showConservationStatus", "show_conservation_status"),
)


def build_settings_panel_html(preferences: Preferences, locale: str = DEFAULT_LOCALE) -> str:
    t = messages_for(locale)
    toggles = [
        {"key": key, "label": t[key], "checked": getattr(preferences, field)}
        for key, field in VISIBILITY_TOGGLES
    ]
    return render_template(
        "settings_panel.html.j2",
        toggles=toggles,
        username=preferences.wikimedia_username,
        t=t,
    )
