"""One species card: globe, range map and conservation badge."""

from __future__ import annotations

from typing import TYPE_CHECKING

from garden_havens.geo.globe import create_globe
from garden_havens.geo.models import GeoCoordinate, spherical_centroid
from garden_havens.geo.range_map import create_range_map
from garden_havens.geo.surface import Container
from garden_havens.i18n import DEFAULT_LOCALE, messages_for
from garden_havens.reference.iucn import category_info
from garden_havens.renderers import render_template
from garden_havens.renderers.svg import render_scene_svg

if TYPE_CHECKING:
    from garden_havens.geo.topology import WorldBoundaries
    from garden_havens.preferences import Preferences
    from garden_havens.schemas import SpeciesProfile

GBIF_SPECIES_URL = "https://www.gbif.org/species/{key}"


def globe_center(profile: SpeciesProfile) -> GeoCoordinate:
    """Where the globe faces: the mean occurrence direction, else (0, 0)."""
    coords = [f.coordinate for f in profile.features if f.coordinate is not None]
    return spherical_centroid(coords) or GeoCoordinate(lon=0.0, lat=0.0)


def build_species_card_html(
    profile: SpeciesProfile,
    preferences: Preferences,
    boundaries: WorldBoundaries,
    *,
    locale: str = DEFAULT_LOCALE,
    globe_diameter: float = 200,
    range_map_width: float = 400,
) -> str:
    """Render a card, showing only the sections the preferences enable."""
    container = Container(selector=f"#card-{profile.slug}")

    globe_svg = ""
    if preferences.show_taxon_image:
        center = globe_center(profile)
        globe = create_globe(
            container,
            globe_diameter,
            profile.binomial,
            center.lat,
            center.lon,
            boundaries=boundaries,
        )
        globe_svg = render_scene_svg(globe.scene)

    range_svg = ""
    if preferences.show_taxon_range:
        range_map = create_range_map(
            container,
            range_map_width,
            profile.binomial,
            profile.occurrences,
            boundaries=boundaries,
        )
        range_svg = render_scene_svg(range_map.scene)

    status = None
    if preferences.show_conservation_status and profile.iucn_status is not None:
        status = category_info(profile.iucn_status)

    return render_template(
        "species_card.html.j2",
        profile=profile,
        card_id=f"card-{profile.slug}",
        gbif_url=GBIF_SPECIES_URL.format(key=profile.taxon_key) if profile.taxon_key else None,
        occurrence_count=len(profile.occurrences),
        globe_svg=globe_svg,
        range_svg=range_svg,
        status=status,
        t=messages_for(locale),
    )
