"""Flat world map with species occurrence points.

Equirectangular at a 2:1 aspect ratio, scaled so 360 degrees of longitude
span exactly the map width. No interaction; the host view calls
``update_occurrences`` when new records arrive and ``redraw`` after a
layout change.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from garden_havens.geo.graticule import graticule
from garden_havens.geo.models import OccurrenceFeature
from garden_havens.geo.path import GeoPath
from garden_havens.geo.projection import EquirectangularProjection
from garden_havens.geo.scene import (
    CircleShape,
    Layer,
    LayerKind,
    PathShape,
    RectShape,
    Scene,
    slugify_title,
    style,
)
from garden_havens.geo.surface import Container, RenderSurface
from garden_havens.geo.topology import WorldBoundaries

GRATICULE_STEP = (30.0, 30.0)
OCCURRENCE_RADIUS = 2.0
# Where an occurrence goes when its coordinate cannot be projected. The mark
# is kept (off-canvas) so the overlay always has one element per record.
OFFSCREEN_POSITION = (-9999.0, -9999.0)

WATER_STYLE = style(fill="#C6ECFF")
LAND_STYLE = style(fill="#FDFBEA", stroke="none")
BOUNDARY_STYLE = style(fill="none", stroke="#656565", stroke_width=0.5)
COAST_STYLE = style(fill="none", stroke="#0978AB", stroke_width=0.5)
GRATICULE_STYLE = style(fill="none", stroke="#777", stroke_width=0.5, stroke_opacity=0.3)
OCCURRENCE_STYLE = style(
    fill="#B10000",
    fill_opacity=0.6,
    stroke="#FFFFFF",
    stroke_width=0.5,
    stroke_opacity=0.8,
)

_Z = {
    LayerKind.WATER: 0,
    LayerKind.LAND: 1,
    LayerKind.BOUNDARIES: 2,
    LayerKind.COASTLINES: 3,
    LayerKind.GRATICULE: 4,
    LayerKind.OCCURRENCES: 5,
}

OccurrenceInput = OccurrenceFeature | Mapping[str, Any]


@dataclass
class RangeMapHandle:
    """A mounted range map and the occurrences it currently shows."""

    surface: RenderSurface
    projection: EquirectangularProjection
    path: GeoPath
    boundaries: WorldBoundaries
    occurrences: tuple[OccurrenceFeature, ...] = ()

    @property
    def scene(self) -> Scene:
        assert self.surface.scene is not None
        return self.surface.scene

    def update_occurrences(self, occurrences: Iterable[OccurrenceInput]) -> None:
        """Replace the overlay; previous marks are discarded entirely."""
        self.occurrences = tuple(OccurrenceFeature.coerce(o) for o in occurrences)
        self.surface.present(self.scene.replace_layer(self._occurrence_layer()))

    def redraw(self) -> None:
        """Re-project boundaries and re-draw the stored occurrences."""
        self.surface.present(self._build_scene())

    def _occurrence_layer(self) -> Layer:
        shapes = []
        for occurrence in self.occurrences:
            coords = None
            if occurrence.coordinate is not None:
                coords = self.projection(occurrence.coordinate.as_tuple())
            cx, cy = coords if coords is not None else OFFSCREEN_POSITION
            shapes.append(
                CircleShape(
                    cx=cx,
                    cy=cy,
                    r=OCCURRENCE_RADIUS,
                    css_class="occurrence-point",
                    style=OCCURRENCE_STYLE,
                    title=occurrence.tooltip,
                )
            )
        return Layer(LayerKind.OCCURRENCES, _Z[LayerKind.OCCURRENCES], tuple(shapes))

    def _build_scene(self) -> Scene:
        width = self.surface.width
        height = self.surface.height
        path = self.path
        layers = (
            Layer(
                LayerKind.WATER,
                _Z[LayerKind.WATER],
                (RectShape(width=width, height=height, css_class="water", style=WATER_STYLE),),
            ),
            Layer(
                LayerKind.LAND,
                _Z[LayerKind.LAND],
                tuple(
                    PathShape(d=path(feature), css_class="country", style=LAND_STYLE)
                    for feature in self.boundaries.features
                ),
            ),
            Layer(
                LayerKind.BOUNDARIES,
                _Z[LayerKind.BOUNDARIES],
                (
                    PathShape(
                        d=path(self.boundaries.interior_borders),
                        css_class="boundary",
                        style=BOUNDARY_STYLE,
                    ),
                ),
            ),
            Layer(
                LayerKind.COASTLINES,
                _Z[LayerKind.COASTLINES],
                (
                    PathShape(
                        d=path(self.boundaries.coastlines), css_class="coast", style=COAST_STYLE
                    ),
                ),
            ),
            Layer(
                LayerKind.GRATICULE,
                _Z[LayerKind.GRATICULE],
                (
                    PathShape(
                        d=path(graticule(GRATICULE_STEP)),
                        css_class="graticule",
                        style=GRATICULE_STYLE,
                    ),
                ),
            ),
            self._occurrence_layer(),
        )
        return Scene(
            svg_id=self.surface.svg_id,
            width=width,
            height=height,
            layers=layers,
            view_box=True,
        )


def create_range_map(
    container: Container,
    width: float,
    title: str,
    occurrences: Iterable[OccurrenceInput] = (),
    *,
    boundaries: WorldBoundaries | None = None,
) -> RangeMapHandle:
    """Mount an equirectangular range map showing ``occurrences``.

    Occurrences may be :class:`OccurrenceFeature` objects or GeoJSON point
    features with ``country``/``year``/``basisOfRecord`` properties.
    """
    if boundaries is None:
        from garden_havens.geo import default_boundaries

        boundaries = default_boundaries()

    height = width / 2
    projection = EquirectangularProjection(
        scale=width / (2 * math.pi),
        translate=(width / 2, height / 2),
    )
    surface = container.append(
        RenderSurface(svg_id=f"{slugify_title(title)}-range-map", width=width, height=height)
    )
    handle = RangeMapHandle(
        surface=surface,
        projection=projection,
        path=GeoPath(projection),
        boundaries=boundaries,
        occurrences=tuple(OccurrenceFeature.coerce(o) for o in occurrences),
    )
    handle.redraw()
    return handle
