"""Interactive orthographic globe centred on a location.

The globe is rebuilt from its projection on every change: dragging rotates
the sphere, a double click snaps back to the starting view, and the location
marker disappears whenever it rotates onto the far hemisphere.

Drag handling is a two-state machine::

    Idle --pointer_down--> Dragging(start_rotation, start_position)
    Dragging --pointer_move--> Dragging   (rotation recomputed from start)
    Dragging --pointer_up--> Idle

The rotation for a move is always derived from the drag's starting rotation
and position, never from the previous move, so it cannot drift.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from garden_havens.geo.graticule import graticule
from garden_havens.geo.models import GeoCoordinate, geo_distance
from garden_havens.geo.path import GeoPath
from garden_havens.geo.projection import HORIZON_EPSILON, OrthographicProjection, Position, Rotation
from garden_havens.geo.scene import (
    CircleShape,
    GradientStop,
    Layer,
    LayerKind,
    LinearGradient,
    PathShape,
    Scene,
    slugify_title,
    style,
)
from garden_havens.geo.surface import Container, RenderSurface
from garden_havens.geo.topology import WorldBoundaries

DRAG_SENSITIVITY = 0.5
GRATICULE_STEP = (20.0, 20.0)
WATER_STROKE_WIDTH = 1.0
MARKER_RADIUS = 3.0

WATER_STYLE = style(fill="#C6ECFF", stroke="#656565", stroke_width=WATER_STROKE_WIDTH)
LAND_STYLE = style(fill="#FDFBEA", stroke="none")
BOUNDARY_STYLE = style(fill="none", stroke="#656565", stroke_width=0.3)
COAST_STYLE = style(fill="none", stroke="#0978AB", stroke_width=0.3)
GRATICULE_STYLE = style(fill="none", stroke="#777", stroke_width=0.3, stroke_opacity=0.5)
SHADOW_STYLE = style(pointer_events="none")
MARKER_STYLE = style(fill="#B10000", pointer_events="none")

# Layer z-order, back to front
_Z = {
    LayerKind.WATER: 0,
    LayerKind.LAND: 1,
    LayerKind.BOUNDARIES: 2,
    LayerKind.COASTLINES: 3,
    LayerKind.GRATICULE: 4,
    LayerKind.SHADOW: 5,
    LayerKind.MARKER: 6,
}


# =============================================================================
# Drag state machine
# =============================================================================


@dataclass(frozen=True)
class Idle:
    """No pointer is held down."""


@dataclass(frozen=True)
class Dragging:
    """A drag in progress, remembering where it began."""

    start_rotation: Rotation
    start_position: Position


DragState = Idle | Dragging


def rotation_from_drag(
    start_rotation: Rotation,
    start_position: Position,
    current_position: Position,
    sensitivity: float = DRAG_SENSITIVITY,
) -> Rotation:
    """Rotation after dragging from ``start_position`` to ``current_position``.

    Horizontal movement turns longitude; vertical movement tilts latitude with
    the sign inverted, since dragging down brings the near hemisphere up.
    """
    dx = current_position[0] - start_position[0]
    dy = current_position[1] - start_position[1]
    return (
        start_rotation[0] + dx * sensitivity,
        start_rotation[1] - dy * sensitivity,
        0.0,
    )


# =============================================================================
# Globe
# =============================================================================


@dataclass
class GlobeHandle:
    """A mounted globe: its projection, surface, and interaction state."""

    surface: RenderSurface
    projection: OrthographicProjection
    path: GeoPath
    boundaries: WorldBoundaries
    location: GeoCoordinate
    initial_rotation: Rotation
    gradient_id: str
    drag: DragState = field(default_factory=Idle)

    @property
    def rotation(self) -> Rotation:
        return self.projection.rotation

    @property
    def scene(self) -> Scene:
        assert self.surface.scene is not None
        return self.surface.scene

    # -- interaction ----------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> None:
        self.drag = Dragging(start_rotation=self.projection.rotation, start_position=(x, y))

    def pointer_move(self, x: float, y: float) -> None:
        state = self.drag
        if not isinstance(state, Dragging):
            return
        self.projection.rotation = rotation_from_drag(
            state.start_rotation, state.start_position, (x, y)
        )
        self.redraw()

    def pointer_up(self) -> None:
        self.drag = Idle()

    def double_click(self) -> None:
        """Reset to the initial view."""
        self.projection.rotation = self.initial_rotation
        self.redraw()

    # -- drawing --------------------------------------------------------------

    def marker_visible(self) -> bool:
        """Whether the location lies on the hemisphere facing the viewer.

        A point exactly 90 degrees from the view centre counts as visible.
        """
        angle = geo_distance(self.location.as_tuple(), self.projection.view_center())
        return angle <= math.pi / 2 + HORIZON_EPSILON

    def redraw(self) -> None:
        """Re-project every geographic layer from the current rotation."""
        self.surface.present(self._build_scene())

    def _marker_layer(self) -> Layer:
        shapes: tuple[CircleShape, ...] = ()
        if self.marker_visible():
            coords = self.projection(self.location.as_tuple())
            if coords is not None:
                shapes = (
                    CircleShape(
                        cx=coords[0],
                        cy=coords[1],
                        r=MARKER_RADIUS,
                        css_class="location-marker",
                        style=MARKER_STYLE,
                    ),
                )
        return Layer(LayerKind.MARKER, _Z[LayerKind.MARKER], shapes)

    def _build_scene(self) -> Scene:
        width = self.surface.width
        height = self.surface.height
        cx, cy = width / 2, height / 2
        path = self.path

        water = CircleShape(
            cx=cx,
            cy=cy,
            r=self.projection.scale,
            css_class="water",
            style=WATER_STYLE,
        )
        land = tuple(
            PathShape(d=path(feature), css_class="country", style=LAND_STYLE)
            for feature in self.boundaries.features
        )
        borders = PathShape(
            d=path(self.boundaries.interior_borders), css_class="boundary", style=BOUNDARY_STYLE
        )
        coasts = PathShape(d=path(self.boundaries.coastlines), css_class="coast", style=COAST_STYLE)
        grid = PathShape(
            d=path(graticule(GRATICULE_STEP)), css_class="graticule", style=GRATICULE_STYLE
        )
        shadow = CircleShape(
            cx=cx,
            cy=cy,
            r=width / 2,
            css_class="gradient-shadow",
            style=SHADOW_STYLE,
            fill_ref=self.gradient_id,
        )

        layers = (
            Layer(LayerKind.WATER, _Z[LayerKind.WATER], (water,)),
            Layer(LayerKind.LAND, _Z[LayerKind.LAND], land),
            Layer(LayerKind.BOUNDARIES, _Z[LayerKind.BOUNDARIES], (borders,)),
            Layer(LayerKind.COASTLINES, _Z[LayerKind.COASTLINES], (coasts,)),
            Layer(LayerKind.GRATICULE, _Z[LayerKind.GRATICULE], (grid,)),
            Layer(LayerKind.SHADOW, _Z[LayerKind.SHADOW], (shadow,)),
            self._marker_layer(),
        )
        gradient = LinearGradient(
            id=self.gradient_id,
            stops=(
                GradientStop(offset="50%", color="#FFF", opacity=0.3),
                GradientStop(offset="100%", color="#009", opacity=0.3),
            ),
        )
        return Scene(
            svg_id=self.surface.svg_id,
            width=width,
            height=height,
            layers=layers,
            gradients=(gradient,),
        )


def create_globe(
    container: Container,
    diameter: float,
    title: str,
    center_lat: float,
    center_lon: float,
    *,
    boundaries: WorldBoundaries | None = None,
) -> GlobeHandle:
    """Mount an orthographic globe facing (center_lon, center_lat).

    Args:
        container: Mount point the SVG surface is appended to.
        diameter: Width and height of the globe in pixels.
        title: Used to derive the SVG and gradient ids.
        center_lat: Latitude of the location marker and initial view centre.
        center_lon: Longitude of the location marker and initial view centre.
        boundaries: Country topology; defaults to the configured world atlas.
    """
    if boundaries is None:
        from garden_havens.geo import default_boundaries

        boundaries = default_boundaries()

    slug = slugify_title(title)
    initial_rotation: Rotation = (-center_lon, -center_lat, 0.0)
    projection = OrthographicProjection(
        scale=diameter / 2 - WATER_STROKE_WIDTH / 2,
        translate=(diameter / 2, diameter / 2),
        rotation=initial_rotation,
    )
    surface = container.append(
        RenderSurface(svg_id=f"{slug}-orthographic-globe", width=diameter, height=diameter)
    )
    handle = GlobeHandle(
        surface=surface,
        projection=projection,
        path=GeoPath(projection),
        boundaries=boundaries,
        location=GeoCoordinate.normalized(center_lon, center_lat),
        initial_rotation=initial_rotation,
        gradient_id=f"gradient-{slug}",
    )
    handle.redraw()
    return handle
