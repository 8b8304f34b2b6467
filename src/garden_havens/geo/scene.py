"""Declarative scene description consumed by the SVG draw step.

A renderer never touches markup. It builds a :class:`Scene`: an SVG root
size plus layers ordered back-to-front, each holding plain shape records.
Scenes are frozen, so two scenes built from the same state compare equal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import StrEnum

Style = tuple[tuple[str, str], ...]


def style(**properties: str | float) -> Style:
    """Inline CSS as sorted pairs; underscores become hyphens."""
    return tuple(sorted((name.replace("_", "-"), str(value)) for name, value in properties.items()))


def slugify_title(title: str) -> str:
    """Replace whitespace runs with underscores for use in element ids."""
    return re.sub(r"\s+", "_", title)


class LayerKind(StrEnum):
    """What a layer draws; also its CSS group class stem."""

    WATER = "water"
    LAND = "land"
    BOUNDARIES = "boundaries"
    COASTLINES = "coastlines"
    GRATICULE = "graticule"
    SHADOW = "shadow"
    MARKER = "marker"
    OCCURRENCES = "occurrences"


# =============================================================================
# Shapes
# =============================================================================


@dataclass(frozen=True)
class PathShape:
    d: str
    css_class: str
    style: Style = ()
    title: str | None = None


@dataclass(frozen=True)
class CircleShape:
    cx: float
    cy: float
    r: float
    css_class: str
    style: Style = ()
    fill_ref: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class RectShape:
    width: float
    height: float
    css_class: str
    style: Style = ()
    x: float = 0.0
    y: float = 0.0


Shape = PathShape | CircleShape | RectShape


@dataclass(frozen=True)
class GradientStop:
    offset: str
    color: str
    opacity: float


@dataclass(frozen=True)
class LinearGradient:
    id: str
    stops: tuple[GradientStop, ...]
    x1: str = "0%"
    y1: str = "0%"
    x2: str = "100%"
    y2: str = "100%"


# =============================================================================
# Layers and scenes
# =============================================================================


@dataclass(frozen=True)
class Layer:
    kind: LayerKind
    z_order: int
    shapes: tuple[Shape, ...] = ()

    @property
    def group_class(self) -> str:
        return _GROUP_CLASSES[self.kind]


_GROUP_CLASSES = {
    LayerKind.WATER: "water-group",
    LayerKind.LAND: "land-group",
    LayerKind.BOUNDARIES: "boundaries-group",
    LayerKind.COASTLINES: "coastlines-group",
    LayerKind.GRATICULE: "graticule-group",
    LayerKind.SHADOW: "shadow-group",
    LayerKind.MARKER: "marker-group",
    LayerKind.OCCURRENCES: "occurrence-group",
}


@dataclass(frozen=True)
class Scene:
    svg_id: str
    width: float
    height: float
    layers: tuple[Layer, ...]
    gradients: tuple[LinearGradient, ...] = ()
    view_box: bool = False

    def ordered_layers(self) -> tuple[Layer, ...]:
        """Layers back-to-front."""
        return tuple(sorted(self.layers, key=lambda layer: layer.z_order))

    def layer(self, kind: LayerKind) -> Layer:
        for layer in self.layers:
            if layer.kind is kind:
                return layer
        msg = f"Scene {self.svg_id!r} has no {kind.value} layer"
        raise KeyError(msg)

    def replace_layer(self, layer: Layer) -> Scene:
        """Copy of the scene with the layer of the same kind swapped out."""
        layers = tuple(layer if existing.kind is layer.kind else existing for existing in self.layers)
        return replace(self, layers=layers)
