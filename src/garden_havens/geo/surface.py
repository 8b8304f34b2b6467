"""Mount points and render surfaces.

A :class:`Container` stands in for the host element a view hands to a
renderer. Each renderer appends exactly one :class:`RenderSurface` to it and
replaces that surface's scene on every redraw.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from garden_havens.geo.scene import Scene


@dataclass
class RenderSurface:
    """The SVG root owned by one renderer, holding its current scene."""

    svg_id: str
    width: float
    height: float
    scene: Scene | None = None
    revision: int = 0

    def present(self, scene: Scene) -> None:
        """Swap in a freshly built scene."""
        self.scene = scene
        self.revision += 1


@dataclass
class Container:
    """Host element identified by a selector; holds mounted surfaces in order."""

    selector: str
    children: list[RenderSurface] = field(default_factory=list)

    def append(self, surface: RenderSurface) -> RenderSurface:
        self.children.append(surface)
        return surface

    def clear(self) -> None:
        """Tear down everything mounted here (the host view's job)."""
        self.children.clear()
