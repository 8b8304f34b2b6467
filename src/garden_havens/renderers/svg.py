"""Scene -> SVG markup.

The only place geographic scenes meet markup. Shapes are flattened to a tag
plus ordered attributes here so the template stays a dumb loop.
"""

from __future__ import annotations

from dataclasses import dataclass

from garden_havens.geo.path import format_number
from garden_havens.geo.scene import CircleShape, PathShape, RectShape, Scene, Shape, Style
from garden_havens.renderers import render_template


@dataclass(frozen=True)
class SvgElement:
    """One shape ready for the template."""

    tag: str
    attrs: tuple[tuple[str, str], ...]
    title: str | None = None


def _style_attr(css: Style) -> str:
    return "; ".join(f"{name}: {value}" for name, value in css)


def _element(shape: Shape) -> SvgElement:
    attrs: list[tuple[str, str]] = [("class", shape.css_class)]
    title: str | None = None

    if isinstance(shape, PathShape):
        tag = "path"
        # An empty path has nothing visible; leave d off rather than emit d=""
        if shape.d:
            attrs.append(("d", shape.d))
        title = shape.title
    elif isinstance(shape, CircleShape):
        tag = "circle"
        attrs += [
            ("cx", format_number(shape.cx)),
            ("cy", format_number(shape.cy)),
            ("r", format_number(shape.r)),
        ]
        if shape.fill_ref:
            attrs.append(("fill", f"url(#{shape.fill_ref})"))
        title = shape.title
    elif isinstance(shape, RectShape):
        tag = "rect"
        attrs += [
            ("x", format_number(shape.x)),
            ("y", format_number(shape.y)),
            ("width", format_number(shape.width)),
            ("height", format_number(shape.height)),
        ]
    else:
        msg = f"Unsupported shape: {type(shape).__name__}"
        raise TypeError(msg)

    if shape.style:
        attrs.append(("style", _style_attr(shape.style)))
    return SvgElement(tag=tag, attrs=tuple(attrs), title=title)


def render_scene_svg(scene: Scene) -> str:
    """Draw a scene as an ``<svg>`` element, layers back-to-front."""
    layers = [
        (layer.group_class, [_element(shape) for shape in layer.shapes])
        for layer in scene.ordered_layers()
    ]
    return render_template(
        "scene.svg.j2",
        svg_id=scene.svg_id,
        width=format_number(scene.width),
        height=format_number(scene.height),
        view_box=scene.view_box,
        gradients=scene.gradients,
        layers=layers,
    )
