"""SVG wallpaper renderer.

Produces a standalone SVG document in canvas pixel space
(viewBox="0 0 width height"). Every node of the SceneDescription maps to one
SVG element; groups become <g> with opacity.
"""

from __future__ import annotations

import html

from iftarsky.geometry import arc_path_d
from iftarsky.models import (
    ArcNode,
    CircleNode,
    GroupNode,
    RectNode,
    SceneDescription,
    SceneNode,
    TextNode,
)

_FONT_STACK = "Inter, Helvetica, Arial, sans-serif"
_GRADIENT_ID = "sky"


def _paint(attr: str, color: str | None, opacity: float) -> str:
    if color is None:
        return f' {attr}="none"'
    out = f' {attr}="{color}"'
    if opacity < 1:
        out += f' {attr}-opacity="{opacity:.3f}"'
    return out


def _rect_svg(node: RectNode, gradient_ids: dict[tuple[str, str, str], str]) -> str:
    if node.gradient is not None:
        fill = f' fill="url(#{gradient_ids[node.gradient]})"'
    else:
        fill = _paint("fill", node.fill, node.fill_opacity)
    stroke = ""
    if node.stroke is not None and node.stroke_width > 0:
        stroke = _paint("stroke", node.stroke, node.stroke_opacity)
        stroke += f' stroke-width="{node.stroke_width:.2f}"'
    radius = ""
    if node.corner_radius > 0:
        radius = f' rx="{node.corner_radius:.2f}" ry="{node.corner_radius:.2f}"'
    return (
        f'<rect x="{node.x:.2f}" y="{node.y:.2f}"'
        f' width="{node.width:.2f}" height="{node.height:.2f}"'
        f"{radius}{fill}{stroke}/>"
    )


def _circle_svg(node: CircleNode) -> str:
    stroke = ""
    if node.stroke is not None and node.stroke_width > 0:
        stroke = _paint("stroke", node.stroke, node.stroke_opacity)
        stroke += f' stroke-width="{node.stroke_width:.2f}"'
    return (
        f'<circle cx="{node.cx:.2f}" cy="{node.cy:.2f}" r="{node.r:.2f}"'
        f'{_paint("fill", node.fill, node.fill_opacity)}{stroke}/>'
    )


def _arc_svg(node: ArcNode) -> str:
    d = arc_path_d(node.arc)
    if not d:
        return ""
    return (
        f'<path d="{d}" fill="none"'
        f'{_paint("stroke", node.stroke, node.stroke_opacity)}'
        f' stroke-width="{node.stroke_width:.2f}" stroke-linecap="round"/>'
    )


def _text_svg(node: TextNode) -> str:
    spacing = ""
    if node.letter_spacing:
        spacing = f' letter-spacing="{node.letter_spacing:g}"'
    return (
        f'<text x="{node.x:.2f}" y="{node.y:.2f}" text-anchor="{node.anchor}"'
        f' font-size="{node.size:.2f}" font-weight="{node.weight}"'
        f'{_paint("fill", node.color, node.opacity)}{spacing}>'
        f"{html.escape(node.text)}</text>"
    )


def _node_svg(
    node: SceneNode, gradient_ids: dict[tuple[str, str, str], str], depth: int
) -> list[str]:
    pad = "  " * depth
    if isinstance(node, GroupNode):
        attrs = ""
        if node.name:
            attrs += f' id="{html.escape(node.name)}"'
        if node.opacity < 1:
            attrs += f' opacity="{node.opacity:.3f}"'
        parts = [f"{pad}<g{attrs}>"]
        for child in node.children:
            parts.extend(_node_svg(child, gradient_ids, depth + 1))
        parts.append(f"{pad}</g>")
        return parts
    if isinstance(node, RectNode):
        return [pad + _rect_svg(node, gradient_ids)]
    if isinstance(node, CircleNode):
        return [pad + _circle_svg(node)]
    if isinstance(node, ArcNode):
        markup = _arc_svg(node)
        return [pad + markup] if markup else []
    if isinstance(node, TextNode):
        return [pad + _text_svg(node)]
    raise TypeError(f"Unsupported scene node: {type(node).__name__}")


def _collect_gradients(node: SceneNode, found: list[tuple[str, str, str]]) -> None:
    if isinstance(node, GroupNode):
        for child in node.children:
            _collect_gradients(child, found)
    elif isinstance(node, RectNode) and node.gradient is not None:
        if node.gradient not in found:
            found.append(node.gradient)


def render_svg_text(scene: SceneDescription) -> str:
    """Return the scene as an SVG document string.

    Vertical gradients are emitted once each under <defs> and referenced by
    id, so repeated stops share one definition.

    Args:
        scene: Fully computed wallpaper scene.

    Returns:
        SVG markup sized to the scene canvas.
    """
    gradients: list[tuple[str, str, str]] = []
    _collect_gradients(scene.root, gradients)
    gradient_ids = {
        stops: _GRADIENT_ID if i == 0 else f"{_GRADIENT_ID}{i}"
        for i, stops in enumerate(gradients)
    }
    defs = "\n    ".join(
        f'<linearGradient id="{gid}" x1="0" y1="0" x2="0" y2="1">'
        f'<stop offset="0%" stop-color="{top}"/>'
        f'<stop offset="50%" stop-color="{mid}"/>'
        f'<stop offset="100%" stop-color="{bottom}"/>'
        f"</linearGradient>"
        for (top, mid, bottom), gid in gradient_ids.items()
    )
    body = "\n".join(_node_svg(scene.root, gradient_ids, 1))

    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{scene.width}" height="{scene.height}"
     viewBox="0 0 {scene.width} {scene.height}" font-family="{_FONT_STACK}">
  <defs>
    {defs}
  </defs>
{body}
</svg>
"""


def render_svg(scene: SceneDescription) -> bytes:
    """SVG document as UTF-8 bytes."""
    return render_svg_text(scene).encode("utf-8")


class SvgRenderer:
    media_type = "image/svg+xml"
    extension = "svg"

    def render(self, scene: SceneDescription) -> bytes:
        return render_svg(scene)
