"""Matplotlib static PNG renderer."""

import io
import math

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import to_rgb, to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import Arc, Circle, FancyBboxPatch, Rectangle

from iftarsky.models import (
    ArcNode,
    CircleNode,
    GroupNode,
    RectNode,
    SceneDescription,
    SceneNode,
    TextNode,
)
from iftarsky.renderers.fonts import FontCache

_DPI = 100
_GRADIENT_STEPS = 256
_ANCHORS = {"start": "left", "middle": "center", "end": "right"}


def _vertical_gradient(stops: tuple[str, str, str]) -> np.ndarray:
    """(steps, 1, 3) RGB image blending top -> mid -> bottom."""
    t = np.linspace(0.0, 1.0, _GRADIENT_STEPS)
    colors = np.array([to_rgb(c) for c in stops])
    channels = [np.interp(t, [0.0, 0.5, 1.0], colors[:, i]) for i in range(3)]
    return np.stack(channels, axis=-1)[:, np.newaxis, :]


def _rgba(color: str | None, opacity: float) -> tuple[float, float, float, float] | str:
    if color is None:
        return "none"
    return to_rgba(color, opacity)


class _Painter:
    """Walks a scene tree and adds one matplotlib artist per node."""

    def __init__(self, ax, dpi: int, fonts: FontCache) -> None:
        self.ax = ax
        self.pt = 72 / dpi  # canvas pixels -> points
        self.fonts = fonts
        self.z = 0

    def _next_z(self) -> int:
        self.z += 1
        return self.z

    def draw(self, node: SceneNode, alpha: float = 1.0) -> None:
        if isinstance(node, GroupNode):
            for child in node.children:
                self.draw(child, alpha * node.opacity)
        elif isinstance(node, RectNode):
            self._rect(node, alpha)
        elif isinstance(node, CircleNode):
            self._circle(node, alpha)
        elif isinstance(node, ArcNode):
            self._arc(node, alpha)
        elif isinstance(node, TextNode):
            self._text(node, alpha)
        else:
            raise TypeError(f"Unsupported scene node: {type(node).__name__}")

    def _rect(self, node: RectNode, alpha: float) -> None:
        z = self._next_z()
        if node.gradient is not None:
            self.ax.imshow(
                _vertical_gradient(node.gradient),
                extent=(node.x, node.x + node.width, node.y + node.height, node.y),
                aspect="auto",
                interpolation="bilinear",
                alpha=alpha,
                zorder=z,
            )
            return
        style = dict(
            facecolor=_rgba(node.fill, node.fill_opacity * alpha),
            edgecolor=_rgba(node.stroke, node.stroke_opacity * alpha),
            linewidth=node.stroke_width * self.pt if node.stroke else 0,
            zorder=z,
        )
        if node.corner_radius > 0:
            patch = FancyBboxPatch(
                (node.x, node.y),
                node.width,
                node.height,
                boxstyle=f"round,pad=0,rounding_size={node.corner_radius}",
                **style,
            )
        else:
            patch = Rectangle((node.x, node.y), node.width, node.height, **style)
        self.ax.add_patch(patch)

    def _circle(self, node: CircleNode, alpha: float) -> None:
        self.ax.add_patch(
            Circle(
                (node.cx, node.cy),
                node.r,
                facecolor=_rgba(node.fill, node.fill_opacity * alpha),
                edgecolor=_rgba(node.stroke, node.stroke_opacity * alpha),
                linewidth=node.stroke_width * self.pt if node.stroke else 0,
                zorder=self._next_z(),
            )
        )

    def _arc(self, node: ArcNode, alpha: float) -> None:
        arc = node.arc
        if arc.empty:
            return
        # The y axis is inverted, so increasing data angle is clockwise on screen
        patch = Arc(
            (arc.cx, arc.cy),
            2 * arc.r,
            2 * arc.r,
            theta1=math.degrees(arc.start_angle),
            theta2=math.degrees(arc.end_angle),
            edgecolor=_rgba(node.stroke, node.stroke_opacity * alpha),
            linewidth=node.stroke_width * self.pt,
            capstyle="round",
            zorder=self._next_z(),
        )
        self.ax.add_patch(patch)

    def _text(self, node: TextNode, alpha: float) -> None:
        font = self.fonts.get(node.weight)
        font.set_size(node.size * self.pt)
        self.ax.text(
            node.x,
            node.y,
            node.text,
            fontproperties=font,
            color=_rgba(node.color, node.opacity * alpha),
            ha=_ANCHORS.get(node.anchor, "center"),
            va="baseline",
            zorder=self._next_z(),
        )


def render_static_wallpaper(
    scene: SceneDescription, font_cache: FontCache | None = None, dpi: int = _DPI
) -> Figure:
    """Render a SceneDescription as a matplotlib Figure sized to the canvas.

    Args:
        scene: Fully computed wallpaper scene.
        font_cache: Shared font cache; a private one is used if None.
        dpi: Figure resolution. The output is always canvas-sized in pixels.

    Returns:
        matplotlib Figure object.
    """
    fonts = font_cache if font_cache is not None else FontCache()
    fig = Figure(figsize=(scene.width / dpi, scene.height / dpi), dpi=dpi)
    FigureCanvasAgg(fig)
    ax = fig.add_axes((0, 0, 1, 1))
    _Painter(ax, dpi, fonts).draw(scene.root)

    # imshow autoscales; pin the canvas afterwards
    ax.set_xlim(0, scene.width)
    ax.set_ylim(scene.height, 0)
    ax.axis("off")
    return fig


def render_png(
    scene: SceneDescription, font_cache: FontCache | None = None, dpi: int = _DPI
) -> bytes:
    """PNG bytes of the rendered scene."""
    fig = render_static_wallpaper(scene, font_cache, dpi)
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi)
    return buf.getvalue()


class PngRenderer:
    media_type = "image/png"
    extension = "png"

    def __init__(self, font_cache: FontCache | None = None, dpi: int = _DPI) -> None:
        self.font_cache = font_cache if font_cache is not None else FontCache()
        self.dpi = dpi

    def render(self, scene: SceneDescription) -> bytes:
        return render_png(scene, self.font_cache, self.dpi)
