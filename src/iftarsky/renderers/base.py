"""Renderer interface and lookup by output format."""

from typing import Protocol

from iftarsky.models import SceneDescription
from iftarsky.renderers.fonts import FontCache
from iftarsky.renderers.static import PngRenderer
from iftarsky.renderers.svg import SvgRenderer


class Renderer(Protocol):
    media_type: str
    extension: str

    def render(self, scene: SceneDescription) -> bytes: ...


FORMATS = ("svg", "png")


def get_renderer(fmt: str, font_cache: FontCache | None = None) -> Renderer:
    """Return the renderer for ``fmt`` ("svg" or "png").

    Raises:
        ValueError: On an unknown format.
    """
    if fmt == "svg":
        return SvgRenderer()
    if fmt == "png":
        return PngRenderer(font_cache=font_cache)
    raise ValueError(f"Unknown format: {fmt!r} (choose from {', '.join(FORMATS)})")
