"""
Rendering module

Projection, path building, styling, layer compositing and export
"""

from .projection import CanvasProjection, project
from .paths import PathBuilder, build_path
from .compositor import DRAW_ORDER, LayerCompositor, composite
from .svg import render_svg
from .raster import rasterize

__all__ = [
    "CanvasProjection",
    "project",
    "PathBuilder",
    "build_path",
    "DRAW_ORDER",
    "LayerCompositor",
    "composite",
    "render_svg",
    "rasterize",
]
