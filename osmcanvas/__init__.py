"""
osmcanvas

Turns a bounded OpenStreetMap XML extract into a styled, back-to-front draw
list on a fixed pixel canvas, and keeps the pan/zoom transform used to
present it:

- osm: Ingestion (parser), categorization, extract source and cache
- render: Projection, path building, layer compositing, SVG/PNG export
- viewport: Pan/zoom state machine
- pipeline: Load orchestration and stale-load sequencing
"""

from .config import PipelineConfig, get_config, validate_config
from .exceptions import FetchError, OSMCanvasError, ParseError
from .models import PathStyle, PixelPoint, RenderPath, ViewportState
from .pipeline import MapPipeline, MapScene, MapSession
from .viewport import ViewportController, ZoomDirection

__all__ = [
    "PipelineConfig",
    "get_config",
    "validate_config",
    "FetchError",
    "OSMCanvasError",
    "ParseError",
    "PathStyle",
    "PixelPoint",
    "RenderPath",
    "ViewportState",
    "MapPipeline",
    "MapScene",
    "MapSession",
    "ViewportController",
    "ZoomDirection",
]
