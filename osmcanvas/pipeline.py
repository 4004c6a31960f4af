"""
Main pipeline orchestrator

Runs one data load end to end:

  1. Ingest OSM XML (nodes, ways, bounds)
  2. Categorize ways
  3. Derive the canvas projection for the bounds
  4. Build and style paths, back to front

A failed ingest yields an empty scene instead of an exception so the map
still renders. MapSession sequences overlapping loads with a generation
counter: only the most recently requested load is adopted.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from .config import PipelineConfig, get_config
from .exceptions import ParseError
from .models import RenderPath
from .osm.categorizer import categorize, category_counts
from .osm.models import Category, OSMExtract, OSMWay
from .osm.parser import OSMXmlParser
from .osm.source import ExtractSource
from .render.compositor import LayerCompositor
from .render.projection import CanvasProjection


@dataclass(frozen=True)
class MapScene:
    """Immutable result of one data load"""
    generation: int
    canvas_width: float
    canvas_height: float
    extract: Optional[OSMExtract] = None
    categorized: Dict[Category, List[OSMWay]] = field(default_factory=dict)
    paths: List[RenderPath] = field(default_factory=list)
    projection: Optional[CanvasProjection] = None
    error: Optional[str] = None

    @classmethod
    def empty(cls, canvas_width: float, canvas_height: float, generation: int = 0,
              error: Optional[str] = None) -> "MapScene":
        """Fallback render set for a failed or missing load"""
        return cls(generation=generation, canvas_width=canvas_width, canvas_height=canvas_height, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.extract is not None

    def summary(self) -> Dict[str, object]:
        summary = {
            "generation": self.generation,
            "ok": self.ok,
            "paths": len(self.paths),
            "categories": category_counts(self.categorized) if self.categorized else {},
        }
        if self.extract is not None:
            b = self.extract.bounds
            summary["nodes"] = len(self.extract.nodes)
            summary["ways"] = len(self.extract.ways)
            summary["bounds"] = [b.min_lat, b.min_lon, b.max_lat, b.max_lon]
        if self.error:
            summary["error"] = self.error
        return summary


class MapPipeline:
    """
    Pipeline from raw OSM XML to a composited draw list

    Usage:
        pipeline = MapPipeline()
        scene = pipeline.load(xml_text)
        svg = render_svg(scene.paths, scene.canvas_width, scene.canvas_height)
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or get_config()
        self.parser = OSMXmlParser()

    @property
    def canvas_size(self):
        return self.config.canvas.width, self.config.canvas.height

    def load(self, raw_text: Union[str, bytes], generation: int = 0) -> MapScene:
        """
        Run the pipeline on one extract

        Args:
            raw_text: OSM XML content
            generation: Load sequence number recorded on the scene

        Returns:
            MapScene; empty (with error set) if the extract could not be parsed
        """
        width, height = self.canvas_size
        try:
            extract = self.parser.parse(raw_text)
        except ParseError as e:
            logger.error(f"Error loading OSM data: {e}")
            return MapScene.empty(width, height, generation=generation, error=str(e))

        categorized = categorize(extract.ways)
        projection = CanvasProjection.from_bounds(extract.bounds, width, height)
        paths = LayerCompositor(projection).composite(categorized, extract.nodes)

        logger.info(f"Load {generation}: {len(paths)} paths from {len(extract.ways)} ways")
        return MapScene(
            generation=generation,
            canvas_width=width,
            canvas_height=height,
            extract=extract,
            categorized=categorized,
            paths=paths,
            projection=projection,
        )

    def load_file(self, file_path: Union[str, Path], generation: int = 0) -> MapScene:
        return self.load(ExtractSource.from_file(file_path), generation=generation)


class MapSession:
    """
    Holds the current scene and adopts completed loads in request order

    A completion whose generation is older than the latest request is
    dropped, even if it finishes last.
    """

    def __init__(self, pipeline: Optional[MapPipeline] = None):
        self.pipeline = pipeline or MapPipeline()
        self._latest_requested = 0
        width, height = self.pipeline.canvas_size
        self.scene = MapScene.empty(width, height)

    @property
    def latest_requested(self) -> int:
        return self._latest_requested

    def request_load(self) -> int:
        """Start a new load and return its generation"""
        self._latest_requested += 1
        return self._latest_requested

    def complete_load(self, generation: int, raw_text: Union[str, bytes]) -> bool:
        """
        Finish a load started with request_load

        Returns:
            True if the result was adopted as the current scene
        """
        if generation != self._latest_requested:
            logger.warning(f"Discarding stale load {generation} (latest requested: {self._latest_requested})")
            return False

        scene = self.pipeline.load(raw_text, generation=generation)
        # A newer request may have been issued while this one ran
        if generation != self._latest_requested:
            logger.warning(f"Discarding stale load {generation} (latest requested: {self._latest_requested})")
            return False

        self.scene = scene
        return True

    def load(self, raw_text: Union[str, bytes]) -> MapScene:
        """Request and complete a load in one step"""
        generation = self.request_load()
        self.complete_load(generation, raw_text)
        return self.scene
