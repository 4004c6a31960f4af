"""
Layer compositing

Produces the back-to-front draw list from categorized ways
"""

from typing import Dict, List
from loguru import logger

from ..models import RenderPath
from ..osm.models import Bounds, Category, OSMNode, OSMWay
from .paths import PathBuilder
from .projection import CanvasProjection
from .styles import CLOSED_CATEGORIES, style_for

# Back to front. OTHER is tracked but never drawn.
DRAW_ORDER = (Category.WATER, Category.PARK, Category.BUILDING, Category.HIGHWAY)


class LayerCompositor:
    """Composites categorized ways into an ordered list of styled paths"""

    def __init__(self, projection: CanvasProjection):
        self.projection = projection
        self.path_builder = PathBuilder(projection)

    def composite(
        self,
        categorized: Dict[Category, List[OSMWay]],
        nodes: Dict[str, OSMNode]
    ) -> List[RenderPath]:
        """
        Build the draw list

        Args:
            categorized: Ways per category (missing categories are treated as empty)
            nodes: Node index keyed by id

        Returns:
            RenderPaths ordered water, parks, buildings, highways
        """
        paths = []
        for category in DRAW_ORDER:
            drawn = 0
            for way in categorized.get(category, []):
                path = self.path_builder.build(
                    way,
                    nodes,
                    closed=category in CLOSED_CATEGORIES,
                    category=category,
                    style=style_for(category, way),
                )
                if path is not None:
                    paths.append(path)
                    drawn += 1
            logger.debug(f"Layer {category.value}: {drawn} paths")

        logger.info(f"Composited {len(paths)} render paths")
        return paths


def composite(
    categorized: Dict[Category, List[OSMWay]],
    nodes: Dict[str, OSMNode],
    bounds: Bounds,
    canvas_width: float,
    canvas_height: float
) -> List[RenderPath]:
    """Build the draw list for a canvas of the given size"""
    projection = CanvasProjection.from_bounds(bounds, canvas_width, canvas_height)
    return LayerCompositor(projection).composite(categorized, nodes)
