"""
Path building

Turns a way's node references into a projected, drawable path
"""

from typing import Dict, Optional
from loguru import logger

from ..models import PathStyle, PixelPoint, RenderPath
from ..osm.models import Bounds, Category, OSMNode, OSMWay
from .projection import CanvasProjection


class PathBuilder:
    """Builds RenderPaths against one projection"""

    def __init__(self, projection: CanvasProjection):
        self.projection = projection

    def build(
        self,
        way: OSMWay,
        nodes: Dict[str, OSMNode],
        closed: bool = False,
        category: Category = Category.OTHER,
        style: Optional[PathStyle] = None
    ) -> Optional[RenderPath]:
        """
        Build the path for a single way

        References to nodes missing from the extract are skipped; the
        remaining points keep their original order.

        Args:
            way: Way to draw
            nodes: Node index keyed by id
            closed: Close the path back to its first point (polygons)
            category: Category recorded on the path
            style: Style recorded on the path

        Returns:
            RenderPath, or None if no reference resolved
        """
        resolved = [nodes[ref] for ref in way.node_refs if ref in nodes]
        missing = len(way.node_refs) - len(resolved)
        if missing:
            logger.debug(f"Way {way.id}: skipped {missing} of {len(way.node_refs)} node refs not in extract")

        if not resolved:
            return None

        coords = self.projection.project_many(
            [n.lat for n in resolved],
            [n.lon for n in resolved]
        )
        points = [PixelPoint(x=float(x), y=float(y)) for x, y in coords]

        # A 1-2 point outline has no area to close
        is_closed = closed and len(points) > 2
        if is_closed:
            points.append(points[0].model_copy())

        return RenderPath(
            way_id=way.id,
            category=category,
            points=points,
            closed=is_closed,
            style=style if style is not None else PathStyle(stroke="#000000", stroke_width=1),
        )


def build_path(
    way: OSMWay,
    nodes: Dict[str, OSMNode],
    bounds: Bounds,
    canvas_width: float,
    canvas_height: float,
    closed: bool = False,
    category: Category = Category.OTHER,
    style: Optional[PathStyle] = None
) -> Optional[RenderPath]:
    """Build a path for one way; see PathBuilder.build"""
    projection = CanvasProjection.from_bounds(bounds, canvas_width, canvas_height)
    return PathBuilder(projection).build(way, nodes, closed=closed, category=category, style=style)
