"""
Pydantic models for render output and viewport state
Consumed by the presentation layer as plain JSON
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from .osm.models import Category


# ============================================================
# Canvas Types
# ============================================================

class PixelPoint(BaseModel):
    x: float
    y: float


class PathStyle(BaseModel):
    fill: str = "none"
    stroke: str
    stroke_width: float
    opacity: float = 1.0
    line_cap: Optional[str] = None  # "round" for highways
    line_join: Optional[str] = None


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class RenderPath(BaseModel):
    way_id: str
    category: Category
    points: List[PixelPoint]
    closed: bool = False
    style: PathStyle

    def to_path_data(self) -> str:
        """SVG path data: M x y L x y ... (Z when closed)"""
        if not self.points:
            return ""
        first, rest = self.points[0], self.points[1:]
        parts = [f"M {_fmt(first.x)} {_fmt(first.y)}"]
        parts.extend(f"L {_fmt(p.x)} {_fmt(p.y)}" for p in rest)
        if self.closed:
            parts.append("Z")
        return " ".join(parts)


# ============================================================
# Viewport
# ============================================================

class ViewportState(BaseModel):
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = Field(default=1.0, gt=0)
