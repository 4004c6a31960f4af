"""
Layer styling

Tag-keyed lookup tables for highway styling and fixed styles for area layers
"""

from typing import Dict, Optional

from ..models import PathStyle
from ..osm.models import Category, OSMWay

DEFAULT_KEY = "default"

# Stroke width in canvas pixels by highway tag value
HIGHWAY_WIDTHS: Dict[str, float] = {
    "motorway": 28,
    "trunk": 26,
    "primary": 22,
    "secondary": 18,
    "tertiary": 14,
    "residential": 8,
    "service": 6,
    "footway": 4,
    "path": 3,
    DEFAULT_KEY: 12,
}

HIGHWAY_COLORS: Dict[str, str] = {
    "motorway": "#FDE047",
    "trunk": "#FDE047",
    "primary": "#FDE047",
    "secondary": "#FBBF24",
    "tertiary": "#FBBF24",
    "residential": "#FFFFFF",
    "service": "#F5F5F0",
    "footway": "#E5E7EB",
    "path": "#E5E7EB",
    DEFAULT_KEY: "#94A3B8",
}

HIGHWAY_OPACITIES: Dict[str, float] = {
    "motorway": 0.75,
    "trunk": 0.75,
    DEFAULT_KEY: 1.0,
}

AREA_STYLES: Dict[Category, PathStyle] = {
    Category.WATER: PathStyle(fill="#A7D3F0", stroke="#91B8D1", stroke_width=2, opacity=0.8),
    Category.PARK: PathStyle(fill="#C8E6C9", stroke="#A5D6A7", stroke_width=2),
    Category.BUILDING: PathStyle(fill="#E5E3DF", stroke="#D1CFCB", stroke_width=1),
}

# Categories drawn as closed polygons
CLOSED_CATEGORIES = frozenset(AREA_STYLES)


def _lookup(table: Dict, key: Optional[str]):
    return table.get(key, table[DEFAULT_KEY])


def highway_width(highway_type: Optional[str]) -> float:
    """Get highway stroke width based on highway type"""
    return _lookup(HIGHWAY_WIDTHS, highway_type)


def highway_color(highway_type: Optional[str]) -> str:
    """Get highway stroke color based on highway type"""
    return _lookup(HIGHWAY_COLORS, highway_type)


def highway_style(highway_type: Optional[str]) -> PathStyle:
    return PathStyle(
        fill="none",
        stroke=highway_color(highway_type),
        stroke_width=highway_width(highway_type),
        opacity=_lookup(HIGHWAY_OPACITIES, highway_type),
        line_cap="round",
        line_join="round",
    )


def style_for(category: Category, way: OSMWay) -> Optional[PathStyle]:
    """
    Resolve the style of a way in a given category

    Returns None for categories that are not rendered (OTHER).
    """
    if category == Category.HIGHWAY:
        return highway_style(way.tags.get("highway"))
    style = AREA_STYLES.get(category)
    return style.model_copy() if style is not None else None
