"""
OpenStreetMap ingestion module

Components:
- Models: Data structures (OSMNode, OSMWay, Bounds, Category)
- Parser: OSM XML parsing
- Categorizer: Tag rule table assigning one category per way
- Source: Reading extracts from disk or the OSM API
- Cache: Caching of downloaded extracts
"""

from .models import Bounds, Category, OSMExtract, OSMNode, OSMWay
from .parser import OSMXmlParser, parse
from .categorizer import categorize, categorize_way, category_counts
from .source import ExtractSource, parse_bbox

__all__ = [
    "Bounds",
    "Category",
    "OSMExtract",
    "OSMNode",
    "OSMWay",
    "OSMXmlParser",
    "parse",
    "categorize",
    "categorize_way",
    "category_counts",
    "ExtractSource",
    "parse_bbox",
]
