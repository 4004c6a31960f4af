"""
OSM data models

Data classes for representing ingested OSM nodes, ways and bounds
"""

import math
from enum import Enum
from typing import List, Dict, Tuple
from dataclasses import dataclass, field

from ..exceptions import ParseError


class Category(str, Enum):
    """Rendering class a way is sorted into"""
    WATER = "water"
    PARK = "park"
    BUILDING = "building"
    HIGHWAY = "highway"
    OTHER = "other"


@dataclass(frozen=True)
class OSMNode:
    """Represents an OSM node (point)"""
    id: str
    lat: float
    lon: float
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass
class OSMWay:
    """Represents an OSM way (line or polygon outline)"""
    id: str
    node_refs: List[str]
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Bounds:
    """Geographic extent covered by an extract"""
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    def __post_init__(self):
        # Zero or infinite ranges break the projection scale
        finite = all(math.isfinite(v) for v in (self.min_lat, self.min_lon, self.max_lat, self.max_lon))
        if not finite or not self.max_lat > self.min_lat or not self.max_lon > self.min_lon:
            raise ParseError(
                f"degenerate bounds: lat {self.min_lat}..{self.max_lat}, "
                f"lon {self.min_lon}..{self.max_lon}"
            )

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_range(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def center(self) -> Tuple[float, float]:
        """Midpoint as (lat, lon)"""
        return (self.min_lat + self.max_lat) / 2, (self.min_lon + self.max_lon) / 2


@dataclass
class OSMExtract:
    """Everything ingested from one OSM document"""
    nodes: Dict[str, OSMNode]
    ways: List[OSMWay]
    bounds: Bounds
