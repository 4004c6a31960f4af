"""
Coordinate projection

Maps WGS84 lat/lon onto the pixel canvas with a uniform, aspect-preserving
scale. Unused margin on the longer axis is split evenly on both sides.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ..models import PixelPoint
from ..osm.models import Bounds


@dataclass(frozen=True)
class CanvasProjection:
    """Scale and centering offset derived once per bounds and canvas size"""
    bounds: Bounds
    canvas_width: float
    canvas_height: float
    scale: float
    offset_x: float
    offset_y: float

    @classmethod
    def from_bounds(cls, bounds: Bounds, canvas_width: float, canvas_height: float) -> "CanvasProjection":
        lat_range = bounds.lat_range
        lon_range = bounds.lon_range

        # Smaller of the two axis scales so the whole extent fits undistorted
        scale = min(canvas_width / lon_range, canvas_height / lat_range)
        scaled_width = lon_range * scale
        scaled_height = lat_range * scale

        return cls(
            bounds=bounds,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
            scale=scale,
            offset_x=(canvas_width - scaled_width) / 2,
            offset_y=(canvas_height - scaled_height) / 2,
        )

    @property
    def scaled_width(self) -> float:
        return self.bounds.lon_range * self.scale

    @property
    def scaled_height(self) -> float:
        return self.bounds.lat_range * self.scale

    def project(self, lat: float, lon: float) -> PixelPoint:
        """Convert lat/lon to canvas pixel coordinates"""
        b = self.bounds
        normalized_lat = (b.max_lat - lat) / b.lat_range  # north is up
        normalized_lon = (lon - b.min_lon) / b.lon_range
        return PixelPoint(
            x=self.offset_x + normalized_lon * self.scaled_width,
            y=self.offset_y + normalized_lat * self.scaled_height,
        )

    def project_many(self, lats: Sequence[float], lons: Sequence[float]) -> np.ndarray:
        """
        Vectorized projection

        Args:
            lats: Latitudes
            lons: Longitudes, same length as lats

        Returns:
            Array of shape (n, 2) holding x, y per point
        """
        b = self.bounds
        lats = np.asarray(lats, dtype=float)
        lons = np.asarray(lons, dtype=float)
        xs = self.offset_x + (lons - b.min_lon) / b.lon_range * self.scaled_width
        ys = self.offset_y + (b.max_lat - lats) / b.lat_range * self.scaled_height
        return np.column_stack((xs, ys))

    def unproject(self, point: PixelPoint) -> Tuple[float, float]:
        """Convert canvas pixel coordinates back to (lat, lon)"""
        b = self.bounds
        normalized_lon = (point.x - self.offset_x) / self.scaled_width
        normalized_lat = (point.y - self.offset_y) / self.scaled_height
        return b.max_lat - normalized_lat * b.lat_range, b.min_lon + normalized_lon * b.lon_range


def project(lat: float, lon: float, bounds: Bounds, canvas_width: float, canvas_height: float) -> PixelPoint:
    """Convert lat/lon to pixel coordinates on a canvas of the given size"""
    return CanvasProjection.from_bounds(bounds, canvas_width, canvas_height).project(lat, lon)
