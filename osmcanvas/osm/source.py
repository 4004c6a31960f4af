"""
Extract source

Obtains raw OSM XML text, either from disk or from the OSM API, including:
- Rate limiting
- Retry logic
- Error handling
"""

import time
import requests
from pathlib import Path
from typing import Optional, Tuple, Union
from loguru import logger

from ..config import PipelineConfig, get_config
from ..exceptions import FetchError
from .cache import ExtractCache

BBox = Tuple[float, float, float, float]


def parse_bbox(bbox_str: str) -> BBox:
    """Parse 'min_lat,min_lon,max_lat,max_lon' into a tuple"""
    parts = bbox_str.split(',')
    if len(parts) != 4:
        raise ValueError("Bbox must have 4 values: min_lat,min_lon,max_lat,max_lon")
    min_lat, min_lon, max_lat, max_lon = (float(p) for p in parts)
    if max_lat <= min_lat or max_lon <= min_lon:
        raise ValueError(f"Bbox must have max > min on both axes, got {bbox_str}")
    return min_lat, min_lon, max_lat, max_lon


class ExtractSource:
    """Reads OSM extracts from files or downloads them from the OSM API"""

    def __init__(self, config: Optional[PipelineConfig] = None, cache_dir: Optional[str] = None):
        self.config = config or get_config()
        self.api_url = self.config.api.osm_api_url
        self.timeout = self.config.api.request_timeout
        self.cache = ExtractCache(cache_dir or self.config.cache_dir)
        self._last_request_time = 0.0
        self._min_request_interval = self.config.api.min_request_interval

    @staticmethod
    def from_file(file_path: Union[str, Path]) -> bytes:
        """Read an extract from disk as raw bytes so the XML declaration picks the encoding"""
        path = Path(file_path)
        logger.info(f"Reading OSM extract from {path}")
        return path.read_bytes()

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def download(self, bbox: BBox) -> str:
        """
        Download an extract for a bounding box, using the cache when possible

        Args:
            bbox: (min_lat, min_lon, max_lat, max_lon)

        Returns:
            Raw OSM XML text

        Raises:
            FetchError: If the download fails after all retries
        """
        cache_path = self.cache.get_cache_path(bbox)
        if cache_path:
            cached = self.cache.load(cache_path)
            if cached:
                return cached

        min_lat, min_lon, max_lat, max_lon = bbox
        params = {"bbox": f"{min_lon},{min_lat},{max_lon},{max_lat}"}
        logger.info(f"Downloading OSM extract for bbox {bbox}")

        text = self._get(params)

        if cache_path:
            self.cache.save(cache_path, text)
        return text

    def _get(self, params: dict) -> str:
        self._rate_limit()

        headers = {"User-Agent": self.config.api.user_agent}
        max_retries = self.config.api.max_retries
        retry_delay = self.config.api.retry_delay

        for attempt in range(max_retries):
            try:
                response = requests.get(
                    self.api_url,
                    params=params,
                    headers=headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response.text
            except requests.exceptions.Timeout:
                wait_time = retry_delay * (attempt + 1)
                logger.warning(f"OSM API timeout (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                if attempt < max_retries - 1:
                    time.sleep(wait_time)
                else:
                    logger.error(f"OSM API failed: timeout after {max_retries} attempts")
                    raise FetchError(f"OSM API timeout after {max_retries} attempts")
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status in [429, 504] and attempt < max_retries - 1:
                    wait_time = retry_delay * (attempt + 1)
                    logger.warning(f"OSM API {status} (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    logger.error(f"OSM API failed: HTTP {status}")
                    raise FetchError(f"OSM API HTTP error {status}") from e
            except requests.exceptions.RequestException as e:
                logger.warning(f"OSM API request failed (attempt {attempt + 1}): {e}")
                if attempt < max_retries - 1:
                    time.sleep(retry_delay * (attempt + 1))
                else:
                    logger.error(f"OSM API failed: request exception after {max_retries} attempts: {e}")
                    raise FetchError(f"OSM API request failed after {max_retries} attempts: {e}") from e

        raise FetchError("OSM API request was not attempted")
