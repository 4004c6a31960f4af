"""
Extract caching

Handles caching of downloaded OSM XML extracts to disk
"""

import os
import hashlib
from typing import Optional, Tuple
from loguru import logger


class ExtractCache:
    """Handles caching of OSM extracts to disk"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = cache_dir

    def get_cache_path(self, bbox: Tuple[float, float, float, float]) -> Optional[str]:
        """Get cache file path for a (min_lat, min_lon, max_lat, max_lon) extract"""
        if not self.cache_dir:
            return None
        cache_key = "_".join(f"{v:.6f}" for v in bbox)
        cache_hash = hashlib.md5(cache_key.encode()).hexdigest()[:8]
        return os.path.join(self.cache_dir, f"extract_{cache_hash}.osm")

    def load(self, cache_path: str) -> Optional[str]:
        """Load extract text from cache if exists"""
        if os.path.exists(cache_path):
            try:
                with open(cache_path, 'r', encoding='utf-8') as f:
                    data = f.read()
                    logger.info(f"Loaded OSM extract from cache: {cache_path}")
                    return data
            except OSError as e:
                logger.warning(f"Failed to load cache {cache_path}: {e}")
        return None

    def save(self, cache_path: str, data: str):
        """Save extract text to cache"""
        if not self.cache_dir:
            return
        try:
            os.makedirs(os.path.dirname(cache_path), exist_ok=True)
            with open(cache_path, 'w', encoding='utf-8') as f:
                f.write(data)
            logger.info(f"Saved OSM extract to cache: {cache_path}")
        except OSError as e:
            logger.warning(f"Failed to save cache {cache_path}: {e}")
