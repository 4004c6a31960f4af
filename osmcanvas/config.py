"""
Configuration settings for osmcanvas
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class CanvasConfig:
    """Fixed pixel canvas the extract is projected onto"""
    width: float = 3000.0
    height: float = 3000.0


@dataclass
class ViewportConfig:
    """Pan/zoom defaults for the interactive map view"""
    initial_scale: float = 0.5

    # Zoom constraints
    zoom_factor: float = 1.5
    min_scale: float = 0.2
    max_scale: float = 3.0

    # Approximate display used before the real one has been measured
    # (typical mobile map area)
    fallback_display_width: float = 400.0
    fallback_display_height: float = 600.0

    # Where a selected point lands on screen after recentering
    recenter_offset_x: float = 200.0
    recenter_offset_y: float = 400.0
    recenter_scale: float = 1.0

    # At or below this scale overlays switch to their compact form
    zoomed_out_threshold: float = 0.7


@dataclass
class APIConfig:
    """API endpoints and configuration"""
    # OpenStreetMap editing API (map call returns a bounded XML extract)
    osm_api_url: str = "https://api.openstreetmap.org/api/0.6/map"

    # Request settings
    request_timeout: int = 60
    max_retries: int = 3
    retry_delay: float = 5.0
    min_request_interval: float = 2.0

    # User agent for API requests
    user_agent: str = "osmcanvas/0.1"


@dataclass
class PipelineConfig:
    """Pipeline configuration"""
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    viewport: ViewportConfig = field(default_factory=ViewportConfig)
    api: APIConfig = field(default_factory=APIConfig)

    # Downloaded extracts are cached here when set
    cache_dir: Optional[str] = None


# Global config instance
config = PipelineConfig()


def get_config() -> PipelineConfig:
    """Get global configuration"""
    return config


def validate_config(config: PipelineConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    # Canvas must have a positive area
    if config.canvas is None:
        errors.append("canvas configuration is required but not set")
    else:
        if config.canvas.width <= 0:
            errors.append(f"canvas.width must be positive, got {config.canvas.width}")
        if config.canvas.height <= 0:
            errors.append(f"canvas.height must be positive, got {config.canvas.height}")

    # Viewport zoom constraints
    if config.viewport is None:
        errors.append("viewport configuration is required but not set")
    else:
        vp = config.viewport
        if vp.min_scale <= 0:
            errors.append(f"viewport.min_scale must be positive, got {vp.min_scale}")
        if vp.max_scale < vp.min_scale:
            errors.append(f"viewport.max_scale ({vp.max_scale}) must be >= min_scale ({vp.min_scale})")
        elif not vp.min_scale <= vp.initial_scale <= vp.max_scale:
            errors.append(
                f"viewport.initial_scale must be within [{vp.min_scale}, {vp.max_scale}], got {vp.initial_scale}"
            )
        if vp.zoom_factor <= 1:
            errors.append(f"viewport.zoom_factor must be greater than 1, got {vp.zoom_factor}")
        if vp.fallback_display_width <= 0 or vp.fallback_display_height <= 0:
            errors.append("viewport fallback display size must be positive")

    # API config
    if config.api is None:
        errors.append("api configuration is required but not set")
    else:
        if not config.api.osm_api_url:
            errors.append("api.osm_api_url is required but not set")
        if config.api.max_retries < 1:
            errors.append(f"api.max_retries must be at least 1, got {config.api.max_retries}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
