"""
Viewport controller

Owns the pan/zoom transform applied when presenting the canvas:

    screen = offset + canvas * scale

Two states: IDLE and DRAGGING. Pointer events are processed in order;
none of the operations raise.
"""

from enum import Enum
from typing import Optional, Tuple, Union

from loguru import logger

from .config import CanvasConfig, ViewportConfig, get_config
from .models import PixelPoint, ViewportState

Point = Union[PixelPoint, Tuple[float, float]]


class ViewportMode(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class ZoomDirection(str, Enum):
    IN = "in"
    OUT = "out"


def _xy(point: Point) -> Tuple[float, float]:
    if isinstance(point, PixelPoint):
        return point.x, point.y
    x, y = point
    return float(x), float(y)


class ViewportController:
    """
    Pan/zoom state machine for one map view

    Usage:
        viewport = ViewportController(display_size=(390, 640))
        viewport.begin_drag((100, 100))
        viewport.drag_to((140, 90))
        viewport.end_drag()
        viewport.zoom("in")
        state = viewport.get_state()
    """

    def __init__(
        self,
        display_size: Optional[Tuple[float, float]] = None,
        viewport_config: Optional[ViewportConfig] = None,
        canvas_config: Optional[CanvasConfig] = None
    ):
        cfg = get_config()
        self.config = viewport_config or cfg.viewport
        self.canvas = canvas_config or cfg.canvas
        self._display: Optional[Tuple[float, float]] = None
        if display_size is not None:
            self._store_display(*display_size)

        self.mode = ViewportMode.IDLE
        self._drag_anchor = (0.0, 0.0)
        self._state = ViewportState()
        self.reset()

    # ------------------------------------------------------------
    # Display measurement
    # ------------------------------------------------------------

    def _store_display(self, width: float, height: float) -> bool:
        if width and height and width > 0 and height > 0:
            self._display = (float(width), float(height))
            return True
        return False

    @property
    def display_size(self) -> Tuple[float, float]:
        """Measured display size, or the configured approximation before measurement"""
        if self._display is not None:
            return self._display
        return self.config.fallback_display_width, self.config.fallback_display_height

    @property
    def display_center(self) -> Tuple[float, float]:
        width, height = self.display_size
        return width / 2, height / 2

    def set_display_size(self, width: float, height: float):
        """
        Record the measured display size

        An untouched initial view is re-centered for the new size; a view
        the user has already moved is left alone.
        """
        if not self._store_display(width, height):
            logger.debug(f"Ignoring unmeasured display size {width}x{height}")
            return
        if self._at_initial_view:
            self.reset()

    # ------------------------------------------------------------
    # State
    # ------------------------------------------------------------

    def reset(self):
        """Return to the initial view: canvas midpoint centered at the initial scale"""
        scale = self.config.initial_scale
        center_x, center_y = self.display_center
        self._state = ViewportState(
            offset_x=center_x - (self.canvas.width / 2) * scale,
            offset_y=center_y - (self.canvas.height / 2) * scale,
            scale=scale,
        )
        self.mode = ViewportMode.IDLE
        self._at_initial_view = True

    def get_state(self) -> ViewportState:
        return self._state.model_copy()

    def _set(self, offset_x: float, offset_y: float, scale: float):
        self._state = ViewportState(offset_x=offset_x, offset_y=offset_y, scale=scale)
        self._at_initial_view = False

    @property
    def is_dragging(self) -> bool:
        return self.mode == ViewportMode.DRAGGING

    # ------------------------------------------------------------
    # Panning
    # ------------------------------------------------------------

    def begin_drag(self, pointer: Point):
        x, y = _xy(pointer)
        self._drag_anchor = (x - self._state.offset_x, y - self._state.offset_y)
        self.mode = ViewportMode.DRAGGING

    def drag_to(self, pointer: Point):
        """Translate the view with the pointer; ignored unless dragging"""
        if not self.is_dragging:
            return
        x, y = _xy(pointer)
        anchor_x, anchor_y = self._drag_anchor
        self._set(x - anchor_x, y - anchor_y, self._state.scale)

    def end_drag(self):
        self.mode = ViewportMode.IDLE

    # ------------------------------------------------------------
    # Zooming
    # ------------------------------------------------------------

    def zoom(
        self,
        direction: Union[ZoomDirection, str],
        factor: Optional[float] = None,
        min_scale: Optional[float] = None,
        max_scale: Optional[float] = None
    ) -> float:
        """
        Zoom in or out about the display center

        The canvas point under the display center stays under it after the
        scale change. Anything other than "in" zooms out.

        Args:
            direction: "in" or "out"
            factor: Multiplier per step (default from config, also used when not positive)
            min_scale: Lower scale bound (default from config)
            max_scale: Upper scale bound (default from config)

        Returns:
            The new scale
        """
        # Non-positive factors are ignored in favour of the configured step
        factor = factor if factor is not None and factor > 0 else self.config.zoom_factor
        min_scale = min_scale if min_scale is not None else self.config.min_scale
        max_scale = max_scale if max_scale is not None else self.config.max_scale

        state = self._state
        target = state.scale * factor if direction == ZoomDirection.IN else state.scale / factor
        new_scale = max(min_scale, min(target, max_scale))

        center_x, center_y = self.display_center
        map_x = (center_x - state.offset_x) / state.scale
        map_y = (center_y - state.offset_y) / state.scale

        self._set(center_x - map_x * new_scale, center_y - map_y * new_scale, new_scale)
        return new_scale

    # ------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------

    def recenter_on_point(
        self,
        point: Point,
        offset_x: Optional[float] = None,
        offset_y: Optional[float] = None,
        scale: Optional[float] = None
    ) -> ViewportState:
        """Jump so that a canvas point shows at a fixed screen position"""
        offset_x = offset_x if offset_x is not None else self.config.recenter_offset_x
        offset_y = offset_y if offset_y is not None else self.config.recenter_offset_y
        scale = scale if scale is not None else self.config.recenter_scale
        scale = max(self.config.min_scale, min(scale, self.config.max_scale))

        x, y = _xy(point)
        self._set(offset_x - x * scale, offset_y - y * scale, scale)
        return self.get_state()

    # ------------------------------------------------------------
    # Coordinate helpers for the presentation layer
    # ------------------------------------------------------------

    def screen_to_canvas(self, point: Point) -> PixelPoint:
        x, y = _xy(point)
        s = self._state
        return PixelPoint(x=(x - s.offset_x) / s.scale, y=(y - s.offset_y) / s.scale)

    def canvas_to_screen(self, point: Point) -> PixelPoint:
        x, y = _xy(point)
        s = self._state
        return PixelPoint(x=s.offset_x + x * s.scale, y=s.offset_y + y * s.scale)

    @property
    def overlay_scale(self) -> float:
        """Scale that keeps fixed-size overlays (markers) constant on screen"""
        return 1 / self._state.scale

    def is_zoomed_out(self, threshold: Optional[float] = None) -> bool:
        threshold = threshold if threshold is not None else self.config.zoomed_out_threshold
        return self._state.scale <= threshold

    def css_transform(self) -> str:
        s = self._state
        return f"translate({s.offset_x}px, {s.offset_y}px) scale({s.scale})"
