"""
Raster export

Draws a draw list onto a Pillow image, optionally through a viewport transform
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageColor, ImageDraw
from loguru import logger

from ..models import RenderPath, ViewportState

DEFAULT_BACKGROUND = "#F2EFE9"


def _rgba(color: str, opacity: float) -> Tuple[int, int, int, int]:
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b, int(round(255 * opacity))


def _to_screen(path: RenderPath, viewport: ViewportState) -> List[Tuple[float, float]]:
    return [
        (viewport.offset_x + p.x * viewport.scale, viewport.offset_y + p.y * viewport.scale)
        for p in path.points
    ]


def draw_paths(image: Image.Image, paths: List[RenderPath], viewport: Optional[ViewportState] = None) -> int:
    """
    Draw paths onto an RGBA image in list order

    Returns:
        Number of paths drawn
    """
    viewport = viewport or ViewportState()
    draw = ImageDraw.Draw(image, "RGBA")
    drawn_count = 0

    for path in paths:
        coords = _to_screen(path, viewport)
        style = path.style
        width = max(1, int(round(style.stroke_width * viewport.scale)))
        stroke = _rgba(style.stroke, style.opacity)

        if path.closed:
            fill = None if style.fill == "none" else _rgba(style.fill, style.opacity)
            draw.polygon(coords, fill=fill, outline=stroke, width=width)
        elif len(coords) == 1:
            x, y = coords[0]
            r = width / 2
            draw.ellipse([x - r, y - r, x + r, y + r], fill=stroke)
        else:
            draw.line(coords, fill=stroke, width=width, joint="curve" if style.line_join == "round" else None)
        drawn_count += 1

    return drawn_count


def rasterize(
    paths: List[RenderPath],
    width: int,
    height: int,
    output_path: Optional[Union[str, Path]] = None,
    viewport: Optional[ViewportState] = None,
    background: str = DEFAULT_BACKGROUND
) -> Image.Image:
    """
    Render a draw list to an image

    Args:
        paths: Draw list, already in back-to-front order
        width: Image width in pixels
        height: Image height in pixels
        output_path: Save the image here when given
        viewport: Optional pan/zoom transform
        background: Background color

    Returns:
        The rendered RGBA image
    """
    image = Image.new("RGBA", (int(width), int(height)), _rgba(background, 1.0))
    drawn_count = draw_paths(image, paths, viewport)
    logger.info(f"Drew {drawn_count} paths onto {width}x{height} image")

    if output_path is not None:
        output_path = Path(output_path)
        result = image
        if output_path.suffix.lower() in ['.jpg', '.jpeg']:
            result = image.convert("RGB")
        result.save(output_path)
        logger.info(f"Saved image: {output_path}")

    return image
