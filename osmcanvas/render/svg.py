"""
SVG export

Serializes a draw list into a standalone SVG document, one group per layer
"""

from itertools import groupby
from typing import List, Optional
from xml.sax.saxutils import quoteattr

from ..models import RenderPath, ViewportState


def path_element(path: RenderPath) -> str:
    """SVG <path> element for one render path"""
    style = path.style
    attrs = [
        f'd="{path.to_path_data()}"',
        f'fill={quoteattr(style.fill)}',
        f'stroke={quoteattr(style.stroke)}',
        f'stroke-width="{style.stroke_width:g}"',
    ]
    if style.line_cap:
        attrs.append(f'stroke-linecap={quoteattr(style.line_cap)}')
    if style.line_join:
        attrs.append(f'stroke-linejoin={quoteattr(style.line_join)}')
    if style.opacity != 1:
        attrs.append(f'opacity="{style.opacity:g}"')
    element_id = quoteattr(f"{path.category.value}-{path.way_id}")
    return f'<path id={element_id} {" ".join(attrs)}/>'


def render_svg(
    paths: List[RenderPath],
    width: float,
    height: float,
    viewport: Optional[ViewportState] = None,
    background: Optional[str] = None
) -> str:
    """
    Generate the complete SVG string

    Args:
        paths: Draw list, already in back-to-front order
        width: Document width
        height: Document height
        viewport: Optional pan/zoom transform applied to all layers
        background: Optional background fill color
    """
    parts = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height:g}" '
        f'viewBox="0 0 {width:g} {height:g}">',
    ]
    if background:
        parts.append(f'<rect width="100%" height="100%" fill={quoteattr(background)}/>')

    if viewport is not None:
        parts.append(
            f'<g transform="translate({viewport.offset_x:g} {viewport.offset_y:g}) scale({viewport.scale:g})">'
        )

    # Consecutive paths of one category form a layer
    for category, layer in groupby(paths, key=lambda p: p.category):
        parts.append(f'<g id="{category.value}">')
        parts.extend(path_element(p) for p in layer)
        parts.append('</g>')

    if viewport is not None:
        parts.append('</g>')
    parts.append('</svg>')
    return '\n'.join(parts)
