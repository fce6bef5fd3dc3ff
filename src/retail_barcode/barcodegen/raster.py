"""
RU: Растровый предпросмотр штрихкода (PNG) через Pillow.
EN: PNG rasterization of a bar pattern with Pillow, using the same geometry as the SVG renderer.

The SVG document is the canonical output; this bitmap is a convenience for
callers that need a preview or a print-ready raster. ``scale`` multiplies every
dimension, so ``scale=4`` gives a 4x denser bitmap of the same layout.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Final

from PIL import Image, ImageDraw, ImageFont

from retail_barcode.barcodegen.exceptions import InvalidRenderOptionsError
from retail_barcode.barcodegen.svg_renderer import compute_geometry
from retail_barcode.model.barcode import BarPattern, RenderOptions

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_RASTER_SIDE",
    "render_image",
    "render_png",
]

# Guards against accidental multi-hundred-megabyte bitmaps
MAX_RASTER_SIDE: Final[int] = 10000


def render_image(
    pattern: BarPattern,
    code_display: str,
    options: RenderOptions,
    scale: int = 1,
) -> Image.Image:
    """
    Rasterize ``pattern`` into an RGB PIL image.

    Raises:
        InvalidRenderOptionsError: bad ``scale``, non-positive geometry,
            or a bitmap larger than MAX_RASTER_SIDE.
    """
    if isinstance(scale, bool) or not isinstance(scale, int) or scale < 1:
        raise InvalidRenderOptionsError(
            f"scale must be a positive integer, got {scale!r}", option="scale"
        )
    geometry = compute_geometry(pattern, options)
    width_px = round(options.width * scale)
    height_px = round(options.height * scale)
    if width_px > MAX_RASTER_SIDE or height_px > MAX_RASTER_SIDE:
        raise InvalidRenderOptionsError(
            f"Raster size {width_px}x{height_px} exceeds {MAX_RASTER_SIDE}px",
            option="scale",
        )

    img = Image.new("RGB", (width_px, height_px), options.background_color)
    draw = ImageDraw.Draw(img)
    top = round(geometry.bar_top * scale)
    bottom = round((geometry.bar_top + geometry.bar_height) * scale) - 1
    for start, run in pattern.runs():
        left = round(geometry.module_x(start, options.margin) * scale)
        right = round(geometry.module_x(start + run, options.margin) * scale) - 1
        if right >= left and bottom >= top:
            draw.rectangle((left, top, right, bottom), fill=options.line_color)

    if options.display_value and code_display:
        font = ImageFont.load_default(size=max(1, round(options.font_size * scale)))
        x0, y0, x1, y1 = draw.textbbox((0, 0), code_display, font=font)
        text_x = geometry.text_x * scale - (x1 - x0) / 2 - x0
        text_y = geometry.text_y * scale - y1
        draw.text((text_x, text_y), code_display, fill=options.line_color, font=font)

    logger.debug("Rasterized %d modules at %dx%d", len(pattern), width_px, height_px)
    return img


def render_png(
    pattern: BarPattern,
    code_display: str,
    options: RenderOptions,
    scale: int = 1,
) -> bytes:
    """PNG bytes of :func:`render_image`."""
    img = render_image(pattern, code_display, options, scale=scale)
    buf = BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf.read()
