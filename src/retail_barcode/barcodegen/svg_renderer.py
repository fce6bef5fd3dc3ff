"""
SVG rendering of a bar pattern.

Layout (all values in user units, viewBox == width x height):

    module_width = (width - 2 * margin) / len(pattern)
    bar_height   = height - margin - font_size - TEXT_GAP   (with text)
                 = height - 2 * margin                      (without text)

One ``<rect>`` per ink module at ``x = margin + i * module_width``, ``y = margin``.
The text baseline sits at ``height - margin``, centered horizontally.
Only generic font families are used, so the document has no external
font or stylesheet dependency.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Final, List

from retail_barcode.barcodegen.exceptions import InvalidRenderOptionsError
from retail_barcode.model.barcode import BarPattern, RenderedImage, RenderOptions

logger = logging.getLogger(__name__)

__all__ = [
    "TEXT_GAP",
    "FONT_FAMILY",
    "BarcodeGeometry",
    "compute_geometry",
    "render_svg",
]

TEXT_GAP: Final[float] = 5
FONT_FAMILY: Final[str] = "monospace"
_SVG_NS: Final[str] = "http://www.w3.org/2000/svg"
# Decimal places kept in coordinates; fixes output bytes for identical inputs
_PRECISION: Final[int] = 4
# Smallest extent that survives formatting; below it bars collapse to zero width or overlap
_MIN_EXTENT: Final[float] = 10 ** -_PRECISION


@dataclass(frozen=True)
class BarcodeGeometry:
    """Resolved drawing geometry shared by the SVG and PNG renderers."""

    module_width: float
    bar_top: float
    bar_height: float
    text_x: float
    text_y: float

    def module_x(self, index: int, margin: float) -> float:
        return margin + index * self.module_width


def _fmt(value: float) -> str:
    text = f"{value:.{_PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def compute_geometry(pattern: BarPattern, options: RenderOptions) -> BarcodeGeometry:
    """
    Resolve module width and bar height.

    Raises:
        InvalidRenderOptionsError: module width or bar height would round to
            zero at the output precision.
    """
    drawable = options.width - 2 * options.margin
    module_width = drawable / len(pattern)
    if module_width < _MIN_EXTENT:
        raise InvalidRenderOptionsError(
            f"margin {options.margin} leaves no room for bars in width {options.width}",
            option="margin",
            module_width=module_width,
        )
    if options.display_value:
        bar_height = options.height - options.margin - options.font_size - TEXT_GAP
    else:
        bar_height = options.height - 2 * options.margin
    if bar_height < _MIN_EXTENT:
        raise InvalidRenderOptionsError(
            f"height {options.height} leaves no room for bars "
            f"(margin {options.margin}, font size {options.font_size})",
            option="height",
            bar_height=bar_height,
        )
    return BarcodeGeometry(
        module_width=module_width,
        bar_top=options.margin,
        bar_height=bar_height,
        text_x=options.width / 2,
        text_y=options.height - options.margin,
    )


def render_svg(
    pattern: BarPattern,
    code_display: str,
    options: RenderOptions,
) -> RenderedImage:
    """
    Render ``pattern`` as a standalone SVG document.

    Args:
        pattern: Module string to draw.
        code_display: Human-readable text printed under the bars.
        options: Geometry and colors.

    Returns:
        RenderedImage with the SVG markup; identical arguments give identical bytes.

    Raises:
        InvalidRenderOptionsError: geometry would be non-positive.
    """
    geometry = compute_geometry(pattern, options)
    width = _fmt(options.width)
    height = _fmt(options.height)
    bar_width = _fmt(geometry.module_width)
    bar_y = _fmt(geometry.bar_top)
    bar_height = _fmt(geometry.bar_height)
    line_color = options.line_color

    lines: List[str] = [
        f'<svg xmlns="{_SVG_NS}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">',
        f'  <rect width="100%" height="100%" fill="{options.background_color}"/>',
    ]
    for index, module in enumerate(pattern):
        if module == "1":
            x = _fmt(geometry.module_x(index, options.margin))
            lines.append(
                f'  <rect x="{x}" y="{bar_y}" width="{bar_width}" '
                f'height="{bar_height}" fill="{line_color}"/>'
            )
    if options.display_value:
        lines.append(
            f'  <text x="{_fmt(geometry.text_x)}" y="{_fmt(geometry.text_y)}" '
            f'text-anchor="middle" font-family="{FONT_FAMILY}" '
            f'font-size="{_fmt(options.font_size)}" fill="{line_color}">'
            f"{html.escape(code_display)}</text>"
        )
    lines.append("</svg>")

    logger.debug(
        "Rendered SVG %sx%s with %d bars", width, height, pattern.ink_modules
    )
    return RenderedImage(svg="\n".join(lines), width=options.width, height=options.height)
