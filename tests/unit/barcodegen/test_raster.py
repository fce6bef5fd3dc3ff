"""
Тесты растрового предпросмотра (PNG).
"""

from io import BytesIO
from typing import Any

import pytest
from PIL import Image

from retail_barcode.barcodegen.exceptions import InvalidRenderOptionsError
from retail_barcode.barcodegen.raster import MAX_RASTER_SIDE, render_image, render_png
from retail_barcode.model.barcode import BarPattern, RenderOptions

INK = (0, 0, 0)
PAPER = (255, 255, 255)


@pytest.fixture
def pattern() -> BarPattern:
    # UPC-A 036000291452
    return BarPattern(
        "101"
        + "0001101" + "0111101" + "0101111" + "0001101" + "0001101" + "0001101"
        + "01010"
        + "1101100" + "1110100" + "1100110" + "1011100" + "1001110" + "1101100"
        + "101"
    )


@pytest.fixture
def one_px_options() -> RenderOptions:
    # 95 modules over 95 px: one pixel per module
    return RenderOptions(width=115, height=80, margin=10)


def test_png_magic_and_size(pattern: BarPattern, one_px_options: RenderOptions) -> None:
    data = render_png(pattern, "036000291452", one_px_options)
    assert data[:4] == b"\x89PNG"
    with Image.open(BytesIO(data)) as img:
        assert img.size == (115, 80)


def test_scale_multiplies_dimensions(pattern: BarPattern, one_px_options: RenderOptions) -> None:
    data = render_png(pattern, "036000291452", one_px_options, scale=2)
    with Image.open(BytesIO(data)) as img:
        assert img.size == (230, 160)


def test_modules_map_to_pixels(pattern: BarPattern, one_px_options: RenderOptions) -> None:
    img = render_image(pattern, "036000291452", one_px_options)
    y = one_px_options.margin + 1
    assert img.mode == "RGB"
    assert img.getpixel((10, y)) == INK
    assert img.getpixel((11, y)) == PAPER
    assert img.getpixel((12, y)) == INK
    assert img.getpixel((13, y)) == PAPER
    # Margins stay blank
    assert img.getpixel((5, y)) == PAPER
    assert img.getpixel((10, 5)) == PAPER


def test_colors(pattern: BarPattern) -> None:
    options = RenderOptions(
        width=115, height=80, margin=10, background_color="#00FF00", line_color="#FF0000"
    )
    img = render_image(pattern, "", options)
    assert img.getpixel((0, 0)) == (0, 255, 0)
    assert img.getpixel((10, 11)) == (255, 0, 0)


def test_text_is_drawn(pattern: BarPattern, one_px_options: RenderOptions) -> None:
    with_text = render_image(pattern, "036000291452", one_px_options)
    without_text = render_image(
        pattern, "036000291452", one_px_options.replace(display_value=False)
    )
    text_band = (0, 64, 115, 80)
    assert with_text.crop(text_band).getcolors() != without_text.crop(text_band).getcolors()


@pytest.mark.parametrize("scale", [0, -1, 1.5, True, "2"])
def test_bad_scale(pattern: BarPattern, scale: Any) -> None:
    with pytest.raises(InvalidRenderOptionsError) as exc_info:
        render_png(pattern, "x", RenderOptions(), scale=scale)
    assert exc_info.value.option == "scale"


def test_raster_size_limit(pattern: BarPattern) -> None:
    options = RenderOptions(width=MAX_RASTER_SIDE + 1)
    with pytest.raises(InvalidRenderOptionsError):
        render_image(pattern, "x", options)


def test_invalid_geometry_propagates(pattern: BarPattern) -> None:
    with pytest.raises(InvalidRenderOptionsError) as exc_info:
        render_image(pattern, "x", RenderOptions(margin=150))
    assert exc_info.value.option == "margin"


def test_extent_that_rounds_to_zero_is_rejected(pattern: BarPattern) -> None:
    with pytest.raises(InvalidRenderOptionsError) as exc_info:
        render_png(pattern, "x", RenderOptions(width=200, height=400, margin=99.999))
    assert exc_info.value.option == "margin"
