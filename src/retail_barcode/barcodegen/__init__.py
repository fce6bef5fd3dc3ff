"""
barcodegen

Модуль для кодирования 1D-штрихкодов товаров (UPC-A, EAN-13, Code 128 набор B) в SVG.

- Нормализация и проверка кода, автоматическое добавление контрольной цифры.
- Кодирование по фиксированным таблицам символик.
- Векторный рендеринг (SVG) и растровый предпросмотр (PNG).

Public API:
    - BarcodeGenerator: конвейер normalize -> encode -> render (class)
    - generate_barcode: фасад запрос/ответ (dict -> dict)
    - encode_barcode: чистая функция (code, symbology, options) -> BarcodeResult
    - normalize, check_digit, get_encoder, render_svg, render_png
    - BarcodeGenError и подклассы

Примеры:
    >>> from retail_barcode.barcodegen import BarcodeGenerator
    >>> result = BarcodeGenerator("upc-a", "03600029145").generate()
    >>> result.code.value
    '036000291452'

Зависимости:
    Pillow (только для PNG)
"""

from retail_barcode.barcodegen.exceptions import (
    BarcodeGenError,
    ChecksumMismatchError,
    InvalidLengthError,
    InvalidRenderOptionsError,
    InvalidRequestError,
    UnsupportedCharacterError,
    UnsupportedSymbologyError,
)
from retail_barcode.barcodegen.checksum import (
    check_digit,
    code128_check_value,
    ean13_check_digit,
    has_valid_check_digit,
    upc_a_check_digit,
)
from retail_barcode.barcodegen.normalizer import normalize
from retail_barcode.barcodegen.encoders import (
    Code128Encoder,
    Ean13Encoder,
    SymbologyEncoder,
    UpcAEncoder,
    encode,
    get_encoder,
)
from retail_barcode.barcodegen.svg_renderer import render_svg
from retail_barcode.barcodegen.raster import render_png
from retail_barcode.barcodegen.barcode_generator import (
    BarcodeGenerator,
    encode_barcode,
    generate_barcode,
)

__all__ = [
    "BarcodeGenerator",
    "encode_barcode",
    "generate_barcode",
    "normalize",
    "check_digit",
    "upc_a_check_digit",
    "ean13_check_digit",
    "has_valid_check_digit",
    "code128_check_value",
    "SymbologyEncoder",
    "UpcAEncoder",
    "Ean13Encoder",
    "Code128Encoder",
    "encode",
    "get_encoder",
    "render_svg",
    "render_png",
    "BarcodeGenError",
    "InvalidLengthError",
    "UnsupportedCharacterError",
    "ChecksumMismatchError",
    "UnsupportedSymbologyError",
    "InvalidRenderOptionsError",
    "InvalidRequestError",
]
