from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Set, Union

from retail_barcode.barcodegen.encoders import get_encoder
from retail_barcode.barcodegen.exceptions import BarcodeGenError
from retail_barcode.barcodegen.normalizer import normalize
from retail_barcode.barcodegen.raster import render_png
from retail_barcode.barcodegen.svg_renderer import render_svg
from retail_barcode.model.barcode import (
    BarcodeRequest,
    BarcodeResult,
    NormalizedCode,
    RenderOptions,
)
from retail_barcode.model.enums import Symbology

logger = logging.getLogger(__name__)

__all__ = [
    "BarcodeGenerator",
    "encode_barcode",
    "generate_barcode",
    "error_response",
]


class BarcodeGenerator:
    """
    Pipeline for one barcode: normalize -> encode -> render.

    Args:
        symbology: Symbology member or wire name ("upc-a", "ean-13", "code-128").
        code: Raw code as entered by the user.
        options: Render options, or a mapping of option overrides.
        defaults: Base options that ``options`` mappings are applied over.

    Example:
        >>> gen = BarcodeGenerator(Symbology.UPC_A, "03600029145")
        >>> result = gen.generate()
        >>> result.code.value
        '036000291452'
    """

    def __init__(
        self,
        symbology: Union[Symbology, str],
        code: str,
        options: Union[RenderOptions, Mapping[str, Any], None] = None,
        defaults: Optional[RenderOptions] = None,
    ) -> None:
        self.symbology = Symbology.parse(symbology)
        self.code = code
        if isinstance(options, RenderOptions):
            self.options = options
        else:
            self.options = RenderOptions.from_mapping(options, defaults)

    @classmethod
    def from_request(cls, request: BarcodeRequest) -> "BarcodeGenerator":
        return cls(request.symbology, request.code, request.render_options)

    def normalize(self) -> NormalizedCode:
        return normalize(self.code, self.symbology)

    def validate(self) -> None:
        """
        Check the code without rendering.

        Raises:
            BarcodeGenError: on any invalid input.
        """
        self.normalize()

    def generate(self) -> BarcodeResult:
        """
        Run the full pipeline.

        Returns:
            BarcodeResult with normalized code, module pattern and SVG image.

        Raises:
            BarcodeGenError: terminal error from normalization, encoding or rendering.
        """
        normalized = self.normalize()
        pattern = get_encoder(self.symbology).encode(normalized)
        image = render_svg(pattern, normalized.value, self.options)
        logger.debug(
            "Generated %s barcode %s (%d modules)",
            self.symbology.value,
            normalized.value,
            len(pattern),
        )
        return BarcodeResult(
            code=normalized, pattern=pattern, image=image, display_text=normalized.value
        )

    def render_bytes(self, scale: int = 1) -> bytes:
        """PNG preview of the barcode."""
        result = self.generate()
        return render_png(result.pattern, result.display_text, self.options, scale=scale)

    @classmethod
    def supported_types(cls) -> Set[Symbology]:
        return set(Symbology)


def encode_barcode(
    code: str,
    symbology: Union[Symbology, str],
    options: Union[RenderOptions, Mapping[str, Any], None] = None,
) -> BarcodeResult:
    """Pure entry point: ``(code, symbology, options) -> BarcodeResult``."""
    return BarcodeGenerator(symbology, code, options).generate()


def error_response(error: BarcodeGenError, barcode_type: Any = None) -> Dict[str, Any]:
    response: Dict[str, Any] = {
        "success": False,
        "error": error.message,
        "error_kind": error.kind,
        "error_details": dict(error.context),
    }
    if isinstance(barcode_type, str):
        response["type"] = barcode_type
    return response


def generate_barcode(
    payload: Mapping[str, Any],
    defaults: Optional[RenderOptions] = None,
) -> Dict[str, Any]:
    """
    Request/response facade over :class:`BarcodeGenerator`.

    Accepts ``{"code": ..., "type": ..., "options": {...}}``. Keys that belong
    to the caller's persistence layer (``product_id``, ``save_to_dam``, ...)
    are ignored here.

    Returns:
        ``{"success": True, "code", "type", "svg", "svg_base64"}`` or
        ``{"success": False, "error", "error_kind", "error_details"}``.
    """
    barcode_type = payload.get("type") if isinstance(payload, Mapping) else None
    try:
        request = BarcodeRequest.from_dict(payload, defaults)
        result = BarcodeGenerator.from_request(request).generate()
    except BarcodeGenError as e:
        logger.warning("Barcode generation failed (%s): %s", e.kind, e.message)
        return error_response(e, barcode_type)
    logger.info("Generated %s barcode %s", result.symbology.value, result.code.value)
    return result.to_response()
