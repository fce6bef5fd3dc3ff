import base64
from typing import Any, Dict

import pytest

from retail_barcode.barcodegen.exceptions import (
    InvalidRenderOptionsError,
    InvalidRequestError,
    UnsupportedSymbologyError,
)
from retail_barcode.model.barcode import (
    BarcodeRequest,
    BarcodeResult,
    BarPattern,
    NormalizedCode,
    RenderedImage,
    RenderOptions,
)
from retail_barcode.model.enums import Symbology


class TestRenderOptions:
    def test_defaults(self) -> None:
        options = RenderOptions()
        assert options.to_dict() == {
            "width": 200,
            "height": 80,
            "margin": 10,
            "display_value": True,
            "font_size": 12,
            "background_color": "#FFFFFF",
            "line_color": "#000000",
        }

    def test_frozen(self) -> None:
        options = RenderOptions()
        with pytest.raises(AttributeError):
            options.width = 10  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs,option",
        [
            ({"width": 0}, "width"),
            ({"height": -5}, "height"),
            ({"font_size": 0}, "font_size"),
            ({"width": "200"}, "width"),
            ({"width": True}, "width"),
            ({"width": float("inf")}, "width"),
            ({"margin": -1}, "margin"),
            ({"margin": float("nan")}, "margin"),
            ({"display_value": "yes"}, "display_value"),
            ({"background_color": "white"}, "background_color"),
            ({"line_color": "#12345"}, "line_color"),
        ],
    )
    def test_invalid_values(self, kwargs: Dict[str, Any], option: str) -> None:
        with pytest.raises(InvalidRenderOptionsError) as exc_info:
            RenderOptions(**kwargs)
        assert exc_info.value.option == option

    def test_zero_margin_allowed(self) -> None:
        assert RenderOptions(margin=0).margin == 0

    def test_from_mapping_over_defaults(self) -> None:
        defaults = RenderOptions(width=300)
        options = RenderOptions.from_mapping({"height": 120, "background": "#FFF"}, defaults)
        assert options.width == 300
        assert options.height == 120
        assert options.background_color == "#FFF"

    def test_from_mapping_none_keeps_default(self) -> None:
        options = RenderOptions.from_mapping({"margin": None, "display_value": None})
        assert options.margin == 10
        assert options.display_value is True

    def test_from_mapping_empty(self) -> None:
        defaults = RenderOptions(width=250)
        assert RenderOptions.from_mapping(None, defaults) is defaults
        assert RenderOptions.from_mapping({}) == RenderOptions()

    def test_from_mapping_unknown_key(self) -> None:
        with pytest.raises(InvalidRenderOptionsError, match="not allowed") as exc_info:
            RenderOptions.from_mapping({"rotation": 90})
        assert exc_info.value.option == "rotation"

    @pytest.mark.parametrize("options", [[("width", 10)], "x", "", 0, False, []])
    def test_from_mapping_not_a_mapping(self, options: Any) -> None:
        with pytest.raises(InvalidRenderOptionsError, match="must be an object"):
            RenderOptions.from_mapping(options)

    def test_from_config(self) -> None:
        options = RenderOptions.from_config({"render_defaults": {"font_size": 16}})
        assert options.font_size == 16
        assert RenderOptions.from_config({}) == RenderOptions()

    def test_allowed_keys(self) -> None:
        assert "background" in RenderOptions.allowed_keys()
        assert "background_color" in RenderOptions.allowed_keys()
        assert "scale" not in RenderOptions.allowed_keys()

    def test_replace_validates(self) -> None:
        assert RenderOptions().replace(width=500).width == 500
        with pytest.raises(InvalidRenderOptionsError):
            RenderOptions().replace(width=-1)


class TestBarcodeRequest:
    def test_from_dict(self) -> None:
        request = BarcodeRequest.from_dict(
            {"code": " 0-36000-29145 ", "type": "upc-a", "options": {"width": 300}}
        )
        assert request.code == " 0-36000-29145 "
        assert request.symbology is Symbology.UPC_A
        assert request.render_options.width == 300

    def test_to_dict_uses_wire_names(self) -> None:
        data = BarcodeRequest("A", Symbology.CODE_128).to_dict()
        assert data["type"] == "code-128"
        assert data["options"]["background"] == "#FFFFFF"
        assert "background_color" not in data["options"]
        assert BarcodeRequest.from_dict(data) == BarcodeRequest("A", Symbology.CODE_128)

    @pytest.mark.parametrize(
        "payload",
        [None, [], {"type": "upc-a"}, {"code": 12345, "type": "upc-a"}, {"code": "1"}],
    )
    def test_malformed(self, payload: Any) -> None:
        with pytest.raises(InvalidRequestError):
            BarcodeRequest.from_dict(payload)

    def test_unsupported_type(self) -> None:
        with pytest.raises(UnsupportedSymbologyError):
            BarcodeRequest.from_dict({"code": "1", "type": "pdf417"})


class TestBarPattern:
    def test_runs(self) -> None:
        assert list(BarPattern("1101").runs()) == [(0, 2), (3, 1)]
        assert list(BarPattern("0110").runs()) == [(1, 2)]
        assert list(BarPattern("0000").runs()) == []
        assert list(BarPattern("111").runs()) == [(0, 3)]

    def test_ink_modules(self) -> None:
        assert BarPattern("1011001").ink_modules == 4

    def test_sequence_protocol(self) -> None:
        pattern = BarPattern("101")
        assert len(pattern) == 3
        assert str(pattern) == "101"
        assert list(pattern) == ["1", "0", "1"]

    @pytest.mark.parametrize("modules", ["", "102", "1 0"])
    def test_invalid(self, modules: str) -> None:
        with pytest.raises(ValueError):
            BarPattern(modules)


def test_normalized_code() -> None:
    code = NormalizedCode("036000291452", Symbology.UPC_A, check_digit_added=True)
    assert str(code) == "036000291452"
    assert len(code) == 12


def test_rendered_image_data_uri() -> None:
    image = RenderedImage(svg="<svg/>", width=1, height=1)
    assert image.svg_bytes == b"<svg/>"
    assert image.svg_base64 == "data:image/svg+xml;base64," + base64.b64encode(b"<svg/>").decode()


class TestBarcodeResult:
    @pytest.fixture
    def result(self) -> BarcodeResult:
        return BarcodeResult(
            code=NormalizedCode("AB/12 x", Symbology.CODE_128),
            pattern=BarPattern("1101"),
            image=RenderedImage(svg="<svg/>", width=200, height=80),
            display_text="AB/12 x",
        )

    def test_symbology(self, result: BarcodeResult) -> None:
        assert result.symbology is Symbology.CODE_128

    def test_suggested_file_name_is_safe(self, result: BarcodeResult) -> None:
        assert result.suggested_file_name == "barcode_code-128_AB_12_x.svg"

    def test_file_name_for_punctuation_only_code(self) -> None:
        result = BarcodeResult(
            code=NormalizedCode("///", Symbology.CODE_128),
            pattern=BarPattern("1"),
            image=RenderedImage(svg="<svg/>", width=1, height=1),
            display_text="///",
        )
        assert result.suggested_file_name == "barcode_code-128_code.svg"

    def test_asset_metadata(self, result: BarcodeResult) -> None:
        assert result.asset_metadata() == {
            "barcode_type": "code-128",
            "barcode_value": "AB/12 x",
            "auto_generated": True,
        }

    def test_to_response(self, result: BarcodeResult) -> None:
        response = result.to_response()
        assert response["success"] is True
        assert response["code"] == "AB/12 x"
        assert response["svg"] == "<svg/>"

    def test_str(self, result: BarcodeResult) -> None:
        assert str(result) == "BarcodeResult(code-128, code=AB/12 x, modules=4)"
