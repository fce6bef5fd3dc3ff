# RU: Доменная модель штрихкода: запрос, опции рендеринга, нормализованный код, шаблон модулей, результат.
# EN: Barcode domain model: request, render options, normalized code, module pattern, rendered image and result.

from __future__ import annotations

import base64
import dataclasses
import logging
import math
import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any, ClassVar, Dict, Final, FrozenSet, Iterator, Mapping, Optional, Tuple

from retail_barcode.barcodegen.exceptions import (
    InvalidRenderOptionsError,
    InvalidRequestError,
)

from .enums import Symbology

logger = logging.getLogger(__name__)

__all__ = [
    "RenderOptions",
    "BarcodeRequest",
    "NormalizedCode",
    "BarPattern",
    "RenderedImage",
    "BarcodeResult",
    "SVG_CONTENT_TYPE",
]

SVG_CONTENT_TYPE: Final[str] = "image/svg+xml"

_HEX_COLOR: Final[re.Pattern[str]] = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_UNSAFE_FILENAME_CHARS: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9._-]+")


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


@dataclass(frozen=True)
class RenderOptions:
    """
    Geometry and colors for the rendered barcode image.

    Attributes:
        width: Image width in user units (default 200).
        height: Image height in user units (default 80).
        margin: Blank border on every side (default 10).
        display_value: Print the human-readable code below the bars (default True).
        font_size: Text size; also reserved below the bars (default 12).
        background_color: Canvas color, ``#RGB`` or ``#RRGGBB`` (default white).
        line_color: Bar and text color (default black).

    Examples:
        >>> RenderOptions().width
        200
        >>> RenderOptions.from_mapping({"height": 120, "background": "#FFF"}).background_color
        '#FFF'
    """

    # Wire names used by request payloads that differ from the field names
    WIRE_ALIASES: ClassVar[Mapping[str, str]] = {"background": "background_color"}

    width: float = 200
    height: float = 80
    margin: float = 10
    display_value: bool = True
    font_size: float = 12
    background_color: str = "#FFFFFF"
    line_color: str = "#000000"

    def __post_init__(self) -> None:
        for name in ("width", "height", "font_size"):
            value = getattr(self, name)
            if not _is_number(value) or value <= 0:
                raise InvalidRenderOptionsError(
                    f"{name} must be a positive number, got {value!r}", option=name
                )
        if not _is_number(self.margin) or self.margin < 0:
            raise InvalidRenderOptionsError(
                f"margin must be a non-negative number, got {self.margin!r}",
                option="margin",
            )
        if not isinstance(self.display_value, bool):
            raise InvalidRenderOptionsError(
                f"display_value must be a boolean, got {self.display_value!r}",
                option="display_value",
            )
        for name in ("background_color", "line_color"):
            value = getattr(self, name)
            if not isinstance(value, str) or not _HEX_COLOR.match(value):
                raise InvalidRenderOptionsError(
                    f"{name} must be a hex color like #000000, got {value!r}",
                    option=name,
                )

    @classmethod
    def allowed_keys(cls) -> FrozenSet[str]:
        return frozenset(f.name for f in fields(cls)) | frozenset(cls.WIRE_ALIASES)

    @classmethod
    def from_mapping(
        cls,
        options: Optional[Mapping[str, Any]],
        defaults: Optional["RenderOptions"] = None,
    ) -> "RenderOptions":
        """
        Build options from a request mapping over ``defaults``.

        ``None`` (no options at all, or a key with a ``None`` value) keeps the
        default; anything that is not a mapping and unknown keys are rejected.

        Raises:
            InvalidRenderOptionsError: unknown key or invalid value.
        """
        base = defaults or cls()
        if options is None:
            return base
        if not isinstance(options, Mapping):
            raise InvalidRenderOptionsError(
                f"options must be an object, got {type(options).__name__}"
            )
        allowed = cls.allowed_keys()
        changes: Dict[str, Any] = {}
        for key, value in options.items():
            if key not in allowed:
                raise InvalidRenderOptionsError(
                    f"Option '{key}' not allowed for barcode rendering", option=key
                )
            if value is None:
                continue
            changes[cls.WIRE_ALIASES.get(key, key)] = value
        return dataclasses.replace(base, **changes)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "RenderOptions":
        """Default options from a loaded config's ``render_defaults`` section."""
        return cls.from_mapping(config.get("render_defaults") or {})

    def replace(self, **changes: Any) -> "RenderOptions":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BarcodeRequest:
    """
    Raw request: the code as typed by the user, the symbology and render options.

    ``code`` is kept exactly as received; normalization produces a new value.
    """

    code: str
    symbology: Symbology
    render_options: RenderOptions = field(default_factory=RenderOptions)

    @classmethod
    def from_dict(
        cls,
        payload: Mapping[str, Any],
        defaults: Optional[RenderOptions] = None,
    ) -> "BarcodeRequest":
        """
        Parse the ``{code, type, options?}`` request shape.

        Raises:
            InvalidRequestError: payload is not an object or ``code`` is missing.
            UnsupportedSymbologyError: ``type`` is not implemented.
            InvalidRenderOptionsError: bad ``options``.
        """
        if not isinstance(payload, Mapping):
            raise InvalidRequestError(
                f"Request must be an object, got {type(payload).__name__}"
            )
        code = payload.get("code")
        if not isinstance(code, str):
            raise InvalidRequestError(
                "Request field 'code' must be a string",
                context={"field": "code"},
            )
        if "type" not in payload:
            raise InvalidRequestError(
                "Request field 'type' is required", context={"field": "type"}
            )
        symbology = Symbology.parse(payload["type"])
        options = RenderOptions.from_mapping(payload.get("options"), defaults)
        return cls(code=code, symbology=symbology, render_options=options)

    def to_dict(self) -> Dict[str, Any]:
        opts = self.render_options.to_dict()
        opts["background"] = opts.pop("background_color")
        return {"code": self.code, "type": self.symbology.value, "options": opts}


@dataclass(frozen=True)
class NormalizedCode:
    """Code that satisfies its symbology's length and checksum rules."""

    value: str
    symbology: Symbology
    check_digit_added: bool = False

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)


@dataclass(frozen=True)
class BarPattern:
    """
    Ordered module string: ``'1'`` = ink, ``'0'`` = space, one fixed-width module each.

    Example:
        >>> list(BarPattern("1101").runs())
        [(0, 2), (3, 1)]
    """

    modules: str

    def __post_init__(self) -> None:
        if not self.modules or set(self.modules) - {"0", "1"}:
            raise ValueError("Bar pattern must be a non-empty string of '0' and '1'")

    def __len__(self) -> int:
        return len(self.modules)

    def __str__(self) -> str:
        return self.modules

    def __iter__(self) -> Iterator[str]:
        return iter(self.modules)

    @property
    def ink_modules(self) -> int:
        return self.modules.count("1")

    def runs(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(start_module, width)`` for every contiguous bar."""
        start = -1
        for i, module in enumerate(self.modules):
            if module == "1" and start < 0:
                start = i
            elif module == "0" and start >= 0:
                yield start, i - start
                start = -1
        if start >= 0:
            yield start, len(self.modules) - start


@dataclass(frozen=True)
class RenderedImage:
    """Self-contained SVG document plus its inline data-URI form."""

    svg: str
    width: float
    height: float
    content_type: str = SVG_CONTENT_TYPE

    @property
    def svg_bytes(self) -> bytes:
        return self.svg.encode("utf-8")

    @property
    def svg_base64(self) -> str:
        encoded = base64.b64encode(self.svg_bytes).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


@dataclass(frozen=True)
class BarcodeResult:
    """
    Output of one generation: normalized code, module pattern and image.

    The package never stores anything. ``suggested_file_name`` and
    ``asset_metadata`` are hints for whichever caller persists the image.
    """

    code: NormalizedCode
    pattern: BarPattern
    image: RenderedImage
    display_text: str

    @property
    def symbology(self) -> Symbology:
        return self.code.symbology

    @property
    def suggested_file_name(self) -> str:
        safe_code = _UNSAFE_FILENAME_CHARS.sub("_", self.code.value).strip("_") or "code"
        return f"barcode_{self.symbology.value}_{safe_code}.svg"

    def asset_metadata(self) -> Dict[str, Any]:
        return {
            "barcode_type": self.symbology.value,
            "barcode_value": self.code.value,
            "auto_generated": True,
        }

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            "code": self.code.value,
            "type": self.symbology.value,
            "svg": self.image.svg,
            "svg_base64": self.image.svg_base64,
        }

    def __str__(self) -> str:
        return f"BarcodeResult({self.symbology.value}, code={self.code.value}, modules={len(self.pattern)})"
