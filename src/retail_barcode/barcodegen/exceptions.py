"""
Исключения генератора штрихкодов.

Typed exception hierarchy for barcode normalization, encoding and rendering.
Every error is terminal: nothing in the package retries or substitutes a
different symbology, and callers get enough context to correct the input.

Иерархия:
    BarcodeGenError (базовое)
    ├── InvalidLengthError
    ├── UnsupportedCharacterError
    ├── ChecksumMismatchError
    ├── UnsupportedSymbologyError
    ├── InvalidRenderOptionsError
    └── InvalidRequestError

Example:
    >>> try:
    ...     normalize("12345", Symbology.UPC_A)
    ... except BarcodeGenError as e:
    ...     print(e.kind, e.context)
    invalid_length {'symbology': 'upc-a', 'length': 5, 'accepted_lengths': [11, 12]}
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional

__all__: list[str] = [
    "BarcodeGenError",
    "InvalidLengthError",
    "UnsupportedCharacterError",
    "ChecksumMismatchError",
    "UnsupportedSymbologyError",
    "InvalidRenderOptionsError",
    "InvalidRequestError",
]


class BarcodeGenError(Exception):
    """
    Base barcode generation/validation error.

    Attributes:
        message: Human-readable description.
        context: Structured details (which check failed and where).
        kind: Stable machine-readable error kind, one per subclass.
    """

    kind: ClassVar[str] = "barcode_error"

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message, **self.context}


class InvalidLengthError(BarcodeGenError):
    """Code has the wrong length and cannot be auto-completed."""

    kind: ClassVar[str] = "invalid_length"


class UnsupportedCharacterError(BarcodeGenError):
    """A character falls outside the symbology's alphabet."""

    kind: ClassVar[str] = "unsupported_character"

    def __init__(
        self,
        char: str,
        position: int,
        symbology: str,
    ) -> None:
        super().__init__(
            f"Unsupported character {char!r} at position {position} for {symbology}",
            context={"char": char, "position": position, "symbology": symbology},
        )
        self.char = char
        self.position = position


class ChecksumMismatchError(BarcodeGenError):
    """Full-length code whose trailing digit is not the computed check digit."""

    kind: ClassVar[str] = "checksum_mismatch"

    def __init__(self, code: str, expected: int, actual: int, symbology: str) -> None:
        super().__init__(
            f"{symbology} check digit mismatch for {code}: "
            f"expected {expected}, got {actual}",
            context={
                "code": code,
                "expected": expected,
                "actual": actual,
                "symbology": symbology,
            },
        )
        self.expected = expected
        self.actual = actual


class UnsupportedSymbologyError(BarcodeGenError):
    """Requested barcode type is not one of the implemented symbologies."""

    kind: ClassVar[str] = "unsupported_symbology"


class InvalidRenderOptionsError(BarcodeGenError):
    """Render options produce non-positive or otherwise unrenderable geometry."""

    kind: ClassVar[str] = "invalid_render_options"

    def __init__(self, message: str, option: Optional[str] = None, **details: Any) -> None:
        context: Dict[str, Any] = dict(details)
        if option is not None:
            context["option"] = option
        super().__init__(message, context=context)
        self.option = option


class InvalidRequestError(BarcodeGenError):
    """Request payload is malformed (missing code, wrong field types)."""

    kind: ClassVar[str] = "invalid_request"
