"""
Code normalization: raw user input -> NormalizedCode.

UPC-A / EAN-13:
    - Formatting characters (whitespace and ASCII punctuation, e.g. "0-36000-29145-2")
      are stripped; letters and any other non-digit are rejected.
    - Short form (11 / 12 digits) gets its check digit appended.
    - Full form (12 / 13 digits) must already carry the correct check digit.

Code 128 (Set B subset):
    - Nothing is stripped; every character must be printable ASCII (0x20-0x7E).
    - 1..MAX_CODE128_LENGTH characters.

Length limits are checked before any per-character work, so oversized input is
rejected without being scanned.
"""

from __future__ import annotations

import logging
import string
from typing import Final, FrozenSet, Tuple

from retail_barcode.barcodegen.checksum import DATA_DIGITS, check_digit
from retail_barcode.barcodegen.exceptions import (
    ChecksumMismatchError,
    InvalidLengthError,
    InvalidRequestError,
    UnsupportedCharacterError,
)
from retail_barcode.barcodegen.tables import (
    CODE128_PRINTABLE_FIRST,
    CODE128_PRINTABLE_LAST,
)
from retail_barcode.model.barcode import NormalizedCode
from retail_barcode.model.enums import Symbology

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_CODE128_LENGTH",
    "MAX_NUMERIC_INPUT_LENGTH",
    "accepted_lengths",
    "normalize",
]

MAX_CODE128_LENGTH: Final[int] = 80
# Raw numeric input including separators; a formatted 13-digit code never gets close
MAX_NUMERIC_INPUT_LENGTH: Final[int] = 64

_DIGITS: Final[FrozenSet[str]] = frozenset(string.digits)
_SEPARATORS: Final[FrozenSet[str]] = frozenset(string.whitespace + string.punctuation)


def accepted_lengths(symbology: Symbology) -> Tuple[int, int]:
    """``(min, max)`` normalized-input lengths for the symbology."""
    if symbology is Symbology.CODE_128:
        return 1, MAX_CODE128_LENGTH
    data_len = DATA_DIGITS[symbology]
    return data_len, data_len + 1


def _invalid_length(symbology: Symbology, length: int, message: str) -> InvalidLengthError:
    low, high = accepted_lengths(symbology)
    accepted = [low, high] if symbology.is_checksummed else {"min": low, "max": high}
    return InvalidLengthError(
        message,
        context={
            "symbology": symbology.value,
            "length": length,
            "accepted_lengths": accepted,
        },
    )


def _normalize_numeric(raw: str, symbology: Symbology) -> NormalizedCode:
    name = symbology.localized_name("en")
    data_len = DATA_DIGITS[symbology]
    if len(raw) > MAX_NUMERIC_INPUT_LENGTH:
        raise _invalid_length(
            symbology,
            len(raw),
            f"{name} input is too long ({len(raw)} characters)",
        )

    digits = []
    for position, char in enumerate(raw):
        if char in _DIGITS:
            digits.append(char)
        elif char not in _SEPARATORS:
            raise UnsupportedCharacterError(char, position, symbology.value)
    code = "".join(digits)

    if len(code) == data_len:
        full = code + str(check_digit(code, symbology))
        logger.debug("Appended %s check digit: %s -> %s", name, code, full)
        return NormalizedCode(full, symbology, check_digit_added=True)
    if len(code) == data_len + 1:
        expected = check_digit(code[:-1], symbology)
        if expected != int(code[-1]):
            raise ChecksumMismatchError(code, expected, int(code[-1]), symbology.value)
        return NormalizedCode(code, symbology)
    raise _invalid_length(
        symbology,
        len(code),
        f"{name} requires {data_len + 1} digits (or {data_len} + auto check digit), "
        f"got {len(code)}",
    )


def _normalize_code128(raw: str) -> NormalizedCode:
    symbology = Symbology.CODE_128
    if not 1 <= len(raw) <= MAX_CODE128_LENGTH:
        raise _invalid_length(
            symbology,
            len(raw),
            f"Code 128 data must be 1-{MAX_CODE128_LENGTH} characters, got {len(raw)}",
        )
    for position, char in enumerate(raw):
        if not CODE128_PRINTABLE_FIRST <= ord(char) <= CODE128_PRINTABLE_LAST:
            raise UnsupportedCharacterError(char, position, symbology.value)
    return NormalizedCode(raw, symbology)


def normalize(raw: str, symbology: Symbology) -> NormalizedCode:
    """
    Validate ``raw`` for ``symbology`` and return the code to encode.

    Pure function; ``raw`` itself is never modified.

    Raises:
        InvalidRequestError: ``raw`` is not a string.
        InvalidLengthError: wrong length that cannot be auto-completed.
        UnsupportedCharacterError: character outside the symbology's alphabet.
        ChecksumMismatchError: full-length code with a wrong check digit.

    Examples:
        >>> normalize("03600029145", Symbology.UPC_A).value
        '036000291452'
        >>> normalize("PJJ123C", Symbology.CODE_128).value
        'PJJ123C'
    """
    if not isinstance(raw, str):
        raise InvalidRequestError(
            f"Barcode code must be a string, got {type(raw).__name__}",
            context={"field": "code"},
        )
    symbology = Symbology.parse(symbology)
    if symbology.is_checksummed:
        return _normalize_numeric(raw, symbology)
    return _normalize_code128(raw)
