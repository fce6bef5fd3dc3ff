"""
Check digit calculation for UPC-A, EAN-13 and Code 128 (Set B).

UPC-A and EAN-13 use the same mod-10 scheme with the weights swapped:

    UPC-A  (11 digits): positions 0, 2, 4, ... weighted 3, others 1
    EAN-13 (12 digits): positions 0, 2, 4, ... weighted 1, others 3

Both weightings make the full code (with its check digit) satisfy
``sum mod 10 == 0`` when it is weighted from the right-hand end as 1, 3, 1, ...

Code 128 uses a mod-103 weighted sum over symbol values, seeded with the
start symbol value.
"""

from __future__ import annotations

from typing import Final, Mapping, Sequence, Tuple

from retail_barcode.barcodegen.exceptions import (
    InvalidLengthError,
    UnsupportedCharacterError,
    UnsupportedSymbologyError,
)
from retail_barcode.barcodegen.tables import CODE128_MODULUS, CODE128_START_B
from retail_barcode.model.enums import Symbology

__all__ = [
    "DATA_DIGITS",
    "upc_a_check_digit",
    "ean13_check_digit",
    "check_digit",
    "has_valid_check_digit",
    "code128_check_value",
]

# (weight at even index, weight at odd index) for the data digits
_WEIGHTS: Final[Mapping[Symbology, Tuple[int, int]]] = {
    Symbology.UPC_A: (3, 1),
    Symbology.EAN_13: (1, 3),
}

# Number of data digits before the check digit
DATA_DIGITS: Final[Mapping[Symbology, int]] = {
    Symbology.UPC_A: 11,
    Symbology.EAN_13: 12,
}


def _require_digits(digits: str, symbology: Symbology, length: int) -> None:
    if len(digits) != length:
        raise InvalidLengthError(
            f"{symbology.localized_name('en')} check digit needs {length} digits, "
            f"got {len(digits)}",
            context={
                "symbology": symbology.value,
                "length": len(digits),
                "accepted_lengths": [length],
            },
        )
    for position, char in enumerate(digits):
        if char not in "0123456789":
            raise UnsupportedCharacterError(char, position, symbology.value)


def _mod10_check_digit(digits: str, even_weight: int, odd_weight: int) -> int:
    total = sum(
        int(d) * (even_weight if i % 2 == 0 else odd_weight) for i, d in enumerate(digits)
    )
    return (10 - total % 10) % 10


def upc_a_check_digit(digits: str) -> int:
    """
    Check digit for 11 UPC-A data digits.

    Example:
        >>> upc_a_check_digit("03600029145")
        2
    """
    return check_digit(digits, Symbology.UPC_A)


def ean13_check_digit(digits: str) -> int:
    """
    Check digit for 12 EAN-13 data digits.

    Example:
        >>> ean13_check_digit("400638133393")
        1
    """
    return check_digit(digits, Symbology.EAN_13)


def check_digit(digits: str, symbology: Symbology) -> int:
    """
    Compute the trailing check digit for a checksummed symbology.

    Args:
        digits: Data digits without the check digit (11 for UPC-A, 12 for EAN-13).
        symbology: UPC_A or EAN_13.

    Raises:
        UnsupportedSymbologyError: symbology has no mod-10 check digit.
        InvalidLengthError: wrong number of data digits.
        UnsupportedCharacterError: a non-digit character.
    """
    weights = _WEIGHTS.get(symbology)
    if weights is None:
        raise UnsupportedSymbologyError(
            f"{symbology.value} has no mod-10 check digit",
            context={"type": symbology.value},
        )
    _require_digits(digits, symbology, DATA_DIGITS[symbology])
    return _mod10_check_digit(digits, *weights)


def has_valid_check_digit(code: str, symbology: Symbology) -> bool:
    """
    True when the full-length code ends with its computed check digit.

    Raises:
        UnsupportedCharacterError: a data digit is not 0-9.
    """
    data_len = DATA_DIGITS.get(symbology)
    if data_len is None or len(code) != data_len + 1 or code[-1] not in "0123456789":
        return False
    return check_digit(code[:-1], symbology) == int(code[-1])


def code128_check_value(values: Sequence[int], start_value: int = CODE128_START_B) -> int:
    """
    Code 128 check symbol value: ``(start + sum(value_i * (i + 1))) mod 103``.

    Args:
        values: Symbol values of the data characters, in order.
        start_value: Value of the start symbol (104 for Start B).
    """
    total = start_value + sum(value * position for position, value in enumerate(values, 1))
    return total % CODE128_MODULUS
