"""
Symbology lookup tables.

All tables are module-level immutable constants built once at import time:
read-only mappings (``MappingProxyType``) or tuples. Module strings use
``'1'`` for a dark (ink) module and ``'0'`` for a light one.

UPC/EAN element tables follow GS1 General Specifications, section 5.2
(number sets A = "L", B = "G", C = "R") and the EAN-13 leading-digit parity
table. Code 128 patterns follow ISO/IEC 15417, values 0-105 plus the stop pattern.

Every table is injective, so the inverse mappings below are well-defined;
they are the lookup half a decoder would need.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping, Tuple

__all__ = [
    "START_GUARD",
    "CENTER_GUARD",
    "END_GUARD",
    "UPC_EAN_MODULES",
    "DIGIT_WIDTH",
    "LEFT_ODD",
    "LEFT_EVEN",
    "RIGHT",
    "EAN13_PARITY",
    "CODE128_PATTERNS",
    "CODE128_START_B",
    "CODE128_STOP",
    "CODE128_SYMBOL_WIDTH",
    "CODE128_STOP_WIDTH",
    "CODE128_MODULUS",
    "CODE128_PRINTABLE_FIRST",
    "CODE128_PRINTABLE_LAST",
    "LEFT_ODD_DIGITS",
    "LEFT_EVEN_DIGITS",
    "RIGHT_DIGITS",
    "CODE128_VALUES",
]

# === UPC-A / EAN-13 ===

START_GUARD: Final[str] = "101"
CENTER_GUARD: Final[str] = "01010"
END_GUARD: Final[str] = "101"

DIGIT_WIDTH: Final[int] = 7
# 3 start + 6*7 left + 5 center + 6*7 right + 3 end
UPC_EAN_MODULES: Final[int] = 95

# Number set A: left-hand, odd parity
LEFT_ODD: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "0001101",
        "1": "0011001",
        "2": "0010011",
        "3": "0111101",
        "4": "0100011",
        "5": "0110001",
        "6": "0101111",
        "7": "0111011",
        "8": "0110111",
        "9": "0001011",
    }
)

# Number set B: left-hand, even parity (EAN-13 only); mirror image of RIGHT
LEFT_EVEN: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "0100111",
        "1": "0110011",
        "2": "0011011",
        "3": "0100001",
        "4": "0011101",
        "5": "0111001",
        "6": "0000101",
        "7": "0010001",
        "8": "0001001",
        "9": "0010111",
    }
)

# Number set C: right-hand; bitwise complement of LEFT_ODD
RIGHT: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "1110010",
        "1": "1100110",
        "2": "1101100",
        "3": "1000010",
        "4": "1011100",
        "5": "1001110",
        "6": "1010000",
        "7": "1000100",
        "8": "1001000",
        "9": "1110100",
    }
)

# EAN-13 leading digit -> number set per left-hand position 1..6
EAN13_PARITY: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "LLLLLL",
        "1": "LLGLGG",
        "2": "LLGGLG",
        "3": "LLGGGL",
        "4": "LGLLGG",
        "5": "LGGLLG",
        "6": "LGGGLL",
        "7": "LGLGLG",
        "8": "LGLGGL",
        "9": "LGGLGL",
    }
)

# === CODE 128 ===

CODE128_SYMBOL_WIDTH: Final[int] = 11
CODE128_STOP_WIDTH: Final[int] = 13
CODE128_MODULUS: Final[int] = 103

# Code Set B maps ASCII 32..126 to values 0..94
CODE128_PRINTABLE_FIRST: Final[int] = 0x20
CODE128_PRINTABLE_LAST: Final[int] = 0x7E

# Indexed by symbol value
CODE128_PATTERNS: Final[Tuple[str, ...]] = (
    "11011001100", "11001101100", "11001100110", "10010011000", "10010001100",  # 0-4
    "10001001100", "10011001000", "10011000100", "10001100100", "11001001000",  # 5-9
    "11001000100", "11000100100", "10110011100", "10011011100", "10011001110",  # 10-14
    "10111001100", "10011101100", "10011100110", "11001110010", "11001011100",  # 15-19
    "11001001110", "11011100100", "11001110100", "11101101110", "11101001100",  # 20-24
    "11100101100", "11100100110", "11101100100", "11100110100", "11100110010",  # 25-29
    "11011011000", "11011000110", "11000110110", "10100011000", "10001011000",  # 30-34
    "10001000110", "10110001000", "10001101000", "10001100010", "11010001000",  # 35-39
    "11000101000", "11000100010", "10110111000", "10110001110", "10001101110",  # 40-44
    "10111011000", "10111000110", "10001110110", "11101110110", "11010001110",  # 45-49
    "11000101110", "11011101000", "11011100010", "11011101110", "11101011000",  # 50-54
    "11101000110", "11100010110", "11101101000", "11101100010", "11100011010",  # 55-59
    "11101111010", "11001000010", "11110001010", "10100110000", "10100001100",  # 60-64
    "10010110000", "10010000110", "10000101100", "10000100110", "10110010000",  # 65-69
    "10110000100", "10011010000", "10011000010", "10000110100", "10000110010",  # 70-74
    "11000010010", "11001010000", "11110111010", "11000010100", "10001111010",  # 75-79
    "10100111100", "10010111100", "10010011110", "10111100100", "10011110100",  # 80-84
    "10011110010", "11110100100", "11110010100", "11110010010", "11011011110",  # 85-89
    "11011110110", "11110110110", "10101111000", "10100011110", "10001011110",  # 90-94
    "10111101000", "10111100010", "11110101000", "11110100010", "10111011110",  # 95-99
    "10111101110", "11101011110", "11110101110", "11010000100", "11010010000",  # 100-104
    "11010011100",  # 105
)

CODE128_START_B: Final[int] = 104
CODE128_STOP: Final[str] = "1100011101011"


def _invert(table: Mapping[str, str]) -> Mapping[str, str]:
    inverse = {pattern: digit for digit, pattern in table.items()}
    if len(inverse) != len(table):
        raise RuntimeError("lookup table is not injective")
    return MappingProxyType(inverse)


LEFT_ODD_DIGITS: Final[Mapping[str, str]] = _invert(LEFT_ODD)
LEFT_EVEN_DIGITS: Final[Mapping[str, str]] = _invert(LEFT_EVEN)
RIGHT_DIGITS: Final[Mapping[str, str]] = _invert(RIGHT)

CODE128_VALUES: Final[Mapping[str, int]] = MappingProxyType(
    {pattern: value for value, pattern in enumerate(CODE128_PATTERNS)}
)
