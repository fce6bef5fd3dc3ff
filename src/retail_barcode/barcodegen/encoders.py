"""
Per-symbology encoders: NormalizedCode -> BarPattern.

Each symbology has one encoder class; ``get_encoder`` looks it up in an
immutable registry keyed by ``Symbology``. A new symbology is a new
``SymbologyEncoder`` subclass plus one registry entry.

Module counts:
    UPC-A, EAN-13: always 95
    Code 128 (Set B): 11 * (n + 2) + 13 for n data characters
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import ClassVar, Final, List, Mapping

from retail_barcode.barcodegen.checksum import code128_check_value
from retail_barcode.barcodegen.exceptions import (
    InvalidRequestError,
    UnsupportedSymbologyError,
)
from retail_barcode.barcodegen.tables import (
    CENTER_GUARD,
    CODE128_PATTERNS,
    CODE128_PRINTABLE_FIRST,
    CODE128_START_B,
    CODE128_STOP,
    CODE128_STOP_WIDTH,
    CODE128_SYMBOL_WIDTH,
    EAN13_PARITY,
    END_GUARD,
    LEFT_EVEN,
    LEFT_ODD,
    RIGHT,
    START_GUARD,
    UPC_EAN_MODULES,
)
from retail_barcode.model.barcode import BarPattern, NormalizedCode
from retail_barcode.model.enums import Symbology

logger = logging.getLogger(__name__)

__all__ = [
    "SymbologyEncoder",
    "UpcAEncoder",
    "Ean13Encoder",
    "Code128Encoder",
    "get_encoder",
    "encode",
]


class SymbologyEncoder(ABC):
    """Encoding strategy for one symbology."""

    symbology: ClassVar[Symbology]

    @abstractmethod
    def expected_modules(self, length: int) -> int:
        """Pattern length for a normalized code of ``length`` characters."""

    @abstractmethod
    def _build(self, code: str) -> str: ...

    def encode(self, code: NormalizedCode) -> BarPattern:
        """
        Encode a normalized code.

        Raises:
            InvalidRequestError: ``code`` was normalized for another symbology.
        """
        if not isinstance(code, NormalizedCode) or code.symbology is not self.symbology:
            raise InvalidRequestError(
                f"{type(self).__name__} needs a code normalized for {self.symbology.value}",
                context={"symbology": self.symbology.value},
            )
        modules = self._build(code.value)
        if len(modules) != self.expected_modules(len(code.value)):
            raise RuntimeError(
                f"{self.symbology.value} produced {len(modules)} modules for {code.value!r}"
            )
        logger.debug(
            "Encoded %s %s into %d modules", self.symbology.value, code.value, len(modules)
        )
        return BarPattern(modules)


class UpcAEncoder(SymbologyEncoder):
    """UPC-A: guard, 6 left-odd digits, center guard, 6 right digits, guard."""

    symbology: ClassVar[Symbology] = Symbology.UPC_A

    def expected_modules(self, length: int) -> int:
        return UPC_EAN_MODULES

    def _build(self, code: str) -> str:
        parts: List[str] = [START_GUARD]
        parts.extend(LEFT_ODD[d] for d in code[:6])
        parts.append(CENTER_GUARD)
        parts.extend(RIGHT[d] for d in code[6:12])
        parts.append(END_GUARD)
        return "".join(parts)


class Ean13Encoder(SymbologyEncoder):
    """
    EAN-13: the first digit is not drawn; it selects the L/G parity of digits 1-6.

    Digits 7-12 use the right-hand table, same as UPC-A.
    """

    symbology: ClassVar[Symbology] = Symbology.EAN_13

    _LEFT_SETS: ClassVar[Mapping[str, Mapping[str, str]]] = MappingProxyType(
        {"L": LEFT_ODD, "G": LEFT_EVEN}
    )

    def expected_modules(self, length: int) -> int:
        return UPC_EAN_MODULES

    def _build(self, code: str) -> str:
        parity = EAN13_PARITY[code[0]]
        parts: List[str] = [START_GUARD]
        parts.extend(self._LEFT_SETS[p][d] for p, d in zip(parity, code[1:7]))
        parts.append(CENTER_GUARD)
        parts.extend(RIGHT[d] for d in code[7:13])
        parts.append(END_GUARD)
        return "".join(parts)


class Code128Encoder(SymbologyEncoder):
    """Code 128, Code Set B only: Start B, data symbols, check symbol, stop."""

    symbology: ClassVar[Symbology] = Symbology.CODE_128

    def expected_modules(self, length: int) -> int:
        return CODE128_SYMBOL_WIDTH * (length + 2) + CODE128_STOP_WIDTH

    @staticmethod
    def symbol_values(code: str) -> List[int]:
        return [ord(char) - CODE128_PRINTABLE_FIRST for char in code]

    def _build(self, code: str) -> str:
        values = self.symbol_values(code)
        check = code128_check_value(values, CODE128_START_B)
        parts: List[str] = [CODE128_PATTERNS[CODE128_START_B]]
        parts.extend(CODE128_PATTERNS[v] for v in values)
        parts.append(CODE128_PATTERNS[check])
        parts.append(CODE128_STOP)
        return "".join(parts)


_ENCODERS: Final[Mapping[Symbology, SymbologyEncoder]] = MappingProxyType(
    {
        Symbology.UPC_A: UpcAEncoder(),
        Symbology.EAN_13: Ean13Encoder(),
        Symbology.CODE_128: Code128Encoder(),
    }
)


def get_encoder(symbology: Symbology) -> SymbologyEncoder:
    """
    Encoder for ``symbology``.

    Raises:
        UnsupportedSymbologyError: no encoder registered.
    """
    encoder = _ENCODERS.get(Symbology.parse(symbology))
    if encoder is None:
        raise UnsupportedSymbologyError(
            f"No encoder registered for {symbology}", context={"type": str(symbology)}
        )
    return encoder


def encode(code: NormalizedCode) -> BarPattern:
    """Encode a normalized code with its own symbology's encoder."""
    if not isinstance(code, NormalizedCode):
        raise InvalidRequestError(
            f"encode() needs a NormalizedCode, got {type(code).__name__}; call normalize() first"
        )
    return get_encoder(code.symbology).encode(code)
