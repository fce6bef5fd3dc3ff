"""
model/enums.py

(Краткое RU: Перечисление поддерживаемых 1D-символик штрихкода.)

EN: Closed set of barcode symbologies the encoder implements. Each member
owns its own length rules, tables and encoder; adding a symbology means
adding a member here plus its table and encoder, without touching the
existing ones.

NO encoding logic here! See src/retail_barcode/barcodegen for that.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, FrozenSet, Literal, Mapping

from retail_barcode.barcodegen.exceptions import UnsupportedSymbologyError

_logger: Final[logging.Logger] = logging.getLogger(__name__)

# 2D symbologies known by name only; requesting one is a clear error, not an unknown type.
UNIMPLEMENTED_2D_SYMBOLOGIES: Final[FrozenSet[str]] = frozenset({"qr"})


class Symbology(str, Enum):
    UPC_A = "upc-a"
    EAN_13 = "ean-13"
    CODE_128 = "code-128"  # Code Set B printable subset only

    @property
    def is_checksummed(self) -> bool:
        """True when the symbology carries a mandatory trailing check digit."""
        return self in {Symbology.UPC_A, Symbology.EAN_13}

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            self.UPC_A: "UPC-A (товар, Северная Америка)",
            self.EAN_13: "EAN-13 (товар)",
            self.CODE_128: "Code 128 (набор B)",
        }
        names_en = {
            self.UPC_A: "UPC-A",
            self.EAN_13: "EAN-13",
            self.CODE_128: "Code 128 (Set B)",
        }
        return names_ru[self] if lang == "ru" else names_en[self]

    @classmethod
    def parse(cls, name: object) -> "Symbology":
        """
        Resolve a wire-level type name ("upc-a", "EAN13", ...) to a member.

        Raises:
            UnsupportedSymbologyError: unknown name, non-string, or a 2D type.
        """
        if isinstance(name, Symbology):
            return name
        if not isinstance(name, str):
            raise UnsupportedSymbologyError(
                f"Barcode type must be a string, got {type(name).__name__}",
                context={"type": repr(name)},
            )
        key = name.strip().lower()
        member = _ALIASES.get(key)
        if member is not None:
            return member
        if key in UNIMPLEMENTED_2D_SYMBOLOGIES:
            _logger.debug("Rejected 2D symbology %r", key)
            raise UnsupportedSymbologyError(
                f"Barcode type {name} is a 2D symbology and is not implemented",
                context={"type": name, "supported": [s.value for s in cls]},
            )
        raise UnsupportedSymbologyError(
            f"Barcode type {name} not supported",
            context={"type": name, "supported": [s.value for s in cls]},
        )


_ALIASES: Final[Mapping[str, Symbology]] = {
    "upc-a": Symbology.UPC_A,
    "upca": Symbology.UPC_A,
    "upc_a": Symbology.UPC_A,
    "ean-13": Symbology.EAN_13,
    "ean13": Symbology.EAN_13,
    "ean_13": Symbology.EAN_13,
    "code-128": Symbology.CODE_128,
    "code128": Symbology.CODE_128,
    "code_128": Symbology.CODE_128,
}


__all__ = [
    "Symbology",
    "UNIMPLEMENTED_2D_SYMBOLOGIES",
]
