from typing import Any

from .base import (
    INFINITY,
    WORD_LENGTH,
    BitSetError,
    BitSetSyntaxError,
    ByteBuffer,
    EmptyInput,
    IndefiniteSetError,
    IndexList,
    NumeralString,
    ReadOnlyBitSet,
    WordValue,
)
from .engine import BitSet
from .storage import WordStorage


__all__ = [
    "BitSet",
    "ReadOnlyBitSet",
    "WordStorage",
    "BitSetError",
    "BitSetSyntaxError",
    "IndefiniteSetError",
    "EmptyInput",
    "WordValue",
    "NumeralString",
    "IndexList",
    "ByteBuffer",
    "INFINITY",
    "WORD_LENGTH",
    "load_bitset"
]

__version__ = "1.0.0"


def load_bitset(value: Any = None) -> BitSet:
    """
    Factory function building a bitset from any supported input.

    Args:
        value: None, an int, a ``0b``/``0x`` numeral string, a collection of
               bit indices (``INFINITY`` marks the set indefinite), a byte
               buffer, an input variant or another BitSet.
    """
    return BitSet(value)
