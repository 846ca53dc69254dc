import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Protocol, Union, runtime_checkable


WORD_LENGTH = 32
WORD_LOG = 5
WORD_MASK = (1 << WORD_LENGTH) - 1

#: Returned by queries with no finite answer, and accepted in index lists
#: to mark a set as indefinite.
INFINITY = math.inf

DEFAULT_RANDOM_BITS = WORD_LENGTH
DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
MIN_BASE = 2
MAX_BASE = 36

Number = Union[int, float]


class BitSetError(Exception):
    """Base class for all bitset errors."""


class BitSetSyntaxError(BitSetError, ValueError):
    """Malformed input: bad numeral string, unsupported type or base."""


class IndefiniteSetError(BitSetError, ArithmeticError):
    """The operation needs a finite magnitude but the set is indefinite."""


@dataclass(frozen=True)
class EmptyInput:
    """No value: the all-zero set."""


@dataclass(frozen=True)
class WordValue:
    """A single integer stored as one 32-bit word."""
    value: int


@dataclass(frozen=True)
class NumeralString:
    """Binary (``0b``, default) or hex (``0x``) numeral."""
    text: str


@dataclass(frozen=True)
class IndexList:
    """Indices of the set bits, optionally holding INFINITY."""
    indices: tuple = ()


@dataclass(frozen=True)
class ByteBuffer:
    """Bytes unpacked LSB first into consecutive bit positions."""
    data: bytes = b""


BitInput = Union[EmptyInput, WordValue, NumeralString, IndexList, ByteBuffer]


@dataclass
class ParsedBits:
    """Result of coercing an input: words plus extension word.

    ``words`` may belong to another bitset and must be copied before it is
    mutated.
    """
    words: List[int] = field(default_factory=lambda: [0])
    extension: int = 0

    @property
    def indefinite(self) -> bool:
        return self.extension != 0


@runtime_checkable
class ReadOnlyBitSet(Protocol):
    """The non-mutating surface of a bitset."""

    def and_(self, other) -> "ReadOnlyBitSet": ...

    def or_(self, other) -> "ReadOnlyBitSet": ...

    def xor(self, other) -> "ReadOnlyBitSet": ...

    def and_not(self, other) -> "ReadOnlyBitSet": ...

    def not_(self) -> "ReadOnlyBitSet": ...

    def equals(self, other) -> bool: ...

    def clone(self) -> "ReadOnlyBitSet": ...

    def is_empty(self) -> bool: ...

    def to_string(self, base: Optional[int] = 2) -> str: ...

    def to_array(self) -> List[Number]: ...

    def cardinality(self) -> Number: ...

    def msb(self) -> Number: ...

    def lsb(self) -> int: ...

    def ntz(self) -> Number: ...

    def get(self, index: int) -> int: ...

    def slice(self, from_: Optional[int] = None, to: Optional[int] = None) -> Optional["ReadOnlyBitSet"]: ...

    def __iter__(self) -> Iterator[int]: ...


def is_infinity(value) -> bool:
    return isinstance(value, float) and math.isinf(value) and value > 0
