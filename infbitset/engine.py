import logging
import operator
import random
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .base import (
    INFINITY,
    MAX_BASE,
    MIN_BASE,
    WORD_LENGTH,
    WORD_LOG,
    WORD_MASK,
    BitSetSyntaxError,
    IndefiniteSetError,
    Number,
    ParsedBits,
)
from .builder import parse, random_words
from .storage import WordStorage
from .utils import (
    highest_bit,
    long_division_digits,
    pop_count,
    power_of_two_digits,
    power_of_two_shift,
    trailing_zeros,
)


logger = logging.getLogger(__name__)

BIT_MASK = WORD_LENGTH - 1
INDEFINITE_MARKER = "...1111"


def parse_operand(value: Any) -> ParsedBits:
    """Words and extension of an operand.

    A bitset operand lends its own word array (read-only); anything else is
    parsed into fresh words.
    """
    if isinstance(value, BitSet):
        return ParsedBits(value._storage.words, value._storage.extension)
    return parse(value)


def _range_masks(from_: int, to: int) -> Iterator[Tuple[int, int]]:
    """(word index, mask) pairs covering the inclusive bit range."""
    first, last = from_ >> WORD_LOG, to >> WORD_LOG
    for n in range(first, last + 1):
        lo = from_ & BIT_MASK if n == first else 0
        hi = to & BIT_MASK if n == last else BIT_MASK
        yield n, ((1 << (hi - lo + 1)) - 1) << lo


class BitSet:
    """Growable bitset over non-negative indices, finite or indefinite.

    An indefinite set has every bit past its stored words set, which keeps
    complement exact: ``~BitSet()`` contains every index.

    Mutators (``set``, ``flip``, ``clear``, ``set_range``) change the
    instance and return it for chaining. Combinators (``and_``, ``or_``,
    ``xor``, ``and_not``, ``not_``, ``slice``, ``clone``) return a new
    instance that shares no storage with its operands. Every ``other``
    operand accepts whatever the constructor accepts.

    >>> BitSet([0, 2, 4]).to_string()
    '10101'
    >>> (BitSet("0b1010") & BitSet("0b1100")).to_string()
    '1000'
    >>> (~BitSet(5)).to_string()
    '...1111010'
    """

    __slots__ = ("_storage",)

    def __init__(self, value: Any = None):
        parsed = parse_operand(value)
        # WordStorage copies, so a shared source array is never aliased
        self._storage = WordStorage(parsed.words, parsed.extension)

    @classmethod
    def _from_storage(cls, storage: WordStorage) -> "BitSet":
        obj = cls.__new__(cls)
        obj._storage = storage
        return obj

    @classmethod
    def from_binary_string(cls, text: str) -> "BitSet":
        return cls("0b" + text)

    @classmethod
    def from_hex_string(cls, text: str) -> "BitSet":
        return cls("0x" + text)

    @classmethod
    def random(cls, n: Optional[int] = None, rng: Optional[random.Random] = None) -> "BitSet":
        """Finite set of ``n`` uniformly random bits (32 when omitted)."""
        return cls._from_storage(WordStorage(random_words(n, rng), 0))

    # ---- raw view ----
    @property
    def words(self) -> List[int]:
        """Stored words as signed 32-bit integers, lowest word first."""
        return self._storage.words_signed()

    @property
    def extension(self) -> int:
        """0 for a finite set, -1 (all ones) for an indefinite one."""
        return self._storage.extension_signed

    @property
    def indefinite(self) -> bool:
        return self._storage.indefinite

    # ---- mutators ----
    def set(self, index: int, value: Any = 1) -> "BitSet":
        """Set bit ``index`` to ``value`` (1 when omitted or None)."""
        index = self._check_index(index)
        self._storage.scale(index)
        bit = 0 if value is not None and not value else 1
        self._storage.apply_mask(index >> WORD_LOG, 1 << (index & BIT_MASK), bit)
        return self

    def flip(self, from_: Optional[int] = None, to: Optional[int] = None) -> "BitSet":
        """Toggle all bits, one bit, or an inclusive range."""
        if from_ is None:
            self._storage.invert()
        elif to is None:
            index = self._check_index(from_)
            self._storage.scale(index)
            self._storage.apply_mask(index >> WORD_LOG, 1 << (index & BIT_MASK), None)
        else:
            self._apply_range(from_, to, None)
        return self

    def clear(self, from_: Optional[int] = None, to: Optional[int] = None) -> "BitSet":
        """Zero all bits (finite again), one bit, or an inclusive range."""
        if from_ is None:
            self._storage.zero()
        elif to is None:
            index = self._check_index(from_)
            self._storage.scale(index)
            self._storage.apply_mask(index >> WORD_LOG, 1 << (index & BIT_MASK), 0)
        else:
            self._apply_range(from_, to, 0)
        return self

    def set_range(self, from_: int, to: int, value: Any = 1) -> "BitSet":
        """Set an inclusive range to ``value`` (1 when omitted or None)."""
        bit = 0 if value is not None and not value else 1
        self._apply_range(from_, to, bit)
        return self

    def _apply_range(self, from_: int, to: int, value: Optional[int]):
        from_, to = operator.index(from_), operator.index(to)
        if from_ < 0 or from_ > to:
            return
        storage = self._storage
        storage.scale(to)
        for n, mask in _range_masks(from_, to):
            storage.apply_mask(n, mask, value)

    @staticmethod
    def _check_index(index: int) -> int:
        index = operator.index(index)
        if index < 0:
            raise IndexError(f"Bit index must be non-negative, got {index}")
        return index

    # ---- combinators ----
    def _combine(self, other: Any, op: Callable[[int, int], int]) -> "BitSet":
        p = parse_operand(other)
        s = self._storage
        pw, pe = p.words, p.extension
        pl = len(pw)
        words = [
            op(s.word_at(i), pw[i] if i < pl else pe) & WORD_MASK
            for i in range(max(len(s), pl))
        ]
        return BitSet._from_storage(WordStorage(words, op(s.extension, pe) & WORD_MASK))

    def and_(self, other: Any) -> "BitSet":
        return self._combine(other, operator.and_)

    def or_(self, other: Any) -> "BitSet":
        return self._combine(other, operator.or_)

    def xor(self, other: Any) -> "BitSet":
        return self._combine(other, operator.xor)

    def and_not(self, other: Any) -> "BitSet":
        return self._combine(other, lambda a, b: a & ~b)

    def not_(self) -> "BitSet":
        result = self.clone()
        result._storage.invert()
        return result

    def clone(self) -> "BitSet":
        return BitSet._from_storage(self._storage.copy())

    def slice(self, from_: Optional[int] = None, to: Optional[int] = None) -> Optional["BitSet"]:
        """Bits ``[from_, to]`` (or ``[from_, inf)``) moved down to index 0.

        Returns None for a negative ``from_`` or ``from_ > to``. Without
        ``to`` the extension is kept, so an indefinite set keeps its tail.
        """
        if from_ is None:
            return self.clone()
        from_ = operator.index(from_)
        if from_ < 0 or (to is not None and from_ > to):
            logger.debug(f"Empty slice bounds from={from_} to={to}")
            return None
        if to is None:
            length = len(self._storage) * WORD_LENGTH - from_
            return BitSet._from_storage(WordStorage(self._extract(from_, length), self._storage.extension))
        length = operator.index(to) - from_ + 1
        words = self._extract(from_, length)
        rest = length & BIT_MASK
        if rest:
            words[-1] &= (1 << rest) - 1
        return BitSet._from_storage(WordStorage(words, 0))

    def _extract(self, start: int, length: int) -> List[int]:
        """Words holding bits from ``start`` on, reading past the end through the extension."""
        s = self._storage
        base, offset = start >> WORD_LOG, start & BIT_MASK
        count = max(1, -(-length // WORD_LENGTH))
        words = []
        for j in range(base, base + count):
            word = s.word_at(j) >> offset
            if offset:
                word |= s.word_at(j + 1) << (WORD_LENGTH - offset)
            words.append(word & WORD_MASK)
        return words

    # ---- queries ----
    def get(self, index: int) -> int:
        return self._storage.bit_at(self._check_index(index))

    def equals(self, other: Any) -> bool:
        p = parse_operand(other)
        return self._storage == WordStorage(p.words, p.extension)

    def is_empty(self) -> bool:
        s = self._storage
        return not s.extension and s.highest_nonzero() < 0

    def cardinality(self) -> Number:
        if self._storage.indefinite:
            return INFINITY
        return sum(pop_count(w) for w in self._storage.words)

    def msb(self) -> Number:
        """Highest set bit, INFINITY when indefinite or when no bit is set."""
        s = self._storage
        if s.indefinite:
            return INFINITY
        i = s.highest_nonzero()
        if i < 0:
            return INFINITY
        return i * WORD_LENGTH + highest_bit(s.words[i])

    def _lowest(self) -> Optional[int]:
        for i, w in enumerate(self._storage.words):
            if w:
                return i * WORD_LENGTH + trailing_zeros(w)
        return None

    def lsb(self) -> int:
        """Lowest set bit; the extension bit when every stored word is zero."""
        lowest = self._lowest()
        if lowest is None:
            return self._storage.extension & 1
        return lowest

    def ntz(self) -> Number:
        """Number of trailing zeros, INFINITY when every stored word is zero."""
        lowest = self._lowest()
        return INFINITY if lowest is None else lowest

    def to_array(self) -> List[Number]:
        ret: List[Number] = []
        for i, w in enumerate(self._storage.words):
            while w:
                ret.append(i * WORD_LENGTH + trailing_zeros(w))
                w &= w - 1
        if self._storage.indefinite:
            ret.append(INFINITY)
        return ret

    def to_string(self, base: Optional[int] = 2) -> str:
        """Digits of the set read as a binary number, most significant first.

        Power-of-two bases read digits straight from the words; an
        indefinite set gets four 1 digits prepended and its leading run of 1
        digits replaced by ``...1111``, e.g. ``...1111010``. Other bases use long division and
        raise IndefiniteSetError for indefinite sets.
        """
        if not base:
            base = 2
        if isinstance(base, bool) or not isinstance(base, int) or not MIN_BASE <= base <= MAX_BASE:
            raise BitSetSyntaxError(f"Invalid base {base!r}")

        s = self._storage
        shift = power_of_two_shift(base)
        if shift:
            digits = power_of_two_digits(list(s.words), shift, s.extension)
            if not s.indefinite:
                return digits.lstrip("0") or "0"
            return INDEFINITE_MARKER + ("1111" + digits).lstrip("1")

        if s.indefinite:
            raise IndefiniteSetError(f"Cannot render an indefinite set in base {base}")
        return long_division_digits(s.words, base)

    def __iter__(self) -> Iterator[int]:
        """Bit values from index 0; endless for an indefinite set."""
        s = self._storage
        if s.indefinite:
            index = 0
            while True:
                yield s.bit_at(index)
                index += 1
        top = self.msb()
        if top == INFINITY:
            return
        for index in range(top + 1):
            yield s.bit_at(index)

    # ---- protocol ----
    def __getitem__(self, index: int) -> int:
        return self.get(index)

    def __setitem__(self, index: int, value: Any):
        self.set(index, value)

    def __contains__(self, index: Any) -> bool:
        if not isinstance(index, int) or index < 0:
            return False
        return bool(self.get(index))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __and__(self, other: Any) -> "BitSet":
        return self.and_(other)

    __rand__ = __and__

    def __or__(self, other: Any) -> "BitSet":
        return self.or_(other)

    __ror__ = __or__

    def __xor__(self, other: Any) -> "BitSet":
        return self.xor(other)

    __rxor__ = __xor__

    def __sub__(self, other: Any) -> "BitSet":
        return self.and_not(other)

    def __rsub__(self, other: Any) -> "BitSet":
        return BitSet(other).and_not(self)

    def __invert__(self) -> "BitSet":
        return self.not_()

    def __copy__(self) -> "BitSet":
        return self.clone()

    def __deepcopy__(self, memo) -> "BitSet":
        return self.clone()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<BitSet {self.to_string()}>"
