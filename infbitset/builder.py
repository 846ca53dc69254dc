import logging
import random
import re
from typing import Any, List, Optional

from .base import (
    DEFAULT_RANDOM_BITS,
    WORD_LENGTH,
    WORD_LOG,
    WORD_MASK,
    BitSetSyntaxError,
    ByteBuffer,
    EmptyInput,
    IndexList,
    NumeralString,
    ParsedBits,
    WordValue,
    is_infinity,
)


logger = logging.getLogger(__name__)

# prefix -> (base, digits per word, digit pattern)
NUMERAL_FORMATS = {
    "0b": (2, WORD_LENGTH, re.compile(r"[01]+")),
    "0x": (16, WORD_LENGTH // 4, re.compile(r"[0-9a-fA-F]+")),
}
DEFAULT_PREFIX = "0b"

INDEX_TYPES = (list, tuple, set, frozenset, range)
BUFFER_TYPES = (bytes, bytearray, memoryview)


def classify(value: Any) -> Any:
    """Map a raw constructor argument to its input variant.

    Variants pass through unchanged. Raises BitSetSyntaxError
    for anything else that is not understood.
    """
    if isinstance(value, (EmptyInput, WordValue, NumeralString, IndexList, ByteBuffer)):
        return value
    if value is None:
        return EmptyInput()
    if isinstance(value, int):
        return WordValue(value)
    if isinstance(value, str):
        return NumeralString(value)
    if isinstance(value, INDEX_TYPES):
        return IndexList(tuple(value))
    if isinstance(value, BUFFER_TYPES):
        return ByteBuffer(bytes(value))
    logger.debug(f"Rejected bitset input of type {type(value).__name__}")
    raise BitSetSyntaxError(f"Invalid param: unsupported type {type(value).__name__}")


def parse(value: Any) -> ParsedBits:
    """Coerce any accepted value into words plus extension.

    Bitsets are handled by the caller, which can share their words. The
    result here is always freshly built.
    """
    source = classify(value)
    if isinstance(source, EmptyInput):
        return ParsedBits([0], 0)
    if isinstance(source, WordValue):
        return ParsedBits([source.value & WORD_MASK], 0)
    if isinstance(source, NumeralString):
        return ParsedBits(parse_numeral(source.text), 0)
    if isinstance(source, IndexList):
        return parse_indices(source.indices)
    return ParsedBits(unpack_bytes(source.data), 0)


def parse_numeral(text: str) -> List[int]:
    """Parse a ``0b``/``0x`` numeral into words, least significant word first."""
    prefix = text[:2]
    if prefix in NUMERAL_FORMATS:
        digits = text[2:]
    else:
        prefix, digits = DEFAULT_PREFIX, text
    base, chunk, pattern = NUMERAL_FORMATS[prefix]

    if not digits:
        raise BitSetSyntaxError(f"Invalid param: empty numeral {text!r}")

    words = []
    end = len(digits)
    while end > 0:
        part = digits[max(end - chunk, 0):end]
        if not pattern.fullmatch(part):
            logger.debug(f"Rejected numeral chunk {part!r} of {text!r}")
            raise BitSetSyntaxError(f"Invalid param: {text!r} is not a base {base} numeral")
        words.append(int(part, base))
        end -= chunk
    return words


def parse_indices(indices) -> ParsedBits:
    words = [0]
    extension = 0
    for index in indices:
        if is_infinity(index):
            extension = WORD_MASK
            continue
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise BitSetSyntaxError(f"Invalid param: bad bit index {index!r}")
        n = index >> WORD_LOG
        if n >= len(words):
            words.extend([0] * (n + 1 - len(words)))
        words[n] |= 1 << (index & (WORD_LENGTH - 1))
    return ParsedBits(words, extension)


def unpack_bytes(data: bytes) -> List[int]:
    """Byte ``i`` bit ``j`` lands on position ``8 * i + j``."""
    words = [0] * max(1, -(-len(data) // 4))
    for i, byte in enumerate(data):
        words[i >> 2] |= byte << ((i & 3) * 8)
    return words


def random_words(n: Optional[int] = None, rng: Optional[random.Random] = None) -> List[int]:
    """Words holding ``n`` uniformly random bits, higher bits cleared."""
    if n is None or n < 0:
        n = DEFAULT_RANDOM_BITS
    rng = rng or random
    count = max(1, -(-n // WORD_LENGTH))
    words = [rng.getrandbits(WORD_LENGTH) for _ in range(count)]
    rest = n % WORD_LENGTH
    if n == 0:
        words[0] = 0
    elif rest:
        words[-1] &= (1 << rest) - 1
    return words
