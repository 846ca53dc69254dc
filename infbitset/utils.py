from typing import Iterable, List

from .base import DIGITS, WORD_LENGTH, WORD_MASK


def pop_count(word: int) -> int:
    """Number of set bits in a 32-bit word."""
    count = 0
    n = word & WORD_MASK
    while n:
        n &= n - 1
        count += 1
    return count


def trailing_zeros(word: int) -> int:
    """Index of the lowest set bit of a non-zero word."""
    return ((word & -word) & WORD_MASK).bit_length() - 1


def highest_bit(word: int) -> int:
    """Index of the highest set bit of a word, -1 for zero."""
    return (word & WORD_MASK).bit_length() - 1


def to_signed(word: int) -> int:
    word &= WORD_MASK
    return word - (1 << WORD_LENGTH) if word >> (WORD_LENGTH - 1) else word


def power_of_two_shift(base: int) -> int:
    """Bits per digit for a power-of-two base, 0 otherwise."""
    if base < 2 or base & (base - 1):
        return 0
    return base.bit_length() - 1


def word_bits_msb_first(words: Iterable[int]) -> List[int]:
    """Flatten words (lowest word first) into bits, most significant first."""
    bits = []
    for word in reversed(list(words)):
        for j in range(WORD_LENGTH - 1, -1, -1):
            bits.append((word >> j) & 1)
    return bits


def divide(bits: List[int], base: int) -> int:
    """Divide a big-endian bit vector by base in place, return the remainder.

    Each position keeps the quotient digit for that bit weight, so the
    vector stays a valid binary number after every call.
    """
    r = 0
    for i in range(len(bits)):
        r = r * 2 + bits[i]
        bits[i] = r // base
        r %= base
    return r


def long_division_digits(words: Iterable[int], base: int) -> str:
    """Render non-negative words in any base by repeated long division."""
    bits = word_bits_msb_first(words)
    digits = []
    while True:
        digits.append(DIGITS[divide(bits, base)])
        if not any(bits):
            break
    return "".join(reversed(digits))


def power_of_two_digits(words: List[int], shift: int, extension: int = 0) -> str:
    """Read digits of ``shift`` bits each straight from the word array.

    Returns the untrimmed digit string, most significant digit first, wide
    enough to cover every stored bit. A digit straddling the last word takes
    its high bits from the extension word.
    """
    total = len(words) * WORD_LENGTH
    count = -(-total // shift)
    mask = (1 << shift) - 1
    digits = []
    for k in range(count - 1, -1, -1):
        pos = k * shift
        n, offset = divmod(pos, WORD_LENGTH)
        value = words[n] >> offset
        if offset + shift > WORD_LENGTH:
            upper = words[n + 1] if n + 1 < len(words) else extension
            value |= upper << (WORD_LENGTH - offset)
        digits.append(DIGITS[value & mask])
    return "".join(digits)
