import array
import logging
from typing import Iterable, List, Optional

from .base import WORD_LENGTH, WORD_LOG, WORD_MASK
from .utils import to_signed


logger = logging.getLogger(__name__)

#: Growth by more words than this in one call is logged.
GROWTH_LOG_THRESHOLD = 1024


class WordStorage:
    """Word array plus the extension word standing in for every higher word.

    Word ``i`` holds bits ``[32 * i, 32 * i + 32)``. The extension is either
    0 (finite set) or all-ones (indefinite set). The array only grows.
    """
    TYPECODE = "L"  # at least 32 bits on every platform

    __slots__ = ("words", "extension")

    def __init__(self, words: Optional[Iterable[int]] = None, extension: int = 0):
        self.extension = WORD_MASK if extension else 0
        self.words = array.array(self.TYPECODE, words if words is not None else (0,))
        if not self.words:
            self.words.append(self.extension)

    @property
    def indefinite(self) -> bool:
        return self.extension != 0

    @property
    def extension_signed(self) -> int:
        return to_signed(self.extension)

    def words_signed(self) -> List[int]:
        return [to_signed(w) for w in self.words]

    def __len__(self) -> int:
        return len(self.words)

    def scale(self, index: int):
        """Grow the array with extension words until ``index`` is addressable."""
        needed = (index >> WORD_LOG) + 1 - len(self.words)
        if needed <= 0:
            return
        if needed > GROWTH_LOG_THRESHOLD:
            logger.debug(f"Growing word storage by {needed} words to address bit {index}")
        self.words.extend([self.extension] * needed)

    def word_at(self, i: int) -> int:
        """Stored word ``i``, or the extension word past the end."""
        if i < len(self.words):
            return self.words[i]
        return self.extension

    def bit_at(self, index: int) -> int:
        n = index >> WORD_LOG
        if n >= len(self.words):
            return self.extension & 1
        return (self.words[n] >> (index & (WORD_LENGTH - 1))) & 1

    def invert(self):
        """Flip every stored word and the extension in place."""
        words = self.words
        for i in range(len(words)):
            words[i] ^= WORD_MASK
        self.extension ^= WORD_MASK

    def zero(self):
        words = self.words
        for i in range(len(words)):
            words[i] = 0
        self.extension = 0

    def apply_mask(self, n: int, mask: int, value: Optional[int]):
        """Set (value truthy), clear (value falsy) or toggle (None) masked bits of word ``n``."""
        if value is None:
            self.words[n] ^= mask
        elif value:
            self.words[n] |= mask
        else:
            self.words[n] &= ~mask & WORD_MASK

    def highest_nonzero(self) -> int:
        """Index of the last non-zero stored word, -1 if all are zero."""
        words = self.words
        for i in range(len(words) - 1, -1, -1):
            if words[i]:
                return i
        return -1

    def copy(self) -> "WordStorage":
        return WordStorage(self.words, self.extension)

    def __eq__(self, other) -> bool:
        if not isinstance(other, WordStorage):
            return NotImplemented
        if self.extension != other.extension:
            return False
        for i in range(max(len(self.words), len(other.words))):
            if self.word_at(i) != other.word_at(i):
                return False
        return True

    def __repr__(self) -> str:
        return f"WordStorage(words={self.words.tolist()}, extension={self.extension:#x})"
