"""
frequency.py

Letter and positional frequency tables, built once from the corpus and shared
read-only by the scorer and the synthesizer.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

ALPHABET = string.ascii_uppercase


def _li(c: str) -> int:
    """Map an upper-case letter to 0..25."""
    return ord(c) - 65


@dataclass(frozen=True, eq=False)
class FrequencyTables:
    """
    letter_weights: shape (26,)  relative frequency of each letter, scaled to [0, 1],
                    plus the common-letter boost
    positional:     shape (L, 26) share of words with a letter at a position,
                    scaled per position to [0, 1]
    """

    word_length: int
    letter_weights: np.ndarray
    positional: np.ndarray

    @classmethod
    def build(
        cls,
        words: Sequence[str],
        common_letters: Sequence[str] = (),
        word_length: int = 5,
    ) -> "FrequencyTables":
        words = [w.upper() for w in words if len(w) == word_length and w.isalpha()]
        if not words:
            raise ValueError("no words of the configured length to build frequency tables from")

        letter_counts = np.zeros(26, dtype=np.float64)
        pos_counts = np.zeros((word_length, 26), dtype=np.float64)
        for w in words:
            for pos, ch in enumerate(w):
                li = _li(ch)
                letter_counts[li] += 1
                pos_counts[pos, li] += 1

        letter_weights = letter_counts / letter_counts.max()
        # Higher boost for letters earlier in the common-letter ranking
        n = len(common_letters)
        for rank, ch in enumerate(common_letters):
            li = _li(ch.upper())
            if letter_counts[li] > 0:
                letter_weights[li] += (n - rank) / n

        col_max = pos_counts.max(axis=1, keepdims=True)
        positional = np.divide(pos_counts, col_max, out=np.zeros_like(pos_counts), where=col_max > 0)

        letter_weights.setflags(write=False)
        positional.setflags(write=False)
        return cls(word_length=word_length, letter_weights=letter_weights, positional=positional)

    def letter_weight(self, ch: str) -> float:
        return float(self.letter_weights[_li(ch)])

    def positional_weight(self, pos: int, ch: str) -> float:
        return float(self.positional[pos, _li(ch)])

    def letters_at(self, pos: int) -> List[str]:
        """Letters seen at `pos` in the corpus, most frequent first."""
        row = self.positional[pos]
        order = sorted((li for li in range(26) if row[li] > 0), key=lambda li: (-row[li], li))
        return [ALPHABET[li] for li in order]
