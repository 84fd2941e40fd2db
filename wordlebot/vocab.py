from __future__ import annotations

from typing import Iterable, Iterator, List

import pandas as pd


class WordVocab:
    """Ordered, duplicate-free list of upper-case words of one length."""

    def __init__(self, words: List[str]) -> None:
        if not isinstance(words, list):
            raise TypeError("`words` must be a list of strings")
        if not words:
            raise ValueError("no words provided")
        if not all(isinstance(w, str) for w in words):
            raise TypeError("all items in `words` must be str")

        if len(set(words)) != len(words):
            raise ValueError("duplicate words detected; input to WordVocab must be deduplicated")
        lengths = {len(w) for w in words}
        if len(lengths) != 1:
            raise ValueError(f"words must all have the same length, got lengths {sorted(lengths)}")

        self._words: List[str] = list(words)
        self._index = {w: i for i, w in enumerate(self._words)}
        self.word_length = lengths.pop()

    # ---------- Construction helpers ----------

    @classmethod
    def from_words(cls, words: Iterable[str], *, word_len: int = 5) -> "WordVocab":
        """Upper-case, keep alphabetic words of `word_len`, drop later duplicates."""
        clean: List[str] = []
        seen = set()
        for val in words:
            if not isinstance(val, str):
                val = str(val) if val is not None else ""
            w = val.strip().upper()
            if len(w) != word_len or not w.isalpha() or not w.isascii():
                continue
            if w in seen:
                continue
            seen.add(w)
            clean.append(w)

        if not clean:
            raise ValueError("no valid words after filtering")
        return cls(clean)

    @classmethod
    def from_csv(cls, path: str, column: str = "word", *, word_len: int = 5) -> "WordVocab":
        """
        Load words from a CSV and build a WordVocab.

        Raises
        ------
        FileNotFoundError, KeyError, ValueError
        """
        df = pd.read_csv(path)
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found in {path}")
        return cls.from_words(df[column].tolist(), word_len=word_len)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.upper() in self._index

    def words(self) -> List[str]:
        """Return a copy of the internal word list (to avoid external mutation)."""
        return list(self._words)

    def index_of(self, word: str) -> int:
        """Return the index for `word`; raise KeyError if unknown."""
        try:
            return self._index[word.upper()]
        except KeyError:
            raise KeyError(f"unknown word: {word}") from None

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._words):
            raise IndexError(f"index out of range: {idx}")
        return self._words[idx]
