from __future__ import annotations

import random
from typing import List

from wordlebot.vocab import WordVocab


class WordSampler:
    """Seedable source of secret words for local games."""

    def __init__(self, vocab: WordVocab, seed: int | None = None) -> None:
        if not isinstance(vocab, WordVocab):
            raise TypeError("vocab must be a WordVocab")
        self._vocab = vocab
        self._rng = random.Random(seed)

    def choice_word(self) -> str:
        return self._vocab.word_at(self._rng.randrange(len(self._vocab)))

    def sample_words(self, k: int) -> List[str]:
        """k distinct secrets (all of them, shuffled, if k exceeds the vocab)."""
        if not isinstance(k, int) or k <= 0:
            raise ValueError("k must be a positive integer")
        return self._rng.sample(self._vocab.words(), min(k, len(self._vocab)))
