"""
Feedback utilities for Wordle.

Letter results use the 0/1/2 convention (absent/present/correct) through an
IntEnum, so a pattern compares equal to a plain list of ints.
"""

from __future__ import annotations

import re
from collections import Counter
from enum import IntEnum
from typing import List, Sequence


class LetterResult(IntEnum):
    ABSENT = 0
    PRESENT = 1
    CORRECT = 2

    @classmethod
    def from_name(cls, name: str) -> "LetterResult":
        """Map the puzzle API's 'absent' / 'present' / 'correct' to a LetterResult."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown letter result: {name!r}") from None


Pattern = List[LetterResult]

_SYMBOLS = {
    "g": LetterResult.CORRECT,
    "y": LetterResult.PRESENT,
    "b": LetterResult.ABSENT,
    "2": LetterResult.CORRECT,
    "1": LetterResult.PRESENT,
    "0": LetterResult.ABSENT,
}


def _check_word(word: str, name: str, word_length: int | None = None) -> None:
    if not isinstance(word, str):
        raise TypeError(f"{name} must be a string")
    if word_length is not None and len(word) != word_length:
        raise ValueError(f"{name} must be length {word_length}")
    if not word.isalpha() or not word.isascii():
        raise ValueError(f"{name} must be alphabetic")


def simulate_feedback(guess: str, secret: str) -> Pattern:
    """
    Compute the Wordle feedback `guess` would receive against `secret`.

    Duplicate letters follow the two-pass rule:

    1) GREENS PASS: every position where guess and secret agree is CORRECT and
       consumes one copy of that letter from the secret's letter multiset.
    2) YELLOWS PASS: every other position is PRESENT while the multiset still
       holds a copy of the letter (consuming it), ABSENT otherwise.

    A letter guessed more often than the secret contains is therefore only
    marked CORRECT/PRESENT as many times as it really occurs.

    Both words are compared case-insensitively and must have the same length.
    """
    _check_word(guess, "guess")
    _check_word(secret, "secret")
    if len(guess) != len(secret):
        raise ValueError("guess and secret must have the same length")
    guess = guess.upper()
    secret = secret.upper()

    pattern: Pattern = [LetterResult.ABSENT] * len(guess)
    remaining = Counter(secret)

    # Pass 1: mark greens and decrement availability
    for i, (g, s) in enumerate(zip(guess, secret)):
        if g == s:
            pattern[i] = LetterResult.CORRECT
            remaining[g] -= 1

    # Pass 2: mark yellows where counts allow (else gray)
    for i, g in enumerate(guess):
        if pattern[i] == LetterResult.ABSENT and remaining[g] > 0:
            pattern[i] = LetterResult.PRESENT
            remaining[g] -= 1

    return pattern


# older name, still used by the tests
score_pattern = simulate_feedback


def pattern_to_int(pattern: Sequence[int]) -> int:
    """
    Encode a pattern of trits [p0, p1, ...] into a single integer in [0, 3**L - 1].

    Used as the bucket key when partitioning a pool by feedback.
    """
    if not isinstance(pattern, (list, tuple)):
        raise TypeError("pattern must be a list or tuple of integers in {0,1,2}")
    if not pattern:
        raise ValueError("pattern must not be empty")
    value = 0
    for p in pattern:
        if not isinstance(p, int) or p not in (0, 1, 2):
            raise ValueError("pattern elements must be integers in {0,1,2}")
        value = value * 3 + int(p)
    return value


def consistent_with(word: str, guess: str, pattern: Sequence[int]) -> bool:
    """True iff `word`, taken as the secret, would have produced `pattern` for `guess`."""
    _check_word(word, "word", len(guess))
    _check_word(guess, "guess")
    if len(pattern) != len(guess):
        raise ValueError("pattern must be as long as the guess")
    pattern_to_int(list(pattern))  # will raise if invalid
    return simulate_feedback(guess, word) == list(pattern)


def is_solved(pattern: Sequence[int]) -> bool:
    return bool(pattern) and all(p == LetterResult.CORRECT for p in pattern)


def parse_feedback(s: str, word_length: int = 5) -> Pattern:
    """Parse typed feedback into a pattern.

    Accepted forms:
      - letters: g/y/b  (green/yellow/black)
      - digits:  2/1/0
      - list:    [0, 1, 2, 2, 0]
      - words:   correct,present,absent,absent,correct
    Raises ValueError on invalid input.
    """
    s = s.strip().lower()
    if s.startswith("[") and s.endswith("]"):
        nums = re.findall(r"[012]", s)
        if len(nums) != word_length:
            raise ValueError(f"list form must contain exactly {word_length} 0/1/2 values")
        return [LetterResult(int(x)) for x in nums]

    if "," in s or " " in s:
        parts = [p for p in re.split(r"[,\s]+", s) if p]
        if len(parts) != word_length:
            raise ValueError(f"expected {word_length} results, got {len(parts)}")
        return [LetterResult.from_name(p) for p in parts]

    if len(s) != word_length:
        raise ValueError(f"feedback must be length {word_length} (gybgy / 21001 / [0,1,2,2,0])")
    try:
        return [_SYMBOLS[ch] for ch in s]
    except KeyError as e:
        raise ValueError("feedback must use only g/y/b or 2/1/0") from e


def format_pattern(pattern: Sequence[int]) -> str:
    """Render a pattern with the g/y/b letters parse_feedback accepts."""
    return "".join("byg"[int(p)] for p in pattern)
