"""
constraints.py

Keeps track of Wordle-style constraints and filters candidate words.

Feedback for one guess is first turned into a FeedbackDelta (analyze_result),
then merged into an immutable ConstraintModel. merge() is the only place
contradictions are detected.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Sequence, Tuple

from wordlebot.errors import ConstraintConflict
from wordlebot.feedback import LetterResult, simulate_feedback

log = logging.getLogger(__name__)


def _coerce_result(value) -> LetterResult:
    if isinstance(value, LetterResult):
        return value
    if isinstance(value, str):
        return LetterResult.from_name(value)
    if isinstance(value, int) and value in (0, 1, 2):
        return LetterResult(value)
    raise ValueError(f"invalid letter result: {value!r}")


@dataclass(frozen=True)
class FeedbackDelta:
    """Facts learned from a single guess."""

    guess: str
    greens: Mapping[int, str]
    min_counts: Mapping[str, int]
    max_counts: Mapping[str, int]
    banned_positions: Mapping[str, FrozenSet[int]]
    forbidden_letters: FrozenSet[str]
    tested_letters: FrozenSet[str]

    @property
    def word_length(self) -> int:
        return len(self.guess)


def analyze_result(guess: str, feedback: Sequence) -> FeedbackDelta:
    """
    Turn one guess and its per-letter feedback into constraint facts.

    - Correct = the letter is fixed at that slot
    - Present = the letter exists but not in that slot
    - Absent  = the letter is missing entirely, unless the same guess also
      got a correct/present for it, in which case the letter occurs exactly
      as often as those confirmed copies (and not in that slot)
    """
    if not isinstance(guess, str):
        raise TypeError("guess must be a string")
    if not guess.isalpha() or not guess.isascii():
        raise ValueError("guess must be alphabetic")
    if len(feedback) != len(guess):
        raise ValueError("feedback must be as long as the guess")
    guess = guess.upper()
    results = [_coerce_result(r) for r in feedback]

    # Pass 1: count confirmed copies per letter
    confirmed: Counter = Counter()
    for ch, r in zip(guess, results):
        if r != LetterResult.ABSENT:
            confirmed[ch] += 1

    greens: Dict[int, str] = {}
    max_counts: Dict[str, int] = {}
    banned: Dict[str, set] = {}
    forbidden = set()

    # Pass 2: slot-level facts plus the duplicate-letter cap
    for i, (ch, r) in enumerate(zip(guess, results)):
        if r == LetterResult.CORRECT:
            greens[i] = ch
        elif r == LetterResult.PRESENT:
            banned.setdefault(ch, set()).add(i)
        elif confirmed[ch] == 0:
            forbidden.add(ch)
        else:
            max_counts[ch] = confirmed[ch]
            banned.setdefault(ch, set()).add(i)

    return FeedbackDelta(
        guess=guess,
        greens=greens,
        min_counts=dict(confirmed),
        max_counts=max_counts,
        banned_positions={ch: frozenset(pos) for ch, pos in banned.items()},
        forbidden_letters=frozenset(forbidden),
        tested_letters=frozenset(guess),
    )


@dataclass(frozen=True)
class ConstraintModel:
    """Everything known about the secret after the feedback seen so far."""

    word_length: int = 5
    greens: Mapping[int, str] = field(default_factory=dict)
    min_counts: Mapping[str, int] = field(default_factory=dict)
    max_counts: Mapping[str, int] = field(default_factory=dict)
    banned_positions: Mapping[str, FrozenSet[int]] = field(default_factory=dict)
    forbidden_letters: FrozenSet[str] = frozenset()
    tested_letters: FrozenSet[str] = frozenset()

    @classmethod
    def empty(cls, word_length: int = 5) -> "ConstraintModel":
        if word_length <= 0:
            raise ValueError("word_length must be positive")
        return cls(word_length=word_length)

    @classmethod
    def from_history(
        cls, history: Iterable[Tuple[str, Sequence]], word_length: int = 5
    ) -> "ConstraintModel":
        model = cls.empty(word_length)
        for guess, feedback in history:
            model = model.merge(analyze_result(guess, feedback))
        return model

    # ---------- Merging ----------

    def merge(self, delta: FeedbackDelta) -> "ConstraintModel":
        """Return a new model holding the facts of both; raise ConstraintConflict if they disagree."""
        if delta.word_length != self.word_length:
            raise ValueError(
                f"guess length {delta.word_length} does not match word length {self.word_length}"
            )

        greens = dict(self.greens)
        for pos, ch in delta.greens.items():
            if greens.get(pos, ch) != ch:
                raise ConstraintConflict(
                    f"position {pos} cannot be both {greens[pos]} and {ch}", letter=ch
                )
            greens[pos] = ch

        min_counts = dict(self.min_counts)
        for ch, n in delta.min_counts.items():
            min_counts[ch] = max(min_counts.get(ch, 0), n)

        # caps accumulate across the whole game, not only the latest guess
        max_counts = dict(self.max_counts)
        for ch, n in delta.max_counts.items():
            max_counts[ch] = min(max_counts.get(ch, n), n)

        banned = dict(self.banned_positions)
        for ch, positions in delta.banned_positions.items():
            banned[ch] = banned.get(ch, frozenset()) | positions

        merged = ConstraintModel(
            word_length=self.word_length,
            greens=greens,
            min_counts=min_counts,
            max_counts=max_counts,
            banned_positions=banned,
            forbidden_letters=self.forbidden_letters | delta.forbidden_letters,
            tested_letters=self.tested_letters | delta.tested_letters,
        )
        merged.validate()
        return merged

    def validate(self) -> None:
        """Raise ConstraintConflict if the accumulated facts contradict each other."""
        for pos in self.greens:
            if not 0 <= pos < self.word_length:
                raise ConstraintConflict(f"green position {pos} outside word of length {self.word_length}")
        for ch, lo in self.min_counts.items():
            hi = self.max_counts.get(ch)
            if hi is not None and lo > hi:
                raise ConstraintConflict(f"{ch} needs at least {lo} but at most {hi}", letter=ch)
        for ch in self.forbidden_letters:
            if self.min_counts.get(ch, 0) > 0 or ch in self.greens.values():
                raise ConstraintConflict(f"{ch} is both forbidden and required", letter=ch)
        for pos, ch in self.greens.items():
            if pos in self.banned_positions.get(ch, ()):
                raise ConstraintConflict(f"{ch} is both fixed and banned at position {pos}", letter=ch)
        if sum(self.min_counts.values()) > self.word_length:
            raise ConstraintConflict("required letters do not fit in the word")

    # ---------- Queries ----------

    @property
    def is_empty(self) -> bool:
        return not (self.greens or self.min_counts or self.forbidden_letters or self.tested_letters)

    @property
    def present_letters(self) -> FrozenSet[str]:
        return frozenset(ch for ch, n in self.min_counts.items() if n > 0)

    def allows(self, word: str) -> bool:
        """True iff `word` is consistent with every known fact."""
        if len(word) != self.word_length:
            return False
        word = word.upper()
        for pos, ch in self.greens.items():
            if word[pos] != ch:
                return False
        counts = Counter(word)
        for ch in self.forbidden_letters:
            if counts[ch]:
                return False
        for ch, lo in self.min_counts.items():
            if counts[ch] < lo:
                return False
        for ch, hi in self.max_counts.items():
            if counts[ch] > hi:
                return False
        for ch, positions in self.banned_positions.items():
            for pos in positions:
                if word[pos] == ch:
                    return False
        return True

    def loosely_allows(self, word: str) -> bool:
        """Weaker test: every known-present letter appears and no forbidden letter does."""
        if len(word) != self.word_length:
            return False
        word = word.upper()
        if any(ch not in word for ch in self.present_letters):
            return False
        known = self.present_letters | frozenset(self.greens.values())
        return not any(ch in word for ch in self.forbidden_letters - known)

    def summary(self) -> str:
        pattern = "".join(self.greens.get(i, "_") for i in range(self.word_length))
        present = "".join(sorted(self.present_letters - frozenset(self.greens.values())))
        forbidden = "".join(sorted(self.forbidden_letters))
        return f"{pattern} present={present or '-'} absent={forbidden or '-'}"


def filter_candidates(constraints: ConstraintModel, pool: Sequence[str]) -> List[str]:
    """Keep, in order, the words of `pool` that satisfy every constraint."""
    candidates = []
    for w in pool:
        if constraints.allows(w):
            candidates.append(w)
    log.debug("filter kept %d of %d words", len(candidates), len(pool))
    return candidates


def filter_by_history(words: Sequence[str], history: Sequence[Tuple[str, Sequence]]) -> List[str]:
    """
    Keep only candidates that match *all* (guess, pattern) pairs in history.
    Re-simulates every guess, so it is exact but slower than filter_candidates.
    """
    candidates = []
    for w in words:
        ok = True
        for guess, patt in history:
            if simulate_feedback(guess, w) != [_coerce_result(p) for p in patt]:
                ok = False
                break
        if ok:
            candidates.append(w)
    return candidates

