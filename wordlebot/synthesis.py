"""
synthesis.py

Beam search that invents plausible words letter by letter from positional
frequencies. Only used when no known word fits the constraints.

Partial words are pruned by small predicates so each heuristic can be
tested on its own:
  - has_vowel_by_third_letter: three letters and still no vowel
  - no_consonant_triple: three consonants in a row before the last slot
  - the constraint predicates (greens, forbidden letters, banned slots,
    letter caps, whether the required letters still fit)
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Collection, List, Optional, Tuple

from wordlebot.constraints import ConstraintModel
from wordlebot.dictionary import DictionaryValidator
from wordlebot.errors import ValidationUnavailable
from wordlebot.frequency import FrequencyTables

log = logging.getLogger(__name__)

VOWELS = frozenset("AEIOU")


def has_vowel_by_third_letter(partial: str, vowels: Collection[str] = VOWELS) -> bool:
    return len(partial) < 3 or any(ch in vowels for ch in partial)


def no_consonant_triple(partial: str, word_length: int, vowels: Collection[str] = VOWELS) -> bool:
    if len(partial) >= word_length or len(partial) < 3:
        return True
    return any(ch in vowels for ch in partial[-3:])


def respects_greens(partial: str, constraints: ConstraintModel) -> bool:
    return all(partial[pos] == ch for pos, ch in constraints.greens.items() if pos < len(partial))


def avoids_forbidden(partial: str, constraints: ConstraintModel) -> bool:
    return not any(ch in constraints.forbidden_letters for ch in partial)


def avoids_banned_positions(partial: str, constraints: ConstraintModel) -> bool:
    return not any(i in constraints.banned_positions.get(ch, ()) for i, ch in enumerate(partial))


def within_max_counts(partial: str, constraints: ConstraintModel) -> bool:
    counts = Counter(partial)
    return all(counts[ch] <= hi for ch, hi in constraints.max_counts.items())


def can_still_meet_minimums(partial: str, constraints: ConstraintModel) -> bool:
    counts = Counter(partial)
    missing = sum(max(0, lo - counts[ch]) for ch, lo in constraints.min_counts.items())
    return missing <= constraints.word_length - len(partial)


def keep_partial(
    partial: str,
    word_length: int,
    vowels: Collection[str] = VOWELS,
    constraints: Optional[ConstraintModel] = None,
) -> bool:
    if not has_vowel_by_third_letter(partial, vowels):
        return False
    if not no_consonant_triple(partial, word_length, vowels):
        return False
    if constraints is None:
        return True
    return (
        respects_greens(partial, constraints)
        and avoids_forbidden(partial, constraints)
        and avoids_banned_positions(partial, constraints)
        and within_max_counts(partial, constraints)
        and can_still_meet_minimums(partial, constraints)
    )


class BeamSearchSynthesizer:
    def __init__(
        self,
        tables: FrequencyTables,
        validator: DictionaryValidator,
        beam_width: int = 100,
        vowels: Collection[str] = VOWELS,
    ) -> None:
        if beam_width <= 0:
            raise ValueError("beam_width must be positive")
        self.tables = tables
        self.validator = validator
        self.beam_width = beam_width
        self.vowels = frozenset(v.upper() for v in vowels)

    def generate(self, constraints: Optional[ConstraintModel] = None) -> List[str]:
        """Raw beam output, best first. Nothing here is checked against a dictionary."""
        length = self.tables.word_length
        if constraints is not None and constraints.word_length != length:
            raise ValueError("constraints and frequency tables disagree on word length")

        beam: List[Tuple[str, float]] = [("", 0.0)]
        for pos in range(length):
            if constraints is not None and pos in constraints.greens:
                letters = [constraints.greens[pos]]
            else:
                letters = self.tables.letters_at(pos)

            extended: List[Tuple[str, float]] = []
            for partial, weight in beam:
                for ch in letters:
                    candidate = partial + ch
                    if keep_partial(candidate, length, self.vowels, constraints):
                        extended.append((candidate, weight + self.tables.positional_weight(pos, ch)))

            extended.sort(key=lambda item: (-item[1], item[0]))
            beam = extended[: self.beam_width]
            if not beam:
                log.debug("beam emptied at position %d", pos)
                return []

        return [word for word, _ in beam]

    def synthesize(self, constraints: Optional[ConstraintModel] = None) -> List[str]:
        """Beam output that the dictionary accepts (one validation round-trip)."""
        words = self.generate(constraints)
        if not words:
            return []
        try:
            known = self.validator.filter_known_words(words)
        except ValidationUnavailable as e:
            log.warning("dictionary unavailable, keeping all %d synthesized words: %s", len(words), e)
            known = words
        log.debug("synthesized %d words, %d passed the dictionary", len(words), len(known))
        return known
