"""
scoring.py

Heuristic word scores plus the partition metrics used to judge a guess
against a candidate pool.

Metrics per guess:
- exp_remaining: expected remaining candidates after the feedback
- entropy: information gain in bits (higher is better)
- worst_case: size of the largest bucket (lower is better)
- partitions: number of distinct feedback patterns induced
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from math import log2
from typing import Dict, Iterable, List, Optional, Sequence

from wordlebot.config import StrategyConfig
from wordlebot.constraints import ConstraintModel
from wordlebot.feedback import pattern_to_int, simulate_feedback
from wordlebot.frequency import FrequencyTables


def pattern_histogram(guess: str, pool: Iterable[str]) -> Dict[int, int]:
    """
    For a given guess, compute a histogram over feedback patterns across all pool words.
    Returns a dict: pattern_code -> count
    """
    counts: Dict[int, int] = defaultdict(int)
    for secret in pool:
        counts[pattern_to_int(simulate_feedback(guess, secret))] += 1
    return counts


def _entropy_from_counts(counts: Dict[int, int], total: int) -> float:
    h = 0.0
    for c in counts.values():
        p = c / total
        if p > 0.0:
            h -= p * log2(p)
    return h


def entropy(guess: str, pool: Sequence[str]) -> float:
    """Shannon entropy (bits) of the partition of `pool` by the feedback `guess` would get."""
    if not pool:
        return 0.0
    return _entropy_from_counts(pattern_histogram(guess, pool), len(pool))


def worst_case_bucket(guess: str, pool: Sequence[str]) -> int:
    """Size of the largest feedback bucket; 0 for an empty pool."""
    counts = pattern_histogram(guess, pool)
    return max(counts.values()) if counts else 0


def expected_remaining(guess: str, pool: Sequence[str]) -> float:
    if not pool:
        return 0.0
    counts = pattern_histogram(guess, pool)
    return sum(c * c for c in counts.values()) / len(pool)


def guess_metrics(guess: str, pool: Sequence[str]) -> Dict[str, float]:
    """All partition metrics of `guess` over `pool` from a single histogram."""
    if not pool:
        raise ValueError("pool must be non-empty")
    counts = pattern_histogram(guess, pool)
    total = len(pool)
    return {
        "exp_remaining": float(sum(c * c for c in counts.values()) / total),
        "entropy": float(_entropy_from_counts(counts, total)),
        "worst_case": int(max(counts.values())),
        "partitions": int(len(counts)),
    }


@dataclass(frozen=True)
class ScoredCandidate:
    word: str
    score: float
    entropy: float = 0.0


class CandidateScorer:
    """Additive heuristic score over shared, read-only frequency tables."""

    def __init__(self, tables: FrequencyTables, strategy: StrategyConfig) -> None:
        self.tables = tables
        self.strategy = strategy
        self.weights = strategy.weights
        self._start = frozenset(ch.upper() for ch in strategy.common_start)
        self._end = frozenset(ch.upper() for ch in strategy.common_end)
        self._vowels = frozenset(ch.upper() for ch in strategy.vowels)

    def score(
        self,
        word: str,
        constraints: Optional[ConstraintModel] = None,
        pool: Optional[Sequence[str]] = None,
    ) -> float:
        word = word.upper()
        w = self.weights
        last = len(word) - 1
        score = 0.0

        for i, ch in enumerate(word):
            score += w.letter_frequency * self.tables.letter_weight(ch)
            if i < self.tables.word_length:
                score += w.positional * self.tables.positional_weight(i, ch)
            if i == 0 and ch in self._start:
                score += w.start_bonus
            if i == last and ch in self._end:
                score += w.common_end_bonus
            if ch in self._vowels:
                score += w.vowel_bonus * (w.middle_vowel_factor if 0 < i < last else 1.0)

        if constraints is not None:
            score += self._constraint_adjustment(word, constraints)

        if pool:
            if len(pool) <= self.strategy.small_pool:
                if word in {p.upper() for p in pool}:
                    score += w.pool_member_bonus
            else:
                score += w.entropy * entropy(word, pool)

        return score

    def _constraint_adjustment(self, word: str, constraints: ConstraintModel) -> float:
        w = self.weights
        adjustment = 0.0
        for ch, c in Counter(word).items():
            if ch not in constraints.tested_letters:
                adjustment += w.untested_letter_bonus

            required = constraints.min_counts.get(ch, 0)
            if c > 1:
                if required > 1:
                    adjustment += w.necessary_duplicate_bonus * (min(c, required) - 1)
                excess = c - max(required, 1)
                if excess > 0:
                    adjustment -= w.duplicate_penalty * excess

            hi = 0 if ch in constraints.forbidden_letters else constraints.max_counts.get(ch)
            if hi is not None and c > hi:
                adjustment -= w.max_count_penalty * (c - hi)
        return adjustment

    def rank(
        self,
        words: Iterable[str],
        constraints: Optional[ConstraintModel] = None,
        pool: Optional[Sequence[str]] = None,
    ) -> List[ScoredCandidate]:
        """Best first; ties broken by entropy over `pool`, then alphabetically."""
        scored = []
        for word in words:
            h = entropy(word, pool) if pool else 0.0
            scored.append(ScoredCandidate(word, self.score(word, constraints, pool), h))
        scored.sort(key=lambda c: (-c.score, -c.entropy, c.word))
        return scored
