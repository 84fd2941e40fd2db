"""
selector.py

Picks the next guess from the constraint model.

The branch is decided by how many unguessed candidates survive the filter:

  empty      -> fallback chain: synthesize, loose match, starting word
  <= 2       -> the first remaining candidate
  <= 20      -> minimax: smallest worst-case bucket, ties by
                0.7 * entropy + 0.3 * score
  otherwise  -> entropy_weight * entropy + (1 - entropy_weight) * score over
                a capped sample of the best heuristic words

Probe guesses in the last two branches come from the whole guess list, so a
guess need not be a possible answer.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple

from wordlebot.config import BotConfig, StrategyConfig
from wordlebot.constraints import (
    ConstraintModel,
    FeedbackDelta,
    analyze_result,
    filter_candidates,
)
from wordlebot.dictionary import DictionaryValidator, VocabValidator
from wordlebot.errors import NoGuessFound
from wordlebot.frequency import FrequencyTables
from wordlebot.scoring import CandidateScorer, entropy, worst_case_bucket
from wordlebot.synthesis import BeamSearchSynthesizer

log = logging.getLogger(__name__)

Fallback = Callable[[ConstraintModel, Set[str], List[str]], Optional[str]]


class GuessSelector:
    def __init__(
        self,
        answers: Sequence[str],
        guesses: Sequence[str],
        starting_words: Sequence[str],
        scorer: CandidateScorer,
        synthesizer: BeamSearchSynthesizer,
        strategy: StrategyConfig,
    ) -> None:
        if not answers:
            raise ValueError("answers must be non-empty")
        self.answers = [w.upper() for w in answers]
        # probes: every guessable word, answers included, first occurrence wins
        self.guesses = list(dict.fromkeys([w.upper() for w in guesses] + self.answers))
        self.starting_words = list(dict.fromkeys(w.upper() for w in starting_words))
        self.scorer = scorer
        self.synthesizer = synthesizer
        self.strategy = strategy
        self.word_length = len(self.answers[0])
        self.fallbacks: Tuple[Tuple[str, Fallback], ...] = (
            ("synthesis", self._synthesized_guess),
            ("loose match", self._loose_guess),
            ("starting word", self._starting_guess),
        )

    @classmethod
    def from_config(
        cls,
        config: BotConfig,
        answers: Sequence[str],
        guesses: Optional[Sequence[str]] = None,
        validator: Optional[DictionaryValidator] = None,
    ) -> "GuessSelector":
        """Build the frequency tables once and wire scorer and synthesizer around them."""
        guesses = list(guesses) if guesses is not None else list(answers)
        strategy = config.strategy
        tables = FrequencyTables.build(guesses, strategy.common_letters, config.game.word_length)
        scorer = CandidateScorer(tables, strategy)
        if validator is None:
            validator = VocabValidator(guesses)
        synthesizer = BeamSearchSynthesizer(tables, validator, strategy.beam_width, strategy.vowels)
        return cls(answers, guesses, strategy.starting_words, scorer, synthesizer, strategy)

    # -------------------------
    # Public API
    # -------------------------
    def analyze_result(self, guess: str, feedback: Sequence) -> FeedbackDelta:
        return analyze_result(guess, feedback)

    def filter_candidates(self, constraints: ConstraintModel, pool: Sequence[str]) -> List[str]:
        return filter_candidates(constraints, pool)

    def best_starting_word(self, exclude: Iterable[str] = ()) -> str:
        """Highest-scoring configured opening word, preferring ones not in `exclude`."""
        if not self.starting_words:
            raise NoGuessFound("no starting words configured")
        excluded = {w.upper() for w in exclude}
        ranked = self.scorer.rank(self.starting_words)
        for candidate in ranked:
            if candidate.word not in excluded:
                return candidate.word
        return ranked[0].word

    def next_guess(
        self,
        constraints: ConstraintModel,
        previous_guesses: Sequence[str],
        candidate_pool: Optional[Sequence[str]] = None,
    ) -> str:
        if constraints.word_length != self.word_length:
            raise ValueError(
                f"constraints are for {constraints.word_length}-letter words, corpus has {self.word_length}"
            )
        guessed = {g.upper() for g in previous_guesses}

        if constraints.is_empty and not guessed and self.starting_words:
            guess = self.best_starting_word()
            log.debug("opening guess %s", guess)
            return guess

        pool = self.answers if candidate_pool is None else list(candidate_pool)
        filtered = (w.upper() for w in filter_candidates(constraints, pool))
        remaining = [w for w in dict.fromkeys(filtered) if w not in guessed]
        n = len(remaining)

        if n == 0:
            log.debug("no candidates left for %s, falling back", constraints.summary())
            return self._fallback(constraints, guessed)
        if n <= self.strategy.endgame_pool:
            log.debug("endgame with %d candidates", n)
            return remaining[0]
        if n <= self.strategy.small_pool:
            return self._minimax_guess(constraints, guessed, remaining)
        return self._entropy_guess(constraints, guessed, remaining)

    # -------------------------
    # Ranking branches
    # -------------------------
    def _probes(self, guessed: Set[str], remaining: Sequence[str]) -> List[str]:
        words = dict.fromkeys(list(remaining) + self.guesses)
        return [w for w in words if w.upper() not in guessed and len(w) == self.word_length]

    def _minimax_guess(self, constraints: ConstraintModel, guessed: Set[str], remaining: List[str]) -> str:
        probes = self._probes(guessed, remaining)
        buckets = {w: worst_case_bucket(w, remaining) for w in probes}
        best = min(buckets.values())
        tied = [w for w in probes if buckets[w] == best]

        alpha = self.strategy.minimax_entropy_weight

        def tie_break(word: str) -> Tuple[float, str]:
            value = alpha * entropy(word, remaining) + (1 - alpha) * self.scorer.score(word, constraints, remaining)
            return (-value, word)

        guess = min(tied, key=tie_break)
        log.debug("minimax over %d candidates: %s (worst bucket %d, %d tied)", len(remaining), guess, best, len(tied))
        return guess

    def _entropy_guess(self, constraints: ConstraintModel, guessed: Set[str], remaining: List[str]) -> str:
        n = len(remaining)
        weight = self.strategy.large_entropy_weight if n > self.strategy.large_pool else self.strategy.entropy_weight
        cap = max(self.strategy.min_sample, self.strategy.sample_budget // n)

        heuristic = [(w, self.scorer.score(w, constraints)) for w in self._probes(guessed, remaining)]
        heuristic.sort(key=lambda item: (-item[1], item[0]))
        sample = heuristic[:cap]

        ranked = []
        for word, score in sample:
            h = entropy(word, remaining)
            ranked.append((weight * h + (1 - weight) * score, h, word))
        ranked.sort(key=lambda r: (-r[0], -r[1], r[2]))
        log.debug("entropy ranking of %d sampled words over %d candidates: %s", len(sample), n, ranked[0][2])
        return ranked[0][2]

    # -------------------------
    # Fallback chain
    # -------------------------
    def _fallback(self, constraints: ConstraintModel, guessed: Set[str]) -> str:
        synthesized: List[str] = []
        for name, strategy in self.fallbacks:
            guess = strategy(constraints, guessed, synthesized)
            if guess is not None:
                log.debug("fallback '%s' produced %s", name, guess)
                return guess
            log.debug("fallback '%s' found nothing", name)
        raise NoGuessFound(f"no guess available for {constraints.summary()}")

    def _best_scoring(self, words: Iterable[str], constraints: ConstraintModel) -> Optional[str]:
        ranked = self.scorer.rank(words, constraints)
        return ranked[0].word if ranked else None

    def _synthesized_guess(self, constraints: ConstraintModel, guessed: Set[str], synthesized: List[str]) -> Optional[str]:
        synthesized.extend(self.synthesizer.synthesize(constraints))
        accepted = [w for w in synthesized if w.upper() not in guessed and constraints.allows(w)]
        return self._best_scoring(accepted, constraints)

    def _loose_guess(self, constraints: ConstraintModel, guessed: Set[str], synthesized: List[str]) -> Optional[str]:
        words = dict.fromkeys(synthesized + self.guesses)
        accepted = [w for w in words if w.upper() not in guessed and constraints.loosely_allows(w)]
        return self._best_scoring(accepted, constraints)

    def _starting_guess(self, constraints: ConstraintModel, guessed: Set[str], synthesized: List[str]) -> Optional[str]:
        if not self.starting_words:
            return None
        guess = self.best_starting_word(exclude=guessed)
        log.warning("no word fits %s, falling back to starting word %s", constraints.summary(), guess)
        return guess
