"""
env.py

The game loop: ask the selector for a guess, submit it, fold the feedback
into the constraint model, repeat until solved or out of attempts.

API
---
reset() -> None
    Starts a new game with an empty constraint model.

step(transport) -> dict
    Makes one guess. Returns info with 'guess', 'pattern', 'remaining',
    'step', 'solved' and 'done'.

play(transport) -> GameRecord
    Runs a whole game. Transport failures and contradictory feedback end the
    game and are recorded on the returned GameRecord; NoGuessFound propagates.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from wordlebot.constraints import ConstraintModel, filter_candidates
from wordlebot.errors import ConstraintConflict, TransportError
from wordlebot.feedback import LetterResult, format_pattern, is_solved
from wordlebot.selector import GuessSelector
from wordlebot.transport import PuzzleTransport

log = logging.getLogger(__name__)


@dataclass
class GameRecord:
    guesses: List[str] = field(default_factory=list)
    patterns: List[List[LetterResult]] = field(default_factory=list)
    success: bool = False
    attempts: int = 0
    duration: float = 0.0  # seconds
    error: Optional[str] = None
    secret: Optional[str] = None


class WordleGame:
    def __init__(self, selector: GuessSelector, *, max_attempts: int = 6) -> None:
        if not isinstance(selector, GuessSelector):
            raise TypeError("selector must be a GuessSelector")
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        self.selector = selector
        self.max_attempts = int(max_attempts)

        self._constraints = ConstraintModel.empty(selector.word_length)
        self._guesses: List[str] = []
        self._patterns: List[List[LetterResult]] = []
        self._solved = False

    # -------------------------
    # Core game API
    # -------------------------
    def reset(self) -> None:
        self._constraints = ConstraintModel.empty(self.selector.word_length)
        self._guesses = []
        self._patterns = []
        self._solved = False

    def step(self, transport: PuzzleTransport) -> dict:
        if self.done:
            raise RuntimeError("game is over; call reset() first")

        guess = self.selector.next_guess(self._constraints, self._guesses)
        pattern = transport.submit_guess(guess)
        self._guesses.append(guess)
        self._patterns.append(pattern)
        self._constraints = self._constraints.merge(self.selector.analyze_result(guess, pattern))
        self._solved = is_solved(pattern)

        remaining = len(filter_candidates(self._constraints, self.selector.answers))
        log.info("attempt %d/%d: %s %s (%d candidates left)",
                 len(self._guesses), self.max_attempts, guess, format_pattern(pattern), remaining)
        return {
            "guess": guess,
            "pattern": pattern,
            "remaining": remaining,
            "step": len(self._guesses),
            "solved": self._solved,
            "done": self.done,
        }

    def play(self, transport: PuzzleTransport) -> GameRecord:
        self.reset()
        record = GameRecord(secret=getattr(transport, "secret", None))
        started = time.perf_counter()
        try:
            while not self.done:
                self.step(transport)
        except (TransportError, ConstraintConflict) as e:
            log.error("game aborted after %d attempts: %s", len(self._guesses), e)
            record.error = str(e)
        record.guesses = list(self._guesses)
        record.patterns = list(self._patterns)
        record.attempts = len(self._guesses)
        record.success = self._solved
        record.duration = time.perf_counter() - started
        return record

    # -------------------------
    # Introspection helpers
    # -------------------------
    @property
    def done(self) -> bool:
        return self._solved or len(self._guesses) >= self.max_attempts

    @property
    def constraints(self) -> ConstraintModel:
        return self._constraints

    @property
    def history(self) -> List[str]:
        return list(self._guesses)
