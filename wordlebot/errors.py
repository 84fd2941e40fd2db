"""
errors.py

Exceptions raised by the guessing engine and its collaborators.
"""


class WordleBotError(Exception):
    """Base class for every error raised by wordlebot."""


class ConstraintConflict(WordleBotError):
    """Merged feedback is logically inconsistent (e.g. a letter needs min > max)."""

    def __init__(self, message: str, letter: str | None = None) -> None:
        super().__init__(message)
        self.letter = letter


class ValidationUnavailable(WordleBotError):
    """The dictionary validator could not answer (network failure, timeout)."""


class NoGuessFound(WordleBotError):
    """Every strategy, including the starting-word fallback, came up empty."""


class TransportError(WordleBotError):
    """The puzzle API could not be reached or returned an unusable payload."""
