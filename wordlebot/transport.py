"""
transport.py

Sources of feedback for a guess: a local puzzle with a known secret, or the
Votee Wordle HTTP API. Retrying failed requests is left to the caller.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from wordlebot.config import ApiConfig
from wordlebot.errors import TransportError
from wordlebot.feedback import LetterResult, simulate_feedback

log = logging.getLogger(__name__)

GAME_TYPES = ("daily", "random", "word")


class PuzzleTransport(ABC):
    @abstractmethod
    def submit_guess(self, word: str) -> List[LetterResult]:
        ...


class LocalPuzzle(PuzzleTransport):
    """Answers guesses against a secret held in memory."""

    def __init__(self, secret: str) -> None:
        if not secret.isalpha():
            raise ValueError("secret must be alphabetic")
        self.secret = secret.upper()

    def submit_guess(self, word: str) -> List[LetterResult]:
        return simulate_feedback(word, self.secret)


class VoteePuzzle(PuzzleTransport):
    """
    GET {base_url}/{game_type}?guess=...&size=...[&seed=...]

    The response is a list of {"slot": int, "guess": str, "result": str}
    with result one of absent / present / correct. For game_type "word"
    the target is passed as /word/{word}.
    """

    def __init__(
        self,
        api: ApiConfig,
        game_type: str = "daily",
        size: int = 5,
        seed: Optional[int] = None,
        word: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if game_type not in GAME_TYPES:
            raise ValueError(f"game_type must be one of {GAME_TYPES}")
        if game_type == "word" and not word:
            raise ValueError("game_type 'word' needs a target word")
        self.base_url = api.base_url.rstrip("/")
        self.timeout = api.timeout
        self.game_type = game_type
        self.size = size
        self.seed = seed
        self.word = word
        self.session = session if session is not None else requests.Session()

    def _url(self) -> str:
        if self.game_type == "word":
            return f"{self.base_url}/word/{self.word.lower()}"
        return f"{self.base_url}/{self.game_type}"

    def submit_guess(self, word: str) -> List[LetterResult]:
        params = {"guess": word.lower(), "size": self.size}
        if self.seed is not None and self.game_type == "random":
            params["seed"] = self.seed
        try:
            response = self.session.get(self._url(), params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            log.error("guess %s failed: %s", word, e)
            raise TransportError(f"guess {word} failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"guess {word}: response is not JSON") from e
        return self._parse(word, payload)

    def _parse(self, word: str, payload) -> List[LetterResult]:
        if not isinstance(payload, list) or len(payload) != len(word):
            raise TransportError(f"guess {word}: expected {len(word)} results, got {payload!r}")
        try:
            ordered = sorted(payload, key=lambda item: int(item["slot"]))
            return [LetterResult.from_name(item["result"]) for item in ordered]
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"guess {word}: malformed result {payload!r}") from e
