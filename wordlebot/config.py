"""
config.py

Bot configuration: puzzle API, game rules, guessing strategy, scoring weights
and logging. Defaults can be overridden from the environment (or a .env file).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ApiConfig:
    base_url: str = "https://wordle.votee.dev:8000"
    timeout: float = 10.0  # seconds, per request
    dictionary_url: str = "https://api.dictionaryapi.dev/api/v2/entries/en"
    dictionary_fallback_url: str = "https://freedictionaryapi.com/api/v1/entries/en"
    batch_size: int = 10
    cache_size: int = 5000
    cache_ttl: float = 24 * 60 * 60.0


@dataclass
class GameConfig:
    word_length: int = 5
    max_attempts: int = 6


@dataclass
class ScoringWeights:
    letter_frequency: float = 1.0
    positional: float = 1.0
    start_bonus: float = 1.0
    common_end_bonus: float = 0.3
    vowel_bonus: float = 0.5
    middle_vowel_factor: float = 2.0
    untested_letter_bonus: float = 0.5
    necessary_duplicate_bonus: float = 0.3
    duplicate_penalty: float = 1.0
    max_count_penalty: float = 2.0
    pool_member_bonus: float = 3.0
    entropy: float = 2.0


@dataclass
class StrategyConfig:
    # Ordered by effectiveness
    starting_words: List[str] = field(
        default_factory=lambda: ["STARE", "CRANE", "SLATE", "TRACE", "ADIEU", "AUDIO", "RAISE", "ARISE"]
    )
    common_start: List[str] = field(default_factory=lambda: ["S", "C", "T", "A", "R"])
    common_end: List[str] = field(default_factory=lambda: ["E", "R", "T", "Y", "N"])
    vowels: List[str] = field(default_factory=lambda: ["A", "E", "I", "O", "U"])
    common_letters: List[str] = field(
        default_factory=lambda: ["E", "A", "R", "I", "O", "T", "N", "S", "L", "C"]
    )
    beam_width: int = 100
    endgame_pool: int = 2
    small_pool: int = 20
    large_pool: int = 100
    large_entropy_weight: float = 0.8
    entropy_weight: float = 0.6
    minimax_entropy_weight: float = 0.7
    sample_budget: int = 100_000  # feedback simulations per decision
    min_sample: int = 50
    weights: ScoringWeights = field(default_factory=ScoringWeights)


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class BotConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    game: GameConfig = field(default_factory=GameConfig)
    strategy: StrategyConfig = field(default_factory=StrategyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "BotConfig":
        """Defaults, overridden by WORDLE_* / DICTIONARY_* / BEAM_WIDTH / LOG_LEVEL."""
        load_dotenv(dotenv_path=dotenv_path)
        cfg = cls()
        cfg.api.base_url = os.getenv("WORDLE_API_URL", cfg.api.base_url)
        cfg.api.dictionary_url = os.getenv("DICTIONARY_URL", cfg.api.dictionary_url)
        cfg.api.dictionary_fallback_url = os.getenv("DICTIONARY_FALLBACK_URL", cfg.api.dictionary_fallback_url)
        cfg.game.word_length = _int_env("WORDLE_WORD_LENGTH", cfg.game.word_length)
        cfg.game.max_attempts = _int_env("WORDLE_MAX_ATTEMPTS", cfg.game.max_attempts)
        cfg.strategy.beam_width = _int_env("BEAM_WIDTH", cfg.strategy.beam_width)
        cfg.logging.level = os.getenv("LOG_LEVEL", cfg.logging.level).upper()
        cfg.validate()
        return cfg

    def validate(self) -> None:
        g, s = self.game, self.strategy
        if g.word_length <= 0:
            raise ValueError("word_length must be positive")
        if g.max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        if not s.starting_words:
            raise ValueError("at least one starting word is required")
        for w in s.starting_words:
            if len(w) != g.word_length or not w.isalpha():
                raise ValueError(f"starting word {w!r} is not a {g.word_length}-letter word")
        for name in ("common_start", "common_end", "vowels", "common_letters"):
            for ch in getattr(s, name):
                if len(ch) != 1 or not ch.isalpha():
                    raise ValueError(f"{name} entries must be single letters, got {ch!r}")
        for name in ("large_entropy_weight", "entropy_weight", "minimax_entropy_weight"):
            if not 0.0 <= getattr(s, name) <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]")
        if s.beam_width <= 0 or s.min_sample <= 0 or s.sample_budget <= 0:
            raise ValueError("beam_width, min_sample and sample_budget must be positive")
        if not 0 < s.endgame_pool <= s.small_pool <= s.large_pool:
            raise ValueError("pool thresholds must satisfy 0 < endgame <= small <= large")
        if self.api.batch_size <= 0:
            raise ValueError("batch_size must be positive")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        log.error("invalid %s=%r: not an integer", name, raw)
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
