"""
solver/play.py

Let the engine play whole games, either against secrets drawn from the local
answer list or against the Votee Wordle API, then print the analytics summary.

Usage examples:
  python -m solver.play --games 50 --seed 1
  python -m solver.play --mode daily
  python -m solver.play --mode random --games 3 --seed 7
"""

from __future__ import annotations

import argparse
import json
import time

from wordlebot.analytics import summarize_games
from wordlebot.config import BotConfig, configure_logging
from wordlebot.data_utils import DEFAULT_WORD_LIST, load_corpus
from wordlebot.env import WordleGame
from wordlebot.feedback import format_pattern
from wordlebot.sampler import WordSampler
from wordlebot.selector import GuessSelector
from wordlebot.transport import LocalPuzzle, VoteePuzzle


def main():
    ap = argparse.ArgumentParser(description="Play Wordle games with the guessing engine.")
    ap.add_argument("--csv", default=str(DEFAULT_WORD_LIST), help="Path to word_list.csv")
    ap.add_argument("--games", type=int, default=10, help="Number of games")
    ap.add_argument("--mode", choices=["local", "daily", "random"], default="local",
                    help="local secrets, or the API's daily / random puzzle")
    ap.add_argument("--seed", type=int, default=None, help="Seed for local secrets or random API games")
    ap.add_argument("--online-dictionary", action="store_true",
                    help="Validate synthesized words with the online dictionary")
    args = ap.parse_args()

    config = BotConfig.from_env()
    configure_logging(config.logging.level)
    answers, guesses = load_corpus(args.csv, config.game.word_length)

    validator = None
    if args.online_dictionary:
        from wordlebot.dictionary import FreeDictionaryValidator
        validator = FreeDictionaryValidator(config.api)
    selector = GuessSelector.from_config(config, answers.words(), guesses.words(), validator=validator)
    game = WordleGame(selector, max_attempts=config.game.max_attempts)

    if args.mode == "local":
        transports = [LocalPuzzle(w) for w in WordSampler(answers, seed=args.seed).sample_words(args.games)]
    elif args.mode == "daily":
        transports = [VoteePuzzle(config.api, "daily", config.game.word_length)]
    else:
        transports = [
            VoteePuzzle(config.api, "random", config.game.word_length,
                        seed=None if args.seed is None else args.seed + i)
            for i in range(args.games)
        ]

    print(f"Playing {len(transports)} {args.mode} game(s)...", flush=True)
    t0 = time.perf_counter()
    records = []
    for i, transport in enumerate(transports, start=1):
        record = game.play(transport)
        records.append(record)
        status = "WIN " if record.success else "LOSS"
        trail = " ".join(f"{g}:{format_pattern(p)}" for g, p in zip(record.guesses, record.patterns))
        secret = f" [{record.secret}]" if record.secret else ""
        print(f"Game {i}: {status} {record.attempts} attempts{secret} {trail}")
        if record.error:
            print(f"  error: {record.error}")
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)

    print("\nPERFORMANCE ANALYTICS")
    print(json.dumps(summarize_games(records), indent=2))


if __name__ == "__main__":
    main()
