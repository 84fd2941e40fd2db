"""
solver/solver_cli.py

Interactive Wordle helper (human-in-the-loop):
- YOU type the word you guessed and the feedback pattern you saw.
- Feedback accepted as: 'gybby', '21001', '[0, 0, 2, 2, 2]' or
  'correct,present,absent,absent,correct'.
- The engine merges the feedback, shows what is left and its next guess.
- Press Enter to take the suggestion or type any other word; repeat until solved.

Run:
  python -m solver.solver_cli --csv wordlebot/data/word_list.csv

Shortcuts:
  quit / q / exit  -> exit
"""
from __future__ import annotations

import argparse
from typing import List

from wordlebot.config import BotConfig, configure_logging
from wordlebot.constraints import ConstraintModel
from wordlebot.data_utils import DEFAULT_WORD_LIST, load_corpus
from wordlebot.errors import ConstraintConflict
from wordlebot.feedback import is_solved, parse_feedback
from wordlebot.scoring import guess_metrics
from wordlebot.selector import GuessSelector

QUIT = {"q", "quit", "exit"}


def _ask_guess(suggestion: str, word_length: int) -> str | None:
    while True:
        raw = input(f"Your guess (Enter for {suggestion}): ").strip()
        if raw.lower() in QUIT:
            return None
        if not raw:
            return suggestion
        if len(raw) != word_length or not raw.isalpha():
            print(f"Please enter a {word_length}-letter alphabetic word.")
            continue
        return raw.upper()


def _ask_feedback(word_length: int):
    while True:
        fb = input("Feedback (g/y/b or 2/1/0 or [..]): ").strip()
        if fb.lower() in QUIT:
            return None
        try:
            return parse_feedback(fb, word_length)
        except ValueError as e:
            print("Invalid feedback:", e)


def _show_candidates(candidates: List[str]) -> None:
    print(f"Remaining candidates: {len(candidates)}")
    if 0 < len(candidates) <= 10:
        print("Candidates:", ", ".join(candidates))


def main():
    ap = argparse.ArgumentParser(description="Interactive Wordle solver (manual feedback)")
    ap.add_argument("--csv", default=str(DEFAULT_WORD_LIST), help="Path to word_list.csv")
    args = ap.parse_args()

    config = BotConfig.from_env()
    configure_logging(config.logging.level)
    word_length = config.game.word_length
    answers, guesses = load_corpus(args.csv, word_length)
    selector = GuessSelector.from_config(config, answers.words(), guesses.words())

    constraints = ConstraintModel.empty(word_length)
    history: List[str] = []

    print("\nWordle helper - after EACH guess you make in the game, paste the feedback here.")
    print("Accepted: g/y/b, 2/1/0, or [0,1,2,2,0]. Type 'quit' to exit.\n")

    while True:
        suggestion = selector.next_guess(constraints, history)
        candidates = selector.filter_candidates(constraints, answers.words())
        if history and 1 < len(candidates) <= 50:
            m = guess_metrics(suggestion, candidates)
            print(f"Suggestion: {suggestion}  (exp_rem={m['exp_remaining']:.2f}, "
                  f"worst={m['worst_case']}, H={m['entropy']:.3f})")
        else:
            print(f"Suggestion: {suggestion}")

        guess = _ask_guess(suggestion, word_length)
        if guess is None:
            print("bye!")
            return
        patt = _ask_feedback(word_length)
        if patt is None:
            print("bye!")
            return

        history.append(guess)
        if is_solved(patt):
            print(f"Solved in {len(history)}!")
            return

        try:
            constraints = constraints.merge(selector.analyze_result(guess, patt))
        except ConstraintConflict as e:
            print(f"That feedback contradicts what you entered before: {e}")
            print("Starting over; re-enter your guesses.")
            constraints = ConstraintModel.empty(word_length)
            history = []
            continue

        print("Known:", constraints.summary())
        _show_candidates(selector.filter_candidates(constraints, answers.words()))


if __name__ == "__main__":
    main()
