"""
starting_word/eval.py

Score opening guesses by how well they split the answer set.

Metrics per guess:
- exp_remaining: expected remaining candidates after the first feedback
- entropy: information gain (higher is better)
- worst_case: size of the largest bucket (lower is better)
- partitions: number of distinct feedback patterns induced
- heuristic: the engine's letter-frequency score for the word

Usage:
  python -m starting_word.eval                       # configured starting words
  python -m starting_word.eval --all --top 20        # every guessable word
"""

from __future__ import annotations

import argparse
import csv
import time
from typing import Dict, List, Sequence

from wordlebot.config import BotConfig
from wordlebot.data_utils import DEFAULT_WORD_LIST, load_corpus
from wordlebot.frequency import FrequencyTables
from wordlebot.scoring import CandidateScorer, guess_metrics


def evaluate_first_guesses(
    answers: Sequence[str],
    guesses: Sequence[str],
    scorer: CandidateScorer,
    *,
    progress: bool = False,
) -> List[Dict[str, float]]:
    """
    Evaluate each candidate first guess against the full answer set.

    Returns
    -------
    list[dict]
        Sorted list (best first) of records with keys:
        'guess', 'exp_remaining', 'entropy', 'worst_case', 'partitions', 'heuristic'
    """
    if not answers:
        raise ValueError("answers must be non-empty")
    length = len(answers[0])

    results: List[Dict[str, float]] = []
    for i, g in enumerate(guesses):
        g = g.upper()
        if len(g) != length or not g.isalpha():
            # Skip invalid guess strings quietly; keep evaluation robust.
            continue
        row: Dict[str, float] = {"guess": g}
        row.update(guess_metrics(g, answers))
        row["heuristic"] = round(scorer.score(g), 3)
        results.append(row)
        if progress and (i + 1) % 50 == 0:
            print(f"Scored {i+1}/{len(guesses)} guesses...", flush=True)

    # Sort: primary = exp_remaining asc, secondary = worst_case asc, tertiary = -entropy desc
    results.sort(key=lambda r: (r["exp_remaining"], r["worst_case"], -r["entropy"]))
    return results


def _print_top(results: List[Dict[str, float]], k: int = 20) -> None:
    print(f"\nTop {k} starting words by expected remaining:")
    print(f"{'rank':>4}  {'guess':<8}  {'exp_rem':>8}  {'entropy':>8}  {'worst':>5}  {'parts':>6}  {'heur':>6}")
    for idx, r in enumerate(results[:k], start=1):
        print(
            f"{idx:>4}  {r['guess']:<8}  {r['exp_remaining']:>8.2f}  {r['entropy']:>8.3f}  "
            f"{int(r['worst_case']):>5}  {int(r['partitions']):>6}  {r['heuristic']:>6.2f}"
        )


def _write_csv(results: List[Dict[str, float]], path: str) -> None:
    fieldnames = ["guess", "exp_remaining", "entropy", "worst_case", "partitions", "heuristic"]
    with open(path, mode="w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in results:
            writer.writerow(row)


def main():
    ap = argparse.ArgumentParser(description="Rank opening guesses against the answer list.")
    ap.add_argument("--csv", default=str(DEFAULT_WORD_LIST), help="Path to word_list.csv")
    ap.add_argument("--all", action="store_true", help="Evaluate every guessable word, not just the configured ones")
    ap.add_argument("--top", type=int, default=20, help="How many rows to print")
    ap.add_argument("--out", default="starting_word_results.csv", help="Output CSV path")
    args = ap.parse_args()

    config = BotConfig.from_env()
    answers, guesses = load_corpus(args.csv, config.game.word_length)
    tables = FrequencyTables.build(guesses.words(), config.strategy.common_letters, config.game.word_length)
    scorer = CandidateScorer(tables, config.strategy)
    pool = guesses.words() if args.all else config.strategy.starting_words

    print(f"Scoring {len(pool)} guesses against {len(answers)} answers...", flush=True)
    t0 = time.perf_counter()
    results = evaluate_first_guesses(answers.words(), pool, scorer, progress=args.all)
    dt = time.perf_counter() - t0
    print(f"Done in {dt:.2f}s", flush=True)
    _print_top(results, k=args.top)
    _write_csv(results, args.out)


if __name__ == "__main__":
    main()
