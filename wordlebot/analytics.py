"""
analytics.py

Performance summary over games played in this process. Nothing is persisted.
"""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd

from wordlebot.env import GameRecord


def games_frame(records: Sequence[GameRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "secret": [r.secret for r in records],
            "success": [bool(r.success) for r in records],
            "attempts": [int(r.attempts) for r in records],
            "duration": [float(r.duration) for r in records],
            "error": [r.error for r in records],
        }
    )


def summarize_games(records: Sequence[GameRecord]) -> Dict[str, object]:
    """
    total_games, win_rate (percent), average_attempts (wins only),
    average_game_time (seconds), best_performance (fewest attempts in a win,
    None without wins), worst_performance (most attempts in any game) and
    attempt_distribution (attempts -> number of wins).
    """
    if not records:
        return {
            "total_games": 0,
            "win_rate": 0.0,
            "average_attempts": 0.0,
            "average_game_time": 0.0,
            "best_performance": None,
            "worst_performance": 0,
            "attempt_distribution": {},
        }

    df = games_frame(records)
    wins = df[df["success"]]
    distribution = wins["attempts"].value_counts().sort_index()
    return {
        "total_games": int(len(df)),
        "win_rate": float(len(wins) / len(df) * 100.0),
        "average_attempts": float(wins["attempts"].mean()) if len(wins) else 0.0,
        "average_game_time": float(df["duration"].mean()),
        "best_performance": int(wins["attempts"].min()) if len(wins) else None,
        "worst_performance": int(df["attempts"].max()),
        "attempt_distribution": {int(k): int(v) for k, v in distribution.items()},
    }
