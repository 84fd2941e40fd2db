from __future__ import annotations

from pathlib import Path
from typing import Tuple

import pandas as pd

from wordlebot.vocab import WordVocab

DEFAULT_WORD_LIST = Path(__file__).resolve().parent / "data" / "word_list.csv"


def load_answer_vocab(csv_path: str | Path = DEFAULT_WORD_LIST, word_len: int = 5) -> WordVocab:
    """
    Load only the puzzle answers from the CSV.
    Keeps rows where 'day' is not null.
    """
    df = pd.read_csv(csv_path)
    answer_df = df[df["day"].notna()].copy()
    return WordVocab.from_words(answer_df["word"].tolist(), word_len=word_len)


def load_guess_vocab(csv_path: str | Path = DEFAULT_WORD_LIST, word_len: int = 5) -> WordVocab:
    """Every word in the CSV: answers plus words that are only valid guesses."""
    return WordVocab.from_csv(str(csv_path), column="word", word_len=word_len)


def load_corpus(csv_path: str | Path = DEFAULT_WORD_LIST, word_len: int = 5) -> Tuple[WordVocab, WordVocab]:
    """(answers, background guess list), read once before any game starts."""
    return load_answer_vocab(csv_path, word_len), load_guess_vocab(csv_path, word_len)
