import pytest

from wordlebot.config import StrategyConfig
from wordlebot.data_utils import load_answer_vocab, load_corpus, load_guess_vocab
from wordlebot.sampler import WordSampler
from wordlebot.vocab import WordVocab


def test_bundled_word_list():
    answers, guesses = load_corpus()
    assert len(answers) > 400
    assert len(guesses) > len(answers)
    assert set(answers) <= set(guesses)
    assert all(len(w) == 5 and w.isupper() for w in guesses)
    assert set(StrategyConfig().starting_words) <= set(answers)


def test_guess_only_words_are_not_answers():
    assert "SPASM" in load_guess_vocab()
    assert "SPASM" not in load_answer_vocab()


def test_from_words_normalises_and_deduplicates():
    vocab = WordVocab.from_words(["crane", "CRANE", " stare ", "abc", "cr4ne", None, "slate"])
    assert vocab.words() == ["CRANE", "STARE", "SLATE"]
    assert vocab.word_length == 5
    assert "crane" in vocab
    assert vocab.index_of("stare") == 1
    assert vocab.word_at(2) == "SLATE"
    with pytest.raises(KeyError):
        vocab.index_of("TOTAL")
    with pytest.raises(IndexError):
        vocab.word_at(3)


def test_vocab_rejects_bad_input():
    with pytest.raises(ValueError):
        WordVocab(["CRANE", "CRANE"])
    with pytest.raises(ValueError):
        WordVocab(["CRANE", "CRANES"])
    with pytest.raises(ValueError):
        WordVocab.from_words(["abc"])
    with pytest.raises(TypeError):
        WordVocab(("CRANE",))


def test_from_csv_missing_column(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("text\ncrane\n")
    with pytest.raises(KeyError):
        WordVocab.from_csv(str(path))


def test_sampler_is_reproducible():
    vocab = load_answer_vocab()
    a = WordSampler(vocab, seed=3).sample_words(10)
    b = WordSampler(vocab, seed=3).sample_words(10)
    assert a == b
    assert len(set(a)) == 10
    assert all(w in vocab for w in a)
    sampler = WordSampler(vocab, seed=1)
    assert sampler.choice_word() in vocab
    with pytest.raises(ValueError):
        sampler.sample_words(0)
