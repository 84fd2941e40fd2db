import pytest

from wordlebot.analytics import games_frame, summarize_games
from wordlebot.config import BotConfig
from wordlebot.data_utils import load_corpus
from wordlebot.env import GameRecord, WordleGame
from wordlebot.errors import TransportError
from wordlebot.feedback import LetterResult, is_solved, simulate_feedback
from wordlebot.selector import GuessSelector
from wordlebot.transport import LocalPuzzle, PuzzleTransport


class ScriptedSelector(GuessSelector):
    script = ()

    def next_guess(self, constraints, previous_guesses, candidate_pool=None):
        return self.script[len(previous_guesses)]


class ScriptedPuzzle(PuzzleTransport):
    def __init__(self, patterns):
        self.patterns = list(patterns)

    def submit_guess(self, word):
        return self.patterns.pop(0)


class BrokenPuzzle(PuzzleTransport):
    def submit_guess(self, word):
        raise TransportError("connection refused")


@pytest.fixture(scope="module")
def corpus():
    answers, guesses = load_corpus()
    return answers.words(), guesses.words()


@pytest.fixture(scope="module")
def game(corpus):
    answers, guesses = corpus
    return WordleGame(GuessSelector.from_config(BotConfig(), answers, guesses), max_attempts=6)


def test_reset_and_initial_state(game):
    game.reset()
    assert game.history == []
    assert game.constraints.is_empty
    assert not game.done


def test_step_reports_progress(game):
    game.reset()
    info = game.step(LocalPuzzle("TOTAL"))
    for k in ["guess", "pattern", "remaining", "step", "solved", "done"]:
        assert k in info
    assert info["step"] == 1
    assert info["pattern"] == simulate_feedback(info["guess"], "TOTAL")
    assert 1 <= info["remaining"] < len(game.selector.answers)
    assert game.history == [info["guess"]]


@pytest.mark.parametrize("secret", ["TOTAL", "CRANE", "SALTY", "ABIDE"])
def test_play_records_a_consistent_game(game, secret):
    record = game.play(LocalPuzzle(secret))
    assert record.secret == secret
    assert record.error is None
    assert 1 <= record.attempts <= 6
    assert len(record.guesses) == len(record.patterns) == record.attempts
    assert len(set(record.guesses)) == record.attempts
    for guess, pattern in zip(record.guesses, record.patterns):
        assert pattern == simulate_feedback(guess, secret)
    assert record.success == is_solved(record.patterns[-1])
    assert record.duration >= 0.0


def test_opening_word_as_secret_is_solved_at_once(game):
    opening = game.selector.best_starting_word()
    record = game.play(LocalPuzzle(opening))
    assert record.success
    assert record.attempts == 1
    assert record.guesses == [opening]


def test_step_after_game_over_raises(game):
    game.play(LocalPuzzle(game.selector.best_starting_word()))
    assert game.done
    with pytest.raises(RuntimeError):
        game.step(LocalPuzzle("CRANE"))


def test_transport_failure_is_recorded(game):
    record = game.play(BrokenPuzzle())
    assert not record.success
    assert record.attempts == 0
    assert "connection refused" in record.error


def test_contradictory_feedback_is_recorded(corpus):
    answers, guesses = corpus
    selector = ScriptedSelector.from_config(BotConfig(), answers, guesses)
    selector.script = ("STARE", "SLOTH")
    absent = [LetterResult.ABSENT] * 5
    green_s = [LetterResult.CORRECT] + [LetterResult.ABSENT] * 4
    record = WordleGame(selector).play(ScriptedPuzzle([absent, green_s]))
    assert not record.success
    assert record.guesses == ["STARE", "SLOTH"]
    assert record.attempts == 2
    assert "S" in record.error


def test_game_rejects_bad_arguments(game):
    with pytest.raises(TypeError):
        WordleGame(object())
    with pytest.raises(ValueError):
        WordleGame(game.selector, max_attempts=0)


# ---------- analytics ----------


def test_summarize_games():
    records = [
        GameRecord(guesses=["A"] * 3, success=True, attempts=3, duration=1.0, secret="CRANE"),
        GameRecord(guesses=["A"] * 4, success=True, attempts=4, duration=2.0, secret="TOTAL"),
        GameRecord(guesses=["A"] * 3, success=True, attempts=3, duration=1.5, secret="SALTY"),
        GameRecord(guesses=["A"] * 6, success=False, attempts=6, duration=3.5, secret="JAZZY"),
    ]
    summary = summarize_games(records)
    assert summary["total_games"] == 4
    assert summary["win_rate"] == pytest.approx(75.0)
    assert summary["average_attempts"] == pytest.approx(10 / 3)
    assert summary["average_game_time"] == pytest.approx(2.0)
    assert summary["best_performance"] == 3
    assert summary["worst_performance"] == 6
    assert summary["attempt_distribution"] == {3: 2, 4: 1}
    assert list(games_frame(records)["secret"]) == ["CRANE", "TOTAL", "SALTY", "JAZZY"]


def test_summarize_without_wins_or_games():
    summary = summarize_games([GameRecord(success=False, attempts=6, duration=1.0)])
    assert summary["win_rate"] == 0.0
    assert summary["best_performance"] is None
    assert summary["average_attempts"] == 0.0
    empty = summarize_games([])
    assert empty["total_games"] == 0
    assert empty["best_performance"] is None
    assert empty["attempt_distribution"] == {}
