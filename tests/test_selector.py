import pytest

from wordlebot.config import BotConfig
from wordlebot.constraints import ConstraintModel
from wordlebot.data_utils import load_corpus
from wordlebot.dictionary import DictionaryValidator
from wordlebot.errors import NoGuessFound
from wordlebot.feedback import LetterResult
from wordlebot.scoring import worst_case_bucket
from wordlebot.selector import GuessSelector

C, P, A = LetterResult.CORRECT, LetterResult.PRESENT, LetterResult.ABSENT


class FixedValidator(DictionaryValidator):
    def __init__(self, accept):
        self.accept = accept

    def is_known_word(self, word):
        return self.accept


@pytest.fixture(scope="module")
def corpus():
    answers, guesses = load_corpus()
    return answers.words(), guesses.words()


@pytest.fixture(scope="module")
def selector(corpus):
    answers, guesses = corpus
    return GuessSelector.from_config(BotConfig(), answers, guesses)


def _selector_with(corpus, accept):
    answers, guesses = corpus
    return GuessSelector.from_config(BotConfig(), answers, guesses, validator=FixedValidator(accept))


@pytest.fixture
def arise_model():
    return ConstraintModel.from_history([("ARISE", [P, A, A, P, A])])


@pytest.fixture
def hopeless_model():
    # no word in the corpus holds all four letters
    return ConstraintModel(min_counts={"Q": 1, "X": 1, "Z": 1, "J": 1}, tested_letters=frozenset("QXZJ"))


def test_opening_guess_is_a_starting_word(selector):
    guess = selector.next_guess(ConstraintModel.empty(), [])
    assert guess in selector.starting_words
    assert guess == selector.best_starting_word()


def test_best_starting_word_skips_excluded(selector):
    best = selector.best_starting_word()
    second = selector.best_starting_word(exclude=[best.lower()])
    assert second != best
    assert second in selector.starting_words
    assert selector.best_starting_word(exclude=selector.starting_words) == best


def test_endgame_picks_a_remaining_candidate(selector):
    model = ConstraintModel(greens={0: "S", 1: "T", 2: "A", 3: "R"}, tested_letters=frozenset("STAR"))
    guess = selector.next_guess(model, ["STAIR"], candidate_pool=["STARE", "STARK"])
    assert guess in {"STARE", "STARK"}


def test_guessed_words_are_not_repeated(selector):
    model = ConstraintModel(greens={0: "S", 1: "T", 2: "A", 3: "R"}, tested_letters=frozenset("STAR"))
    assert selector.next_guess(model, ["stare"], candidate_pool=["STARE", "STARK"]) == "STARK"


def test_lowercase_pool_gives_upper_case_guesses(selector):
    model = ConstraintModel(greens={0: "S", 1: "T", 2: "A", 3: "R"}, tested_letters=frozenset("STAR"))
    assert selector.next_guess(model, ["STAIR"], candidate_pool=["stare", "stark"]) == "STARE"
    pool = ["total", "stoal", "tally", "alloy", "atoll", "crane", "stare"]
    guess = selector.next_guess(ConstraintModel.empty(), ["QAJAQ"], candidate_pool=pool)
    assert guess == guess.upper()


def test_small_pool_minimises_worst_case(selector):
    pool = ["TOTAL", "STOAL", "TALLY", "ALLOY", "ATOLL", "CRANE", "STARE"]
    guess = selector.next_guess(ConstraintModel.empty(), ["QAJAQ"], candidate_pool=pool)
    best = min(worst_case_bucket(w, pool) for w in set(pool) | set(selector.guesses))
    assert worst_case_bucket(guess, pool) == best


def test_large_pool_uses_entropy_ranking(selector):
    model = ConstraintModel(tested_letters=frozenset("QJ"), forbidden_letters=frozenset("QJ"))
    guess = selector.next_guess(model, ["QAJAQ"])
    assert guess in selector.guesses
    assert guess != "QAJAQ"
    assert selector.next_guess(model, ["QAJAQ"]) == guess


def test_fallback_synthesizes_a_fitting_word(corpus, arise_model):
    sel = _selector_with(corpus, True)
    guess = sel.next_guess(arise_model, ["ARISE"], candidate_pool=[])
    assert arise_model.allows(guess)


def test_fallback_loose_match_when_dictionary_rejects_everything(corpus, arise_model):
    sel = _selector_with(corpus, False)
    guess = sel.next_guess(arise_model, ["ARISE"], candidate_pool=[])
    assert arise_model.loosely_allows(guess)
    assert guess in sel.guesses
    assert guess != "ARISE"


def test_fallback_starting_word_as_last_resort(corpus, hopeless_model):
    sel = _selector_with(corpus, False)
    guess = sel.next_guess(hopeless_model, ["STARE"], candidate_pool=[])
    assert guess in sel.starting_words
    assert guess != "STARE"


def test_no_guess_found_without_starting_words(corpus, hopeless_model):
    sel = _selector_with(corpus, False)
    bare = GuessSelector(sel.answers, sel.guesses, [], sel.scorer, sel.synthesizer, sel.strategy)
    with pytest.raises(NoGuessFound):
        bare.next_guess(hopeless_model, ["STARE"], candidate_pool=[])
    with pytest.raises(NoGuessFound):
        bare.best_starting_word()


def test_word_length_mismatch(selector):
    with pytest.raises(ValueError):
        selector.next_guess(ConstraintModel.empty(6), [])


def test_delegates_to_constraint_module(selector):
    delta = selector.analyze_result("STARE", [C, P, A, C, P])
    model = ConstraintModel.empty().merge(delta)
    assert selector.filter_candidates(model, ["STARE", "CRANE", "SLATE", "TRACE"]) == []
    assert selector.filter_candidates(ConstraintModel.empty(), ["STARE"]) == ["STARE"]


def test_rejects_empty_answers(selector):
    with pytest.raises(ValueError):
        GuessSelector([], [], [], selector.scorer, selector.synthesizer, selector.strategy)
