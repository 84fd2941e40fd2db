import pytest

from wordlebot.constraints import ConstraintModel, analyze_result
from wordlebot.errors import ConstraintConflict, WordleBotError
from wordlebot.feedback import LetterResult

C, P, A = LetterResult.CORRECT, LetterResult.PRESENT, LetterResult.ABSENT


def test_analyze_result_basic_facts():
    delta = analyze_result("STARE", [C, P, A, C, P])
    assert delta.greens == {0: "S", 3: "R"}
    assert delta.min_counts == {"S": 1, "T": 1, "R": 1, "E": 1}
    assert delta.max_counts == {}
    assert delta.forbidden_letters == {"A"}
    assert delta.banned_positions == {"T": {1}, "E": {4}}
    assert delta.tested_letters == set("STARE")


def test_absent_duplicate_caps_count_instead_of_forbidding():
    delta = analyze_result("STARR", [C, P, A, C, A])
    assert delta.min_counts["R"] == 1
    assert delta.max_counts == {"R": 1}
    assert 4 in delta.banned_positions["R"]
    assert "R" not in delta.forbidden_letters
    assert delta.forbidden_letters == {"A"}


def test_analyze_result_accepts_names_and_lowercase():
    delta = analyze_result("stare", ["correct", "present", "absent", "correct", "present"])
    assert delta.guess == "STARE"
    assert delta.greens == {0: "S", 3: "R"}


def test_analyze_result_rejects_bad_input():
    with pytest.raises(ValueError):
        analyze_result("STARE", [C, P, A])
    with pytest.raises(ValueError):
        analyze_result("ST4RE", [C, P, A, C, P])
    with pytest.raises(ValueError):
        analyze_result("STARE", [C, P, 7, C, P])


def test_empty_model():
    model = ConstraintModel.empty(5)
    assert model.is_empty
    assert model.allows("CRANE")
    assert not model.allows("CRANES")
    with pytest.raises(ValueError):
        ConstraintModel.empty(0)


def test_merge_is_pure_and_accumulates():
    empty = ConstraintModel.empty(5)
    first = empty.merge(analyze_result("SPEED", [A, A, P, A, A]))
    assert empty.is_empty
    # E present once, second E absent: exactly one E
    assert first.min_counts["E"] == 1
    assert first.max_counts["E"] == 1
    assert first.forbidden_letters == {"S", "P", "D"}

    second = first.merge(analyze_result("CRANE", [A, A, A, A, C]))
    assert second.greens == {4: "E"}
    # cap learned from SPEED survives a guess that says nothing about duplicates
    assert second.max_counts["E"] == 1
    assert second.forbidden_letters == {"S", "P", "D", "C", "R", "A", "N"}
    assert not second.allows("THEME")
    assert second.allows("GLOBE")


def test_merge_keeps_tightest_bounds():
    # secret THEME
    model = ConstraintModel.from_history(
        [
            ("CRANE", [A, A, A, A, C]),
            ("EERIE", [P, A, A, A, C]),
            ("SPEED", [A, A, C, P, A]),
        ]
    )
    assert model.min_counts["E"] == 2
    assert model.max_counts["E"] == 2
    assert model.banned_positions["E"] == {0, 1, 3}
    assert model.allows("THEME")


def test_from_history_matches_sequential_merge():
    history = [("STARE", [C, P, A, C, P]), ("SLOTH", [C, A, A, P, A])]
    manual = ConstraintModel.empty().merge(analyze_result(*history[0])).merge(analyze_result(*history[1]))
    assert ConstraintModel.from_history(history) == manual


def test_conflict_forbidden_then_required():
    model = ConstraintModel.empty().merge(analyze_result("ABCDE", [A, A, A, A, A]))
    with pytest.raises(ConstraintConflict) as exc:
        model.merge(analyze_result("AZZZZ", [C, A, A, A, A]))
    assert exc.value.letter == "A"
    assert isinstance(exc.value, WordleBotError)


def test_conflict_minimum_above_maximum():
    model = ConstraintModel.empty().merge(analyze_result("SPEED", [A, A, P, A, A]))
    with pytest.raises(ConstraintConflict):
        model.merge(analyze_result("EVERY", [C, A, P, A, A]))


def test_conflict_two_greens_in_one_slot():
    model = ConstraintModel.empty().merge(analyze_result("CRANE", [C, A, A, A, A]))
    with pytest.raises(ConstraintConflict):
        model.merge(analyze_result("BLOKE", [C, A, A, A, A]))


def test_conflict_green_at_banned_position():
    model = ConstraintModel.empty().merge(analyze_result("CRANE", [P, A, A, A, A]))
    with pytest.raises(ConstraintConflict):
        model.merge(analyze_result("CLOTH", [C, A, A, A, A]))


def test_conflict_too_many_required_letters():
    model = ConstraintModel(min_counts={"A": 2, "B": 2, "C": 2})
    with pytest.raises(ConstraintConflict):
        model.validate()


def test_merge_rejects_length_mismatch():
    model = ConstraintModel.empty(6)
    with pytest.raises(ValueError):
        model.merge(analyze_result("CRANE", [A, A, A, A, A]))


def test_allows_checks_every_fact():
    model = ConstraintModel.from_history([("STARE", [C, P, A, C, P])])
    assert model.allows("SETOR") is False  # R must be at 3
    assert model.allows("SHIRE") is False  # T missing
    assert model.allows("STORE") is False  # T banned at 1
    assert model.allows("SETRO")
    assert model.allows("setro")


def test_loosely_allows_ignores_positions():
    model = ConstraintModel.from_history([("ARISE", [P, A, A, P, A])])
    assert model.present_letters == {"A", "S"}
    assert model.loosely_allows("BASIS") is False  # I is forbidden
    assert model.loosely_allows("SALTY")
    assert model.loosely_allows("ASSAY")  # A at banned slot still passes
    assert not model.allows("ASSAY")
    assert not model.loosely_allows("CLOUT")


def test_summary():
    model = ConstraintModel.from_history([("STARE", [C, P, A, C, P])])
    assert model.summary() == "S__R_ present=ET absent=A"
