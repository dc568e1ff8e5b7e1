from __future__ import annotations

from conftest import make_question

from exam_trainer.core.answer_evaluator import check_answer, correct_option_values, is_multiple_choice


def test_single_correct_option_is_not_multiple_choice():
    assert not is_multiple_choice(make_question(1, correct=("B",)))


def test_two_correct_options_are_multiple_choice():
    assert is_multiple_choice(make_question(1, correct=("A", "C")))


def test_correct_option_values():
    assert correct_option_values(make_question(1, correct=("A", "C"))) == frozenset({"A", "C"})


def test_exact_set_is_correct_in_any_order():
    question = make_question(1, correct=("A", "C"))
    assert check_answer(question, {"A", "C"})
    assert check_answer(question, ["C", "A"])


def test_subset_superset_and_disjoint_selections_are_wrong():
    question = make_question(1, correct=("A", "C"))
    assert not check_answer(question, {"A"})
    assert not check_answer(question, {"A", "B", "C"})
    assert not check_answer(question, {"B"})
    assert not check_answer(question, set())


def test_single_choice():
    question = make_question(1, correct=("D",))
    assert check_answer(question, {"D"})
    assert not check_answer(question, {"A"})
