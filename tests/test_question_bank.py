from __future__ import annotations

from conftest import make_question

from exam_trainer.core.services.question_bank import QuestionBank, select_by_range


def test_select_by_range_returns_ascending_serials_regardless_of_bank_order(bank):
    selected = bank.select_by_range(51, 100)
    assert [q.serial for q in selected] == list(range(51, 101))


def test_select_by_range_is_inclusive():
    questions = [make_question(serial) for serial in (3, 1, 2, 4)]
    assert [q.serial for q in select_by_range(questions, 2, 3)] == [2, 3]


def test_select_by_range_outside_bank_is_empty(bank):
    assert bank.select_by_range(500, 600) == []


def test_get_by_serial(bank):
    assert bank.get_by_serial(42).serial == 42
    assert bank.get_by_serial(101) is None


def test_question_count_and_categories(bank):
    assert bank.question_count == 100
    assert bank.categories() == ["Cloud Concepts", "Security", "Technology"]


def test_validate_range_accepts_valid_range(bank):
    assert bank.validate_range(1, 100) == []
    assert bank.validate_range(7, 7) == []


def test_validate_range_reports_every_problem(bank):
    assert bank.validate_range(0, 101) == [
        "Start question must be between 1 and 100",
        "End question must be between 1 and 100",
    ]
    assert bank.validate_range(60, 50) == ["Start question cannot be greater than end question"]


def test_bank_with_gaps():
    bank = QuestionBank([make_question(serial) for serial in (1, 2, 3, 10)])
    assert bank.select_by_range(4, 4) == []


def test_quick_start_ranges_for_a_full_bank(bank):
    assert bank.quick_start_ranges() == [(1, 50), (51, 100), (1, 100)]


def test_quick_start_ranges_are_cut_to_a_small_bank():
    bank = QuestionBank([make_question(serial) for serial in range(1, 61)])
    assert bank.quick_start_ranges() == [(1, 50), (51, 60), (1, 60)]

    smaller = QuestionBank([make_question(serial) for serial in range(1, 41)])
    assert smaller.quick_start_ranges() == [(1, 40)]


def test_quick_start_ranges_for_an_empty_bank():
    assert QuestionBank([]).quick_start_ranges() == []
