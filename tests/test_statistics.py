from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from conftest import make_question, make_result

from exam_trainer.core.models import QuestionMistake, UserAnswer
from exam_trainer.core.services.statistics import (
    AnswerOutcome,
    HistoryOutcome,
    HistorySortKey,
    MistakeSortKey,
    answered_category_stats,
    category_breakdown,
    filter_and_sort_mistakes,
    filter_history,
    filter_reviewed_questions,
    format_time,
    is_passed,
    mistake_categories,
    round_half_up,
    score_percentage,
    sort_history,
    summarize_history,
    summarize_mistakes,
    unattended_questions,
)

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _answer(serial, is_correct):
    return UserAnswer(
        question_serial=serial,
        selected_options=frozenset({"A" if is_correct else "B"}),
        is_correct=is_correct,
        timestamp=NOW,
    )


@pytest.fixture
def attempt():
    questions = [
        make_question(1, category="Storage"),
        make_question(2, category="Compute"),
        make_question(3, category="Storage"),
        make_question(4, category="Compute"),
        make_question(5, category="Billing"),
    ]
    answers = [_answer(1, True), _answer(2, False), _answer(3, True), _answer(4, True)]
    result = make_result(correct=3, incorrect=1, unattended=1, answers=answers)
    return result, questions


def _mistake(serial, count, minutes_ago, category):
    return QuestionMistake(
        question_serial=serial,
        mistake_count=count,
        last_mistake_date=NOW - timedelta(minutes=minutes_ago),
        question=make_question(serial, category=category),
    )


@pytest.mark.parametrize(
    "correct, total, expected",
    [(7, 10, 70), (2, 3, 67), (0, 5, 0), (5, 5, 100), (5, 8, 63), (1, 8, 13)],
)
def test_score_percentage(correct, total, expected):
    result = make_result(correct=correct, incorrect=total - correct, unattended=0)
    assert score_percentage(result) == expected


@pytest.mark.parametrize(
    "value, ndigits, expected",
    [(62.5, 0, 63), (12.5, 0, 13), (62.4, 0, 62), (2.25, 1, 2.3), (1.75, 1, 1.8), (1.666, 1, 1.7)],
)
def test_round_half_up(value, ndigits, expected):
    assert round_half_up(value, ndigits) == expected


def test_category_percentage_rounds_halves_up():
    questions = [make_question(serial, category="Storage") for serial in range(1, 9)]
    answers = [_answer(1, True)] + [_answer(serial, False) for serial in range(2, 9)]
    result = make_result(correct=1, incorrect=7, unattended=0, answers=answers)
    (stats,) = answered_category_stats(result, questions)
    assert stats.percentage == 13


def test_pass_mark_is_inclusive():
    assert is_passed(make_result(correct=7, incorrect=3, unattended=0))
    assert not is_passed(make_result(correct=69, incorrect=31, unattended=0))


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0s"), (59, "59s"), (125, "2m 5s"), (3723, "1h 2m 3s"), (3600, "1h 0m 0s")],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_category_breakdown_keeps_first_seen_order(attempt):
    result, questions = attempt
    rows = {row.category: row for row in category_breakdown(result, questions)}
    assert list(rows) == ["Storage", "Compute", "Billing"]
    assert (rows["Storage"].total, rows["Storage"].correct) == (2, 2)
    assert (rows["Compute"].correct, rows["Compute"].incorrect) == (1, 1)
    assert rows["Billing"].unattended == 1


def test_answered_category_stats_skip_unattended(attempt):
    result, questions = attempt
    stats = answered_category_stats(result, questions)
    assert [entry.category for entry in stats] == ["Compute", "Storage"]
    assert stats[0].percentage == 50
    assert stats[1].percentage == 100


def test_filter_reviewed_questions(attempt):
    result, questions = attempt
    assert [q.serial for q in filter_reviewed_questions(result, questions)] == [1, 2, 3, 4]
    assert [q.serial for q in filter_reviewed_questions(result, questions, "Compute")] == [2, 4]
    incorrect = filter_reviewed_questions(result, questions, outcome=AnswerOutcome.INCORRECT)
    assert [q.serial for q in incorrect] == [2]
    correct_storage = filter_reviewed_questions(result, questions, "Storage", AnswerOutcome.CORRECT)
    assert [q.serial for q in correct_storage] == [1, 3]


def test_unattended_questions(attempt):
    result, questions = attempt
    assert [q.serial for q in unattended_questions(result, questions)] == [5]


@pytest.fixture
def history():
    return [
        make_result(correct=9, incorrect=1, unattended=0, completed_at=NOW, result_id="a"),
        make_result(correct=5, incorrect=5, unattended=0, completed_at=NOW - timedelta(days=1), result_id="b"),
        make_result(correct=7, incorrect=2, unattended=1, completed_at=NOW - timedelta(days=2), result_id="c"),
    ]


def test_summarize_history(history):
    summary = summarize_history(history)
    assert (summary.total_exams, summary.passed, summary.failed) == (3, 2, 1)
    assert summary.average_percentage == 70
    assert summary.best_percentage == 90


def test_summarize_empty_history():
    summary = summarize_history([])
    assert (summary.total_exams, summary.average_percentage, summary.best_percentage) == (0, 0, 0)


def test_filter_history(history):
    assert [r.id for r in filter_history(history, HistoryOutcome.PASSED)] == ["a", "c"]
    assert [r.id for r in filter_history(history, HistoryOutcome.FAILED)] == ["b"]
    assert len(filter_history(history)) == 3


def test_sort_history(history):
    assert [r.id for r in sort_history(history, HistorySortKey.DATE, descending=False)] == ["c", "b", "a"]
    assert [r.id for r in sort_history(history, HistorySortKey.SCORE)] == ["a", "c", "b"]


@pytest.mark.parametrize(
    "counts, expected_average",
    [((3, 1, 1), 1.7), ((3, 2, 2, 2), 2.3), ((1, 2), 1.5)],
)
def test_summarize_mistakes(counts, expected_average):
    mistakes = [_mistake(serial, count, serial, "Storage") for serial, count in enumerate(counts, start=1)]
    summary = summarize_mistakes(mistakes)
    assert (summary.questions, summary.total_mistakes, summary.max_count) == (len(counts), sum(counts), max(counts))
    assert summary.average_count == expected_average


def test_summarize_history_average_rounds_halves_up():
    history = [
        make_result(correct=5, incorrect=3, unattended=0, result_id="a"),
        make_result(correct=3, incorrect=2, unattended=0, result_id="b"),
    ]
    assert summarize_history(history).average_percentage == 62


def test_summarize_no_mistakes():
    summary = summarize_mistakes([])
    assert (summary.total_mistakes, summary.max_count, summary.average_count) == (0, 0, 0.0)


def test_mistake_categories_are_unique():
    mistakes = [_mistake(1, 1, 0, "Storage"), _mistake(2, 1, 0, "Compute"), _mistake(3, 1, 0, "Storage")]
    assert mistake_categories(mistakes) == ["Storage", "Compute"]


def test_filter_and_sort_mistakes():
    mistakes = [_mistake(1, 3, 10, "Storage"), _mistake(2, 1, 5, "Compute"), _mistake(3, 2, 1, "Storage")]
    by_count = filter_and_sort_mistakes(mistakes)
    assert [m.question_serial for m in by_count] == [1, 3, 2]
    by_date = filter_and_sort_mistakes(mistakes, sort_by=MistakeSortKey.DATE)
    assert [m.question_serial for m in by_date] == [3, 2, 1]
    storage_oldest_first = filter_and_sort_mistakes(
        mistakes, category="Storage", sort_by=MistakeSortKey.DATE, descending=False
    )
    assert [m.question_serial for m in storage_oldest_first] == [1, 3]
