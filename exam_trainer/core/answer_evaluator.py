"""Pure helpers for grading a selection against a bank question."""

from __future__ import annotations

from collections.abc import Iterable

from exam_trainer.core.models import QuizQuestion


def correct_option_values(question: QuizQuestion) -> frozenset[str]:
    return frozenset(option.option_value for option in question.options if option.is_correct_ans)


def is_multiple_choice(question: QuizQuestion) -> bool:
    """Return True when more than one option of the question is correct."""
    return sum(1 for option in question.options if option.is_correct_ans) > 1


def check_answer(question: QuizQuestion, selected: Iterable[str]) -> bool:
    """Return True only for an exact match with the correct option set.

    Order is irrelevant and there is no partial credit: a missing or an extra
    option makes the whole answer wrong.
    """
    return frozenset(selected) == correct_option_values(question)
