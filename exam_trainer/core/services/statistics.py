"""Score, category and mistake aggregates shown by the review views."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from exam_trainer.constants.exam_constants import PASSING_PERCENTAGE
from exam_trainer.core.models import ExamResult, QuestionMistake, QuizQuestion


class AnswerOutcome(str, Enum):
    ALL = "all"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class HistoryOutcome(str, Enum):
    ALL = "all"
    PASSED = "passed"
    FAILED = "failed"


class HistorySortKey(str, Enum):
    DATE = "date"
    SCORE = "score"


class MistakeSortKey(str, Enum):
    COUNT = "mistake_count"
    DATE = "last_mistake_date"


@dataclass(slots=True)
class CategoryBreakdown:
    """Per-category totals over every question of an attempt."""

    category: str
    total: int = 0
    correct: int = 0
    incorrect: int = 0
    unattended: int = 0


@dataclass(slots=True)
class CategoryStats:
    """Per-category totals over the answered questions only."""

    category: str
    total: int = 0
    correct: int = 0
    incorrect: int = 0

    @property
    def percentage(self) -> int:
        return round_half_up(self.correct / self.total * 100) if self.total else 0


@dataclass(slots=True)
class HistorySummary:
    total_exams: int
    passed: int
    failed: int
    average_percentage: int
    best_percentage: int


@dataclass(slots=True)
class MistakeSummary:
    questions: int
    total_mistakes: int
    max_count: int
    average_count: float


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round to ``ndigits`` places with halves going up; ``round`` sends them to even.

    Returns an ``int`` when ``ndigits`` is zero.
    """
    if ndigits == 0:
        return math.floor(value + 0.5)
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def score_percentage(result: ExamResult) -> int:
    if result.total_questions <= 0:
        return 0
    return round_half_up(result.correct_answers / result.total_questions * 100)


def is_passed(result: ExamResult) -> bool:
    return score_percentage(result) >= PASSING_PERCENTAGE


def format_time(seconds: int) -> str:
    """Format a duration as ``1h 2m 3s``, dropping leading zero units."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def category_breakdown(result: ExamResult, questions: Sequence[QuizQuestion]) -> list[CategoryBreakdown]:
    stats: dict[str, CategoryBreakdown] = {}
    for question in questions:
        entry = stats.setdefault(question.category, CategoryBreakdown(category=question.category))
        entry.total += 1
        answer = result.answer_for(question.serial)
        if answer is None:
            entry.unattended += 1
        elif answer.is_correct:
            entry.correct += 1
        else:
            entry.incorrect += 1
    return list(stats.values())


def answered_category_stats(result: ExamResult, questions: Sequence[QuizQuestion]) -> list[CategoryStats]:
    stats: dict[str, CategoryStats] = {}
    for question in questions:
        answer = result.answer_for(question.serial)
        if answer is None:
            continue
        entry = stats.setdefault(question.category, CategoryStats(category=question.category))
        entry.total += 1
        if answer.is_correct:
            entry.correct += 1
        else:
            entry.incorrect += 1
    return sorted(stats.values(), key=lambda entry: entry.category.casefold())


def filter_reviewed_questions(
    result: ExamResult,
    questions: Sequence[QuizQuestion],
    category: str | None = None,
    outcome: AnswerOutcome = AnswerOutcome.ALL,
) -> list[QuizQuestion]:
    """Answered questions matching an optional category and a correctness filter."""
    filtered: list[QuizQuestion] = []
    for question in questions:
        answer = result.answer_for(question.serial)
        if answer is None:
            continue
        if category is not None and question.category != category:
            continue
        if outcome is AnswerOutcome.CORRECT and not answer.is_correct:
            continue
        if outcome is AnswerOutcome.INCORRECT and answer.is_correct:
            continue
        filtered.append(question)
    return filtered


def unattended_questions(result: ExamResult, questions: Sequence[QuizQuestion]) -> list[QuizQuestion]:
    return [question for question in questions if result.answer_for(question.serial) is None]


def summarize_history(history: Sequence[ExamResult]) -> HistorySummary:
    percentages = [score_percentage(result) for result in history]
    passed = sum(1 for value in percentages if value >= PASSING_PERCENTAGE)
    return HistorySummary(
        total_exams=len(history),
        passed=passed,
        failed=len(history) - passed,
        average_percentage=round_half_up(sum(percentages) / len(percentages)) if percentages else 0,
        best_percentage=max(percentages, default=0),
    )


def filter_history(history: Iterable[ExamResult], outcome: HistoryOutcome = HistoryOutcome.ALL) -> list[ExamResult]:
    if outcome is HistoryOutcome.PASSED:
        return [result for result in history if is_passed(result)]
    if outcome is HistoryOutcome.FAILED:
        return [result for result in history if not is_passed(result)]
    return list(history)


def sort_history(
    history: Iterable[ExamResult],
    sort_by: HistorySortKey = HistorySortKey.DATE,
    descending: bool = True,
) -> list[ExamResult]:
    if sort_by is HistorySortKey.SCORE:
        return sorted(history, key=score_percentage, reverse=descending)
    return sorted(history, key=lambda result: result.completed_at, reverse=descending)


def summarize_mistakes(mistakes: Sequence[QuestionMistake]) -> MistakeSummary:
    counts = [mistake.mistake_count for mistake in mistakes]
    total = sum(counts)
    return MistakeSummary(
        questions=len(mistakes),
        total_mistakes=total,
        max_count=max(counts, default=0),
        average_count=round_half_up(total / len(counts), 1) if counts else 0.0,
    )


def mistake_categories(mistakes: Iterable[QuestionMistake]) -> list[str]:
    categories: list[str] = []
    for mistake in mistakes:
        if mistake.question.category not in categories:
            categories.append(mistake.question.category)
    return categories


def filter_and_sort_mistakes(
    mistakes: Iterable[QuestionMistake],
    category: str | None = None,
    sort_by: MistakeSortKey = MistakeSortKey.COUNT,
    descending: bool = True,
) -> list[QuestionMistake]:
    selected = [m for m in mistakes if category is None or m.question.category == category]
    if sort_by is MistakeSortKey.DATE:
        return sorted(selected, key=lambda m: m.last_mistake_date, reverse=descending)
    return sorted(selected, key=lambda m: m.mistake_count, reverse=descending)
