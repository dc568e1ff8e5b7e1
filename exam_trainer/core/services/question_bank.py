"""Read-only access to the static question bank."""

from __future__ import annotations

from collections.abc import Iterable

from exam_trainer.constants.exam_constants import QUICK_START_RANGES
from exam_trainer.core.models import QuizQuestion


def select_by_range(questions: Iterable[QuizQuestion], start: int, end: int) -> list[QuizQuestion]:
    """Return the questions whose serial lies in ``[start, end]``, by ascending serial."""
    selected = [question for question in questions if start <= question.serial <= end]
    return sorted(selected, key=lambda question: question.serial)


class QuestionBank:
    """Holds the questions loaded at startup for the lifetime of the process."""

    def __init__(self, questions: Iterable[QuizQuestion]) -> None:
        self._questions: tuple[QuizQuestion, ...] = tuple(questions)
        self._by_serial: dict[int, QuizQuestion] = {q.serial: q for q in self._questions}

    @property
    def questions(self) -> tuple[QuizQuestion, ...]:
        return self._questions

    @property
    def question_count(self) -> int:
        return len(self._questions)

    def get_by_serial(self, serial: int) -> QuizQuestion | None:
        return self._by_serial.get(serial)

    def select_by_range(self, start: int, end: int) -> list[QuizQuestion]:
        return select_by_range(self._questions, start, end)

    def categories(self) -> list[str]:
        return sorted({question.category for question in self._questions})

    def validate_range(self, start: int, end: int) -> list[str]:
        """Return human-readable problems with a setup range; empty when valid."""
        total = self.question_count
        errors: list[str] = []
        if not 1 <= start <= total:
            errors.append(f"Start question must be between 1 and {total}")
        if not 1 <= end <= total:
            errors.append(f"End question must be between 1 and {total}")
        if start > end:
            errors.append("Start question cannot be greater than end question")
        return errors

    def quick_start_ranges(
        self, ranges: Iterable[tuple[int, int]] = QUICK_START_RANGES
    ) -> list[tuple[int, int]]:
        """Preset ranges cut to the bank size, skipping ones that start past its end."""
        total = self.question_count
        offered: list[tuple[int, int]] = []
        for start, end in ranges:
            if start > total:
                continue
            clamped = (start, min(end, total))
            if clamped not in offered:
                offered.append(clamped)
        return offered
