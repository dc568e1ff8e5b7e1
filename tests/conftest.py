from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone

import pytest

from exam_trainer.core.app_controller import AppController
from exam_trainer.core.models import (
    ExamResult,
    QuestionsRange,
    QuizOption,
    QuizQuestion,
    UserAnswer,
)
from exam_trainer.core.services.persistence_store import PersistenceStore
from exam_trainer.core.services.question_bank import QuestionBank

CATEGORIES = ("Cloud Concepts", "Security", "Technology")


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class ManualScheduler:
    """Collects deferred callbacks so tests decide when they fire."""

    def __init__(self) -> None:
        self.pending: list[tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.pending.append((delay_ms, callback))

    def run_pending(self) -> None:
        pending, self.pending = self.pending, []
        for _delay, callback in pending:
            callback()


class Confirmer:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.messages: list[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer


def make_question(
    serial: int,
    correct: Sequence[str] = ("A",),
    options: Sequence[str] = ("A", "B", "C", "D"),
    category: str = "Technology",
) -> QuizQuestion:
    return QuizQuestion(
        serial=serial,
        question=f"Question text {serial}",
        options=tuple(QuizOption(option_value=value, is_correct_ans=value in correct) for value in options),
        category=category,
    )


def make_result(
    correct: int = 7,
    incorrect: int = 2,
    unattended: int = 1,
    completed_at: datetime | None = None,
    answers: Sequence[UserAnswer] = (),
    start: int = 1,
    result_id: str = "exam_1_abc",
) -> ExamResult:
    total = correct + incorrect + unattended
    return ExamResult(
        id=result_id,
        questions_range=QuestionsRange(start=start, end=start + total - 1),
        total_questions=total,
        correct_answers=correct,
        wrong_answers=incorrect + unattended,
        incorrect_answers=incorrect,
        unattended_questions=unattended,
        user_answers=tuple(answers),
        completed_at=completed_at or datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc),
        time_taken=95,
    )


def build_bank_questions(count: int = 100) -> list[QuizQuestion]:
    """Every fifth question has two correct options; categories rotate."""
    questions = []
    for serial in range(1, count + 1):
        correct = ("A", "C") if serial % 5 == 0 else ("A",)
        questions.append(make_question(serial, correct, category=CATEGORIES[serial % len(CATEGORIES)]))
    return questions


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def confirmer() -> Confirmer:
    return Confirmer()


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def store(data_dir, clock) -> PersistenceStore:
    return PersistenceStore.in_directory(data_dir, clock=clock)


@pytest.fixture
def bank_questions() -> list[QuizQuestion]:
    questions = build_bank_questions()
    random.Random(42).shuffle(questions)
    return questions


@pytest.fixture
def bank(bank_questions) -> QuestionBank:
    return QuestionBank(bank_questions)


@pytest.fixture
def make_controller(bank, store, scheduler, confirmer, clock):
    def factory(**overrides) -> AppController:
        options = {
            "bank": bank,
            "store": store,
            "scheduler": scheduler,
            "confirm": confirmer,
            "clock": clock,
            "rng": random.Random(0),
        }
        options.update(overrides)
        return AppController(**options)

    return factory
