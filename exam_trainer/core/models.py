"""Domain models for the exam trainer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ExamMode(str, Enum):
    """How an attempt is run: instant feedback with auto-advance, or a plain exam."""

    PRACTICE = "practice"
    EXAM = "exam"


class AppMode(str, Enum):
    """Top-level view the application is showing."""

    SETUP = "setup"
    EXAM = "exam"
    RESULTS = "results"
    HISTORY = "history"
    MISTAKES = "mistakes"
    OVERVIEW = "overview"


@dataclass(frozen=True, slots=True)
class QuizOption:
    """Single answer option of a bank question."""

    option_value: str
    is_correct_ans: bool


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    """Question from the static bank, identified by its 1-based serial."""

    serial: int
    question: str
    options: tuple[QuizOption, ...]
    category: str


@dataclass(frozen=True, slots=True)
class UserAnswer:
    """Answer submitted for one question during an attempt."""

    question_serial: int
    selected_options: frozenset[str]
    is_correct: bool
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class QuestionsRange:
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class ExamSettings:
    """Serial range and mode chosen on the setup screen."""

    start_question: int
    end_question: int
    mode: ExamMode = ExamMode.PRACTICE


@dataclass(frozen=True, slots=True)
class ExamResult:
    """Outcome of a completed attempt as stored in the history log."""

    id: str
    questions_range: QuestionsRange
    total_questions: int
    correct_answers: int
    wrong_answers: int
    incorrect_answers: int  # answered but wrong
    unattended_questions: int  # never answered
    user_answers: tuple[UserAnswer, ...]
    completed_at: datetime
    time_taken: int  # seconds

    def answer_for(self, serial: int) -> UserAnswer | None:
        return next((a for a in self.user_answers if a.question_serial == serial), None)


@dataclass(slots=True)
class QuestionMistake:
    """Running tally of wrong answers for one question serial."""

    question_serial: int
    mistake_count: int
    last_mistake_date: datetime
    question: QuizQuestion


@dataclass(slots=True)
class AppState:
    """Resume point for the application, overwritten on every change."""

    mode: AppMode = AppMode.SETUP
    current_exam_result: ExamResult | None = None
    exam_questions: tuple[QuizQuestion, ...] = ()
    current_exam_settings: ExamSettings | None = None
    last_saved: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
