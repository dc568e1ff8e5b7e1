"""Service driving a single exam attempt from the first question to its result."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from uuid import uuid4

from exam_trainer.constants.exam_constants import AUTO_ADVANCE_DELAY_MS, COMPLETION_DELAY_MS
from exam_trainer.core.answer_evaluator import check_answer, is_multiple_choice
from exam_trainer.core.models import (
    ExamMode,
    ExamResult,
    QuestionsRange,
    QuizOption,
    QuizQuestion,
    UserAnswer,
)
from exam_trainer.core.services.persistence_store import Clock, PersistenceStore, utc_now

logger = logging.getLogger(__name__)

# Runs ``callback`` once after ``delay_ms`` milliseconds (QTimer.singleShot in the UI).
Scheduler = Callable[[int, Callable[[], None]], None]


class ExamSessionError(RuntimeError):
    """Raised when an action is not allowed in the session's current state."""


class SessionPhase(Enum):
    AWAITING_ANSWER = auto()
    SHOWING_FEEDBACK = auto()
    COMPLETED = auto()
    ABANDONED = auto()


class QuestionStatus(Enum):
    CURRENT = auto()
    CORRECT = auto()
    INCORRECT = auto()
    UNANSWERED = auto()


@dataclass(slots=True)
class SessionCounts:
    correct: int
    incorrect: int
    remaining: int


def generate_exam_id(now: datetime) -> str:
    return f"exam_{int(now.timestamp() * 1000)}_{uuid4().hex[:9]}"


class ExamSession:
    """State machine for one attempt over an ordered set of questions.

    The session waits for an answer on the current question, shows feedback
    once it is submitted, and finishes by writing an ``ExamResult`` to the
    history log. In practice mode a correct answer schedules an automatic
    advance; every state-changing action bumps ``_generation`` so a callback
    scheduled earlier can tell it has been overtaken and do nothing.
    """

    def __init__(
        self,
        questions: Sequence[QuizQuestion],
        mode: ExamMode,
        store: PersistenceStore,
        scheduler: Scheduler,
        *,
        on_complete: Callable[[ExamResult], None] | None = None,
        clock: Clock = utc_now,
        rng: random.Random | None = None,
        auto_advance_delay_ms: int = AUTO_ADVANCE_DELAY_MS,
        completion_delay_ms: int = COMPLETION_DELAY_MS,
    ) -> None:
        if not questions:
            raise ValueError("Exam session requires at least one question.")

        self._questions: tuple[QuizQuestion, ...] = tuple(questions)
        self._mode = mode
        self._store = store
        self._scheduler = scheduler
        self._on_complete = on_complete
        self._clock = clock
        self._rng = rng or random.Random()
        self._auto_advance_delay_ms = auto_advance_delay_ms
        self._completion_delay_ms = completion_delay_ms

        self._answers: list[UserAnswer] = []
        self._answers_by_serial: dict[int, UserAnswer] = {}
        self._index: int = 0
        self._phase = SessionPhase.AWAITING_ANSWER
        self._selection: set[str] = set()
        self._display_options: list[QuizOption] = []
        self._auto_advancing: bool = False
        self._completing: bool = False
        self._generation: int = 0
        self._started_at: datetime = clock()
        self._result: ExamResult | None = None

        self._enter_question(0)
        logger.info("Started %s session with %d questions", mode.value, len(self._questions))

    # --- Queries ---

    @property
    def mode(self) -> ExamMode:
        return self._mode

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def questions(self) -> tuple[QuizQuestion, ...]:
        return self._questions

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_question(self) -> QuizQuestion:
        return self._questions[self._index]

    @property
    def display_options(self) -> tuple[QuizOption, ...]:
        return tuple(self._display_options)

    @property
    def selected_options(self) -> frozenset[str]:
        return frozenset(self._selection)

    @property
    def answers(self) -> tuple[UserAnswer, ...]:
        return tuple(self._answers)

    @property
    def result(self) -> ExamResult | None:
        return self._result

    @property
    def started_at(self) -> datetime:
        return self._started_at

    def is_active(self) -> bool:
        return self._phase in (SessionPhase.AWAITING_ANSWER, SessionPhase.SHOWING_FEEDBACK)

    def is_auto_advancing(self) -> bool:
        return self._auto_advancing

    def is_completing(self) -> bool:
        """True while a finished practice run waits out its closing delay."""
        return self._completing

    def is_last_question(self) -> bool:
        return self._index == len(self._questions) - 1

    def is_current_multiple_choice(self) -> bool:
        return is_multiple_choice(self.current_question)

    def answer_for(self, serial: int) -> UserAnswer | None:
        return self._answers_by_serial.get(serial)

    @property
    def current_answer(self) -> UserAnswer | None:
        return self._answers_by_serial.get(self.current_question.serial)

    def progress(self) -> float:
        return (self._index + 1) / len(self._questions)

    def elapsed_seconds(self) -> int:
        end = self._result.completed_at if self._result is not None else self._clock()
        return max(0, int((end - self._started_at).total_seconds()))

    def status_counts(self) -> SessionCounts:
        correct = sum(1 for answer in self._answers if answer.is_correct)
        return SessionCounts(
            correct=correct,
            incorrect=len(self._answers) - correct,
            remaining=len(self._questions) - len(self._answers),
        )

    def question_statuses(self) -> list[QuestionStatus]:
        statuses: list[QuestionStatus] = []
        for index, question in enumerate(self._questions):
            answer = self._answers_by_serial.get(question.serial)
            if index == self._index:
                statuses.append(QuestionStatus.CURRENT)
            elif answer is None:
                statuses.append(QuestionStatus.UNANSWERED)
            elif answer.is_correct:
                statuses.append(QuestionStatus.CORRECT)
            else:
                statuses.append(QuestionStatus.INCORRECT)
        return statuses

    def can_finish(self) -> bool:
        return (
            self.is_active()
            and self._mode is ExamMode.PRACTICE
            and len(self._answers) == len(self._questions)
        )

    # --- Actions ---

    def select_option(self, option_value: str) -> bool:
        """Select (single choice) or toggle (multiple choice) an option.

        Returns False without changing anything while feedback is shown or an
        automatic advance is pending.
        """
        if self._phase is not SessionPhase.AWAITING_ANSWER or self._auto_advancing:
            return False
        question = self.current_question
        if all(option.option_value != option_value for option in question.options):
            raise ValueError(f"'{option_value}' is not an option of question {question.serial}.")

        if is_multiple_choice(question):
            if option_value in self._selection:
                self._selection.discard(option_value)
            else:
                self._selection.add(option_value)
        else:
            self._selection = {option_value}
        return True

    def submit_answer(self) -> UserAnswer:
        self._ensure_active()
        if self._phase is not SessionPhase.AWAITING_ANSWER or self._auto_advancing:
            raise ExamSessionError("This question has already been answered.")
        if not self._selection:
            raise ExamSessionError("Select at least one option before submitting.")

        question = self.current_question
        is_correct = check_answer(question, self._selection)
        answer = UserAnswer(
            question_serial=question.serial,
            selected_options=frozenset(self._selection),
            is_correct=is_correct,
            timestamp=self._clock(),
        )
        self._answers.append(answer)
        self._answers_by_serial[question.serial] = answer

        if not is_correct:
            self._store.record_mistake(question.serial, question)

        self._phase = SessionPhase.SHOWING_FEEDBACK
        self._generation += 1
        if self._mode is ExamMode.PRACTICE and is_correct:
            self._schedule_auto_advance()
        return answer

    def next_question(self) -> None:
        """Move on from the feedback of the current question, completing after the last."""
        self._ensure_active()
        if self._phase is not SessionPhase.SHOWING_FEEDBACK:
            raise ExamSessionError("Submit an answer before moving to the next question.")
        self._advance()

    def previous_question(self) -> None:
        self._ensure_active()
        self._ensure_practice("Going back")
        if self._index == 0:
            raise ExamSessionError("Already at the first question.")
        self._generation += 1
        self._enter_question(self._index - 1)

    def jump_to(self, index: int) -> None:
        self._ensure_active()
        self._ensure_practice("Jumping between questions")
        if not 0 <= index < len(self._questions):
            raise IndexError(f"Question index {index} out of range")
        self._generation += 1
        self._enter_question(index)

    def finish(self) -> ExamResult:
        """End a practice attempt early once every question has an answer."""
        if not self.can_finish():
            raise ExamSessionError("Answer every question before finishing the practice.")
        self._generation += 1
        return self._complete()

    def exit(self) -> None:
        """Abandon the attempt without writing a history entry."""
        self._ensure_active()
        self._generation += 1
        self._auto_advancing = False
        self._completing = False
        self._phase = SessionPhase.ABANDONED
        logger.info("Session abandoned after %d answers", len(self._answers))

    def cancel_pending_advance(self) -> None:
        if self._auto_advancing:
            self._generation += 1
            self._auto_advancing = False
            self._completing = False

    # --- Internals ---

    def _ensure_active(self) -> None:
        if not self.is_active():
            raise ExamSessionError("The exam session has already ended.")

    def _ensure_practice(self, action: str) -> None:
        if self._mode is not ExamMode.PRACTICE:
            raise ExamSessionError(f"{action} is only available in practice mode.")

    def _enter_question(self, index: int) -> None:
        self._index = index
        self._auto_advancing = False
        self._completing = False
        question = self._questions[index]

        self._display_options = list(question.options)
        self._rng.shuffle(self._display_options)

        # Answered questions are replayed read-only; they cannot be resubmitted.
        previous = self._answers_by_serial.get(question.serial)
        if previous is not None:
            self._selection = set(previous.selected_options)
            self._phase = SessionPhase.SHOWING_FEEDBACK
        else:
            self._selection = set()
            self._phase = SessionPhase.AWAITING_ANSWER

    def _schedule_auto_advance(self) -> None:
        self._auto_advancing = True
        generation = self._generation

        def is_stale() -> bool:
            if generation != self._generation or not self.is_active():
                logger.debug("Ignoring stale auto-advance (generation %d)", generation)
                return True
            return False

        def complete() -> None:
            if not is_stale():
                self._advance()

        def fire() -> None:
            if is_stale():
                return
            if self.is_last_question():
                # The last question lingers on a completion notice before the result.
                self._completing = True
                self._scheduler(self._completion_delay_ms, complete)
                return
            self._advance()

        self._scheduler(self._auto_advance_delay_ms, fire)

    def _advance(self) -> None:
        self._generation += 1
        if self.is_last_question():
            self._complete()
        else:
            self._enter_question(self._index + 1)

    def _complete(self) -> ExamResult:
        correct = sum(1 for answer in self._answers if answer.is_correct)
        incorrect = len(self._answers) - correct
        unattended = len(self._questions) - len(self._answers)
        completed_at = self._clock()

        result = ExamResult(
            id=generate_exam_id(completed_at),
            questions_range=QuestionsRange(
                start=self._questions[0].serial,
                end=self._questions[-1].serial,
            ),
            total_questions=len(self._questions),
            correct_answers=correct,
            wrong_answers=incorrect + unattended,
            incorrect_answers=incorrect,
            unattended_questions=unattended,
            user_answers=tuple(self._answers),
            completed_at=completed_at,
            time_taken=max(0, int((completed_at - self._started_at).total_seconds())),
        )
        self._store.append_exam_result(result)
        self._result = result
        self._auto_advancing = False
        self._completing = False
        self._phase = SessionPhase.COMPLETED
        logger.info(
            "Session completed: %d/%d correct in %ds",
            correct,
            result.total_questions,
            result.time_taken,
        )
        if self._on_complete is not None:
            self._on_complete(result)
        return result
