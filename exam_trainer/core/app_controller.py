"""Top-level controller routing between the trainer's views.

The controller composes the question bank, the persistence store and exam
sessions. Its current view is a tagged variant: each view class carries
exactly the data it needs, so a results view without a result cannot exist.
After every transition the view is mirrored into the app-state snapshot so the
next start can resume where the learner left off.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar, Union

from exam_trainer.constants.exam_constants import (
    CLEAR_DATA_CONFIRM_MESSAGE,
    EMPTY_RANGE_MESSAGE,
    EXIT_CONFIRM_MESSAGE,
    PAUSE_CONFIRM_MESSAGE,
    SNAPSHOT_MAX_AGE,
)
from exam_trainer.core.models import (
    AppMode,
    AppState,
    ExamMode,
    ExamResult,
    ExamSettings,
    QuestionMistake,
    QuizQuestion,
)
from exam_trainer.core.services.exam_session import ExamSession, Scheduler
from exam_trainer.core.services.persistence_store import Clock, PersistenceStore, utc_now
from exam_trainer.core.services.question_bank import QuestionBank

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class SetupView:
    mode: ClassVar[AppMode] = AppMode.SETUP


@dataclass(frozen=True, slots=True, eq=False)
class ExamView:
    mode: ClassVar[AppMode] = AppMode.EXAM

    settings: ExamSettings
    questions: tuple[QuizQuestion, ...]
    session: ExamSession


@dataclass(frozen=True, slots=True)
class ResultsView:
    mode: ClassVar[AppMode] = AppMode.RESULTS

    result: ExamResult
    questions: tuple[QuizQuestion, ...] = ()
    settings: ExamSettings | None = None


@dataclass(frozen=True, slots=True)
class HistoryView:
    mode: ClassVar[AppMode] = AppMode.HISTORY


@dataclass(frozen=True, slots=True)
class MistakesView:
    mode: ClassVar[AppMode] = AppMode.MISTAKES


@dataclass(frozen=True, slots=True)
class OverviewView:
    mode: ClassVar[AppMode] = AppMode.OVERVIEW

    result: ExamResult
    questions: tuple[QuizQuestion, ...] = ()
    settings: ExamSettings | None = None


AppView = Union[SetupView, ExamView, ResultsView, HistoryView, MistakesView, OverviewView]


class AppController:
    """Owns the current view and every transition between views."""

    def __init__(
        self,
        bank: QuestionBank,
        store: PersistenceStore,
        scheduler: Scheduler,
        confirm: ConfirmCallback,
        *,
        clock: Clock = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self._bank = bank
        self._store = store
        self._scheduler = scheduler
        self._confirm = confirm
        self._clock = clock
        self._rng = rng

        self._view: AppView = SetupView()
        self._paused_exam: ExamView | None = None
        self._history: list[ExamResult] = []
        self._mistakes: list[QuestionMistake] = []
        self._listeners: list[Callable[[AppView], None]] = []

        self._refresh_cache()
        self._restored = self._restore_previous_session()
        self._persist()

    # --- Queries ---

    @property
    def bank(self) -> QuestionBank:
        return self._bank

    @property
    def view(self) -> AppView:
        return self._view

    @property
    def mode(self) -> AppMode:
        return self._view.mode

    @property
    def history(self) -> list[ExamResult]:
        return list(self._history)

    @property
    def mistakes(self) -> list[QuestionMistake]:
        return list(self._mistakes)

    @property
    def restored_from_snapshot(self) -> bool:
        return self._restored

    def has_history(self) -> bool:
        return bool(self._history)

    def has_mistakes(self) -> bool:
        return bool(self._mistakes)

    def has_paused_exam(self) -> bool:
        return self._paused_exam is not None and self._paused_exam.session.is_active()

    def add_listener(self, listener: Callable[[AppView], None]) -> None:
        self._listeners.append(listener)

    # --- Setup and exam ---

    def validate_settings(self, settings: ExamSettings) -> list[str]:
        errors = self._bank.validate_range(settings.start_question, settings.end_question)
        if not errors and not self._bank.select_by_range(settings.start_question, settings.end_question):
            errors.append(EMPTY_RANGE_MESSAGE)
        return errors

    def start_exam(self, settings: ExamSettings) -> list[str]:
        """Start an attempt over the settings' range.

        Returns the validation messages; the exam only starts when the list is
        empty, and nothing changes otherwise.
        """
        errors = self.validate_settings(settings)
        if errors:
            logger.info("Rejected exam settings %s: %s", settings, "; ".join(errors))
            return errors
        questions = self._bank.select_by_range(settings.start_question, settings.end_question)
        self._begin_exam(settings, questions)
        return []

    def exit_exam(self) -> bool:
        view = self._view
        if not isinstance(view, ExamView):
            return False
        if not self._confirm(EXIT_CONFIRM_MESSAGE):
            return False
        if view.session.is_active():
            view.session.exit()
        self._refresh_cache()
        self._set_view(SetupView())
        return True

    def pause_exam(self) -> bool:
        view = self._view
        if not isinstance(view, ExamView) or not view.session.is_active():
            return False
        if not self._confirm(PAUSE_CONFIRM_MESSAGE):
            return False
        view.session.cancel_pending_advance()
        self._paused_exam = view
        self._refresh_cache()
        self._set_view(SetupView())
        logger.info("Exam paused at question %d", view.session.current_index + 1)
        return True

    def resume_exam(self) -> bool:
        if not self.has_paused_exam():
            return False
        view, self._paused_exam = self._paused_exam, None
        self._set_view(view)
        return True

    def retake_exam(self) -> bool:
        view = self._view
        if not isinstance(view, ResultsView) or not view.questions:
            return False
        settings = view.settings or ExamSettings(
            start_question=view.result.questions_range.start,
            end_question=view.result.questions_range.end,
            mode=ExamMode.PRACTICE,
        )
        self._begin_exam(settings, view.questions)
        return True

    def practice_question(self, serial: int) -> bool:
        """Start a one-question practice session for a recorded mistake."""
        if isinstance(self._view, ExamView):
            return False
        question = self._bank.get_by_serial(serial)
        if question is None:
            question = next((m.question for m in self._mistakes if m.question_serial == serial), None)
        if question is None:
            logger.warning("Cannot practice unknown question %d", serial)
            return False
        settings = ExamSettings(start_question=serial, end_question=serial, mode=ExamMode.PRACTICE)
        self._begin_exam(settings, [question])
        return True

    # --- Review views ---

    def view_history(self) -> bool:
        if isinstance(self._view, ExamView):
            return False
        self._refresh_cache()
        self._set_view(HistoryView())
        return True

    def view_mistakes(self) -> bool:
        if isinstance(self._view, ExamView):
            return False
        self._refresh_cache()
        self._set_view(MistakesView())
        return True

    def view_overview(self) -> bool:
        view = self._view
        if not isinstance(view, ResultsView) or not view.questions:
            return False
        self._set_view(OverviewView(result=view.result, questions=view.questions, settings=view.settings))
        return True

    def view_result(self, entry: ExamResult) -> bool:
        """Open a history entry, re-deriving its questions from the bank by range."""
        if isinstance(self._view, ExamView):
            return False
        questions = self._bank.select_by_range(entry.questions_range.start, entry.questions_range.end)
        self._set_view(ResultsView(result=entry, questions=tuple(questions)))
        return True

    def back(self) -> bool:
        view = self._view
        if isinstance(view, ExamView):
            return False
        if isinstance(view, OverviewView):
            self._set_view(ResultsView(result=view.result, questions=view.questions, settings=view.settings))
            return True
        self._set_view(SetupView())
        return True

    def clear_all_data(self) -> bool:
        if isinstance(self._view, ExamView):
            return False
        if not self._confirm(CLEAR_DATA_CONFIRM_MESSAGE):
            return False
        self._store.clear_all_data()
        self._paused_exam = None
        self._refresh_cache()
        self._set_view(SetupView())
        return True

    # --- Internals ---

    def _begin_exam(self, settings: ExamSettings, questions: Sequence[QuizQuestion]) -> None:
        if self._paused_exam is not None:
            self._paused_exam.session.exit()
            self._paused_exam = None

        self._set_view(self._create_exam_view(settings, tuple(questions)))

    def _create_exam_view(self, settings: ExamSettings, questions: tuple[QuizQuestion, ...]) -> ExamView:
        def on_complete(result: ExamResult) -> None:
            self._handle_exam_complete(result, questions, settings)

        session = ExamSession(
            questions,
            settings.mode,
            self._store,
            self._scheduler,
            on_complete=on_complete,
            clock=self._clock,
            rng=self._rng,
        )
        return ExamView(settings=settings, questions=questions, session=session)

    def _handle_exam_complete(
        self,
        result: ExamResult,
        questions: tuple[QuizQuestion, ...],
        settings: ExamSettings,
    ) -> None:
        self._refresh_cache()
        self._set_view(ResultsView(result=result, questions=questions, settings=settings))

    def _refresh_cache(self) -> None:
        self._history = self._store.read_exam_history()
        self._mistakes = self._store.read_mistakes()

    def _set_view(self, view: AppView) -> None:
        previous = self._view.mode
        self._view = view
        self._persist()
        logger.debug("View changed: %s -> %s", previous.value, view.mode.value)
        for listener in list(self._listeners):
            listener(view)

    def _persist(self) -> None:
        view = self._view
        result = None
        questions: tuple[QuizQuestion, ...] = ()
        settings = None
        if isinstance(view, ExamView):
            questions, settings = view.questions, view.settings
        elif isinstance(view, (ResultsView, OverviewView)):
            result, questions, settings = view.result, view.questions, view.settings
        self._store.save_app_state(
            mode=view.mode,
            current_exam_result=result,
            exam_questions=questions,
            current_exam_settings=settings,
        )

    def _restore_previous_session(self) -> bool:
        state = self._store.read_app_state()
        if state.mode is AppMode.SETUP:
            return False
        age = self._clock() - state.last_saved
        if age >= SNAPSHOT_MAX_AGE:
            logger.info("Ignoring saved %s session from %s (too old)", state.mode.value, state.last_saved)
            return False

        view = self._view_from_snapshot(state)
        if view is None:
            logger.warning("Saved %s session is incomplete; starting from setup", state.mode.value)
            return False
        self._view = view
        logger.info("Restored %s view from saved session", state.mode.value)
        return True

    def _view_from_snapshot(self, state: AppState) -> AppView | None:
        questions = state.exam_questions
        settings = state.current_exam_settings
        result = state.current_exam_result

        if state.mode is AppMode.EXAM:
            if not questions:
                return None
            settings = settings or ExamSettings(
                start_question=questions[0].serial,
                end_question=questions[-1].serial,
                mode=ExamMode.PRACTICE,
            )
            return self._create_exam_view(settings, questions)
        if state.mode is AppMode.RESULTS and result is not None:
            return ResultsView(result=result, questions=questions, settings=settings)
        if state.mode is AppMode.OVERVIEW and result is not None and questions:
            return OverviewView(result=result, questions=questions, settings=settings)
        if state.mode is AppMode.HISTORY:
            return HistoryView()
        if state.mode is AppMode.MISTAKES:
            return MistakesView()
        return None
