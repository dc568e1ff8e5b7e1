"""Component for answering questions during an exam or practice attempt."""

from __future__ import annotations

import random

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from exam_trainer.constants.exam_constants import CORRECT_FEEDBACK_MESSAGES
from exam_trainer.constants.ui_constants import (
    EXAM_AUTO_ADVANCE_HINT,
    EXAM_COMPLETE_BUTTON,
    EXAM_EXIT_BUTTON,
    EXAM_FINISH_PRACTICE_BUTTON,
    EXAM_MULTIPLE_CHOICE_HINT,
    EXAM_NAVIGATION_TITLE,
    EXAM_NEXT_BUTTON,
    EXAM_NEXT_HINT,
    EXAM_PRACTICE_COMPLETED,
    EXAM_PAUSE_BUTTON,
    EXAM_PREVIOUS_BUTTON,
    EXAM_SUBMIT_BUTTON,
    EXAM_WRONG_FEEDBACK,
)
from exam_trainer.core.answer_evaluator import correct_option_values
from exam_trainer.core.app_controller import AppController, ExamView
from exam_trainer.core.models import ExamMode, QuizOption
from exam_trainer.core.services.exam_session import ExamSession, ExamSessionError, QuestionStatus
from exam_trainer.core.services.statistics import format_time
from exam_trainer.styling.styles import Styles
from exam_trainer.ui.dialog_helpers import show_warning
from exam_trainer.ui.question_renderer import render_option_label, render_question

_GRID_COLUMNS = 5


class OptionLabel(QLabel):
    """Word-wrapping answer option that reacts to clicks."""

    clicked = Signal(str)

    def __init__(self, option: QuizOption, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.option = option
        self.setWordWrap(True)
        self.setTextFormat(Qt.RichText)
        self.setCursor(Qt.PointingHandCursor)

    def mousePressEvent(self, event) -> None:  # noqa: N802
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self.option.option_value)
        super().mousePressEvent(event)


class ExamPanel(QWidget):
    """UI component driving the active ``ExamSession``."""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._view: ExamView | None = None
        self._option_labels: list[OptionLabel] = []
        self._grid_buttons: list[QPushButton] = []
        self._rendered_key: tuple[int, int] | None = None
        self._correct_message: str = CORRECT_FEEDBACK_MESSAGES[0]

        self._build_ui()

    def _build_ui(self) -> None:
        root_layout = QHBoxLayout()
        self.setLayout(root_layout)

        # Practice-only question overview
        self.sidebar = QGroupBox(EXAM_NAVIGATION_TITLE, self)
        self.sidebar.setMinimumWidth(220)
        sidebar_layout = QVBoxLayout()
        self.sidebar.setLayout(sidebar_layout)
        self.grid_layout = QGridLayout()
        sidebar_layout.addLayout(self.grid_layout)
        sidebar_layout.addStretch()
        self.counts_label = QLabel("", self.sidebar)
        self.counts_label.setWordWrap(True)
        sidebar_layout.addWidget(self.counts_label)
        root_layout.addWidget(self.sidebar)

        main_layout = QVBoxLayout()
        root_layout.addLayout(main_layout, stretch=1)

        header_row = QHBoxLayout()
        self.mode_label = QLabel("", self)
        self.mode_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.mode_label)
        header_row.addStretch()
        self.timer_label = QLabel("Time: 0s", self)
        self.timer_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.timer_label)
        main_layout.addLayout(header_row)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setTextVisible(False)
        main_layout.addWidget(self.progress_bar)
        self.progress_label = QLabel("", self)
        main_layout.addWidget(self.progress_label)

        self.question_view = QTextBrowser(self)
        self.question_view.setOpenExternalLinks(False)
        main_layout.addWidget(self.question_view, stretch=1)

        self.multiple_choice_label = QLabel(EXAM_MULTIPLE_CHOICE_HINT, self)
        self.multiple_choice_label.setVisible(False)
        main_layout.addWidget(self.multiple_choice_label)

        self.options_layout = QVBoxLayout()
        main_layout.addLayout(self.options_layout)

        self.feedback_label = QLabel("", self)
        self.feedback_label.setWordWrap(True)
        self.feedback_label.setVisible(False)
        main_layout.addWidget(self.feedback_label)

        nav_row = QHBoxLayout()
        self.exit_button = QPushButton(EXAM_EXIT_BUTTON, self)
        self.exit_button.clicked.connect(self._handle_exit)
        nav_row.addWidget(self.exit_button)

        self.pause_button = QPushButton(EXAM_PAUSE_BUTTON, self)
        self.pause_button.clicked.connect(self._handle_pause)
        nav_row.addWidget(self.pause_button)

        self.previous_button = QPushButton(EXAM_PREVIOUS_BUTTON, self)
        self.previous_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.previous_button)

        nav_row.addStretch()

        self.finish_button = QPushButton(EXAM_FINISH_PRACTICE_BUTTON, self)
        self.finish_button.clicked.connect(self._handle_finish)
        nav_row.addWidget(self.finish_button)

        self.submit_button = QPushButton(EXAM_SUBMIT_BUTTON, self)
        self.submit_button.setStyleSheet(Styles.get_primary_button_style())
        self.submit_button.clicked.connect(self._handle_submit)
        nav_row.addWidget(self.submit_button)

        self.next_button = QPushButton(EXAM_NEXT_BUTTON, self)
        self.next_button.setStyleSheet(Styles.get_primary_button_style())
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)

        main_layout.addLayout(nav_row)

    # --- Public API ---

    def show_view(self, view: ExamView) -> None:
        if view is not self._view:
            self._view = view
            self._rendered_key = None
            self._rebuild_grid(view.session)
        self.refresh()

    @property
    def session(self) -> ExamSession | None:
        return self._view.session if self._view is not None else None

    def refresh(self) -> None:
        session = self.session
        if session is None or not session.is_active():
            return

        practice = session.mode is ExamMode.PRACTICE
        self.mode_label.setText("Practice Mode" if practice else "Exam Mode")
        self.sidebar.setVisible(practice)
        self.previous_button.setVisible(practice)
        self.previous_button.setEnabled(session.current_index > 0)

        position = session.current_index + 1
        self.progress_bar.setValue(int(session.progress() * 1000))
        self.progress_label.setText(f"Question {position} of {session.question_count}")

        key = (id(session), session.current_index)
        if key != self._rendered_key:
            self._rendered_key = key
            self.question_view.setHtml(
                render_question(session.current_question, position, session.question_count)
            )
            self._rebuild_options(session)

        self._refresh_options(session)
        self._refresh_feedback(session)
        self._refresh_buttons(session)
        self._refresh_grid(session)
        self.update_timer()

    def update_timer(self) -> None:
        session = self.session
        if session is None:
            return
        self.timer_label.setText(f"Time: {format_time(session.elapsed_seconds())}")

    # --- Rendering ---

    def _rebuild_options(self, session: ExamSession) -> None:
        for label in self._option_labels:
            self.options_layout.removeWidget(label)
            label.deleteLater()
        self._option_labels = []
        for option in session.display_options:
            label = OptionLabel(option, self)
            label.clicked.connect(self._handle_option_clicked)
            self.options_layout.addWidget(label)
            self._option_labels.append(label)
        self.multiple_choice_label.setVisible(session.is_current_multiple_choice())

    def _refresh_options(self, session: ExamSession) -> None:
        multiple = session.is_current_multiple_choice()
        selected = session.selected_options
        reveal = session.current_answer is not None
        correct = correct_option_values(session.current_question)
        for label in self._option_labels:
            value = label.option.option_value
            is_selected = value in selected
            if multiple:
                marker = "&#9745;" if is_selected else "&#9744;"
            else:
                marker = "&#9673;" if is_selected else "&#9675;"
            label.setText(f"{marker}&nbsp; {render_option_label(value)}")

            state = "plain"
            if reveal and value in correct:
                state = "correct"
            elif reveal and is_selected:
                state = "wrong"
            elif is_selected:
                state = "selected"
            label.setStyleSheet(Styles.get_option_style(state))
            label.setCursor(Qt.ArrowCursor if reveal or session.is_auto_advancing() else Qt.PointingHandCursor)

    def _refresh_feedback(self, session: ExamSession) -> None:
        answer = session.current_answer
        if answer is None:
            self.feedback_label.setVisible(False)
            return
        practice = session.mode is ExamMode.PRACTICE
        if answer.is_correct:
            text = self._correct_message if practice else "Correct!"
            if session.is_completing():
                text = f"{text}  {EXAM_PRACTICE_COMPLETED}"
            elif session.is_auto_advancing():
                text = f"{text}  {EXAM_AUTO_ADVANCE_HINT}"
        else:
            answers = ", ".join(
                option.option_value for option in session.current_question.options if option.is_correct_ans
            )
            text = EXAM_WRONG_FEEDBACK.format(answers=answers)
            if practice:
                text = f"{text}\n{EXAM_NEXT_HINT}"
        self.feedback_label.setText(text)
        self.feedback_label.setStyleSheet(Styles.get_feedback_style(answer.is_correct))
        self.feedback_label.setVisible(True)

    def _refresh_buttons(self, session: ExamSession) -> None:
        answered = session.current_answer is not None
        self.submit_button.setVisible(not answered)
        self.submit_button.setEnabled(bool(session.selected_options) and not session.is_auto_advancing())
        self.next_button.setVisible(answered and not session.is_auto_advancing())
        self.next_button.setText(EXAM_COMPLETE_BUTTON if session.is_last_question() else EXAM_NEXT_BUTTON)
        self.finish_button.setVisible(session.can_finish())

    def _rebuild_grid(self, session: ExamSession) -> None:
        for button in self._grid_buttons:
            self.grid_layout.removeWidget(button)
            button.deleteLater()
        self._grid_buttons = []
        for index, question in enumerate(session.questions):
            button = QPushButton(str(question.serial), self.sidebar)
            button.clicked.connect(lambda _checked=False, i=index: self._handle_jump(i))
            self.grid_layout.addWidget(button, index // _GRID_COLUMNS, index % _GRID_COLUMNS)
            self._grid_buttons.append(button)

    def _refresh_grid(self, session: ExamSession) -> None:
        if session.mode is not ExamMode.PRACTICE:
            return
        for button, status in zip(self._grid_buttons, session.question_statuses()):
            button.setStyleSheet(Styles.get_grid_cell_style(status.name.lower()))
            button.setEnabled(status is not QuestionStatus.CURRENT)
        counts = session.status_counts()
        self.counts_label.setText(
            f"Correct: {counts.correct}\nIncorrect: {counts.incorrect}\nRemaining: {counts.remaining}"
        )

    # --- Handlers ---

    def _handle_option_clicked(self, option_value: str) -> None:
        session = self.session
        if session is None or not session.is_active():
            return
        if session.select_option(option_value):
            self.refresh()

    def _handle_submit(self) -> None:
        session = self.session
        if session is None:
            return
        try:
            answer = session.submit_answer()
        except ExamSessionError as exc:
            show_warning(self, "Cannot submit", str(exc))
            return
        if answer.is_correct:
            self._correct_message = random.choice(CORRECT_FEEDBACK_MESSAGES)
        self.refresh()

    def _handle_next(self) -> None:
        self._run_session_action(lambda session: session.next_question())

    def _handle_previous(self) -> None:
        self._run_session_action(lambda session: session.previous_question())

    def _handle_jump(self, index: int) -> None:
        self._run_session_action(lambda session: session.jump_to(index))

    def _handle_finish(self) -> None:
        self._run_session_action(lambda session: session.finish())

    def _handle_pause(self) -> None:
        self.controller.pause_exam()

    def _handle_exit(self) -> None:
        self.controller.exit_exam()

    def _run_session_action(self, action) -> None:
        session = self.session
        if session is None or not session.is_active():
            return
        try:
            action(session)
        except ExamSessionError as exc:
            show_warning(self, "Not available", str(exc))
            return
        self.refresh()
