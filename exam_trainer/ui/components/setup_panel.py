"""Component for choosing the question range and mode of a new attempt."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QButtonGroup,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QRadioButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from exam_trainer.constants.exam_constants import (
    DEFAULT_END_QUESTION,
    DEFAULT_START_QUESTION,
    PASSING_PERCENTAGE,
)
from exam_trainer.constants.ui_constants import (
    EXAM_LOAD_ERROR_TITLE,
    SETUP_BANK_TEMPLATE,
    SETUP_END_LABEL,
    SETUP_HEADING,
    SETUP_MODE_EXAM,
    SETUP_MODE_PRACTICE,
    SETUP_QUICK_START_TITLE,
    SETUP_RESUME_BUTTON,
    SETUP_START_BUTTON,
    SETUP_START_LABEL,
)
from exam_trainer.core.app_controller import AppController
from exam_trainer.core.models import ExamMode, ExamSettings
from exam_trainer.styling.styles import Styles
from exam_trainer.ui.dialog_helpers import show_warning


class SetupPanel(QWidget):
    """UI component for configuring and starting an exam."""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        heading = QLabel(SETUP_HEADING, self)
        heading.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(heading)

        question_count = self.controller.bank.question_count
        self.bank_label = QLabel(SETUP_BANK_TEMPLATE.format(count=question_count), self)
        layout.addWidget(self.bank_label)

        form = QFormLayout()
        self.start_spin = QSpinBox(self)
        self.start_spin.setRange(1, max(1, question_count))
        self.start_spin.setValue(min(DEFAULT_START_QUESTION, question_count))
        form.addRow(SETUP_START_LABEL, self.start_spin)

        self.end_spin = QSpinBox(self)
        self.end_spin.setRange(1, max(1, question_count))
        self.end_spin.setValue(min(DEFAULT_END_QUESTION, question_count))
        form.addRow(SETUP_END_LABEL, self.end_spin)
        layout.addLayout(form)

        mode_box = QGroupBox("Mode", self)
        mode_layout = QVBoxLayout()
        mode_box.setLayout(mode_layout)
        self.practice_radio = QRadioButton(SETUP_MODE_PRACTICE, mode_box)
        self.exam_radio = QRadioButton(SETUP_MODE_EXAM, mode_box)
        self.practice_radio.setChecked(True)
        self.mode_group = QButtonGroup(self)
        self.mode_group.addButton(self.practice_radio)
        self.mode_group.addButton(self.exam_radio)
        mode_layout.addWidget(self.practice_radio)
        mode_layout.addWidget(self.exam_radio)
        layout.addWidget(mode_box)

        quick_box = QGroupBox(SETUP_QUICK_START_TITLE, self)
        quick_layout = QHBoxLayout()
        quick_box.setLayout(quick_layout)
        for start, end in self.controller.bank.quick_start_ranges():
            button = QPushButton(f"Questions {start}-{end}", quick_box)
            button.clicked.connect(lambda _checked=False, s=start, e=end: self._handle_quick_start(s, e))
            quick_layout.addWidget(button)
        layout.addWidget(quick_box)

        self.pass_label = QLabel(f"Passing score: {PASSING_PERCENTAGE}%", self)
        self.pass_label.setAlignment(Qt.AlignRight)
        layout.addWidget(self.pass_label)

        button_row = QHBoxLayout()
        self.resume_button = QPushButton(SETUP_RESUME_BUTTON, self)
        self.resume_button.clicked.connect(self._handle_resume)
        button_row.addWidget(self.resume_button)
        button_row.addStretch()
        self.start_button = QPushButton(SETUP_START_BUTTON, self)
        self.start_button.setStyleSheet(Styles.get_primary_button_style())
        self.start_button.clicked.connect(self._handle_start)
        button_row.addWidget(self.start_button)
        layout.addLayout(button_row)

        layout.addStretch()

    def refresh(self) -> None:
        self.resume_button.setVisible(self.controller.has_paused_exam())

    def selected_settings(self) -> ExamSettings:
        mode = ExamMode.EXAM if self.exam_radio.isChecked() else ExamMode.PRACTICE
        return ExamSettings(
            start_question=self.start_spin.value(),
            end_question=self.end_spin.value(),
            mode=mode,
        )

    def _handle_quick_start(self, start: int, end: int) -> None:
        mode = self.selected_settings().mode
        self._start(ExamSettings(start_question=start, end_question=end, mode=mode))

    def _handle_start(self) -> None:
        self._start(self.selected_settings())

    def _start(self, settings: ExamSettings) -> None:
        errors = self.controller.start_exam(settings)
        if errors:
            show_warning(self, EXAM_LOAD_ERROR_TITLE, "\n".join(errors))

    def _handle_resume(self) -> None:
        self.controller.resume_exam()
