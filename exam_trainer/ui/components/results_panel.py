"""Component summarising a completed attempt."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from exam_trainer.constants.exam_constants import PASSING_PERCENTAGE
from exam_trainer.constants.ui_constants import (
    NAV_BUTTON_HISTORY,
    RESULTS_BACK_BUTTON,
    RESULTS_FAILED,
    RESULTS_OVERVIEW_BUTTON,
    RESULTS_PASSED,
    RESULTS_RETAKE_BUTTON,
)
from exam_trainer.core.app_controller import AppController, ResultsView
from exam_trainer.core.services.statistics import (
    category_breakdown,
    format_time,
    is_passed,
    score_percentage,
)
from exam_trainer.styling.color_palette import ColorPalette, Theme
from exam_trainer.styling.styles import Styles

_CATEGORY_HEADERS = ("Category", "Total", "Correct", "Incorrect", "Unattended")


class ResultsPanel(QWidget):
    """UI component showing the score and per-category breakdown of a result."""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.verdict_label = QLabel("", self)
        self.verdict_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.verdict_label)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.score_label)

        self.details_label = QLabel("", self)
        self.details_label.setAlignment(Qt.AlignCenter)
        self.details_label.setWordWrap(True)
        layout.addWidget(self.details_label)

        self.category_table = QTableWidget(0, len(_CATEGORY_HEADERS), self)
        self.category_table.setHorizontalHeaderLabels(_CATEGORY_HEADERS)
        self.category_table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.category_table.verticalHeader().setVisible(False)
        self.category_table.setEditTriggers(QTableWidget.NoEditTriggers)
        layout.addWidget(self.category_table, stretch=1)

        self.unavailable_label = QLabel(
            "The questions for this attempt are no longer in the bank; "
            "retake and overview are unavailable.",
            self,
        )
        self.unavailable_label.setWordWrap(True)
        self.unavailable_label.setVisible(False)
        layout.addWidget(self.unavailable_label)

        button_row = QHBoxLayout()
        self.back_button = QPushButton(RESULTS_BACK_BUTTON, self)
        self.back_button.clicked.connect(self.controller.back)
        button_row.addWidget(self.back_button)

        self.history_button = QPushButton(NAV_BUTTON_HISTORY, self)
        self.history_button.clicked.connect(self.controller.view_history)
        button_row.addWidget(self.history_button)

        button_row.addStretch()

        self.overview_button = QPushButton(RESULTS_OVERVIEW_BUTTON, self)
        self.overview_button.clicked.connect(self.controller.view_overview)
        button_row.addWidget(self.overview_button)

        self.retake_button = QPushButton(RESULTS_RETAKE_BUTTON, self)
        self.retake_button.setStyleSheet(Styles.get_primary_button_style())
        self.retake_button.clicked.connect(self.controller.retake_exam)
        button_row.addWidget(self.retake_button)
        layout.addLayout(button_row)

    def show_view(self, view: ResultsView) -> None:
        result = view.result
        passed = is_passed(result)
        color = ColorPalette.SUCCESS if passed else ColorPalette.ERROR
        self.verdict_label.setText(RESULTS_PASSED if passed else RESULTS_FAILED)
        self.verdict_label.setStyleSheet(
            f"font-size: 20pt; font-weight: bold; color: {color.get(Theme.LIGHT)};"
        )
        self.score_label.setText(
            f"{score_percentage(result)}% ({result.correct_answers}/{result.total_questions})"
        )
        self.details_label.setText(
            f"Questions {result.questions_range.start}-{result.questions_range.end} | "
            f"Incorrect: {result.incorrect_answers} | Unattended: {result.unattended_questions} | "
            f"Time: {format_time(result.time_taken)} | "
            f"Completed: {result.completed_at.astimezone().strftime('%Y-%m-%d %H:%M')} | "
            f"Pass mark: {PASSING_PERCENTAGE}%"
        )

        rows = category_breakdown(result, view.questions)
        self.category_table.setRowCount(len(rows))
        for row, entry in enumerate(rows):
            values = (entry.category or "Uncategorized", entry.total, entry.correct, entry.incorrect, entry.unattended)
            for column, value in enumerate(values):
                self.category_table.setItem(row, column, QTableWidgetItem(str(value)))

        has_questions = bool(view.questions)
        self.unavailable_label.setVisible(not has_questions)
        self.retake_button.setEnabled(has_questions)
        self.overview_button.setEnabled(has_questions)
