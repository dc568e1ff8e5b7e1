"""Component listing completed attempts."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from exam_trainer.constants.ui_constants import BACK_BUTTON, HISTORY_EMPTY_MESSAGE
from exam_trainer.core.app_controller import AppController
from exam_trainer.core.models import ExamResult
from exam_trainer.core.services.statistics import (
    HistoryOutcome,
    HistorySortKey,
    filter_history,
    format_time,
    is_passed,
    score_percentage,
    sort_history,
    summarize_history,
)

_HEADERS = ("Completed", "Range", "Score", "Correct", "Time", "Result")


class HistoryPanel(QWidget):
    """UI component for browsing, filtering and opening past results."""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._rows: list[ExamResult] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.summary_label = QLabel("", self)
        self.summary_label.setWordWrap(True)
        layout.addWidget(self.summary_label)

        filter_row = QHBoxLayout()
        filter_row.addWidget(QLabel("Show:", self))
        self.outcome_combo = QComboBox(self)
        for outcome in HistoryOutcome:
            self.outcome_combo.addItem(outcome.value.capitalize(), outcome)
        self.outcome_combo.currentIndexChanged.connect(self.refresh)
        filter_row.addWidget(self.outcome_combo)

        filter_row.addWidget(QLabel("Sort by:", self))
        self.sort_combo = QComboBox(self)
        for key in HistorySortKey:
            self.sort_combo.addItem(key.value.capitalize(), key)
        self.sort_combo.currentIndexChanged.connect(self.refresh)
        filter_row.addWidget(self.sort_combo)

        self.descending_check = QCheckBox("Descending", self)
        self.descending_check.setChecked(True)
        self.descending_check.toggled.connect(self.refresh)
        filter_row.addWidget(self.descending_check)
        filter_row.addStretch()
        layout.addLayout(filter_row)

        self.table = QTableWidget(0, len(_HEADERS), self)
        self.table.setHorizontalHeaderLabels(_HEADERS)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.cellDoubleClicked.connect(self._handle_open_row)
        layout.addWidget(self.table, stretch=1)

        self.empty_label = QLabel(HISTORY_EMPTY_MESSAGE, self)
        layout.addWidget(self.empty_label)

        button_row = QHBoxLayout()
        self.back_button = QPushButton(BACK_BUTTON, self)
        self.back_button.clicked.connect(self.controller.back)
        button_row.addWidget(self.back_button)
        button_row.addStretch()
        self.open_button = QPushButton("Open Result", self)
        self.open_button.clicked.connect(lambda: self._handle_open_row(self.table.currentRow(), 0))
        button_row.addWidget(self.open_button)
        layout.addLayout(button_row)

    def refresh(self) -> None:
        history = self.controller.history
        summary = summarize_history(history)
        self.summary_label.setText(
            f"Exams: {summary.total_exams} | Passed: {summary.passed} | Failed: {summary.failed} | "
            f"Average: {summary.average_percentage}% | Best: {summary.best_percentage}%"
        )

        outcome = self.outcome_combo.currentData() or HistoryOutcome.ALL
        sort_key = self.sort_combo.currentData() or HistorySortKey.DATE
        self._rows = sort_history(
            filter_history(history, outcome),
            sort_key,
            descending=self.descending_check.isChecked(),
        )

        self.table.setRowCount(len(self._rows))
        for row, result in enumerate(self._rows):
            values = (
                result.completed_at.astimezone().strftime("%Y-%m-%d %H:%M"),
                f"{result.questions_range.start}-{result.questions_range.end}",
                f"{score_percentage(result)}%",
                f"{result.correct_answers}/{result.total_questions}",
                format_time(result.time_taken),
                "Passed" if is_passed(result) else "Failed",
            )
            for column, value in enumerate(values):
                self.table.setItem(row, column, QTableWidgetItem(value))

        self.empty_label.setVisible(not history)
        self.open_button.setEnabled(bool(self._rows))

    def _handle_open_row(self, row: int, _column: int) -> None:
        if 0 <= row < len(self._rows):
            self.controller.view_result(self._rows[row])
