"""Component reviewing the questions answered wrongly most often."""

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
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from exam_trainer.constants.ui_constants import (
    BACK_BUTTON,
    MISTAKES_EMPTY_MESSAGE,
    MISTAKES_PRACTICE_BUTTON,
    OVERVIEW_ALL_CATEGORIES,
)
from exam_trainer.core.app_controller import AppController
from exam_trainer.core.markdown_renderer import renderer
from exam_trainer.core.models import QuestionMistake
from exam_trainer.core.services.statistics import (
    MistakeSortKey,
    filter_and_sort_mistakes,
    mistake_categories,
    summarize_mistakes,
)
from exam_trainer.ui.question_renderer import render_question_review

_HEADERS = ("Question", "Category", "Mistakes", "Last mistake")
_SORT_LABELS = {MistakeSortKey.COUNT: "Mistake count", MistakeSortKey.DATE: "Last mistake"}


class MistakesPanel(QWidget):
    """UI component listing the mistake tally with a per-question practice action."""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._rows: list[QuestionMistake] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.summary_label = QLabel("", self)
        layout.addWidget(self.summary_label)

        filter_row = QHBoxLayout()
        filter_row.addWidget(QLabel("Category:", self))
        self.category_combo = QComboBox(self)
        self.category_combo.currentIndexChanged.connect(self._render_rows)
        filter_row.addWidget(self.category_combo, stretch=1)

        filter_row.addWidget(QLabel("Sort by:", self))
        self.sort_combo = QComboBox(self)
        for key, label in _SORT_LABELS.items():
            self.sort_combo.addItem(label, key)
        self.sort_combo.currentIndexChanged.connect(self._render_rows)
        filter_row.addWidget(self.sort_combo)

        self.descending_check = QCheckBox("Descending", self)
        self.descending_check.setChecked(True)
        self.descending_check.toggled.connect(self._render_rows)
        filter_row.addWidget(self.descending_check)
        layout.addLayout(filter_row)

        self.table = QTableWidget(0, len(_HEADERS), self)
        self.table.setHorizontalHeaderLabels(_HEADERS)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.currentCellChanged.connect(self._handle_row_changed)
        layout.addWidget(self.table, stretch=1)

        self.detail_view = QTextBrowser(self)
        layout.addWidget(self.detail_view, stretch=1)

        self.empty_label = QLabel(MISTAKES_EMPTY_MESSAGE, self)
        layout.addWidget(self.empty_label)

        button_row = QHBoxLayout()
        self.back_button = QPushButton(BACK_BUTTON, self)
        self.back_button.clicked.connect(self.controller.back)
        button_row.addWidget(self.back_button)
        button_row.addStretch()
        self.practice_button = QPushButton(MISTAKES_PRACTICE_BUTTON, self)
        self.practice_button.clicked.connect(self._handle_practice)
        button_row.addWidget(self.practice_button)
        layout.addLayout(button_row)

    def refresh(self) -> None:
        mistakes = self.controller.mistakes
        summary = summarize_mistakes(mistakes)
        self.summary_label.setText(
            f"Questions: {summary.questions} | Total mistakes: {summary.total_mistakes} | "
            f"Most missed: {summary.max_count} | Average: {summary.average_count}"
        )

        current = self.category_combo.currentData()
        self.category_combo.blockSignals(True)
        self.category_combo.clear()
        self.category_combo.addItem(OVERVIEW_ALL_CATEGORIES, None)
        for category in mistake_categories(mistakes):
            self.category_combo.addItem(category or "Uncategorized", category)
        index = self.category_combo.findData(current)
        self.category_combo.setCurrentIndex(max(0, index))
        self.category_combo.blockSignals(False)

        self.empty_label.setVisible(not mistakes)
        self._render_rows()

    def _render_rows(self) -> None:
        self._rows = filter_and_sort_mistakes(
            self.controller.mistakes,
            category=self.category_combo.currentData(),
            sort_by=self.sort_combo.currentData() or MistakeSortKey.COUNT,
            descending=self.descending_check.isChecked(),
        )
        self.table.setRowCount(len(self._rows))
        for row, mistake in enumerate(self._rows):
            values = (
                f"#{mistake.question_serial}",
                mistake.question.category or "Uncategorized",
                str(mistake.mistake_count),
                mistake.last_mistake_date.astimezone().strftime("%Y-%m-%d %H:%M"),
            )
            for column, value in enumerate(values):
                self.table.setItem(row, column, QTableWidgetItem(value))
        self.practice_button.setEnabled(bool(self._rows))
        if self._rows:
            self.table.setCurrentCell(0, 0)
        else:
            self.detail_view.clear()

    def _handle_row_changed(self, row: int, *_args) -> None:
        if 0 <= row < len(self._rows):
            html = render_question_review(self._rows[row].question, None, show_verdict=False)
            self.detail_view.setHtml(renderer.wrap_document(html, font_size=11))

    def _handle_practice(self) -> None:
        row = self.table.currentRow()
        if 0 <= row < len(self._rows):
            self.controller.practice_question(self._rows[row].question_serial)
