"""Component reviewing every question of a completed attempt."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from exam_trainer.constants.ui_constants import OVERVIEW_ALL_CATEGORIES, OVERVIEW_BACK_BUTTON
from exam_trainer.core.app_controller import AppController, OverviewView
from exam_trainer.core.markdown_renderer import renderer
from exam_trainer.core.services.statistics import (
    AnswerOutcome,
    answered_category_stats,
    filter_reviewed_questions,
    unattended_questions,
)
from exam_trainer.ui.question_renderer import render_question_review


class OverviewPanel(QWidget):
    """UI component listing answered questions with filters, then the unattended ones."""

    def __init__(self, controller: AppController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._view: OverviewView | None = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.stats_label = QLabel("", self)
        self.stats_label.setWordWrap(True)
        layout.addWidget(self.stats_label)

        filter_row = QHBoxLayout()
        filter_row.addWidget(QLabel("Category:", self))
        self.category_combo = QComboBox(self)
        self.category_combo.currentIndexChanged.connect(self._render)
        filter_row.addWidget(self.category_combo, stretch=1)
        filter_row.addWidget(QLabel("Show:", self))
        self.outcome_combo = QComboBox(self)
        for outcome in AnswerOutcome:
            self.outcome_combo.addItem(outcome.value.capitalize(), outcome)
        self.outcome_combo.currentIndexChanged.connect(self._render)
        filter_row.addWidget(self.outcome_combo)
        layout.addLayout(filter_row)

        self.review_view = QTextBrowser(self)
        layout.addWidget(self.review_view, stretch=1)

        button_row = QHBoxLayout()
        self.back_button = QPushButton(OVERVIEW_BACK_BUTTON, self)
        self.back_button.clicked.connect(self.controller.back)
        button_row.addWidget(self.back_button)
        button_row.addStretch()
        layout.addLayout(button_row)

    def show_view(self, view: OverviewView) -> None:
        self._view = view
        stats = answered_category_stats(view.result, view.questions)
        self.stats_label.setText(
            " | ".join(
                f"{entry.category or 'Uncategorized'}: {entry.correct}/{entry.total} ({entry.percentage}%)"
                for entry in stats
            )
            or "No questions were answered in this attempt."
        )

        self.category_combo.blockSignals(True)
        self.category_combo.clear()
        self.category_combo.addItem(OVERVIEW_ALL_CATEGORIES, None)
        for entry in stats:
            self.category_combo.addItem(entry.category or "Uncategorized", entry.category)
        self.category_combo.blockSignals(False)
        self._render()

    def _render(self) -> None:
        view = self._view
        if view is None:
            return
        category = self.category_combo.currentData()
        outcome = self.outcome_combo.currentData() or AnswerOutcome.ALL
        reviewed = filter_reviewed_questions(view.result, view.questions, category, outcome)

        parts = [f"<h3>Answered questions ({len(reviewed)})</h3>"]
        for question in reviewed:
            parts.append(render_question_review(question, view.result.answer_for(question.serial)))
            parts.append("<hr/>")

        skipped = unattended_questions(view.result, view.questions)
        if skipped:
            parts.append(f"<h3>Unattended questions ({len(skipped)})</h3>")
            for question in skipped:
                parts.append(render_question_review(question, None))
                parts.append("<hr/>")
        self.review_view.setHtml(renderer.wrap_document("".join(parts), font_size=11))
