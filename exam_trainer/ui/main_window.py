"""Qt main window hosting the setup, exam and review views."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from exam_trainer.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from exam_trainer.constants.ui_constants import (
    NAV_BUTTON_ABOUT,
    NAV_BUTTON_CLEAR_DATA,
    NAV_BUTTON_HELP,
    NAV_BUTTON_HISTORY,
    NAV_BUTTON_MISTAKES,
    NAV_BUTTON_SETUP,
    TIMER_REFRESH_INTERVAL_MS,
    WINDOW_MIN_HEIGHT,
    WINDOW_MIN_WIDTH,
    WINDOW_TITLE,
)
from exam_trainer.core.app_controller import (
    AppController,
    AppView,
    ExamView,
    HistoryView,
    MistakesView,
    OverviewView,
    ResultsView,
    SetupView,
)
from exam_trainer.core.services.persistence_store import PersistenceStore
from exam_trainer.core.services.question_bank import QuestionBank
from exam_trainer.styling.styles import Styles
from exam_trainer.ui.components.exam_panel import ExamPanel
from exam_trainer.ui.components.history_panel import HistoryPanel
from exam_trainer.ui.components.mistakes_panel import MistakesPanel
from exam_trainer.ui.components.overview_panel import OverviewPanel
from exam_trainer.ui.components.results_panel import ResultsPanel
from exam_trainer.ui.components.setup_panel import SetupPanel
from exam_trainer.ui.dialog_helpers import confirm, show_info

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main Qt window rendering whichever view the controller is in."""

    def __init__(self, bank: QuestionBank, store: PersistenceStore) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumSize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT)

        self.controller = AppController(
            bank,
            store,
            scheduler=self._schedule,
            confirm=lambda message: confirm(self, WINDOW_TITLE, message),
        )

        self._build_ui()
        self._configure_refresh_timer()
        self.setStyleSheet(Styles.get_main_window_style())

        self.controller.add_listener(self._render_view)
        self._render_view(self.controller.view)
        if self.controller.restored_from_snapshot:
            self.statusBar().showMessage("Restored your previous session.", 5000)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_nav_buttons(root_layout)

        self.view_stack = QStackedWidget(self)
        self.setup_panel = SetupPanel(self.controller, self)
        self.exam_panel = ExamPanel(self.controller, self)
        self.results_panel = ResultsPanel(self.controller, self)
        self.history_panel = HistoryPanel(self.controller, self)
        self.mistakes_panel = MistakesPanel(self.controller, self)
        self.overview_panel = OverviewPanel(self.controller, self)

        for panel in (
            self.setup_panel,
            self.exam_panel,
            self.results_panel,
            self.history_panel,
            self.mistakes_panel,
            self.overview_panel,
        ):
            self.view_stack.addWidget(panel)

        root_layout.addWidget(self.view_stack, stretch=1)

    def _build_nav_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.setup_button = QPushButton(NAV_BUTTON_SETUP, self)
        self.setup_button.setCheckable(True)
        self.setup_button.clicked.connect(self._handle_setup)
        button_row.addWidget(self.setup_button)

        self.history_button = QPushButton(NAV_BUTTON_HISTORY, self)
        self.history_button.setCheckable(True)
        self.history_button.clicked.connect(self.controller.view_history)
        button_row.addWidget(self.history_button)

        self.mistakes_button = QPushButton(NAV_BUTTON_MISTAKES, self)
        self.mistakes_button.setCheckable(True)
        self.mistakes_button.clicked.connect(self.controller.view_mistakes)
        button_row.addWidget(self.mistakes_button)

        button_row.addStretch()

        self.clear_button = QPushButton(NAV_BUTTON_CLEAR_DATA, self)
        self.clear_button.clicked.connect(self._handle_clear_data)
        button_row.addWidget(self.clear_button)

        self.about_button = QPushButton(NAV_BUTTON_ABOUT, self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton(NAV_BUTTON_HELP, self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        layout.addLayout(button_row)

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(TIMER_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _refresh_state(self) -> None:
        if isinstance(self.controller.view, ExamView):
            self.exam_panel.update_timer()

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        def fire() -> None:
            callback()
            self._render_view(self.controller.view)

        QTimer.singleShot(delay_ms, fire)

    def _render_view(self, view: AppView) -> None:
        if isinstance(view, ExamView):
            self.exam_panel.show_view(view)
            self.view_stack.setCurrentWidget(self.exam_panel)
        elif isinstance(view, ResultsView):
            self.results_panel.show_view(view)
            self.view_stack.setCurrentWidget(self.results_panel)
        elif isinstance(view, OverviewView):
            self.overview_panel.show_view(view)
            self.view_stack.setCurrentWidget(self.overview_panel)
        elif isinstance(view, HistoryView):
            self.history_panel.refresh()
            self.view_stack.setCurrentWidget(self.history_panel)
        elif isinstance(view, MistakesView):
            self.mistakes_panel.refresh()
            self.view_stack.setCurrentWidget(self.mistakes_panel)
        else:
            self.setup_panel.refresh()
            self.view_stack.setCurrentWidget(self.setup_panel)

        in_exam = isinstance(view, ExamView)
        for button in (self.setup_button, self.history_button, self.mistakes_button, self.clear_button):
            button.setEnabled(not in_exam)
        self.setup_button.setChecked(isinstance(view, SetupView))
        self.history_button.setChecked(isinstance(view, HistoryView))
        self.mistakes_button.setChecked(isinstance(view, MistakesView))

    def _handle_setup(self) -> None:
        if isinstance(self.controller.view, OverviewView):
            self.controller.back()
        self.controller.back()
        self._render_view(self.controller.view)

    def _handle_clear_data(self) -> None:
        if self.controller.clear_all_data():
            show_info(self, "Data cleared", "Exam history, mistakes and the saved session were deleted.")
        else:
            self._render_view(self.controller.view)

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)
