"""Qt UI components for the exam trainer."""

from .dialog_helpers import confirm, show_error, show_info, show_warning
from .main_window import MainWindow
from .question_renderer import render_option_label, render_question, render_question_review

__all__ = [
    "MainWindow",
    "confirm",
    "show_error",
    "show_info",
    "show_warning",
    "render_option_label",
    "render_question",
    "render_question_review",
]
