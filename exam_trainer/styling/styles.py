"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QSpinBox, QComboBox {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QListWidget, QTableWidget, QTextBrowser {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_primary_button_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};"
            f" color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};"
            " font-weight: bold;"
        )

    @staticmethod
    def get_feedback_style(is_correct: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.SUCCESS if is_correct else ColorPalette.ERROR
        background = ColorPalette.SUCCESS_BG if is_correct else ColorPalette.ERROR_BG
        return (
            f"color: {color.get(theme)}; background-color: {background.get(theme)};"
            " padding: 8px; border-radius: 4px; font-weight: bold;"
        )

    @staticmethod
    def get_option_style(state: str, theme: Theme = Theme.LIGHT) -> str:
        """Stylesheet for an answer option in one of: plain, selected, correct, wrong."""
        backgrounds = {
            "plain": ColorPalette.BACKGROUND_PRIMARY,
            "selected": ColorPalette.SELECTED_BG,
            "correct": ColorPalette.SUCCESS_BG,
            "wrong": ColorPalette.ERROR_BG,
        }
        borders = {
            "plain": ColorPalette.BORDER_PRIMARY,
            "selected": ColorPalette.GRID_CURRENT,
            "correct": ColorPalette.SUCCESS,
            "wrong": ColorPalette.ERROR,
        }
        return (
            f"background-color: {backgrounds[state].get(theme)};"
            f" border: 2px solid {borders[state].get(theme)};"
            " border-radius: 6px; padding: 8px;"
        )

    @staticmethod
    def get_grid_cell_style(status: str, theme: Theme = Theme.LIGHT) -> str:
        """Stylesheet for a question-number cell: current, correct, incorrect or unanswered."""
        backgrounds = {
            "current": ColorPalette.GRID_CURRENT,
            "correct": ColorPalette.SUCCESS,
            "incorrect": ColorPalette.ERROR,
            "unanswered": ColorPalette.GRID_UNANSWERED,
        }
        text = ColorPalette.TEXT_PRIMARY if status == "unanswered" else ColorPalette.BUTTON_PRIMARY_TEXT
        return (
            f"background-color: {backgrounds[status].get(theme)}; color: {text.get(theme)};"
            " min-width: 28px; max-width: 28px; padding: 4px; border-radius: 4px;"
        )
