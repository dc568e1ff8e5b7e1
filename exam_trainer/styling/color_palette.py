"""Color palette for the exam trainer supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    # Text colors
    TEXT_PRIMARY = ThemeColors(
        light="#1B1F24",
        dark="#F5F5F5"
    )

    TEXT_SECONDARY = ThemeColors(
        light="#5F6B7A",
        dark="#AAAAAA"
    )

    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(
        light="#FFFFFF",
        dark="#1E1E1E"
    )

    BACKGROUND_SECONDARY = ThemeColors(
        light="#F4F6F8",
        dark="#2D2D2D"
    )

    # Accent (AWS orange)
    ACCENT_PRIMARY = ThemeColors(
        light="#FF9900",
        dark="#FFAC31"
    )

    # Answer feedback
    SUCCESS = ThemeColors(
        light="#107C10",
        dark="#6FCF6F"
    )

    SUCCESS_BG = ThemeColors(
        light="#E6F4E6",
        dark="#1F3A1F"
    )

    ERROR = ThemeColors(
        light="#D13438",
        dark="#FF6B6B"
    )

    ERROR_BG = ThemeColors(
        light="#FBE9EA",
        dark="#442426"
    )

    SELECTED_BG = ThemeColors(
        light="#E5F1FB",
        dark="#22384F"
    )

    # Question grid
    GRID_CURRENT = ThemeColors(
        light="#0078D4",
        dark="#4A9EFF"
    )

    GRID_UNANSWERED = ThemeColors(
        light="#E8E8E8",
        dark="#3A3A3A"
    )

    # Borders and buttons
    BORDER_PRIMARY = ThemeColors(
        light="#D1D1D1",
        dark="#555555"
    )

    BUTTON_PRIMARY_BG = ThemeColors(
        light="#232F3E",
        dark="#FF9900"
    )

    BUTTON_PRIMARY_TEXT = ThemeColors(
        light="#FFFFFF",
        dark="#000000"
    )

    BUTTON_SECONDARY_BG = ThemeColors(
        light="#F5F5F5",
        dark="#3A3A3A"
    )

    BUTTON_HOVER_BG = ThemeColors(
        light="#E8E8E8",
        dark="#505050"
    )
