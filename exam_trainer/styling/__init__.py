"""Styling module for the exam trainer."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
