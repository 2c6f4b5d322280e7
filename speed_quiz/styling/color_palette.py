"""Color palette for SpeedQuiz supporting light and dark themes."""

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

    TEXT_PRIMARY = ThemeColors(light="#424242", dark="#F5F5F5")

    BACKGROUND_PRIMARY = ThemeColors(light="#F5F5F5", dark="#1E1E1E")
    BACKGROUND_SECONDARY = ThemeColors(light="#FFFFFF", dark="#2D2D2D")

    ACCENT_PRIMARY = ThemeColors(light="#1976D2", dark="#4A9EFF")
    ACCENT_HOVER = ThemeColors(light="#1565C0", dark="#3A8EEF")

    # Status colors
    SUCCESS = ThemeColors(light="#3DD119", dark="#6FCF6F")
    WARNING = ThemeColors(light="#FF9800", dark="#FFC83D")
    ERROR = ThemeColors(light="#D12519", dark="#FF6B6B")

    BORDER_PRIMARY = ThemeColors(light="#E0E0E0", dark="#555555")

    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")
    TABLE_ALTERNATE_BG = ThemeColors(light="#F2F2F2", dark="#2A2A2A")
