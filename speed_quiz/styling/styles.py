"""Centralized styles and font definitions for the application."""

from speed_quiz.constants.quiz_constants import TIMER_CRITICAL_SECONDS, TIMER_WARNING_SECONDS

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.ACCENT_PRIMARY.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: none;
                border-radius: 4px;
                padding: 10px 20px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.ACCENT_HOVER.get(theme)};
            }}
            QPushButton:disabled {{
                background-color: {ColorPalette.BORDER_PRIMARY.get(theme)};
            }}
            QLineEdit {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 12px;
            }}
            QLineEdit:focus {{
                border-color: {ColorPalette.ACCENT_PRIMARY.get(theme)};
            }}
            QRadioButton {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 10px;
            }}
            QTableWidget {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                alternate-background-color: {ColorPalette.TABLE_ALTERNATE_BG.get(theme)};
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_timer_style(remaining_seconds: float, theme: Theme = Theme.LIGHT) -> str:
        if remaining_seconds <= TIMER_CRITICAL_SECONDS:
            color = ColorPalette.ERROR.get(theme)
        elif remaining_seconds <= TIMER_WARNING_SECONDS:
            color = ColorPalette.WARNING.get(theme)
        else:
            color = ColorPalette.SUCCESS.get(theme)
        return f"font-size: 14pt; font-weight: bold; color: {color};"

    @staticmethod
    def get_verdict_style(correct: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.SUCCESS.get(theme) if correct else ColorPalette.ERROR.get(theme)
        return f"background-color: {color}; color: white;"
