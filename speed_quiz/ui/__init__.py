"""Qt UI components for the quiz application."""

from .dialog_helpers import confirm_abandon_quiz, show_error, show_info, show_warning
from .main_window import QuizMainWindow

__all__ = [
    "QuizMainWindow",
    "confirm_abandon_quiz",
    "show_error",
    "show_info",
    "show_warning",
]
