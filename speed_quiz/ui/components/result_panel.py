"""Component showing how an attempt ended."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from speed_quiz.constants.ui_constants import (
    RESULT_ELAPSED_TEMPLATE,
    RESULT_FAILED_TEMPLATE,
    RESULT_FINISHED_TEMPLATE,
    RESULT_GRADE_ERROR_MESSAGE,
    RESULT_SCORE_TEMPLATE,
    RESULT_SCOREBOARD_BUTTON,
    RESULT_TIMEOUT_MESSAGE,
    RESULT_TRY_AGAIN_BUTTON,
)
from speed_quiz.core.models import FailureReason, QuizOutcome
from speed_quiz.styling.styles import Styles


def describe_outcome(outcome: QuizOutcome) -> list[str]:
    """Lines of text summarising an outcome, headline first."""
    template = RESULT_FINISHED_TEMPLATE if outcome.is_finished else RESULT_FAILED_TEMPLATE
    lines = [template.format(username=outcome.username or "Guest")]
    if outcome.result_message:
        lines.append(outcome.result_message)
    elif outcome.failure_reason is FailureReason.WRONG_ANSWER and outcome.verdict_message:
        lines.append(outcome.verdict_message)
    elif outcome.failure_reason is FailureReason.TIMEOUT:
        lines.append(RESULT_TIMEOUT_MESSAGE)
    elif outcome.failure_reason is FailureReason.GRADE_ERROR:
        lines.append(RESULT_GRADE_ERROR_MESSAGE)
    lines.append(RESULT_SCORE_TEMPLATE.format(score=outcome.score))
    lines.append(RESULT_ELAPSED_TEMPLATE.format(seconds=outcome.elapsed_seconds))
    return lines


class ResultPanel(QWidget):
    """Headline, details and the try-again / scoreboard actions."""

    def __init__(
        self,
        on_try_again: Callable[[], None],
        on_show_scoreboard: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_try_again = on_try_again
        self.on_show_scoreboard = on_show_scoreboard
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.headline_label = QLabel("", self)
        self.headline_label.setAlignment(Qt.AlignCenter)
        self.headline_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.headline_label)

        self.details_label = QLabel("", self)
        self.details_label.setAlignment(Qt.AlignCenter)
        self.details_label.setWordWrap(True)
        layout.addWidget(self.details_label)

        button_row = QHBoxLayout()
        self.try_again_button = QPushButton(RESULT_TRY_AGAIN_BUTTON, self)
        self.try_again_button.clicked.connect(self.on_try_again)
        button_row.addWidget(self.try_again_button)

        self.scoreboard_button = QPushButton(RESULT_SCOREBOARD_BUTTON, self)
        self.scoreboard_button.clicked.connect(self.on_show_scoreboard)
        button_row.addWidget(self.scoreboard_button)
        layout.addLayout(button_row)
        layout.addStretch()

    def show_outcome(self, outcome: QuizOutcome) -> None:
        headline, *details = describe_outcome(outcome)
        self.headline_label.setText(headline)
        self.details_label.setText("\n".join(details))
        self.try_again_button.setFocus()
