"""Qt main window hosting the quiz views and reacting to session outcomes."""

from __future__ import annotations

import logging
from enum import Enum, auto

from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from speed_quiz.config import Settings
from speed_quiz.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from speed_quiz.constants.ui_constants import (
    NAV_BUTTON_ABOUT,
    NAV_BUTTON_HELP,
    NAV_BUTTON_QUIZ,
    NAV_BUTTON_SCOREBOARD,
    WINDOW_TITLE,
)
from speed_quiz.core.models import QuizOutcome
from speed_quiz.core.quiz_session import QuizSession
from speed_quiz.core.services.question_service import QuestionService
from speed_quiz.core.services.scoreboard import Scoreboard
from speed_quiz.styling.styles import Styles
from speed_quiz.ui.components.menu_panel import MenuPanel
from speed_quiz.ui.components.quiz_panel import QuizPanel
from speed_quiz.ui.components.result_panel import ResultPanel
from speed_quiz.ui.components.scoreboard_panel import ScoreboardPanel
from speed_quiz.ui.dialog_helpers import confirm_abandon_quiz, show_error, show_info

logger = logging.getLogger(__name__)


class QuizView(Enum):
    """Top-level view shown in the main window."""

    MENU = auto()
    QUIZ = auto()
    RESULT = auto()
    SCOREBOARD = auto()


class QuizMainWindow(QMainWindow):
    """Creates quiz sessions and swaps views when they end."""

    def __init__(
        self,
        service: QuestionService,
        scoreboard: Scoreboard,
        settings: Settings,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.service = service
        self.scoreboard = scoreboard
        self.settings = settings

        self._quiz_session: QuizSession | None = None
        self._username: str = ""
        self._view = QuizView.MENU

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_nav_buttons(root_layout)

        self.view_stack = QStackedWidget(self)
        self.menu_panel = MenuPanel(on_start_quiz=self._start_quiz, parent=self)
        self.quiz_panel = QuizPanel(parent=self)
        self.result_panel = ResultPanel(
            on_try_again=self._try_again,
            on_show_scoreboard=self._show_scoreboard,
            parent=self,
        )
        self.scoreboard_panel = ScoreboardPanel(self.scoreboard, parent=self)

        self._view_indexes = {
            QuizView.MENU: self.view_stack.addWidget(self.menu_panel),
            QuizView.QUIZ: self.view_stack.addWidget(self.quiz_panel),
            QuizView.RESULT: self.view_stack.addWidget(self.result_panel),
            QuizView.SCOREBOARD: self.view_stack.addWidget(self.scoreboard_panel),
        }
        root_layout.addWidget(self.view_stack)

        self._set_view(QuizView.MENU)

    def _build_nav_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.quiz_nav_button = QPushButton(NAV_BUTTON_QUIZ, self)
        self.quiz_nav_button.clicked.connect(self._show_menu)
        button_row.addWidget(self.quiz_nav_button)

        self.scoreboard_nav_button = QPushButton(NAV_BUTTON_SCOREBOARD, self)
        self.scoreboard_nav_button.clicked.connect(self._show_scoreboard)
        button_row.addWidget(self.scoreboard_nav_button)

        self.about_button = QPushButton(NAV_BUTTON_ABOUT, self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton(NAV_BUTTON_HELP, self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        layout.addLayout(button_row)

    def _set_view(self, view: QuizView) -> None:
        self._view = view
        self.view_stack.setCurrentIndex(self._view_indexes[view])

    # --- Session lifecycle ---

    def _start_quiz(self, username: str) -> None:
        self._discard_session()
        self._username = username
        session = QuizSession(
            username,
            self.service,
            self.settings.effective_question_url(),
            time_limit_seconds=self.settings.time_limit_seconds,
            tick_interval_ms=self.settings.tick_interval_ms,
            parent=self,
        )
        session.finished.connect(self._handle_finished)
        session.failed.connect(self._handle_failed)
        self._quiz_session = session
        self.quiz_panel.bind_session(session)
        self._set_view(QuizView.QUIZ)
        session.begin()

    def _try_again(self) -> None:
        if self._quiz_session is None:
            self._show_menu()
            return
        self._set_view(QuizView.QUIZ)
        self._quiz_session.restart()

    def _handle_finished(self, outcome: QuizOutcome) -> None:
        try:
            self.scoreboard.record_outcome(outcome)
        except (OSError, ValueError):
            logger.exception("Could not record the score for %s", outcome.username)
            show_error(self, "Scoreboard", "Your time could not be saved to the scoreboard.")
        self._show_result(outcome)

    def _handle_failed(self, outcome: QuizOutcome) -> None:
        self._show_result(outcome)

    def _show_result(self, outcome: QuizOutcome) -> None:
        self.result_panel.show_outcome(outcome)
        self._set_view(QuizView.RESULT)

    def _discard_session(self) -> None:
        if self._quiz_session is None:
            return
        self._quiz_session.shutdown()
        self.quiz_panel.unbind_session()
        self._quiz_session.deleteLater()
        self._quiz_session = None

    # --- Navigation ---

    def _leave_running_quiz(self) -> bool:
        if self._view is not QuizView.QUIZ or self._quiz_session is None:
            return True
        if self._quiz_session.state.is_terminal:
            return True
        if not confirm_abandon_quiz(self):
            return False
        self._discard_session()
        return True

    def _show_menu(self) -> None:
        if not self._leave_running_quiz():
            return
        self.menu_panel.reset_state(self._username)
        self._set_view(QuizView.MENU)

    def _show_scoreboard(self) -> None:
        if not self._leave_running_quiz():
            return
        self.scoreboard_panel.refresh()
        self._set_view(QuizView.SCOREBOARD)

    def _handle_about(self) -> None:
        details = f"{APP_NAME} v{APP_VERSION}\nLicense: {APP_LICENSE}\n\n{APP_ABOUT_TEXT}"
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        self._discard_session()
        super().closeEvent(event)
