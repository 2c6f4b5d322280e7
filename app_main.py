"""Application entry point for SpeedQuiz."""

from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication

from speed_quiz.config import Settings, get_settings
from speed_quiz.constants.about import APP_NAME
from speed_quiz.constants.quiz_constants import SCORES_FILE_NAME
from speed_quiz.core.quiz_importer import DEFAULT_QUIZ_FILE, load_quiz_from_file
from speed_quiz.core.services.http_question_service import HttpQuestionService
from speed_quiz.core.services.scoreboard import Scoreboard
from speed_quiz.server.question_server import QuestionBank, start_question_server
from speed_quiz.ui.main_window import QuizMainWindow
from speed_quiz.utils.logging_config import configure_logging


def _resolve_scores_path(settings: Settings) -> Path:
    if settings.scores_path is not None:
        return settings.scores_path
    data_dir = QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    return Path(data_dir) / SCORES_FILE_NAME


def main() -> None:
    """Initialize logging, optionally start the local question server, and launch the Qt UI."""
    settings = get_settings()
    logger = configure_logging(settings.log_level)
    logger.info("Starting %s…", APP_NAME)

    if settings.local_server:
        imported = load_quiz_from_file(settings.quiz_file or DEFAULT_QUIZ_FILE)
        start_question_server(
            QuestionBank(imported.questions),
            host=settings.local_server_host,
            port=settings.local_server_port,
        )
        logger.info("Serving %d questions from %s", len(imported.questions), imported.source_path)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    scores_path = _resolve_scores_path(settings)
    logger.info("Scores are stored in %s", scores_path)
    service = HttpQuestionService(timeout_ms=settings.request_timeout_ms)
    window = QuizMainWindow(service=service, scoreboard=Scoreboard(scores_path), settings=settings)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
