"""Component for entering a username before the quiz starts."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QLineEdit, QPushButton, QVBoxLayout, QWidget

from speed_quiz.constants.ui_constants import (
    MENU_INVALID_USERNAME,
    MENU_START_BUTTON,
    MENU_TITLE,
    MENU_USERNAME_PLACEHOLDER,
)
from speed_quiz.styling.styles import Styles
from speed_quiz.ui.dialog_helpers import show_warning


class MenuPanel(QWidget):
    """Username form that hands the trimmed name to ``on_start_quiz``."""

    def __init__(
        self,
        on_start_quiz: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_start_quiz = on_start_quiz
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(MENU_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.username_input = QLineEdit(self)
        self.username_input.setPlaceholderText(MENU_USERNAME_PLACEHOLDER)
        self.username_input.returnPressed.connect(self._handle_start_click)
        layout.addWidget(self.username_input)

        self.start_button = QPushButton(MENU_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start_click)
        layout.addWidget(self.start_button)
        layout.addStretch()

    def _handle_start_click(self) -> None:
        username = self.username_input.text().strip()
        if not username:
            show_warning(self, "Username required", MENU_INVALID_USERNAME)
            return
        self.on_start_quiz(username)

    def reset_state(self, username: str = "") -> None:
        self.username_input.setText(username)
        self.username_input.setFocus()
