"""Component that renders the running quiz and forwards player input."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from speed_quiz.constants.ui_constants import (
    QUIZ_ANSWER_BUTTON,
    QUIZ_ANSWER_PLACEHOLDER,
    QUIZ_LOADING_MESSAGE,
    QUIZ_RETRY_LOAD_BUTTON,
    QUIZ_TITLE_TEMPLATE,
)
from speed_quiz.core.markdown_renderer import renderer
from speed_quiz.core.models import FreeTextQuestion, MultipleChoiceQuestion, Question, Verdict
from speed_quiz.core.quiz_session import QuizSession
from speed_quiz.styling.styles import Styles


class QuizPanel(QWidget):
    """View of one QuizSession: timer, prompt, answer input and status line."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._session: QuizSession | None = None
        self._option_buttons: list[QRadioButton] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.timer_label = QLabel("", self)
        self.timer_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.timer_label)

        self.title_label = QLabel("", self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.prompt_label = QLabel(QUIZ_LOADING_MESSAGE, self)
        self.prompt_label.setTextFormat(Qt.RichText)
        self.prompt_label.setAlignment(Qt.AlignCenter)
        self.prompt_label.setWordWrap(True)
        layout.addWidget(self.prompt_label)

        self.answer_input = QLineEdit(self)
        self.answer_input.setPlaceholderText(QUIZ_ANSWER_PLACEHOLDER)
        self.answer_input.returnPressed.connect(self._handle_submit)
        layout.addWidget(self.answer_input)

        self.options_container = QWidget(self)
        self.options_layout = QVBoxLayout()
        self.options_container.setLayout(self.options_layout)
        self.option_group = QButtonGroup(self)
        self.option_group.setExclusive(True)
        layout.addWidget(self.options_container)

        self.status_label = QLabel("", self)
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        button_row = QHBoxLayout()
        self.answer_button = QPushButton(QUIZ_ANSWER_BUTTON, self)
        self.answer_button.clicked.connect(self._handle_submit)
        button_row.addWidget(self.answer_button)

        self.retry_button = QPushButton(QUIZ_RETRY_LOAD_BUTTON, self)
        self.retry_button.clicked.connect(self._handle_retry)
        self.retry_button.setVisible(False)
        button_row.addWidget(self.retry_button)
        layout.addLayout(button_row)
        layout.addStretch()

        self._show_loading()

    # --- Session binding ---

    def bind_session(self, session: QuizSession) -> None:
        self._session = session
        session.question_loaded.connect(self._display_question)
        session.time_changed.connect(self._update_timer)
        session.answer_graded.connect(self._show_verdict)
        session.load_failed.connect(self._show_load_failure)
        session.validation_failed.connect(self._show_validation_message)
        session.restarted.connect(self._show_loading)
        self._show_loading()

    def unbind_session(self) -> None:
        self._session = None
        self._clear_options()

    def _show_loading(self) -> None:
        self.title_label.setText(QUIZ_TITLE_TEMPLATE.format(index=self._question_index()))
        self.prompt_label.setText(QUIZ_LOADING_MESSAGE)
        self.answer_input.setVisible(False)
        self.options_container.setVisible(False)
        self.answer_button.setEnabled(False)
        self.retry_button.setVisible(False)
        self.timer_label.setText("")
        self.status_label.setText("")
        self.status_label.setStyleSheet("")

    def _display_question(self, question: Question) -> None:
        self.title_label.setText(QUIZ_TITLE_TEMPLATE.format(index=self._question_index()))
        self.prompt_label.setText(renderer.render_fragment(question.prompt))
        self.retry_button.setVisible(False)
        self.answer_button.setEnabled(True)
        self._clear_options()

        if isinstance(question, MultipleChoiceQuestion):
            for position, (option_id, label) in enumerate(question.options, start=1):
                button = QRadioButton(f"{position}. {label}", self.options_container)
                button.setProperty("option_id", option_id)
                self.option_group.addButton(button)
                self.options_layout.addWidget(button)
                self._option_buttons.append(button)
            self.answer_input.setVisible(False)
            self.options_container.setVisible(True)
            self.setFocus()
        elif isinstance(question, FreeTextQuestion):
            self.answer_input.clear()
            self.answer_input.setEnabled(True)
            self.answer_input.setVisible(True)
            self.options_container.setVisible(False)
            self.answer_input.setFocus()

    def _clear_options(self) -> None:
        for button in self._option_buttons:
            self.option_group.removeButton(button)
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self._option_buttons = []

    def _update_timer(self, remaining: float) -> None:
        self.timer_label.setText(f"{remaining:.1f}s")
        self.timer_label.setStyleSheet(Styles.get_timer_style(remaining))

    def _show_verdict(self, verdict: Verdict) -> None:
        self.status_label.setText(verdict.message or "")
        self.status_label.setStyleSheet(Styles.get_verdict_style(verdict.correct))

    def _show_load_failure(self, message: str) -> None:
        self.prompt_label.setText(renderer.render_fragment(f"Could not load the question: {message}"))
        self.retry_button.setVisible(True)
        self.answer_button.setEnabled(False)

    def _show_validation_message(self, message: str) -> None:
        self.status_label.setText(message)
        self.status_label.setStyleSheet("")

    # --- Input ---

    def _handle_submit(self) -> None:
        if self._session is None:
            return
        question = self._session.current_question()
        if isinstance(question, MultipleChoiceQuestion):
            checked = self.option_group.checkedButton()
            answer = checked.property("option_id") if checked is not None else None
        else:
            answer = self.answer_input.text()
        if self._session.submit(answer):
            self.answer_button.setEnabled(False)
            self.answer_input.setEnabled(False)
            for button in self._option_buttons:
                button.setEnabled(False)

    def _handle_retry(self) -> None:
        if self._session is None:
            return
        self.retry_button.setVisible(False)
        self.prompt_label.setText(QUIZ_LOADING_MESSAGE)
        self._session.retry_load()

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802 - Qt override
        key_text = event.text()
        if key_text.isdigit() and self._option_buttons:
            position = int(key_text)
            if 1 <= position <= len(self._option_buttons):
                self._option_buttons[position - 1].setChecked(True)
                return
        if event.key() in (Qt.Key_Return, Qt.Key_Enter):
            self._handle_submit()
            return
        super().keyPressEvent(event)

    def _question_index(self) -> int:
        if self._session is None:
            return 1
        return self._session.session.question_index
