"""State machine driving a single player's timed quiz attempt."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from PySide6.QtCore import QObject, Signal

from speed_quiz.constants.quiz_constants import DEFAULT_TIME_LIMIT_SECONDS, TICK_INTERVAL_MS
from speed_quiz.core.answer_grading import AnswerValidationError, build_outcome, normalize_answer
from speed_quiz.core.countdown_timer import CountdownTimer
from speed_quiz.core.models import (
    FailureReason,
    Question,
    QuizOutcome,
    Session,
    SessionState,
    Verdict,
)
from speed_quiz.core.services.question_service import QuestionService, QuestionServiceError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuizSession(QObject):
    """Owns the live Session and moves it through its states.

    Question loads and grading round-trips are asynchronous. Every request
    remembers the attempt token that was current when it was sent; a callback
    arriving with a stale token belongs to an abandoned question or attempt
    and is dropped. Timer expiry and answer submission are mutually exclusive
    through ``Session.is_answered``: whichever sets it first wins.
    """

    question_loaded = Signal(object)  # Question
    time_changed = Signal(float)
    answer_graded = Signal(object)  # Verdict
    load_failed = Signal(str)
    validation_failed = Signal(str)
    finished = Signal(object)  # QuizOutcome
    failed = Signal(object)  # QuizOutcome
    restarted = Signal()

    def __init__(
        self,
        username: str,
        service: QuestionService,
        first_question_url: str,
        *,
        time_limit_seconds: float = DEFAULT_TIME_LIMIT_SECONDS,
        tick_interval_ms: int = TICK_INTERVAL_MS,
        timer: CountdownTimer | None = None,
        clock: Callable[[], datetime] = _utcnow,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        cleaned_name = username.strip()
        if not cleaned_name:
            raise ValueError("Username must not be empty.")

        self._service = service
        self._first_question_url = first_question_url
        self._time_limit_seconds = time_limit_seconds
        self._tick_interval_ms = tick_interval_ms
        self._timer = timer if timer is not None else CountdownTimer(self)
        self._clock = clock
        self._next_token: int = 0
        self._begun: bool = False
        self._session = self._new_session(cleaned_name)

    # --- Public API ---

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> SessionState:
        return self._session.state

    def current_question(self) -> Question | None:
        return self._session.current_question

    def begin(self) -> None:
        """Load the first question of the attempt."""
        if self._begun:
            raise RuntimeError("Quiz attempt has already begun.")
        self._begun = True
        self._load_question()

    def retry_load(self) -> None:
        """Re-issue the last question request after a load failure."""
        if self._session.state is not SessionState.AWAITING_QUESTION or self._session.load_error is None:
            raise RuntimeError("There is no failed question load to retry.")
        self._load_question()

    def submit(self, raw_answer: str | None) -> bool:
        """Send an answer for grading.

        Returns False when the answer was rejected locally (nothing selected,
        empty text) or the question is no longer open.
        """
        session = self._session
        if session.state is not SessionState.ANSWERING or session.is_answered:
            logger.debug("Ignoring submission in state %s", session.state.name)
            return False
        question = session.current_question
        if question is None:
            return False

        try:
            answer = normalize_answer(question, raw_answer)
        except AnswerValidationError as exc:
            self.validation_failed.emit(str(exc))
            return False

        self._timer.stop()
        session.time_remaining = self._timer.remaining
        session.is_answered = True
        session.selected_answer = answer
        session.state = SessionState.GRADED
        token = self._advance_token()

        logger.info("Submitting answer for question %d", session.question_index)
        self._service.submit_answer(
            question.answer_url,
            answer,
            lambda verdict: self._handle_verdict(token, verdict),
            lambda error: self._handle_grade_error(token, error),
        )
        return True

    def restart(self) -> None:
        """Discard the current attempt and start again from question one."""
        self._timer.stop()
        self._begun = True
        self._session = self._new_session(self._session.username)
        logger.info("Restarting quiz for %s", self._session.username)
        self.restarted.emit()
        self._load_question()

    def shutdown(self) -> None:
        """Stop the countdown and ignore any responses still in flight."""
        self._timer.stop()
        self._advance_token()

    # --- Transitions ---

    def _load_question(self) -> None:
        session = self._session
        session.state = SessionState.AWAITING_QUESTION
        session.load_error = None
        token = self._advance_token()
        url = session.question_url
        logger.info("Loading question %d from %s", session.question_index, url)
        self._service.fetch_question(
            url,
            lambda question: self._handle_question(token, question),
            lambda error: self._handle_load_error(token, error),
        )

    def _handle_question(self, token: int, question: Question) -> None:
        if not self._is_current(token, SessionState.AWAITING_QUESTION):
            return
        session = self._session
        session.current_question = question
        session.is_answered = False
        session.selected_answer = None
        session.is_correct = None
        session.time_remaining = self._time_limit_seconds
        session.state = SessionState.ANSWERING
        self._timer.restart(
            self._time_limit_seconds,
            self._tick_interval_ms,
            lambda remaining: self._handle_tick(token, remaining),
            lambda: self._handle_expired(token),
        )
        self.question_loaded.emit(question)
        self.time_changed.emit(session.time_remaining)

    def _handle_load_error(self, token: int, error: QuestionServiceError) -> None:
        if not self._is_current(token, SessionState.AWAITING_QUESTION):
            return
        logger.warning("Could not load question %d: %s", self._session.question_index, error.message)
        self._session.load_error = error.message
        self.load_failed.emit(error.message)

    def _handle_tick(self, token: int, remaining: float) -> None:
        if not self._is_current(token, SessionState.ANSWERING):
            return
        self._session.time_remaining = min(self._session.time_remaining, max(0.0, remaining))
        self.time_changed.emit(self._session.time_remaining)

    def _handle_expired(self, token: int) -> None:
        if not self._is_current(token, SessionState.ANSWERING) or self._session.is_answered:
            return
        logger.info("Time ran out on question %d", self._session.question_index)
        self._session.time_remaining = 0.0
        self._session.is_answered = True
        self._fail(FailureReason.TIMEOUT)

    def _handle_verdict(self, token: int, verdict: Verdict) -> None:
        if not self._is_current(token, SessionState.GRADED):
            return
        session = self._session
        session.is_correct = verdict.correct
        session.verdict_message = verdict.message
        self.answer_graded.emit(verdict)

        if not verdict.correct:
            logger.info("Wrong answer on question %d", session.question_index)
            self._fail(FailureReason.WRONG_ANSWER)
            return

        session.score += 1
        if verdict.is_last:
            session.result_message = verdict.message
            self._finish()
            return

        session.question_index += 1
        session.question_url = verdict.next_url
        self._load_question()

    def _handle_grade_error(self, token: int, error: QuestionServiceError) -> None:
        if not self._is_current(token, SessionState.GRADED):
            return
        logger.warning("Grading failed for question %d: %s", self._session.question_index, error.message)
        self._session.is_correct = False
        self._fail(FailureReason.GRADE_ERROR)

    def _finish(self) -> None:
        self._enter_terminal(SessionState.FINISHED)
        self.finished.emit(self._outcome())

    def _fail(self, reason: FailureReason) -> None:
        self._session.is_correct = False
        self._session.failure_reason = reason
        self._enter_terminal(SessionState.FAILED)
        self.failed.emit(self._outcome())

    def _enter_terminal(self, state: SessionState) -> None:
        self._timer.stop()
        self._advance_token()
        session = self._session
        session.state = state
        session.is_finished = True
        if session.end_time is None:
            session.end_time = self._clock()
        logger.info(
            "Quiz %s for %s with score %d",
            state.name.lower(),
            session.username,
            session.score,
        )

    # --- Helpers ---

    def _outcome(self) -> QuizOutcome:
        return build_outcome(self._session)

    def _new_session(self, username: str) -> Session:
        return Session(
            username=username,
            question_url=self._first_question_url,
            start_time=self._clock(),
            time_remaining=self._time_limit_seconds,
            attempt_token=self._next_token,
        )

    def _advance_token(self) -> int:
        self._next_token += 1
        self._session.attempt_token = self._next_token
        return self._next_token

    def _is_current(self, token: int, expected: SessionState) -> bool:
        if token != self._session.attempt_token or self._session.state is not expected:
            logger.debug("Discarding stale callback for token %d", token)
            return False
        return True
