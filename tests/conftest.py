"""Shared fixtures for the quiz tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import pytest
from PySide6.QtCore import QCoreApplication

from speed_quiz.core.models import FreeTextQuestion, MultipleChoiceQuestion, Question, Verdict
from speed_quiz.core.services.question_service import (
    AnswerSubmissionError,
    QuestionLoadError,
    QuestionServiceError,
)

FIRST_URL = "http://quiz.test/question/1"


@pytest.fixture(scope="session", autouse=True)
def qt_core_app() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@dataclass
class PendingRequest:
    """A request the fake service has not answered yet."""

    url: str
    answer: str | None
    on_success: Callable
    on_error: Callable[[QuestionServiceError], None]

    def succeed(self, result: Question | Verdict) -> None:
        self.on_success(result)

    def fail(self, message: str = "boom", status_code: int | None = None) -> None:
        error_type = QuestionLoadError if self.answer is None else AnswerSubmissionError
        self.on_error(error_type(message, status_code))


@dataclass
class FakeQuestionService:
    """Records requests so tests decide when and how each one completes."""

    fetches: list[PendingRequest] = field(default_factory=list)
    submissions: list[PendingRequest] = field(default_factory=list)

    def fetch_question(self, url, on_success, on_error) -> None:
        self.fetches.append(PendingRequest(url, None, on_success, on_error))

    def submit_answer(self, url, answer, on_success, on_error) -> None:
        self.submissions.append(PendingRequest(url, answer, on_success, on_error))


class FakeCountdown:
    """Stand-in for CountdownTimer that is driven by the test."""

    def __init__(self) -> None:
        self._running = False
        self._remaining = 0.0
        self._on_tick = None
        self._on_expire = None
        self.starts = 0
        self.stops = 0

    def restart(self, duration_seconds, tick_interval_ms, on_tick, on_expire) -> None:
        self.stop()
        self.start(duration_seconds, tick_interval_ms, on_tick, on_expire)

    def start(self, duration_seconds, tick_interval_ms, on_tick, on_expire) -> None:
        self.stop()
        self._running = True
        self._remaining = duration_seconds
        self._interval = tick_interval_ms / 1000
        self._on_tick = on_tick
        self._on_expire = on_expire
        self.starts += 1

    def stop(self) -> bool:
        if not self._running:
            return False
        self._running = False
        self.stops += 1
        return True

    def is_running(self) -> bool:
        return self._running

    @property
    def remaining(self) -> float:
        return self._remaining

    def tick(self, count: int = 1) -> None:
        for _ in range(count):
            if not self._running:
                return
            self._remaining = max(0.0, round(self._remaining - self._interval, 3))
            on_tick, on_expire = self._on_tick, self._on_expire
            if self._remaining > 0:
                on_tick(self._remaining)
                continue
            self.stop()
            on_tick(0.0)
            on_expire()

    def expire(self) -> None:
        while self._running:
            self.tick()


class SteppingClock:
    """Deterministic clock advancing a fixed step per call."""

    def __init__(self, step_seconds: float = 1.0) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.step = timedelta(seconds=step_seconds)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


def multiple_choice(answer_url: str = "http://quiz.test/answer/1") -> MultipleChoiceQuestion:
    return MultipleChoiceQuestion(
        prompt="What is 2 + 2?",
        answer_url=answer_url,
        options=(("alt1", "3"), ("alt2", "4"), ("alt3", "5")),
        question_id=1,
    )


def free_text(answer_url: str = "http://quiz.test/answer/2") -> FreeTextQuestion:
    return FreeTextQuestion(prompt="Capital of Sweden?", answer_url=answer_url, question_id=2)


@pytest.fixture
def service() -> FakeQuestionService:
    return FakeQuestionService()


@pytest.fixture
def countdown() -> FakeCountdown:
    return FakeCountdown()


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()
