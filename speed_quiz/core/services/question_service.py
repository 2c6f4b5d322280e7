"""Contract for the remote service that hands out and grades questions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from speed_quiz.constants.network_constants import WRONG_ANSWER_STATUS
from speed_quiz.core.models import FreeTextQuestion, MultipleChoiceQuestion, Question, Verdict


class QuestionServiceError(Exception):
    """Base error for failed question service round-trips."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class QuestionLoadError(QuestionServiceError):
    """Raised when a question could not be fetched or parsed."""


class AnswerSubmissionError(QuestionServiceError):
    """Raised when an answer could not be graded."""


QuestionCallback = Callable[[Question], None]
VerdictCallback = Callable[[Verdict], None]
ErrorCallback = Callable[[QuestionServiceError], None]


class QuestionService(Protocol):
    """Asynchronous question service.

    Implementations deliver exactly one of ``on_success`` / ``on_error`` per
    request, on the thread that owns the quiz session.
    """

    def fetch_question(
        self,
        url: str,
        on_success: QuestionCallback,
        on_error: ErrorCallback,
    ) -> None: ...

    def submit_answer(
        self,
        url: str,
        answer: str,
        on_success: VerdictCallback,
        on_error: ErrorCallback,
    ) -> None: ...


class QuestionPayload(BaseModel):
    """Wire schema of a fetched question."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | None = None
    question: str
    alternatives: dict[str, str] | None = None
    next_url: str = Field(alias="nextURL")
    limit: int | None = None


class AnswerResultPayload(BaseModel):
    """Wire schema of a grading response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    message: str | None = None
    next_url: str | None = Field(default=None, alias="nextURL")


def parse_question(body: Any) -> Question:
    """Build a Question from a decoded JSON body."""
    try:
        payload = QuestionPayload.model_validate(body)
    except ValidationError as exc:
        raise QuestionLoadError(f"Malformed question payload: {exc.error_count()} error(s)") from exc

    prompt = payload.question.strip()
    if not prompt:
        raise QuestionLoadError("Question payload has an empty prompt.")

    if payload.alternatives is None:
        return FreeTextQuestion(
            prompt=prompt,
            answer_url=payload.next_url,
            question_id=payload.id,
            time_limit=payload.limit,
        )
    if not payload.alternatives:
        raise QuestionLoadError("Multiple-choice question has no alternatives.")
    return MultipleChoiceQuestion(
        prompt=prompt,
        answer_url=payload.next_url,
        options=tuple(payload.alternatives.items()),
        question_id=payload.id,
        time_limit=payload.limit,
    )


def parse_verdict(status_code: int, body: Any) -> Verdict:
    """Map a grading response to a Verdict.

    2xx is a correct answer; 400 with a readable body is a wrong answer. Any
    other status is a submission failure.
    """
    if 200 <= status_code < 300:
        try:
            payload = AnswerResultPayload.model_validate(body)
        except ValidationError as exc:
            raise AnswerSubmissionError("Malformed grading payload.", status_code) from exc
        return Verdict(correct=True, next_url=payload.next_url, message=payload.message)

    message = _extract_message(body) or f"Answer rejected with HTTP {status_code}."
    if status_code == WRONG_ANSWER_STATUS and isinstance(body, dict):
        return Verdict(correct=False, next_url=None, message=message)
    raise AnswerSubmissionError(message, status_code)


def _extract_message(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None
