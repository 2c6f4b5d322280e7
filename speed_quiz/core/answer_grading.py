"""Answer validation and result assembly for quiz attempts."""

from __future__ import annotations

from speed_quiz.constants.ui_constants import QUIZ_EMPTY_ANSWER_MESSAGE, QUIZ_SELECT_OPTION_MESSAGE
from speed_quiz.core.models import (
    FailureReason,
    FreeTextQuestion,
    MultipleChoiceQuestion,
    Question,
    QuizOutcome,
    Session,
    SessionState,
)


class AnswerValidationError(ValueError):
    """Raised when a submission cannot be sent for grading."""


def normalize_answer(question: Question, raw_answer: str | None) -> str:
    """Return the answer string to submit, or raise AnswerValidationError.

    Free-text answers are trimmed and must not be empty. Multiple-choice
    answers must name exactly one of the question's option ids.
    """
    if isinstance(question, FreeTextQuestion):
        answer = (raw_answer or "").strip()
        if not answer:
            raise AnswerValidationError(QUIZ_EMPTY_ANSWER_MESSAGE)
        return answer

    if isinstance(question, MultipleChoiceQuestion):
        option_id = (raw_answer or "").strip()
        if option_id not in question.option_ids():
            raise AnswerValidationError(QUIZ_SELECT_OPTION_MESSAGE)
        return option_id

    raise TypeError(f"Unsupported question type: {type(question).__name__}")


def build_outcome(session: Session) -> QuizOutcome:
    """Snapshot a terminal session for the host."""
    if not session.state.is_terminal or session.end_time is None:
        raise RuntimeError("Outcome requested before the attempt ended.")

    return QuizOutcome(
        username=session.username,
        score=session.score,
        status=session.state,
        start_time=session.start_time,
        end_time=session.end_time,
        result_message=session.result_message if session.state is SessionState.FINISHED else None,
        failure_reason=session.failure_reason,
        verdict_message=(
            session.verdict_message if session.failure_reason is FailureReason.WRONG_ANSWER else None
        ),
    )
