"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto

from speed_quiz.constants.quiz_constants import DEFAULT_TIME_LIMIT_SECONDS


@dataclass(frozen=True, slots=True)
class FreeTextQuestion:
    """Question answered by typing text."""

    prompt: str
    answer_url: str
    question_id: int | None = None
    time_limit: int | None = None  # Service hint only


@dataclass(frozen=True, slots=True)
class MultipleChoiceQuestion:
    """Question answered by picking one option id."""

    prompt: str
    answer_url: str
    options: tuple[tuple[str, str], ...]  # (option_id, label) in service order
    question_id: int | None = None
    time_limit: int | None = None

    def option_ids(self) -> list[str]:
        return [option_id for option_id, _ in self.options]


Question = FreeTextQuestion | MultipleChoiceQuestion


@dataclass(frozen=True, slots=True)
class Verdict:
    """Grading result for one submitted answer."""

    correct: bool
    next_url: str | None = None
    message: str | None = None

    @property
    def is_last(self) -> bool:
        return self.next_url is None


class SessionState(Enum):
    """Phases of one quiz attempt."""

    AWAITING_QUESTION = auto()
    ANSWERING = auto()
    GRADED = auto()
    FINISHED = auto()
    FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.FINISHED, SessionState.FAILED)


class FailureReason(Enum):
    """Why an attempt ended in the failed state."""

    WRONG_ANSWER = auto()
    TIMEOUT = auto()
    GRADE_ERROR = auto()


@dataclass(slots=True)
class Session:
    """Mutable state of the live attempt, owned by a single QuizSession."""

    username: str
    question_url: str
    start_time: datetime
    state: SessionState = SessionState.AWAITING_QUESTION
    question_index: int = 1
    current_question: Question | None = None
    selected_answer: str | None = None
    is_answered: bool = False
    is_correct: bool | None = None
    is_finished: bool = False
    score: int = 0
    end_time: datetime | None = None
    result_message: str | None = None
    time_remaining: float = DEFAULT_TIME_LIMIT_SECONDS
    attempt_token: int = 0
    failure_reason: FailureReason | None = None
    load_error: str | None = None
    verdict_message: str | None = None


@dataclass(frozen=True, slots=True)
class QuizOutcome:
    """Snapshot handed to the host when an attempt reaches a terminal state."""

    username: str
    score: int
    status: SessionState
    start_time: datetime
    end_time: datetime
    result_message: str | None = None
    failure_reason: FailureReason | None = None
    verdict_message: str | None = None

    @property
    def elapsed_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()

    @property
    def is_finished(self) -> bool:
        return self.status is SessionState.FINISHED


@dataclass(slots=True)
class ScoreRecord:
    """Persisted entry for one finished attempt."""

    name: str
    time: float


@dataclass(frozen=True, slots=True)
class ScoreboardRow:
    """Immutable snapshot returned to consumers."""

    rank: int
    name: str
    time: float
