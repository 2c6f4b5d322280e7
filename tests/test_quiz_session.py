"""Tests for the quiz session state machine."""

from __future__ import annotations

import pytest

from conftest import FIRST_URL, free_text, multiple_choice
from speed_quiz.core.models import FailureReason, SessionState, Verdict
from speed_quiz.core.quiz_session import QuizSession


SIGNALS = (
    "question_loaded",
    "time_changed",
    "answer_graded",
    "load_failed",
    "validation_failed",
    "finished",
    "failed",
    "restarted",
)


@pytest.fixture
def make_session():
    created: list[QuizSession] = []

    def factory(service, countdown, clock, username: str = "Alice") -> QuizSession:
        quiz = QuizSession(username, service, FIRST_URL, timer=countdown, clock=clock)
        created.append(quiz)
        return quiz

    yield factory

    # Drop Python slots before interpreter shutdown tears down the Qt objects.
    while created:
        quiz = created.pop()
        quiz.shutdown()
        for name in SIGNALS:
            try:
                getattr(quiz, name).disconnect()
            except (RuntimeError, TypeError):
                pass
        quiz.deleteLater()


def collect(signal) -> list:
    received: list = []
    signal.connect(lambda value: received.append(value))
    return received


def test_new_session_waits_for_first_question(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)

    assert quiz.state is SessionState.AWAITING_QUESTION
    assert quiz.session.question_index == 1
    assert quiz.session.score == 0
    assert service.fetches == []


def test_blank_username_is_rejected(make_session, service, countdown, clock) -> None:
    with pytest.raises(ValueError):
        make_session(service, countdown, clock, username="   ")


def test_loading_question_starts_countdown(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    loaded = collect(quiz.question_loaded)

    quiz.begin()
    assert service.fetches[0].url == FIRST_URL
    question = multiple_choice()
    service.fetches[0].succeed(question)

    assert quiz.state is SessionState.ANSWERING
    assert quiz.current_question() == question
    assert quiz.session.is_answered is False
    assert quiz.session.selected_answer is None
    assert quiz.session.is_correct is None
    assert quiz.session.time_remaining == 10.0
    assert countdown.is_running()
    assert loaded == [question]


def test_begin_twice_is_an_error(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    quiz.begin()
    with pytest.raises(RuntimeError):
        quiz.begin()


def test_scenario_two_correct_answers_finish_the_quiz(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    finished = collect(quiz.finished)
    failed = collect(quiz.failed)

    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    assert quiz.submit("alt2") is True
    assert service.submissions[0].answer == "alt2"
    assert service.submissions[0].url == "http://quiz.test/answer/1"
    service.submissions[0].succeed(Verdict(correct=True, next_url="http://quiz.test/question/2"))

    assert quiz.session.question_index == 2
    assert quiz.session.score == 1
    assert service.fetches[1].url == "http://quiz.test/question/2"
    service.fetches[1].succeed(free_text())
    assert countdown.starts == 2

    assert quiz.submit("  Stockholm  ") is True
    assert service.submissions[1].answer == "Stockholm"
    service.submissions[1].succeed(Verdict(correct=True, message="Well done!"))

    assert quiz.state is SessionState.FINISHED
    assert quiz.session.score == 2
    assert quiz.session.is_finished is True
    assert quiz.session.result_message == "Well done!"
    assert not countdown.is_running()
    assert failed == []
    assert len(finished) == 1
    outcome = finished[0]
    assert outcome.username == "Alice"
    assert outcome.score == 2
    assert outcome.result_message == "Well done!"
    assert outcome.end_time == quiz.session.end_time
    assert outcome.elapsed_seconds > 0


def test_scenario_wrong_answer_fails(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    failed = collect(quiz.failed)

    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    quiz.submit("alt1")
    service.submissions[0].succeed(Verdict(correct=False, message="Wrong answer! :("))

    assert quiz.state is SessionState.FAILED
    assert quiz.session.score == 0
    assert quiz.session.is_correct is False
    assert quiz.session.end_time is not None
    assert len(failed) == 1
    assert failed[0].failure_reason is FailureReason.WRONG_ANSWER
    assert failed[0].verdict_message == "Wrong answer! :("
    assert failed[0].result_message is None
    assert len(service.fetches) == 1


def test_wrong_answer_fails_even_when_more_questions_remain(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    quiz.submit("alt3")
    service.submissions[0].succeed(Verdict(correct=False, next_url="http://quiz.test/question/2"))

    assert quiz.state is SessionState.FAILED
    assert len(service.fetches) == 1


def test_scenario_timeout_fails_without_grading(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    failed = collect(quiz.failed)
    times = collect(quiz.time_changed)

    quiz.begin()
    service.fetches[0].succeed(free_text())
    countdown.expire()

    assert quiz.state is SessionState.FAILED
    assert service.submissions == []
    assert quiz.session.time_remaining == 0.0
    assert quiz.session.is_correct is False
    assert failed[0].failure_reason is FailureReason.TIMEOUT
    assert times[-1] == 0.0
    assert all(earlier >= later for earlier, later in zip(times, times[1:]))


def test_scenario_grading_error_fails_and_keeps_score(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    failed = collect(quiz.failed)

    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    quiz.submit("alt2")
    service.submissions[0].succeed(Verdict(correct=True, next_url="http://quiz.test/question/2"))
    service.fetches[1].succeed(free_text())
    quiz.submit("Stockholm")
    service.submissions[1].fail("connection refused")

    assert quiz.state is SessionState.FAILED
    assert quiz.session.score == 1
    assert quiz.session.is_finished is True
    assert quiz.session.is_correct is False
    assert failed[0].failure_reason is FailureReason.GRADE_ERROR
    assert failed[0].score == 1


def test_empty_submission_reprompts_without_transition(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    prompts = collect(quiz.validation_failed)

    quiz.begin()
    service.fetches[0].succeed(free_text())

    assert quiz.submit("   ") is False
    assert quiz.state is SessionState.ANSWERING
    assert quiz.session.is_answered is False
    assert countdown.is_running()
    assert service.submissions == []
    assert len(prompts) == 1


def test_unknown_option_reprompts(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    quiz.begin()
    service.fetches[0].succeed(multiple_choice())

    assert quiz.submit(None) is False
    assert quiz.submit("alt9") is False
    assert quiz.state is SessionState.ANSWERING


def test_submit_freezes_timer_and_blocks_second_submission(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    countdown.tick(25)

    assert quiz.submit("alt2") is True
    assert quiz.state is SessionState.GRADED
    assert quiz.session.is_answered is True
    assert quiz.session.selected_answer == "alt2"
    assert quiz.session.time_remaining == pytest.approx(7.5)
    assert not countdown.is_running()

    assert quiz.submit("alt1") is False
    assert len(service.submissions) == 1


def test_timeout_after_submission_is_ignored(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    expire = countdown._on_expire

    quiz.submit("alt2")
    expire()

    assert quiz.state is SessionState.GRADED
    service.submissions[0].succeed(Verdict(correct=True))
    assert quiz.state is SessionState.FINISHED


def test_late_question_response_after_timeout_is_discarded(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    finished = collect(quiz.finished)
    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    on_success = service.fetches[0].on_success
    countdown.expire()
    end_time = quiz.session.end_time

    # A response belonging to the expired question must not touch the session.
    on_success(multiple_choice())

    assert quiz.state is SessionState.FAILED
    assert quiz.session.end_time == end_time
    assert finished == []


def test_grade_response_after_restart_is_discarded(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    quiz.submit("alt2")
    stale = service.submissions[0]

    quiz.restart()
    stale.succeed(Verdict(correct=True))

    assert quiz.state is SessionState.AWAITING_QUESTION
    assert quiz.session.score == 0


def test_end_time_is_set_once(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    quiz.submit("alt1")
    grade = service.submissions[0]
    grade.succeed(Verdict(correct=False))
    end_time = quiz.session.end_time

    grade.fail("late")
    countdown.expire()

    assert quiz.session.end_time == end_time


def test_load_failure_stalls_and_can_be_retried(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    load_errors = collect(quiz.load_failed)

    quiz.begin()
    service.fetches[0].fail("server unavailable", 503)

    assert quiz.state is SessionState.AWAITING_QUESTION
    assert quiz.session.load_error == "server unavailable"
    assert load_errors == ["server unavailable"]
    assert not countdown.is_running()

    quiz.retry_load()
    assert service.fetches[1].url == FIRST_URL
    service.fetches[1].succeed(free_text())
    assert quiz.state is SessionState.ANSWERING
    assert quiz.session.load_error is None


def test_retry_without_failure_is_an_error(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    quiz.begin()
    with pytest.raises(RuntimeError):
        quiz.retry_load()


def test_restart_resets_attempt(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    restarts: list[bool] = []
    quiz.restarted.connect(lambda: restarts.append(True))
    quiz.begin()
    service.fetches[0].succeed(multiple_choice())
    quiz.submit("alt2")
    service.submissions[0].succeed(Verdict(correct=True, next_url="http://quiz.test/question/2"))
    service.fetches[1].succeed(free_text())
    countdown.expire()
    first_start = quiz.session.start_time

    quiz.restart()

    assert restarts == [True]
    assert quiz.state is SessionState.AWAITING_QUESTION
    assert quiz.session.score == 0
    assert quiz.session.question_index == 1
    assert quiz.session.end_time is None
    assert quiz.session.is_finished is False
    assert quiz.session.start_time > first_start
    assert quiz.session.username == "Alice"
    assert service.fetches[-1].url == FIRST_URL

    service.fetches[-1].succeed(multiple_choice())
    assert quiz.state is SessionState.ANSWERING


def test_score_never_decreases(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    scores: list[int] = []
    quiz.begin()
    for index in range(3):
        service.fetches[-1].succeed(multiple_choice(f"http://quiz.test/answer/{index + 1}"))
        quiz.submit("alt2")
        scores.append(quiz.session.score)
        service.submissions[-1].succeed(
            Verdict(correct=True, next_url=f"http://quiz.test/question/{index + 2}")
        )
        scores.append(quiz.session.score)
    service.fetches[-1].succeed(free_text())
    quiz.submit("wrong")
    service.submissions[-1].succeed(Verdict(correct=False))
    scores.append(quiz.session.score)

    assert scores == sorted(scores)
    assert quiz.session.score == 3


def test_shutdown_ignores_responses_in_flight(make_session, service, countdown, clock) -> None:
    quiz = make_session(service, countdown, clock)
    loaded = collect(quiz.question_loaded)
    quiz.begin()
    quiz.shutdown()
    service.fetches[0].succeed(free_text())

    assert loaded == []
    assert quiz.state is SessionState.AWAITING_QUESTION
