"""FastAPI server that hands out and grades questions from a local quiz file.

It speaks the same protocol as the course quiz server: ``GET /question/{id}``
returns the question and the URL to post the answer to, ``POST /answer/{id}``
returns 200 with the next question URL (omitted after the last question) or
400 for a wrong answer.
"""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import uvicorn

from speed_quiz.constants.network_constants import (
    LOCAL_SERVER_HOST,
    LOCAL_SERVER_PORT,
    WRONG_ANSWER_STATUS,
)
from speed_quiz.core.quiz_importer import BankQuestion

logger = logging.getLogger(__name__)

CORRECT_ANSWER_MESSAGE = "Correct answer!"
WRONG_ANSWER_MESSAGE = "Wrong answer! :("
QUIZ_COMPLETE_MESSAGE = "You have answered every question correctly."


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers."""

    answer: str


class QuestionBank:
    """Read-only, 1-indexed view over the imported questions."""

    def __init__(self, questions: list[BankQuestion]) -> None:
        if not questions:
            raise ValueError("Quiz must contain at least one question.")
        self._questions = list(questions)

    def __len__(self) -> int:
        return len(self._questions)

    def get(self, question_id: int) -> BankQuestion | None:
        if not 1 <= question_id <= len(self._questions):
            return None
        return self._questions[question_id - 1]

    def is_last(self, question_id: int) -> bool:
        return question_id == len(self._questions)


def option_id(index: int) -> str:
    return f"alt{index + 1}"


def is_correct(question: BankQuestion, answer: str) -> bool:
    submitted = answer.strip()
    if question.is_multiple_choice:
        return question.correct_option_index is not None and submitted == option_id(question.correct_option_index)
    accepted = question.accepted_answer or ""
    return submitted.casefold() == accepted.strip().casefold()


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _get_bank_dependency(bank: QuestionBank):
    def dependency() -> QuestionBank:
        return bank

    return dependency


def create_question_app(bank: QuestionBank) -> FastAPI:
    """Create a FastAPI application serving the provided question bank."""
    app = FastAPI(title="SpeedQuiz question server", version="0.1.0")
    bank_dep = _get_bank_dependency(bank)

    @app.get("/question/{question_id}")
    def get_question(
        question_id: int,
        request: Request,
        questions: QuestionBank = Depends(bank_dep),
    ):
        question = questions.get(question_id)
        if question is None:
            return _message(404, f"Question {question_id} does not exist.")

        payload: dict[str, object] = {
            "id": question_id,
            "question": question.question_text,
            "nextURL": str(request.url_for("submit_answer", question_id=question_id)),
        }
        if question.is_multiple_choice:
            payload["alternatives"] = {
                option_id(index): text for index, text in enumerate(question.options)
            }
        if question.time_limit_seconds is not None:
            payload["limit"] = question.time_limit_seconds
        return payload

    @app.post("/answer/{question_id}", name="submit_answer")
    def submit_answer(
        question_id: int,
        payload: AnswerPayload,
        request: Request,
        questions: QuestionBank = Depends(bank_dep),
    ):
        question = questions.get(question_id)
        if question is None:
            return _message(404, f"Question {question_id} does not exist.")

        if not is_correct(question, payload.answer):
            logger.info("Wrong answer for question %d", question_id)
            return _message(WRONG_ANSWER_STATUS, WRONG_ANSWER_MESSAGE)

        if questions.is_last(question_id):
            return {"message": QUIZ_COMPLETE_MESSAGE}
        return {
            "message": CORRECT_ANSWER_MESSAGE,
            "nextURL": str(request.url_for("get_question", question_id=question_id + 1)),
        }

    return app


def start_question_server(
    bank: QuestionBank,
    host: str = LOCAL_SERVER_HOST,
    port: int = LOCAL_SERVER_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_question_app(bank)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizQuestionServer", daemon=True)
    thread.start()
    logger.info("Question server listening on http://%s:%d/", host, port)
    return thread
