"""Question service that talks to the quiz server over HTTP via Qt networking."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QByteArray, QObject, QUrl
from PySide6.QtNetwork import QNetworkAccessManager, QNetworkReply, QNetworkRequest

from speed_quiz.constants.network_constants import DEFAULT_REQUEST_TIMEOUT_MS
from speed_quiz.core.services.question_service import (
    AnswerSubmissionError,
    ErrorCallback,
    QuestionCallback,
    QuestionLoadError,
    QuestionServiceError,
    VerdictCallback,
    parse_question,
    parse_verdict,
)

logger = logging.getLogger(__name__)


class HttpQuestionService(QObject):
    """Non-blocking client for the ``/question`` and ``/answer`` endpoints."""

    def __init__(
        self,
        timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._manager = QNetworkAccessManager(self)
        self._timeout_ms = timeout_ms

    def fetch_question(
        self,
        url: str,
        on_success: QuestionCallback,
        on_error: ErrorCallback,
    ) -> None:
        request = self._build_request(url)
        reply = self._manager.get(request)
        logger.debug("GET %s", url)

        def handle(status_code: int | None, body: Any, error: str | None) -> None:
            if error is not None:
                on_error(QuestionLoadError(error, status_code))
                return
            if status_code is None or not 200 <= status_code < 300:
                on_error(QuestionLoadError(f"Question request failed with HTTP {status_code}.", status_code))
                return
            try:
                question = parse_question(body)
            except QuestionServiceError as exc:
                on_error(exc)
                return
            on_success(question)

        self._watch(reply, handle, accept_http_errors=False)

    def submit_answer(
        self,
        url: str,
        answer: str,
        on_success: VerdictCallback,
        on_error: ErrorCallback,
    ) -> None:
        request = self._build_request(url)
        request.setHeader(QNetworkRequest.KnownHeaders.ContentTypeHeader, "application/json")
        body = QByteArray(json.dumps({"answer": answer}).encode("utf-8"))
        reply = self._manager.post(request, body)
        logger.debug("POST %s", url)

        def handle(status_code: int | None, body: Any, error: str | None) -> None:
            if error is not None or status_code is None:
                on_error(AnswerSubmissionError(error or "No response from server.", status_code))
                return
            try:
                verdict = parse_verdict(status_code, body)
            except QuestionServiceError as exc:
                on_error(exc)
                return
            on_success(verdict)

        self._watch(reply, handle, accept_http_errors=True)

    def _build_request(self, url: str) -> QNetworkRequest:
        request = QNetworkRequest(QUrl(url))
        request.setRawHeader(QByteArray(b"Accept"), QByteArray(b"application/json"))
        request.setTransferTimeout(self._timeout_ms)
        return request

    def _watch(
        self,
        reply: QNetworkReply,
        handler: Callable[[int | None, Any, str | None], None],
        *,
        accept_http_errors: bool,
    ) -> None:
        def on_finished() -> None:
            try:
                status = reply.attribute(QNetworkRequest.Attribute.HttpStatusCodeAttribute)
                status_code = int(status) if status is not None else None
                raw = bytes(reply.readAll().data())
                network_error = reply.error()
                error: str | None = None
                if network_error != QNetworkReply.NetworkError.NoError:
                    # HTTP 4xx/5xx also surface as reply errors; keep those when the caller grades them.
                    if status_code is None or not accept_http_errors:
                        error = reply.errorString() or "Network request failed."
                body = _decode_json(raw)
                if body is None and error is None and raw:
                    error = "Server returned a response that is not JSON."
                if error is not None:
                    logger.warning("Request to %s failed: %s", reply.url().toString(), error)
                handler(status_code, body, error)
            finally:
                reply.deleteLater()

        reply.finished.connect(on_finished)


def _decode_json(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
