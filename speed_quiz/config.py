"""Runtime settings loaded from the environment or a local .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from speed_quiz.constants.network_constants import (
    DEFAULT_QUESTION_URL,
    DEFAULT_REQUEST_TIMEOUT_MS,
    LOCAL_SERVER_HOST,
    LOCAL_SERVER_PORT,
)
from speed_quiz.constants.quiz_constants import DEFAULT_TIME_LIMIT_SECONDS, TICK_INTERVAL_MS


class Settings(BaseSettings):
    """Strongly-typed settings model.

    Every field can be overridden with a ``SPEEDQUIZ_``-prefixed environment
    variable, e.g. ``SPEEDQUIZ_QUESTION_URL``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPEEDQUIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    question_url: str = Field(default=DEFAULT_QUESTION_URL, description="URL of the first question")
    request_timeout_ms: int = Field(default=DEFAULT_REQUEST_TIMEOUT_MS, gt=0)
    time_limit_seconds: float = Field(default=DEFAULT_TIME_LIMIT_SECONDS, gt=0)
    tick_interval_ms: int = Field(default=TICK_INTERVAL_MS, gt=0)
    scores_path: Path | None = Field(
        default=None,
        description="JSON file holding finished attempts; defaults to the app data directory",
    )
    log_level: str = "INFO"

    local_server: bool = Field(default=False, description="Serve questions from the bundled quiz file")
    local_server_host: str = LOCAL_SERVER_HOST
    local_server_port: int = LOCAL_SERVER_PORT
    quiz_file: Path | None = None

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    def local_question_url(self) -> str:
        """First-question URL of the bundled development server."""
        return f"http://{self.local_server_host}:{self.local_server_port}/question/1"

    def effective_question_url(self) -> str:
        return self.local_question_url() if self.local_server else self.question_url


@lru_cache()
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance."""
    return Settings()
