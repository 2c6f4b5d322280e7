"""Service for recording finished attempts and ranking them by time."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from speed_quiz.core.models import QuizOutcome, ScoreboardRow, ScoreRecord

logger = logging.getLogger(__name__)


class ScoreboardError(ValueError):
    """Raised when the scores file exists but cannot be appended to safely."""


class Scoreboard:
    """Append-only list of finished attempts persisted as JSON.

    Entries are never deduplicated or capped; the best time wins the first
    place when reading. Reading tolerates a damaged file, but appending to one
    raises ScoreboardError so the existing content is never overwritten.
    """

    def __init__(self, storage_path: Path) -> None:
        self._storage_path = storage_path

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    def record(self, name: str, elapsed_seconds: float) -> ScoreRecord:
        """Append a finished attempt."""
        cleaned_name = name.strip()
        if not cleaned_name:
            raise ValueError("Score entries need a player name.")
        if elapsed_seconds < 0:
            raise ValueError("Elapsed time cannot be negative.")

        entry = ScoreRecord(name=cleaned_name, time=round(elapsed_seconds, 3))
        document = self._read_document() if self._storage_path.exists() else []
        document.append({"name": entry.name, "time": entry.time})
        self._write(document)
        logger.info("Recorded %.3fs for %s", entry.time, entry.name)
        return entry

    def record_outcome(self, outcome: QuizOutcome) -> ScoreRecord | None:
        """Record a finished outcome; failed attempts are not ranked."""
        if not outcome.is_finished:
            return None
        return self.record(outcome.username, outcome.elapsed_seconds)

    def load_records(self) -> list[ScoreRecord]:
        """Return entries in insertion order."""
        if not self._storage_path.exists():
            return []
        try:
            raw = self._read_document()
        except (OSError, ScoreboardError) as exc:
            logger.warning("Ignoring unreadable scores file %s: %s", self._storage_path, exc)
            return []

        records: list[ScoreRecord] = []
        for item in raw:
            try:
                records.append(ScoreRecord(name=str(item["name"]), time=float(item["time"])))
            except (KeyError, TypeError, ValueError):
                logger.debug("Skipping malformed score entry: %r", item)
        return records

    def get_rankings(self) -> list[ScoreboardRow]:
        """Return entries sorted by time, fastest first, with 1-based ranks."""
        sorted_records = sorted(self.load_records(), key=lambda record: record.time)
        return [
            ScoreboardRow(rank=index + 1, name=record.name, time=record.time)
            for index, record in enumerate(sorted_records)
        ]

    def _read_document(self) -> list[Any]:
        try:
            raw = json.loads(self._storage_path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ScoreboardError(f"Scores file {self._storage_path} is not valid JSON.") from exc
        if not isinstance(raw, list):
            raise ScoreboardError(f"Scores file {self._storage_path} does not hold a list.")
        return raw

    def _write(self, document: list[Any]) -> None:
        # Replace the file in one step so an interrupted write leaves the old list intact.
        directory = self._storage_path.parent
        directory.mkdir(parents=True, exist_ok=True)
        handle = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=directory,
            prefix=f".{self._storage_path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with handle:
                json.dump(document, handle, indent=2)
            os.replace(handle.name, self._storage_path)
        except Exception:
            Path(handle.name).unlink(missing_ok=True)
            raise
