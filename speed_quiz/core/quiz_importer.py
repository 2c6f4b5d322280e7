"""Utilities for importing a question bank from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Question text. Additional lines until the next marker are treated as
       part of the question.
    A: First option text
    B: Second option text       (two to six options, A-F, for multiple choice)
    CORRECT: A|B|...            (required for multiple choice)
    ANSWER: expected text       (free-text questions instead of options)
    TIMELIMIT: seconds          (optional hint sent to clients)

Example:

    Q: What is 2 + 2?
    A: 3
    B: 4
    CORRECT: B

    Q: Name the capital of Sweden.
    ANSWER: Stockholm
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_QUIZ_FILE = Path(__file__).resolve().parent.parent / "data" / "default_quiz.txt"

_OPTION_ORDER = ["A", "B", "C", "D", "E", "F"]


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(frozen=True, slots=True)
class BankQuestion:
    """One question as served by the local question server."""

    question_text: str
    options: tuple[str, ...] = ()
    correct_option_index: int | None = None
    accepted_answer: str | None = None
    time_limit_seconds: int | None = None

    @property
    def is_multiple_choice(self) -> bool:
        return bool(self.options)


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path
    questions: list[BankQuestion]


def load_quiz_from_file(file_path: Path = DEFAULT_QUIZ_FILE) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_quiz_text(text)
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=file_path, questions=questions)


def parse_quiz_text(text: str) -> list[BankQuestion]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped.startswith("#"):
            continue
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            # Blank line encountered after content - finalize current block
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [_parse_block(block) for block in blocks if block]


def _parse_block(block: str) -> BankQuestion:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letter: str | None = None
    accepted_answer: str | None = None
    time_limit_seconds: int | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if upper.startswith("ANSWER:"):
            accepted_answer = line.split(":", 1)[1].strip()
            if not accepted_answer:
                raise QuizImportError("ANSWER must not be empty.")
            current_section = None
            continue

        if upper.startswith("TIMELIMIT:"):
            time_limit_seconds = _parse_time_limit(line.split(":", 1)[1].strip())
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_ORDER and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in _OPTION_ORDER:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(f"Encountered text outside of a known section: '{line}'.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    if accepted_answer is not None:
        if options or correct_letter is not None:
            raise QuizImportError("A question cannot have both ANSWER and options.")
        return BankQuestion(
            question_text=question_text,
            accepted_answer=accepted_answer,
            time_limit_seconds=time_limit_seconds,
        )

    letters = _OPTION_ORDER[: len(options)]
    if len(options) < 2 or sorted(options) != letters:
        raise QuizImportError("Multiple-choice questions need consecutive options starting at A (two to six).")
    option_list = tuple(options[letter].strip() for letter in letters)
    if any(not option for option in option_list):
        raise QuizImportError("Option text cannot be empty.")
    if correct_letter is None:
        raise QuizImportError("Multiple-choice questions need a CORRECT letter.")
    if correct_letter not in letters:
        raise QuizImportError(f"CORRECT must be one of {', '.join(letters)}.")

    return BankQuestion(
        question_text=question_text,
        options=option_list,
        correct_option_index=letters.index(correct_letter),
        time_limit_seconds=time_limit_seconds,
    )


def _parse_time_limit(raw_value: str) -> int:
    if not raw_value:
        raise QuizImportError("TIMELIMIT must include an integer value.")
    try:
        parsed_value = int(raw_value)
    except ValueError as exc:
        raise QuizImportError("TIMELIMIT must be an integer number of seconds.") from exc
    if parsed_value <= 0:
        raise QuizImportError("TIMELIMIT must be a positive integer.")
    return parsed_value
