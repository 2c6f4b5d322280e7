from __future__ import annotations

from pathlib import Path

import pytest

from speed_quiz.core.quiz_importer import (
    DEFAULT_QUIZ_FILE,
    QuizImportError,
    load_quiz_from_file,
    parse_quiz_text,
)


def test_default_quiz_file_loads() -> None:
    quiz = load_quiz_from_file(DEFAULT_QUIZ_FILE)

    assert len(quiz.questions) == 5
    first = quiz.questions[0]
    assert first.is_multiple_choice
    assert first.options == ("3", "4", "5", "22")
    assert first.correct_option_index == 1
    assert first.time_limit_seconds == 10
    assert quiz.questions[2].accepted_answer == "Stockholm"


def test_blocks_split_on_blank_lines_and_separators() -> None:
    text = """
# comment
Q: First
A: yes
B: no
CORRECT: A

Q: Second
ANSWER: two
---
Q: Third
spans lines
ANSWER: 3
"""
    questions = parse_quiz_text(text)

    assert [question.question_text for question in questions] == ["First", "Second", "Third\nspans lines"]
    assert questions[1].accepted_answer == "two"
    assert not questions[1].is_multiple_choice


@pytest.mark.parametrize(
    "text",
    [
        "A: orphan\nB: options\nCORRECT: A",
        "Q: One option\nA: only\nCORRECT: A",
        "Q: Gap\nA: one\nC: three\nCORRECT: A",
        "Q: Missing correct\nA: one\nB: two",
        "Q: Bad correct\nA: one\nB: two\nCORRECT: D",
        "Q: Both\nA: one\nB: two\nANSWER: one",
        "Q: Empty answer\nANSWER:",
        "Q: Bad limit\nANSWER: x\nTIMELIMIT: soon",
        "Q: Zero limit\nANSWER: x\nTIMELIMIT: 0",
    ],
)
def test_invalid_blocks_are_rejected(text: str) -> None:
    with pytest.raises(QuizImportError):
        parse_quiz_text(text)


def test_empty_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("# nothing here\n", encoding="utf-8")

    with pytest.raises(QuizImportError):
        load_quiz_from_file(path)
