"""Static metadata describing SpeedQuiz."""

APP_NAME = "SpeedQuiz"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "SpeedQuiz is a timed quiz widget built with Qt. Enter a name, answer each "
    "question before the countdown runs out, and try to beat the best time on "
    "the scoreboard."
)

HELP_TEXT = (
    "Every question has to be answered within the time limit. A wrong answer or "
    "an expired timer ends the attempt. Finish all questions to get your time "
    "onto the scoreboard.\n\n"
    "Quiz files for the local question server use the import format:\n\n"
    "Q: What is 2 + 2?\n"
    "A: 3\nB: 4\nC: 5\nD: 22\n"
    "CORRECT: B\n\n"
    "Q: Name the capital of Sweden.\n"
    "ANSWER: Stockholm"
)
