"""Network configuration constants for the quiz application."""

DEFAULT_QUESTION_URL: str = "https://courselab.lnu.se/quiz/question/1"
DEFAULT_REQUEST_TIMEOUT_MS: int = 8000

LOCAL_SERVER_HOST: str = "127.0.0.1"
LOCAL_SERVER_PORT: int = 8000
WRONG_ANSWER_STATUS: int = 400
