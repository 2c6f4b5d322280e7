"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "SpeedQuiz"

NAV_BUTTON_QUIZ: str = "Quiz"
NAV_BUTTON_SCOREBOARD: str = "Scoreboard"
NAV_BUTTON_ABOUT: str = "About"
NAV_BUTTON_HELP: str = "Help"

MENU_TITLE: str = "Welcome to SpeedQuiz"
MENU_USERNAME_PLACEHOLDER: str = "Enter your name"
MENU_START_BUTTON: str = "Start Quiz"
MENU_INVALID_USERNAME: str = "Please enter a valid username."

QUIZ_TITLE_TEMPLATE: str = "Question {index}"
QUIZ_ANSWER_PLACEHOLDER: str = "Type your answer here"
QUIZ_ANSWER_BUTTON: str = "Answer"
QUIZ_RETRY_LOAD_BUTTON: str = "Retry"
QUIZ_LOADING_MESSAGE: str = "Loading question…"
QUIZ_SELECT_OPTION_MESSAGE: str = "Select one of the alternatives."
QUIZ_EMPTY_ANSWER_MESSAGE: str = "Type an answer before submitting."

RESULT_FINISHED_TEMPLATE: str = "Congratulations, {username}!"
RESULT_FAILED_TEMPLATE: str = "Better luck next time, {username}!"
RESULT_ELAPSED_TEMPLATE: str = "It took you {seconds:.3f} seconds"
RESULT_SCORE_TEMPLATE: str = "Correct answers: {score}"
RESULT_TRY_AGAIN_BUTTON: str = "Try Again"
RESULT_SCOREBOARD_BUTTON: str = "Scoreboard"
RESULT_TIMEOUT_MESSAGE: str = "Time ran out."
RESULT_GRADE_ERROR_MESSAGE: str = "Your answer could not be graded."

SCOREBOARD_TITLE: str = "Scoreboard"
SCOREBOARD_HEADERS: tuple[str, str, str] = ("Place", "Name", "Best Time")
SCOREBOARD_EMPTY_STATE: str = "No finished quizzes yet."
