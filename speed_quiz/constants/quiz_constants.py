"""Quiz-related constants shared across UI and core layers."""

DEFAULT_TIME_LIMIT_SECONDS: float = 10.0
TICK_INTERVAL_MS: int = 100

TIMER_WARNING_SECONDS: float = 5.0
TIMER_CRITICAL_SECONDS: float = 3.0

SCORES_FILE_NAME: str = "scores.json"
