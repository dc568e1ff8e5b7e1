"""Exam-related constants shared across UI and core layers."""

from datetime import timedelta

AUTO_ADVANCE_DELAY_MS: int = 1500
COMPLETION_DELAY_MS: int = 2000
PASSING_PERCENTAGE: int = 70
SNAPSHOT_MAX_AGE: timedelta = timedelta(hours=24)

DEFAULT_START_QUESTION: int = 1
DEFAULT_END_QUESTION: int = 100
QUICK_START_RANGES: tuple[tuple[int, int], ...] = ((1, 50), (51, 100), (101, 150), (1, 100))

CORRECT_FEEDBACK_MESSAGES: tuple[str, ...] = (
    "Correct! Great job!",
    "Perfect! Moving on...",
    "Excellent! Next question coming up...",
    "Well done! Advancing...",
    "Spot on! Keep it up!",
)

EXIT_CONFIRM_MESSAGE: str = "Are you sure you want to exit? Your progress will be lost."
PAUSE_CONFIRM_MESSAGE: str = "Are you sure you want to pause the exam? You can resume later."
CLEAR_DATA_CONFIRM_MESSAGE: str = (
    "This permanently deletes your exam history, mistake tally and saved session. Continue?"
)
EMPTY_RANGE_MESSAGE: str = "No questions found in the selected range"
