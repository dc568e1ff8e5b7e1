"""Static metadata describing Exam Trainer."""

APP_NAME = "Exam Trainer"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Exam Trainer is a self-paced multiple-choice exam simulator built with Qt. "
    "Pick a range of questions, practice with instant feedback or sit a timed exam, "
    "and review your history and recurring mistakes across sessions."
)

HELP_TEXT = (
    "Practice mode shows feedback after every answer. Correct answers advance "
    "automatically; after a wrong answer read the correct option(s) and press "
    "Next Question. You can move back to earlier questions and jump around using "
    "the overview grid.\n\n"
    "Exam mode never advances on its own and does not allow going back.\n\n"
    "Questions with more than one correct option are marked as multiple choice: "
    "select every correct option. Partial answers count as wrong.\n\n"
    "Pausing keeps the current attempt and its timer running; use Resume Exam on "
    "the setup screen to continue."
)
