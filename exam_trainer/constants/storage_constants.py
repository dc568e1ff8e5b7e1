"""Storage keys and default locations for persisted data."""

from pathlib import Path

EXAM_HISTORY_KEY: str = "aws-quiz-exam-history"
MISTAKES_KEY: str = "aws-quiz-mistakes"
APP_STATE_KEY: str = "aws-quiz-app-state"

DEFAULT_DATA_DIR: Path = Path.home() / ".exam_trainer"
DATA_DIR_ENV_VAR: str = "EXAM_TRAINER_DATA_DIR"
QUESTION_BANK_ENV_VAR: str = "EXAM_TRAINER_QUESTION_BANK"
DEFAULT_QUESTION_BANK_PATH: Path = Path(__file__).resolve().parent.parent / "data" / "questions.json"
