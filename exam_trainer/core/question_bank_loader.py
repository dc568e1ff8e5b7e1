"""Loading of the bundled question bank.

File format: a JSON array of question objects, in display order:

    [
      {
        "serial": 1,
        "question": "Which service provides object storage?",
        "options": [
          {"optionValue": "Amazon S3", "isCorrectAns": true},
          {"optionValue": "Amazon EC2", "isCorrectAns": false}
        ],
        "category": "Storage"
      }
    ]

A question with more than one ``isCorrectAns`` option is multiple choice.
The bank is read once at startup and never modified by the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from exam_trainer.core.models import QuizQuestion
from exam_trainer.core.services.storage_records import QUESTION_LIST_ADAPTER

logger = logging.getLogger(__name__)


class QuestionBankError(Exception):
    """Raised when a question bank cannot be parsed or is inconsistent."""


@dataclass(slots=True)
class LoadedBank:
    """Container for the loaded questions and where they came from."""

    source_path: Path
    questions: list[QuizQuestion]


def load_question_bank(file_path: Path) -> LoadedBank:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise QuestionBankError(f"Could not read question bank {file_path}: {exc}") from exc
    questions = parse_question_bank(text)
    logger.info("Loaded %d questions from %s", len(questions), file_path)
    return LoadedBank(source_path=file_path, questions=questions)


def parse_question_bank(text: str) -> list[QuizQuestion]:
    try:
        records = QUESTION_LIST_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise QuestionBankError(f"Question bank is not valid: {exc}") from exc

    questions = [record.to_domain() for record in records]
    if not questions:
        raise QuestionBankError("Question bank did not contain any questions.")

    seen: set[int] = set()
    for question in questions:
        _validate_question(question)
        if question.serial in seen:
            raise QuestionBankError(f"Duplicate question serial {question.serial}.")
        seen.add(question.serial)
    return questions


def _validate_question(question: QuizQuestion) -> None:
    label = f"Question {question.serial}"
    if question.serial < 1:
        raise QuestionBankError(f"{label}: serial must be a positive integer.")
    if not question.question.strip():
        raise QuestionBankError(f"{label}: question text cannot be empty.")
    if len(question.options) < 2:
        raise QuestionBankError(f"{label}: at least two options are required.")
    values = [option.option_value for option in question.options]
    if any(not value.strip() for value in values):
        raise QuestionBankError(f"{label}: option text cannot be empty.")
    if len(set(values)) != len(values):
        raise QuestionBankError(f"{label}: option values must be unique.")
    if not any(option.is_correct_ans for option in question.options):
        raise QuestionBankError(f"{label}: no option is marked correct.")
