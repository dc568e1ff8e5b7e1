from __future__ import annotations

import json

import pytest

from exam_trainer.constants.storage_constants import DEFAULT_QUESTION_BANK_PATH
from exam_trainer.core.answer_evaluator import is_multiple_choice
from exam_trainer.core.question_bank_loader import QuestionBankError, load_question_bank, parse_question_bank


def _question(serial, options=None, **extra):
    payload = {
        "serial": serial,
        "question": f"Question {serial}?",
        "options": options
        if options is not None
        else [
            {"optionValue": "Right", "isCorrectAns": True},
            {"optionValue": "Wrong", "isCorrectAns": False},
        ],
        "category": "General",
    }
    payload.update(extra)
    return payload


def test_parse_valid_bank():
    questions = parse_question_bank(json.dumps([_question(1), _question(2)]))
    assert [q.serial for q in questions] == [1, 2]
    assert questions[0].options[0].option_value == "Right"
    assert questions[0].options[0].is_correct_ans is True
    assert questions[0].category == "General"


def test_category_is_optional():
    payload = _question(1)
    del payload["category"]
    assert parse_question_bank(json.dumps([payload]))[0].category == ""


@pytest.mark.parametrize(
    "payload, message",
    [
        ([], "did not contain any questions"),
        ([_question(1), _question(1)], "Duplicate question serial 1"),
        ([_question(0)], "serial must be a positive integer"),
        ([_question(1, question="  ")], "question text cannot be empty"),
        ([_question(1, options=[{"optionValue": "Only", "isCorrectAns": True}])], "at least two options"),
        (
            [_question(1, options=[{"optionValue": "A", "isCorrectAns": False}, {"optionValue": "B", "isCorrectAns": False}])],
            "no option is marked correct",
        ),
        (
            [_question(1, options=[{"optionValue": "A", "isCorrectAns": True}, {"optionValue": "A", "isCorrectAns": False}])],
            "must be unique",
        ),
    ],
)
def test_inconsistent_banks_are_rejected(payload, message):
    with pytest.raises(QuestionBankError, match=message):
        parse_question_bank(json.dumps(payload))


def test_malformed_json_is_rejected():
    with pytest.raises(QuestionBankError, match="not valid"):
        parse_question_bank("{not json")


def test_missing_file_is_reported(tmp_path):
    with pytest.raises(QuestionBankError, match="Could not read"):
        load_question_bank(tmp_path / "missing.json")


def test_load_from_file(tmp_path):
    path = tmp_path / "bank.json"
    path.write_text(json.dumps([_question(5)]), encoding="utf-8")
    loaded = load_question_bank(path)
    assert loaded.source_path == path
    assert [q.serial for q in loaded.questions] == [5]


def test_bundled_bank_is_valid():
    loaded = load_question_bank(DEFAULT_QUESTION_BANK_PATH)
    serials = [q.serial for q in loaded.questions]
    assert serials == list(range(1, len(serials) + 1))
    assert any(is_multiple_choice(q) for q in loaded.questions)
