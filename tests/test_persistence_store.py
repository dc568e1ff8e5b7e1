from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timezone

from conftest import make_question, make_result

from exam_trainer.constants.storage_constants import APP_STATE_KEY, EXAM_HISTORY_KEY, MISTAKES_KEY
from exam_trainer.core.models import AppMode, AppState, ExamMode, ExamSettings, UserAnswer


def _answer(serial, selected, is_correct, clock):
    return UserAnswer(
        question_serial=serial,
        selected_options=frozenset(selected),
        is_correct=is_correct,
        timestamp=clock(),
    )


def test_history_is_empty_without_a_file(store):
    assert store.read_exam_history() == []


def test_append_exam_result_prepends(store):
    first = make_result(result_id="exam_1")
    second = make_result(result_id="exam_2")
    store.append_exam_result(first)
    store.append_exam_result(second)
    assert [r.id for r in store.read_exam_history()] == ["exam_2", "exam_1"]


def test_exam_result_round_trip(store, clock):
    answers = (_answer(1, {"A", "C"}, True, clock), _answer(2, {"B"}, False, clock))
    result = make_result(correct=1, incorrect=1, unattended=1, answers=answers)
    store.append_exam_result(result)
    assert store.read_exam_history() == [result]


def test_history_file_uses_camel_case_keys(store, data_dir):
    store.append_exam_result(make_result())
    document = json.loads((data_dir / f"{EXAM_HISTORY_KEY}.json").read_text(encoding="utf-8"))
    assert {"questionsRange", "totalQuestions", "wrongAnswers", "completedAt", "timeTaken"} <= set(document[0])


def test_legacy_history_entries_derive_split_counts(store, data_dir):
    data_dir.mkdir(parents=True)
    legacy = [
        {
            "id": "exam_legacy",
            "questionsRange": {"start": 1, "end": 3},
            "totalQuestions": 3,
            "correctAnswers": 1,
            "wrongAnswers": 2,
            "userAnswers": [
                {"questionSerial": 1, "selectedOptions": ["A"], "isCorrect": True, "timestamp": "2024-05-01T10:00:00"},
                {"questionSerial": 2, "selectedOptions": ["B"], "isCorrect": False, "timestamp": "2024-05-01T10:01:00"},
            ],
            "completedAt": "2024-05-01T10:02:00.000Z",
            "timeTaken": 120,
        }
    ]
    (data_dir / f"{EXAM_HISTORY_KEY}.json").write_text(json.dumps(legacy), encoding="utf-8")

    (result,) = store.read_exam_history()
    assert result.incorrect_answers == 1
    assert result.unattended_questions == 1
    assert result.correct_answers + result.incorrect_answers + result.unattended_questions == result.total_questions
    assert result.user_answers[0].timestamp.tzinfo is not None


def test_corrupt_documents_read_as_defaults(store, data_dir, clock):
    data_dir.mkdir(parents=True)
    for key in (EXAM_HISTORY_KEY, MISTAKES_KEY, APP_STATE_KEY):
        (data_dir / f"{key}.json").write_text("{definitely not json", encoding="utf-8")

    assert store.read_exam_history() == []
    assert store.read_mistakes() == []
    state = store.read_app_state()
    assert state.mode is AppMode.SETUP
    assert state.last_saved == clock()


def test_wrong_shape_reads_as_empty(store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / f"{MISTAKES_KEY}.json").write_text(json.dumps({"unexpected": True}), encoding="utf-8")
    assert store.read_mistakes() == []


def test_record_mistake_upserts_by_serial(store, clock):
    question = make_question(7)
    store.record_mistake(7, question)
    clock.advance(minutes=5)
    second_time = clock()
    store.record_mistake(7, question)
    store.record_mistake(8, make_question(8))

    mistakes = store.read_mistakes()
    assert [m.question_serial for m in mistakes] == [7, 8]
    assert mistakes[0].mistake_count == 2
    assert mistakes[0].last_mistake_date == second_time
    assert mistakes[0].question == question
    assert mistakes[1].mistake_count == 1


def test_default_app_state(store, clock):
    state = store.read_app_state()
    assert state == AppState(last_saved=clock())


def test_app_state_round_trip(store, clock):
    questions = (make_question(1), make_question(2, correct=("A", "B")))
    settings = ExamSettings(start_question=1, end_question=2, mode=ExamMode.EXAM)
    result = make_result(correct=1, incorrect=1, unattended=0)
    clock.advance(hours=2)

    saved = store.save_app_state(
        mode=AppMode.RESULTS,
        current_exam_result=result,
        exam_questions=questions,
        current_exam_settings=settings,
    )
    loaded = store.read_app_state()

    assert loaded == saved
    assert loaded.last_saved == clock()
    assert dataclasses.replace(loaded, last_saved=saved.last_saved) == AppState(
        mode=AppMode.RESULTS,
        current_exam_result=result,
        exam_questions=questions,
        current_exam_settings=settings,
        last_saved=saved.last_saved,
    )


def test_save_app_state_merges_partial_changes(store):
    questions = (make_question(3),)
    store.save_app_state(mode=AppMode.EXAM, exam_questions=questions)
    store.save_app_state(mode=AppMode.HISTORY)

    state = store.read_app_state()
    assert state.mode is AppMode.HISTORY
    assert state.exam_questions == questions


def test_save_app_state_stamps_current_time(store, clock):
    store.save_app_state(mode=AppMode.HISTORY, last_saved=datetime(2000, 1, 1, tzinfo=timezone.utc))
    assert store.read_app_state().last_saved == clock()


def test_clear_app_state(store, data_dir):
    store.save_app_state(mode=AppMode.MISTAKES)
    store.clear_app_state()
    assert not (data_dir / f"{APP_STATE_KEY}.json").exists()
    assert store.read_app_state().mode is AppMode.SETUP


def test_clear_all_data(store, data_dir):
    store.append_exam_result(make_result())
    store.record_mistake(1, make_question(1))
    store.save_app_state(mode=AppMode.HISTORY)

    store.clear_all_data()

    assert list(data_dir.glob("*.json")) == []
    assert store.read_exam_history() == []
    assert store.read_mistakes() == []


def test_clear_all_data_without_files(store):
    store.clear_all_data()
    assert store.read_exam_history() == []
