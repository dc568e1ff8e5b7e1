"""Durable storage for exam history, the mistake tally and the app snapshot.

Each record lives in its own JSON document (``<key>.json``) inside the data
directory, mirroring a namespaced key-value store. Reads never raise: absent
or corrupt documents degrade to an empty value or the default snapshot so a
damaged file can never take the session down.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from exam_trainer.constants.storage_constants import APP_STATE_KEY, EXAM_HISTORY_KEY, MISTAKES_KEY
from exam_trainer.core.models import AppState, ExamResult, QuestionMistake, QuizQuestion
from exam_trainer.core.services.storage_records import (
    HISTORY_ADAPTER,
    MISTAKES_ADAPTER,
    AppStateRecord,
    ExamResultRecord,
    MistakeRecord,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JsonDocumentStorage:
    """Minimal key-value layer storing one UTF-8 JSON document per key."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, document: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)
        temp_path = path.with_suffix(".json.tmp")
        temp_path.write_text(document, encoding="utf-8")
        os.replace(temp_path, path)

    def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


class PersistenceStore:
    """Single point of access for everything the trainer keeps between runs."""

    def __init__(self, storage: JsonDocumentStorage, clock: Clock = utc_now) -> None:
        self._storage = storage
        self._clock = clock

    @classmethod
    def in_directory(cls, directory: Path, clock: Clock = utc_now) -> PersistenceStore:
        return cls(JsonDocumentStorage(directory), clock=clock)

    # --- Exam history ---

    def append_exam_result(self, result: ExamResult) -> None:
        """Prepend a finished attempt to the history log (most recent first)."""
        history = [result, *self.read_exam_history()]
        records = [ExamResultRecord.from_domain(entry) for entry in history]
        self._storage.write(EXAM_HISTORY_KEY, self._dump_list(HISTORY_ADAPTER, records))
        logger.info("Saved exam result %s (%d entries in history)", result.id, len(history))

    def read_exam_history(self) -> list[ExamResult]:
        records = self._load_list(EXAM_HISTORY_KEY, HISTORY_ADAPTER)
        return [record.to_domain() for record in records]

    # --- Mistake tally ---

    def record_mistake(self, serial: int, question: QuizQuestion) -> QuestionMistake:
        """Count one more wrong answer for ``serial``, creating the entry on first use."""
        mistakes = self.read_mistakes()
        now = self._clock()
        entry = next((m for m in mistakes if m.question_serial == serial), None)
        if entry is None:
            entry = QuestionMistake(
                question_serial=serial,
                mistake_count=1,
                last_mistake_date=now,
                question=question,
            )
            mistakes.append(entry)
        else:
            entry.mistake_count += 1
            entry.last_mistake_date = now

        records = [MistakeRecord.from_domain(mistake) for mistake in mistakes]
        self._storage.write(MISTAKES_KEY, self._dump_list(MISTAKES_ADAPTER, records))
        logger.debug("Recorded mistake for question %d (count=%d)", serial, entry.mistake_count)
        return entry

    def read_mistakes(self) -> list[QuestionMistake]:
        records = self._load_list(MISTAKES_KEY, MISTAKES_ADAPTER)
        return [record.to_domain() for record in records]

    # --- App-state snapshot ---

    def save_app_state(self, **changes: object) -> AppState:
        """Merge ``changes`` into the stored snapshot and stamp ``last_saved``.

        Fields that are not passed keep their previously stored value. Unknown
        field names raise ``TypeError``.
        """
        changes.pop("last_saved", None)
        state = dataclasses.replace(self.read_app_state(), **changes)
        state.last_saved = self._clock()
        record = AppStateRecord.from_domain(state)
        self._storage.write(APP_STATE_KEY, record.model_dump_json(by_alias=True))
        return state

    def read_app_state(self) -> AppState:
        raw = self._read_raw(APP_STATE_KEY)
        if raw is None:
            return AppState(last_saved=self._clock())
        try:
            return AppStateRecord.model_validate_json(raw).to_domain()
        except ValidationError as exc:
            logger.warning("Discarding unreadable app state: %s", exc.errors()[:1])
            return AppState(last_saved=self._clock())

    def clear_app_state(self) -> None:
        self._storage.remove(APP_STATE_KEY)

    def clear_all_data(self) -> None:
        for key in (EXAM_HISTORY_KEY, MISTAKES_KEY, APP_STATE_KEY):
            self._storage.remove(key)
        logger.info("Cleared all stored exam data")

    # --- Helpers ---

    def _read_raw(self, key: str) -> str | None:
        try:
            return self._storage.read(key)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read stored %s: %s", key, exc)
            return None

    def _load_list(self, key: str, adapter) -> list:
        raw = self._read_raw(key)
        if raw is None:
            return []
        try:
            return adapter.validate_json(raw)
        except ValidationError as exc:
            logger.warning("Discarding unreadable %s: %s", key, exc.errors()[:1])
            return []

    @staticmethod
    def _dump_list(adapter, records: list) -> str:
        return adapter.dump_json(records, by_alias=True).decode("utf-8")
