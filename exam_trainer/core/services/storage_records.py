"""Pydantic schemas for every JSON document the application reads or writes.

The durable shapes use camelCase keys so the files stay compatible with data
exported by the browser version of the trainer. Each record converts to and
from the immutable dataclasses in ``exam_trainer.core.models``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from exam_trainer.core.models import (
    AppMode,
    AppState,
    ExamMode,
    ExamResult,
    ExamSettings,
    QuestionMistake,
    QuestionsRange,
    QuizOption,
    QuizQuestion,
    UserAnswer,
)


def _assume_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_assume_utc)]


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OptionRecord(_Record):
    option_value: str
    is_correct_ans: bool

    @classmethod
    def from_domain(cls, option: QuizOption) -> OptionRecord:
        return cls(option_value=option.option_value, is_correct_ans=option.is_correct_ans)

    def to_domain(self) -> QuizOption:
        return QuizOption(option_value=self.option_value, is_correct_ans=self.is_correct_ans)


class QuestionRecord(_Record):
    serial: int
    question: str
    options: list[OptionRecord]
    category: str = ""

    @classmethod
    def from_domain(cls, question: QuizQuestion) -> QuestionRecord:
        return cls(
            serial=question.serial,
            question=question.question,
            options=[OptionRecord.from_domain(option) for option in question.options],
            category=question.category,
        )

    def to_domain(self) -> QuizQuestion:
        return QuizQuestion(
            serial=self.serial,
            question=self.question,
            options=tuple(option.to_domain() for option in self.options),
            category=self.category,
        )


class AnswerRecord(_Record):
    question_serial: int
    selected_options: list[str]
    is_correct: bool
    timestamp: UtcDatetime

    @classmethod
    def from_domain(cls, answer: UserAnswer) -> AnswerRecord:
        return cls(
            question_serial=answer.question_serial,
            selected_options=sorted(answer.selected_options),
            is_correct=answer.is_correct,
            timestamp=answer.timestamp,
        )

    def to_domain(self) -> UserAnswer:
        return UserAnswer(
            question_serial=self.question_serial,
            selected_options=frozenset(self.selected_options),
            is_correct=self.is_correct,
            timestamp=self.timestamp,
        )


class RangeRecord(_Record):
    start: int
    end: int


class ExamResultRecord(_Record):
    id: str
    questions_range: RangeRecord
    total_questions: int
    correct_answers: int
    wrong_answers: int
    incorrect_answers: int | None = None
    unattended_questions: int | None = None
    user_answers: list[AnswerRecord] = Field(default_factory=list)
    completed_at: UtcDatetime
    time_taken: int = 0

    @classmethod
    def from_domain(cls, result: ExamResult) -> ExamResultRecord:
        return cls(
            id=result.id,
            questions_range=RangeRecord(
                start=result.questions_range.start,
                end=result.questions_range.end,
            ),
            total_questions=result.total_questions,
            correct_answers=result.correct_answers,
            wrong_answers=result.wrong_answers,
            incorrect_answers=result.incorrect_answers,
            unattended_questions=result.unattended_questions,
            user_answers=[AnswerRecord.from_domain(answer) for answer in result.user_answers],
            completed_at=result.completed_at,
            time_taken=result.time_taken,
        )

    def to_domain(self) -> ExamResult:
        answers = tuple(answer.to_domain() for answer in self.user_answers)
        # Records written before the split counts existed only carry wrongAnswers.
        incorrect = self.incorrect_answers
        if incorrect is None:
            incorrect = sum(1 for answer in answers if not answer.is_correct)
        unattended = self.unattended_questions
        if unattended is None:
            unattended = max(0, self.total_questions - len(answers))
        return ExamResult(
            id=self.id,
            questions_range=QuestionsRange(start=self.questions_range.start, end=self.questions_range.end),
            total_questions=self.total_questions,
            correct_answers=self.correct_answers,
            wrong_answers=self.wrong_answers,
            incorrect_answers=incorrect,
            unattended_questions=unattended,
            user_answers=answers,
            completed_at=self.completed_at,
            time_taken=self.time_taken,
        )


class MistakeRecord(_Record):
    question_serial: int
    mistake_count: int
    last_mistake_date: UtcDatetime
    question: QuestionRecord

    @classmethod
    def from_domain(cls, mistake: QuestionMistake) -> MistakeRecord:
        return cls(
            question_serial=mistake.question_serial,
            mistake_count=mistake.mistake_count,
            last_mistake_date=mistake.last_mistake_date,
            question=QuestionRecord.from_domain(mistake.question),
        )

    def to_domain(self) -> QuestionMistake:
        return QuestionMistake(
            question_serial=self.question_serial,
            mistake_count=self.mistake_count,
            last_mistake_date=self.last_mistake_date,
            question=self.question.to_domain(),
        )


class SettingsRecord(_Record):
    start_question: int
    end_question: int
    mode: ExamMode = ExamMode.PRACTICE

    @classmethod
    def from_domain(cls, settings: ExamSettings) -> SettingsRecord:
        return cls(
            start_question=settings.start_question,
            end_question=settings.end_question,
            mode=settings.mode,
        )

    def to_domain(self) -> ExamSettings:
        return ExamSettings(
            start_question=self.start_question,
            end_question=self.end_question,
            mode=self.mode,
        )


class AppStateRecord(_Record):
    mode: AppMode = AppMode.SETUP
    current_exam_result: ExamResultRecord | None = None
    exam_questions: list[QuestionRecord] = Field(default_factory=list)
    current_exam_settings: SettingsRecord | None = None
    last_saved: UtcDatetime

    @classmethod
    def from_domain(cls, state: AppState) -> AppStateRecord:
        return cls(
            mode=state.mode,
            current_exam_result=(
                ExamResultRecord.from_domain(state.current_exam_result)
                if state.current_exam_result is not None
                else None
            ),
            exam_questions=[QuestionRecord.from_domain(question) for question in state.exam_questions],
            current_exam_settings=(
                SettingsRecord.from_domain(state.current_exam_settings)
                if state.current_exam_settings is not None
                else None
            ),
            last_saved=state.last_saved,
        )

    def to_domain(self) -> AppState:
        return AppState(
            mode=self.mode,
            current_exam_result=self.current_exam_result.to_domain() if self.current_exam_result else None,
            exam_questions=tuple(question.to_domain() for question in self.exam_questions),
            current_exam_settings=(
                self.current_exam_settings.to_domain() if self.current_exam_settings else None
            ),
            last_saved=self.last_saved,
        )


QUESTION_LIST_ADAPTER = TypeAdapter(list[QuestionRecord])
HISTORY_ADAPTER = TypeAdapter(list[ExamResultRecord])
MISTAKES_ADAPTER = TypeAdapter(list[MistakeRecord])
