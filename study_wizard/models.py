from __future__ import annotations  # Wizard state, draft and submission models

from enum import IntEnum
from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

TaskSuccess = Literal["yes", "partially", "no"]
DraftField = Literal["task_success", "difficulty", "confusing", "worked_well"]


class Step(IntEnum):  # Ordered wizard positions
    WELCOME = 0
    TASK_BRIEF = 1
    Q1_TASK_SUCCESS = 2
    Q2_DIFFICULTY = 3
    Q3_CONFUSING = 4
    Q4_WORKED_WELL = 5


class WizardState(BaseModel):  # Step position and panel visibility
    step: Step = Step.WELCOME
    visible: bool = True
    task_started: bool = False
    recording_requested: bool = False


class ResponseDraft(BaseModel):  # In-progress survey answers
    task_success: Optional[TaskSuccess] = None
    difficulty: Optional[int] = Field(default=None, ge=1, le=5)
    confusing: str = ""
    worked_well: str = ""

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _reject_bool(cls, value):  # Booleans are ints to pydantic; ratings are not
        if isinstance(value, bool):
            raise ValueError("difficulty must be an integer rating")
        return value

    def is_complete(self) -> bool:  # All four answers present
        return (
            self.task_success is not None
            and self.difficulty is not None
            and self.confusing.strip() != ""
            and self.worked_well.strip() != ""
        )


ValidationErrors = Dict[str, str]


class SubmissionEntry(BaseModel):  # One answered survey question
    question_id: str = Field(serialization_alias="questionId")
    question_text: str = Field(serialization_alias="questionText")
    answer: str

    model_config = ConfigDict(frozen=True)


class Submission(BaseModel):  # Finalized ordered answers handed to the host
    entries: Tuple[SubmissionEntry, SubmissionEntry, SubmissionEntry, SubmissionEntry]

    model_config = ConfigDict(frozen=True)

    def as_records(self) -> list[dict]:  # camelCase records for host callbacks
        return [entry.model_dump(by_alias=True) for entry in self.entries]


class RecordingSignal(BaseModel):  # Status pushed by the recording engine
    active: bool = False
    error: Optional[str] = None
    stopped: bool = False

    model_config = ConfigDict(frozen=True)


__all__ = [
    "DraftField",
    "RecordingSignal",
    "ResponseDraft",
    "Step",
    "Submission",
    "SubmissionEntry",
    "TaskSuccess",
    "ValidationErrors",
    "WizardState",
]
