"""Declarative step table and survey question catalogue."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .models import ResponseDraft, Step, Submission, SubmissionEntry

SELECT_OPTION = "Please select an option"
SELECT_RATING = "Please select a difficulty rating"
PROVIDE_RESPONSE = "Please provide a response"


@dataclass(frozen=True)
class Question:
    """Survey question metadata shown at a question step."""

    question_id: str
    text: str
    kind: str
    options: Tuple[Tuple[str, str], ...] = ()
    placeholder: str = ""


@dataclass(frozen=True)
class StepRule:
    """Validation rule for the field displayed at ``step``."""

    step: Step
    field: Optional[str] = None
    message: str = ""
    validate: Callable[[ResponseDraft], bool] = lambda draft: True
    question: Optional[Question] = None

    def check(self, draft: ResponseDraft) -> Dict[str, str]:
        """Return the error for this step's field, or an empty mapping."""

        if self.field is None or self.validate(draft):
            return {}
        return {self.field: self.message}


TASK_SUCCESS_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("yes", "Yes, I completed it"),
    ("partially", "Partially"),
    ("no", "No, I did not complete it"),
)

DIFFICULTY_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("1", "Very difficult"),
    ("2", "Difficult"),
    ("3", "Medium"),
    ("4", "Easy"),
    ("5", "Very easy"),
)

QUESTIONS: Tuple[Question, ...] = (
    Question(
        question_id="task-success",
        text="Did you complete the task successfully?",
        kind="choice",
        options=TASK_SUCCESS_OPTIONS,
    ),
    Question(
        question_id="difficulty-rating",
        text="How difficult was this task?",
        kind="rating",
        options=DIFFICULTY_OPTIONS,
    ),
    Question(
        question_id="most-confusing",
        text="What was most confusing or difficult?",
        kind="text",
        placeholder="Please describe any confusing or difficult aspects...",
    ),
    Question(
        question_id="what-worked-well",
        text="What worked well?",
        kind="text",
        placeholder="Please describe what worked well...",
    ),
)


def _filled(text: str) -> bool:
    return text.strip() != ""


STEP_RULES: Tuple[StepRule, ...] = (
    StepRule(step=Step.WELCOME),
    StepRule(step=Step.TASK_BRIEF),
    StepRule(
        step=Step.Q1_TASK_SUCCESS,
        field="task_success",
        message=SELECT_OPTION,
        validate=lambda draft: draft.task_success is not None,
        question=QUESTIONS[0],
    ),
    StepRule(
        step=Step.Q2_DIFFICULTY,
        field="difficulty",
        message=SELECT_RATING,
        validate=lambda draft: draft.difficulty is not None,
        question=QUESTIONS[1],
    ),
    StepRule(
        step=Step.Q3_CONFUSING,
        field="confusing",
        message=PROVIDE_RESPONSE,
        validate=lambda draft: _filled(draft.confusing),
        question=QUESTIONS[2],
    ),
    StepRule(
        step=Step.Q4_WORKED_WELL,
        field="worked_well",
        message=PROVIDE_RESPONSE,
        validate=lambda draft: _filled(draft.worked_well),
        question=QUESTIONS[3],
    ),
)

QUESTION_STEPS: Tuple[Step, ...] = tuple(rule.step for rule in STEP_RULES if rule.question)
DRAFT_FIELDS: Tuple[str, ...] = tuple(rule.field for rule in STEP_RULES if rule.field)


def rule_for(step: Step) -> StepRule:
    return STEP_RULES[step]


def build_submission(draft: ResponseDraft) -> Submission:
    """Convert a complete draft into the ordered four-entry submission.

    Raises:
        ValueError: If any answer is still missing.
    """

    if not draft.is_complete():
        raise ValueError("Draft is incomplete; all four answers are required")
    answers: List[str] = [
        draft.task_success,
        str(draft.difficulty),
        draft.confusing,
        draft.worked_well,
    ]
    entries = tuple(
        SubmissionEntry(question_id=question.question_id, question_text=question.text, answer=answer)
        for question, answer in zip(QUESTIONS, answers)
    )
    return Submission(entries=entries)


__all__ = [
    "DIFFICULTY_OPTIONS",
    "DRAFT_FIELDS",
    "PROVIDE_RESPONSE",
    "QUESTIONS",
    "QUESTION_STEPS",
    "Question",
    "SELECT_OPTION",
    "SELECT_RATING",
    "STEP_RULES",
    "StepRule",
    "TASK_SUCCESS_OPTIONS",
    "build_submission",
    "rule_for",
]
