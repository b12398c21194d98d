from __future__ import annotations  # Guided study wizard: consent gate, task brief and survey

from .controller import WizardController
from .models import (
    RecordingSignal,
    ResponseDraft,
    Step,
    Submission,
    SubmissionEntry,
    WizardState,
)
from .steps import QUESTIONS, STEP_RULES, build_submission
from .view import PanelView, render_panel

__all__ = [
    "QUESTIONS",
    "STEP_RULES",
    "PanelView",
    "RecordingSignal",
    "ResponseDraft",
    "Step",
    "Submission",
    "SubmissionEntry",
    "WizardController",
    "WizardState",
    "build_submission",
    "render_panel",
]
