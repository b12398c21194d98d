from __future__ import annotations  # Presentation-free snapshot of the instruction panel

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from config.study import StudyCopy

from .controller import WizardController
from .models import Step
from .steps import QUESTION_STEPS, rule_for

ActionId = Literal["enable_recording", "continue", "start_task", "finish_task", "next", "reshare"]

TAB_LABEL = "Instructions"
RECORDING_ACTIVE_NOTICE = "Recording active - You may now proceed"
RECORDING_STOPPED_WARNING = "Recording stopped - Click below to reshare"


class PanelAction(BaseModel):  # Button affordance offered by the panel
    id: ActionId
    label: str
    enabled: bool = True


class QuestionView(BaseModel):  # Question prompt with its current answer
    question_id: str
    text: str
    kind: str
    options: List[Tuple[str, str]] = Field(default_factory=list)
    placeholder: str = ""
    value: Optional[str] = None
    error: Optional[str] = None


class PanelView(BaseModel):  # Everything the host needs to draw the panel
    step: int
    open: bool
    tab: Optional[str] = None
    title: str = ""
    body: List[str] = Field(default_factory=list)
    recording_indicator: bool = False
    recording_error: Optional[str] = None
    notice: Optional[str] = None
    stopped_warning: Optional[str] = None
    question: Optional[QuestionView] = None
    actions: List[PanelAction] = Field(default_factory=list)
    progress: List[bool] = Field(default_factory=list)


def render_panel(controller: WizardController, copy: StudyCopy) -> PanelView:
    """Build the panel view for the controller's current state."""

    step = controller.step
    signal = controller.recording
    tab = TAB_LABEL if not controller.visible and step >= Step.TASK_BRIEF else None
    view = PanelView(step=int(step), open=controller.visible, tab=tab)
    if not controller.visible:
        return view

    view.recording_indicator = signal.active and not signal.stopped
    if signal.stopped:
        view.stopped_warning = RECORDING_STOPPED_WARNING
        view.actions.append(PanelAction(id="reshare", label="Restart Screen Recording"))

    if step == Step.WELCOME:
        view.title = copy.title
        view.body = list(copy.welcome)
        view.recording_error = signal.error
        if signal.active:
            view.notice = RECORDING_ACTIVE_NOTICE
            view.actions.append(PanelAction(id="continue", label="Continue"))
        else:
            view.actions.append(PanelAction(id="enable_recording", label="Enable Screen Recording"))
    elif step == Step.TASK_BRIEF:
        view.title = copy.task.title
        view.body = [copy.task.summary, *copy.task.details, copy.task.tip]
        if not signal.stopped:
            start_label = "Continue Task" if controller.state.task_started else "Get Started"
            view.actions.append(PanelAction(id="start_task", label=start_label))
            view.actions.append(PanelAction(id="finish_task", label="I'm Done"))
    else:
        view.title = f"Question {QUESTION_STEPS.index(step) + 1} of {len(QUESTION_STEPS)}"
        view.question = _question_view(controller, step)
        if controller.is_submitting:
            label = "Submitting..."
        elif step == Step.Q4_WORKED_WELL:
            label = "Submit Feedback"
        else:
            label = "Next"
        view.actions.append(PanelAction(id="next", label=label, enabled=not controller.is_submitting))

    if step >= Step.TASK_BRIEF:
        view.progress = [number <= step for number in range(1, 6)]
    return view


def _question_view(controller: WizardController, step: Step) -> QuestionView:
    rule = rule_for(step)
    question = rule.question
    raw = getattr(controller.draft, rule.field)
    value = None if raw is None else str(raw)
    return QuestionView(
        question_id=question.question_id,
        text=question.text,
        kind=question.kind,
        options=list(question.options),
        placeholder=question.placeholder,
        value=value,
        error=controller.errors.get(rule.field),
    )


__all__ = ["PanelAction", "PanelView", "QuestionView", "render_panel"]
