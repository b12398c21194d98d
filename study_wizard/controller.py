"""Step/validation state machine for the study instruction panel."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from config.settings import settings
from observability import log_event
from services.recording import RecordingEngine

from .models import RecordingSignal, ResponseDraft, Step, Submission, WizardState
from .steps import DRAFT_FIELDS, build_submission, rule_for

SubmitHandler = Callable[[Submission], Any]
ObservedHandler = Callable[[], Any]


class WizardController:
    """Owns step position, visibility, the response draft and field errors.

    Every public trigger applies its update synchronously and returns whether
    it had an effect; inert triggers are logged and leave state untouched.
    """

    def __init__(
        self,
        *,
        session_id: str = "local",
        recorder: Optional[RecordingEngine] = None,
        on_submit: Optional[SubmitHandler] = None,
        on_recording_observed: Optional[ObservedHandler] = None,
        auto_request_recording: Optional[bool] = None,
    ):
        self.session_id = session_id
        self.recorder = recorder
        self.on_submit = on_submit
        self.on_recording_observed = on_recording_observed
        if auto_request_recording is None:
            auto_request_recording = settings.AUTO_REQUEST_RECORDING
        self.auto_request_recording = auto_request_recording

        self.state = WizardState()
        self.draft = ResponseDraft()
        self.errors: Dict[str, str] = {}
        self.recording = RecordingSignal()
        self.is_submitting = False
        self.submission: Optional[Submission] = None
        self._last_active = False
        self._submitted = False

    @property
    def step(self) -> Step:
        return self.state.step

    @property
    def visible(self) -> bool:
        return self.state.visible

    @property
    def submitted(self) -> bool:
        return self._submitted

    # ------------------------------------------------------------------
    # Recording collaborator
    # ------------------------------------------------------------------
    async def mount(self) -> None:
        """Enter the welcome step, requesting recording when configured to."""

        self._log("wizard.mounted", outcome="welcome")
        if self.auto_request_recording:
            await self.request_recording()

    async def request_recording(self) -> bool:
        """Ask the recording engine to start capture.

        Safe to call repeatedly and while an earlier request is pending. A
        failing engine is logged and reported as ``False``; the outcome
        reaches the wizard only through :meth:`observe_recording`.
        """

        self._update(recording_requested=True)
        if self.recorder is None:
            self._log("recording.request_failed", level=logging.WARNING, error="no recorder bound")
            return False
        self._log("recording.requested")
        try:
            await self.recorder.start()
        except Exception as exc:
            self._log("recording.request_failed", level=logging.WARNING, error=str(exc) or type(exc).__name__)
            return False
        return True

    def observe_recording(self, active: bool, error: Optional[str] = None, stopped: bool = False) -> bool:
        """Apply a recording signal; return True on the inactive to active edge."""

        self.recording = RecordingSignal(active=active, error=error, stopped=stopped)
        rising = active and not self._last_active
        self._last_active = active
        self._log("recording.signal", outcome="active" if active else "inactive", error=error)
        if rising:
            self._log("recording.observed")
            if self.on_recording_observed is not None:
                self.on_recording_observed()
        return rising

    def set_submitting(self, flag: bool) -> None:
        self.is_submitting = bool(flag)

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------
    def update_response(self, field: str, value: Any) -> None:
        """Store the displayed step's answer and clear that field's error.

        Only the field shown at the current step is editable. Re-sending the
        stored value is a no-op, so a re-rendering host cannot re-arm delivery.

        Raises:
            KeyError: If ``field`` is not the field displayed at this step.
            pydantic.ValidationError: If ``value`` is not valid for ``field``.
        """

        editable = rule_for(self.state.step).field
        if field not in DRAFT_FIELDS:
            raise KeyError(f"Unknown response field: {field}")
        if field != editable:
            self._log("wizard.answer", field=field, outcome="rejected")
            raise KeyError(f"Field {field} is not editable at step {self.state.step.name}")
        previous = getattr(self.draft, field)
        setattr(self.draft, field, value)
        if getattr(self.draft, field) == previous:
            self._log("wizard.answer", field=field, outcome="unchanged")
            return
        self.errors.pop(field, None)
        # An edited draft starts a new pass.
        self._submitted = False
        self._log("wizard.answer", field=field, outcome="changed")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def advance(self) -> bool:
        """Forward trigger: Continue on welcome, Next/Submit on questions."""

        step = self.state.step
        if step == Step.WELCOME:
            if not self.recording.active:
                self._log("wizard.advance", outcome="blocked", error="recording inactive")
                return False
            self._goto(Step.TASK_BRIEF)
            return True
        if step == Step.TASK_BRIEF:
            self._log("wizard.advance", outcome="ignored")
            return False
        if self.is_submitting:
            self._log("wizard.advance", outcome="disabled")
            return False

        rule = rule_for(step)
        failure = rule.check(self.draft)
        if failure:
            self.errors = dict(failure)
            self._log("wizard.advance", outcome="invalid", field=rule.field)
            return False
        self.errors.pop(rule.field, None)

        if step == Step.Q4_WORKED_WELL:
            return self._submit()
        self._goto(Step(step + 1))
        return True

    def start_task(self) -> bool:
        """Collapse the panel so the participant can work on the task."""

        if self.state.step != Step.TASK_BRIEF:
            self._log("wizard.task", action="start", outcome="ignored")
            return False
        self._update(task_started=True, visible=False)
        self._log("wizard.task", action="start", outcome="collapsed")
        return True

    def finish_task(self) -> bool:
        """Participant reports the task done; move on to the first question."""

        if self.state.step != Step.TASK_BRIEF:
            self._log("wizard.task", action="finish", outcome="ignored")
            return False
        self._update(visible=True)
        self._goto(Step.Q1_TASK_SUCCESS)
        return True

    def open_panel(self) -> bool:
        """Re-open the collapsed panel from its tab; the step is unchanged."""

        if self.state.visible or self.state.step < Step.TASK_BRIEF:
            self._log("wizard.panel", action="open", outcome="ignored")
            return False
        self._update(visible=True)
        self._log("wizard.panel", action="open", outcome="opened")
        return True

    def _submit(self) -> bool:
        if self._submitted:
            self._log("wizard.submitted", outcome="duplicate")
            return False
        if not self.draft.is_complete():
            self._log("wizard.submitted", outcome="incomplete")
            return False
        submission = build_submission(self.draft)
        self.submission = submission
        if self.on_submit is None:
            self._log("wizard.submitted", outcome="no_handler")
            return False
        self.on_submit(submission)
        self._submitted = True
        self._log("wizard.submitted", outcome="delivered")
        return True

    def _goto(self, step: Step) -> None:
        previous = self.state.step
        self._update(step=step)
        self._log("wizard.advance", outcome="advanced", action=f"{previous.name}->{step.name}")

    def _update(self, **changes: Any) -> None:
        self.state = self.state.model_copy(update=changes)

    def _log(self, kind: str, *, level: int = logging.INFO, **fields: Any) -> None:
        log_event(kind, self.session_id, level=level, step=self.state.step.name, **fields)


__all__ = ["ObservedHandler", "SubmitHandler", "WizardController"]
