"""Pydantic schemas for the study wizard session API."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from study_wizard.view import PanelView

EventType = Literal[
    "advance",
    "start_task",
    "finish_task",
    "open_panel",
    "answer",
    "request_recording",
    "recording_signal",
]


class EventReq(BaseModel):
    type: EventType
    field: Optional[str] = None
    value: Optional[Any] = None
    active: bool = False
    error: Optional[str] = None
    stopped: bool = False


class WizardSnapshot(BaseModel):
    step: int
    visible: bool
    task_started: bool
    recording_requested: bool
    errors: Dict[str, str] = Field(default_factory=dict)


class ApiResp(BaseModel):
    session_id: str
    state: WizardSnapshot
    view: PanelView
    accepted: Optional[bool] = None
    submitted: bool = False
    recording_pending: bool = False
    event_log: List[Dict] = Field(default_factory=list)
