"""FastAPI routes driving study wizard sessions."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from api.schemas import ApiResp, EventReq, WizardSnapshot
from config.study import StudyCatalog
from services.recording import RelayedRecorder
from services.sessions import TestSession, load_session, new_session
from study_wizard.view import render_panel


router = APIRouter(prefix="/api/wizard-sessions")

_catalog: Optional[StudyCatalog] = None


def _study_copy():
    global _catalog
    if _catalog is None:
        _catalog = StudyCatalog()
    return _catalog.copy


def _resp_from_session(session: TestSession, accepted: Optional[bool] = None) -> ApiResp:
    controller = session.controller
    state = controller.state
    pending = isinstance(session.recorder, RelayedRecorder) and session.recorder.pending > 0
    return ApiResp(
        session_id=session.session_id,
        state=WizardSnapshot(
            step=int(state.step),
            visible=state.visible,
            task_started=state.task_started,
            recording_requested=state.recording_requested,
            errors=dict(controller.errors),
        ),
        view=render_panel(controller, _study_copy()),
        accepted=accepted,
        submitted=controller.submitted,
        recording_pending=pending,
        event_log=list(session.events[-20:]),
    )


def _require(session_id: str) -> TestSession:
    session = load_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.post("/start", response_model=ApiResp)
async def start() -> ApiResp:
    session = await new_session()
    return _resp_from_session(session)


@router.get("/{session_id}", response_model=ApiResp)
async def show(session_id: str) -> ApiResp:
    return _resp_from_session(_require(session_id))


@router.post("/{session_id}/events", response_model=ApiResp)
async def event(session_id: str, req: EventReq) -> ApiResp:
    session = _require(session_id)
    try:
        accepted = await session.apply(
            req.type,
            field=req.field,
            value=req.value,
            active=req.active,
            error=req.error,
            stopped=req.stopped,
        )
    except KeyError as exc:
        raise HTTPException(status_code=422, detail=str(exc.args[0]) if exc.args else "Unknown response field") from exc
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
    return _resp_from_session(session, accepted=accepted)
