"""Helpers for creating and tracking study wizard sessions."""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from functools import partial
from threading import RLock
from typing import Any, Dict, Iterator, List, Optional

from config.registry import COMPLETION_KEY, RECORDER_KEY, RECORDING_OBSERVED_KEY, get_collaborator
from observability import log_event, span
from services.recording import RecordingEngine, RelayedRecorder
from study_wizard.controller import WizardController
from study_wizard.models import Submission


class TestSession:
    """Session context around one wizard: owns the submission-in-flight flag."""

    __test__ = False  # not a pytest class

    def __init__(self, session_id: str, recorder: RecordingEngine):
        self.session_id = session_id
        self.recorder = recorder
        self.events: List[Dict[str, Any]] = []
        self.is_submitting = False
        self.delivered = 0
        handler = get_collaborator(COMPLETION_KEY, None)
        observed = get_collaborator(RECORDING_OBSERVED_KEY, None)
        self.controller = WizardController(
            session_id=session_id,
            recorder=recorder,
            on_submit=partial(self._complete, handler) if handler else None,
            on_recording_observed=partial(observed, session_id) if observed else None,
        )

    @contextmanager
    def submitting(self) -> Iterator[None]:
        """Hold the submitting flag for the duration of the block."""

        self._set_submitting(True)
        try:
            yield
        finally:
            self._set_submitting(False)

    def _set_submitting(self, flag: bool) -> None:
        self.is_submitting = flag
        self.controller.set_submitting(flag)

    def _complete(self, handler, submission: Submission) -> None:
        with self.submitting():
            handler(self.session_id, submission)
        self.delivered += 1

    async def apply(
        self,
        kind: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        active: bool = False,
        error: Optional[str] = None,
        stopped: bool = False,
    ) -> bool:
        """Route one host event to the controller.

        Raises:
            ValueError: If ``kind`` is not a known event type.
        """

        with span(self, kind, int(self.controller.step)) as entry:
            accepted = await self._dispatch(kind, field, value, active, error, stopped)
            entry["accepted"] = accepted
        return accepted

    async def _dispatch(
        self,
        kind: str,
        field: Optional[str],
        value: Any,
        active: bool,
        error: Optional[str],
        stopped: bool,
    ) -> bool:
        controller = self.controller
        if kind == "advance":
            return controller.advance()
        if kind == "start_task":
            return controller.start_task()
        if kind == "finish_task":
            return controller.finish_task()
        if kind == "open_panel":
            return controller.open_panel()
        if kind == "answer":
            controller.update_response(field or "", value)
            return True
        if kind == "request_recording":
            return await controller.request_recording()
        if kind == "recording_signal":
            if isinstance(self.recorder, RelayedRecorder):
                self.recorder.acknowledge()
            return controller.observe_recording(active, error=error, stopped=stopped)
        raise ValueError(f"Unknown event type: {kind}")


class InMemorySessionStore:  # Thread-safe in-memory store
    def __init__(self) -> None:
        self._sessions: Dict[str, TestSession] = {}
        self._lock = RLock()

    def create(self, session: TestSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def get(self, session_id: str) -> Optional[TestSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


STORE = InMemorySessionStore()


async def new_session() -> TestSession:
    """Create, mount and register a session with a generated identifier."""

    session_id = str(uuid.uuid4())
    factory = get_collaborator(RECORDER_KEY, RelayedRecorder)
    session = TestSession(session_id, factory(session_id))
    STORE.create(session)
    log_event("session.created", session_id)
    await session.controller.mount()
    return session


def load_session(session_id: str) -> Optional[TestSession]:
    """Return the live session for ``session_id`` if present."""

    return STORE.get(session_id)


__all__ = ["InMemorySessionStore", "STORE", "TestSession", "load_session", "new_session"]
