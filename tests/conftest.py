from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

from config.registry import COMPLETION_KEY, RECORDER_KEY, RECORDING_OBSERVED_KEY, unbind_collaborator
from services.sessions import STORE


@pytest.fixture(autouse=True)
def clean_registry():
    try:
        yield
    finally:
        for key in (COMPLETION_KEY, RECORDER_KEY, RECORDING_OBSERVED_KEY):
            unbind_collaborator(key)
        STORE.clear()


class FakeRecorder:
    def __init__(self, fail: Exception | None = None):
        self.calls = 0
        self.fail = fail

    async def start(self) -> None:
        self.calls += 1
        if self.fail is not None:
            raise self.fail


@pytest.fixture
def recorder():
    return FakeRecorder()


@pytest.fixture
def submissions():
    return []


@pytest.fixture
def controller(recorder, submissions):
    from study_wizard.controller import WizardController

    return WizardController(
        session_id="test",
        recorder=recorder,
        on_submit=submissions.append,
        auto_request_recording=True,
    )


@pytest.fixture
def recorder_factory():
    return FakeRecorder
