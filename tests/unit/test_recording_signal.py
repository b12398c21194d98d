from __future__ import annotations

import asyncio

from services.recording import RecordingEngine, RelayedRecorder
from study_wizard.controller import WizardController
from study_wizard.models import Step


def test_recording_observed_fires_on_rising_edge_only(recorder):
    seen = []
    controller = WizardController(recorder=recorder, on_recording_observed=lambda: seen.append(1))

    assert controller.observe_recording(False) is False
    assert controller.observe_recording(True) is True
    assert controller.observe_recording(True) is False
    assert controller.observe_recording(True, stopped=False) is False
    assert seen == [1]

    controller.observe_recording(False, stopped=True)
    controller.observe_recording(True)
    assert seen == [1, 1]


def test_observed_without_handler_is_fine(recorder):
    controller = WizardController(recorder=recorder)
    assert controller.observe_recording(True) is True
    assert controller.step == Step.WELCOME


def test_failed_start_does_not_raise_or_transition(recorder_factory):
    recorder = recorder_factory(fail=RuntimeError("NotAllowedError"))
    controller = WizardController(recorder=recorder)
    assert asyncio.run(controller.request_recording()) is False
    assert recorder.calls == 1
    assert controller.step == Step.WELCOME
    assert controller.state.recording_requested is True

    controller.observe_recording(False, error="NotAllowedError")
    assert controller.recording.error == "NotAllowedError"
    assert controller.advance() is False


def test_request_without_recorder_is_absorbed():
    controller = WizardController(recorder=None, auto_request_recording=True)
    asyncio.run(controller.mount())
    assert controller.state.recording_requested is True
    assert controller.step == Step.WELCOME


def test_reshare_after_stop_keeps_step(controller, recorder):
    controller.observe_recording(True)
    controller.advance()
    controller.finish_task()
    controller.observe_recording(False, stopped=True)
    assert controller.step == Step.Q1_TASK_SUCCESS

    assert asyncio.run(controller.request_recording()) is True
    assert recorder.calls == 1
    controller.observe_recording(True)
    assert controller.step == Step.Q1_TASK_SUCCESS
    assert controller.recording.stopped is False


def test_overlapping_requests_are_allowed(controller, recorder):
    async def burst():
        return await asyncio.gather(*(controller.request_recording() for _ in range(3)))

    assert asyncio.run(burst()) == [True, True, True]
    assert recorder.calls == 3


def test_relayed_recorder_tracks_pending_requests():
    relayed = RelayedRecorder("sess")
    assert isinstance(relayed, RecordingEngine)
    asyncio.run(relayed.start())
    asyncio.run(relayed.start())
    assert relayed.pending == 2
    relayed.acknowledge()
    assert relayed.pending == 0
