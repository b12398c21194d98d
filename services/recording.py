"""Recording engine contract consumed by the study wizard."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from observability import log_event


@runtime_checkable
class RecordingEngine(Protocol):
    """Starts screen capture; success, failure and stops arrive as signals."""

    async def start(self) -> None:
        ...


class RelayedRecorder:
    """Recorder for hosts where capture runs client side.

    The start request is only noted; the client starts capture and pushes
    recording signals back through the host.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.pending = 0

    async def start(self) -> None:
        self.pending += 1
        log_event("recording.relayed", self.session_id, outcome="pending")

    def acknowledge(self) -> None:
        self.pending = 0


__all__ = ["RecordingEngine", "RelayedRecorder"]
