"""Span helper recording wizard event timings and outcomes."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator


@contextmanager
def span(target, kind: str, step: int) -> Iterator[Dict[str, Any]]:
    """Time one host event and append its record to ``target.events``.

    The caller sets ``accepted`` on the yielded record; an escaping
    exception is recorded as ``outcome="error"`` and re-raised.
    """

    entry: Dict[str, Any] = {"kind": kind, "step": step, "accepted": None, "outcome": "ok"}
    start = time.perf_counter()
    try:
        yield entry
    except Exception as exc:
        entry["outcome"] = "error"
        entry["error"] = type(exc).__name__
        raise
    finally:
        entry["ms"] = int((time.perf_counter() - start) * 1000)
        entry["step_after"] = int(target.controller.step)
        target.events.append(entry)


__all__ = ["span"]
