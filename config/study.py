"""YAML-driven study copy shown by the instruction panel."""
from __future__ import annotations

import os
from typing import List, Optional

from pydantic import BaseModel, Field

from .settings import settings

DEFAULT_TITLE = "Welcome to the Index Creation Study"


class TaskBrief(BaseModel):  # Participant task description
    title: str = "Your Task"
    summary: str = (
        "Task: Add Gary Fadden and Ronald Fadden to Edgar Fadden's household."
    )
    details: List[str] = Field(
        default_factory=lambda: [
            "Make sure to include all details found on the document for each person "
            "(name, relationship, age, birth information, etc.).",
        ]
    )
    tip: str = "Tip: You can reopen this panel at any time by clicking the tab on the left side."


class StudyCopy(BaseModel):  # Static copy for the welcome and task steps
    title: str = DEFAULT_TITLE
    welcome: List[str] = Field(
        default_factory=lambda: [
            "Thank you for participating in this study. We're testing a new feature "
            "for creating indexes in historical records.",
            "Before we begin, you must enable screen and audio recording.",
            "Your recording will help us understand how you interact with the interface. "
            "All data will be kept confidential and used only for research purposes.",
        ]
    )
    task: TaskBrief = Field(default_factory=TaskBrief)


def _load_yaml(path: str) -> dict:
    import yaml  # local import to avoid mandatory dependency until used

    with open(path, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_study(path: Optional[str] = None) -> StudyCopy:
    """Load study copy from YAML, falling back to the built-in copy when missing."""

    target = path or settings.STUDY_CONFIG
    try:
        data = _load_yaml(target)
    except FileNotFoundError:
        return StudyCopy()
    return StudyCopy.model_validate(data)


class StudyCatalog:
    """Cache study copy and reload it when the file timestamp changes."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or settings.STUDY_CONFIG
        self._mtime = 0.0
        self._copy = StudyCopy()
        self.reload_if_changed(force=True)

    def reload_if_changed(self, force: bool = False) -> None:
        try:
            stat = os.stat(self.path)
        except FileNotFoundError:
            self._copy = StudyCopy()
            self._mtime = 0.0
            return
        if not force and stat.st_mtime <= self._mtime:
            return
        self._copy = load_study(self.path)
        self._mtime = stat.st_mtime

    @property
    def copy(self) -> StudyCopy:
        self.reload_if_changed()
        return self._copy


__all__ = ["StudyCatalog", "StudyCopy", "TaskBrief", "load_study"]
