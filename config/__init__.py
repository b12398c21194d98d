"""Configuration package for the study wizard."""
from .registry import (
    COMPLETION_KEY,
    RECORDER_KEY,
    RECORDING_OBSERVED_KEY,
    bind_collaborator,
    get_collaborator,
    unbind_collaborator,
)
from .settings import Settings, settings
from .study import StudyCatalog, StudyCopy, TaskBrief, load_study

__all__ = [
    "COMPLETION_KEY",
    "RECORDER_KEY",
    "RECORDING_OBSERVED_KEY",
    "bind_collaborator",
    "get_collaborator",
    "unbind_collaborator",
    "Settings",
    "settings",
    "StudyCatalog",
    "StudyCopy",
    "TaskBrief",
    "load_study",
]
