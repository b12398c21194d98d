"""In-memory collaborator registry for the study wizard host."""
from typing import Any, Callable, Dict

_REGISTRY: Dict[str, Callable[..., Any]] = {}

_MISSING = object()


def bind_collaborator(key: str, fn: Callable[..., Any]) -> None:
    """Bind a callable implementation to a registry key."""
    _REGISTRY[key] = fn


def unbind_collaborator(key: str) -> None:
    _REGISTRY.pop(key, None)


def get_collaborator(key: str, default: Any = _MISSING) -> Callable[..., Any]:
    """Retrieve a callable from the registry.

    Raises:
        KeyError: If no callable has been bound for ``key`` and no default was given.
    """

    if key not in _REGISTRY:
        if default is not _MISSING:
            return default
        raise KeyError(f"Collaborator not bound in registry: {key}")
    return _REGISTRY[key]


RECORDER_KEY = "collaborators.recording_engine"
COMPLETION_KEY = "collaborators.task_complete"
RECORDING_OBSERVED_KEY = "collaborators.recording_observed"
