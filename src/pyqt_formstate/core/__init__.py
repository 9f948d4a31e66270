"""
Core utilities.

Qt-core helpers and the exception hierarchy, with no form-specific logic.
"""

from .debounce_timer import DebounceTimer
from .exceptions import (
    FormStateError,
    MissingControllerError,
    UnknownFieldError,
    UnreachableActionError,
    EffectError,
)
from .performance_monitor import timer, timed

__all__ = [
    "DebounceTimer",
    "FormStateError",
    "MissingControllerError",
    "UnknownFieldError",
    "UnreachableActionError",
    "EffectError",
    "timer",
    "timed",
]
