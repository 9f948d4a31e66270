"""
Service layer for the form state engine.

Validation, its timing policy, the effect cascade and the committed-write
dispatcher, plus small cross-cutting helpers.
"""

from .flag_context_manager import FlagContextManager, ManagerFlag
from .field_change_dispatcher import FieldChangeDispatcher, FieldChangeEvent
from .effect_cascade import EffectCascade
from .validation_service import ValidationService
from .validation_scheduler import ValidationScheduler
from .signal_service import SignalService

__all__ = [
    "FlagContextManager",
    "ManagerFlag",
    "FieldChangeDispatcher",
    "FieldChangeEvent",
    "EffectCascade",
    "ValidationService",
    "ValidationScheduler",
    "SignalService",
]
