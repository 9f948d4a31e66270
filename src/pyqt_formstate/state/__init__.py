"""
Form state model.

Immutable local state, the closed action set, the reducer and the two
component views on top of the store (Field Registry, Value Store).
"""

from .actions import (
    FormAction,
    Register,
    Unregister,
    SetErrors,
    TouchField,
    SetCachedValue,
    UnsetCachedValue,
    UpdateCalculatedValues,
)
from .form_state import FormLocalState
from .reducer import FormStateReducer
from .store import FormStore
from .field_registry import FieldRegistry
from .value_store import ValueStore

__all__ = [
    "FormAction",
    "Register",
    "Unregister",
    "SetErrors",
    "TouchField",
    "SetCachedValue",
    "UnsetCachedValue",
    "UpdateCalculatedValues",
    "FormLocalState",
    "FormStateReducer",
    "FormStore",
    "FieldRegistry",
    "ValueStore",
]
