"""
State transition actions.

A closed set of immutable actions. Every change to a controller's local state
is expressed as one of these and applied by ``FormStateReducer``; anything else
reaching the reducer is a maintenance mistake and fails loudly.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Register:
    """Mark a field visible (mounted by a presentation layer)."""
    field: str


@dataclass(frozen=True)
class Unregister:
    """Remove a field from the visible set and drop its error."""
    field: str


@dataclass(frozen=True)
class SetErrors:
    """Replace the whole error map with the result of a validation pass."""
    errors: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TouchField:
    """Mark a field as interacted with."""
    field: str


@dataclass(frozen=True)
class SetCachedValue:
    """Store an uncommitted override for a field."""
    field: str
    value: Any


@dataclass(frozen=True)
class UnsetCachedValue:
    """Drop a field's uncommitted override."""
    field: str


@dataclass(frozen=True)
class UpdateCalculatedValues:
    """Replace calculated values wholesale."""
    values: Any


FormAction = Union[
    Register,
    Unregister,
    SetErrors,
    TouchField,
    SetCachedValue,
    UnsetCachedValue,
    UpdateCalculatedValues,
]

ACTION_TYPES = (
    Register,
    Unregister,
    SetErrors,
    TouchField,
    SetCachedValue,
    UnsetCachedValue,
    UpdateCalculatedValues,
)
