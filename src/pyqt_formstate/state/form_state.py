"""Immutable snapshot of a controller's local form state."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping


@dataclass(frozen=True)
class FormLocalState:
    """
    Local state owned by one controller.

    Committed values are not part of it: the host owns those. Every transition
    produces a new instance; maps held here are never mutated after creation.

    Attributes:
        cached_values: Uncommitted overrides; a key means "pending edit"
        errors: Validation messages; a missing key means "no error"
        touched: Fields that received at least one commit
        visible: Fields currently registered by a presentation layer
        calculated_values: Caller-derived structure, replaced wholesale
    """
    cached_values: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    touched: FrozenSet[str] = frozenset()
    visible: FrozenSet[str] = frozenset()
    calculated_values: Any = None

    def has_cached_value(self, field_name: str) -> bool:
        return field_name in self.cached_values

    def effective_value(self, field_name: str, committed: Mapping[str, Any]) -> Any:
        """Cached value if present, else committed value (None when neither exists)."""
        if field_name in self.cached_values:
            return self.cached_values[field_name]
        return committed.get(field_name)

    def effective_values(self, committed: Mapping[str, Any]) -> Dict[str, Any]:
        """Committed values overridden by cached values."""
        return {**committed, **self.cached_values}
