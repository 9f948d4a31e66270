"""
Value Store: the three value layers of a form.

- committed values: owned by the host, observed here as a read-only snapshot
- cached values: uncommitted overrides held in the local state
- calculated values: derived from committed + extra values only
"""

import logging
from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping

from .actions import SetCachedValue, UnsetCachedValue, UpdateCalculatedValues
from .store import FormStore

logger = logging.getLogger(__name__)


class ValueStore:
    """Layered value access for one controller.

    Precedence when merging for validation: committed < cached < calculated.
    Calculated values only take part in the merge when they are a mapping.
    """

    def __init__(self, store: FormStore, committed: Mapping[str, Any],
                 set_value: Callable[[str, Any], None]):
        self._store = store
        self._set_value = set_value
        self._committed: Mapping[str, Any] = MappingProxyType(dict(committed))

    # ========== COMMITTED (host-owned) ==========

    @property
    def committed(self) -> Mapping[str, Any]:
        return self._committed

    def observe_committed(self, values: Mapping[str, Any]) -> bool:
        """Take a new host snapshot. Returns True if it differs from the last one."""
        snapshot = dict(values)
        if snapshot == dict(self._committed):
            return False
        self._committed = MappingProxyType(snapshot)
        return True

    def set_committed_value(self, field_name: str, value: Any) -> None:
        """Ask the host to commit a value; the host pushes the result back."""
        self._set_value(field_name, value)

    # ========== CACHED ==========

    @property
    def cached(self) -> Mapping[str, Any]:
        return MappingProxyType(self._store.state.cached_values)

    def has_cached_value(self, field_name: str) -> bool:
        return self._store.state.has_cached_value(field_name)

    def set_cached_value(self, field_name: str, value: Any) -> bool:
        return self._store.dispatch(SetCachedValue(field_name, value))

    def unset_cached_value(self, field_name: str) -> bool:
        return self._store.dispatch(UnsetCachedValue(field_name))

    # ========== CALCULATED ==========

    @property
    def calculated(self) -> Any:
        return self._store.state.calculated_values

    def set_calculated(self, values: Any) -> bool:
        return self._store.dispatch(UpdateCalculatedValues(values))

    # ========== EFFECTIVE ==========

    def effective_value(self, field_name: str) -> Any:
        return self._store.state.effective_value(field_name, self._committed)

    def effective_values(self) -> Dict[str, Any]:
        return self._store.state.effective_values(self._committed)

    def merged_values(self) -> Dict[str, Any]:
        """Effective values overridden by calculated values."""
        merged = self.effective_values()
        calculated = self.calculated
        if isinstance(calculated, MappingABC):
            merged.update(calculated)
        return merged
