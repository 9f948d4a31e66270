"""
Field change dispatcher.

Centralizes the committed-write path. Every commit, primary or cascaded, is a
``FieldChangeEvent`` and goes through ``dispatch`` in the same order:

1. ask the host to commit the value
2. mark the field touched
3. drop the field's cached override
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from pyqt_formstate.state.field_registry import FieldRegistry
from pyqt_formstate.state.value_store import ValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldChangeEvent:
    """Immutable event representing a committed field write."""
    field_name: str                     # Field being written
    value: Any                          # New committed value
    is_cascade: bool = False            # Written by an effect; never expands further
    source_field: Optional[str] = None  # Field whose effect produced this write


class FieldChangeDispatcher:
    """Per-controller dispatcher for committed writes."""

    def __init__(self, registry: FieldRegistry, values: ValueStore):
        self._registry = registry
        self._values = values
        self._listeners: List[Callable[[FieldChangeEvent], None]] = []

    def add_listener(self, listener: Callable[[FieldChangeEvent], None]) -> None:
        self._listeners.append(listener)

    def dispatch(self, event: FieldChangeEvent) -> None:
        tag = f" [from {event.source_field}]" if event.is_cascade else ""
        logger.debug(f"DISPATCH{tag}: {event.field_name} = {repr(event.value)[:50]}")

        self._values.set_committed_value(event.field_name, event.value)
        self._registry.touch(event.field_name)
        self._values.unset_cached_value(event.field_name)

        for listener in self._listeners:
            listener(event)

    def dispatch_all(self, events: List[FieldChangeEvent]) -> None:
        for event in events:
            self.dispatch(event)
