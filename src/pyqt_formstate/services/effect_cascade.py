"""
Effect Cascade.

When a field is committed through a primary write, each configured effect
computes a dependent field's value. The resulting writes are cascaded: they
go through the same commit path but are never expanded again, so propagation
is exactly one level deep and cannot cycle.

All effect functions run before anything is written. A raising effect fails
the whole commit with ``EffectError`` and leaves the form untouched.
"""

import logging
from typing import Any, List

from pyqt_formstate.core.exceptions import EffectError
from pyqt_formstate.core.performance_monitor import timed
from pyqt_formstate.state.field_meta import FieldMetaTable

from .field_change_dispatcher import FieldChangeEvent

logger = logging.getLogger(__name__)


class EffectCascade:
    """Single-level effect propagation over a metadata table."""

    def __init__(self, metadata: FieldMetaTable):
        self._metadata = metadata
        for source, target in self.chained_effects():
            logger.warning(
                f"Effect target {target!r} (from {source!r}) declares its own effects; "
                f"they only run when {target!r} is committed directly"
            )

    def chained_effects(self) -> List[tuple]:
        """(source, target) pairs whose target declares effects of its own."""
        return [
            (source, target)
            for source, meta in self._metadata.items()
            for target in meta.effects
            if self._metadata[target].effects
        ]

    @timed("Effect cascade")
    def collect(self, event: FieldChangeEvent) -> List[FieldChangeEvent]:
        """Cascaded writes triggered by a primary event (none for cascaded events)."""
        if event.is_cascade:
            return []

        effects = self._metadata[event.field_name].effects
        cascaded = []
        for target, effect in effects.items():
            try:
                derived: Any = effect(event.value)
            except Exception as exc:
                logger.error(f"Effect {event.field_name!r} -> {target!r} raised {exc!r}")
                raise EffectError(event.field_name, target, exc) from exc
            cascaded.append(FieldChangeEvent(target, derived, is_cascade=True, source_field=event.field_name))

        if cascaded:
            logger.debug(f"Effects of {event.field_name!r}: {[e.field_name for e in cascaded]}")
        return cascaded
