"""
Validation timing policy.

Two independent triggers converge on one "validate the visible set" callable:

1. Reactive: committed, cached, calculated or extra values changed. Runs
   synchronously, once per outermost ``batch()``; suppressed while the owner
   is still loading (no validation flash before any interaction).
2. Visibility: the visible set changed. Debounced through a single-slot
   ``DebounceTimer`` so a burst of register/unregister calls yields one pass.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Optional

from pyqt_formstate.core.debounce_timer import DebounceTimer
from pyqt_formstate.protocols.form_config import FormStateConfig, get_form_config

from .flag_context_manager import FlagContextManager, ManagerFlag

logger = logging.getLogger(__name__)


class ValidationScheduler:
    """Dirty-flag + debounce scheduling for one controller."""

    def __init__(self, run_validation: Callable[[], None], config: Optional[FormStateConfig] = None):
        self._run_validation = run_validation
        self._config = config or get_form_config()
        self._debounce = DebounceTimer(self._config.validation_debounce_ms, self._on_debounce_timeout)

        # Flags managed by FlagContextManager
        self._in_batch = False
        self._initial_load_complete = True

        self._dirty = False

    @property
    def is_pending(self) -> bool:
        """True while a debounced visibility validation is waiting."""
        return self._debounce.is_pending

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @contextmanager
    def initial_load(self):
        """Suppress reactive triggers while the owner is being constructed."""
        with FlagContextManager.initial_load_context(self):
            yield

    @contextmanager
    def batch(self):
        """Coalesce reactive triggers; validate once when the outermost batch exits.

        On exception the pending run is skipped and stays dirty for the next trigger.
        """
        outermost = not FlagContextManager.is_flag_set(self, ManagerFlag.IN_BATCH)
        with FlagContextManager.manage_flags(self, _in_batch=True):
            yield
        if outermost and self._dirty:
            self._dirty = False
            self._run_validation()

    def notify_inputs_changed(self) -> None:
        if not FlagContextManager.is_flag_set(self, ManagerFlag.INITIAL_LOAD_COMPLETE):
            if self._config.skip_initial_validation:
                logger.debug("Skipping reactive validation during initial load")
                return
        if FlagContextManager.is_flag_set(self, ManagerFlag.IN_BATCH):
            self._dirty = True
            return
        self._dirty = False
        self._run_validation()

    def notify_visibility_changed(self) -> None:
        self._debounce.trigger()

    def flush(self) -> bool:
        """Run a pending debounced validation immediately. Returns True if one ran."""
        return self._debounce.flush()

    def cancel(self) -> None:
        self._debounce.cancel()
        self._dirty = False

    def _on_debounce_timeout(self) -> None:
        logger.debug(f"Visibility debounce elapsed ({self._debounce.delay_ms}ms)")
        # A full pass covers any reactive run left over from a failed batch
        self._dirty = False
        self._run_validation()
