"""
Context manager factory for boolean flag management.

Pattern:
    Instead of:
        self._in_batch = True
        try:
            # ... logic
        finally:
            self._in_batch = False

    Use:
        with FlagContextManager.manage_flags(self, _in_batch=True):
            # ... logic

Previous values are restored on exit, so nested uses compose.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class ManagerFlag(Enum):
    """
    Registry of valid flags on controller-side objects.

    Add new flags here as they're introduced to the codebase.
    """
    IN_BATCH = '_in_batch'
    INITIAL_LOAD_COMPLETE = '_initial_load_complete'


class FlagContextManager:
    """Universal context manager for temporary boolean flags with save/restore."""

    VALID_FLAGS: Set[str] = {flag.value for flag in ManagerFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Set flags on entry and restore previous values on exit.

        Raises:
            ValueError: If any flag name is not in VALID_FLAGS registry
        """
        invalid_flags = set(flags.keys()) - FlagContextManager.VALID_FLAGS
        if invalid_flags:
            raise ValueError(
                f"Invalid flags: {invalid_flags}. "
                f"Valid flags: {FlagContextManager.VALID_FLAGS}. "
                f"Add new flags to ManagerFlag enum."
            )

        # No getattr default: flags must be initialized in __init__
        prev_values: Dict[str, bool] = {}
        for flag_name in flags:
            prev_values[flag_name] = getattr(obj, flag_name)

        for flag_name, flag_value in flags.items():
            setattr(obj, flag_name, flag_value)
            logger.debug(f"Setting flag {flag_name}={flag_value} on {type(obj).__name__}")

        try:
            yield
        finally:
            for flag_name, prev_value in prev_values.items():
                setattr(obj, flag_name, prev_value)

    @staticmethod
    @contextmanager
    def initial_load_context(obj: Any):
        """
        Sets _initial_load_complete=False during construction, then True on exit.

        Example:
            with FlagContextManager.initial_load_context(self):
                self._recompute_calculated_values()
            # _initial_load_complete is now True
        """
        getattr(obj, ManagerFlag.INITIAL_LOAD_COMPLETE.value)
        setattr(obj, ManagerFlag.INITIAL_LOAD_COMPLETE.value, False)

        try:
            yield
        finally:
            setattr(obj, ManagerFlag.INITIAL_LOAD_COMPLETE.value, True)

    @staticmethod
    def is_flag_set(obj: Any, flag: ManagerFlag) -> bool:
        return getattr(obj, flag.value)
