"""
Reducer for form state transitions with auto-discovered handlers.

Each action class has one handler named ``_reduce_<ActionClassName>``. Handlers
are discovered at construction, so adding an action means adding a handler;
an action without one raises ``UnreachableActionError``.

Pattern:
    reducer = FormStateReducer()
    state = reducer.reduce(state, Register("first_name"))
"""

import logging
from dataclasses import replace
from typing import Callable, Dict

from pyqt_formstate.core.exceptions import UnreachableActionError
from pyqt_formstate.protocols.form_config import FormStateConfig, get_form_config

from .actions import (
    ACTION_TYPES,
    FormAction,
    Register,
    SetCachedValue,
    SetErrors,
    TouchField,
    UnsetCachedValue,
    Unregister,
    UpdateCalculatedValues,
)
from .form_state import FormLocalState

logger = logging.getLogger(__name__)


class FormStateReducer:
    """Pure state transitions: ``(state, action) -> new state``."""

    HANDLER_PREFIX = '_reduce_'

    def __init__(self, config: FormStateConfig = None):
        self._config = config
        self._handlers: Dict[str, Callable] = {}

        for attr_name in dir(self):
            if attr_name.startswith(self.HANDLER_PREFIX):
                handler = getattr(self, attr_name)
                if callable(handler):
                    self._handlers[attr_name[len(self.HANDLER_PREFIX):]] = handler

        missing = [t.__name__ for t in ACTION_TYPES if t.__name__ not in self._handlers]
        if missing:
            raise UnreachableActionError(missing, "Actions without reducer handlers")

        logger.debug(f"{type(self).__name__} handlers: {sorted(self._handlers)}")

    @property
    def config(self) -> FormStateConfig:
        return self._config or get_form_config()

    def reduce(self, state: FormLocalState, action: FormAction) -> FormLocalState:
        handler = self._handlers.get(type(action).__name__)
        if handler is None:
            logger.error(f"No reducer handler for {type(action).__name__}")
            raise UnreachableActionError(action, "Not all actions checked")

        new_state = handler(state, action)

        if self.config.log_actions:
            logger.debug(f"action {type(action).__name__}")
            logger.debug(f"  prev state {state}")
            logger.debug(f"  action {action}")
            logger.debug(f"  next state {new_state}")

        return new_state

    def _reduce_Register(self, state: FormLocalState, action: Register) -> FormLocalState:
        if action.field in state.visible:
            return state
        return replace(state, visible=state.visible | {action.field})

    def _reduce_Unregister(self, state: FormLocalState, action: Unregister) -> FormLocalState:
        if action.field not in state.visible and action.field not in state.errors:
            return state
        errors = dict(state.errors)
        errors.pop(action.field, None)
        return replace(state, visible=state.visible - {action.field}, errors=errors)

    def _reduce_SetErrors(self, state: FormLocalState, action: SetErrors) -> FormLocalState:
        return replace(state, errors=dict(action.errors))

    def _reduce_TouchField(self, state: FormLocalState, action: TouchField) -> FormLocalState:
        if action.field in state.touched:
            return state
        return replace(state, touched=state.touched | {action.field})

    def _reduce_SetCachedValue(self, state: FormLocalState, action: SetCachedValue) -> FormLocalState:
        return replace(state, cached_values={**state.cached_values, action.field: action.value})

    def _reduce_UnsetCachedValue(self, state: FormLocalState, action: UnsetCachedValue) -> FormLocalState:
        if action.field not in state.cached_values:
            return state
        cached_values = dict(state.cached_values)
        del cached_values[action.field]
        return replace(state, cached_values=cached_values)

    def _reduce_UpdateCalculatedValues(self, state: FormLocalState, action: UpdateCalculatedValues) -> FormLocalState:
        return replace(state, calculated_values=action.values)
