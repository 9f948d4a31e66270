"""Single state-transition entry point for one controller."""

import logging
from typing import Callable, Optional

from .actions import FormAction
from .form_state import FormLocalState
from .reducer import FormStateReducer

logger = logging.getLogger(__name__)

TransitionListener = Callable[[FormAction, FormLocalState, FormLocalState], None]


class FormStore:
    """
    Holds the current ``FormLocalState`` and serializes all mutations.

    Every change goes through ``dispatch``. Transitions that leave the state
    unchanged (the reducer returned the same snapshot) are not announced.
    """

    def __init__(self, reducer: FormStateReducer, initial_state: Optional[FormLocalState] = None):
        self._reducer = reducer
        self._state = initial_state or FormLocalState()
        self._listeners: list = []

    @property
    def state(self) -> FormLocalState:
        return self._state

    def subscribe(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    def dispatch(self, action: FormAction) -> bool:
        """Apply an action. Returns True when the state actually changed."""
        prev = self._state
        new = self._reducer.reduce(prev, action)
        if new is prev:
            return False

        self._state = new
        for listener in self._listeners:
            listener(action, prev, new)
        return True
