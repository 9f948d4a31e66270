"""Field Registry: which fields are mounted and which were interacted with."""

from typing import FrozenSet

from .actions import Register, TouchField, Unregister
from .store import FormStore


class FieldRegistry:
    """
    Visibility and touched bookkeeping on top of a ``FormStore``.

    ``register``/``unregister`` are idempotent. Touched is write-once: nothing
    here can clear it.
    """

    def __init__(self, store: FormStore):
        self._store = store

    @property
    def visible(self) -> FrozenSet[str]:
        return self._store.state.visible

    @property
    def touched(self) -> FrozenSet[str]:
        return self._store.state.touched

    def register(self, field_name: str) -> bool:
        return self._store.dispatch(Register(field_name))

    def unregister(self, field_name: str) -> bool:
        return self._store.dispatch(Unregister(field_name))

    def touch(self, field_name: str) -> bool:
        return self._store.dispatch(TouchField(field_name))

    def is_visible(self, field_name: str) -> bool:
        return field_name in self._store.state.visible

    def is_touched(self, field_name: str) -> bool:
        return field_name in self._store.state.touched
