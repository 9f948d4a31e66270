"""Consumer-facing handles onto a ``FormController``."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Optional

if TYPE_CHECKING:
    from .form_controller import FormController

logger = logging.getLogger(__name__)


class FieldHandle:
    """
    Read/write handle for one field.

    Creating it registers the field; ``close()`` (or leaving the ``with``
    block) unregisters it. Reads are live, never cached on the handle.

    Example:
        with controller.field("first_name") as first_name:
            first_name.set_cached_value("pet")
            first_name.commit_value()
    """

    def __init__(self, controller: 'FormController', field_name: str):
        self._controller = controller
        self.name = field_name
        self._closed = False
        controller.register(field_name)

    @property
    def value(self) -> Any:
        """Effective value: cached override if present, else committed."""
        return self._controller.value(self.name)

    @property
    def error(self) -> Optional[str]:
        return self._controller.error(self.name)

    @property
    def is_touched(self) -> bool:
        return self._controller.is_touched(self.name)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def set_value(self, value: Any) -> None:
        self._controller.set_field_value(self.name, value)

    def set_cached_value(self, value: Any) -> None:
        self._controller.set_cached_field_value(self.name, value)

    def commit_value(self) -> None:
        self._controller.commit_field_value(self.name)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self._controller.is_closed:
            self._controller.unregister(self.name)

    def __enter__(self) -> 'FieldHandle':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FieldHandle({self.name!r}, closed={self._closed})"


@dataclass(frozen=True)
class RenderProps:
    """Bundle handed to render-style content callables."""
    values: Dict[str, Any]
    calculated_values: Any
    extra_values: Any
    errors: Dict[str, str]
    process_submit: Callable[[], Any]


@dataclass(frozen=True)
class FormHandle:
    """Snapshot of the whole form plus its bound operations.

    Data fields are copies taken when the handle was built; the operations
    act on the live controller.
    """
    values: Dict[str, Any]
    cached_values: Dict[str, Any]
    errors: Dict[str, str]
    touched: FrozenSet[str]
    visible: FrozenSet[str]
    calculated_values: Any
    extra_values: Any
    register: Callable[[str], None]
    unregister: Callable[[str], None]
    set_field_value: Callable[..., None]
    set_cached_field_value: Callable[[str, Any], None]
    commit_field_value: Callable[[str], None]
    process_submit: Callable[[], Any]
