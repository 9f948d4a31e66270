"""
Explicit controller lookup for handle consumers.

A controller becomes "active" inside ``provide(controller)``; providers nest
and the innermost one wins. Consumers that are not handed a controller
directly resolve it with ``use_field``/``use_form``, which fail loudly when no
provider is active.
"""

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Tuple

from pyqt_formstate.core.exceptions import MissingControllerError

if TYPE_CHECKING:
    from .form_controller import FormController
    from .handles import FieldHandle, FormHandle

logger = logging.getLogger(__name__)

_active_controllers: contextvars.ContextVar[Tuple['FormController', ...]] = contextvars.ContextVar(
    '_active_controllers', default=()
)


@contextmanager
def provide(controller: 'FormController'):
    """Make ``controller`` the active controller for the enclosed block."""
    token = _active_controllers.set(_active_controllers.get() + (controller,))
    try:
        yield controller
    finally:
        _active_controllers.reset(token)


def get_active_controller() -> 'FormController':
    stack = _active_controllers.get()
    if not stack:
        raise MissingControllerError(
            "Couldn't find an active form controller. "
            "Wrap the consumer in `with controller.provide():`."
        )
    return stack[-1]


def has_active_controller() -> bool:
    return bool(_active_controllers.get())


def use_field(field_name: str) -> 'FieldHandle':
    """Field handle from the active controller; registers the field."""
    return get_active_controller().field(field_name)


def use_form() -> 'FormHandle':
    """Whole-form handle from the active controller."""
    return get_active_controller().form_handle()
