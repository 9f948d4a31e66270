"""Host-side contract for committed values.

The host application is the single source of truth for committed values.
The engine reads them and requests changes through ``set_value``; it never
mutates the host's mapping in place.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from pyqt_formstate.forms.form_controller import FormController

logger = logging.getLogger(__name__)


class SetValueFn(Protocol):
    """Callback invoked whenever the engine commits a value."""

    def __call__(self, field_name: str, value: Any) -> None:
        ...


class DictValueHost:
    """
    Minimal host owning committed values in a dict.

    Writes are applied to the dict and pushed straight back to the bound
    controller, which mirrors a host that re-renders synchronously.

    Example:
        host = DictValueHost({"first_name": "pe", "vip_flag": False})
        controller = FormController(meta, host.values, host.set_value)
        host.bind(controller)
    """

    def __init__(self, initial_values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(initial_values or {})
        self._controller: Optional['FormController'] = None
        self.write_log: list = []

    @property
    def values(self) -> Dict[str, Any]:
        """Copy of the committed values."""
        return dict(self._values)

    def bind(self, controller: 'FormController') -> None:
        self._controller = controller

    def set_value(self, field_name: str, value: Any) -> None:
        logger.debug(f"Host commit: {field_name} = {value!r}")
        self._values[field_name] = value
        self.write_log.append((field_name, value))
        if self._controller is not None:
            self._controller.set_values(self._values)
