"""
Widget ABC contracts for field-bound widgets.

Defines explicit contracts that every field widget implements, so the
presentation tier never duck-types Qt's inconsistent value APIs.

Design Philosophy:
- Explicit inheritance over duck typing
- Fail-loud over fail-silent
- Multiple inheritance for composable capabilities
"""

from abc import ABC, abstractmethod
from typing import Any, Callable


class ValueGettable(ABC):
    """
    ABC for widgets that can return a value.
    """

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the current value from the widget.

        Returns:
            The widget's current value.
        """
        pass


class ValueSettable(ABC):
    """
    ABC for widgets that can accept a value.
    """

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Set the widget's displayed value without emitting change signals.

        Args:
            value: The value to display.
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for widgets that emit change signals.

    Provides an explicit contract for signal connection, eliminating duck typing
    of signal names (textEdited vs toggled).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Connect callback to widget's change signal.

        The callback receives the new value whenever the user changes it.
        """
        pass
