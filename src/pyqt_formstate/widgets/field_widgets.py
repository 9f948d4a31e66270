"""
PyQt6 widgets bound to form fields.

Thin presentation over ``FieldHandle``:
- FieldLineEdit: typing stores a cached value, finishing the edit commits it
- FieldCheckBox: toggling commits directly
- FieldWidget: picks the input by value type and shows the field's error
"""

import logging
from abc import ABCMeta
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QCheckBox, QLabel, QLineEdit, QVBoxLayout, QWidget

from pyqt_formstate.forms.form_controller import FormController
from pyqt_formstate.forms.handles import FieldHandle
from pyqt_formstate.protocols.widget_protocols import (
    ChangeSignalEmitter, ValueGettable, ValueSettable,
)
from pyqt_formstate.services.signal_service import SignalService

logger = logging.getLogger(__name__)

_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


class FieldLineEdit(QLineEdit, ValueGettable, ValueSettable, ChangeSignalEmitter,
                    metaclass=PyQtWidgetMeta):
    """Text input. ``textEdited`` only fires for user edits, never for ``set_value``."""

    def get_value(self) -> Any:
        return self.text()

    def set_value(self, value: Any) -> None:
        text = "" if value is None else str(value)
        if text != self.text():
            with SignalService.block_signals(self):
                self.setText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.textEdited.connect(lambda text: callback(text))

    def connect_commit_signal(self, callback: Callable[[], None]) -> None:
        self.editingFinished.connect(callback)


class FieldCheckBox(QCheckBox, ValueGettable, ValueSettable, ChangeSignalEmitter,
                    metaclass=PyQtWidgetMeta):
    """Boolean input. Treats None as unchecked."""

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        checked = bool(value)
        if checked != self.isChecked():
            with SignalService.block_signals(self):
                self.setChecked(checked)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self.toggled.connect(lambda checked: callback(checked))


class FieldWidget(QWidget):
    """
    Input plus error label for one field.

    Holds a FieldHandle for its lifetime: the field is registered while the
    widget exists and unregistered by ``release()`` or when Qt destroys it.
    """

    def __init__(self, controller: FormController, field_name: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._controller = controller
        self._handle: FieldHandle = controller.field(field_name)

        if isinstance(self._handle.value, str):
            self.input = FieldLineEdit(self)
            self.input.connect_change_signal(self._handle.set_cached_value)
            self.input.connect_commit_signal(self._on_commit)
        else:
            self.input = FieldCheckBox(self)
            self.input.connect_change_signal(self._handle.set_value)

        self.error_label = QLabel(self)
        self.error_label.setObjectName(f"{field_name}_error")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.input)
        layout.addWidget(self.error_label)

        controller.state_changed.connect(self.refresh)
        controller.values_changed.connect(self.refresh)
        handle = self._handle
        self.destroyed.connect(lambda *_args: handle.close())

        self.refresh()

    @property
    def field_name(self) -> str:
        return self._handle.name

    @property
    def handle(self) -> FieldHandle:
        return self._handle

    def refresh(self, *_args) -> None:
        """Pull value and error from the controller."""
        if self._handle.is_closed or self._controller.is_closed:
            return
        self.input.set_value(self._handle.value)
        self.error_label.setText(self._handle.error or "")
        self.error_label.setVisible(bool(self._handle.error))

    def release(self) -> None:
        """Unregister the field and stop following the controller."""
        if self._handle.is_closed:
            return
        self._handle.close()
        for signal in (self._controller.state_changed, self._controller.values_changed):
            try:
                signal.disconnect(self.refresh)
            except TypeError:
                # Already disconnected
                pass

    def _on_commit(self) -> None:
        if not self._handle.is_closed:
            self._handle.commit_value()
