"""
Field-bound PyQt6 widgets.

Optional presentation tier; the engine never imports it.
"""

from .field_widgets import FieldWidget, FieldLineEdit, FieldCheckBox, PyQtWidgetMeta

__all__ = [
    "FieldWidget",
    "FieldLineEdit",
    "FieldCheckBox",
    "PyQtWidgetMeta",
]
