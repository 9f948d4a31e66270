"""
Form controller tier.

The public façade, consumer handles and explicit controller lookup.
"""

from .form_controller import FormController
from .handles import FieldHandle, FormHandle, RenderProps
from .context import provide, get_active_controller, has_active_controller, use_field, use_form

__all__ = [
    "FormController",
    "FieldHandle",
    "FormHandle",
    "RenderProps",
    "provide",
    "get_active_controller",
    "has_active_controller",
    "use_field",
    "use_form",
]
