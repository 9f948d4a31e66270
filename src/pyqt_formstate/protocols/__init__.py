"""
Protocol definitions.

Configuration hooks, the host value contract and ABC-based widget contracts.
"""

from .form_config import FormStateConfig, set_form_config, get_form_config
from .value_host import SetValueFn, DictValueHost
from .widget_protocols import ValueGettable, ValueSettable, ChangeSignalEmitter

__all__ = [
    "FormStateConfig",
    "set_form_config",
    "get_form_config",
    "SetValueFn",
    "DictValueHost",
    "ValueGettable",
    "ValueSettable",
    "ChangeSignalEmitter",
]
