"""
pyqt-formstate: reusable form state engine for PyQt6.

Tracks which fields are mounted, what each field displays and whether it is
in error, and mediates how edits become committed values. The field set and
value types are parameters, so one engine serves differently-shaped forms.

Architecture:
- Tier 1 (Core): DebounceTimer, exceptions, timing helpers
- Tier 2 (Protocols): configuration, host value contract, widget ABCs
- Tier 3 (State): immutable local state, actions, reducer, registry, value store
- Tier 4 (Services): validation engine and timing, effect cascade, write dispatcher
- Tier 5 (Forms): FormController façade, field/form handles, controller lookup
- Tier 6 (Widgets): optional PyQt6 widgets bound to field handles

Key Features:
- Cached (uncommitted) edits with explicit commit
- Single-level effect cascades that cannot cycle
- Validation against in-progress edits, debounced on visibility bursts
- Calculated values derived from committed values only
"""

__version__ = "0.1.0"

from .core import (
    DebounceTimer,
    FormStateError,
    MissingControllerError,
    UnknownFieldError,
    UnreachableActionError,
    EffectError,
)
from .protocols import FormStateConfig, set_form_config, get_form_config, DictValueHost
from .state import FormLocalState
from .state.field_meta import FieldMetaInfo
from .forms import (
    FormController,
    FieldHandle,
    FormHandle,
    RenderProps,
    provide,
    use_field,
    use_form,
)

__all__ = [
    "__version__",
    "DebounceTimer",
    "FormStateError",
    "MissingControllerError",
    "UnknownFieldError",
    "UnreachableActionError",
    "EffectError",
    "FormStateConfig",
    "set_form_config",
    "get_form_config",
    "DictValueHost",
    "FormLocalState",
    "FieldMetaInfo",
    "FormController",
    "FieldHandle",
    "FormHandle",
    "RenderProps",
    "provide",
    "use_field",
    "use_form",
]
