"""Form Controller - public façade of the form state engine.

Composes the Field Registry, Value Store, Validation Engine and Effect
Cascade for one form mount, and owns the validation timing policy:

- reactive: any change to committed, cached, calculated or extra values
  revalidates synchronously once the current operation finishes
- debounced: changes to the visible field set revalidate after
  ``FormStateConfig.validation_debounce_ms`` of quiescence

Committed values belong to the host. The controller reads the snapshot it was
given (or last received through ``set_values``) and requests changes through
the host's ``set_value`` callback.
"""

import logging
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_formstate.core.exceptions import MissingControllerError, UnknownFieldError
from pyqt_formstate.protocols.form_config import FormStateConfig, get_form_config
from pyqt_formstate.services import (
    EffectCascade,
    FieldChangeDispatcher,
    FieldChangeEvent,
    ValidationScheduler,
    ValidationService,
)
from pyqt_formstate.state import (
    FieldRegistry,
    FormAction,
    FormLocalState,
    FormStateReducer,
    FormStore,
    Register,
    SetCachedValue,
    SetErrors,
    Unregister,
    UnsetCachedValue,
    UpdateCalculatedValues,
    ValueStore,
)
from pyqt_formstate.state.field_meta import FieldMetaTable, build_meta_table

from . import context
from .handles import FieldHandle, FormHandle, RenderProps

logger = logging.getLogger(__name__)

# Actions whose effect feeds validation directly
_VALIDATION_INPUT_ACTIONS = (SetCachedValue, UnsetCachedValue, UpdateCalculatedValues)
_VISIBILITY_ACTIONS = (Register, Unregister)


class FormController(QObject):
    """
    One form's state engine.

    Args:
        metadata: Field name -> FieldMetaInfo (or ``{"validate", "effects"}`` dict).
            Its keys are the form's fixed field set.
        values: Current committed values (host-owned snapshot)
        set_value: Host callback ``set_value(field_name, value)``
        extra_values: Opaque context passed to validators and ``calculate``
        calculate: ``calculate(values, extra_values)`` -> calculated values
        submit_form: ``submit_form(values)`` called by ``process_submit``
        config: Optional FormStateConfig (defaults to the global config)

    Example:
        host = DictValueHost({"first_name": "pe", "vip_flag": False})
        controller = FormController(
            {"first_name": {"validate": lambda v, *_: len(v) > 2},
             "vip_flag": {"effects": {"first_name": lambda v: ""}}},
            host.values, host.set_value,
        )
        host.bind(controller)
    """

    state_changed = pyqtSignal(object)   # FormAction that changed local state
    values_changed = pyqtSignal(object)  # dict of committed values pushed by the host
    errors_changed = pyqtSignal(object)  # dict of errors, only when it differs
    validated = pyqtSignal(object)       # dict of errors after every validation pass
    submitted = pyqtSignal(object)       # dict handed to submit_form

    def __init__(
        self,
        metadata: Mapping[str, Any],
        values: Mapping[str, Any],
        set_value: Callable[[str, Any], None],
        extra_values: Any = None,
        calculate: Optional[Callable[[Mapping[str, Any], Any], Any]] = None,
        submit_form: Optional[Callable[[Dict[str, Any]], Any]] = None,
        config: Optional[FormStateConfig] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._config = config or get_form_config()
        self._metadata: FieldMetaTable = build_meta_table(metadata)
        self._extra_values = extra_values
        self._calculate = calculate
        self._submit_form = submit_form
        self._closed = False
        self._submit_writes: Optional[Dict[str, Any]] = None
        self.validation_count = 0

        self._store = FormStore(FormStateReducer(self._config))
        self._registry = FieldRegistry(self._store)
        self._values = ValueStore(self._store, values, set_value)
        self._validation = ValidationService(self._config)
        self._scheduler = ValidationScheduler(self._run_validation, self._config)
        self._cascade = EffectCascade(self._metadata)
        self._dispatcher = FieldChangeDispatcher(self._registry, self._values)
        self._dispatcher.add_listener(self._on_field_committed)
        self._store.subscribe(self._on_transition)

        with self._scheduler.initial_load():
            self._recompute_calculated_values()

        logger.debug(f"FormController created for fields {list(self._metadata)}")

    # ==================== HOST INPUTS ====================

    def set_values(self, values: Mapping[str, Any]) -> None:
        """Receive a new committed-values snapshot from the host."""
        self._ensure_open()
        with self._scheduler.batch():
            if not self._values.observe_committed(values):
                return
            self._recompute_calculated_values()
            self._scheduler.notify_inputs_changed()
        self.values_changed.emit(dict(self._values.committed))

    def set_extra_values(self, extra_values: Any) -> None:
        """Receive new context data from the host.

        Changes are detected by identity, so context objects never need a
        usable ``__eq__``; pass a new object to signal a change.
        """
        self._ensure_open()
        if extra_values is self._extra_values:
            return
        self._extra_values = extra_values
        with self._scheduler.batch():
            self._recompute_calculated_values()
            self._scheduler.notify_inputs_changed()

    # ==================== FIELD REGISTRY ====================

    def register(self, field_name: str) -> None:
        self._ensure_open()
        self._check_field(field_name)
        with self._scheduler.batch():
            self._registry.register(field_name)

    def unregister(self, field_name: str) -> None:
        self._ensure_open()
        self._check_field(field_name)
        with self._scheduler.batch():
            self._registry.unregister(field_name)

    # ==================== WRITES ====================

    def set_field_value(self, field_name: str, value: Any, run_effects: bool = True) -> None:
        """Commit a value, then apply one level of effects when ``run_effects``.

        Effects are evaluated before anything is written; an ``EffectError``
        leaves the form exactly as it was.
        """
        self._ensure_open()
        self._check_field(field_name)

        event = FieldChangeEvent(field_name, value)
        events = [event]
        if run_effects:
            events.extend(self._cascade.collect(event))

        with self._scheduler.batch():
            self._dispatcher.dispatch_all(events)

    def set_cached_field_value(self, field_name: str, value: Any) -> None:
        """Store an uncommitted override; committed values and touched are left alone."""
        self._ensure_open()
        self._check_field(field_name)
        with self._scheduler.batch():
            self._values.set_cached_value(field_name, value)

    def commit_field_value(self, field_name: str) -> None:
        """Promote a cached override to a committed write, or just mark the field touched."""
        self._ensure_open()
        self._check_field(field_name)
        if self._values.has_cached_value(field_name):
            self.set_field_value(field_name, self._values.cached[field_name])
            return
        with self._scheduler.batch():
            self._registry.touch(field_name)

    def process_submit(self) -> Any:
        """Commit every cached override, then hand the committed values to ``submit_form``.

        Overrides are taken as a snapshot and committed in insertion order, each
        running its effects. A pending edit always wins over an effect write
        made earlier in the same submit.
        Returns whatever ``submit_form`` returns; no-op without a callback.
        """
        self._ensure_open()
        if self._submit_form is None:
            logger.debug("process_submit: no submit callback, nothing to do")
            return None

        pending = dict(self._values.cached)
        writes: Dict[str, Any] = {}
        self._submit_writes = writes
        try:
            with self._scheduler.batch():
                for field_name, value in pending.items():
                    self.set_field_value(field_name, value)
        finally:
            self._submit_writes = None

        submitted = {**self._values.committed, **writes}
        logger.info(f"Submitting form: {len(writes)} pending edit(s) committed, {len(submitted)} value(s)")
        result = self._submit_form(submitted)
        self.submitted.emit(submitted)
        return result

    # ==================== VALIDATION ====================

    def validate(self) -> Dict[str, str]:
        """Run a full validation pass now and return the new error map."""
        self._ensure_open()
        self._run_validation()
        return dict(self._store.state.errors)

    def flush_pending_validation(self) -> bool:
        """Run a pending debounced validation immediately. Returns True if one ran."""
        self._ensure_open()
        return self._scheduler.flush()

    @property
    def has_pending_validation(self) -> bool:
        return self._scheduler.is_pending

    # ==================== READS ====================

    def value(self, field_name: str) -> Any:
        """Effective value: cached override if present, else committed."""
        self._ensure_open()
        self._check_field(field_name)
        return self._values.effective_value(field_name)

    def error(self, field_name: str) -> Optional[str]:
        self._ensure_open()
        self._check_field(field_name)
        return self._store.state.errors.get(field_name)

    def is_touched(self, field_name: str) -> bool:
        self._ensure_open()
        self._check_field(field_name)
        return self._registry.is_touched(field_name)

    def is_visible(self, field_name: str) -> bool:
        self._ensure_open()
        self._check_field(field_name)
        return self._registry.is_visible(field_name)

    @property
    def fields(self) -> tuple:
        return tuple(self._metadata)

    @property
    def state(self) -> FormLocalState:
        return self._store.state

    @property
    def committed_values(self) -> Dict[str, Any]:
        return dict(self._values.committed)

    @property
    def cached_values(self) -> Dict[str, Any]:
        return dict(self._values.cached)

    @property
    def effective_values(self) -> Dict[str, Any]:
        return self._values.effective_values()

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._store.state.errors)

    @property
    def touched(self) -> FrozenSet[str]:
        return self._registry.touched

    @property
    def visible(self) -> FrozenSet[str]:
        return self._registry.visible

    @property
    def calculated_values(self) -> Any:
        return self._values.calculated

    @property
    def extra_values(self) -> Any:
        return self._extra_values

    # ==================== HANDLES ====================

    def field(self, field_name: str) -> FieldHandle:
        """Field handle; registers the field until the handle is closed."""
        self._ensure_open()
        return FieldHandle(self, field_name)

    def form_handle(self) -> FormHandle:
        self._ensure_open()
        return FormHandle(
            values=self.committed_values,
            cached_values=self.cached_values,
            errors=self.errors,
            touched=self.touched,
            visible=self.visible,
            calculated_values=self.calculated_values,
            extra_values=self.extra_values,
            register=self.register,
            unregister=self.unregister,
            set_field_value=self.set_field_value,
            set_cached_field_value=self.set_cached_field_value,
            commit_field_value=self.commit_field_value,
            process_submit=self.process_submit,
        )

    def render_props(self) -> RenderProps:
        self._ensure_open()
        return RenderProps(
            values=self.committed_values,
            calculated_values=self.calculated_values,
            extra_values=self.extra_values,
            errors=self.errors,
            process_submit=self.process_submit,
        )

    def render(self, content: Any) -> Any:
        """Call render-style ``content`` with RenderProps, or return static content."""
        if callable(content):
            return content(self.render_props())
        return content

    def provide(self):
        """Context manager making this the active controller for ``use_field``/``use_form``."""
        self._ensure_open()
        return context.provide(self)

    # ==================== LIFECYCLE ====================

    @property
    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down: cancel pending validation; further use fails loudly."""
        if self._closed:
            return
        self._scheduler.cancel()
        self._closed = True
        logger.debug(f"FormController closed (fields {list(self._metadata)})")

    # ==================== INTERNALS ====================

    def _ensure_open(self) -> None:
        if self._closed:
            raise MissingControllerError("Form controller has been closed; no active controller")

    def _check_field(self, field_name: str) -> None:
        if field_name not in self._metadata:
            raise UnknownFieldError(field_name, self._metadata)

    def _recompute_calculated_values(self) -> None:
        if self._calculate is None:
            return
        self._values.set_calculated(self._calculate(dict(self._values.committed), self._extra_values))

    def _run_validation(self) -> None:
        if self._closed:
            return
        errors = self._validation.compute_errors(
            self._registry.visible, self._metadata, self._values, self._extra_values
        )
        self.validation_count += 1
        self._store.dispatch(SetErrors(errors))
        self.validated.emit(dict(errors))

    def _on_field_committed(self, event: FieldChangeEvent) -> None:
        if self._submit_writes is not None:
            self._submit_writes[event.field_name] = event.value

    def _on_transition(self, action: FormAction, prev: FormLocalState, new: FormLocalState) -> None:
        self.state_changed.emit(action)

        if prev.errors != new.errors:
            self.errors_changed.emit(dict(new.errors))

        if isinstance(action, _VISIBILITY_ACTIONS) and prev.visible != new.visible:
            self._scheduler.notify_visibility_changed()
        elif isinstance(action, _VALIDATION_INPUT_ACTIONS):
            self._scheduler.notify_inputs_changed()
