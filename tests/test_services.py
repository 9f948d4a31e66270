"""Tests for the validation engine, its scheduler and the effect cascade."""

import logging

import pytest

from pyqt_formstate.core import EffectError
from pyqt_formstate.protocols import FormStateConfig
from pyqt_formstate.services import (
    EffectCascade,
    FieldChangeDispatcher,
    FieldChangeEvent,
    FlagContextManager,
    ValidationScheduler,
    ValidationService,
)
from pyqt_formstate.state import FieldRegistry, FormStateReducer, FormStore, ValueStore
from pyqt_formstate.state.field_meta import FieldMetaInfo, build_meta_table


@pytest.fixture
def store():
    return FormStore(FormStateReducer())


# ========== VALIDATION SERVICE ==========

@pytest.mark.parametrize("result, expected", [
    (None, None),
    (True, None),
    ("", None),
    (False, "Invalid value"),
    ("Too short", "Too short"),
])
def test_normalize_result(result, expected):
    """Only False and non-empty strings become errors."""
    assert ValidationService().normalize_result(result) == expected


def test_default_error_message_is_configurable():
    service = ValidationService(FormStateConfig(default_error_message="Nope"))
    assert service.normalize_result(False) == "Nope"


def test_compute_errors_only_for_visible_fields(store):
    """Invisible fields never get errors, even when invalid."""
    metadata = build_meta_table({
        "first_name": {"validate": lambda value, values, extra: len(value) > 2},
        "last_name": {"validate": lambda value, values, extra: "Required" if not value else None},
    })
    values = ValueStore(store, {"first_name": "pe", "last_name": ""}, lambda name, value: None)

    errors = ValidationService().compute_errors({"first_name"}, metadata, values, None)

    assert errors == {"first_name": "Invalid value"}


def test_compute_errors_uses_cached_and_calculated_values(store):
    """Validators see in-progress edits and calculated values."""
    seen = {}

    def validate_total(value, values, extra):
        seen.update(value=value, values=dict(values), extra=extra)
        return "Over budget" if values["total"] > extra["budget"] else None

    metadata = build_meta_table({"price": {"validate": validate_total}, "total": {}})
    values = ValueStore(store, {"price": 1, "total": 0}, lambda name, value: None)
    values.set_cached_value("price", 50)
    values.set_calculated({"total": 500})

    errors = ValidationService().compute_errors({"price"}, metadata, values, {"budget": 100})

    assert errors == {"price": "Over budget"}
    assert seen["value"] == 50
    assert seen["values"] == {"price": 50, "total": 500}
    assert seen["extra"] == {"budget": 100}


# ========== VALIDATION SCHEDULER ==========

def test_scheduler_runs_immediately_outside_batch(qapp):
    runs = []
    scheduler = ValidationScheduler(lambda: runs.append(1), FormStateConfig())

    scheduler.notify_inputs_changed()

    assert runs == [1]


def test_scheduler_batch_coalesces(qapp):
    """Nested batches validate once, when the outermost exits."""
    runs = []
    scheduler = ValidationScheduler(lambda: runs.append(1), FormStateConfig())

    with scheduler.batch():
        scheduler.notify_inputs_changed()
        with scheduler.batch():
            scheduler.notify_inputs_changed()
        assert runs == []
        scheduler.notify_inputs_changed()

    assert runs == [1]
    assert not scheduler.is_dirty


def test_scheduler_batch_exception_skips_run(qapp):
    """A failing operation does not validate; the pending run stays dirty."""
    runs = []
    scheduler = ValidationScheduler(lambda: runs.append(1), FormStateConfig())

    with pytest.raises(RuntimeError):
        with scheduler.batch():
            scheduler.notify_inputs_changed()
            raise RuntimeError("boom")

    assert runs == []
    assert scheduler.is_dirty


def test_scheduler_skips_during_initial_load(qapp):
    runs = []
    scheduler = ValidationScheduler(lambda: runs.append(1), FormStateConfig())

    with scheduler.initial_load():
        scheduler.notify_inputs_changed()
    assert runs == []

    scheduler.notify_inputs_changed()
    assert runs == [1]


def test_scheduler_visibility_is_debounced(qapp):
    runs = []
    scheduler = ValidationScheduler(lambda: runs.append(1), FormStateConfig(validation_debounce_ms=1000))

    for _ in range(5):
        scheduler.notify_visibility_changed()

    assert runs == []
    assert scheduler.is_pending
    assert scheduler.flush() is True
    assert runs == [1]

    scheduler.notify_visibility_changed()
    scheduler.cancel()
    assert not scheduler.is_pending


def test_flag_context_manager_rejects_unknown_flags():
    class Owner:
        _in_batch = False

    with pytest.raises(ValueError):
        with FlagContextManager.manage_flags(Owner(), _in_reset=True):
            pass


# ========== EFFECT CASCADE ==========

def test_cascade_collects_one_level():
    """Cascaded events are tagged and never expanded again."""
    metadata = build_meta_table({
        "a": {"effects": {"b": lambda value: value * 2}},
        "b": {"effects": {"c": lambda value: value + 1}},
        "c": {},
    })
    cascade = EffectCascade(metadata)

    cascaded = cascade.collect(FieldChangeEvent("a", 5))

    assert cascaded == [FieldChangeEvent("b", 10, is_cascade=True, source_field="a")]
    assert cascade.collect(cascaded[0]) == []


def test_cascade_warns_about_chains(caplog):
    metadata = build_meta_table({
        "a": {"effects": {"b": lambda value: value}},
        "b": {"effects": {"c": lambda value: value}},
        "c": {},
    })
    with caplog.at_level(logging.WARNING, logger="pyqt_formstate.services.effect_cascade"):
        cascade = EffectCascade(metadata)

    assert cascade.chained_effects() == [("a", "b")]
    assert "declares its own effects" in caplog.text


def test_cascade_wraps_effect_failures():
    def explode(value):
        raise ValueError("boom")

    cascade = EffectCascade(build_meta_table({"a": {"effects": {"b": explode}}, "b": {}}))

    with pytest.raises(EffectError) as info:
        cascade.collect(FieldChangeEvent("a", 1))

    assert info.value.source_field == "a"
    assert info.value.target_field == "b"
    assert isinstance(info.value.__cause__, ValueError)


def test_field_meta_accepts_dicts_and_instances():
    validate = lambda value, values, extra: True
    table = build_meta_table({"a": {"validate": validate}, "b": FieldMetaInfo(), "c": None})

    assert table["a"].validate is validate
    assert table["b"].effects == {}
    assert table["c"] == FieldMetaInfo()

    with pytest.raises(TypeError):
        build_meta_table({"a": {"validator": validate}})


# ========== DISPATCHER ==========

def test_dispatcher_commit_path(store):
    """A commit goes to the host, touches the field and drops its cached override."""
    writes = []
    registry = FieldRegistry(store)
    values = ValueStore(store, {"a": 1}, lambda name, value: writes.append((name, value)))
    dispatcher = FieldChangeDispatcher(registry, values)
    heard = []
    dispatcher.add_listener(heard.append)

    values.set_cached_value("a", 7)
    dispatcher.dispatch(FieldChangeEvent("a", 7))

    assert writes == [("a", 7)]
    assert registry.is_touched("a")
    assert not values.has_cached_value("a")
    assert heard == [FieldChangeEvent("a", 7)]


def test_cascade_is_timed(caplog):
    cascade = EffectCascade(build_meta_table({"a": {"effects": {"b": lambda value: value}}, "b": {}}))

    with caplog.at_level(logging.DEBUG, logger="pyqt_formstate.performance"):
        cascade.collect(FieldChangeEvent("a", 1))

    assert "Effect cascade:" in caplog.text


def test_debounced_pass_clears_leftover_dirty_flag(qapp):
    """After a full visibility pass, a later quiet batch does not validate again."""
    runs = []
    scheduler = ValidationScheduler(lambda: runs.append(1), FormStateConfig(validation_debounce_ms=1000))

    with pytest.raises(RuntimeError):
        with scheduler.batch():
            scheduler.notify_inputs_changed()
            raise RuntimeError("boom")
    scheduler.notify_visibility_changed()

    assert scheduler.flush() is True
    assert runs == [1]
    assert not scheduler.is_dirty

    with scheduler.batch():
        pass

    assert runs == [1]
