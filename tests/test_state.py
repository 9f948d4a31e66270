"""Tests for the form state model: reducer, registry and value store."""

import logging

import pytest

from pyqt_formstate.core import UnreachableActionError
from pyqt_formstate.protocols import FormStateConfig
from pyqt_formstate.state import (
    FieldRegistry,
    FormLocalState,
    FormStateReducer,
    FormStore,
    Register,
    SetCachedValue,
    SetErrors,
    TouchField,
    Unregister,
    UnsetCachedValue,
    UpdateCalculatedValues,
    ValueStore,
)


@pytest.fixture
def reducer():
    return FormStateReducer()


@pytest.fixture
def store(reducer):
    return FormStore(reducer)


def test_register_is_idempotent(reducer):
    """Registering twice yields the same snapshot as registering once."""
    once = reducer.reduce(FormLocalState(), Register("first_name"))
    twice = reducer.reduce(once, Register("first_name"))

    assert once.visible == frozenset({"first_name"})
    assert twice is once


def test_unregister_clears_visibility_and_error(reducer):
    """Unregister removes the field and its error together."""
    state = reducer.reduce(FormLocalState(), Register("first_name"))
    state = reducer.reduce(state, SetErrors({"first_name": "Too short"}))

    state = reducer.reduce(state, Unregister("first_name"))

    assert "first_name" not in state.visible
    assert "first_name" not in state.errors


def test_unregister_absent_field_is_noop(reducer):
    """Unregistering a field that was never registered changes nothing."""
    state = FormLocalState()
    assert reducer.reduce(state, Unregister("first_name")) is state


def test_set_errors_replaces_wholesale(reducer):
    """A validation result replaces the previous map; nothing is merged."""
    state = reducer.reduce(FormLocalState(), SetErrors({"a": "bad", "b": "bad"}))
    state = reducer.reduce(state, SetErrors({"b": "still bad"}))
    assert state.errors == {"b": "still bad"}


def test_touch_is_write_once(reducer):
    """Touching an already touched field returns the same snapshot."""
    state = reducer.reduce(FormLocalState(), TouchField("vip_flag"))
    assert reducer.reduce(state, TouchField("vip_flag")) is state
    assert state.touched == frozenset({"vip_flag"})


def test_cached_values_set_and_unset(reducer):
    """Cached overrides are added and removed without touching other keys."""
    state = reducer.reduce(FormLocalState(), SetCachedValue("a", 1))
    state = reducer.reduce(state, SetCachedValue("b", 2))
    state = reducer.reduce(state, UnsetCachedValue("a"))

    assert state.cached_values == {"b": 2}
    assert reducer.reduce(state, UnsetCachedValue("a")) is state


def test_snapshots_are_not_mutated(reducer):
    """Transitions leave the previous snapshot intact."""
    before = reducer.reduce(FormLocalState(), SetCachedValue("a", 1))
    after = reducer.reduce(before, SetCachedValue("a", 2))

    assert before.cached_values == {"a": 1}
    assert after.cached_values == {"a": 2}


def test_calculated_values_replaced(reducer):
    """Calculated values are replaced, not merged."""
    state = reducer.reduce(FormLocalState(), UpdateCalculatedValues({"total": 1, "x": 1}))
    state = reducer.reduce(state, UpdateCalculatedValues({"total": 2}))
    assert state.calculated_values == {"total": 2}


def test_unknown_action_fails_loudly(reducer):
    """An action outside the closed set is an unreachable state."""
    with pytest.raises(UnreachableActionError):
        reducer.reduce(FormLocalState(), object())


def test_reducer_logs_transitions(caplog):
    """log_actions traces action, previous and next state."""
    reducer = FormStateReducer(FormStateConfig(log_actions=True))
    with caplog.at_level(logging.DEBUG, logger="pyqt_formstate.state.reducer"):
        reducer.reduce(FormLocalState(), Register("first_name"))

    assert "action Register" in caplog.text
    assert "next state" in caplog.text


def test_store_announces_only_real_changes(store):
    """Listeners hear about transitions that changed the state."""
    heard = []
    store.subscribe(lambda action, prev, new: heard.append(action))

    assert store.dispatch(Register("a")) is True
    assert store.dispatch(Register("a")) is False
    assert heard == [Register("a")]


def test_field_registry(store):
    """Registry wraps visibility and touched bookkeeping."""
    registry = FieldRegistry(store)

    registry.register("a")
    registry.touch("a")
    registry.unregister("a")

    assert not registry.is_visible("a")
    assert registry.is_touched("a")


def test_effective_value_prefers_cached(store):
    """Effective value is cached-first, committed otherwise."""
    values = ValueStore(store, {"a": 1, "b": 2}, set_value=lambda name, value: None)

    values.set_cached_value("a", 10)

    assert values.effective_value("a") == 10
    assert values.effective_value("b") == 2
    assert values.effective_values() == {"a": 10, "b": 2}

    values.unset_cached_value("a")
    assert values.effective_value("a") == 1


def test_merged_values_precedence(store):
    """committed < cached < calculated when merging for validation."""
    values = ValueStore(store, {"a": 1, "total": 0}, set_value=lambda name, value: None)
    values.set_cached_value("a", 5)
    values.set_calculated({"total": 99})

    assert values.merged_values() == {"a": 5, "total": 99}


def test_non_mapping_calculated_values_are_not_merged(store):
    """Opaque calculated values stay out of the merge."""
    values = ValueStore(store, {"a": 1}, set_value=lambda name, value: None)
    values.set_calculated(42)

    assert values.merged_values() == {"a": 1}
    assert values.calculated == 42


def test_committed_values_go_through_host(store):
    """The store never writes committed values itself."""
    writes = []
    committed = {"a": 1}
    values = ValueStore(store, committed, set_value=lambda name, value: writes.append((name, value)))

    values.set_committed_value("a", 2)

    assert writes == [("a", 2)]
    assert values.committed["a"] == 1
    assert committed == {"a": 1}
    assert values.observe_committed({"a": 2}) is True
    assert values.observe_committed({"a": 2}) is False
