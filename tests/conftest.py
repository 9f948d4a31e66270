"""pytest configuration and fixtures for pyqt-formstate tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from pyqt_formstate import DictValueHost, FormController, FormStateConfig, set_form_config


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def reset_form_config():
    """Every test starts from the default global config."""
    set_form_config(None)
    yield
    set_form_config(None)


@pytest.fixture
def fast_config():
    """Config with a short debounce so timer tests stay quick."""
    return FormStateConfig(validation_debounce_ms=20)


@pytest.fixture
def make_form(qapp, fast_config):
    """Build (host, controller) pairs wired through a DictValueHost."""
    controllers = []

    def _make(metadata, values=None, config=None, **kwargs):
        host = DictValueHost(values or {})
        controller = FormController(
            metadata, host.values, host.set_value, config=config or fast_config, **kwargs
        )
        host.bind(controller)
        controllers.append(controller)
        return host, controller

    yield _make

    for controller in controllers:
        controller.close()
