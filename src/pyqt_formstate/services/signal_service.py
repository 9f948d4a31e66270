"""
Signal blocking helpers for field widgets.

Key features:
1. Context manager guarantees signal unblocking
2. Supports single or multiple widgets
"""

from contextlib import contextmanager
from PyQt6.QtCore import QObject
import logging

logger = logging.getLogger(__name__)


class SignalService:
    """
    Signal blocking for programmatic widget updates.

    Example:
        with SignalService.block_signals(checkbox):
            checkbox.setChecked(True)
    """

    @staticmethod
    @contextmanager
    def block_signals(*widgets: QObject):
        """Context manager for blocking widget signals."""
        previous = []
        for widget in widgets:
            if widget is not None:
                previous.append((widget, widget.blockSignals(True)))

        try:
            yield
        finally:
            for widget, was_blocked in previous:
                widget.blockSignals(was_blocked)
