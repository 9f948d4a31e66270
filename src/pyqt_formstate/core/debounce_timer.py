"""Reusable trailing debounce timer."""

from typing import Callable, Optional
from PyQt6.QtCore import QTimer


class DebounceTimer:
    """
    Reusable trailing debounce timer with a single pending slot.

    Restarts the timer on each call. Handler fires only after delay_ms of
    inactivity, so a burst of triggers collapses into one handler call.

    Usage:
        self._debounce = DebounceTimer(delay_ms=100, handler=self._run_validation)

        def on_visibility_changed(self):
            self._debounce.trigger()  # Restarts timer
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None]):
        self._delay_ms = delay_ms
        self._handler = handler
        self._timer: Optional[QTimer] = None

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def is_pending(self) -> bool:
        """True while a trigger is waiting to fire."""
        return self._timer is not None and self._timer.isActive()

    def trigger(self):
        """Trigger debounce; restarts the timer."""
        if self._timer is None:
            self._timer = QTimer()
            self._timer.setSingleShot(True)
            self._timer.timeout.connect(self._fire)
        else:
            self._timer.stop()

        self._timer.start(self._delay_ms)

    def cancel(self):
        """Cancel pending trigger."""
        if self._timer is not None:
            self._timer.stop()

    def force(self):
        """Cancel timer and fire handler immediately."""
        self.cancel()
        self._handler()

    def flush(self) -> bool:
        """Fire the handler now only if a trigger is pending."""
        if not self.is_pending:
            return False
        self.force()
        return True

    def _fire(self):
        self._handler()
