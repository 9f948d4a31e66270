"""Base configuration class for the form state engine.

Provides hooks for applications to customize validation timing, logging and
default messages.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class FormStateConfig:
    """Base configuration for form state behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        validation_debounce_ms: Quiescence delay before validating after the
            visible field set changes
        skip_initial_validation: Suppress reactive validation while the
            controller is being constructed
        default_error_message: Error shown when a validator returns ``False``
        log_actions: Debug-log every state transition (action, prev, next)
        performance_logger_name: Logger receiving timing messages
        validation_timing_threshold_ms: Only log validation passes slower than this
    """

    validation_debounce_ms: int = 100
    skip_initial_validation: bool = True
    default_error_message: str = "Invalid value"
    log_actions: bool = False
    performance_logger_name: str = "pyqt_formstate.performance"
    validation_timing_threshold_ms: float = 5.0


# Global config instance (set by application)
_form_config: Optional[FormStateConfig] = None


def set_form_config(config: Optional[FormStateConfig]) -> None:
    """Set the global form state configuration.

    Args:
        config: FormStateConfig instance, or None to restore defaults
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormStateConfig:
    """Get the current form state configuration.

    Returns:
        Current FormStateConfig or default if not set
    """
    if _form_config is None:
        return FormStateConfig()
    return _form_config
