"""Performance monitoring utilities for pyqt-formstate.

Provides a decorator and a context manager for timing engine operations
(validation passes, effect cascades) and logging them to a dedicated logger.
"""

import time
import functools
import logging
from contextlib import contextmanager
from typing import Optional, Callable

from pyqt_formstate.protocols.form_config import get_form_config


def get_perf_logger() -> logging.Logger:
    """Return the performance logger named by the active form config."""
    return logging.getLogger(get_form_config().performance_logger_name)


@contextmanager
def timer(operation_name: str, threshold_ms: float = 0.0, log_args: bool = False, **kwargs):
    """Context manager for timing operations.

    Args:
        operation_name: Name of the operation being timed
        threshold_ms: Only log if operation takes longer than this (in milliseconds)
        log_args: Whether to log kwargs in the message
        **kwargs: Additional context to include in log message

    Example:
        with timer("Validation pass", threshold_ms=5.0, fields=3):
            errors = service.compute_errors(...)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000

        if elapsed_ms >= threshold_ms:
            msg = f"{operation_name}: {elapsed_ms:.2f}ms"
            if log_args and kwargs:
                args_str = ", ".join(f"{k}={v}" for k, v in kwargs.items())
                msg += f" ({args_str})"

            get_perf_logger().debug(msg)


def timed(operation_name: Optional[str] = None, threshold_ms: float = 0.0):
    """Decorator for timing function calls.

    Example:
        @timed("Effect cascade", threshold_ms=1.0)
        def apply(...):
            ...
    """
    def decorator(func: Callable) -> Callable:
        name = operation_name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with timer(name, threshold_ms=threshold_ms):
                return func(*args, **kwargs)

        return wrapper
    return decorator
