"""
Validation Engine.

Computes the full error map for exactly the visible field set. Results are
never merged into a previous map: a pass always reflects the current
visible set.

Validator result rules:
- any non-string result other than ``False`` (``None``, ``True``): no error
- ``False``: error with ``FormStateConfig.default_error_message``
- non-empty ``str``: that string is the error
- empty ``str``: no error
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from pyqt_formstate.core.performance_monitor import timer
from pyqt_formstate.protocols.form_config import FormStateConfig, get_form_config
from pyqt_formstate.state.field_meta import FieldMetaInfo, FieldMetaTable
from pyqt_formstate.state.value_store import ValueStore

logger = logging.getLogger(__name__)


class ValidationService:
    """Stateless validator runner."""

    def __init__(self, config: Optional[FormStateConfig] = None):
        self._config = config

    @property
    def config(self) -> FormStateConfig:
        return self._config or get_form_config()

    def normalize_result(self, result: Any) -> Optional[str]:
        """Turn a validator's return value into an error message or None."""
        if result is False:
            return self.config.default_error_message
        if isinstance(result, str):
            return result or None
        return None

    def validate_field(self, field_name: str, meta: FieldMetaInfo, value: Any,
                       merged_values: Mapping[str, Any], extra_values: Any) -> Optional[str]:
        if meta.validate is None:
            return None
        error = self.normalize_result(meta.validate(value, merged_values, extra_values))
        if error is not None:
            logger.debug(f"Field {field_name!r} invalid: {error}")
        return error

    def compute_errors(self, visible: Iterable[str], metadata: FieldMetaTable,
                       values: ValueStore, extra_values: Any) -> Dict[str, str]:
        """Run every visible field's validator against effective + calculated values.

        Fields are visited in metadata order so error maps are deterministic.
        """
        visible = set(visible)
        fields = [name for name in metadata if name in visible]
        merged = values.merged_values()
        errors: Dict[str, str] = {}

        with timer("Validation pass", threshold_ms=self.config.validation_timing_threshold_ms,
                   log_args=True, fields=len(fields)):
            for field_name in fields:
                error = self.validate_field(
                    field_name, metadata[field_name],
                    values.effective_value(field_name), merged, extra_values,
                )
                if error is not None:
                    errors[field_name] = error

        return errors
