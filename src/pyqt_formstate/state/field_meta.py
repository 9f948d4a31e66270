"""Static per-field configuration supplied by the caller."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pyqt_formstate.core.exceptions import UnknownFieldError

# validate(value, merged_values, extra_values) -> None | bool | str
Validator = Callable[[Any, Mapping[str, Any], Any], Union[None, bool, str]]
# effect(new_value_of_source) -> value_of_target
EffectFn = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldMetaInfo:
    """
    Configuration for a single field.

    Attributes:
        validate: Optional validator; see ``ValidationService`` for result rules
        effects: Target field -> function deriving the target's value from
            this field's newly committed value
    """
    validate: Optional[Validator] = None
    effects: Dict[str, EffectFn] = field(default_factory=dict)


FieldMetaTable = Dict[str, FieldMetaInfo]


def coerce_field_meta(meta: Union[FieldMetaInfo, Mapping[str, Any], None]) -> FieldMetaInfo:
    """Accept FieldMetaInfo, a plain ``{"validate": ..., "effects": ...}`` dict, or None."""
    if meta is None:
        return FieldMetaInfo()
    if isinstance(meta, FieldMetaInfo):
        return meta
    unknown = set(meta) - {"validate", "effects"}
    if unknown:
        raise TypeError(f"Unknown field metadata keys: {sorted(unknown)}")
    return FieldMetaInfo(validate=meta.get("validate"), effects=dict(meta.get("effects") or {}))


def build_meta_table(metadata: Mapping[str, Any]) -> FieldMetaTable:
    """Normalize a caller metadata table and check effect targets exist."""
    table = {name: coerce_field_meta(meta) for name, meta in metadata.items()}
    for name, meta in table.items():
        for target in meta.effects:
            if target not in table:
                raise UnknownFieldError(target, table)
    return table
