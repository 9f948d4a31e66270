"""Form state exceptions."""


class FormStateError(Exception):
    """Base class for all form state engine errors."""


class MissingControllerError(FormStateError):
    """Raised when a field or form handle is requested without an active controller.

    This is a wiring mistake by the host: handles only make sense inside a
    ``controller.provide()`` block (or when built from a controller directly).
    """


class UnknownFieldError(FormStateError, KeyError):
    """Raised when an operation names a field outside the controller's field set."""

    def __init__(self, field_name, known_fields):
        self.field_name = field_name
        self.known_fields = tuple(known_fields)
        super().__init__(
            f"Unknown field {field_name!r}. Known fields: {list(self.known_fields)}"
        )

    def __str__(self):
        return self.args[0]


class UnreachableActionError(FormStateError):
    """Raised when the reducer receives an action it has no handler for."""

    def __init__(self, action, message: str):
        self.action = action
        super().__init__(f"Reducer thought it could never end up here\n{message}: {action!r}")


class EffectError(FormStateError):
    """Raised when an effect function fails while committing a field."""

    def __init__(self, source_field, target_field, original: BaseException):
        self.source_field = source_field
        self.target_field = target_field
        self.original = original
        super().__init__(
            f"Effect {source_field!r} -> {target_field!r} failed: "
            f"{type(original).__name__}: {original}"
        )
