"""Tagged result returned by Schema.check().

Ok carries the untouched input; Err carries a FieldError or ValidationError.
Schema.__call__ unwraps these back into "the input itself, or an error value".
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success result containing the validated value."""

    value: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failure result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False
