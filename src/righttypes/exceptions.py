"""Exceptions raised by schema construction and the throwing adapters.

Plain schemas never raise on bad input: they return a ValidationError value.
These exceptions cover the two other cases: a malformed specification handed
to T() (a programmer error, raised at build time) and the opt-in fail-fast
wrappers (raising(), T_or_raise(), assert_satisfies()).
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from righttypes.errors import FieldError, ValidationError


class RightTypesError(Exception):
    """Base class for all righttypes exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SchemaSpecError(RightTypesError, TypeError):
    """Raised when T() is given a specification it cannot build a schema from."""

    def __init__(self, spec: object, reason: str = "Unrecognized schema specification") -> None:
        self.spec = spec
        super().__init__(f"{reason}: {spec!r}")


class SchemaViolation(RightTypesError):
    """Raised by a throwing schema; ``failure`` is the ValidationError it produced."""

    def __init__(self, failure: "ValidationError | FieldError") -> None:
        self.failure = failure
        super().__init__(f"Type construction failure: {failure}")


class UnsatisfiedError(RightTypesError, AssertionError):
    """Raised by assert_satisfies() when the schema does not return its input."""

    def __init__(self, failure: object) -> None:
        self.failure = failure
        super().__init__(str(failure))
