"""The Schema base class shared by every builder.

A schema is a callable checker: ``schema(value)`` returns ``value`` itself
when it conforms, or an error value describing what failed and where.
Being an instance of Schema is what marks a test as composable: the leaf
checker passes a nested schema's structured error through (adding position
information) instead of wrapping a boolean failure.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from righttypes.errors import FieldError, ValidationError
from righttypes.result import Err, Ok

Failure = FieldError | ValidationError
CheckResult = Ok[Any] | Err[Failure]


class Schema(ABC):
    """A composable checker built once and applied many times. Holds no mutable state."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def check(self, value: Any) -> CheckResult:
        """Validate ``value``, returning Ok(value) or Err(error)."""

    def __call__(self, value: Any) -> Any:
        result = self.check(value)
        if isinstance(result, Err):
            return result.error
        return value

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def aggregate(subject: Any, errors: Sequence[Failure]) -> CheckResult:
    """Identity on no errors, else one ValidationError over ``subject``."""
    if not errors:
        return Ok(subject)
    return Err(ValidationError.of(subject, errors))


def whole_value_error(subject: Any, message: str) -> Err[Failure]:
    """An unpositioned failure of ``subject`` as a whole."""
    return Err(ValidationError.of(subject, [FieldError(None, message)]))


def render_test(test: object) -> str:
    """Render a test for error messages: schema and function names, else repr."""
    if isinstance(test, Schema):
        return test.name
    if isinstance(test, type):
        return test.__name__
    if callable(test) and hasattr(test, "__name__"):
        return test.__name__
    return repr(test)


def is_sequence(value: object) -> bool:
    """Ordered collections, excluding strings and bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
