"""Schemas made from one whole-value test (predicate, class, set or schema)."""

from typing import Any

from righttypes.builders.base import CheckResult, Schema, render_test
from righttypes.builders.leaf import Test, check_leaf
from righttypes.errors import FieldError, ValidationError
from righttypes.result import Err, Ok


class PredicateSchema(Schema):
    """Applies a single unpositioned test to the whole value.

    A plain predicate failure is wrapped in a ValidationError; when the test
    is itself a schema, its ValidationError is returned as the whole result.
    """

    def __init__(self, test: Test, name: str | None = None) -> None:
        self.test = test
        self.rendered = render_test(test)
        super().__init__(name or self.rendered)

    def check(self, value: Any) -> CheckResult:
        errors = check_leaf(self.test, self.rendered, value)
        if not errors:
            return Ok(value)
        error = errors[0]
        if isinstance(error, FieldError):
            return Err(ValidationError(subject=value, errors=(error,), message=error.message))
        return Err(error)
