"""Homogeneous sequences of any length."""

from typing import Any

from righttypes.builders.base import (
    CheckResult,
    Failure,
    Schema,
    aggregate,
    is_sequence,
    render_test,
    whole_value_error,
)
from righttypes.builders.leaf import Test, check_leaf


class SeqOfSchema(Schema):
    """Checks every element of a sequence against the same test."""

    def __init__(self, test: Test, name: str | None = None) -> None:
        self.test = test
        self.rendered = render_test(test)
        super().__init__(name or f"seq_of({self.rendered})")

    def check(self, value: Any) -> CheckResult:
        if not is_sequence(value):
            return whole_value_error(value, f"(sequence? {value!r})")

        errors: list[Failure] = []
        for index, item in enumerate(value):
            errors.extend(check_leaf(self.test, self.rendered, item, index))
        return aggregate(value, errors)
