"""Fixed-arity positional (tuple) schemas: one test per index."""

from collections.abc import Sequence
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


class TupleSchema(Schema):
    """Checks ``xs[i]`` against ``tests[i]``; the lengths must match exactly."""

    def __init__(self, tests: Sequence[Test], name: str | None = None) -> None:
        self.tests = tuple(tests)
        self.rendered = tuple(render_test(t) for t in self.tests)
        super().__init__(name or "[" + ", ".join(self.rendered) + "]")

    def check(self, value: Any) -> CheckResult:
        if not is_sequence(value):
            return whole_value_error(value, f"(sequence? {value!r})")

        # Arity is reported on its own, before any element is looked at
        if len(value) != len(self.tests):
            return whole_value_error(
                value,
                f"(count types): {len(self.tests)} (count xs): {len(value)}"
                f" types: [{', '.join(self.rendered)}]",
            )

        errors: list[Failure] = []
        for index, (test, rendered, item) in enumerate(zip(self.tests, self.rendered, value)):
            errors.extend(check_leaf(test, rendered, item, index))
        return aggregate(value, errors)
