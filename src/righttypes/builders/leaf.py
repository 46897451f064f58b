"""Check one value against one atomic test.

A test is a Schema, a class (rewritten to an isinstance check), a set
(rewritten to a membership check) or a plain predicate. The result is a list
of zero or one errors so callers can simply concatenate results.
"""

from collections.abc import Callable, Hashable
from dataclasses import replace
from typing import Any

from righttypes.builders.base import Failure, Schema
from righttypes.errors import FieldError, ValidationError
from righttypes.result import Err

Test = Schema | type | set[Any] | frozenset[Any] | Callable[[Any], object]


def instance_of(cls: type) -> Callable[[Any], bool]:
    def is_instance(x: Any) -> bool:
        return isinstance(x, cls)

    return is_instance


def member_of(members: set[Any] | frozenset[Any]) -> Callable[[Any], bool]:
    def is_member(x: Any) -> bool:
        try:
            return x in members
        except TypeError:
            # unhashable values can't be members
            return False

    return is_member


def as_callable(test: Test) -> Callable[[Any], object]:
    if isinstance(test, type):
        return instance_of(test)
    if isinstance(test, (set, frozenset)):
        return member_of(test)
    return test


def check_leaf(
    test: Test,
    rendered_test: str,
    value: Any,
    position: Hashable | None = None,
) -> list[Failure]:
    """Run ``test`` against ``value``.

    Schemas report their own structured errors, re-located at ``position``
    (as a copy) when one is given. An unpositioned FieldError takes the
    position; a positioned one is nested in a ValidationError over ``value``.
    Anything else is a predicate: a truthy result passes, a falsy one yields
    a FieldError rendering the test and the value.
    """
    if isinstance(test, Schema):
        result = test.check(value)
        if not isinstance(result, Err):
            return []
        error = result.error
        if position is None:
            return [error]
        if isinstance(error, FieldError):
            if error.position is None:
                return [replace(error, position=position)]
            error = ValidationError.of(value, [error])
        return [error.at(position, rendered_test)]

    if as_callable(test)(value):
        return []
    return [FieldError(position, f"({rendered_test} {value!r})")]
