"""Tests for T(): dispatch on specification shape, nesting and the throwing adapters."""

import pytest
import structlog

from righttypes.builders.base import Schema
from righttypes.builders.mapping import MapSchema
from righttypes.builders.positional import TupleSchema
from righttypes.builders.predicate import PredicateSchema
from righttypes.errors import FieldError, ValidationError, error_positions
from righttypes.exceptions import SchemaSpecError, SchemaViolation, UnsatisfiedError
from righttypes.failures import is_failure
from righttypes.types import T, T_or_raise, as_predicate, assert_satisfies, raising
from tests.factories import drinking_age_illinois


# ---------------------------------------------------------------------------
# 1. Dispatch on specification shape
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "spec, expected",
    [
        ({"a": str}, MapSchema),
        ([str], TupleSchema),
        ((str,), TupleSchema),
        (str, PredicateSchema),
        ({1, 2, 3}, PredicateSchema),
        (frozenset({"a"}), PredicateSchema),
        (drinking_age_illinois, PredicateSchema),
        (lambda x: x, PredicateSchema),
    ],
    ids=["map", "list", "tuple", "class", "set", "frozenset", "function", "lambda"],
)
def test_spec_shape_selects_builder(spec: object, expected: type) -> None:
    schema = T(spec)
    assert isinstance(schema, expected)
    assert isinstance(schema, Schema)


@pytest.mark.parametrize(
    "spec",
    ["not a spec", 5, None, {"a": 5}, [str, "x"]],
    ids=["string", "int", "none", "nested_value", "nested_element"],
)
def test_unrecognized_spec_fails_at_build_time(spec: object) -> None:
    with pytest.raises(SchemaSpecError) as exc_info:
        T(spec)
    assert isinstance(exc_info.value, TypeError)


def test_rejected_spec_is_logged() -> None:
    with structlog.testing.capture_logs() as logs:
        with pytest.raises(SchemaSpecError):
            T(42)

    events = [entry["event"] for entry in logs]
    assert "schema_spec_rejected" in events


def test_explicit_name_is_used_in_enclosing_errors() -> None:
    sub = T({"one": str}, name="Sub")
    error = T([sub])([{"one": 1}])
    assert error.errors[0].path == ("0: Sub",)


# ---------------------------------------------------------------------------
# 2. Single-test schemas
# ---------------------------------------------------------------------------
def test_sets_are_predicates() -> None:
    one_two_three = T({"one", "two", "three"})

    for value in ("one", "two", "three"):
        assert one_two_three(value) == value
    assert isinstance(one_two_three("four"), ValidationError)


def test_set_failure_renders_set_and_value() -> None:
    error = T({1, 2, 3})(4)

    assert error.errors == (FieldError(None, "({1, 2, 3} 4)"),)
    assert error.message == "({1, 2, 3} 4)"
    assert error.subject == 4


@pytest.mark.parametrize(
    "predicate",
    [drinking_age_illinois, lambda age: age >= 21],
    ids=["named", "anonymous"],
)
def test_function_predicates(predicate: object) -> None:
    drinking_age = T(predicate)

    assert assert_satisfies(drinking_age, 30) == 30
    assert assert_satisfies(drinking_age, 21) == 21
    assert isinstance(drinking_age(20), ValidationError)
    assert isinstance(drinking_age(10), ValidationError)


def test_predicate_error_message_uses_function_name() -> None:
    assert T(drinking_age_illinois)(20).message == "(drinking_age_illinois 20)"


def test_wrapped_schema_error_passes_through_unwrapped() -> None:
    inner = T({"a": str})
    outer = T(inner)

    error = outer({"a": 1})

    assert error == inner({"a": 1})
    assert error_positions(error) == {"a"}


# ---------------------------------------------------------------------------
# 3. Nesting and path accumulation
# ---------------------------------------------------------------------------
def test_nested_maps_without_inner_T(nested_schema: Schema) -> None:
    value = {"one": 1, "two": {"one": "one"}}
    assert nested_schema(value) is value


def test_nested_map_failure_is_located(nested_schema: Schema) -> None:
    error = nested_schema({"one": 1, "two": {"one": 1}})

    assert error_positions(error) == {"two"}
    [nested] = error.errors
    assert isinstance(nested, ValidationError)
    assert error_positions(nested) == {"one"}
    assert nested.path == ("two: 'two' {'one' str}",)
    assert str(nested) == "{ path://two: 'two' {'one' str}/ [one:('one' str 1)] }"


def test_outer_path_is_prepended_to_inner_path() -> None:
    inner = T({"c": int})
    outer = T({"p": inner})
    x = {"c": "not an int"}

    inner_error = inner(x)
    [nested] = outer({"p": x}).errors

    assert nested.path == ("p: 'p' {'c' int}", *inner_error.path)
    assert nested.errors == inner_error.errors


def test_nested_schemas_keep_their_own_layers() -> None:
    schema = T({"a": {"b": [int, {"c": str}]}})

    error = schema({"a": {"b": [1, {"c": 2}]}})

    b_error = error.errors[0].errors[0]
    c_error = b_error.errors[0]
    assert error_positions(error) == {"a"}
    assert b_error.position == "b"
    assert c_error.position == 1
    assert c_error.path == ("1: {'c' str}",)
    assert c_error.errors == (FieldError("c", "('c' str 2)"),)


def test_nested_success_returns_original_object() -> None:
    schema = T({"a": [int, {"b": str}]})
    value = {"a": [1, {"b": "x"}]}
    assert schema(value) is value
    assert schema(schema(value)) is value


# ---------------------------------------------------------------------------
# 4. Throwing adapters
# ---------------------------------------------------------------------------
def test_T_or_raise_returns_conforming_value() -> None:
    integer = T_or_raise(int)
    assert integer(123) == 123


def test_T_or_raise_raises_with_structured_failure() -> None:
    integer = T_or_raise(int)

    with pytest.raises(SchemaViolation) as exc_info:
        integer(4 / 3)

    assert isinstance(exc_info.value.failure, ValidationError)
    assert is_failure(exc_info.value.failure)


def test_T_or_raise_on_maps() -> None:
    named = T_or_raise({"first_name": str, "last_name": str})
    value = {"first_name": "Dave", "last_name": "Orme"}

    assert named(value) is value
    with pytest.raises(SchemaViolation) as exc_info:
        named({"first_name": "Dave"})
    assert exc_info.value.failure.message == "Missing k/v(s): 'last_name' str"


def test_raising_schema_nested_reports_as_data() -> None:
    outer = T({"n": raising(T(int))})
    assert error_positions(outer({"n": "x"})) == {"n"}


def test_assert_satisfies_raises_assertion_error() -> None:
    with pytest.raises(AssertionError) as exc_info:
        assert_satisfies(T(drinking_age_illinois), 20)

    assert isinstance(exc_info.value, UnsatisfiedError)
    assert str(exc_info.value) == "(drinking_age_illinois 20)"
    assert isinstance(exc_info.value.failure, ValidationError)


# ---------------------------------------------------------------------------
# 5. Predicate interop
# ---------------------------------------------------------------------------
def test_as_predicate_from_schema() -> None:
    is_int = as_predicate(T(int))
    assert is_int(1) is True
    assert is_int("x") is False


def test_as_predicate_from_leaf_tests() -> None:
    assert as_predicate(str)("x") is True
    assert as_predicate({1, 2})(3) is False
    assert as_predicate(lambda x: x)(0) is False


def test_as_predicate_rejects_non_tests() -> None:
    with pytest.raises(SchemaSpecError):
        as_predicate(5)
