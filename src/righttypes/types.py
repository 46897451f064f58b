"""Build schemas from specification values.

Computing failures is more useful than asking whether a value is valid.
T(spec) returns a schema: a function that returns its input unchanged when
the input conforms to ``spec``, or a ValidationError describing what failed
and where. Success can therefore be checked with ``schema(x) is x``.

``spec`` can be:

* a dict ``{key: test}``; wrap a key in ``Opt(key)`` to make it optional,
* a list or tuple of tests, one per position of a fixed-length sequence,
* a single test: a predicate function, a class (isinstance check), a set
  (membership check) or another schema.

Dict, list and tuple values nested inside a specification are built
recursively, so ``T({"two": {"one": str}})`` validates nested maps.
Use seq_of(test) for sequences of any length.

    Person = T({"first": str, Opt("middle"): str, "last": str})

    Person({"first": "Charles", "last": "Brown"})   # returns the same dict
    error_positions(Person({"first": 1, "last": "Brown"}))  # {"first"}
"""

from collections.abc import Callable, Mapping
from typing import Any, NoReturn

from righttypes.builders.base import CheckResult, Schema
from righttypes.builders.leaf import Test, as_callable
from righttypes.builders.mapping import MapSchema, Opt
from righttypes.builders.positional import TupleSchema
from righttypes.builders.predicate import PredicateSchema
from righttypes.builders.seq_of import SeqOfSchema
from righttypes.config import KeyPolicy, current_unknown_keys_policy
from righttypes.exceptions import SchemaSpecError, SchemaViolation, UnsatisfiedError
from righttypes.logging import get_logger
from righttypes.result import Err

__all__ = [
    "KeyPolicy",
    "Opt",
    "RaisingSchema",
    "Schema",
    "T",
    "T_or_raise",
    "as_predicate",
    "assert_satisfies",
    "raising",
    "seq_of",
]

logger = get_logger(__name__)


def T(
    spec: Any,
    *,
    name: str | None = None,
    unknown_keys: KeyPolicy | str | None = None,
) -> Schema:
    """Build a schema from ``spec``.

    Args:
        spec: Map, list/tuple or single-test specification (see module docs).
        name: Rendering of this schema in enclosing schemas' error messages.
        unknown_keys: Policy for keys not named by map specifications, applied
            to every map built by this call. Defaults to the active
            unknown_keys_policy() scope, then to settings.

    Raises:
        SchemaSpecError: ``spec`` (or something nested in it) is not a
            recognised specification.
    """
    policy = current_unknown_keys_policy() if unknown_keys is None else KeyPolicy(unknown_keys)
    return _build(spec, name, policy)


def seq_of(
    test: Any,
    *,
    name: str | None = None,
    unknown_keys: KeyPolicy | str | None = None,
) -> Schema:
    """Build a schema for a sequence of any length whose elements all satisfy ``test``."""
    policy = current_unknown_keys_policy() if unknown_keys is None else KeyPolicy(unknown_keys)
    schema = SeqOfSchema(_element(test, policy), name)
    logger.debug("schema_built", kind="seq_of", name=schema.name)
    return schema


def _build(spec: Any, name: str | None, policy: KeyPolicy) -> Schema:
    schema: Schema
    if isinstance(spec, Mapping):
        schema = MapSchema({k: _element(v, policy) for k, v in spec.items()}, policy, name)
        kind = "map"
    elif isinstance(spec, (list, tuple)):
        schema = TupleSchema([_element(t, policy) for t in spec], name)
        kind = "tuple"
    elif _is_leaf_test(spec):
        schema = PredicateSchema(spec, name)
        kind = "predicate"
    else:
        _reject(spec)
    logger.debug("schema_built", kind=kind, name=schema.name)
    return schema


def _element(test: Any, policy: KeyPolicy) -> Test:
    """A test nested inside a specification; structural specs become schemas."""
    if isinstance(test, (Mapping, list, tuple)):
        return _build(test, None, policy)
    if _is_leaf_test(test):
        return test  # type: ignore[no-any-return]
    _reject(test)


def _is_leaf_test(test: object) -> bool:
    return isinstance(test, (Schema, type, set, frozenset)) or callable(test)


def _reject(spec: object) -> NoReturn:
    logger.warning("schema_spec_rejected", spec=repr(spec), spec_type=type(spec).__name__)
    raise SchemaSpecError(spec)


class RaisingSchema(Schema):
    """Wraps a schema so that calling it raises SchemaViolation instead of returning an error.

    check() still returns Err, so a raising schema nested inside another
    schema reports its failure as data like any other schema.
    """

    def __init__(self, schema: Schema) -> None:
        self.schema = schema
        super().__init__(schema.name)

    def check(self, value: Any) -> CheckResult:
        return self.schema.check(value)

    def __call__(self, value: Any) -> Any:
        result = self.check(value)
        if isinstance(result, Err):
            logger.info("schema_violation_raised", schema=self.name, error=str(result.error))
            raise SchemaViolation(result.error)
        return value


def raising(schema: Schema) -> RaisingSchema:
    """Return a schema that raises SchemaViolation when ``schema`` fails."""
    return RaisingSchema(schema)


def T_or_raise(
    spec: Any,
    *,
    name: str | None = None,
    unknown_keys: KeyPolicy | str | None = None,
) -> RaisingSchema:
    """Like T(), but the schema raises SchemaViolation on failure.

    The exception's ``failure`` attribute is the ValidationError T() would
    have returned.
    """
    return raising(T(spec, name=name, unknown_keys=unknown_keys))


def assert_satisfies(schema: Callable[[Any], Any], value: Any) -> Any:
    """Return ``value`` if ``schema(value)`` returns it, else raise UnsatisfiedError."""
    result = schema(value)
    if result is value or result == value:
        return value
    raise UnsatisfiedError(result)


def as_predicate(test: Any) -> Callable[[Any], bool]:
    """Turn a schema or any leaf test into a plain boolean predicate."""
    if isinstance(test, Schema):
        schema = test

        def satisfies_schema(x: Any) -> bool:
            return schema.check(x).is_ok()

        return satisfies_schema

    if not _is_leaf_test(test):
        _reject(test)
    check = as_callable(test)

    def satisfies(x: Any) -> bool:
        return bool(check(x))

    return satisfies
