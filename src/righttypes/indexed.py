"""Collections of records indexed by one of their own fields.

    Person = T({"key": str, "first_name": str, "last_name": str})
    PersonDB = indexed(Person, "key")

    PersonDB(
        {"key": "franken", "first_name": "Franken", "last_name": "Stein"},
        {"key": "charlie", "first_name": "Charlie", "last_name": "Brown"},
    )
    # {"franken": {...}, "charlie": {...}}

Every record is validated first. If any record fails, the call returns one
ValidationError over all records, with each failing record's error located
at its argument index, and no mapping is built. Records are any value
subscriptable by the index field: maps by key, tuples and lists by position.
"""

from collections.abc import Hashable, Sequence
from typing import Any

from righttypes.builders.base import Failure, Schema
from righttypes.builders.leaf import check_leaf
from righttypes.errors import FieldError, ValidationError
from righttypes.logging import get_logger
from righttypes.result import Err, Ok
from righttypes.types import T

logger = get_logger(__name__)


class Indexed:
    """Builds ``{record[index_field]: record}`` from validated records.

    A later record whose index value repeats an earlier one replaces it.
    """

    def __init__(self, record_schema: Schema, index_field: Hashable) -> None:
        self.record_schema = record_schema
        self.index_field = index_field

    def check(self, records: Sequence[Any]) -> Ok[dict[Any, Any]] | Err[ValidationError]:
        errors: list[Failure] = []
        keyed: list[tuple[Hashable, Any]] = []
        for position, record in enumerate(records):
            found = check_leaf(self.record_schema, self.record_schema.name, record, position)
            if not found:
                try:
                    key = record[self.index_field]
                    hash(key)
                except (KeyError, IndexError, TypeError):
                    found = [FieldError(position, f"(index {self.index_field!r} {record!r})")]
                else:
                    keyed.append((key, record))
            for error in found:
                logger.debug("indexed_record_rejected", position=position, error=str(error))
            errors.extend(found)

        if errors:
            return Err(ValidationError.of(tuple(records), errors))
        return Ok(dict(keyed))

    def __call__(self, *records: Any) -> dict[Any, Any] | ValidationError:
        result = self.check(records)
        if isinstance(result, Err):
            return result.error
        return result.value


def indexed(record_schema: Any, index_field: Hashable) -> Indexed:
    """Return a builder of ``{index: record}`` maps from ``*records``.

    ``record_schema`` is a schema or any specification accepted by T().
    """
    if not isinstance(record_schema, Schema):
        record_schema = T(record_schema)
    return Indexed(record_schema, index_field)
