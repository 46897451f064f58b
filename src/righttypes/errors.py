"""Validation result values: FieldError and ValidationError.

A FieldError is one failed atomic test. A ValidationError aggregates the
failures found inside one map, tuple or sequence. Nested ValidationErrors are
kept nested (never flattened), and each enclosing schema prepends one
"position: expected-shape" entry to the nested error's ``path``.

Both are immutable; schemas create them fresh on every failing call.
"""

from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass, replace
from typing import Any

from righttypes.failures import register_failure


@register_failure
@dataclass(frozen=True)
class FieldError:
    """A single value failed a single test.

    ``position`` is the map key or zero-based index of the failing value, or
    None when the whole value failed (e.g. a tuple arity mismatch).
    """

    position: Hashable | None
    message: str

    def __str__(self) -> str:
        if self.position is not None:
            return f"{self.position}:{self.message}"
        return self.message


@register_failure
@dataclass(frozen=True)
class ValidationError:
    """One or more failures inside a structured value.

    Attributes:
        subject: The value that failed, unmodified.
        errors: FieldErrors and nested ValidationErrors, in discovery order.
        message: Human-readable summary of ``errors``.
        path: Position descriptors, outermost first. Empty where the error
            was first produced; grown by one entry per enclosing schema.
        position: Key or index this error sits at inside its parent, once
            an enclosing schema has re-wrapped it.
    """

    subject: Any
    errors: tuple["FieldError | ValidationError", ...]
    message: str
    path: tuple[str, ...] = ()
    position: Hashable | None = None

    @classmethod
    def of(
        cls, subject: Any, errors: Sequence["FieldError | ValidationError"]
    ) -> "ValidationError":
        """Aggregate ``errors`` found in ``subject``, joining their messages."""
        return cls(subject=subject, errors=tuple(errors), message=join_messages(errors))

    def at(self, position: Hashable, rendered_test: str) -> "ValidationError":
        """Return a copy located at ``position`` of an enclosing schema."""
        return replace(
            self,
            position=position,
            path=(f"{position}: {rendered_test}", *self.path),
        )

    def position_tree(self) -> list[Any]:
        """Positions of every error, descending into nested ValidationErrors.

        Leaf errors contribute their position (0 when unpositioned); nested
        errors contribute ``{position: nested.position_tree()}``.
        """
        tree: list[Any] = []
        for error in self.errors:
            pos = error.position if error.position is not None else 0
            if isinstance(error, ValidationError):
                tree.append({pos: error.position_tree()})
            else:
                tree.append(pos)
        return tree

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return "{ path://" + "/".join(self.path) + "/ [" + self.message + "] }"


def join_messages(errors: Sequence[FieldError | ValidationError]) -> str:
    return ", ".join(str(error) for error in errors)


def error_positions(error: ValidationError) -> set[Hashable | None]:
    """Return the set of top-level positions where failures were detected."""
    return {e.position for e in error.errors}


def leaf_errors(
    error: ValidationError,
    location: tuple[Hashable, ...] = (),
) -> Iterator[tuple[tuple[Hashable, ...], FieldError]]:
    """Yield ``(location, field_error)`` for every leaf failure under ``error``.

    ``location`` is the chain of keys/indices from the outermost value down to
    the failing one; unpositioned (whole-value) failures add nothing to it.
    """
    for e in error.errors:
        here = location if e.position is None else (*location, e.position)
        if isinstance(e, ValidationError):
            yield from leaf_errors(e, here)
        else:
            yield here, e
