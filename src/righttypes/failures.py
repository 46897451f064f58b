"""Generic "is this value a failure?" test.

Error value types register themselves here so code outside the validation
engine can recognise them without importing the engine's internals.
"""

_failure_types: list[type] = []


def register_failure[C: type](cls: C) -> C:
    """Class decorator: instances of ``cls`` count as failures for is_failure()."""
    if cls not in _failure_types:
        _failure_types.append(cls)
    return cls


def is_failure(value: object) -> bool:
    """Return True iff ``value`` is an instance of a registered failure type."""
    return isinstance(value, tuple(_failure_types))
