"""Convert error values into serializable ErrorReport trees."""

from collections.abc import Hashable

from righttypes.errors import FieldError, ValidationError
from righttypes.schemas.error import ErrorReport


def _position(position: Hashable | None) -> str | int | None:
    # bool is an int subclass but isn't a meaningful index
    if position is None or (isinstance(position, int) and not isinstance(position, bool)):
        return position
    if isinstance(position, str):
        return position
    return repr(position)


def to_report(error: FieldError | ValidationError) -> ErrorReport:
    """Mirror ``error`` (recursively) as an ErrorReport."""
    if isinstance(error, FieldError):
        return ErrorReport(kind="field", position=_position(error.position), message=error.message)
    return ErrorReport(
        kind="validation",
        position=_position(error.position),
        message=error.message,
        path=list(error.path),
        errors=[to_report(e) for e in error.errors],
    )


def report_json(error: FieldError | ValidationError) -> dict[str, object]:
    """Build the error report as a JSON-compatible dict."""
    return to_report(error).model_dump(mode="json")
