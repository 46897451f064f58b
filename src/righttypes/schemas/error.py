"""Serializable error report schemas.

A ValidationError holds arbitrary Python values (the failing subject, map
keys of any hashable type). ErrorReport is its JSON-safe mirror, suitable for
log events or HTTP error envelopes. righttypes.report builds these from
error values.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ErrorReport(BaseModel):
    """One node of an error tree: a field error or a nested validation error."""

    kind: Literal["field", "validation"]
    position: str | int | None = None
    message: str
    path: list[str] = Field(default_factory=list)
    errors: list["ErrorReport"] = Field(default_factory=list)
