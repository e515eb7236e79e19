"""Server error models and the exception taxonomy.

Three failure kinds, never conflated:
- MalformedEnvelope: the response does not have the declared envelope shape.
- ApiError: the server reported an error payload.
- SchemaMismatch: a value is present but has the wrong shape.

INVARIANT: ApiError always carries the full ErrorDetail, and its string
form names every error item's location.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def drop_nulls(data: Any) -> Any:
    """Treat explicit JSON nulls in a mapping as missing keys."""
    if isinstance(data, Mapping):
        return {key: value for key, value in data.items() if value is not None}
    return data


class ErrorItem(BaseModel):
    """One entry of an error response's ``errors`` list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str
    domain: str = ""
    reason: str = ""
    location_type: str = Field(default="", alias="locationType")
    location: str = ""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        return drop_nulls(data)

    def describe(self) -> str:
        where = self.location
        if self.location_type:
            where = f"{where} - {self.location_type}"
        return (
            f"Message[{self.message}] Location[{where}] "
            f"Reason[{self.reason}] Domain[{self.domain}]"
        )


class ErrorDetail(BaseModel):
    """Structured representation of a server-reported error."""

    model_config = ConfigDict(frozen=True)

    code: int = 0
    message: str = ""
    errors: list[ErrorItem] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        return drop_nulls(data)

    @property
    def locations(self) -> list[str]:
        return [item.location for item in self.errors if item.location]

    def describe(self) -> str:
        """Render the error for diagnostics.

        Layout::

            Required [400]
            Errors [
                Message[Required] Location[resource.longUrl - parameter] ...
            ]
        """
        lines = [f"{self.message} [{self.code}]"]
        if self.errors:
            lines.append("Errors [")
            lines.extend(f"    {item.describe()}" for item in self.errors)
            lines.append("]")
        return "\n".join(lines)


class ApiEnvelopeError(Exception):
    """Base class for every failure raised by apienvelope."""


class MalformedEnvelope(ApiEnvelopeError):
    """The response violates the structure of the active envelope convention."""


class SchemaMismatch(ApiEnvelopeError):
    """A value exists but cannot be read as the expected type."""

    def __init__(self, message: str, fields: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class ApiError(ApiEnvelopeError):
    """The server answered with an error payload."""

    def __init__(self, detail: ErrorDetail) -> None:
        super().__init__(detail)
        self.detail = detail

    @property
    def code(self) -> int:
        return self.detail.code

    @property
    def message(self) -> str:
        return self.detail.message

    @property
    def errors(self) -> list[ErrorItem]:
        return self.detail.errors

    def __str__(self) -> str:
        return self.detail.describe()

    def __repr__(self) -> str:
        return f"ApiError(code={self.code!r}, message={self.message!r})"
