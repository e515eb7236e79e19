"""Generic JSON serializer for arbitrary typed schemas.

Backed by pydantic ``TypeAdapter``: any type pydantic can validate
(models, dataclasses, TypedDicts, builtin containers) is a valid target.
Unknown keys are ignored and missing optional keys take their defaults.
Output is compact JSON with field aliases and no ``null`` fields.
"""

from __future__ import annotations

import functools
from typing import Any, Protocol

from pydantic import BaseModel, TypeAdapter, ValidationError

from apienvelope.domain.errors import SchemaMismatch


class Serializer(Protocol):
    """What the service needs from a serializer."""

    def decode[T](self, data: bytes | str, target: type[T]) -> T: ...

    def decode_value[T](self, value: Any, target: type[T]) -> T: ...

    def encode(self, value: Any) -> bytes: ...


@functools.lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def _mismatch(exc: ValidationError, target: Any) -> SchemaMismatch:
    fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
    name = getattr(target, "__name__", repr(target))
    msg = f"Response body does not match {name}: {exc.error_count()} error(s)"
    return SchemaMismatch(msg, fields)


class JsonSerializer:
    """Default :class:`Serializer` implementation."""

    def decode[T](self, data: bytes | str, target: type[T]) -> T:
        """Decode raw JSON *data* into an instance of *target*.

        Raises:
            SchemaMismatch: The JSON is valid but does not fit *target*.
        """
        try:
            return _adapter(target).validate_json(data)
        except ValidationError as exc:
            raise _mismatch(exc, target) from exc

    def decode_value[T](self, value: Any, target: type[T]) -> T:
        """Decode an already-parsed JSON value into an instance of *target*."""
        try:
            return _adapter(target).validate_python(value)
        except ValidationError as exc:
            raise _mismatch(exc, target) from exc

    def encode(self, value: Any) -> bytes:
        if isinstance(value, BaseModel):
            return value.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
        return _adapter(type(value)).dump_json(value, by_alias=True, exclude_none=True)
