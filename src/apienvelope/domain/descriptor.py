"""Typed, read-only view over a service's discovery document fragment.

Defaulting rules are applied once, at construction:
- string fields default to None,
- ``features`` and ``labels`` default to an empty tuple, never None.

A missing key (or an explicit null) is never an error. A present value of
the wrong shape raises :class:`SchemaMismatch`.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, model_validator

from apienvelope.domain.errors import SchemaMismatch, drop_nulls


def _freeze(value: Any) -> Any:
    """Copy *value* into read-only containers: mappings become proxies, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    return value


class ServiceDescriptor(BaseModel):
    """Service metadata read from a discovery document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    description: str | None = None
    documentation_link: str | None = Field(default=None, alias="documentationLink")
    features: tuple[str, ...] = ()
    labels: tuple[str, ...] = ()
    id: str | None = None
    title: str | None = None
    name: str | None = None
    version: str | None = None
    protocol: str | None = None

    _document: Mapping[str, Any] = PrivateAttr(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        return drop_nulls(data)

    @classmethod
    def from_document(cls, document: Mapping[str, Any] | None) -> ServiceDescriptor:
        """Build a descriptor from a loosely-typed document mapping.

        Raises:
            SchemaMismatch: A known key holds a value of the wrong shape.
        """
        raw = dict(document or {})
        try:
            descriptor = cls.model_validate(raw)
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            msg = f"Service document has malformed field(s): {', '.join(fields)}"
            raise SchemaMismatch(msg, fields) from exc
        descriptor._document = _freeze(raw)
        return descriptor

    @property
    def document(self) -> Mapping[str, Any]:
        """Read-only view of the backing document."""
        return self._document

    def get(self, key: str, default: Any = None) -> Any:
        """Read any raw key of the backing document."""
        return self._document.get(key, default)


class ServiceEndpoint(BaseModel):
    """Where a service lives: a server URL plus the service's base path."""

    model_config = ConfigDict(frozen=True)

    server_url: str = ""
    base_path: str = ""

    @property
    def base_uri(self) -> str:
        return f"{self.server_url}{self.base_path}"
