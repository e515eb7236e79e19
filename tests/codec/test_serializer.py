"""Tests for the pydantic-backed JSON serializer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from apienvelope.codec.serializer import JsonSerializer
from apienvelope.domain.errors import SchemaMismatch
from tests.conftest import UrlResource


@dataclass
class Counter:
    name: str
    value: int = 0


class TestDecode:
    def test_decode_json_bytes(self) -> None:
        result = JsonSerializer().decode(
            b'{"kind":"urlshortener#url","longUrl":"http://google.com/"}', UrlResource
        )
        assert result.kind == "urlshortener#url"
        assert result.long_url == "http://google.com/"
        assert result.status is None

    def test_unknown_keys_are_ignored(self) -> None:
        result = JsonSerializer().decode_value({"kind": "k", "created": "2010-01-01"}, UrlResource)
        assert result.kind == "k"

    def test_dataclass_target(self) -> None:
        result = JsonSerializer().decode_value({"name": "hits"}, Counter)
        assert result == Counter(name="hits", value=0)

    def test_builtin_target(self) -> None:
        result = JsonSerializer().decode_value({"a": 1}, dict[str, Any])
        assert result == {"a": 1}

    def test_wrong_shape_raises_schema_mismatch(self) -> None:
        with pytest.raises(SchemaMismatch) as exc_info:
            JsonSerializer().decode_value({"kind": ["not", "a", "string"]}, UrlResource)
        assert "kind" in exc_info.value.fields
        assert "UrlResource" in str(exc_info.value)


class TestEncode:
    def test_compact_aliases_without_nulls(self) -> None:
        value = UrlResource(kind="urlshortener#url", long_url="http://google.com/")
        assert JsonSerializer().encode(value) == (
            b'{"kind":"urlshortener#url","longUrl":"http://google.com/"}'
        )

    def test_field_order_follows_schema(self) -> None:
        value = UrlResource(status="OK", long_url="u", kind="k")
        assert JsonSerializer().encode(value) == b'{"kind":"k","longUrl":"u","status":"OK"}'

    def test_dataclass_value(self) -> None:
        assert JsonSerializer().encode(Counter(name="hits", value=3)) == (
            b'{"name":"hits","value":3}'
        )
