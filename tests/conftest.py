"""Shared pytest fixtures and test helpers for apienvelope tests."""

from __future__ import annotations

import io
import os
from collections.abc import Generator
from typing import Any

import pytest
from pydantic import BaseModel, ConfigDict, Field

from apienvelope.domain.types import Feature, ProtocolVersion
from apienvelope.service import ApiService


class UrlResource(BaseModel):
    """Sample response schema: a shortened URL resource."""

    model_config = ConfigDict(populate_by_name=True)

    kind: str | None = None
    long_url: str | None = Field(default=None, alias="longUrl")
    status: str | None = None


V1_RESPONSE = '{"kind":"urlshortener#url","longUrl":"http://google.com/"}'
LEGACY_RESPONSE = '{ "data" : {"kind": "urlshortener#url", "longUrl": "http://google.com/"} }'
ERROR_RESPONSE = """{
    "error": {
        "errors": [
            {
                "domain": "global",
                "reason": "required",
                "message": "Required",
                "locationType": "parameter",
                "location": "resource.longUrl"
            }
        ],
        "code": 400,
        "message": "Required"
    }
}"""


def stream_of(text: str) -> io.BytesIO:
    """Wrap *text* in a UTF-8 byte stream."""
    return io.BytesIO(text.encode("utf-8"))


def legacy_document(**extra: Any) -> dict[str, Any]:
    """Discovery document declaring the legacy data-response feature."""
    return {"features": [Feature.LEGACY_DATA_RESPONSE.value], **extra}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep ``APIENVELOPE_*`` variables from the host out of every test."""
    for key in list(os.environ):
        if key.startswith("APIENVELOPE_"):
            monkeypatch.delenv(key)
    yield


@pytest.fixture
def v1_service() -> ApiService:
    """v1 service with an empty discovery document."""
    return ApiService("V1", "NameTest", {})


@pytest.fixture
def legacy_service() -> ApiService:
    """v1-declared service that opts into the legacy data envelope."""
    return ApiService("V1", "NameTest", legacy_document())


@pytest.fixture
def v03_service() -> ApiService:
    """Service declared against the v0.3 discovery protocol."""
    return ApiService("V1", "NameTest", {}, discovery_version=ProtocolVersion.V0_3)


@pytest.fixture
def url_resource() -> UrlResource:
    return UrlResource(kind="urlshortener#url", long_url="http://google.com/")
