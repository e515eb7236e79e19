"""Envelope codecs: strip and add version-specific response wrapping.

Two wire conventions:
- Data envelope (legacy, v0.3): ``{"data": <payload>}`` on success.
- Direct (v1): the payload is the top-level object.

Both report failures as a top-level ``{"error": {...}}`` object.

The codec is chosen once per service by :func:`select_codec` and never
re-decided per call. Codecs hold no state, so one instance is shared.
"""

from __future__ import annotations

import codecs
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from apienvelope.codec.serializer import JsonSerializer, Serializer
from apienvelope.domain.errors import MalformedEnvelope
from apienvelope.domain.features import FeatureSet
from apienvelope.domain.types import BodyKind, ProtocolVersion

logger = logging.getLogger(__name__)

DATA_KEY = "data"
ERROR_KEY = "error"


@dataclass(frozen=True, slots=True)
class RawBody:
    """Payload extracted from an envelope, tagged as data or error."""

    kind: BodyKind
    value: Any

    @property
    def is_error(self) -> bool:
        return self.kind is BodyKind.ERROR


def parse_document(raw: bytes | str, encoding: str = "utf-8") -> Any:
    """Parse a complete JSON document.

    Raises:
        MalformedEnvelope: The input is not decodable text or not valid JSON.
    """
    if isinstance(raw, bytes):
        # utf-8-sig also strips a leading byte-order mark
        if codecs.lookup(encoding).name == "utf-8":
            encoding = "utf-8-sig"
        try:
            raw = raw.decode(encoding)
        except UnicodeDecodeError as exc:
            msg = f"Response is not valid {encoding} text: {exc}"
            raise MalformedEnvelope(msg) from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Response is not valid JSON: {exc}"
        raise MalformedEnvelope(msg) from exc


def _error_member(document: Any) -> Any:
    if isinstance(document, Mapping):
        return document.get(ERROR_KEY)
    return None


class EnvelopeCodec(ABC):
    """Reversible mapping between wire bytes and a tagged body."""

    name: str = ""

    def decode(self, raw: bytes | str, *, encoding: str = "utf-8") -> RawBody:
        document = parse_document(raw, encoding)
        error = _error_member(document)
        if error is not None:
            logger.debug("Decoded %s envelope carrying an error body", self.name)
            return RawBody(BodyKind.ERROR, error)
        return RawBody(BodyKind.DATA, self.unwrap(document))

    def encode(self, value: Any, serializer: Serializer | None = None) -> bytes:
        payload = (serializer or JsonSerializer()).encode(value)
        return self.wrap(payload)

    @abstractmethod
    def unwrap(self, document: Any) -> Any:
        """Extract the payload from a non-error document."""

    @abstractmethod
    def wrap(self, payload: bytes) -> bytes:
        """Frame an already-serialized payload for the wire."""


class DataEnvelopeCodec(EnvelopeCodec):
    """Legacy ``{"data": ...}`` convention."""

    name = "data"

    def unwrap(self, document: Any) -> Any:
        if not isinstance(document, Mapping):
            msg = f"Expected a JSON object envelope, got {type(document).__name__}"
            logger.debug("Malformed envelope: %s", msg)
            raise MalformedEnvelope(msg)
        if DATA_KEY not in document:
            msg = f"Envelope has neither a '{DATA_KEY}' nor an '{ERROR_KEY}' member"
            logger.debug("Malformed envelope: %s", msg)
            raise MalformedEnvelope(msg)
        return document[DATA_KEY]

    def wrap(self, payload: bytes) -> bytes:
        return b'{"' + DATA_KEY.encode("ascii") + b'":' + payload + b"}"


class DirectCodec(EnvelopeCodec):
    """v1 convention: the payload is the document."""

    name = "direct"

    def unwrap(self, document: Any) -> Any:
        return document

    def wrap(self, payload: bytes) -> bytes:
        return payload


DATA_ENVELOPE = DataEnvelopeCodec()
DIRECT = DirectCodec()


def select_codec(version: ProtocolVersion, features: FeatureSet) -> EnvelopeCodec:
    """Pick the codec for a ``(version, legacy feature)`` combination.

    The legacy data-response feature wins over the declared version: a v1
    service declaring it still speaks the data envelope.
    """
    if version == ProtocolVersion.V0_3 or features.legacy_data_response:
        return DATA_ENVELOPE
    return DIRECT
