"""ApiService, the facade every API client call goes through.

A service is built once from ``(version, name, document)``. The feature
set, descriptor accessors, and envelope codec are fixed at construction,
so one instance can be shared across threads.

Inbound:  bytes -> envelope decode -> error translation -> typed decode
Outbound: typed value -> serializer encode -> envelope wrap -> str
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import IO, Any

from apienvelope.codec.envelope import EnvelopeCodec, select_codec
from apienvelope.codec.serializer import JsonSerializer, Serializer
from apienvelope.codec.translator import translate
from apienvelope.config.settings import EnvelopeSettings
from apienvelope.domain.descriptor import ServiceDescriptor, ServiceEndpoint
from apienvelope.domain.errors import ApiError, ErrorDetail
from apienvelope.domain.features import FeatureSet
from apienvelope.domain.types import Feature, ProtocolVersion

logger = logging.getLogger(__name__)


class ApiService:
    """Version-aware request/response handling for one REST service.

    Usage::

        service = ApiService("v1", "urlshortener", discovery_doc)
        url = service.deserialize_response(response_stream, Url)
        body = service.serialize_request(Url(long_url="http://google.com/"))

    Raises from ``deserialize_response``:
        ApiError: The server returned an error payload.
        MalformedEnvelope: The response does not have the expected envelope.
        SchemaMismatch: The body does not fit the requested schema.
    """

    def __init__(
        self,
        version: str,
        name: str,
        document: Mapping[str, Any] | None = None,
        *,
        discovery_version: ProtocolVersion | str | None = None,
        endpoint: ServiceEndpoint | None = None,
        serializer: Serializer | None = None,
        settings: EnvelopeSettings | None = None,
    ) -> None:
        self._settings = settings or EnvelopeSettings()
        self._version = version
        self._name = name
        self._descriptor = ServiceDescriptor.from_document(document)
        self._features = FeatureSet(self._descriptor.features)
        if discovery_version is None:
            self._discovery_version = self._settings.discovery_version
        else:
            self._discovery_version = ProtocolVersion(discovery_version)
        self._endpoint = endpoint or ServiceEndpoint()
        self._serializer: Serializer = serializer or JsonSerializer()
        self._codec: EnvelopeCodec = select_codec(self._discovery_version, self._features)
        logger.debug(
            "Service %s %s uses the %s envelope (discovery %s)",
            name,
            version,
            self._codec.name,
            self._discovery_version,
        )

    # --- Identity ---

    @property
    def version(self) -> str:
        return self._version

    @property
    def name(self) -> str:
        return self._name

    @property
    def discovery_version(self) -> ProtocolVersion:
        return self._discovery_version

    @property
    def endpoint(self) -> ServiceEndpoint:
        return self._endpoint

    @property
    def base_uri(self) -> str:
        return self._endpoint.base_uri

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    @property
    def codec(self) -> EnvelopeCodec:
        return self._codec

    # --- Descriptor accessors ---

    @property
    def descriptor(self) -> ServiceDescriptor:
        return self._descriptor

    @property
    def description(self) -> str | None:
        return self._descriptor.description

    @property
    def documentation_link(self) -> str | None:
        return self._descriptor.documentation_link

    @property
    def labels(self) -> tuple[str, ...]:
        return self._descriptor.labels

    @property
    def id(self) -> str | None:
        return self._descriptor.id

    @property
    def title(self) -> str | None:
        return self._descriptor.title

    @property
    def protocol(self) -> str | None:
        return self._descriptor.protocol

    # --- Features ---

    @property
    def features(self) -> tuple[str, ...]:
        """Declared feature tags in document order."""
        return self._features.tags

    @property
    def feature_set(self) -> FeatureSet:
        return self._features

    def has_feature(self, tag: Feature | str) -> bool:
        return self._features.has(tag)

    # --- Wire operations ---

    def deserialize_response[T](self, stream: IO[bytes] | IO[str], schema: type[T]) -> T:
        """Read a whole response from *stream* and decode it into *schema*.

        The stream is read but not closed; releasing it is the caller's job.
        Fields of *schema* missing from the body take their defaults. The body
        is validated as JSON text, so strict schemas accept wire formats such
        as ISO timestamps.
        """
        body = self._codec.decode(stream.read(), encoding=self._settings.encoding)
        detail = translate(body)
        if detail is not None:
            raise ApiError(detail)
        return self._serializer.decode(json.dumps(body.value), schema)

    def deserialize_error(self, stream: IO[bytes] | IO[str]) -> ErrorDetail | None:
        """Read an error response without raising.

        Returns None when the response is not error-shaped.
        """
        body = self._codec.decode(stream.read(), encoding=self._settings.encoding)
        return translate(body)

    def serialize_request(self, value: Any) -> str:
        """Encode *value* as compact JSON in this service's envelope."""
        return self._codec.encode(value, self._serializer).decode("utf-8")

    def __repr__(self) -> str:
        return (
            f"ApiService(name={self._name!r}, version={self._version!r}, "
            f"discovery_version={self._discovery_version.value!r})"
        )
