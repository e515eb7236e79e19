"""apienvelope — version-aware envelope handling for REST API clients."""

from apienvelope.codec.envelope import RawBody, select_codec
from apienvelope.codec.serializer import JsonSerializer, Serializer
from apienvelope.config.settings import EnvelopeSettings
from apienvelope.domain.descriptor import ServiceDescriptor, ServiceEndpoint
from apienvelope.domain.errors import (
    ApiEnvelopeError,
    ApiError,
    ErrorDetail,
    ErrorItem,
    MalformedEnvelope,
    SchemaMismatch,
)
from apienvelope.domain.features import FeatureSet
from apienvelope.domain.types import BodyKind, Feature, ProtocolVersion
from apienvelope.service import ApiService

__version__ = "0.1.0"

__all__ = [
    "ApiEnvelopeError",
    "ApiError",
    "ApiService",
    "BodyKind",
    "EnvelopeSettings",
    "ErrorDetail",
    "ErrorItem",
    "Feature",
    "FeatureSet",
    "JsonSerializer",
    "MalformedEnvelope",
    "ProtocolVersion",
    "RawBody",
    "SchemaMismatch",
    "Serializer",
    "ServiceDescriptor",
    "ServiceEndpoint",
    "select_codec",
]
