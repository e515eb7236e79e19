"""Protocol versions, feature tags, and body classification enums."""

from __future__ import annotations

from enum import StrEnum


class ProtocolVersion(StrEnum):
    """Discovery protocol versions a service can be built against."""

    V1 = "1.0"
    V0_3 = "0.3"


class Feature(StrEnum):
    """Named protocol capabilities declared in a service's ``features`` list.

    Values are the canonical strings matched against the document.
    """

    LEGACY_DATA_RESPONSE = "dataWrapper"


class BodyKind(StrEnum):
    """Tag attached to a body extracted from an envelope."""

    DATA = "data"
    ERROR = "error"
