"""Turn an error-tagged body into an ErrorDetail.

INVARIANT: An error body is never dropped. It either becomes an
ErrorDetail or, when unreadable, a MalformedEnvelope.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from apienvelope.codec.envelope import RawBody
from apienvelope.domain.errors import ErrorDetail, MalformedEnvelope

logger = logging.getLogger(__name__)


def translate(body: RawBody) -> ErrorDetail | None:
    """Return the ErrorDetail carried by *body*, or None for data bodies.

    A bare string error (``{"error": "invalid_grant"}``) is read as the
    message with code 0.

    Raises:
        MalformedEnvelope: The error member cannot be read as an error object.
    """
    if not body.is_error:
        return None

    value = body.value
    if isinstance(value, str):
        detail = ErrorDetail(message=value)
    elif isinstance(value, Mapping):
        try:
            detail = ErrorDetail.model_validate(value)
        except ValidationError as exc:
            msg = f"Unreadable error object in response: {exc.error_count()} problem(s)"
            raise MalformedEnvelope(msg) from exc
    else:
        msg = f"Unreadable error member of type {type(value).__name__}"
        raise MalformedEnvelope(msg)

    logger.debug(
        "Translated server error code=%s items=%d", detail.code, len(detail.errors)
    )
    return detail
