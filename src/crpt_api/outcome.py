"""Mapping of transport results to CreateDocumentResult or typed errors."""

from __future__ import annotations

import httpx
import structlog

from .codec import PayloadCodec
from .exceptions import (
    AuthenticationError,
    BadRequestError,
    CrptApiError,
    CrptApiErrorCodes,
    RateLimitExceededError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from .models import CreateDocumentResponse, CreateDocumentResult, RawResponse

logger = structlog.stdlib.get_logger(__name__)


def error_for_status(status_code: int, body: str | None = None) -> CrptApiError | None:
    """Return the error for a non-2xx status, or None for 2xx."""
    if 200 <= status_code <= 299:
        return None
    if status_code == 429:
        return RateLimitExceededError(
            f"Request limit exceeded ({status_code})", status_code, body
        )
    if status_code in (400, 422):
        return BadRequestError(f"Invalid request data ({status_code})", status_code, body)
    if status_code in (401, 403):
        return AuthenticationError(
            f"Authentication or authorization failed ({status_code})", status_code, body
        )
    if 500 <= status_code <= 599:
        return ServerError(f"Server error ({status_code})", status_code, body)
    return CrptApiError(
        CrptApiErrorCodes.GENERIC_FAILURE,
        f"Unsuccessful response status: {status_code}",
        status_code=status_code,
        response_body=body,
    )


def classify_transport_failure(exc: BaseException) -> CrptApiError:
    """Map an exception raised by a Transport to TIMEOUT or TRANSPORT_FAILURE."""
    if isinstance(exc, (RequestTimeoutError, TransportError)):
        return exc
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return RequestTimeoutError(f"HTTP request timed out: {exc}", cause=exc)
    return TransportError(f"HTTP call failed: {exc}", cause=exc)


def parse_success_body(
    body: str | None,
    codec: PayloadCodec,
    log: structlog.stdlib.BoundLogger | None = None,
) -> CreateDocumentResponse | None:
    """Decode a 2xx body. A blank or malformed body yields None."""
    if body is None or not body.strip():
        return None
    try:
        return codec.decode(body, CreateDocumentResponse)
    except Exception as e:
        (log or logger).warning("failed to parse successful response body", error=str(e))
        return None


def classify_response(
    raw: RawResponse,
    codec: PayloadCodec,
    log: structlog.stdlib.BoundLogger | None = None,
) -> CreateDocumentResult:
    """Return the result for a 2xx response, raise the mapped error otherwise."""
    error = error_for_status(raw.status_code, raw.body)
    if error is None:
        return CreateDocumentResult(raw=raw, parsed=parse_success_body(raw.body, codec, log))
    raise error
