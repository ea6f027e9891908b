"""CrptApi: rate-limited client of the create document endpoint."""

from __future__ import annotations

import threading
from typing import Any

import httpx
import structlog

from .codec import JsonCodec, PayloadCodec, to_base64_text
from .config import CrptApiConfig
from .exceptions import InvalidArgumentError, PreparationFailedError
from .limiter import FixedWindowRateLimiter, RateLimiter
from .logger import configure_logging
from .models import (
    CallOptions,
    CreateDocumentRequest,
    CreateDocumentResult,
    HttpRequest,
    RawResponse,
)
from .outcome import classify_response, classify_transport_failure
from .transport import HttpxTransport, Transport

CREATE_DOCUMENT_PATH = "/api/v3/lk/documents/create"


class CrptApi:
    """Submits documents for domestic goods, at most N calls per window.

    One instance may be shared between threads. The limiter grants a permit
    before the request is built, so network latency never holds the lock.
    """

    def __init__(
        self,
        config: CrptApiConfig | None = None,
        *,
        transport: Transport | None = None,
        codec: PayloadCodec | None = None,
        rate_limiter: RateLimiter | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._config = config or CrptApiConfig()
        self._rate_limiter = rate_limiter or FixedWindowRateLimiter(
            self._config.request_limit, self._config.window_seconds
        )
        self._transport = transport or HttpxTransport(
            connect_timeout=self._config.connect_timeout,
            read_timeout=self._config.read_timeout,
        )
        self._codec = codec or JsonCodec()
        if logger is None and self._config.log is not None:
            configure_logging(self._config.log)
        self._logger = logger or structlog.stdlib.get_logger(__name__)

    @classmethod
    def with_limit(cls, window_seconds: float, request_limit: int) -> CrptApi:
        """Client with default settings and a quota of request_limit per window_seconds."""
        return cls(CrptApiConfig(request_limit=request_limit, window_seconds=window_seconds))

    @property
    def config(self) -> CrptApiConfig:
        return self._config

    def __enter__(self) -> CrptApi:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Cancel callers waiting for a permit and release the transport."""
        self._rate_limiter.close()
        self._transport.close()

    def acquire_permit(
        self,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self._rate_limiter.acquire(timeout=timeout, cancel=cancel)

    def try_acquire_permit(self) -> bool:
        return self._rate_limiter.try_acquire()

    def create_document_for_domestic_goods(
        self,
        document: Any,
        signature: str,
        options: CallOptions | None = None,
    ) -> RawResponse:
        """Same as submit, returning only the raw response."""
        return self.submit(document, signature, options).raw

    def submit(
        self,
        document: Any,
        signature: str,
        options: CallOptions | None = None,
        *,
        acquire_timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> CreateDocumentResult:
        """Submit a document introducing goods into circulation.

        Args:
            document: any value the codec can encode
            signature: detached signature of the document
            options: per-call headers, timeout and product group
            acquire_timeout: seconds to wait for a permit before giving up
            cancel: event that aborts waiting for a permit when set

        Returns:
            CreateDocumentResult for a 2xx response. parsed is None when the
            body is empty or does not match CreateDocumentResponse.

        Raises:
            InvalidArgumentError: document or signature missing (no permit used)
            AcquireCancelledError: waiting for a permit was aborted
            PreparationFailedError: the request could not be built
            RequestTimeoutError, TransportError: no response was obtained
            CrptApiError: non-2xx response, subclass depends on the status
        """
        if document is None:
            raise InvalidArgumentError("document is required")
        if not signature:
            raise InvalidArgumentError("signature is required")

        self._rate_limiter.acquire(timeout=acquire_timeout, cancel=cancel)

        try:
            request = self._build_request(document, signature, options)
        except Exception as e:
            raise PreparationFailedError(f"Failed to prepare request: {e}", cause=e) from e

        self._logger.debug(
            "sending create document request",
            method=request.method,
            url=request.url,
            header_names=sorted(request.headers),
        )
        try:
            raw = self._transport.send(request)
        except Exception as e:
            error = classify_transport_failure(e)
            if error is e:
                raise
            raise error from e

        self._logger.debug(
            "create document response received",
            status_code=raw.status_code,
            header_names=sorted(raw.headers),
        )
        return classify_response(raw, self._codec, self._logger)

    def _build_request(
        self,
        document: Any,
        signature: str,
        options: CallOptions | None,
    ) -> HttpRequest:
        product_group = options.normalized_product_group() if options else None
        envelope = CreateDocumentRequest(
            product_document=to_base64_text(self._codec.encode(document)),
            signature=signature,
            product_group=product_group,
        )
        body = self._codec.encode(envelope.to_dict())

        timeout = self._config.read_timeout
        if options is not None and options.request_timeout is not None:
            timeout = options.request_timeout

        return HttpRequest(
            method="POST",
            url=self._build_url(product_group),
            headers=self._merge_headers(options),
            body=body,
            timeout=timeout,
        )

    def _build_url(self, product_group: str | None) -> str:
        url = httpx.URL(self._config.base_url).join(CREATE_DOCUMENT_PATH)
        if product_group is not None:
            url = url.copy_merge_params({"pg": product_group})
        return str(url)

    def _merge_headers(self, options: CallOptions | None) -> dict[str, str]:
        headers = dict(self._config.default_headers)
        if not any(name.lower() == "content-type" for name in headers):
            headers["Content-Type"] = "application/json"
        if options is not None and options.headers:
            for name, value in options.headers.items():
                for existing in [k for k in headers if k.lower() == name.lower()]:
                    del headers[existing]
                headers[name] = value
        return headers
