"""HTTP transports."""

from __future__ import annotations

from abc import ABC, abstractmethod

import httpx

from .exceptions import RequestTimeoutError, TransportError
from .models import HttpRequest, RawResponse

_SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


class Transport(ABC):
    """Performs one HTTP exchange."""

    @abstractmethod
    def send(self, request: HttpRequest) -> RawResponse:
        """Send request and return the response.

        Raises RequestTimeoutError when the deadline passes and TransportError
        for any other failure to obtain a response.
        """
        ...

    def close(self) -> None:  # noqa: B027
        """Release resources held by the transport."""


class HttpxTransport(Transport):
    """Transport backed by a shared httpx.Client."""

    def __init__(
        self,
        connect_timeout: float = 10.0,
        read_timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(read_timeout, connect=connect_timeout),
        )

    def send(self, request: HttpRequest) -> RawResponse:
        method = request.method.upper()
        if method not in _SUPPORTED_METHODS:
            raise TransportError(f"Unsupported method: {request.method}")
        timeout = request.timeout if request.timeout is not None else self._read_timeout
        content = None
        if method in ("POST", "PUT"):
            content = (request.body or "").encode("utf-8")
        try:
            resp = self._client.request(
                method,
                request.url,
                headers=dict(request.headers),
                content=content,
                timeout=httpx.Timeout(timeout, connect=self._connect_timeout),
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"HTTP request timed out: {e}", cause=e) from e
        except Exception as e:
            raise TransportError(f"HTTP call failed: {e}", cause=e) from e
        return RawResponse(
            status_code=resp.status_code,
            body=resp.text,
            headers={name: resp.headers.get_list(name) for name in resp.headers.keys()},
        )

    def close(self) -> None:
        self._client.close()
