"""Shared fakes for crpt_api tests."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator

import pytest
import structlog

from crpt_api import HttpRequest, RateLimiter, RawResponse, Transport
from crpt_api.logger import PACKAGE_LOGGER


class CapturingTransport(Transport):
    """Records every request and answers with a fixed response."""

    def __init__(self, status_code: int = 200, body: str = '{"value":"uuid-1"}') -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[HttpRequest] = []
        self.closed = False

    @property
    def last(self) -> HttpRequest:
        return self.requests[-1]

    def send(self, request: HttpRequest) -> RawResponse:
        self.requests.append(request)
        return RawResponse(self.status_code, self.body, {"x-request-id": ["r-1"]})

    def close(self) -> None:
        self.closed = True


class RaisingTransport(Transport):
    """Raises the given exception on every send."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    def send(self, request: HttpRequest) -> RawResponse:
        self.calls += 1
        raise self.error


class CountingLimiter(RateLimiter):
    """Grants every permit and counts acquisitions."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.acquired = 0
        self.closed = False
        self._lock = threading.Lock()

    def acquire(
        self,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        if self.error is not None:
            raise self.error
        with self._lock:
            self.acquired += 1

    def try_acquire(self) -> bool:
        with self._lock:
            self.acquired += 1
        return True

    def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self.now

    def advance(self, seconds: float) -> None:
        with self._lock:
            self.now += seconds


def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    """Poll predicate until it holds or timeout passes."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def _clear_package_logging() -> None:
    structlog.reset_defaults()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Start and finish with structlog and the crpt_api logger unconfigured."""
    _clear_package_logging()
    yield
    _clear_package_logging()
