"""Fixed-window admission limiter."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable

from .exceptions import AcquireCancelledError

# Upper bound on a single wait while a cancel event is being watched.
_CANCEL_POLL_SECONDS = 0.05
_MIN_WAIT_SECONDS = 50e-6


class RateLimiter(ABC):
    """Grants permits to callers under a quota."""

    @abstractmethod
    def acquire(
        self,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        """Block until a permit is granted.

        Raises AcquireCancelledError when timeout seconds pass, cancel is set
        or the limiter is closed before a permit is granted.
        """
        ...

    @abstractmethod
    def try_acquire(self) -> bool:
        """Grant a permit if one is available right now, without blocking."""
        ...

    def close(self) -> None:  # noqa: B027
        """Abort pending and future acquisitions."""


class FixedWindowRateLimiter(RateLimiter):
    """At most `limit` permits per fixed window of `window_seconds`.

    Windows are aligned to the construction instant and advance by whole
    multiples of the window length, so an idle gap never leaves a backlog of
    extra permits. Blocked callers are served first come, first served: each
    one takes a ticket and only the oldest waiting ticket may take a permit.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._min_wait = max(_MIN_WAIT_SECONDS, window_seconds / 100)
        self._lock = threading.Lock()
        self._cond = threading.Condition(self._lock)
        # Guarded by _lock.
        self._window_start = clock()
        self._used = 0
        self._waiters: deque[int] = deque()
        self._next_ticket = 0
        self._closed = False

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def acquire(
        self,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            self._check_not_cancelled(cancel)
            ticket = self._next_ticket
            self._next_ticket += 1
            self._waiters.append(ticket)
            try:
                while True:
                    now = self._clock()
                    self._roll_window(now)
                    if self._waiters[0] == ticket and self._used < self._limit:
                        self._used += 1
                        return

                    wait = self._window_start + self._window_seconds - now
                    if wait <= 0:
                        wait = self._min_wait
                    if deadline is not None:
                        remaining = deadline - time.monotonic()
                        if remaining <= 0:
                            raise AcquireCancelledError(
                                f"no permit granted within {timeout}s"
                            )
                        wait = min(wait, remaining)
                    if cancel is not None:
                        wait = min(wait, _CANCEL_POLL_SECONDS)
                    self._cond.wait(wait)
                    self._check_not_cancelled(cancel)
            finally:
                self._waiters.remove(ticket)
                self._cond.notify_all()

    def try_acquire(self) -> bool:
        if not self._lock.acquire(blocking=False):
            return False
        try:
            if self._closed:
                return False
            self._roll_window(self._clock())
            if self._waiters or self._used >= self._limit:
                return False
            self._used += 1
            return True
        finally:
            self._lock.release()

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def _check_not_cancelled(self, cancel: threading.Event | None) -> None:
        if self._closed:
            raise AcquireCancelledError("rate limiter is closed")
        if cancel is not None and cancel.is_set():
            raise AcquireCancelledError()

    def _roll_window(self, now: float) -> None:
        elapsed = now - self._window_start
        if elapsed < self._window_seconds:
            return
        windows_passed = max(1, int(elapsed // self._window_seconds))
        self._window_start += windows_passed * self._window_seconds
        self._used = 0
        self._cond.notify_all()
