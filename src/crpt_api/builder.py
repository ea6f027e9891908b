"""Fluent construction of CrptApi."""

from __future__ import annotations

from typing import Any

import structlog

from .client import CrptApi
from .codec import PayloadCodec
from .config import CrptApiConfig
from .limiter import RateLimiter
from .transport import Transport


class CrptApiBuilder:
    """Collects optional settings and collaborators, then builds a CrptApi."""

    def __init__(self, config: CrptApiConfig | None = None) -> None:
        self._settings: dict[str, Any] = (config or CrptApiConfig()).model_dump()
        self._transport: Transport | None = None
        self._codec: PayloadCodec | None = None
        self._rate_limiter: RateLimiter | None = None
        self._logger: structlog.stdlib.BoundLogger | None = None

    def limit(self, window_seconds: float, request_limit: int) -> CrptApiBuilder:
        self._settings["window_seconds"] = window_seconds
        self._settings["request_limit"] = request_limit
        return self

    def base_url(self, base_url: str) -> CrptApiBuilder:
        self._settings["base_url"] = base_url
        return self

    def default_header(self, name: str, value: str) -> CrptApiBuilder:
        self._settings["default_headers"] = {**self._settings["default_headers"], name: value}
        return self

    def auth_bearer(self, token: str) -> CrptApiBuilder:
        return self.default_header("Authorization", f"Bearer {token}")

    def content_type_json(self) -> CrptApiBuilder:
        return self.default_header("Content-Type", "application/json")

    def timeouts(self, connect: float, read: float) -> CrptApiBuilder:
        self._settings["connect_timeout"] = connect
        self._settings["read_timeout"] = read
        return self

    def logging(self, level: str = "INFO", format: str = "json") -> CrptApiBuilder:
        """Have the built client configure structlog output for the package."""
        self._settings["log"] = {"level": level, "format": format}
        return self

    def transport(self, transport: Transport) -> CrptApiBuilder:
        self._transport = transport
        return self

    def codec(self, codec: PayloadCodec) -> CrptApiBuilder:
        self._codec = codec
        return self

    def rate_limiter(self, rate_limiter: RateLimiter) -> CrptApiBuilder:
        self._rate_limiter = rate_limiter
        return self

    def logger(self, logger: structlog.stdlib.BoundLogger) -> CrptApiBuilder:
        self._logger = logger
        return self

    def build(self) -> CrptApi:
        """Validate the collected settings and create the client.

        Raises pydantic.ValidationError for invalid settings (e.g. a
        non-positive limit).
        """
        return CrptApi(
            CrptApiConfig.model_validate(self._settings),
            transport=self._transport,
            codec=self._codec,
            rate_limiter=self._rate_limiter,
            logger=self._logger,
        )
