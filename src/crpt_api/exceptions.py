"""crpt_api exception types."""

from __future__ import annotations


class CrptApiError(Exception):
    """Base error of the crpt_api library.

    Carries the HTTP status code and raw response body when the error was
    produced from a response.
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.response_body = response_body
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class CrptApiErrorCodes:
    """CrptApiError code constants."""

    INVALID_ARGUMENT: str = "INVALID_ARGUMENT"
    CANCELLED: str = "CANCELLED"
    PREPARATION_FAILED: str = "PREPARATION_FAILED"
    TIMEOUT: str = "TIMEOUT"
    TRANSPORT_FAILURE: str = "TRANSPORT_FAILURE"
    CODEC_ERROR: str = "CODEC_ERROR"
    RATE_LIMIT_EXCEEDED: str = "RATE_LIMIT_EXCEEDED"
    BAD_REQUEST: str = "BAD_REQUEST"
    AUTHENTICATION_FAILED: str = "AUTHENTICATION_FAILED"
    SERVER_ERROR: str = "SERVER_ERROR"
    GENERIC_FAILURE: str = "GENERIC_FAILURE"


class InvalidArgumentError(CrptApiError):
    """Required input is missing."""

    def __init__(self, message: str) -> None:
        super().__init__(CrptApiErrorCodes.INVALID_ARGUMENT, message)


class AcquireCancelledError(CrptApiError):
    """Waiting for a permit was aborted before one was granted."""

    def __init__(self, message: str = "permit acquisition cancelled") -> None:
        super().__init__(CrptApiErrorCodes.CANCELLED, message)


class PreparationFailedError(CrptApiError):
    """Building the request failed before anything was sent."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(CrptApiErrorCodes.PREPARATION_FAILED, message, cause=cause)


class RequestTimeoutError(CrptApiError):
    """The transport exceeded its deadline."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(CrptApiErrorCodes.TIMEOUT, message, cause=cause)


class TransportError(CrptApiError):
    """Any transport level failure other than a timeout."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(CrptApiErrorCodes.TRANSPORT_FAILURE, message, cause=cause)


class CodecError(CrptApiError):
    """A value could not be encoded or decoded."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(CrptApiErrorCodes.CODEC_ERROR, message, cause=cause)


class _StatusError(CrptApiError):
    _code: str = CrptApiErrorCodes.GENERIC_FAILURE

    def __init__(self, message: str, status_code: int, response_body: str | None) -> None:
        super().__init__(
            self._code,
            message,
            status_code=status_code,
            response_body=response_body,
        )


class RateLimitExceededError(_StatusError):
    """The server rejected the call with 429."""

    _code = CrptApiErrorCodes.RATE_LIMIT_EXCEEDED


class BadRequestError(_StatusError):
    """The server rejected the payload (400 or 422)."""

    _code = CrptApiErrorCodes.BAD_REQUEST


class AuthenticationError(_StatusError):
    """The server rejected the credentials (401 or 403)."""

    _code = CrptApiErrorCodes.AUTHENTICATION_FAILED


class ServerError(_StatusError):
    """The server failed with a 5xx status."""

    _code = CrptApiErrorCodes.SERVER_ERROR


class ConfigError(CrptApiError):
    """Configuration could not be read or validated."""


class ConfigErrorCodes:
    """ConfigError code constants."""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
