"""crpt_api: rate-limited client of the CRPT create document endpoint."""

from .builder import CrptApiBuilder
from .client import CREATE_DOCUMENT_PATH, CrptApi
from .codec import JsonCodec, PayloadCodec
from .config import CrptApiConfig, LogSection, load_config
from .exceptions import (
    AcquireCancelledError,
    AuthenticationError,
    BadRequestError,
    CodecError,
    ConfigError,
    ConfigErrorCodes,
    CrptApiError,
    CrptApiErrorCodes,
    InvalidArgumentError,
    PreparationFailedError,
    RateLimitExceededError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from .limiter import FixedWindowRateLimiter, RateLimiter
from .logger import configure_logging
from .models import (
    CallOptions,
    CreateDocumentRequest,
    CreateDocumentResponse,
    CreateDocumentResult,
    DocumentFormat,
    DocumentType,
    HttpRequest,
    RawResponse,
)
from .transport import HttpxTransport, Transport

__all__ = [
    "CrptApi",
    "CrptApiBuilder",
    "CREATE_DOCUMENT_PATH",
    "CrptApiConfig",
    "LogSection",
    "load_config",
    "configure_logging",
    "RateLimiter",
    "FixedWindowRateLimiter",
    "Transport",
    "HttpxTransport",
    "PayloadCodec",
    "JsonCodec",
    "CallOptions",
    "HttpRequest",
    "RawResponse",
    "CreateDocumentRequest",
    "CreateDocumentResponse",
    "CreateDocumentResult",
    "DocumentFormat",
    "DocumentType",
    "CrptApiError",
    "CrptApiErrorCodes",
    "InvalidArgumentError",
    "AcquireCancelledError",
    "PreparationFailedError",
    "RequestTimeoutError",
    "TransportError",
    "CodecError",
    "RateLimitExceededError",
    "BadRequestError",
    "AuthenticationError",
    "ServerError",
    "ConfigError",
    "ConfigErrorCodes",
]
