"""structlog based logger setup."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

import structlog

from .config import LogSection

REDACTED = "[REDACTED]"

SENSITIVE_KEYS_DEFAULT: frozenset[str] = frozenset(
    {
        "authorization",
        "x-api-key",
        "signature",
        "product_document",
        "token",
        "cookie",
    }
)


def _redact(value: Any, sensitive_keys: frozenset[str]) -> Any:
    if isinstance(value, Mapping):
        return {
            k: REDACTED if str(k).lower() in sensitive_keys else _redact(v, sensitive_keys)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_redact(v, sensitive_keys) for v in value)
    return value


class RedactSensitiveKeys:
    """structlog processor replacing values of sensitive keys with a placeholder."""

    def __init__(self, sensitive_keys: Iterable[str] | None = None) -> None:
        self._sensitive_keys = frozenset(
            k.lower() for k in (sensitive_keys or SENSITIVE_KEYS_DEFAULT)
        )

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key in list(event_dict):
            if key.lower() in self._sensitive_keys:
                event_dict[key] = REDACTED
            else:
                event_dict[key] = _redact(event_dict[key], self._sensitive_keys)
        return event_dict


# stdlib logger every module of the package logs through.
PACKAGE_LOGGER = "crpt_api"
_HANDLER_NAME = "crpt_api.stdout"


def _processors(section: LogSection) -> list[structlog.types.Processor]:
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if section.format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        RedactSensitiveKeys(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def _install_handler(level: int) -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)
    package_logger.propagate = False
    return package_logger


def configure_logging(section: LogSection) -> structlog.stdlib.BoundLogger:
    """Route the client's structlog events to stdout as the section describes.

    Only the `crpt_api` stdlib logger gets the level and the handler, so the
    host application's root logging is left alone. Calling it again replaces
    the level and the renderer without adding a second handler.

    Returns:
        a logger bound to the `crpt_api` stdlib logger
    """
    _install_handler(logging.getLevelName(section.level))
    structlog.configure(
        processors=_processors(section),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return structlog.stdlib.get_logger(PACKAGE_LOGGER)
