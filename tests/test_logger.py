"""Logger setup unit tests."""

import json
import logging

import pytest
import structlog

from crpt_api import LogSection, configure_logging
from crpt_api.logger import PACKAGE_LOGGER, REDACTED, RedactSensitiveKeys

pytestmark = pytest.mark.usefixtures("reset_logging")


def last_line(out: str) -> str:
    return out.strip().splitlines()[-1]


def test_json_output_is_redacted(capsys: pytest.CaptureFixture[str]) -> None:
    """JSON records carry level, logger and timestamp, with secrets masked."""
    log = configure_logging(LogSection(level="INFO", format="json"))
    log.info("sent", signature="sig==", status_code=200)

    record = json.loads(last_line(capsys.readouterr().out))
    assert record["event"] == "sent"
    assert record["level"] == "info"
    assert record["logger"] == PACKAGE_LOGGER
    assert record["signature"] == REDACTED
    assert record["status_code"] == 200
    assert "timestamp" in record


def test_text_output(capsys: pytest.CaptureFixture[str]) -> None:
    """The text format renders the event and its key/value pairs on one line."""
    log = configure_logging(LogSection(level="DEBUG", format="text"))
    log.debug("hello", status_code=201)

    line = last_line(capsys.readouterr().out)
    assert "hello" in line
    assert "status_code=201" in line


def test_level_filters_module_loggers(capsys: pytest.CaptureFixture[str]) -> None:
    """Loggers of package modules follow the configured level."""
    configure_logging(LogSection(level="WARNING"))
    log = structlog.stdlib.get_logger("crpt_api.outcome")
    log.info("hidden")
    log.warning("shown")

    out = capsys.readouterr().out
    assert "shown" in out
    assert "hidden" not in out


def test_reconfigure_keeps_single_handler() -> None:
    """Configuring twice updates the level without stacking handlers."""
    configure_logging(LogSection(level="INFO"))
    configure_logging(LogSection(level="DEBUG"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1


def test_root_logger_untouched() -> None:
    """Only the crpt_api logger is configured."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    configure_logging(LogSection(level="DEBUG"))
    assert root.level == level
    assert root.handlers == handlers


def test_redacts_sensitive_keys() -> None:
    """Sensitive keys are masked at any depth, case-insensitively."""
    processor = RedactSensitiveKeys()
    event = processor(
        None,
        "debug",
        {
            "event": "sending",
            "Authorization": "Bearer secret",
            "headers": {"authorization": "Bearer secret", "X-Client": "crpt"},
            "payloads": [{"signature": "sig=="}],
        },
    )
    assert event["event"] == "sending"
    assert event["Authorization"] == REDACTED
    assert event["headers"] == {"authorization": REDACTED, "X-Client": "crpt"}
    assert event["payloads"] == [{"signature": REDACTED}]


def test_redacts_custom_keys() -> None:
    """A custom key set replaces the default one."""
    processor = RedactSensitiveKeys(["Password"])
    event = processor(None, "info", {"password": "p", "signature": "s"})
    assert event == {"password": REDACTED, "signature": "s"}
