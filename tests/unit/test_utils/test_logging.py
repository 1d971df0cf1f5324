"""Tests for libsql_config.utils.logging."""

import logging
import sys

import pytest

from libsql_config._serialization import decode_json
from libsql_config.utils.logging import (
    ROOT_LOGGER_NAME,
    StructuredFormatter,
    configure_logging,
    get_logger,
    log_with_context,
)


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_get_logger_namespacing() -> None:
    assert get_logger().name == ROOT_LOGGER_NAME
    assert get_logger("config").name == "libsql_config.config"
    assert get_logger("libsql_config.uri").name == "libsql_config.uri"


def test_structured_formatter_renders_json() -> None:
    logger = get_logger("test.formatter")
    record = logger.makeRecord(logger.name, logging.INFO, __file__, 10, "hello %s", ("world",), None)
    record.extra_fields = {"scheme": "wss", "tls": True}  # type: ignore[attr-defined]

    entry = decode_json(StructuredFormatter().format(record))
    assert entry["level"] == "INFO"
    assert entry["logger"] == "libsql_config.test.formatter"
    assert entry["message"] == "hello world"
    assert entry["line"] == 10
    assert entry["scheme"] == "wss"
    assert entry["tls"] is True
    assert "exception" not in entry


def test_structured_formatter_includes_exception() -> None:
    logger = get_logger("test.formatter")
    try:
        raise ValueError("boom")
    except ValueError:
        record = logger.makeRecord(logger.name, logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    entry = decode_json(StructuredFormatter().format(record))
    assert "ValueError: boom" in entry["exception"]


def test_configure_logging() -> None:
    handler = ListHandler()
    configure_logging(level="debug", format_style="simple", extra_handlers=[handler])

    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert root.level == logging.DEBUG
    assert root.propagate is False
    assert len(root.handlers) == 2
    assert handler.records[-1].getMessage() == "libsql-config logging configured"


def test_configure_logging_structured_formatter() -> None:
    configure_logging(level="WARNING")
    root = logging.getLogger(ROOT_LOGGER_NAME)
    assert isinstance(root.handlers[0].formatter, StructuredFormatter)


def test_log_with_context(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("test.context")
    with caplog.at_level(logging.INFO, logger=ROOT_LOGGER_NAME):
        log_with_context(logger, logging.INFO, "resolved", scheme="https")
        log_with_context(logger, logging.DEBUG, "dropped", scheme="http")

    assert [record.getMessage() for record in caplog.records] == ["resolved"]
    assert caplog.records[0].extra_fields == {"scheme": "https"}  # type: ignore[attr-defined]
    assert caplog.records[0].funcName == "test_log_with_context"
