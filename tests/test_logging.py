from __future__ import annotations

import logging

import pytest

from openwx.core.logging import AppIdRedactor, configure_logging


def _record(msg: str, args: tuple = ()) -> logging.LogRecord:
    return logging.LogRecord("openwx", logging.DEBUG, __file__, 1, msg, args, None)


def test_redactor_masks_message() -> None:
    record = _record("GET https://x/data/2.5/weather?lat=1&appid=abc123&units=metric")
    assert AppIdRedactor().filter(record)
    assert record.getMessage() == (
        "GET https://x/data/2.5/weather?lat=1&appid=REDACTED&units=metric"
    )


def test_redactor_masks_args() -> None:
    record = _record("GET %s", ("https://x/?appid=abc123",))
    AppIdRedactor().filter(record)
    assert "abc123" not in record.getMessage()


def test_redactor_leaves_other_values() -> None:
    record = _record("status %s", (200,))
    AppIdRedactor().filter(record)
    assert record.getMessage() == "status 200"


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_installs_redacting_handler(
    restore_root_logger: logging.Logger,
) -> None:
    configure_logging("debug")

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert any(isinstance(f, AppIdRedactor) for f in root.handlers[0].filters)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_configure_logging_accepts_numeric_level(restore_root_logger: logging.Logger) -> None:
    configure_logging(logging.INFO)
    assert restore_root_logger.level == logging.INFO
