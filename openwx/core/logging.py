from __future__ import annotations

import logging
import re
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppIdRedactor(logging.Filter):
    """Mask the ``appid`` query parameter in any URL that reaches a handler."""

    _pattern = re.compile(r"(appid=)[^&\s\"']+", re.IGNORECASE)

    def _redact(self, value: object) -> object:
        if isinstance(value, str):
            return self._pattern.sub(r"\1REDACTED", value)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(self._redact(a) for a in record.args)
        elif isinstance(record.args, dict):
            record.args = {k: self._redact(v) for k, v in record.args.items()}
        return True


def configure_logging(level: int | str = logging.WARNING) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(AppIdRedactor())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)
    root_logger.addHandler(handler)

    # httpx logs full request URLs at INFO, including the API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
