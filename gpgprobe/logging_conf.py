import json
import logging
import sys
from typing import Any

from .settings import Settings

_PACKAGE_LOGGER = "gpgprobe"
_PLAIN_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(settings: Settings, json_mode: bool | None = None) -> logging.Logger:
    """
    Send gpgprobe's diagnostic tracing to stderr.

    Only the package logger is configured, so a host process (the MCP server,
    a test runner) keeps control of the root logger. stdout is left to the
    status line. Calling this again is a no-op.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    if any(getattr(h, "_gpgprobe", False) for h in logger.handlers):
        return logger

    if json_mode is None:
        json_mode = settings.LOG_JSON

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT))
    setattr(handler, "_gpgprobe", True)

    logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.WARNING))
    logger.addHandler(handler)
    return logger
