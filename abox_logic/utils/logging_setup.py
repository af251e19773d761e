"""
Logging setup for abox-logic.

Library modules only create ``logging.getLogger(__name__)`` loggers; an
application calls :func:`configure_logging` once to attach handlers.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

from abox_logic.core.config import LoggingConfig, get_config

ROOT_LOGGER = "abox_logic"
CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format == "json":
        return JsonFormatter()
    return logging.Formatter(CONSOLE_FORMAT)


def configure_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """
    Attach handlers to the package logger according to ``config``.

    Calling it again replaces the handlers it installed before.

    Returns:
        The package root logger
    """
    config = config or get_config().logging
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        if getattr(handler, "_abox_logic", False):
            logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.file_path:
        handlers.append(logging.FileHandler(config.file_path))

    formatter = _formatter(config)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._abox_logic = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
