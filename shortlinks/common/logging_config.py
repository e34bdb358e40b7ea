"""Logging configuration for the short identifier registry."""

import json
import logging
import sys
from typing import List, Optional

ROOT_LOGGER = "shortlinks"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``shortlinks`` logger tree.

    Every module logs under ``shortlinks.*``, so one call covers the core,
    the web layer and the scripts. Calling again replaces the handlers
    instead of stacking them.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path, in addition to stdout
        json_format: Emit JSON lines instead of text

    Returns:
        The ``shortlinks`` root logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    formatter = JsonFormatter() if json_format else logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)

    for old in logger.handlers:
        old.close()
    logger.handlers.clear()

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger under the ``shortlinks`` tree ('web' becomes 'shortlinks.web')."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
