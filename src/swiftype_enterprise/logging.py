import logging
import os
import re
from typing import Optional


_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_BEARER = re.compile(r"(Bearer\s+)[^\s'\"]+")


def _coerce_level(value: Optional[str]) -> int:
    if isinstance(value, str):
        return _LEVELS.get(value.upper().strip(), logging.INFO)
    if isinstance(value, int):
        return value
    return logging.INFO


class RedactTokenFilter(logging.Filter):
    """Mask bearer tokens that end up in formatted log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _BEARER.sub(r"\1[REDACTED]", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def get_logger(name: str) -> logging.Logger:
    """Return a configured stream logger under the ``swiftype_enterprise`` namespace.

    - Level from SWIFTYPE_ENTERPRISE_LOG_LEVEL, else LOG_LEVEL (default INFO).
    - LOG_FILE (optional path) adds an appending file handler.
    """
    logger = logging.getLogger(f"swiftype_enterprise.{name}")
    if getattr(logger, "_swiftype_configured", False):
        return logger

    level = _coerce_level(
        os.environ.get("SWIFTYPE_ENTERPRISE_LOG_LEVEL") or os.environ.get("LOG_LEVEL", "INFO")
    )
    logger.setLevel(level)
    logger.addFilter(RedactTokenFilter())

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handlers = [logging.StreamHandler()]
    log_file = os.environ.get("LOG_FILE")
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError:
            logger.warning("LOG_FILE could not be opened; continuing without file logging")
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    setattr(logger, "_swiftype_configured", True)
    return logger
