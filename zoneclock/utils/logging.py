"""Logging utilities with basic secret scrubbing."""
from __future__ import annotations

import logging
import re
from typing import Iterable

_SECRET_PATTERNS: tuple[str, ...] = (
    r"(?<=apiKey=)[^&\s]+",  # query-string keys on lookup URLs
    r"(?<=api_key=)[^&\s]+",
    r"[A-Za-z0-9]{32,}",
)


class SecureFormatter(logging.Formatter):
    """Formatter that redacts strings looking like secrets."""

    def __init__(self, *args, secret_patterns: Iterable[str] | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._patterns = [re.compile(pattern) for pattern in (secret_patterns or _SECRET_PATTERNS)]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for pattern in self._patterns:
            message = pattern.sub("[REDACTED]", message)
        return message


def setup_logging(name: str = "zoneclock", level: str | int = "INFO") -> logging.Logger:
    """Configure logging for the application if it is not already configured."""

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    handler.setFormatter(SecureFormatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO))

    # Avoid duplicate logging from child loggers
    logger.propagate = False
    return logger
