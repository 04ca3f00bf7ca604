"""Process-wide logging setup."""

from __future__ import annotations

import logging

from zipsalestax.core.config import LOG_SOURCE

_FORMAT = "%(asctime)s %(levelname)s [%(source)s] %(name)s: %(message)s"


class _SourceFilter(logging.Filter):
    """Fill in ``source`` for records that were logged without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "source"):
            record.source = LOG_SOURCE
        return True


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the package logger."""
    logger = logging.getLogger("zipsalestax")
    logger.setLevel(level.upper())
    if any(getattr(h, "_zst_handler", False) for h in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.addFilter(_SourceFilter())
    handler._zst_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
