"""Root logger configuration for CLI runs."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_RECORD_ATTRIBUTES = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Appends the fields passed through ``extra=`` as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRIBUTES}
        if not context:
            return line
        return line + " " + " ".join(f"{key}={value!r}" for key, value in context.items())


def configure_logging(level: str) -> int:
    """Send log records to stderr at ``level`` and return the numeric level.

    Raises ``ValueError`` for names the logging module does not know.
    """
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    logging.basicConfig(level=numeric, handlers=[handler], force=True)
    return numeric
