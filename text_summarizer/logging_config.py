"""Logging configuration for the summarizer app."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone


class LineFormatter(logging.Formatter):
    """Single-line `[LEVEL] timestamp message key=value` records."""

    CONTEXT_KEYS = ("model_id", "sentences", "elapsed_ms")

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        parts = [f"[{record.levelname:<7}]", timestamp, f"{record.name}:", record.getMessage()]
        for key in self.CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                parts.append(f"{key}={value}")

        if record.exc_info and record.exc_info[1]:
            parts.append(f"\n{self.formatException(record.exc_info)}")

        return " ".join(parts)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls are no-ops."""
    root_logger = logging.getLogger()

    if root_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LineFormatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Quiet noisy third-party loggers
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
