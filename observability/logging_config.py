"""Structured logging configuration for the API and document editor."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping

from config.settings import get_logging_settings


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_dict: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra_fields"):
            log_dict.update(record.extra_fields)

        if record.exc_info:
            log_dict["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_dict, default=str)


class StructuredLogger(logging.LoggerAdapter[logging.Logger]):
    """Logger adapter that carries default fields and per-call ``extra`` into the JSON."""

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        fields = dict(self.extra or {})
        fields.update(kwargs.get("extra") or {})
        kwargs["extra"] = {"extra_fields": fields}
        return msg, kwargs


_configured = False


def configure_logging(
    level: int | str | None = None,
    structured: bool | None = None,
) -> None:
    """Install one stderr handler on the ``signout`` logger tree.

    Unset arguments come from ``LoggingSettings`` (``SIGNOUT_LOG_*``).
    """
    global _configured
    if _configured:
        return

    settings = get_logging_settings()
    level = settings.level if level is None else level
    structured = settings.structured if structured is None else structured

    root_logger = logging.getLogger("signout")
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root_logger.addHandler(handler)
    _configured = True


def get_logger(name: str, **extra: Any) -> StructuredLogger:
    """Structured logger under the ``signout`` namespace with optional default fields."""
    configure_logging()
    base_logger = logging.getLogger(f"signout.{name}")
    return StructuredLogger(base_logger, extra)
