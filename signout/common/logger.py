"""Rich console logging for the census CLI.

The API and the editor log JSON through ``observability.logging_config``;
this logger is for humans at a terminal and always writes to stderr so that
``--json`` output on stdout stays parseable.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from config.settings import get_logging_settings


def setup_logger(name: str, level: str | None = None) -> logging.Logger:
    """Return *name* with a single Rich stderr handler.

    *level* defaults to ``SIGNOUT_LOG_LEVEL``. Calling again re-applies the
    level without stacking another handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or get_logging_settings().level).upper())

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger


__all__ = ["setup_logger"]
