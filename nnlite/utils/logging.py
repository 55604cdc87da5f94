"""Logging setup for command line entry points."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the ``nnlite`` logger and set its level.

    Library modules only create loggers; handlers are installed here by the
    CLI. Repeated calls update the level and rebind the handler to the current
    ``sys.stderr`` instead of stacking handlers.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger("nnlite")
    logger.setLevel(level)

    handler = next(
        (h for h in logger.handlers if getattr(h, "_nnlite_handler", False)), None
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._nnlite_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    else:
        handler.setStream(sys.stderr)  # type: ignore[attr-defined]

    return logger
