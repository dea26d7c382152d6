"""
Logging setup for the standings service.

The level comes from Settings.log_level (env LOG_LEVEL, via pydantic-settings);
nothing here reads the environment directly.
"""
from __future__ import annotations

import logging
from typing import Optional

from standings.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Request logs stay at INFO even when the service runs at DEBUG
QUIET_LOGGERS = ("uvicorn.access", "httpx")


class _ServiceHandler(logging.StreamHandler):
    """Marker type so repeated setup never stacks handlers."""


def level_from_name(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach the service handler to the root logger and apply the level."""
    root = logging.getLogger()
    if not any(isinstance(h, _ServiceHandler) for h in root.handlers):
        handler = _ServiceHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel(level_from_name(level or settings.log_level))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO)
    return root
