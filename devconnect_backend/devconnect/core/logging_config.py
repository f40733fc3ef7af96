"""
Root logger setup for the DevConnect API process.

Called from the app lifespan. Records go to stderr and, when ``LOG_FILE``
is set, to that file as well. If the root logger already has handlers
(uvicorn's own setup, pytest's capture, a second lifespan run) nothing is
touched.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from . import config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handlers(logfile: Optional[str]) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    return handlers


def setup_logging(
    level: Optional[str] = None, logfile: Optional[str] = None, logger: Optional[logging.Logger] = None
) -> None:
    """Attach the DevConnect handlers to ``logger`` (the root logger by default).

    ``level`` and ``logfile`` default to ``LOG_LEVEL`` / ``LOG_FILE``. An
    unknown level name is treated as ``INFO``.
    """
    target = logger if logger is not None else logging.getLogger()
    if target.handlers:
        return

    level_name = (level or config.get_log_level()).upper()
    numeric = logging.getLevelName(level_name)
    target.setLevel(numeric if isinstance(numeric, int) else logging.INFO)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(logfile if logfile is not None else config.get_log_file()):
        handler.setFormatter(formatter)
        target.addHandler(handler)
