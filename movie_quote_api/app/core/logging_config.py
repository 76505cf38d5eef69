"""
Logging configuration for the quote service.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger.  Application modules log through
``logging.getLogger(__name__)`` and therefore inherit this setup; the
uvicorn loggers are routed through the same handlers so that request
and application lines share one format.  Configuration happens once
per process: later calls are ignored.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Server loggers that otherwise install their own handlers.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> bool:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.  ``DEBUG``
        enables the store and service lookup traces.
    logfile : Optional[str]
        Path of a file to log to in addition to the console.  Missing
        parent directories are created.

    Returns
    -------
    bool
        ``True`` if handlers were installed, ``False`` if the root
        logger was already configured (e.g. by the test runner).
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    return True
