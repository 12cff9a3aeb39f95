"""
Logging configuration for the service and the server running it.

``setup_logging`` installs one console handler (plus an optional file
handler) on the root logger and routes Uvicorn's own loggers through
it, so request logs, server lifecycle messages and application logs
share one format.  ``run.py`` starts Uvicorn with ``log_config=None``
for that reason.

Calling it again is safe: handlers are only added once, but the level
is always applied, and a log file named on a later call is attached if
it was not already.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "storefront.console"
FILE_HANDLER_PREFIX = "storefront.file:"

# Loggers Uvicorn writes to.  Their own handlers are dropped and records
# propagate to the root logger.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "uvicorn.asgi")


def resolve_level(level: str) -> int:
    """Map a level name to its numeric value, defaulting to ``INFO``."""
    numeric = logging.getLevelName(str(level).upper())
    return numeric if isinstance(numeric, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger and the Uvicorn loggers.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.  Applied on
        every call.
    logfile : Optional[str]
        Path to a file to log messages to, resolved against the current
        working directory.  Each distinct path gets one file handler.
    """
    numeric_level = resolve_level(level)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    installed = {handler.get_name() for handler in root.handlers}

    if CONSOLE_HANDLER_NAME not in installed:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        name = f"{FILE_HANDLER_PREFIX}{log_path}"
        if name not in installed:
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.set_name(name)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    for logger_name in SERVER_LOGGERS:
        server_logger = logging.getLogger(logger_name)
        server_logger.handlers.clear()
        server_logger.setLevel(numeric_level)
        server_logger.propagate = True
