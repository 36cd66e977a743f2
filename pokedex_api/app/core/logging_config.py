"""
Logging configuration for the Pokedex API.

``setup_logging`` attaches a console handler to the root logger and,
when ``LOG_FILE`` is set, a size-rotated file handler
(``LOG_MAX_BYTES`` / ``LOG_BACKUP_COUNT``).  The MongoDB driver and
httpx log every command and request at DEBUG/INFO; their loggers are
capped at WARNING unless the application itself runs at DEBUG.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are only useful when debugging.
CHATTY_LOGGERS = ("pymongo", "httpx", "httpcore")


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Configure the root logger once per process.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive; unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        File to log to.  Rotated when it reaches ``max_bytes``, keeping
        ``backup_count`` old files.  No file handler when empty.
    """
    root = logging.getLogger()
    # uvicorn, pytest or an earlier create_app call may have set it up.
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(
            RotatingFileHandler(
                Path(logfile).resolve(),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
