"""Logging setup shared by the CLI and the API server."""
import logging
import sys
from typing import Optional

from salesboard.config import config

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once (level defaults to LOG_LEVEL)."""
    level_name = (level or config.LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
