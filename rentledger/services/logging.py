"""Logging configuration for the API server, scheduler and CLI.

Every entry point writes the same records to stdout and to a log file.
The level comes from settings.log_level, falling back to LOG_LEVEL.
"""

import logging
import os
import sys
from pathlib import Path

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty third-party loggers held at WARNING regardless of the ledger level
QUIET_LOGGERS = ("apscheduler",)


def get_log_level(level_name: str | None = None) -> int:
    """Resolve a level name to a logging constant.

    Args:
        level_name: Name such as "debug" or "WARNING"; LOG_LEVEL when None

    Returns:
        Logging level constant, INFO for unknown names
    """
    if level_name is None:
        level_name = os.getenv("LOG_LEVEL", "INFO")
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_server_logging(log_file: str = "logs/server.log", level: str | None = None) -> None:
    """Point the root logger at stdout and log_file.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        log_file: Path to log file, parent directories are created
        level: Level name, see get_log_level
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    log_level = get_log_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    for handler in (logging.StreamHandler(sys.stdout), logging.FileHandler(log_path)):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["QUIET_LOGGERS", "get_log_level", "setup_server_logging"]
