"""Logging setup: rotating file log plus a quiet console."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .configuration import LoggingConfig

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def configure_logging(config: LoggingConfig) -> Path:
    """Configure the root logger.

    File handler logs at ``config.level`` to a rotating file; the console
    handler only shows ``config.console_level`` and above. Existing root
    handlers are removed.

    Returns:
        Path of the log file
    """
    log_file_path = Path(config.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    file_log_level = getattr(logging, config.level)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, config.console_level))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: file={log_file_path}, console={config.console_level}+"
    )
    return log_file_path
