"""
Centralized logging configuration.

The package logs under the 'exporter' hierarchy: modules call
logging.getLogger(__name__), and the package configures the 'exporter'
logger once on import (console only). Applications that want the
rotating log file call setup_logger() themselves before importing.
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

from .constants import (
    ROOT_LOGGER, LOG_LEVEL, LOG_FORMAT, LOG_FILE,
    LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT
)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=LOG_MAX_SIZE_MB * 1024 * 1024,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logger(
    name: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = LOG_FILE,
    level: Optional[int] = None,
) -> logging.Logger:
    """
    Configure a logger once and return it.

    Usage:
        from config.logging_config import setup_logger
        setup_logger("exporter", log_file="logs/exporter.log")

    Args:
        name: Logger name. If None, uses 'exporter'.
        log_file: Rotating log file path. None disables file logging.
        level: Logger level, LOG_LEVEL by default.

    Returns:
        The logger; unchanged if it already has handlers.
    """
    logger = logging.getLogger(name or ROOT_LOGGER)
    if logger.handlers:
        return logger

    logger.setLevel(level if level is not None else getattr(logging, LOG_LEVEL))
    logger.addHandler(_console_handler())
    if log_file:
        logger.addHandler(_file_handler(Path(log_file)))
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger inside the 'exporter' hierarchy.

    Names outside it are nested under it, so records reach the package
    handlers:
        get_logger("plugins.audit")  # -> 'exporter.plugins.audit'
    """
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
