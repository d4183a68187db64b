"""
Logging setup for the myparcel_sdk package.

All modules log through children of the ``myparcel_sdk`` logger. A console
handler is installed on first use; ``configure_logging`` replaces it with
whatever the caller asks for.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "myparcel_sdk"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _setup_default_logging() -> logging.Logger:
    """Set up default logging configuration for the SDK."""
    logger = logging.getLogger(LOGGER_NAME)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(logging.INFO)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT))

        logger.addHandler(console_handler)

        # Prevent propagation to root logger to avoid duplicate messages
        logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, making sure defaults are in place."""
    _setup_default_logging()
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def _file_handler(path: str, level: int, formatter: logging.Formatter) -> logging.Handler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    error_file: Optional[str] = None,
    console_output: bool = True,
    log_format: Optional[str] = None
) -> None:
    """
    Route the SDK's request and transport logs.

    Replaces the default stdout handler. Each ``send`` logs the method and
    URL at INFO, header names and timeouts at DEBUG, and failed calls
    (transport errors, MyParcel ``errors`` payloads) at ERROR. The
    ``Authorization`` value is never written.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        log_file: File receiving every record at ``log_level`` and above
        error_file: File receiving failed API calls only
        console_output: Keep writing to stdout
        log_format: ``logging.Formatter`` format string

    Example:
        # Keep stdout quiet, collect refused shipments for the support desk
        configure_logging(
            log_level='WARNING',
            console_output=False,
            error_file='var/log/myparcel-refused.log'
        )
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)
    formatter = logging.Formatter(log_format or DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    handlers = []
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)
    if log_file:
        handlers.append(_file_handler(log_file, level, formatter))
    if error_file:
        handlers.append(_file_handler(error_file, logging.ERROR, formatter))

    # Without any handler the stdlib's last-resort handler would print to stderr
    for handler in handlers or [logging.NullHandler()]:
        logger.addHandler(handler)

    logger.propagate = False
    logger.debug(f"SDK logging: level={log_level}, console={console_output}, "
                 f"log_file={log_file}, error_file={error_file}")
