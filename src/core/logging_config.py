"""
Centralized logging configuration.

Every module logs through the standard library logger obtained with
`get_logger(__name__)`. `setup_logging` is called once by the API entry
point and sends records to stdout and to a log file that rolls over at
midnight (earmark_assistant.log, earmark_assistant.log.2026-01-31, ...).
"""
import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "earmark_assistant.log"
LOG_BACKUP_DAYS = 14

# SDK loggers that are chatty at DEBUG/INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "openai", "groq", "google", "sqlalchemy.engine")

_handlers: List[logging.Handler] = []


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Configure application-wide logging.

    Repeated calls are no-ops until `reset_logging()` is called.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files. Defaults to 'logs/' in project root.

    Returns:
        Configured root logger instance
    """
    root_logger = logging.getLogger()
    if _handlers:
        return root_logger

    if log_dir is None:
        log_dir = Path(__file__).parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # The file keeps DEBUG records regardless of the console level
    file_handler = TimedRotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        when="midnight",
        backupCount=LOG_BACKUP_DAYS,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)

    for handler in (console_handler, file_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _handlers.append(handler)
    root_logger.setLevel(logging.DEBUG)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root_logger.debug(f"Logging configured: level={log_level}, dir={log_dir}")
    return root_logger


def reset_logging() -> None:
    """Detach and close the handlers added by setup_logging."""
    root_logger = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LoggerMixin:
    """Adds a `self.logger` named after the class."""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(self.__class__.__name__)
