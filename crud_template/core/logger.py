# =============================================================================
# LOGGER - Structured Logging Configuration
# =============================================================================
# Console plus rotated combined/error log files, every record carrying the
# request correlation id.
# =============================================================================

from __future__ import annotations

import gzip
import json
import logging
import os
import shutil
import sys
from logging.handlers import TimedRotatingFileHandler
from typing import Optional

from crud_template.core.settings import Settings

DEFAULT_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | [%(request_id)s] %(message)s"
ROOT_LOGGER_NAME = "crud_template"


class RequestIdFilter(logging.Filter):
    """Guarantee a ``request_id`` attribute on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = "-"
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "requestId": getattr(record, "request_id", "-"),
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _gzip_namer(name: str) -> str:
    return f"{name}.gz"


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as f_in, gzip.open(dest, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


def _file_handler(
    path: str,
    settings: Settings,
    formatter: logging.Formatter,
    level: int,
) -> TimedRotatingFileHandler:
    # Rotated files are suffixed with the date, e.g. combined.log.2024-05-01.gz
    handler = TimedRotatingFileHandler(
        path,
        when=settings.LOGS_ROTATE_WHEN,
        backupCount=settings.LOGS_FILE_MAXFILE,
        encoding="utf-8",
    )
    if settings.LOGS_ZIPPED_ARCHIVE:
        handler.namer = _gzip_namer
        handler.rotator = _gzip_rotator
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())
    return handler


def setup_logging(
    settings: Settings,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Setup and configure the application logger.

    Args:
        settings: Application settings (level, format, file options)
        format_string: Custom format string for text output

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.APP_LOG_LEVEL, logging.INFO))
    logger.propagate = False

    # Clear existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    if settings.LOG_FORMAT == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestIdFilter())
    logger.addHandler(console_handler)

    if settings.LOGS_ENABLE_FILE:
        directory = os.path.join(
            settings.LOGS_DIRECTORY_MOUNT, settings.LOGS_SUB_DIRECTORY
        )
        os.makedirs(directory, exist_ok=True)
        logger.addHandler(
            _file_handler(
                os.path.join(directory, f"{settings.LOGS_FILE_PREFIX}.log"),
                settings,
                formatter,
                logging.NOTSET,
            )
        )
        logger.addHandler(
            _file_handler(
                os.path.join(directory, f"{settings.LOGS_ERROR_FILE_PREFIX}.log"),
                settings,
                formatter,
                logging.ERROR,
            )
        )

    return logger
