"""
Logging Configuration Module

Console logging for development and JSON lines for deployments. Sheet and
API events carry the student name as a structured field, so JSON output
can be filtered per student.

Usage:
    from utils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Rows written", extra={"student": "Ali"})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from config.settings import settings

# Attributes passed through `extra=` that formatters render
CONTEXT_FIELDS = ("student", "service", "endpoint", "duration_ms")


def _context(record: logging.LogRecord) -> dict:
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines with a colored level and trailing context."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__(
            fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S",
        )
        self.use_color = use_color

    def formatMessage(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8}"
        if self.use_color:
            level = f"{self.LEVEL_COLORS.get(record.levelname, '')}{level}{self.RESET}"
        line = f"{record.asctime} │ {level} │ {record.name} │ {record.message}"
        context = _context(record)
        if context:
            line += " │ " + " ".join(f"{key}={value}" for key, value in context.items())
        return line


class JSONFormatter(logging.Formatter):
    """One JSON object per line; Arabic text is written unescaped."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name; defaults to LOG_LEVEL, then DEBUG/INFO by DEBUG
        json_format: JSON lines instead of console output; defaults to LOG_JSON
    """
    level = level or settings.LOG_LEVEL or ("DEBUG" if settings.DEBUG else "INFO")
    if json_format is None:
        json_format = settings.LOG_JSON
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JSONFormatter() if json_format else ConsoleFormatter(use_color=sys.stdout.isatty())
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for noisy in ("httpx", "httpcore", "google.auth", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, usually get_logger(__name__)."""
    return logging.getLogger(name)


def log_api_call(
    service: str,
    endpoint: str,
    success: bool,
    duration_ms: Optional[float] = None,
    error: Optional[str] = None
) -> None:
    """
    Log one call to an external API (Sheets, submission endpoint).

    Failures are logged at ERROR with the error text.
    """
    extra = {"service": service, "endpoint": endpoint}
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms)

    logger = get_logger("api")
    if success:
        logger.info(f"✅ {service} {endpoint}", extra=extra)
    else:
        logger.error(f"❌ {service} {endpoint}: {error}", extra=extra)


def log_sheet_action(
    action: str,
    student: str,
    success: bool,
    details: Optional[str] = None
) -> None:
    """Log a read or write against a student's sheet."""
    msg = f"{'✅' if success else '❌'} sheet {action}"
    if details:
        msg += f": {details}"

    get_logger("sheets").log(
        logging.INFO if success else logging.WARNING, msg, extra={"student": student}
    )
