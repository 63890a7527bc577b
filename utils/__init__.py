"""
Utilities Module

Provides shared utilities across the application:
- Logging configuration
- Custom exceptions
- Rate limiting
"""

from .logging import get_logger, setup_logging, log_api_call, log_sheet_action
from .exceptions import (
    TasmeeError,
    SheetNotFoundError,
    SpreadsheetError,
    SubmissionError,
    RecognizerError,
    ConfigurationError,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_sheet_action",
    # Exceptions
    "TasmeeError",
    "SheetNotFoundError",
    "SpreadsheetError",
    "SubmissionError",
    "RecognizerError",
    "ConfigurationError",
]
