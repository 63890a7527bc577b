"""
Custom Exceptions Module

Defines application-specific exceptions for clearer error handling.
All exceptions inherit from a base TasmeeError for easy catching.

Coercion misses (a spoken value that does not fit its column) are never
raised: the raw text is kept for human review instead.

Usage:
    from utils.exceptions import SheetNotFoundError, SubmissionError

    try:
        await sheet_service.append_rows(student, rows)
    except SheetNotFoundError as e:
        logger.error(f"Write failed: {e}")
"""

from typing import Optional, Dict, Any


class TasmeeError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (optional)
        status_code: HTTP status code to return (optional)
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "success": False,
            "error": self.message,
            "type": self.__class__.__name__,
            "details": self.details
        }


# =============================================================================
# Spreadsheet Exceptions
# =============================================================================

class SheetNotFoundError(TasmeeError):
    """
    Raised when a student has no sheet in the spreadsheet.

    Sheet titles must match the student name exactly.
    """

    def __init__(
        self,
        student: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=(
                f"Sheet for student {student} not found. "
                "Please ensure the exact sheet name exists."
            ),
            details={"student": student, **(details or {})},
            status_code=404
        )


class SpreadsheetError(TasmeeError):
    """
    Raised when the spreadsheet API call fails.

    Common causes:
        - Missing or expired access token
        - Spreadsheet ID not configured
        - Network error
    """

    def __init__(
        self,
        message: str = "Spreadsheet request failed",
        status_code: int = 502,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details=details,
            status_code=status_code
        )


class SubmissionError(TasmeeError):
    """
    Raised when handing committed rows to the persistence endpoint fails.
    """

    def __init__(
        self,
        message: str = "Failed to submit rows",
        rows: int = 0,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"rows": rows, **(details or {})},
            status_code=502
        )


# =============================================================================
# Voice/Speech Exceptions
# =============================================================================

class RecognizerError(TasmeeError):
    """
    Raised by a recognizer adapter when start/stop cannot be delivered.

    Common causes:
        - Recognizer already started
        - Client connection closed
    """

    def __init__(
        self,
        message: str = "Speech recognizer error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details=details,
            status_code=500
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigurationError(TasmeeError):
    """
    Raised when a required setting is missing.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        setting: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"setting": setting, **(details or {})},
            status_code=500
        )
