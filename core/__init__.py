"""
Core Module

Provides schemas and dependencies for the application.
"""

from .schemas import (
    ProcessRequest,
    ProcessResponse,
    StudentRecord,
    RecordsResponse,
    HealthResponse,
)
from .dependencies import get_sheet_service, shutdown_services

__all__ = [
    # Schemas
    "ProcessRequest",
    "ProcessResponse",
    "StudentRecord",
    "RecordsResponse",
    "HealthResponse",
    # Dependencies
    "get_sheet_service",
    "shutdown_services",
]
