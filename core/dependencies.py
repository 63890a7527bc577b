"""
FastAPI Dependencies Module

Provides dependency injection for services shared across requests.
Service instances are singletons to reuse HTTP connections.

Usage:
    from core.dependencies import get_sheet_service

    @router.get("/records")
    async def records(
        sheet_service: StudentSheetService = Depends(get_sheet_service)
    ):
        ...
"""

from config.settings import settings
from utils.logging import get_logger

# Lazy imports to avoid circular dependencies
_sheet_backend = None
_sheet_service = None

logger = get_logger(__name__)


# =============================================================================
# Service Initialization
# =============================================================================

def _initialize_services() -> None:
    """
    Initialize all service singletons.

    Called lazily on first access to any service.
    """
    global _sheet_backend, _sheet_service

    from services.sheets import (
        GoogleSheetsBackend,
        InMemorySheetBackend,
        StudentSheetService,
        load_service_account_credentials,
    )

    backend_name = settings.SHEET_BACKEND.lower()
    if backend_name == "memory":
        _sheet_backend = InMemorySheetBackend()
        logger.warning("Using in-memory sheet backend - records are not persisted")
    else:
        credentials = None
        if settings.GOOGLE_SERVICE_ACCOUNT_JSON:
            credentials = load_service_account_credentials(settings.GOOGLE_SERVICE_ACCOUNT_JSON)
        elif not settings.GOOGLE_SHEETS_ACCESS_TOKEN:
            logger.warning(
                "GOOGLE_SERVICE_ACCOUNT_JSON not configured - Sheets API calls will be rejected"
            )
        _sheet_backend = GoogleSheetsBackend(
            spreadsheet_id=settings.SPREADSHEET_ID,
            access_token=settings.GOOGLE_SHEETS_ACCESS_TOKEN,
            base_url=settings.SHEETS_API_BASE_URL,
            credentials=credentials,
        )

    _sheet_service = StudentSheetService(_sheet_backend)

    logger.info(f"Services initialized successfully (sheet backend: {backend_name})")


def _ensure_initialized() -> None:
    """Ensure services are initialized."""
    if _sheet_service is None:
        _initialize_services()


# =============================================================================
# Service Providers
# =============================================================================

def get_sheet_service():
    """
    Get StudentSheetService singleton.

    Returns:
        StudentSheetService: Sheet writer/reader over the configured backend

    Raises:
        ConfigurationError: If SPREADSHEET_ID is missing for the Google backend
    """
    _ensure_initialized()
    return _sheet_service


async def shutdown_services() -> None:
    """Close HTTP clients held by service singletons."""
    global _sheet_backend, _sheet_service
    if _sheet_backend is not None:
        await _sheet_backend.close()
    _sheet_backend = None
    _sheet_service = None
