"""
Tasmee Voice Log - Backend Application

FastAPI application for hands-free Quran recitation logging.
Teachers dictate a session in Arabic; the voice session turns it into
structured rows that are appended to the student's Google Sheet.

Features:
    - Live voice sessions over WebSocket (browser speech recognition)
    - Arabic spoken-number, date, grade and checkbox normalization
    - Google Sheets persistence with recent-record previews

Run:
    python main.py
    # or
    uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
import uvicorn

from config.settings import settings
from core.dependencies import shutdown_services
from core.schemas import HealthResponse
from utils.logging import setup_logging, get_logger
from utils.exceptions import TasmeeError
from utils.rate_limit import limiter, rate_limit_exceeded_handler

# Import Routers
from routers import records, voice

# Initialize logging
setup_logging()
logger = get_logger(__name__)


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events:
        - Startup: Log configuration
        - Shutdown: Close spreadsheet HTTP clients
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"Sheet backend: {settings.SHEET_BACKEND}")

    if not settings.SPREADSHEET_ID and settings.SHEET_BACKEND != "memory":
        logger.warning("SPREADSHEET_ID not configured - sheet endpoints will fail")

    yield

    # Shutdown
    logger.info("Shutting down application")
    await shutdown_services()


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=settings.APP_NAME,
    description="Voice-driven recitation logging API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Attach rate limiter to app state
app.state.limiter = limiter


# =============================================================================
# Middleware
# =============================================================================

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=500)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(TasmeeError)
async def tasmee_exception_handler(request: Request, exc: TasmeeError):
    """
    Handle custom Tasmee exceptions.

    Returns standardized error response with appropriate status code.
    """
    logger.error(f"TasmeeError: {exc.message}", extra={"details": exc.details})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(records.router)
app.include_router(voice.router)


# =============================================================================
# Health Check Endpoints
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint - basic health check.

    Returns:
        dict: Simple status message
    """
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check():
    """
    Detailed health check endpoint.

    Reports whether the spreadsheet backend is configured; no external
    calls are made.
    """
    memory_backend = settings.SHEET_BACKEND == "memory"
    spreadsheet_configured = memory_backend or bool(settings.SPREADSHEET_ID)

    return HealthResponse(
        status="healthy" if spreadsheet_configured else "degraded",
        version=settings.APP_VERSION,
        sheet_backend=settings.SHEET_BACKEND,
        components={
            "spreadsheet_configured": spreadsheet_configured,
            "sheets_credentials_configured": memory_backend or bool(
                settings.GOOGLE_SERVICE_ACCOUNT_JSON or settings.GOOGLE_SHEETS_ACCESS_TOKEN
            ),
            "redis_configured": settings.REDIS_URL is not None,
        },
    )


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
