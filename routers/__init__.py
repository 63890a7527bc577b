"""
Routers Module

API routers for the Tasmee Voice Log application.
"""

from .records import router as records_router
from .voice import router as voice_router

__all__ = ["records_router", "voice_router"]
