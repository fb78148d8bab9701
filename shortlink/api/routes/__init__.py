"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from shortlink.api.routes import health, redirect, shortener
from shortlink.core.config import settings

# Create root router
api_router = APIRouter()

# Shortening lives at the root path: POST /shorten
api_router.include_router(shortener.router)

# Include health check routes with API prefix
api_router.include_router(
    health.router,
    prefix=settings.API_PREFIX
)

# Include redirect routes last so /{short_code} does not shadow the others
api_router.include_router(redirect.router)

__all__ = ["api_router"]
