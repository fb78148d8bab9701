"""Health check endpoints for monitoring application status."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.core.config import settings
from shortlink.db.base import DatabaseHealthCheck
from shortlink.db.session import get_db

router = APIRouter(tags=["health"])


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(db: AsyncSession = Depends(get_db)):
    """Check that the database answers before taking traffic."""
    database = await DatabaseHealthCheck.check_connection(db)
    is_ready = database["status"] == "healthy"

    return JSONResponse(
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "ready": is_ready,
            "version": settings.APP_VERSION,
            "components": {"api": True, "database": database},
        },
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
