"""Short code redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import RedirectResponse

from shortlink.api import schemas
from shortlink.api.dependencies import get_resolver
from shortlink.db.session import get_db
from shortlink.services.exceptions import StorageError
from shortlink.services.resolver import ResolveStatus, Resolver

# Create router with tags
router = APIRouter(tags=["redirect"])


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "Short URL not found"},
        410: {"model": schemas.ErrorResponse, "description": "Short URL has expired"},
    }
)
async def redirect_to_long_url(
    short_code: str,
    db: AsyncSession = Depends(get_db),
    resolver: Resolver = Depends(get_resolver),
):
    """Redirect to the long URL behind a short code."""
    try:
        result = await resolver.resolve(db, short_code)
    except StorageError as e:
        logger.error("Storage failure while resolving", short_code=short_code, error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")

    if result.status is ResolveStatus.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Short URL not found")
    if result.status is ResolveStatus.EXPIRED:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail="Short URL has expired")

    return RedirectResponse(url=result.long_url, status_code=status.HTTP_302_FOUND)
