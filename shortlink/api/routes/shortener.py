"""Short link creation endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.api import schemas
from shortlink.api.dependencies import get_code_assigner
from shortlink.db.session import get_db
from shortlink.services.assigner import CodeAssigner
from shortlink.services.exceptions import (
    MappingValidationError,
    ShortCodeConflictError,
    StorageError,
)

router = APIRouter(tags=["shortener"])


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Missing long URL or invalid short code"},
        409: {"model": schemas.ErrorResponse, "description": "Short code already exists"},
        500: {"model": schemas.ErrorResponse, "description": "Storage failure"},
    }
)
async def create_short_url(
    request_data: schemas.ShortenRequest,
    db: AsyncSession = Depends(get_db),
    assigner: CodeAssigner = Depends(get_code_assigner),
):
    try:
        assigned = await assigner.assign(
            db=db,
            long_url=request_data.long_url,
            custom_code=request_data.custom_code,
            expires_in=request_data.expires_in,
        )
    except MappingValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ShortCodeConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except StorageError as e:
        logger.error("Storage failure while shortening", error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")

    return schemas.ShortenResponse(
        short_url=assigned.short_url,
        expires_at=assigned.expires_at,
    )
