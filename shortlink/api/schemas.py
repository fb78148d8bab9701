"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization. Field names on the wire are camelCase.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ShortenRequest(BaseModel):
    """Request schema for creating a short link.

    ``longUrl`` is optional here so that a missing value is reported by the
    code assigner with the same 400 answer as an empty one.
    """
    model_config = ConfigDict(populate_by_name=True)

    long_url: Optional[str] = Field(None, alias="longUrl")
    custom_code: Optional[str] = Field(None, alias="customCode")
    expires_in: Optional[Any] = Field(
        None,
        alias="expiresIn",
        description="Lifetime in minutes; invalid or non-positive values use the default",
    )


class ShortenResponse(BaseModel):
    """Response schema for a created short link."""
    model_config = ConfigDict(populate_by_name=True)

    short_url: str = Field(alias="shortUrl")
    expires_at: datetime = Field(alias="expiresAt")

    @field_serializer("expires_at")
    def serialize_expires_at(self, value: datetime) -> str:
        # Stored timestamps are naive UTC
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec="milliseconds") + "Z"


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
