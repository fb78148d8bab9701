"""Short link data models.

This module defines the Mapping model that associates a short code with the
long URL it redirects to, together with its creation and expiry timestamps.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Index
from sqlmodel import Field, SQLModel

from shortlink.core.clock import utcnow


class MappingBase(SQLModel):
    """Base model for mapping data."""

    short_code: str = Field(
        max_length=20,
        unique=True,  # Uniqueness is enforced by the database
        description="Unique code used in the short URL path",
    )
    long_url: str = Field(
        description="The target URL to redirect to"
    )
    # Timestamps are stored as naive UTC
    expires_at: datetime = Field(
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="After this instant (UTC) the code no longer resolves"
    )


class Mapping(MappingBase, table=True):
    """
    Mapping between a short code and a long URL.

    A mapping is written once and never updated. Expired rows are kept so
    that their short codes are never handed out again.
    """

    __tablename__ = "mappings"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=False), nullable=False),
        description="Timestamp when this mapping was created"
    )

    __table_args__ = (
        Index("ix_mappings_expires_at", "expires_at"),
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check whether the mapping has expired.

        Args:
            now: Reference time (naive UTC), defaults to the current time

        Returns:
            bool: True once ``now`` is strictly past ``expires_at``
        """
        now = now or utcnow()
        return now > self.expires_at


class MappingCreate(MappingBase):
    """Schema for inserting a new mapping."""

    created_at: datetime
