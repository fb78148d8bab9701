"""Mapping repository for the short-link service.

This module provides the MappingRepository class, the SQL implementation of
the MappingStore contract. Uniqueness of short codes is guaranteed by the
unique index on ``mappings.short_code``.
"""

from typing import Any, Dict, Optional, Union
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.models.mapping import Mapping, MappingCreate
from shortlink.repositories.base import BaseRepository, DuplicateEntityError, RepositoryError

logger = logging.getLogger(__name__)


class MappingRepository(BaseRepository[Mapping, MappingCreate]):
    """Repository for Mapping database operations."""

    def __init__(self):
        super().__init__(Mapping)

    async def insert_mapping(
        self,
        db: AsyncSession,
        data: Union[MappingCreate, Dict[str, Any]]
    ) -> Mapping:
        """
        Insert a new mapping.

        The row is written without a prior lookup; the unique index decides.

        Args:
            db: Database session
            data: Mapping data (either as a MappingCreate model or dictionary)

        Returns:
            The stored Mapping

        Raises:
            DuplicateEntityError: If the short code already exists
            RepositoryError: On other database errors
        """
        if isinstance(data, MappingCreate):
            short_code = data.short_code
        else:
            short_code = data.get("short_code", "unknown")

        try:
            return await self.create(db, data)
        except IntegrityError as e:
            message = str(e).lower()
            if "unique" in message or "duplicate key" in message:
                raise DuplicateEntityError(self.model_type, "short_code", short_code) from e
            raise RepositoryError(f"Database error creating mapping: {e}") from e

    async def get_by_short_code(self, db: AsyncSession, short_code: str) -> Optional[Mapping]:
        """
        Find a mapping by its short code, expired or not.

        Args:
            db: Database session
            short_code: The unique short code to look up

        Returns:
            The Mapping if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(self.model_type).where(self.model_type.short_code == short_code)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving mapping by short code: {e}")
            raise RepositoryError(f"Error retrieving mapping by short code: {e}") from e

    async def check_short_code_exists(self, db: AsyncSession, short_code: str) -> bool:
        """
        Check if a short code has ever been assigned.

        Raises:
            RepositoryError: On database errors
        """
        return await self.exists(db, short_code=short_code)
