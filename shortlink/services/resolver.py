"""Short code resolution for the short-link service.

The Resolver looks a short code up and reports one of three outcomes:
the target URL, an unknown code, or an expired code. It never writes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.core.clock import Clock, utcnow
from shortlink.repositories.base import MappingStore, RepositoryError
from shortlink.services.assigner import is_valid_short_code
from shortlink.services.exceptions import StorageError

logger = logging.getLogger(__name__)


class ResolveStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"


@dataclass(frozen=True)
class ResolveResult:
    """Outcome of a lookup; ``long_url`` is set only when FOUND."""

    status: ResolveStatus
    long_url: Optional[str] = None

    @classmethod
    def found(cls, long_url: str) -> "ResolveResult":
        return cls(ResolveStatus.FOUND, long_url)

    @classmethod
    def not_found(cls) -> "ResolveResult":
        return cls(ResolveStatus.NOT_FOUND)

    @classmethod
    def expired(cls) -> "ResolveResult":
        return cls(ResolveStatus.EXPIRED)

    @property
    def is_found(self) -> bool:
        return self.status is ResolveStatus.FOUND


class Resolver:
    """Resolves short codes to their long URLs."""

    def __init__(self, store: MappingStore, clock: Clock = utcnow):
        self.store = store
        self.clock = clock

    async def resolve(self, db: AsyncSession, short_code: str) -> ResolveResult:
        """
        Look a short code up with a single read.

        Args:
            db: Database session
            short_code: The short code to resolve

        Returns:
            ResolveResult: FOUND with the long URL, NOT_FOUND, or EXPIRED

        Raises:
            StorageError: If the storage collaborator fails
        """
        # Nothing outside the code format can ever have been stored
        if not is_valid_short_code(short_code):
            return ResolveResult.not_found()

        try:
            mapping = await self.store.get_by_short_code(db, short_code)
        except RepositoryError as e:
            logger.error(f"Error resolving short code '{short_code}': {e}")
            raise StorageError(f"Failed to look up short code: {e}") from e

        if mapping is None:
            return ResolveResult.not_found()

        if mapping.is_expired(self.clock()):
            return ResolveResult.expired()

        return ResolveResult.found(mapping.long_url)
