"""Short code assignment for the short-link service.

This module contains the CodeAssigner class, which validates input, picks a
custom or generated short code, computes the expiry and persists the mapping
through a storage collaborator.
"""

import logging
import math
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.core.clock import Clock, utcnow
from shortlink.core.config import (
    SHORT_CODE_CHARS,
    SHORT_CODE_MAX_LENGTH,
    SHORT_CODE_MIN_LENGTH,
    ShortenerConfig,
)
from shortlink.db.session import db_transaction
from shortlink.models.mapping import Mapping, MappingCreate
from shortlink.repositories.base import DuplicateEntityError, MappingStore, RepositoryError
from shortlink.services.exceptions import (
    InvalidShortCodeError,
    MissingLongURLError,
    ShortCodeConflictError,
    StorageError,
)

logger = logging.getLogger(__name__)

SHORT_CODE_PATTERN = re.compile(
    rf"^[A-Za-z0-9_-]{{{SHORT_CODE_MIN_LENGTH},{SHORT_CODE_MAX_LENGTH}}}$"
)


def is_valid_short_code(code: Any) -> bool:
    """Check a short code against ``^[A-Za-z0-9_-]{4,20}$``."""
    return isinstance(code, str) and SHORT_CODE_PATTERN.fullmatch(code) is not None


def generate_short_code(length: int) -> str:
    """Generate a random short code of the given length from the allowed charset."""
    return "".join(secrets.choice(SHORT_CODE_CHARS) for _ in range(length))


def parse_expires_in(value: Any) -> Optional[float]:
    """
    Parse a requested lifetime in minutes.

    Numbers and numeric strings that are finite and positive are accepted.
    Anything else (missing, non-numeric, zero, negative, NaN, infinite or a
    boolean) yields None, meaning the default lifetime applies.

    Args:
        value: Raw ``expiresIn`` value from the caller

    Returns:
        Optional[float]: Lifetime in minutes, or None for the default
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None

    try:
        minutes = float(value)
    except (ValueError, OverflowError):
        return None

    if not math.isfinite(minutes) or minutes <= 0:
        return None
    return minutes


@dataclass(frozen=True)
class AssignedMapping:
    """A freshly stored mapping together with its fully qualified short URL."""

    mapping: Mapping
    short_url: str

    @property
    def short_code(self) -> str:
        return self.mapping.short_code

    @property
    def expires_at(self) -> datetime:
        return self.mapping.expires_at


class CodeAssigner:
    """
    Assigns short codes to long URLs.

    Uniqueness is checked with one existence query right before the insert.
    That check is not atomic with the insert, so a unique-constraint
    violation reported by the store is treated as a conflict as well.
    """

    def __init__(self, store: MappingStore, config: ShortenerConfig, clock: Clock = utcnow):
        """
        Initialize the code assigner.

        Args:
            store: Storage collaborator for mappings
            config: Base URL, default lifetime and generated code length
            clock: Callable returning the current naive UTC time
        """
        self.store = store
        self.config = config
        self.clock = clock

    @db_transaction(db_param_name="db")
    async def assign(
        self,
        db: AsyncSession,
        long_url: Optional[str],
        custom_code: Optional[str] = None,
        expires_in: Any = None,
    ) -> AssignedMapping:
        """
        Create a mapping for a long URL.

        Args:
            db: Database session
            long_url: The URL to shorten, stored as given
            custom_code: Optional caller-chosen short code
            expires_in: Optional lifetime in minutes, see ``parse_expires_in``

        Returns:
            AssignedMapping: The stored mapping and its short URL

        Raises:
            MissingLongURLError: If the long URL is absent or empty
            InvalidShortCodeError: If the short code format is invalid
            ShortCodeConflictError: If the short code is already assigned
            StorageError: If the storage collaborator fails
        """
        if not isinstance(long_url, str) or not long_url.strip():
            raise MissingLongURLError("Long URL is required")

        short_code = custom_code if custom_code else generate_short_code(
            self.config.generated_code_length
        )
        if not is_valid_short_code(short_code):
            raise InvalidShortCodeError(
                f"Invalid short code format: must be {SHORT_CODE_MIN_LENGTH}-"
                f"{SHORT_CODE_MAX_LENGTH} characters of letters, digits, '_' or '-'"
            )

        try:
            if await self.store.check_short_code_exists(db, short_code):
                raise ShortCodeConflictError(f"Short code '{short_code}' already exists")
        except RepositoryError as e:
            logger.error(f"Error checking if short code exists: {e}")
            raise StorageError(f"Failed to check short code: {e}") from e

        created_at = self.clock()
        expires_at = self._expiration(created_at, expires_in)

        try:
            mapping = await self.store.insert_mapping(
                db,
                MappingCreate(
                    short_code=short_code,
                    long_url=long_url,
                    created_at=created_at,
                    expires_at=expires_at,
                ),
            )
        except DuplicateEntityError as e:
            logger.info(f"Short code '{short_code}' was taken concurrently: {e}")
            raise ShortCodeConflictError(f"Short code '{short_code}' already exists") from e
        except RepositoryError as e:
            logger.error(f"Error storing mapping: {e}")
            raise StorageError(f"Failed to store mapping: {e}") from e

        logger.info(f"Assigned short code '{short_code}' expiring at {expires_at.isoformat()}")
        return AssignedMapping(
            mapping=mapping,
            short_url=self.config.build_short_url(short_code),
        )

    def _expiration(self, created_at: datetime, expires_in: Any) -> datetime:
        """Compute ``expires_at``, falling back to the default lifetime."""
        minutes = parse_expires_in(expires_in)
        if minutes is not None:
            try:
                expires_at = created_at + timedelta(minutes=minutes)
            except OverflowError:
                logger.warning(f"Requested lifetime of {minutes} minutes is out of range")
            else:
                if expires_at > created_at:
                    return expires_at
        return created_at + timedelta(minutes=self.config.default_expiration_minutes)
