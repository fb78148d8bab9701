"""Test utilities for short-link tests."""

import random
import string
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shortlink.core.clock import utcnow
from shortlink.models.mapping import Mapping


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    return f"https://{random_string(8)}.com/{random_string(12)}"


async def create_test_mapping(
    db: AsyncSession,
    short_code: Optional[str] = None,
    long_url: Optional[str] = None,
    created_at: Optional[datetime] = None,
    expires_at: Optional[datetime] = None,
) -> Mapping:
    """Create and commit a test Mapping."""
    created_at = created_at or utcnow()
    mapping = Mapping(
        short_code=short_code or random_string(7),
        long_url=long_url or random_url(),
        created_at=created_at,
        expires_at=expires_at or created_at + timedelta(minutes=30),
    )
    db.add(mapping)
    await db.commit()
    await db.refresh(mapping)
    return mapping


async def count_mappings(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Mapping))
    return result.scalar_one()
