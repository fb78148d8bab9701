"""Tests for the mapping repository."""

from datetime import datetime, timedelta

import pytest

from shortlink.models.mapping import MappingCreate
from shortlink.repositories.base import DuplicateEntityError
from tests.utils import count_mappings, create_test_mapping, random_url


@pytest.mark.repository
class TestMappingRepository:
    """Test suite for the mapping repository."""

    @pytest.mark.asyncio
    async def test_insert_mapping(self, test_db, mapping_repository):
        created_at = datetime(2026, 1, 1, 12, 0)
        long_url = random_url()

        mapping = await mapping_repository.insert_mapping(
            test_db,
            MappingCreate(
                short_code="insert1",
                long_url=long_url,
                created_at=created_at,
                expires_at=created_at + timedelta(minutes=30),
            ),
        )
        await test_db.commit()

        assert mapping.id is not None
        assert mapping.short_code == "insert1"
        assert mapping.long_url == long_url
        assert mapping.created_at == created_at
        assert mapping.expires_at == created_at + timedelta(minutes=30)

        stored = await mapping_repository.get_by_short_code(test_db, "insert1")
        assert stored is not None
        assert stored.long_url == long_url

    @pytest.mark.asyncio
    async def test_insert_accepts_dict(self, test_db, mapping_repository):
        now = datetime(2026, 1, 1, 12, 0)
        mapping = await mapping_repository.insert_mapping(
            test_db,
            {
                "short_code": "fromdict",
                "long_url": "https://example.com",
                "created_at": now,
                "expires_at": now + timedelta(minutes=5),
            },
        )
        assert mapping.short_code == "fromdict"

    @pytest.mark.asyncio
    async def test_insert_duplicate_short_code(self, test_db, mapping_repository):
        """The unique index rejects a second row with the same code."""
        existing = await create_test_mapping(test_db, short_code="duplicate")

        with pytest.raises(DuplicateEntityError) as excinfo:
            await mapping_repository.insert_mapping(
                test_db,
                MappingCreate(
                    short_code="duplicate",
                    long_url=random_url(),
                    created_at=existing.created_at,
                    expires_at=existing.expires_at,
                ),
            )

        assert excinfo.value.field_name == "short_code"
        assert excinfo.value.value == "duplicate"
        assert await count_mappings(test_db) == 1

    @pytest.mark.asyncio
    async def test_duplicate_of_expired_code_is_rejected(self, test_db, mapping_repository):
        """Expired codes are never handed out again."""
        now = datetime(2026, 1, 1, 12, 0)
        await create_test_mapping(
            test_db,
            short_code="oldcode",
            created_at=now - timedelta(days=2),
            expires_at=now - timedelta(days=1),
        )

        with pytest.raises(DuplicateEntityError):
            await mapping_repository.insert_mapping(
                test_db,
                MappingCreate(
                    short_code="oldcode",
                    long_url=random_url(),
                    created_at=now,
                    expires_at=now + timedelta(minutes=30),
                ),
            )

    @pytest.mark.asyncio
    async def test_get_by_short_code(self, test_db, mapping_repository):
        created = await create_test_mapping(test_db, short_code="testget")

        stored = await mapping_repository.get_by_short_code(test_db, "testget")

        assert stored is not None
        assert stored.id == created.id
        assert stored.long_url == created.long_url

    @pytest.mark.asyncio
    async def test_get_by_short_code_nonexistent(self, test_db, mapping_repository):
        assert await mapping_repository.get_by_short_code(test_db, "nonexistent") is None

    @pytest.mark.asyncio
    async def test_get_by_short_code_returns_expired(self, test_db, mapping_repository):
        """Expiry is decided by the resolver, not by the store."""
        now = datetime(2026, 1, 1, 12, 0)
        await create_test_mapping(
            test_db,
            short_code="expired",
            created_at=now - timedelta(hours=2),
            expires_at=now - timedelta(hours=1),
        )

        stored = await mapping_repository.get_by_short_code(test_db, "expired")

        assert stored is not None
        assert stored.is_expired(now)

    @pytest.mark.asyncio
    async def test_check_short_code_exists(self, test_db, mapping_repository):
        await create_test_mapping(test_db, short_code="exists")

        assert await mapping_repository.check_short_code_exists(test_db, "exists") is True
        assert await mapping_repository.check_short_code_exists(test_db, "nonexistent") is False

    @pytest.mark.asyncio
    async def test_short_codes_are_case_sensitive(self, test_db, mapping_repository):
        await create_test_mapping(test_db, short_code="CaseCode")

        assert await mapping_repository.check_short_code_exists(test_db, "casecode") is False
        assert await mapping_repository.get_by_short_code(test_db, "casecode") is None
