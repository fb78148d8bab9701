"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access configuration, repositories and service instances.
"""

from fastapi import Depends

from shortlink.core.config import ShortenerConfig, settings
from shortlink.repositories.mapping_repository import MappingRepository
from shortlink.services.assigner import CodeAssigner
from shortlink.services.resolver import Resolver


def get_shortener_config() -> ShortenerConfig:
    """Build the short-link configuration from application settings."""
    return ShortenerConfig.from_settings(settings)


async def get_mapping_repository() -> MappingRepository:
    """Get an instance of the mapping repository."""
    return MappingRepository()


async def get_code_assigner(
    repository: MappingRepository = Depends(get_mapping_repository),
    config: ShortenerConfig = Depends(get_shortener_config),
) -> CodeAssigner:
    """Get an instance of the code assigner."""
    return CodeAssigner(store=repository, config=config)


async def get_resolver(
    repository: MappingRepository = Depends(get_mapping_repository),
) -> Resolver:
    """Get an instance of the resolver."""
    return Resolver(store=repository)
