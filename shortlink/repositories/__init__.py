"""Repository layer for the short-link service.

This module provides repository classes that abstract database operations
and implement the Repository pattern for clean separation of concerns.
"""

from shortlink.repositories.base import (
    BaseRepository,
    DuplicateEntityError,
    MappingStore,
    RepositoryError,
)
from shortlink.repositories.mapping_repository import MappingRepository

__all__ = [
    # Base classes, contract and exceptions
    "BaseRepository",
    "DuplicateEntityError",
    "MappingStore",
    "RepositoryError",

    # Concrete repositories
    "MappingRepository",
]
