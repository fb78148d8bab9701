"""
Data models for the short-link service.

This module imports and exports all SQLModel models used in the application.
"""

from shortlink.models.mapping import Mapping, MappingBase, MappingCreate

__all__ = [
    "Mapping",
    "MappingBase",
    "MappingCreate",
]
