"""Service layer for the short-link service.

This package contains the code assigner and resolver, which implement the
business logic on top of a storage collaborator.
"""

from shortlink.services.assigner import AssignedMapping, CodeAssigner
from shortlink.services.resolver import ResolveResult, ResolveStatus, Resolver

__all__ = [
    "AssignedMapping",
    "CodeAssigner",
    "ResolveResult",
    "ResolveStatus",
    "Resolver",
]
