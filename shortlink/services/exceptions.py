"""Exceptions for the short-link service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
Lookup outcomes (unknown or expired codes) are not exceptions; they are
reported through ``ResolveResult``.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class MappingValidationError(ServiceError):
    """Input failed validation and can be corrected by the caller."""
    pass


class MissingLongURLError(MappingValidationError):
    """The long URL is absent or empty."""
    pass


class InvalidShortCodeError(MappingValidationError):
    """The short code does not match the allowed format."""
    pass


class ShortCodeConflictError(ServiceError):
    """The short code is already assigned."""
    pass


class StorageError(ServiceError):
    """The storage collaborator failed or is unreachable."""
    pass
