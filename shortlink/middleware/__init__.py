"""HTTP middleware for the short-link service."""

from shortlink.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
