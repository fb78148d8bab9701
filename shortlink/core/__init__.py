"""Core module for the short-link service."""

from shortlink.core.config import settings

__all__ = ["settings"]
