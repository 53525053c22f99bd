"""Persistence adapters."""

from .sqlite import ActivityStore

__all__ = ["ActivityStore"]
