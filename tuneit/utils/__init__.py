"""Utility functions for UTC timestamp handling."""

from .timestamps import ensure_utc, from_storage, to_storage, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
    "to_storage",
    "from_storage",
]
