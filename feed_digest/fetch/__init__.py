"""
Feed fetching.

This package handles HTTP retrieval of feeds and turns each response
into a per-source result.
"""

from .fetcher import build_client, fetch_feed

__all__ = [
    "build_client",
    "fetch_feed",
]
