"""
Input loading.

This package reads the configured list of feed sources.
"""

from .sources import load_sources, parse_sources

__all__ = ["load_sources", "parse_sources"]
