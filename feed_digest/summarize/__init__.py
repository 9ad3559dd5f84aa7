"""
Daily summary generation.

This package contains the pluggable summary provider interface and
its implementations.
"""

from .base import SummaryProvider
from .factory import available_summarizers, create_summarizer
from .placeholder import PlaceholderSummarizer

__all__ = [
    "SummaryProvider",
    "PlaceholderSummarizer",
    "available_summarizers",
    "create_summarizer",
]
