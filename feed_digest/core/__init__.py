"""
Core domain models and date/text helpers.

This package contains data types and logic that is independent of
fetching and output. Item normalization lives in ``core.normalize`` and is
imported from there directly.
"""

from .types import Article, DailyPayload, DailyStats, RawFeedResult, Source, Summary, build_stats
from .text import slugify, strip_cdata, strip_html
from .window import DEFAULT_TIME_ZONE, DateWindow, TimeWindow

__all__ = [
    "Article",
    "DailyPayload",
    "DailyStats",
    "RawFeedResult",
    "Source",
    "Summary",
    "build_stats",
    "slugify",
    "strip_cdata",
    "strip_html",
    "DEFAULT_TIME_ZONE",
    "DateWindow",
    "TimeWindow",
]
