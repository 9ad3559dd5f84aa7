"""
Abstract base class for summary providers.

New providers should inherit from SummaryProvider, implement summarize,
and register themselves in summarize.factory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.types import Article, Summary


class SummaryProvider(ABC):
    """Turns the day's article list into a title/text pair.

    Implementations must be pure functions of the article list so that
    regenerating a summary over stored articles is idempotent.
    """

    @abstractmethod
    def summarize(self, articles: list[Article]) -> Summary:
        """Generate the daily summary.

        Args:
            articles: All articles of the day, in payload order

        Returns:
            Summary with title and text
        """
        raise NotImplementedError

    def __call__(self, articles: list[Article]) -> Summary:
        return self.summarize(articles)
