"""Deterministic stand-in summary built from article counts and source names."""

from __future__ import annotations

from ..config import SummaryConfig
from ..core.types import Article, Summary
from .base import SummaryProvider


class PlaceholderSummarizer(SummaryProvider):
    """Summarize by mentioning the article total and the leading sources."""

    def __init__(self, cfg: SummaryConfig | None = None) -> None:
        self.cfg = cfg or SummaryConfig()

    def summarize(self, articles: list[Article]) -> Summary:
        if not articles:
            return Summary(title=self.cfg.title, text=self.cfg.empty_text)

        top_sources = ", ".join(_distinct_sources(articles)[: self.cfg.max_sources])
        text = (
            f"Foram publicados {len(articles)} artigos ontem, com foco em design, UX e produto. "
            f"As fontes mais presentes incluem {top_sources}. "
            "O resumo final sera refinado no pipeline diario."
        )
        return Summary(title=self.cfg.title, text=text)


def _distinct_sources(articles: list[Article]) -> list[str]:
    # dict keeps first-appearance order
    return list(dict.fromkeys(article.source for article in articles))
