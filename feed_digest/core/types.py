"""
Core data types for the Feed Digest pipeline.

This module defines the records that flow through the pipeline:
- Source: A configured feed (name + URL)
- Article: A normalized item that made it into yesterday's digest
- RawFeedResult: Per-source outcome of a single fetch
- Summary / DailyStats / DailyPayload: The persisted daily artifact

JSON keys use camelCase because the display layer reads these files as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Source:
    """A named feed read from the sources file.

    Attributes:
        name: Display name of the feed (also used as Article.source)
        url: The RSS/Atom URL to fetch
    """
    name: str
    url: str


@dataclass(frozen=True)
class Article:
    """A normalized article published within the digest window.

    Attributes:
        id: Deterministic key built from source, title and publish date
        title: The item title as found in the feed
        source: Display name of the source feed
        published_at: Zone-local calendar date (YYYY-MM-DD)
        url: Link to the original article
        excerpt: Plain-text description, at most 220 characters
        tags: Lower-cased, deduplicated categories (at most 6)
    """
    id: str
    title: str
    source: str
    published_at: str
    url: str
    excerpt: str = ""
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "source": self.source,
            "publishedAt": self.published_at,
            "url": self.url,
            "excerpt": self.excerpt,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Article:
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            source=data.get("source", ""),
            published_at=data.get("publishedAt", ""),
            url=data.get("url", ""),
            excerpt=data.get("excerpt", ""),
            tags=tuple(data.get("tags") or ()),
        )


@dataclass
class RawFeedResult:
    """Outcome of fetching one source.

    Either items is populated (success, possibly empty) or error is set
    (transport failure message or non-success HTTP status), never both.

    Attributes:
        name: The source name
        items: Articles that survived normalization, in document order
        error: Error message or HTTP status code, None on success
    """
    name: str
    items: list[Article] = field(default_factory=list)
    error: str | int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "items": [item.to_dict() for item in self.items],
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class Summary:
    title: str
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "text": self.text}


@dataclass(frozen=True)
class DailyStats:
    total_articles: int = 0
    sources: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"totalArticles": self.total_articles, "sources": self.sources}


@dataclass
class DailyPayload:
    """The aggregated artifact for one content date.

    Attributes:
        date: Content date (yesterday, zone-local) as YYYY-MM-DD
        summary: Title/text pair from the summary provider
        stats: Article count and number of distinct sources among articles
        articles: All surviving articles in source order, then item order
    """
    date: str
    summary: Summary
    stats: DailyStats
    articles: list[Article] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "summary": self.summary.to_dict(),
            "stats": self.stats.to_dict(),
            "articles": [article.to_dict() for article in self.articles],
        }


def build_stats(articles: list[Article]) -> DailyStats:
    """Count articles and the distinct sources that contributed at least one."""
    return DailyStats(
        total_articles=len(articles),
        sources=len({article.source for article in articles}),
    )
