"""
Normalization of raw feed item blocks into Article records.

An item becomes an Article only when it has a title, a link and a parseable
publish date that falls inside yesterday's window. Anything else yields None,
which callers treat as "not part of the digest" rather than an error.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging

from dateutil.parser import parse as parse_datetime

from ..parser import MAX_CATEGORIES, extract_categories, extract_first
from .text import slugify, strip_html
from .types import Article
from .window import TimeWindow

logger = logging.getLogger(__name__)

EXCERPT_CHARS = 220

# Zone abbreviations dateutil cannot resolve on its own
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "Z": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
}

_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def parse_date(value: str | None) -> datetime | None:
    """Parse an RFC 822 / ISO 8601 style date into an aware datetime.

    Naive results are assumed to be UTC and the result is always normalized
    to UTC. Returns None when the value is empty, cannot be parsed, lacks a
    year, month or day, or carries an offset outside +/-24h.
    """
    if not value or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = parse_datetime(text, default=_DEFAULT_A, tzinfos=TZINFOS)
        # Parts filled from the default differ between the two sentinels
        if parsed.date() != parse_datetime(text, default=_DEFAULT_B, tzinfos=TZINFOS).date():
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def build_article_id(source_name: str, title: str, published_at: str) -> str:
    """Build the display key: {source-slug}-{title-slug}-{YYYY-MM-DD}.

    Two items from the same source with the same title on the same day
    share an id.
    """
    return f"{slugify(source_name)}-{slugify(title)}-{published_at}"


def normalize_item(
    block: str,
    source_name: str,
    now: datetime,
    window: TimeWindow | None = None,
    excerpt_chars: int = EXCERPT_CHARS,
    max_tags: int = MAX_CATEGORIES,
) -> Article | None:
    """Convert one raw item block into an Article.

    Args:
        block: Inner text of an <item> element
        source_name: Display name of the feed the item came from
        now: Reference instant used to compute "yesterday"
        window: Time zone configuration (defaults to the digest zone)
        excerpt_chars: Maximum excerpt length
        max_tags: Maximum number of tags kept

    Returns:
        The Article, or None when a required field is missing, the date is
        unparseable, or the item was not published yesterday
    """
    window = window or TimeWindow()

    title = extract_first(block, "title")
    link = extract_first(block, "link")
    raw_date = extract_first(block, "pubDate") or extract_first(block, "updated")
    published = parse_date(raw_date)
    description = extract_first(block, "description") or extract_first(block, "summary")

    if not title or not link or published is None:
        logger.debug("Dropping item from %s: missing title, link or date", source_name)
        return None

    if not window.is_within(published, window.yesterday_window(now)):
        return None

    published_at = window.calendar_date(published)
    return Article(
        id=build_article_id(source_name, title, published_at),
        title=title,
        source=source_name,
        published_at=published_at,
        url=link,
        excerpt=strip_html(description)[:excerpt_chars],
        tags=tuple(extract_categories(block, limit=max_tags)),
    )
