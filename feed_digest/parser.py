"""
Tolerant extraction of items from RSS-like XML.

Feeds in the wild are frequently not well-formed or namespaced consistently,
so items and fields are mined with regular expressions instead of a strict
XML parser. Nothing here raises on bad markup: missing pieces come back as
empty strings or empty lists.

Known limits: nested tags with the same name, namespaced tag names
(e.g. ``dc:date``) and values carried in attributes (Atom ``<link href>``)
are not understood.
"""

from __future__ import annotations

from functools import lru_cache
import re
from typing import Iterator

from .core.text import strip_cdata

MAX_CATEGORIES = 6

# Matches "<item>" or "<item rdf:about=...>" but never "<itemfoo>"
ITEM_RE = re.compile(r"<item(?:\s[^>]*)?>([\s\S]*?)</item>", re.IGNORECASE)


@lru_cache(maxsize=64)
def _tag_pattern(tag: str) -> re.Pattern[str]:
    name = re.escape(tag)
    return re.compile(rf"<{name}(?:\s[^>]*)?>([\s\S]*?)</{name}>", re.IGNORECASE)


def extract_items(xml: str) -> Iterator[str]:
    """Yield the inner text of each <item> block in document order.

    The generator is single-pass; call again to re-scan the same document.
    """
    for match in ITEM_RE.finditer(xml or ""):
        yield match.group(1)


def extract_all(block: str, tag: str) -> list[str]:
    """Return every <tag>...</tag> value in block with CDATA unwrapped."""
    return [strip_cdata(match.group(1)) for match in _tag_pattern(tag).finditer(block or "")]


def extract_first(block: str, tag: str) -> str:
    """Return the first <tag>...</tag> value in block, or "" if absent."""
    match = _tag_pattern(tag).search(block or "")
    if not match:
        return ""
    return strip_cdata(match.group(1))


def extract_categories(block: str, limit: int = MAX_CATEGORIES) -> list[str]:
    """Collect lower-cased, deduplicated <category> values.

    Args:
        block: The raw item block
        limit: Maximum number of categories to keep

    Returns:
        Categories in first-encounter order, empty values skipped

    Examples:
        >>> extract_categories("<category>UX</category><category>ux</category>")
        ['ux']
    """
    seen: list[str] = []
    for value in extract_all(block, "category"):
        tag = value.lower()
        if tag and tag not in seen:
            seen.append(tag)
    return seen[:limit]
