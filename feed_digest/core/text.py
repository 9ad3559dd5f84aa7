"""Free-text cleanup helpers for feed fields."""

from __future__ import annotations

import re

_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_CDATA_RE = re.compile(r"^<!\[CDATA\[(.*)\]\]>$", re.DOTALL)
_SLUG_RE = re.compile(r"[^a-z0-9]+")


def strip_html(html: str | None) -> str:
    """Convert an HTML fragment to a single line of plain text.

    Script and style blocks are removed with their contents before the
    generic tag pass, otherwise their code would leak into the text.

    Examples:
        >>> strip_html("<script>bad()</script>Hello <b>World</b>")
        'Hello World'
    """
    if not html:
        return ""
    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def strip_cdata(raw: str) -> str:
    """Unwrap a value fully enclosed in a CDATA section."""
    value = raw.strip()
    match = _CDATA_RE.match(value)
    if match:
        return match.group(1).strip()
    return value


def slugify(value: str) -> str:
    """Lower-case and hyphenate a string, keeping only ASCII letters and digits.

    Examples:
        >>> slugify("Café, Design & Co.")
        'caf-design-co'
    """
    slug = _SLUG_RE.sub("-", value.lower())
    return slug.strip("-")
