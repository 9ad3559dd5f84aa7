"""Tests for tolerant item extraction."""

from collections.abc import Iterator

from feed_digest.parser import extract_all, extract_categories, extract_first, extract_items


FEED = """<?xml version="1.0"?>
<rss version="2.0"><channel>
<title>Channel title</title>
<item><title>First</title></item>
<ITEM><title>Second</title></ITEM>
<item rdf:about="https://example.com/3"><title>Third</title></item>
<items><title>Not an item</title></items>
</channel></rss>
"""


def test_extract_items_in_document_order():
    blocks = list(extract_items(FEED))

    assert [extract_first(block, "title") for block in blocks] == ["First", "Second", "Third"]


def test_extract_items_is_lazy_and_repeatable():
    items = extract_items(FEED)
    assert isinstance(items, Iterator)
    assert next(items) == "<title>First</title>"

    assert len(list(extract_items(FEED))) == 3
    assert len(list(extract_items(FEED))) == 3


def test_extract_items_handles_empty_documents():
    assert list(extract_items("")) == []
    assert list(extract_items("<html><body>not a feed</body></html>")) == []


def test_extract_first_ignores_attributes_and_case():
    block = '<Title type="html">Hello</Title><pubDate>Mon, 09 Mar 2026 12:00:00 GMT</pubDate>'

    assert extract_first(block, "title") == "Hello"
    assert extract_first(block, "PUBDATE") == "Mon, 09 Mar 2026 12:00:00 GMT"


def test_extract_first_unwraps_cdata():
    block = "<description><![CDATA[<p>Rich <b>body</b></p>]]></description>"
    assert extract_first(block, "description") == "<p>Rich <b>body</b></p>"


def test_extract_first_returns_empty_when_absent():
    assert extract_first("<title>Only</title>", "link") == ""


def test_extract_first_does_not_match_longer_tag_names():
    block = "<titleImage>nope</titleImage><title>yes</title>"
    assert extract_first(block, "title") == "yes"


def test_extract_all_returns_every_match():
    block = "<category>A</category><category domain='x'>B</category>"
    assert extract_all(block, "category") == ["A", "B"]


def test_extract_categories_dedupes_case_insensitively_in_order():
    block = "<category>UX</category><category>ux</category><category>Product</category>"
    assert extract_categories(block) == ["ux", "product"]


def test_extract_categories_skips_empty_and_caps():
    block = "<category></category>" + "".join(f"<category>Tag{i}</category>" for i in range(10))
    assert extract_categories(block) == ["tag0", "tag1", "tag2", "tag3", "tag4", "tag5"]
    assert extract_categories(block, limit=2) == ["tag0", "tag1"]
