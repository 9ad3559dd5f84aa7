import json
from pathlib import Path

import pytest

from feed_digest.core.types import Source
from feed_digest.errors import SourcesError
from feed_digest.input.sources import load_sources, parse_sources


def test_parse_sources_preserves_order():
    sources = parse_sources(
        [
            {"name": "Smashing Magazine", "url": "https://www.smashingmagazine.com/feed/"},
            {"name": "UX Collective", "url": "https://uxdesign.cc/feed"},
        ]
    )

    assert sources == [
        Source(name="Smashing Magazine", url="https://www.smashingmagazine.com/feed/"),
        Source(name="UX Collective", url="https://uxdesign.cc/feed"),
    ]


def test_parse_sources_skips_incomplete_entries():
    sources = parse_sources(
        [
            {"name": "No URL"},
            "not an object",
            {"name": "  ", "url": "https://example.com/feed"},
            {"name": "Kept", "url": " https://example.com/kept "},
        ]
    )

    assert sources == [Source(name="Kept", url="https://example.com/kept")]


def test_parse_sources_rejects_non_list():
    with pytest.raises(SourcesError):
        parse_sources({"name": "x", "url": "y"})


def test_load_sources_reads_file(tmp_path: Path):
    path = tmp_path / "sources.json"
    path.write_text(json.dumps([{"name": "A", "url": "https://a.example/feed"}]), encoding="utf-8")

    assert load_sources(path) == [Source(name="A", url="https://a.example/feed")]


def test_load_sources_missing_file(tmp_path: Path):
    with pytest.raises(SourcesError, match="Sources file not found"):
        load_sources(tmp_path / "missing.json")


def test_load_sources_invalid_json(tmp_path: Path):
    path = tmp_path / "sources.json"
    path.write_text("[{broken", encoding="utf-8")

    with pytest.raises(SourcesError, match="not valid JSON"):
        load_sources(path)


def test_bundled_sources_file_is_valid():
    path = Path(__file__).resolve().parents[1] / "feeds" / "sources.json"

    sources = load_sources(path)

    assert sources
    assert all(source.url.startswith("http") for source in sources)
