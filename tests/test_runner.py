"""Tests for the daily aggregation run."""

import asyncio
import io
import json
from datetime import datetime, timezone
from pathlib import Path

import httpx
import pytest
from rich.console import Console

from feed_digest import runner
from feed_digest.config import AppConfig
from feed_digest.core.types import Article, Source, Summary
from feed_digest.errors import SourcesError
from feed_digest.summarize import PlaceholderSummarizer, SummaryProvider

NOW = datetime(2026, 3, 10, 15, 0, tzinfo=timezone.utc)


def _item(title: str, pub_date: str = "Mon, 09 Mar 2026 12:00:00 -0300") -> str:
    slug = title.lower().replace(" ", "-")
    return (
        f"<item><title>{title}</title><link>https://example.com/{slug}</link>"
        f"<pubDate>{pub_date}</pubDate><category>UX</category></item>"
    )


def _feed(*items: str) -> str:
    return "<rss><channel>" + "".join(items) + "</channel></rss>"


def _config(root: Path) -> AppConfig:
    cfg = AppConfig()
    cfg.output.root = str(root)
    cfg.logging.console = False
    return cfg


def _handler(request: httpx.Request) -> httpx.Response:
    host = request.url.host
    if host == "down.example.com":
        raise httpx.ConnectError("connection refused", request=request)
    if host == "broken.example.com":
        return httpx.Response(500, text="server error")
    if host == "good.example.com":
        return httpx.Response(200, text=_feed(_item("Alpha"), _item("Beta"), _item("Old", "Sun, 01 Mar 2026 10:00:00 GMT")))
    return httpx.Response(404)


SOURCES = [
    Source(name="Down", url="https://down.example.com/feed"),
    Source(name="Broken", url="https://broken.example.com/feed"),
    Source(name="Good", url="https://good.example.com/feed"),
]


def _run(cfg: AppConfig, sources: list[Source], handler, summarizer: SummaryProvider | None = None):
    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await runner.run_daily(
                sources, NOW, cfg, summarizer or PlaceholderSummarizer(cfg.summary), client=client
            )

    return asyncio.run(_go())


def test_partial_failures_do_not_abort_the_run(tmp_path: Path):
    cfg = _config(tmp_path)

    result = _run(cfg, SOURCES, _handler)

    assert len(result.results) == 3
    assert [r.name for r in result.results] == ["Down", "Broken", "Good"]
    assert result.results[0].error == "ConnectError: connection refused"
    assert result.results[1].error == 500
    assert result.results[2].error is None
    assert len(result.results[2].items) == 2

    payload = result.payload
    assert payload.date == "2026-03-09"
    assert payload.stats.total_articles == 2
    assert payload.stats.sources == 1
    assert [a.title for a in payload.articles] == ["Alpha", "Beta"]

    assert result.stats.failed == 2
    assert result.stats.succeeded == 1


def test_raw_snapshot_is_keyed_by_execution_date(tmp_path: Path):
    cfg = _config(tmp_path)

    result = _run(cfg, SOURCES, _handler)

    assert result.raw_path == tmp_path / "feeds" / "raw" / "2026-03-10.json"
    raw = json.loads(result.raw_path.read_text(encoding="utf-8"))
    assert raw[0] == {"name": "Down", "items": [], "error": "ConnectError: connection refused"}
    assert raw[1] == {"name": "Broken", "items": [], "error": 500}
    assert "error" not in raw[2]
    assert [item["title"] for item in raw[2]["items"]] == ["Alpha", "Beta"]


def test_daily_payload_written_twice_with_identical_bytes(tmp_path: Path):
    cfg = _config(tmp_path)

    result = _run(cfg, SOURCES, _handler)

    daily = tmp_path / "feeds" / "daily" / "2026-03-09.json"
    public = tmp_path / "public" / "feeds" / "daily" / "2026-03-09.json"
    assert result.payload_paths == [daily, public]
    assert daily.read_bytes() == public.read_bytes()

    data = json.loads(daily.read_text(encoding="utf-8"))
    assert data["date"] == "2026-03-09"
    assert data["stats"] == {"totalArticles": 2, "sources": 1}
    assert data["summary"]["title"] == "Resumo do dia em Design"
    assert data["articles"][0] == {
        "id": "good-alpha-2026-03-09",
        "title": "Alpha",
        "source": "Good",
        "publishedAt": "2026-03-09",
        "url": "https://example.com/alpha",
        "excerpt": "",
        "tags": ["ux"],
    }


def test_every_source_failing_still_produces_payload(tmp_path: Path):
    cfg = _config(tmp_path)

    result = _run(cfg, SOURCES[:2], _handler)

    assert result.payload.articles == []
    assert result.payload.stats.total_articles == 0
    assert result.payload.stats.sources == 0
    assert result.payload.summary.text == cfg.summary.empty_text
    assert (tmp_path / "feeds" / "daily" / "2026-03-09.json").exists()


def test_article_order_follows_source_order_not_completion_order(tmp_path: Path):
    cfg = _config(tmp_path)

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "slow.example.com":
            await asyncio.sleep(0.05)
            return httpx.Response(200, text=_feed(_item("Slow one")))
        return httpx.Response(200, text=_feed(_item("Fast one")))

    sources = [
        Source(name="Slow", url="https://slow.example.com/feed"),
        Source(name="Fast", url="https://fast.example.com/feed"),
    ]
    result = _run(cfg, sources, handler)

    assert [a.source for a in result.payload.articles] == ["Slow", "Fast"]
    assert result.payload.stats.sources == 2


def test_summary_provider_is_pluggable(tmp_path: Path):
    cfg = _config(tmp_path)

    class CountingSummarizer(SummaryProvider):
        def __init__(self):
            self.seen: list[Article] = []

        def summarize(self, articles):
            self.seen = list(articles)
            return Summary(title="Custom", text=f"{len(articles)} items")

    summarizer = CountingSummarizer()
    result = _run(cfg, SOURCES, _handler, summarizer)

    assert [a.title for a in summarizer.seen] == ["Alpha", "Beta"]
    assert result.payload.summary == Summary(title="Custom", text="2 items")


def test_crashing_fetch_becomes_error_result(tmp_path: Path, monkeypatch):
    cfg = _config(tmp_path)
    original = runner.fetch_feed

    async def flaky_fetch(client, source, *args, **kwargs):
        if source.name == "Broken":
            raise RuntimeError("unexpected")
        return await original(client, source, *args, **kwargs)

    monkeypatch.setattr(runner, "fetch_feed", flaky_fetch)

    result = _run(cfg, SOURCES, _handler)

    assert result.results[1].error == "RuntimeError: unexpected"
    assert len(result.results[2].items) == 2


def test_run_pipeline_reads_sources_file(tmp_path: Path, monkeypatch):
    cfg = _config(tmp_path)
    sources_file = tmp_path / "feeds" / "sources.json"
    sources_file.parent.mkdir(parents=True)
    sources_file.write_text(
        json.dumps([{"name": s.name, "url": s.url} for s in SOURCES]), encoding="utf-8"
    )
    monkeypatch.setattr(
        runner, "build_client", lambda fetch_cfg: httpx.AsyncClient(transport=httpx.MockTransport(_handler))
    )
    out = io.StringIO()

    result = runner.run_pipeline(cfg, now=NOW, show_progress=False, console=Console(file=out))

    assert result.payload.stats.total_articles == 2
    assert "failed=2" in out.getvalue()
    assert (tmp_path / "public" / "feeds" / "daily" / "2026-03-09.json").exists()


def test_run_pipeline_fails_without_sources_file(tmp_path: Path):
    cfg = _config(tmp_path)

    with pytest.raises(SourcesError, match="Sources file not found"):
        runner.run_pipeline(cfg, now=NOW, show_progress=False, console=Console(file=io.StringIO()))
