"""
Main pipeline orchestration for Feed Digest.

This module coordinates the daily run:
1. Load the configured sources
2. Fetch every feed concurrently (one attempt each, failures isolated)
3. Persist the raw per-source snapshot, keyed by execution date
4. Merge surviving articles, compute stats and the summary
5. Persist the daily payload to the canonical and published locations

It also provides resummarize, which regenerates only the summary of an
existing daily payload.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path

import httpx
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .config import AppConfig
from .core.types import Article, DailyPayload, RawFeedResult, Source, build_stats
from .core.window import TimeWindow
from .errors import PayloadNotFoundError
from .fetch.fetcher import build_client, fetch_feed
from .input.sources import load_sources
from .logging_utils import log_event, log_warning, setup_logging
from .output.writer import (
    dated_path,
    dumps,
    read_json,
    write_daily_payload,
    write_raw_snapshot,
    write_text,
)
from .summarize import SummaryProvider, create_summarizer


@dataclass
class FetchStats:
    """Statistics collected during the fetch stage.

    Attributes:
        total: Number of configured sources
        succeeded: Sources fetched without error (possibly with zero items)
        failed: Sources that ended with an error
        articles: Articles kept across all sources
    """
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    articles: int = 0

    @classmethod
    def from_results(cls, results: list[RawFeedResult]) -> FetchStats:
        failed = sum(1 for result in results if not result.ok)
        return cls(
            total=len(results),
            succeeded=len(results) - failed,
            failed=failed,
            articles=sum(len(result.items) for result in results),
        )


@dataclass
class DailyRunResult:
    """Everything a daily run produced."""
    payload: DailyPayload
    results: list[RawFeedResult]
    raw_path: Path
    payload_paths: list[Path] = field(default_factory=list)

    @property
    def stats(self) -> FetchStats:
        return FetchStats.from_results(self.results)


async def fetch_all(
    sources: list[Source],
    now: datetime,
    cfg: AppConfig,
    client: httpx.AsyncClient,
    logger: logging.Logger | None = None,
    progress: Progress | None = None,
    fetch_task: int | None = None,
) -> list[RawFeedResult]:
    """Fetch every source concurrently and return results in source order.

    All requests are issued together with no cap on in-flight requests.
    A fetch that raises despite fetch_feed's guarantees still becomes an
    error result for its own source only.
    """
    window = TimeWindow(cfg.window.time_zone)

    async def _fetch_single(source: Source) -> RawFeedResult:
        result = await fetch_feed(client, source, now, window, cfg.fetch, logger)
        if progress and fetch_task is not None:
            progress.advance(fetch_task, 1)
        return result

    tasks = [asyncio.create_task(_fetch_single(source)) for source in sources]
    settled = await asyncio.gather(*tasks, return_exceptions=True)

    results: list[RawFeedResult] = []
    for source, outcome in zip(sources, settled):
        if isinstance(outcome, BaseException):
            error = f"{type(outcome).__name__}: {outcome}"
            log_warning(logger, "Feed task crashed", event="fetch_failed", source=source.name, error=error)
            results.append(RawFeedResult(name=source.name, items=[], error=error))
        else:
            results.append(outcome)
    return results


async def run_daily(
    sources: list[Source],
    now: datetime,
    cfg: AppConfig,
    summarizer: SummaryProvider,
    client: httpx.AsyncClient | None = None,
    logger: logging.Logger | None = None,
    progress: Progress | None = None,
    fetch_task: int | None = None,
) -> DailyRunResult:
    """Run one daily ingestion over the given sources.

    Args:
        sources: Feeds to fetch, in display order
        now: Reference instant; yesterday's window and both file dates derive from it
        cfg: Application configuration
        summarizer: Provider producing the payload summary
        client: Optional HTTP client (one is created and closed when None)
        logger: Optional logger for events
        progress: Optional Rich progress bar
        fetch_task: Task ID for progress updates

    Returns:
        DailyRunResult with the payload, raw results and written paths
    """
    window = TimeWindow(cfg.window.time_zone)

    if client is None:
        async with build_client(cfg.fetch) as own_client:
            results = await fetch_all(sources, now, cfg, own_client, logger, progress, fetch_task)
    else:
        results = await fetch_all(sources, now, cfg, client, logger, progress, fetch_task)

    # Execution date, not content date
    raw_path = write_raw_snapshot(results, cfg.output.raw_path, window.calendar_date(now))
    log_event(logger, "Raw snapshot written", event="snapshot_written", path=str(raw_path))

    articles: list[Article] = [item for result in results for item in result.items]
    payload = DailyPayload(
        date=window.yesterday_date_string(now),
        summary=summarizer.summarize(articles),
        stats=build_stats(articles),
        articles=articles,
    )

    payload_paths = write_daily_payload(payload, [cfg.output.daily_path, cfg.output.public_path])
    log_event(
        logger,
        "Daily payload written",
        event="payload_written",
        date=payload.date,
        paths=[str(path) for path in payload_paths],
        total=payload.stats.total_articles,
        sources=payload.stats.sources,
    )
    return DailyRunResult(payload=payload, results=results, raw_path=raw_path, payload_paths=payload_paths)


def run_pipeline(
    cfg: AppConfig,
    now: datetime | None = None,
    summarizer: SummaryProvider | None = None,
    show_progress: bool = True,
    console: Console | None = None,
) -> DailyRunResult:
    """Run the complete daily pipeline from the configured sources file.

    Raises:
        SourcesError: If the sources file is missing or malformed
    """
    now = now or datetime.now(timezone.utc)
    logger = setup_logging(cfg.logging, cfg.output.resolve(cfg.logging.directory))
    summarizer = summarizer or create_summarizer(cfg.summary)
    console = console or Console()

    sources = load_sources(cfg.output.sources_file)
    log_event(
        logger,
        "Pipeline start",
        event="pipeline_start",
        sources=len(sources),
        time_zone=cfg.window.time_zone,
        now=now.isoformat(),
    )

    if not show_progress:
        result = asyncio.run(run_daily(sources, now, cfg, summarizer, logger=logger))
    else:
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        )
        with progress:
            fetch_task = progress.add_task("Fetch feeds", total=len(sources))
            result = asyncio.run(
                run_daily(
                    sources,
                    now,
                    cfg,
                    summarizer,
                    logger=logger,
                    progress=progress,
                    fetch_task=fetch_task,
                )
            )

    _render_fetch_stats(result.stats, console)
    log_event(
        logger,
        "Pipeline complete",
        event="pipeline_complete",
        date=result.payload.date,
        total=result.payload.stats.total_articles,
        failed_sources=result.stats.failed,
    )
    return result


def resummarize(
    cfg: AppConfig,
    target_date: str | None = None,
    now: datetime | None = None,
    summarizer: SummaryProvider | None = None,
    logger: logging.Logger | None = None,
) -> Path:
    """Regenerate the summary of an existing daily payload in place.

    Only the summary field changes; every other key of the stored file is
    written back untouched.

    Args:
        cfg: Application configuration
        target_date: Content date (YYYY-MM-DD); defaults to yesterday
        now: Reference instant used for the default date
        summarizer: Provider to use (built from config when None)
        logger: Optional logger for events

    Returns:
        Path of the rewritten payload file

    Raises:
        ValueError: If target_date is not a YYYY-MM-DD date or the file is not a payload
        PayloadNotFoundError: If no payload exists for that date
    """
    if target_date:
        day = date.fromisoformat(target_date).isoformat()
    else:
        window = TimeWindow(cfg.window.time_zone)
        day = window.yesterday_date_string(now or datetime.now(timezone.utc))

    path = dated_path(cfg.output.daily_path, day)
    if not path.exists():
        raise PayloadNotFoundError(f"Daily payload not found: {path}")

    data = read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Invalid daily payload: {path}")
    articles = [Article.from_dict(item) for item in data.get("articles") or []]
    summarizer = summarizer or create_summarizer(cfg.summary)
    data["summary"] = summarizer.summarize(articles).to_dict()

    write_text(path, dumps(data))
    log_event(logger, "Summary regenerated", event="resummarized", date=day, path=str(path))
    return path


def _render_fetch_stats(stats: FetchStats, console: Console) -> None:
    """Display fetch statistics to the console."""
    console.print(
        "[bold]Fetch summary[/bold]: "
        f"sources={stats.total}, ok={stats.succeeded}, failed={stats.failed}, "
        f"articles={stats.articles}"
    )
