"""
Feed fetching over HTTP.

Each source is fetched exactly once per run with an async httpx client.
fetch_feed never raises: transport failures and non-success statuses are
returned as an error-tagged RawFeedResult so that one broken feed cannot
affect the others.
"""

from __future__ import annotations

from datetime import datetime
import logging

import httpx

from ..config import FetchConfig
from ..core.normalize import normalize_item
from ..core.types import RawFeedResult, Source
from ..core.window import TimeWindow
from ..logging_utils import log_event, log_warning
from ..parser import extract_items


def build_client(cfg: FetchConfig) -> httpx.AsyncClient:
    """Create the shared async client for one run.

    Follows redirects and respects system proxy settings when trust_env
    is enabled. A timeout of None disables the per-request timeout.
    """
    return httpx.AsyncClient(
        timeout=cfg.timeout_seconds,
        headers={"User-Agent": cfg.user_agent},
        follow_redirects=True,
        trust_env=cfg.trust_env,
    )


async def fetch_feed(
    client: httpx.AsyncClient,
    source: Source,
    now: datetime,
    window: TimeWindow,
    cfg: FetchConfig | None = None,
    logger: logging.Logger | None = None,
) -> RawFeedResult:
    """Fetch one feed and normalize its items.

    Args:
        client: Shared async HTTP client
        source: The feed to fetch
        now: Reference instant for the "yesterday" window
        window: Time zone configuration
        cfg: Fetch limits (defaults apply when None)
        logger: Optional logger for events

    Returns:
        RawFeedResult with up to max_items_per_feed articles on success, or
        with error set to the exception text or HTTP status code on failure
    """
    cfg = cfg or FetchConfig()
    try:
        resp = await client.get(source.url)
        if not resp.is_success:
            log_warning(
                logger,
                "Feed returned non-success status",
                event="fetch_failed",
                source=source.name,
                url=source.url,
                status_code=resp.status_code,
            )
            return RawFeedResult(name=source.name, items=[], error=resp.status_code)
        xml_text = resp.text
    except Exception as exc:  # noqa: BLE001
        error = f"{type(exc).__name__}: {exc}"
        log_warning(
            logger,
            "Feed fetch failed",
            event="fetch_failed",
            source=source.name,
            url=source.url,
            error=error,
            error_category=_categorize_error(exc),
        )
        return RawFeedResult(name=source.name, items=[], error=error)

    items = []
    for block in extract_items(xml_text):
        article = normalize_item(
            block,
            source.name,
            now,
            window,
            excerpt_chars=cfg.excerpt_chars,
            max_tags=cfg.max_tags,
        )
        if article is None:
            continue
        items.append(article)
        if len(items) >= cfg.max_items_per_feed:
            break

    log_event(
        logger,
        "Feed fetched",
        event="feed_fetched",
        source=source.name,
        url=source.url,
        items=len(items),
    )
    return RawFeedResult(name=source.name, items=items)


def _categorize_error(exc: Exception) -> str:
    """Categorize transport errors for logging: timeout, network_failed or unknown."""
    if isinstance(exc, httpx.TimeoutException):
        return "timeout"
    if isinstance(exc, httpx.TransportError):
        return "network_failed"
    return "unknown"
