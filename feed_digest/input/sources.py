"""Loader for the feed sources file.

The sources file is a JSON array of records:

    [
        {"name": "Smashing Magazine", "url": "https://www.smashingmagazine.com/feed/"},
        {"name": "UX Collective", "url": "https://uxdesign.cc/feed"}
    ]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..core.types import Source
from ..errors import SourcesError

logger = logging.getLogger(__name__)


def parse_sources(data: Any) -> list[Source]:
    """Parse decoded JSON into Source records, preserving order.

    Entries missing a name or url are skipped with a warning.

    Raises:
        SourcesError: If the top-level value is not a list
    """
    if not isinstance(data, list):
        raise SourcesError("Invalid sources format: expected a JSON array of {name, url}")

    sources: list[Source] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"Skipping source #{index}: not an object")
            continue
        name = str(item.get("name") or "").strip()
        url = str(item.get("url") or "").strip()
        if not name or not url:
            logger.warning(f"Skipping source #{index}: missing required fields (name or url)")
            continue
        sources.append(Source(name=name, url=url))
    return sources


def load_sources(path: Path) -> list[Source]:
    """Read and parse the sources file.

    Raises:
        SourcesError: If the file is missing, not valid JSON, or malformed
    """
    if not path.exists():
        raise SourcesError(f"Sources file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise SourcesError(f"Sources file is not valid JSON: {path} ({exc})") from exc
    return parse_sources(data)
