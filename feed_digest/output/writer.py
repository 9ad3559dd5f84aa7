"""JSON persistence for raw snapshots and daily payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..core.types import DailyPayload, RawFeedResult


def dumps(data: Any) -> str:
    """Serialize with the layout shared by every output file."""
    return json.dumps(data, ensure_ascii=False, indent=2)


def dated_path(directory: Path, day: str) -> Path:
    return directory / f"{day}.json"


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(text)
    return path


def write_raw_snapshot(results: list[RawFeedResult], raw_dir: Path, day: str) -> Path:
    """Write all per-source results, errors included, keyed by execution date."""
    return write_text(dated_path(raw_dir, day), dumps([result.to_dict() for result in results]))


def write_daily_payload(payload: DailyPayload, directories: list[Path]) -> list[Path]:
    """Write the same serialized payload into every directory.

    The payload is serialized once so all copies are byte-identical. Any
    write error propagates to the caller.
    """
    text = dumps(payload.to_dict())
    return [write_text(dated_path(directory, payload.date), text) for directory in directories]


def read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)
