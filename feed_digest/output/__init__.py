"""
Output writing.

This package persists raw per-source snapshots and daily payloads.
"""

from .writer import (
    dated_path,
    dumps,
    read_json,
    write_daily_payload,
    write_raw_snapshot,
    write_text,
)

__all__ = [
    "dated_path",
    "dumps",
    "read_json",
    "write_daily_payload",
    "write_raw_snapshot",
    "write_text",
]
