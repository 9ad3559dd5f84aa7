"""
Feed Digest - daily RSS ingestion for a design news board.

This package fetches a list of RSS feeds, keeps the items published
"yesterday" in a fixed time zone, normalizes them into uniform article
records and writes a dated JSON payload for the display app.

Main entry point is the CLI via `feed-digest run` command.

Example:
    $ feed-digest run --root .
    $ feed-digest resummarize 2026-10-18
"""

__all__ = ["__version__", "TimeWindow", "normalize_item", "run_pipeline", "resummarize", "slugify"]
__version__ = "0.1.0"

from .core.normalize import normalize_item
from .core.text import slugify
from .core.window import TimeWindow
from .runner import resummarize, run_pipeline
