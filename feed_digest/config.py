"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- WindowConfig: Time zone that defines "yesterday"
- FetchConfig: HTTP fetching and per-feed limits
- OutputConfig: Sources file and output directories
- SummaryConfig: Summary provider settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .core.window import DEFAULT_TIME_ZONE


@dataclass
class WindowConfig:
    """Configuration for the digest date window.

    Attributes:
        time_zone: IANA zone name used to compute calendar dates
    """

    time_zone: str = DEFAULT_TIME_ZONE


@dataclass
class FetchConfig:
    """Configuration for feed fetching.

    Attributes:
        timeout_seconds: Per-request timeout, or None to wait indefinitely
        user_agent: HTTP User-Agent header string
        trust_env: Whether to respect system proxy settings
        max_items_per_feed: Cap on articles kept per source
        excerpt_chars: Maximum excerpt length per article
        max_tags: Maximum number of tags per article
    """

    timeout_seconds: float | None = 30.0
    user_agent: str = "feed-digest/0.1 (RSS reader)"
    trust_env: bool = True
    max_items_per_feed: int = 30
    excerpt_chars: int = 220
    max_tags: int = 6


@dataclass
class OutputConfig:
    """Configuration for input and output locations.

    Relative paths are resolved against root.

    Attributes:
        root: Base directory for all other paths
        sources_path: JSON list of {name, url} feed records
        raw_dir: Per-run raw snapshots, keyed by execution date
        daily_dir: Canonical daily payloads, keyed by content date
        public_dir: Published copy of the daily payloads for the display app
    """

    root: str = "."
    sources_path: str = "feeds/sources.json"
    raw_dir: str = "feeds/raw"
    daily_dir: str = "feeds/daily"
    public_dir: str = "public/feeds/daily"

    def resolve(self, value: str) -> Path:
        path = Path(value)
        if path.is_absolute():
            return path
        return Path(self.root) / path

    @property
    def sources_file(self) -> Path:
        return self.resolve(self.sources_path)

    @property
    def raw_path(self) -> Path:
        return self.resolve(self.raw_dir)

    @property
    def daily_path(self) -> Path:
        return self.resolve(self.daily_dir)

    @property
    def public_path(self) -> Path:
        return self.resolve(self.public_dir)


@dataclass
class SummaryConfig:
    """Configuration for the daily summary.

    Attributes:
        provider: Registered summary provider name
        title: Summary title shown by the display app
        empty_text: Text used when no article qualified
        max_sources: Number of source names mentioned in the text
    """

    provider: str = "placeholder"
    title: str = "Resumo do dia em Design"
    empty_text: str = "Nao houve artigos relevantes publicados ontem."
    max_sources: int = 3


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        directory: Directory for log files, resolved against output.root
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    directory: str = "feeds/logs"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    window: WindowConfig = field(default_factory=WindowConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config file {path}: expected a mapping at top level")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        window=WindowConfig(**data["window"]),
        fetch=FetchConfig(**data["fetch"]),
        output=OutputConfig(**data["output"]),
        summary=SummaryConfig(**data["summary"]),
        logging=LoggingConfig(**data["logging"]),
    )
