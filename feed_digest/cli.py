"""
Command-line interface for Feed Digest.

Uses Typer to expose the daily run and the summary regeneration step.
Loads .env files so the config path can be set via FEED_DIGEST_CONFIG.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .config import AppConfig, load_config
from .errors import FeedDigestError
from .logging_utils import setup_logging
from .runner import resummarize as resummarize_payload
from .runner import run_pipeline

app = typer.Typer(add_completion=False)
console = Console()


def _load(config: Path | None, root: Path | None, log_level: str | None) -> AppConfig:
    cfg = load_config(str(config) if config else None)
    if root is not None:
        cfg.output.root = str(root)
    if log_level:
        cfg.logging.level = log_level
    return cfg


@app.command()
def run(
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, envvar="FEED_DIGEST_CONFIG", help="YAML config file."
    ),
    root: Path | None = typer.Option(None, "--root", "-r", help="Base directory for feeds/ and public/."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Fetch all sources and write yesterday's digest.

    Writes the raw snapshot under feeds/raw/<today>.json and the daily
    payload under feeds/daily/<yesterday>.json and public/feeds/daily/.
    """
    load_dotenv()
    try:
        cfg = _load(config, root, log_level)
        if log_file is not None:
            cfg.logging.file = log_file
        result = run_pipeline(cfg, show_progress=progress, console=console)
    except (FeedDigestError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    for path in result.payload_paths:
        console.print(f"Daily payload written: {path}")


@app.command()
def resummarize(
    target_date: str | None = typer.Argument(None, help="Content date (YYYY-MM-DD). Defaults to yesterday."),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, envvar="FEED_DIGEST_CONFIG", help="YAML config file."
    ),
    root: Path | None = typer.Option(None, "--root", "-r", help="Base directory for feeds/ and public/."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Regenerate the summary of an existing daily payload in place."""
    load_dotenv()
    try:
        cfg = _load(config, root, log_level)
        logger = setup_logging(cfg.logging, cfg.output.resolve(cfg.logging.directory))
        path = resummarize_payload(cfg, target_date, logger=logger)
    except (FeedDigestError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(f"Summary updated: {path}")


if __name__ == "__main__":
    app()
