"""Helpers shared by CLI commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..utils import setup_logging

console = Console()


def load_cli_config(config_path: Optional[Path] = None) -> Config:
    """Load config and configure logging, exiting cleanly on errors."""
    config = Config(config_path)
    try:
        settings = config.config
    except FileNotFoundError:
        console.print("[red]Config file not found. Run 'spacenexus init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    setup_logging(settings.logging.level, settings.logging.rich_tracebacks)
    return config


CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to config.yaml (default: ~/.config/spacenexus/config.yaml)",
)
