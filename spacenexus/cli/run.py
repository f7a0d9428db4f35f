"""Register and fetch command implementations."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import FetchConfig, load_sources
from ..db import close_connection_pool, get_connection, validate_connection
from ..pipeline import BlogPipeline, print_fetch_summary
from .common import CONFIG_OPTION, load_cli_config

console = Console()


def register_command(config_path: Optional[Path] = CONFIG_OPTION) -> None:
    """Register (upsert) the sources from sources.yaml."""
    config = load_cli_config(config_path)

    try:
        sources = load_sources(config.sources_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    db_config = config.get_db_config()
    if not validate_connection(db_config):
        console.print("[red]❌ Database connection failed![/red]")
        raise typer.Exit(1)

    try:
        with get_connection(db_config) as conn:
            count = BlogPipeline(config.config).register_sources(conn, sources)
    except Exception as e:
        console.print(f"[red]Registration failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()

    style = "green" if count == len(sources) else "yellow"
    console.print(f"[{style}]Registered {count} of {len(sources)} sources[/{style}]")


def fetch_command(
    config_path: Optional[Path] = CONFIG_OPTION,
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        min=0.1,
        max=120.0,
        help="Per-source timeout in seconds",
    ),
    max_items: Optional[int] = typer.Option(
        None,
        "--max-items",
        min=1,
        max=200,
        help="Maximum entries kept per feed",
    ),
) -> None:
    """Run one fetch pass over all active sources."""
    try:
        config = load_cli_config(config_path)
        settings = config.config

        overrides = {}
        if timeout is not None:
            overrides["timeout_seconds"] = timeout
        if max_items is not None:
            overrides["max_items_per_source"] = max_items
        if overrides:
            settings.fetch = FetchConfig.model_validate(
                {**settings.fetch.model_dump(), **overrides}
            )

        console.print("[dim]Checking database connection...[/dim]")
        db_config = config.get_db_config()
        if not validate_connection(db_config):
            console.print("[red]❌ Database connection failed![/red]")
            console.print("Please check your database configuration and ensure Postgres is running.")
            raise typer.Exit(1)

        with get_connection(db_config) as conn:
            summary = BlogPipeline(settings).run(conn)

        print_fetch_summary(summary)

    except KeyboardInterrupt:
        console.print("\n[yellow]Fetch interrupted by user[/yellow]")
        raise typer.Exit(1)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Fetch failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        close_connection_pool()
