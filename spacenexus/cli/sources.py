"""Sources management commands."""

from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from ..config import SourceConfig, load_sources, save_sources
from ..config.models import DEFAULT_USER_AGENT
from ..ingestion.rss_fetcher import FEED_ACCEPT
from ..models import AuthorType
from .common import CONFIG_OPTION, load_cli_config

console = Console()
sources_app = typer.Typer(help="Manage blog sources")


def _sources_path(config_path: Optional[Path]) -> Path:
    return load_cli_config(config_path).sources_path


@sources_app.command("list")
def sources_list(config_path: Optional[Path] = CONFIG_OPTION) -> None:
    """List all configured sources."""
    sources_path = _sources_path(config_path)

    try:
        sources = load_sources(sources_path)
    except FileNotFoundError:
        console.print("[red]Sources file not found. Run 'spacenexus init' first.[/red]")
        raise typer.Exit(1)

    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("Author type", style="magenta")
    table.add_column("Active", style="yellow")
    table.add_column("Feed", style="blue")

    for source in sources:
        table.add_row(
            source.slug,
            source.name,
            source.author_type.value,
            "✓" if source.is_active else "✗",
            source.feed_url or "[dim]none[/dim]",
        )

    console.print(table)


@sources_app.command("add")
def sources_add(
    slug: str = typer.Option(..., "--slug", "-s", help="Unique source slug"),
    name: str = typer.Option(..., "--name", "-n", help="Source name"),
    url: str = typer.Option(..., "--url", "-u", help="Site URL"),
    feed_url: Optional[str] = typer.Option(None, "--feed-url", "-f", help="RSS/Atom feed URL"),
    author_type: AuthorType = typer.Option(
        AuthorType.JOURNALIST,
        "--author-type",
        "-a",
        help="Author type classification",
    ),
    author_name: Optional[str] = typer.Option(None, "--author-name", help="Default author name"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Short description"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Add a new blog source."""
    sources_path = _sources_path(config_path)

    try:
        sources = load_sources(sources_path)
    except FileNotFoundError:
        sources = []

    if any(s.slug == slug for s in sources):
        console.print(f"[red]Source with slug '{slug}' already exists.[/red]")
        raise typer.Exit(1)

    try:
        new_source = SourceConfig(
            slug=slug,
            name=name,
            url=url,
            feed_url=feed_url,
            author_type=author_type,
            author_name=author_name,
            description=description,
        )
    except ValueError as e:
        console.print(f"[red]Invalid source: {e}[/red]")
        raise typer.Exit(1)

    sources.append(new_source)
    save_sources(sources, sources_path)

    console.print(f"[green]✅ Added source: {name}[/green]")


@sources_app.command("remove")
def sources_remove(
    slug: str = typer.Argument(..., help="Slug of the source to remove"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Remove a source from sources.yaml (stored articles are kept)."""
    sources_path = _sources_path(config_path)

    try:
        sources = load_sources(sources_path)
    except FileNotFoundError:
        console.print("[red]Sources file not found.[/red]")
        raise typer.Exit(1)

    original_count = len(sources)
    sources = [s for s in sources if s.slug != slug]

    if len(sources) == original_count:
        console.print(f"[red]Source '{slug}' not found.[/red]")
        raise typer.Exit(1)

    save_sources(sources, sources_path)
    console.print(f"[green]✅ Removed source: {slug}[/green]")


@sources_app.command("test")
def sources_test(
    slug: Optional[str] = typer.Argument(None, help="Source slug to test (or test all)"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Test feed connectivity."""
    sources_path = _sources_path(config_path)

    try:
        sources = load_sources(sources_path)
    except FileNotFoundError:
        console.print("[red]Sources file not found.[/red]")
        raise typer.Exit(1)

    if slug:
        sources = [s for s in sources if s.slug == slug]
        if not sources:
            console.print(f"[red]Source '{slug}' not found.[/red]")
            raise typer.Exit(1)

    headers = {"User-Agent": DEFAULT_USER_AGENT, "Accept": FEED_ACCEPT}
    with httpx.Client(timeout=10.0, headers=headers, follow_redirects=True) as client:
        for source in sources:
            if not source.is_active:
                console.print(f"[yellow]⚠️  {source.name}: Disabled[/yellow]")
                continue
            if not source.feed_url:
                console.print(f"[dim]–  {source.name}: No feed URL[/dim]")
                continue

            try:
                response = client.get(source.feed_url)
                response.raise_for_status()
                console.print(f"[green]✅ {source.name}: OK ({response.status_code})[/green]")
            except httpx.HTTPError as e:
                console.print(f"[red]❌ {source.name}: Failed - {e}[/red]")
