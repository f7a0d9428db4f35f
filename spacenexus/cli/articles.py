"""Article browsing and freshness commands."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..db import ArticleStorage, SourceManager, get_connection
from ..models import ArticleWithSource, AuthorType, Topic
from .common import CONFIG_OPTION, load_cli_config

console = Console()
articles_app = typer.Typer(help="Browse stored articles")


def _articles_table(title: str, articles: List[ArticleWithSource]) -> Table:
    table = Table(title=title)
    table.add_column("Published", style="yellow", no_wrap=True)
    table.add_column("Topic", style="magenta")
    table.add_column("Source", style="cyan")
    table.add_column("Title")

    for article in articles:
        table.add_row(
            article.published_at.strftime("%Y-%m-%d"),
            str(article.topic),
            article.source_name,
            article.title,
        )
    return table


@articles_app.command("list")
def articles_list(
    topic: Optional[Topic] = typer.Option(None, "--topic", "-t", help="Filter by topic"),
    author_type: Optional[AuthorType] = typer.Option(
        None, "--author-type", "-a", help="Filter by source author type"
    ),
    source_id: Optional[int] = typer.Option(None, "--source-id", help="Filter by source ID"),
    limit: int = typer.Option(20, "--limit", "-l", min=1, max=200),
    offset: int = typer.Option(0, "--offset", "-o", min=0),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """List stored articles, newest first."""
    config = load_cli_config(config_path)

    with get_connection(config.get_db_config()) as conn:
        page = ArticleStorage().list_articles(
            conn,
            topic=topic.value if topic else None,
            author_type=author_type.value if author_type else None,
            source_id=source_id,
            limit=limit,
            offset=offset,
        )

    if not page.items:
        console.print("[yellow]No articles found.[/yellow]")
        return

    console.print(_articles_table("Articles", page.items))
    shown_to = offset + len(page.items)
    console.print(f"[dim]Showing {offset + 1}-{shown_to} of {page.total}[/dim]")


@articles_app.command("recent")
def articles_recent(
    limit: int = typer.Option(6, "--limit", "-l", min=1, max=50),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Show the most recent articles."""
    config = load_cli_config(config_path)

    with get_connection(config.get_db_config()) as conn:
        articles = ArticleStorage().recent_articles(conn, limit=limit)

    if not articles:
        console.print("[yellow]No articles found.[/yellow]")
        return

    console.print(_articles_table("Recent Articles", articles))


@articles_app.command("sources")
def articles_sources(
    author_type: Optional[AuthorType] = typer.Option(
        None, "--author-type", "-a", help="Filter by author type"
    ),
    inactive: bool = typer.Option(False, "--inactive", help="List inactive sources instead"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """List registered sources with article counts."""
    config = load_cli_config(config_path)

    with get_connection(config.get_db_config()) as conn:
        sources = SourceManager().list_sources(
            conn,
            author_type=author_type.value if author_type else None,
            is_active=not inactive,
        )

    table = Table(title="Registered Sources")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Author type", style="magenta")
    table.add_column("Articles", justify="right", style="green")
    table.add_column("Last fetched", style="yellow")

    for source in sources:
        table.add_row(
            str(source.id),
            source.name,
            str(source.author_type),
            str(source.article_count),
            source.last_fetched.strftime("%Y-%m-%d %H:%M") if source.last_fetched else "never",
        )

    console.print(table)


def freshness_command(config_path: Optional[Path] = CONFIG_OPTION) -> None:
    """Report how old the newest fetched article is; exits 1 when stale."""
    config = load_cli_config(config_path)
    threshold = config.config.freshness.max_stale_minutes

    storage = ArticleStorage()
    with get_connection(config.get_db_config()) as conn:
        report = storage.latest_fetch(conn, max_stale_minutes=threshold)
        total = storage.count_articles(conn)

    if report.last_fetched_at is None:
        console.print("[red]No articles have been fetched yet.[/red]")
        raise typer.Exit(1)

    style = "red" if report.stale else "green"
    console.print(
        f"[{style}]Last fetch: {report.last_fetched_at:%Y-%m-%d %H:%M} "
        f"({report.age_minutes} min ago, threshold {threshold} min)[/{style}]"
    )
    console.print(f"[dim]{total} articles stored[/dim]")
    if report.stale:
        raise typer.Exit(1)
