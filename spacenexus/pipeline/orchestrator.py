"""Pipeline orchestrator for source registration and blog fetch passes."""

import logging
import time
from typing import Dict, Optional, Sequence

import pendulum
import psycopg
from psycopg import Connection
from pydantic import BaseModel, Field
from rich.console import Console
from rich.table import Table

from ..config import ConfigModel, SourceConfig
from ..db.articles import ArticleStorage
from ..db.sources import SourceManager
from ..ingestion import FeedItem, FeedResult, RSSFetcher, categorize_topic, extract_excerpt, strip_html

logger = logging.getLogger(__name__)
console = Console()


class FetchSummary(BaseModel):
    """Outcome of one fetch pass."""

    total_saved: int = Field(0, description="Articles inserted or refreshed")
    new_articles: int = Field(0, description="Articles seen for the first time")
    item_errors: int = Field(0, description="Items that failed to store")
    sources_succeeded: int = Field(0, description="Feeds fetched and processed")
    sources_failed: int = Field(0, description="Feeds that errored or timed out")
    sources_skipped: int = Field(0, description="Active sources without a feed URL")
    failures: Dict[str, str] = Field(default_factory=dict, description="Source name to error")
    duration: float = Field(0.0, description="Wall-clock seconds")


class BlogPipeline:
    """Registers sources and runs fetch passes against the store."""

    def __init__(
        self,
        config: Optional[ConfigModel] = None,
        fetcher: Optional[RSSFetcher] = None,
        source_manager: Optional[SourceManager] = None,
        article_storage: Optional[ArticleStorage] = None,
    ) -> None:
        """Initialize pipeline; collaborators default to the real ones."""
        self.config = config or ConfigModel()
        fetch = self.config.fetch
        self.fetcher = fetcher or RSSFetcher(
            timeout=fetch.timeout_seconds,
            max_items=fetch.max_items_per_source,
            max_concurrent=fetch.max_concurrent,
            user_agent=fetch.user_agent,
        )
        self.source_manager = source_manager or SourceManager()
        self.article_storage = article_storage or ArticleStorage()

    def register_sources(self, conn: Connection, sources: Sequence[SourceConfig]) -> int:
        """Upsert the given sources; returns how many succeeded."""
        count = self.source_manager.register_sources(conn, sources)
        logger.info("Registered %d of %d blog sources", count, len(sources))
        return count

    def _store_item(self, conn: Connection, item: FeedItem, fetched_at) -> bool:
        """
        Normalize, classify and upsert one item.

        Returns:
            True if the article was new
        """
        text = strip_html(item.content)
        excerpt = extract_excerpt(item.content, self.config.fetch.excerpt_max_length)
        topic = categorize_topic(item.title, text)

        _, is_new = self.article_storage.upsert_article(
            conn,
            source_id=item.source_id,
            url=item.link,
            title=item.title,
            excerpt=excerpt,
            author_name=item.author,
            topic=topic.value,
            published_at=item.published or fetched_at,
        )
        return is_new

    def _process_feed(self, conn: Connection, result: FeedResult, summary: FetchSummary) -> None:
        """Store every item of a successful feed, then stamp the source."""
        fetched_at = pendulum.now("UTC")

        for item in result.items:
            try:
                is_new = self._store_item(conn, item, fetched_at)
            except (psycopg.OperationalError, psycopg.InterfaceError):
                raise
            except Exception as e:
                summary.item_errors += 1
                logger.warning("Failed to save article %s: %s", item.link, e)
                continue

            summary.total_saved += 1
            if is_new:
                summary.new_articles += 1

        self.source_manager.mark_fetched(conn, result.source_id)

    def run(self, conn: Connection) -> FetchSummary:
        """
        Run one fetch pass over all active sources.

        Feed and item problems are logged and counted; only store-level
        failures propagate.
        """
        start = time.time()
        summary = FetchSummary()

        sources = self.source_manager.get_active_sources(conn)
        with_feed = [s for s in sources if s.feed_url]
        summary.sources_skipped = len(sources) - len(with_feed)

        results = self.fetcher.fetch_feeds_sync(with_feed)

        for result in results:
            if not result.success:
                summary.sources_failed += 1
                summary.failures[result.source_name] = result.error or "Unknown error"
                continue

            self._process_feed(conn, result, summary)
            summary.sources_succeeded += 1

        summary.duration = time.time() - start
        logger.info(
            "Blog fetch complete: saved=%d succeeded=%d failed=%d skipped=%d",
            summary.total_saved,
            summary.sources_succeeded,
            summary.sources_failed,
            summary.sources_skipped,
        )
        return summary


def print_fetch_summary(summary: FetchSummary) -> None:
    """Print summary of a fetch pass."""
    table = Table(title="Blog Fetch Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")

    table.add_row("Articles saved", str(summary.total_saved))
    table.add_row("New articles", str(summary.new_articles))
    table.add_row("Sources succeeded", f"[green]{summary.sources_succeeded}[/green]")
    table.add_row("Sources failed", f"[red]{summary.sources_failed}[/red]")
    table.add_row("Sources without feed", str(summary.sources_skipped))
    if summary.item_errors:
        table.add_row("Item errors", f"[yellow]{summary.item_errors}[/yellow]")
    table.add_row("Duration", f"{summary.duration:.1f}s")

    console.print(table)

    if summary.failures:
        console.print("\n[bold red]Failed feeds:[/bold red]")
        for name, error in summary.failures.items():
            console.print(f"  - {name}: {error}")

