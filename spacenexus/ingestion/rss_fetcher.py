"""RSS feed fetcher with per-source timeout and failure isolation."""

import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Sequence

import feedparser
import httpx
import pendulum

from ..config.models import DEFAULT_USER_AGENT
from .models import FeedItem, FeedResult, FeedSource

logger = logging.getLogger(__name__)

FEED_ACCEPT = "application/rss+xml, application/xml, text/xml"


class FeedFetchError(Exception):
    """A feed could not be retrieved or parsed."""


class FeedTimeoutError(FeedFetchError):
    """A feed did not respond within the per-source deadline."""


def _discard_result(task: "asyncio.Task") -> None:
    """Consume the outcome of an abandoned request task."""
    if not task.cancelled():
        task.exception()


def _parse_entry_date(entry) -> Optional[datetime]:
    """Publication date from a feedparser entry, in UTC."""
    for field in ("published_parsed", "updated_parsed"):
        parsed = entry.get(field)
        if parsed:
            try:
                return pendulum.datetime(*parsed[:6], tz="UTC")
            except (TypeError, ValueError):
                continue
    return None


def _entry_content(entry) -> str:
    """Raw entry content: full encoded content, then snippet, then empty."""
    for block in entry.get("content") or []:
        value = block.get("value")
        if value:
            return value
    return entry.get("summary") or entry.get("description") or ""


class RSSFetcher:
    """Fetch and parse RSS feeds."""

    def __init__(
        self,
        timeout: float = 15.0,
        max_items: int = 20,
        max_concurrent: int = 1,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize RSS fetcher."""
        if max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.timeout = timeout
        self.max_items = max_items
        self.max_concurrent = max_concurrent
        self.user_agent = user_agent
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        """Build the shared HTTP client for one fetch pass."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers={"User-Agent": self.user_agent, "Accept": FEED_ACCEPT},
            transport=self.transport,
        )

    async def _download(self, client: httpx.AsyncClient, url: str) -> bytes:
        response = await client.get(url)
        response.raise_for_status()
        return response.content

    async def _download_with_deadline(self, client: httpx.AsyncClient, url: str) -> bytes:
        """Race the request against a wall-clock timer.

        The client timeout is not trusted on its own. If the timer fires
        first the request task is cancelled and whatever it eventually
        produces is dropped.
        """
        task = asyncio.ensure_future(self._download(client, url))
        done, _ = await asyncio.wait({task}, timeout=self.timeout)
        if task not in done:
            task.cancel()
            task.add_done_callback(_discard_result)
            raise FeedTimeoutError(f"Timed out after {self.timeout:g}s")
        return task.result()

    def parse_feed(self, body: bytes, source: FeedSource) -> List[FeedItem]:
        """Parse a feed body into at most max_items items."""
        feed = feedparser.parse(body)

        if not feed.entries:
            if feed.bozo:
                raise FeedFetchError(f"Invalid RSS feed: {feed.get('bozo_exception')}")
            if not feed.get("version"):
                raise FeedFetchError("Response is not an RSS or Atom feed")

        items = []
        for entry in feed.entries[: self.max_items]:
            title = (entry.get("title") or "").strip()
            link = (entry.get("link") or "").strip()
            # No stable identity without both
            if not title or not link:
                continue

            items.append(
                FeedItem(
                    title=title,
                    link=link,
                    published=_parse_entry_date(entry),
                    content=_entry_content(entry),
                    author=entry.get("author") or source.author_name,
                    source_name=source.name,
                    source_id=source.id,
                )
            )
        return items

    async def fetch_feed(self, client: httpx.AsyncClient, source: FeedSource) -> FeedResult:
        """Fetch and parse a single RSS feed. Never raises for feed problems."""
        result = FeedResult(
            source_id=source.id,
            source_name=source.name,
            source_url=source.feed_url or "",
            success=False,
        )

        try:
            body = await self._download_with_deadline(client, source.feed_url)
            items = self.parse_feed(body, source)
        except httpx.HTTPStatusError as e:
            result.error = f"HTTP {e.response.status_code}"
        except httpx.TimeoutException:
            result.error = f"Timed out after {self.timeout:g}s"
        except httpx.HTTPError as e:
            result.error = f"HTTP error: {e}"
        except FeedFetchError as e:
            result.error = str(e)
        except Exception as e:
            result.error = f"Unexpected error: {e}"
        else:
            result.success = True
            result.items = items
            result.item_count = len(items)
            return result

        logger.warning(
            "Failed to fetch from %s (%s): %s", source.name, source.feed_url, result.error
        )
        return result

    async def fetch_all_feeds(self, sources: Sequence[FeedSource]) -> List[FeedResult]:
        """Fetch feeds in source order; one failure never blocks the others."""
        sources = [s for s in sources if s.feed_url]

        if not sources:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async with self._client() as client:

            async def fetch_with_semaphore(source: FeedSource) -> FeedResult:
                async with semaphore:
                    return await self.fetch_feed(client, source)

            tasks = [fetch_with_semaphore(source) for source in sources]
            results = await asyncio.gather(*tasks)

        return list(results)

    def fetch_feeds_sync(self, sources: Sequence[FeedSource]) -> List[FeedResult]:
        """Synchronous wrapper for fetch_all_feeds."""
        return asyncio.run(self.fetch_all_feeds(sources))
