"""Pytest configuration and fixtures."""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import httpx
import pendulum
import psycopg
import pytest

from spacenexus.config import ConfigModel, SourceConfig
from spacenexus.ingestion import FeedSource, RSSFetcher
from spacenexus.models import AuthorType


def rss_feed(items: Sequence[Dict[str, str]], title: str = "Test Feed") -> bytes:
    """Build an RSS 2.0 document; item keys map to element names."""
    parts = []
    for item in items:
        fields = []
        if "title" in item:
            fields.append(f"<title>{item['title']}</title>")
        if "link" in item:
            fields.append(f"<link>{item['link']}</link>")
        if "description" in item:
            fields.append(f"<description><![CDATA[{item['description']}]]></description>")
        if "content" in item:
            fields.append(f"<content:encoded><![CDATA[{item['content']}]]></content:encoded>")
        if "creator" in item:
            fields.append(f"<dc:creator>{item['creator']}</dc:creator>")
        if "pubDate" in item:
            fields.append(f"<pubDate>{item['pubDate']}</pubDate>")
        parts.append("<item>" + "".join(fields) + "</item>")

    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/"'
        ' xmlns:dc="http://purl.org/dc/elements/1.1/">'
        f"<channel><title>{title}</title><link>https://example.com</link>"
        "<description>Feed</description>"
        + "".join(parts)
        + "</channel></rss>"
    ).encode("utf-8")


def feed_items(count: int, prefix: str = "https://example.com/post") -> List[Dict[str, str]]:
    return [
        {
            "title": f"Post {i}",
            "link": f"{prefix}-{i}",
            "description": f"<p>Body of post {i}</p>",
            "pubDate": "Mon, 06 Jan 2025 10:00:00 GMT",
        }
        for i in range(count)
    ]


Route = Callable[[httpx.Request], object]


def mock_transport(routes: Dict[str, Route]) -> httpx.MockTransport:
    """Dispatch requests by full URL; unknown URLs get a 404."""

    async def handler(request: httpx.Request):
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, request=request)
        result = route(request)
        if asyncio.iscoroutine(result):
            result = await result
        return result

    return httpx.MockTransport(handler)


def respond(body: bytes, status: int = 200) -> Route:
    def route(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status,
            content=body,
            headers={"content-type": "application/rss+xml"},
            request=request,
        )

    return route


def hang(seconds: float = 30.0) -> Route:
    async def route(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(seconds)
        return httpx.Response(200, content=rss_feed(feed_items(1)), request=request)

    return route


def fail_connect() -> Route:
    def route(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return route


class FakeSourceManager:
    """In-memory stand-in for SourceManager."""

    def __init__(self) -> None:
        self.sources: Dict[str, dict] = {}
        self.fetched: Dict[int, datetime] = {}
        self._next_id = 1

    def register_sources(self, conn, sources: Sequence[SourceConfig]) -> int:
        count = 0
        for source in sources:
            existing = self.sources.get(source.slug)
            source_id = existing["id"] if existing else self._next_id
            if not existing:
                self._next_id += 1
            self.sources[source.slug] = {"id": source_id, **source.model_dump()}
            count += 1
        return count

    def get_active_sources(self, conn) -> List[FeedSource]:
        rows = sorted(self.sources.values(), key=lambda r: r["id"])
        return [
            FeedSource(
                id=r["id"],
                name=r["name"],
                feed_url=r["feed_url"],
                author_name=r["author_name"],
            )
            for r in rows
            if r["is_active"]
        ]

    def mark_fetched(self, conn, source_id: int, fetched_at: Optional[datetime] = None) -> None:
        self.fetched[source_id] = fetched_at or pendulum.now("UTC")

    def id_for(self, slug: str) -> int:
        return self.sources[slug]["id"]


class FakeArticleStorage:
    """In-memory stand-in for ArticleStorage, keyed by URL."""

    def __init__(self, fail_urls: Sequence[str] = (), broken: bool = False) -> None:
        self.articles: Dict[str, dict] = {}
        self.fail_urls = set(fail_urls)
        self.broken = broken
        self._next_id = 1

    def upsert_article(
        self,
        conn,
        source_id: int,
        url: str,
        title: str,
        excerpt: str,
        author_name: Optional[str],
        topic: str,
        published_at: datetime,
    ) -> Tuple[int, bool]:
        if self.broken:
            raise psycopg.OperationalError("server closed the connection unexpectedly")
        if url in self.fail_urls:
            raise psycopg.IntegrityError(f"rejected {url}")

        record = {
            "source_id": source_id,
            "url": url,
            "title": title,
            "excerpt": excerpt,
            "author_name": author_name,
            "topic": topic,
            "published_at": published_at,
            "fetched_at": pendulum.now("UTC"),
        }
        existing = self.articles.get(url)
        if existing:
            existing.update(record)
            return existing["id"], False

        record["id"] = self._next_id
        self._next_id += 1
        self.articles[url] = record
        return record["id"], True


def make_source(slug: str, feed_url: Optional[str], **kwargs) -> SourceConfig:
    return SourceConfig(
        slug=slug,
        name=kwargs.pop("name", slug.replace("-", " ").title()),
        url=f"https://{slug}.example.com",
        feed_url=feed_url,
        author_type=kwargs.pop("author_type", AuthorType.JOURNALIST),
        **kwargs,
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging so caplog sees records in every test."""
    yield
    logger = logging.getLogger("spacenexus")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def source_manager() -> FakeSourceManager:
    return FakeSourceManager()


@pytest.fixture
def article_storage() -> FakeArticleStorage:
    return FakeArticleStorage()


@pytest.fixture
def config() -> ConfigModel:
    return ConfigModel(fetch={"timeout_seconds": 0.5})


@pytest.fixture
def make_fetcher() -> Callable[..., RSSFetcher]:
    def factory(routes: Dict[str, Route], **kwargs) -> RSSFetcher:
        kwargs.setdefault("timeout", 0.5)
        return RSSFetcher(transport=mock_transport(routes), **kwargs)

    return factory
