"""RSS fetcher tests."""

import time
from datetime import timezone

import httpx
import pytest

from conftest import fail_connect, feed_items, hang, mock_transport, respond, rss_feed
from spacenexus.ingestion import FeedSource, RSSFetcher
from spacenexus.ingestion.rss_fetcher import FEED_ACCEPT

FEED_A = "https://a.example.com/feed"
FEED_B = "https://b.example.com/feed"
FEED_C = "https://c.example.com/feed"


def source(source_id: int, feed_url, name: str = None, author_name: str = None) -> FeedSource:
    return FeedSource(
        id=source_id,
        name=name or f"Source {source_id}",
        feed_url=feed_url,
        author_name=author_name,
    )


class TestParseFeed:
    """Tests for RSSFetcher.parse_feed."""

    def test_extracts_item_fields(self):
        body = rss_feed(
            [
                {
                    "title": "Orbital debris rules",
                    "link": "https://a.example.com/debris",
                    "content": "<p>Full <b>encoded</b> body</p>",
                    "description": "Snippet",
                    "creator": "Jane Doe",
                    "pubDate": "Tue, 07 Jan 2025 08:30:00 GMT",
                }
            ]
        )
        items = RSSFetcher().parse_feed(body, source(1, FEED_A))

        assert len(items) == 1
        item = items[0]
        assert item.title == "Orbital debris rules"
        assert item.link == "https://a.example.com/debris"
        assert "encoded" in item.content
        assert item.author == "Jane Doe"
        assert item.source_id == 1
        assert item.published.year == 2025
        assert item.published.hour == 8
        assert item.published.utcoffset() == timezone.utc.utcoffset(None)

    def test_content_falls_back_to_snippet(self):
        body = rss_feed([{"title": "T", "link": "https://a.example.com/t", "description": "Just a snippet"}])
        items = RSSFetcher().parse_feed(body, source(1, FEED_A))
        assert items[0].content == "Just a snippet"

    def test_author_falls_back_to_source_default(self):
        body = rss_feed([{"title": "T", "link": "https://a.example.com/t"}])
        items = RSSFetcher().parse_feed(body, source(1, FEED_A, author_name="Editorial Team"))
        assert items[0].author == "Editorial Team"
        assert items[0].content == ""

    def test_missing_date_left_for_pipeline(self):
        body = rss_feed([{"title": "T", "link": "https://a.example.com/t"}])
        items = RSSFetcher().parse_feed(body, source(1, FEED_A))
        assert items[0].published is None

    def test_skips_entries_without_link_or_title(self):
        body = rss_feed(
            [
                {"title": "No link here"},
                {"link": "https://a.example.com/untitled"},
                {"title": "Good", "link": "https://a.example.com/good"},
            ]
        )
        items = RSSFetcher().parse_feed(body, source(1, FEED_A))
        assert [i.link for i in items] == ["https://a.example.com/good"]

    def test_caps_items_per_feed_in_feed_order(self):
        body = rss_feed(feed_items(30))
        items = RSSFetcher(max_items=20).parse_feed(body, source(1, FEED_A))
        assert len(items) == 20
        assert items[0].title == "Post 0"
        assert items[-1].title == "Post 19"

    def test_rejects_non_positive_limits(self):
        with pytest.raises(ValueError):
            RSSFetcher(max_items=0)
        with pytest.raises(ValueError):
            RSSFetcher(max_items=-1)
        with pytest.raises(ValueError):
            RSSFetcher(timeout=0)

    def test_empty_channel_is_valid(self):
        items = RSSFetcher().parse_feed(rss_feed([]), source(1, FEED_A))
        assert items == []


class TestFetchFeeds:
    """Tests for fetching over HTTP."""

    def test_successful_fetch(self, make_fetcher):
        fetcher = make_fetcher({FEED_A: respond(rss_feed(feed_items(2)))})
        results = fetcher.fetch_feeds_sync([source(1, FEED_A)])

        assert len(results) == 1
        assert results[0].success
        assert results[0].item_count == 2
        assert results[0].error is None

    def test_sends_identifying_headers(self, make_fetcher):
        seen = {}

        def route(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, content=rss_feed([]), request=request)

        fetcher = make_fetcher({FEED_A: route}, user_agent="SpaceNexusTest/2.0")
        fetcher.fetch_feeds_sync([source(1, FEED_A)])

        assert seen["user-agent"] == "SpaceNexusTest/2.0"
        assert seen["accept"] == FEED_ACCEPT

    def test_http_error_is_reported_not_raised(self, make_fetcher):
        fetcher = make_fetcher({FEED_A: respond(b"gone", status=500)})
        results = fetcher.fetch_feeds_sync([source(1, FEED_A)])

        assert not results[0].success
        assert results[0].error == "HTTP 500"

    def test_connection_error_is_reported(self, make_fetcher):
        fetcher = make_fetcher({FEED_A: fail_connect()})
        results = fetcher.fetch_feeds_sync([source(1, FEED_A)])

        assert not results[0].success
        assert "HTTP error" in results[0].error

    def test_non_feed_body_is_a_failure(self, make_fetcher):
        html = b"<html><head><title>Home</title></head><body><p>Welcome</p></body></html>"
        fetcher = make_fetcher({FEED_A: respond(html), FEED_B: respond(b"\x00 not xml <<<")})
        results = fetcher.fetch_feeds_sync([source(1, FEED_A), source(2, FEED_B)])

        assert [r.success for r in results] == [False, False]

    def test_timeout_abandons_hanging_source(self, make_fetcher):
        fetcher = make_fetcher({FEED_A: hang(30)}, timeout=0.2)

        start = time.monotonic()
        results = fetcher.fetch_feeds_sync([source(1, FEED_A)])
        elapsed = time.monotonic() - start

        assert elapsed < 5
        assert not results[0].success
        assert "Timed out" in results[0].error

    def test_one_failure_does_not_block_others(self, make_fetcher):
        fetcher = make_fetcher(
            {
                FEED_A: respond(rss_feed(feed_items(1, "https://a.example.com/p"))),
                FEED_B: hang(30),
                FEED_C: respond(rss_feed(feed_items(3, "https://c.example.com/p"))),
            },
            timeout=0.2,
        )
        results = fetcher.fetch_feeds_sync(
            [source(1, FEED_A), source(2, FEED_B), source(3, FEED_C)]
        )

        assert [r.source_id for r in results] == [1, 2, 3]
        assert [r.success for r in results] == [True, False, True]
        assert results[2].item_count == 3

    def test_concurrent_mode_preserves_order(self, make_fetcher):
        fetcher = make_fetcher(
            {
                FEED_A: hang(0.1),
                FEED_B: respond(rss_feed(feed_items(1))),
            },
            timeout=1.0,
            max_concurrent=2,
        )
        results = fetcher.fetch_feeds_sync([source(1, FEED_A), source(2, FEED_B)])
        assert [r.source_id for r in results] == [1, 2]
        assert all(r.success for r in results)

    def test_sources_without_feed_are_not_requested(self, make_fetcher):
        calls = []

        def route(request: httpx.Request) -> httpx.Response:
            calls.append(str(request.url))
            return httpx.Response(200, content=rss_feed([]), request=request)

        fetcher = make_fetcher({FEED_A: route})
        results = fetcher.fetch_feeds_sync([source(1, None), source(2, FEED_A)])

        assert calls == [FEED_A]
        assert [r.source_id for r in results] == [2]

    def test_real_client_timeout_is_configured(self):
        fetcher = RSSFetcher(timeout=15.0, transport=mock_transport({}))
        client = fetcher._client()
        assert client.timeout.connect == 15.0
        assert client.timeout.read == 15.0
