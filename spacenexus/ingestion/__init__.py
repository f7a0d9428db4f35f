"""RSS ingestion: fetching, excerpting and topic classification."""

from .classifier import TOPIC_KEYWORDS, categorize_topic
from .models import FeedItem, FeedResult, FeedSource
from .normalizer import extract_excerpt, strip_html
from .rss_fetcher import FeedFetchError, FeedTimeoutError, RSSFetcher

__all__ = [
    "RSSFetcher",
    "FeedFetchError",
    "FeedTimeoutError",
    "FeedItem",
    "FeedResult",
    "FeedSource",
    "TOPIC_KEYWORDS",
    "categorize_topic",
    "extract_excerpt",
    "strip_html",
]
