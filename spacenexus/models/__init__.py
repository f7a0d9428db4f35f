"""Data models for the Space Nexus blog aggregator."""

from .article import Article, ArticlePage, ArticleWithSource, FreshnessReport, Topic
from .source import AuthorType, Source, SourceSummary

__all__ = [
    "Article",
    "ArticlePage",
    "ArticleWithSource",
    "AuthorType",
    "FreshnessReport",
    "Source",
    "SourceSummary",
    "Topic",
]
