"""Data models for ingestion."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class FeedSource(BaseModel):
    """An active source as handed to the fetcher."""

    id: int = Field(..., description="Source database ID")
    name: str = Field(..., description="Source name")
    feed_url: Optional[str] = Field(None, description="RSS/Atom feed URL")
    author_name: Optional[str] = Field(None, description="Default author name")


class FeedItem(BaseModel):
    """Parsed RSS feed item."""

    title: str = Field(..., description="Article title")
    link: str = Field(..., description="Article URL")
    published: Optional[datetime] = Field(None, description="Publication date")
    content: str = Field("", description="Raw content, possibly HTML")
    author: Optional[str] = Field(None, description="Author from feed metadata or source default")
    source_name: str = Field(..., description="Source name")
    source_id: Optional[int] = Field(None, description="Source database ID")


class FeedResult(BaseModel):
    """Result of fetching an RSS feed."""

    source_id: int = Field(..., description="Source database ID")
    source_name: str = Field(..., description="Source name")
    source_url: str = Field(..., description="RSS feed URL")
    success: bool = Field(..., description="Whether fetch was successful")
    items: list[FeedItem] = Field(default_factory=list, description="Parsed feed items")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Number of items kept")
