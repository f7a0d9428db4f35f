"""Article model for storing fetched blog posts."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .base import DBModel


class Topic(str, Enum):
    """Fixed topic vocabulary for articles."""

    SPACE_LAW = "space_law"
    INVESTMENT = "investment"
    POLICY = "policy"
    TECHNOLOGY = "technology"
    BUSINESS = "business"
    EXPLORATION = "exploration"


class Article(DBModel):
    """Article model."""

    source_id: int = Field(..., description="Foreign key to blog_sources table")
    url: str = Field(..., description="Canonical URL of the article")
    title: str = Field(..., description="Article title")
    excerpt: Optional[str] = Field(None, description="Plain-text excerpt")
    author_name: Optional[str] = Field(None, description="Author name")
    topic: Topic = Field(Topic.EXPLORATION, description="Topic classification")
    published_at: datetime = Field(..., description="Publication timestamp")
    fetched_at: datetime = Field(..., description="When the article was last fetched")


class ArticleWithSource(Article):
    """Article joined with the display fields of its source."""

    source_name: str = Field(..., description="Source display name")
    source_slug: str = Field(..., description="Source slug")
    source_author_type: str = Field(..., description="Source author type")
    source_image_url: Optional[str] = Field(None, description="Source image URL")


class ArticlePage(BaseModel):
    """One page of articles plus the unpaginated total."""

    items: List[ArticleWithSource] = Field(default_factory=list)
    total: int = Field(0, description="Total matching articles")


class FreshnessReport(BaseModel):
    """Age of the most recently fetched article."""

    last_fetched_at: Optional[datetime] = Field(None, description="Newest fetched_at")
    age_minutes: Optional[int] = Field(None, description="Minutes since last fetch")
    max_stale_minutes: int = Field(..., description="Staleness threshold")
    stale: bool = Field(..., description="Whether the data is older than the threshold")
