"""Source model for blog and RSS feed providers."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import DBModel


class AuthorType(str, Enum):
    """Coarse role of a feed's typical writers."""

    JOURNALIST = "journalist"
    LAWYER = "lawyer"
    CONSULTANT = "consultant"
    ENGINEER = "engineer"
    ENTREPRENEUR = "entrepreneur"
    INVESTOR = "investor"


class Source(DBModel):
    """Blog feed source model."""

    slug: str = Field(..., description="Stable unique identifier, used as upsert key")
    name: str = Field(..., description="Display name")
    url: str = Field(..., description="Canonical site URL")
    feed_url: Optional[str] = Field(None, description="RSS/Atom feed URL, if the site has one")
    type: str = Field("blog", description="Source type")
    author_type: AuthorType = Field(..., description="Author type classification")
    author_name: Optional[str] = Field(None, description="Default author when feed items carry none")
    author_title: Optional[str] = Field(None, description="Default author title")
    description: Optional[str] = Field(None, description="Short description")
    image_url: Optional[str] = Field(None, description="Logo or avatar URL")
    is_active: bool = Field(True, description="Whether the source is fetched")
    last_fetched: Optional[datetime] = Field(None, description="Last successful fetch")


class SourceSummary(Source):
    """Source annotated with its stored article count."""

    article_count: int = Field(0, description="Number of stored articles")
