"""Default blog sources focused on space industry professionals."""

from typing import Tuple

from ..models.source import AuthorType
from .models import SourceConfig


def default_sources() -> Tuple[SourceConfig, ...]:
    """Return the built-in source registry, in fetch order."""
    return (
        SourceConfig(
            name="The Space Review",
            slug="space-review",
            url="https://www.thespacereview.com",
            feed_url="https://www.thespacereview.com/rss.xml",
            author_type=AuthorType.JOURNALIST,
            description="Essays and commentary about the final frontier",
        ),
        SourceConfig(
            name="Space Policy Online",
            slug="space-policy-online",
            url="https://spacepolicyonline.com",
            feed_url="https://spacepolicyonline.com/feed/",
            author_type=AuthorType.CONSULTANT,
            description="Space policy news and analysis",
        ),
        SourceConfig(
            name="Parabolic Arc",
            slug="parabolic-arc",
            url="http://www.parabolicarc.com",
            feed_url="http://www.parabolicarc.com/feed/",
            author_type=AuthorType.JOURNALIST,
            description="Space news and commentary",
        ),
        SourceConfig(
            name="SpaceNews Opinion",
            slug="spacenews-opinion",
            url="https://spacenews.com/section/opinion/",
            feed_url="https://spacenews.com/section/opinion/feed/",
            author_type=AuthorType.CONSULTANT,
            description="Expert opinions on space industry matters",
        ),
        SourceConfig(
            name="NASA Blogs",
            slug="nasa-blogs",
            url="https://blogs.nasa.gov",
            feed_url="https://blogs.nasa.gov/feed/",
            author_type=AuthorType.ENGINEER,
            description="Official NASA mission and program blogs",
        ),
        SourceConfig(
            name="The Planetary Society Blog",
            slug="planetary-society",
            url="https://www.planetary.org/articles",
            feed_url="https://www.planetary.org/feed",
            author_type=AuthorType.CONSULTANT,
            description="Space exploration advocacy and education",
        ),
        SourceConfig(
            name="Space Explored",
            slug="space-explored",
            url="https://spaceexplored.com",
            feed_url="https://spaceexplored.com/feed/",
            author_type=AuthorType.JOURNALIST,
            description="Space industry news and analysis",
        ),
    )
