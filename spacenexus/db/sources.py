"""Source management in database."""

import logging
from datetime import datetime
from typing import Any, List, Optional, Sequence

import pendulum
import psycopg
from psycopg import Connection

from ..config import SourceConfig
from ..ingestion.models import FeedSource
from ..models import SourceSummary

logger = logging.getLogger(__name__)


class SourceManager:
    """Manage blog sources in database."""

    def register_sources(
        self,
        conn: Connection,
        sources: Sequence[SourceConfig],
    ) -> int:
        """
        Upsert sources by slug.

        Each source is written in its own savepoint, so one bad row does not
        undo the others.

        Returns:
            Number of sources successfully upserted
        """
        count = 0

        for source in sources:
            try:
                with conn.transaction():
                    with conn.cursor() as cur:
                        cur.execute(
                            """
                            INSERT INTO blog_sources (
                                slug, name, url, feed_url, type, author_type,
                                author_name, author_title, description, image_url, is_active
                            ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                            ON CONFLICT (slug) DO UPDATE SET
                                name = EXCLUDED.name,
                                url = EXCLUDED.url,
                                feed_url = EXCLUDED.feed_url,
                                type = EXCLUDED.type,
                                author_type = EXCLUDED.author_type,
                                author_name = EXCLUDED.author_name,
                                author_title = EXCLUDED.author_title,
                                description = EXCLUDED.description,
                                image_url = EXCLUDED.image_url,
                                is_active = EXCLUDED.is_active
                            """,
                            (
                                source.slug,
                                source.name,
                                source.url,
                                source.feed_url,
                                source.type,
                                source.author_type.value,
                                source.author_name,
                                source.author_title,
                                source.description,
                                source.image_url,
                                source.is_active,
                            ),
                        )
                count += 1
            except (psycopg.OperationalError, psycopg.InterfaceError):
                raise
            except psycopg.Error:
                logger.exception("Failed to add source %s", source.name)

        conn.commit()
        return count

    def get_active_sources(self, conn: Connection) -> List[FeedSource]:
        """Active sources in registry order, including ones without a feed."""
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT id, name, feed_url, author_name
                FROM blog_sources
                WHERE is_active = TRUE
                ORDER BY id
                """
            )
            sources = [FeedSource(**row) for row in cur.fetchall()]

        # End the read so later upserts commit on their own
        conn.commit()
        return sources

    def mark_fetched(
        self,
        conn: Connection,
        source_id: int,
        fetched_at: Optional[datetime] = None,
    ) -> None:
        """Record a successful fetch, whether or not it found new items."""
        if fetched_at is None:
            fetched_at = pendulum.now("UTC")

        with conn.cursor() as cur:
            cur.execute(
                "UPDATE blog_sources SET last_fetched = %s WHERE id = %s",
                (fetched_at, source_id),
            )
        conn.commit()

    def list_sources(
        self,
        conn: Connection,
        author_type: Optional[str] = None,
        is_active: bool = True,
    ) -> List[SourceSummary]:
        """Sources ordered by name, each with its article count."""
        conditions = ["s.is_active = %s"]
        params: List[Any] = [is_active]

        if author_type:
            conditions.append("s.author_type = %s")
            params.append(str(getattr(author_type, "value", author_type)))

        with conn.cursor() as cur:
            cur.execute(
                f"""
                SELECT s.*, COUNT(p.id) AS article_count
                FROM blog_sources s
                LEFT JOIN blog_posts p ON p.source_id = s.id
                WHERE {" AND ".join(conditions)}
                GROUP BY s.id
                ORDER BY s.name ASC
                """,
                params,
            )
            return [SourceSummary(**row) for row in cur.fetchall()]
