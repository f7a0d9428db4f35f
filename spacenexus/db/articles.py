"""Article storage and the read-side query façade."""

from datetime import datetime
from typing import Any, List, Optional, Tuple

import pendulum
from psycopg import Connection

from ..models import ArticlePage, ArticleWithSource, FreshnessReport

ARTICLE_COLUMNS = """
    p.id, p.source_id, p.url, p.title, p.excerpt, p.author_name, p.topic,
    p.published_at, p.fetched_at, p.created_at, p.updated_at,
    s.name AS source_name,
    s.slug AS source_slug,
    s.author_type AS source_author_type,
    s.image_url AS source_image_url
"""


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def build_article_filters(
    topic: Optional[str] = None,
    author_type: Optional[str] = None,
    source_id: Optional[int] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the WHERE clause for article queries.

    Author type is matched through the owning source, so the clause
    expects blog_posts aliased as ``p`` joined to blog_sources as ``s``.

    Returns:
        Tuple of (where_sql, params); where_sql is empty when unfiltered
    """
    conditions: List[str] = []
    params: List[Any] = []

    if topic:
        conditions.append("p.topic = %s")
        params.append(_enum_value(topic))

    if source_id is not None:
        conditions.append("p.source_id = %s")
        params.append(source_id)

    if author_type:
        conditions.append("s.author_type = %s")
        params.append(_enum_value(author_type))

    if not conditions:
        return "", params
    return "WHERE " + " AND ".join(conditions), params


class ArticleStorage:
    """Handle article storage and deduplication by URL."""

    def upsert_article(
        self,
        conn: Connection,
        source_id: int,
        url: str,
        title: str,
        excerpt: str,
        author_name: Optional[str],
        topic: str,
        published_at: datetime,
    ) -> Tuple[int, bool]:
        """
        Insert an article, or refresh it if the URL is already stored.

        Runs in its own savepoint so a rejected row leaves the rest of the
        feed's work intact.

        Returns:
            Tuple of (article_id, is_new)
        """
        with conn.transaction():
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO blog_posts (
                        source_id, url, title, excerpt, author_name, topic,
                        published_at, fetched_at
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (url) DO UPDATE SET
                        title = EXCLUDED.title,
                        excerpt = EXCLUDED.excerpt,
                        author_name = EXCLUDED.author_name,
                        topic = EXCLUDED.topic,
                        published_at = EXCLUDED.published_at,
                        fetched_at = CURRENT_TIMESTAMP
                    RETURNING id, (xmax = 0) AS inserted
                    """,
                    (
                        source_id,
                        url,
                        title,
                        excerpt,
                        author_name,
                        _enum_value(topic),
                        published_at,
                    ),
                )
                row = cur.fetchone()

        return row["id"], bool(row["inserted"])

    def list_articles(
        self,
        conn: Connection,
        topic: Optional[str] = None,
        author_type: Optional[str] = None,
        source_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> ArticlePage:
        """Filtered page of articles, newest first, plus the total count."""
        where_sql, params = build_article_filters(topic, author_type, source_id)

        with conn.cursor() as cur:
            cur.execute(
                f"""
                SELECT {ARTICLE_COLUMNS}
                FROM blog_posts p
                JOIN blog_sources s ON s.id = p.source_id
                {where_sql}
                ORDER BY p.published_at DESC, p.id DESC
                LIMIT %s OFFSET %s
                """,
                [*params, limit, offset],
            )
            items = [ArticleWithSource(**row) for row in cur.fetchall()]

            cur.execute(
                f"""
                SELECT COUNT(*) AS total
                FROM blog_posts p
                JOIN blog_sources s ON s.id = p.source_id
                {where_sql}
                """,
                params,
            )
            total = cur.fetchone()["total"]

        return ArticlePage(items=items, total=total)

    def recent_articles(self, conn: Connection, limit: int = 6) -> List[ArticleWithSource]:
        """Newest articles across all sources."""
        with conn.cursor() as cur:
            cur.execute(
                f"""
                SELECT {ARTICLE_COLUMNS}
                FROM blog_posts p
                JOIN blog_sources s ON s.id = p.source_id
                ORDER BY p.published_at DESC, p.id DESC
                LIMIT %s
                """,
                (limit,),
            )
            return [ArticleWithSource(**row) for row in cur.fetchall()]

    def count_articles(self, conn: Connection) -> int:
        """Total stored articles."""
        with conn.cursor() as cur:
            cur.execute("SELECT COUNT(*) AS total FROM blog_posts")
            return cur.fetchone()["total"]

    def latest_fetch(self, conn: Connection, max_stale_minutes: int = 360) -> FreshnessReport:
        """How long ago any article was last fetched."""
        with conn.cursor() as cur:
            cur.execute("SELECT MAX(fetched_at) AS last_fetched_at FROM blog_posts")
            last_fetched_at = cur.fetchone()["last_fetched_at"]

        return freshness_report(last_fetched_at, max_stale_minutes)


def freshness_report(
    last_fetched_at: Optional[datetime],
    max_stale_minutes: int,
    now: Optional[datetime] = None,
) -> FreshnessReport:
    """Build a freshness report; no data at all counts as stale."""
    if last_fetched_at is None:
        return FreshnessReport(max_stale_minutes=max_stale_minutes, stale=True)

    now = pendulum.instance(now) if now else pendulum.now("UTC")
    fetched = pendulum.instance(last_fetched_at)
    age_minutes = int((now - fetched).total_seconds() // 60)

    return FreshnessReport(
        last_fetched_at=last_fetched_at,
        age_minutes=age_minutes,
        max_stale_minutes=max_stale_minutes,
        stale=age_minutes > max_stale_minutes,
    )
