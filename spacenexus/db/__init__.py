"""Database management for the Space Nexus blog aggregator."""

from .articles import ArticleStorage
from .connection import close_connection_pool, get_connection, get_connection_pool
from .init import create_schema, init_database, validate_connection
from .sources import SourceManager

__all__ = [
    "ArticleStorage",
    "SourceManager",
    "close_connection_pool",
    "create_schema",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
