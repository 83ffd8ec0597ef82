"""Database layer for URL expander."""

import logging
from typing import Optional

from .base import LinkStoreBase
from .cache import RedisCache
from .memory import InMemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore


def create_link_store(
    database_url: Optional[str],
    pool_max_size: int = 10,
    create_tables: bool = False,
    logger: Optional[logging.Logger] = None,
) -> LinkStoreBase:
    """Pick a link store implementation for the configured database URL.

    Args:
        database_url: PostgreSQL DSN, or None for the in-memory store
        pool_max_size: Maximum size of the PostgreSQL connection pool
        create_tables: Create the links table on first use
        logger: Optional logger instance

    Returns:
        Link store instance
    """
    logger = logger or logging.getLogger(__name__)

    if not database_url:
        logger.warning("No DATABASE_URL configured - links are kept in memory only")
        return InMemoryLinkStore(logger=logger)

    return PostgresLinkStore(
        db_config=database_url,
        pool_max_size=pool_max_size,
        create_tables=create_tables,
        logger=logger,
    )


__all__ = [
    "LinkStoreBase",
    "InMemoryLinkStore",
    "PostgresLinkStore",
    "RedisCache",
    "Link",
    "create_link_store",
]
