"""Wiring of store, cache, service and resolver from configuration."""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Config
from .database import LinkStoreBase, RedisCache, create_link_store
from .resolver import RedirectResolver
from .service import ExpandService
from .tokens import TokenGenerator


@dataclass
class Components:
    """Everything a request handler or CLI command needs."""

    store: LinkStoreBase
    cache: Optional[RedisCache]
    service: ExpandService
    resolver: RedirectResolver

    async def close(self) -> None:
        # The service owns both the store and the cache
        await self.service.close()


async def build_components(config: Config, logger: logging.Logger) -> Components:
    """Build and connect all components for a configuration.

    Args:
        config: Configuration instance
        logger: Logger shared by all components

    Returns:
        Connected components
    """
    store = create_link_store(
        config.database_url,
        pool_max_size=config.database_pool_max_size,
        create_tables=config.database_create_tables,
        logger=logger,
    )

    cache = None
    if config.redis_url:
        logger.info("Connecting to Redis cache")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    service = ExpandService(
        store=store,
        base_url=config.base_url,
        token_generator=TokenGenerator(),
        cache=cache,
        logger=logger,
        default_length=config.default_token_length,
        min_length=config.min_token_length,
        max_length=config.max_token_length,
        max_collision_retries=config.max_collision_retries,
    )
    resolver = RedirectResolver(
        store=store,
        base_url=config.base_url,
        cache=cache,
        logger=logger,
    )

    return Components(store=store, cache=cache, service=service, resolver=resolver)
