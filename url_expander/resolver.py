"""Redirect resolution for expanded URLs."""

import logging
from typing import Optional

from .common.url_builder import build_expanded_url
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .database.models import Link
from .errors import NotFound
from .tokens import TokenGenerator


class RedirectResolver:
    """Read-only lookup from a token back to its original URL."""

    def __init__(
        self,
        store: LinkStoreBase,
        base_url: str,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, token: str, base_url: Optional[str] = None) -> str:
        """Get the original URL for a token.

        Args:
            token: Path segment of the expanded URL
            base_url: Per-request base URL override

        Returns:
            Original URL to redirect to

        Raises:
            NotFound: If no link owns the expanded URL
            StoreUnavailable: If the store cannot be reached
        """
        if not TokenGenerator.is_valid_format(token):
            self.logger.debug(f"Rejected malformed token: {token!r}")
            raise NotFound(token)

        expanded_url = build_expanded_url(token, base_url or self.base_url)

        if self.cache:
            cached_url = await self.cache.get_original(expanded_url)
            if cached_url:
                self.logger.debug(f"Cache hit for {expanded_url}")
                return cached_url

        link = await self.store.find_by_expanded(expanded_url)
        if link is None:
            self.logger.warning(f"Expanded URL not found: {expanded_url}")
            raise NotFound(token)

        if self.cache:
            await self.cache.remember(expanded_url, link.original_url)

        self.logger.debug(f"Resolved {expanded_url} -> {link.original_url}")
        return link.original_url

    async def get_link(self, token: str, base_url: Optional[str] = None) -> Link:
        """Get the full link record for a token, bypassing the cache.

        Raises:
            NotFound: If no link owns the expanded URL
        """
        if not TokenGenerator.is_valid_format(token):
            raise NotFound(token)

        link = await self.store.find_by_expanded(
            build_expanded_url(token, base_url or self.base_url)
        )
        if link is None:
            raise NotFound(token)
        return link
