"""Business logic for creating and refreshing expanded URLs."""

import logging
from typing import Any, Dict, Optional

from .common.url_builder import build_expanded_url
from .common.validators import is_valid_length, is_valid_url
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .database.models import Link
from .errors import ExpandedUrlCollision, GenerationExhausted, InvalidInput
from .tokens import TokenGenerator


class ExpandService:
    """Service layer for URL expansion.

    Every expand call writes exactly one link: the first call for an
    original URL inserts it, later calls replace its expanded URL. The
    superseded expanded URL stops resolving.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        base_url: str,
        token_generator: Optional[TokenGenerator] = None,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
        default_length: int = 100,
        min_length: int = 5,
        max_length: int = 1000,
        max_collision_retries: int = 5,
    ):
        """Initialize expand service.

        Args:
            store: Link store instance
            base_url: Base URL the tokens are appended to
            token_generator: Optional token generator (anything with ``generate(length)``)
            cache: Optional redirect cache; superseded entries are evicted from it
            logger: Optional logger
            default_length: Token length used when the caller gives none
            min_length: Smallest accepted token length
            max_length: Largest accepted token length
            max_collision_retries: Total generation attempts before giving up
        """
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.generator = token_generator or TokenGenerator()
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.default_length = default_length
        self.min_length = min_length
        self.max_length = max_length
        self.max_collision_retries = max(1, max_collision_retries)

    def describe(self, length: int) -> str:
        return f"Generated secure URL with {length}-character string."

    def validate(self, original_url: str, length: Any) -> None:
        """Reject bad input before anything is generated or written.

        Raises:
            InvalidInput: If the URL or the length is invalid
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise InvalidInput(f"Invalid URL: {error}")

        is_valid, error = is_valid_length(length, self.min_length, self.max_length)
        if not is_valid:
            raise InvalidInput(f"Invalid length: {error}")

    async def expand(
        self,
        original_url: str,
        length: Optional[int] = None,
        base_url: Optional[str] = None,
    ) -> str:
        """Create or refresh the expanded URL for an original URL.

        Args:
            original_url: The destination URL
            length: Token length (configured default if None)
            base_url: Per-request base URL override

        Returns:
            The stored expanded URL
        """
        link = await self.expand_link(original_url, length=length, base_url=base_url)
        return link.expanded_url

    async def expand_link(
        self,
        original_url: str,
        length: Optional[int] = None,
        base_url: Optional[str] = None,
    ) -> Link:
        """Create or refresh the expanded URL and return the stored link.

        Args:
            original_url: The destination URL
            length: Token length (configured default if None)
            base_url: Per-request base URL override

        Returns:
            The stored link

        Raises:
            InvalidInput: If validation fails
            GenerationExhausted: If every attempt collided
            StoreUnavailable: If the store cannot be reached
        """
        if length is None:
            length = self.default_length
        self.validate(original_url, length)

        base = (base_url or self.base_url).rstrip("/")
        previous = await self.store.find_by_original(original_url)
        description = self.describe(length)

        for attempt in range(1, self.max_collision_retries + 1):
            token = self.generator.generate(length)
            expanded_url = build_expanded_url(token, base)

            # Reissuing the current URL would leave it valid; treat it as taken
            if previous is not None and expanded_url == previous.expanded_url:
                self.logger.debug(f"Attempt {attempt} reproduced the current expanded URL")
                continue

            try:
                link = await self.store.upsert(original_url, expanded_url, description)
            except ExpandedUrlCollision:
                self.logger.warning(
                    f"Collision on attempt {attempt}/{self.max_collision_retries} "
                    f"for {original_url}"
                )
                continue

            # Evict what the store says was replaced; a concurrent refresh may
            # have moved it on from the snapshot read above
            replaced = link.previous_expanded_url
            if replaced and replaced != link.expanded_url:
                await self._evict(replaced)

            action = "Refreshed" if replaced else "Created"
            self.logger.info(f"{action} expanded URL for {original_url} ({length} chars)")
            return link

        self.logger.error(f"Gave up expanding {original_url} after {self.max_collision_retries} attempts")
        raise GenerationExhausted(self.max_collision_retries)

    async def find_by_original(self, original_url: str) -> Optional[Link]:
        """Get the current link for an original URL."""
        return await self.store.find_by_original(original_url)

    async def list_recent(self, limit: int = 100) -> list:
        """List recently expanded links.

        Args:
            limit: Maximum number to return

        Returns:
            List of links, newest first
        """
        return await self.store.list_recent(limit)

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "total_links": await self.store.count_links(),
            "database": self.store.backend_name,
            "cache_enabled": self.cache is not None and self.cache.enabled,
        }

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def _evict(self, expanded_url: str) -> None:
        if self.cache:
            await self.cache.forget(expanded_url)

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()
