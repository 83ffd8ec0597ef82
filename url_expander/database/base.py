"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Link


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.

    Implementations must keep ``original_url`` and ``expanded_url`` unique
    across all links.
    """

    def __init__(self, db_config: Optional[str] = None):
        """Initialize store.

        Args:
            db_config: Database connection string (None for in-process stores)
        """
        self.db_config = db_config

    @property
    def backend_name(self) -> str:
        """Short backend name used in statistics and health output."""
        return "unknown"

    @abstractmethod
    async def find_by_original(self, original_url: str) -> Optional[Link]:
        """Get the link for an original URL.

        Args:
            original_url: The destination URL

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_expanded(self, expanded_url: str) -> Optional[Link]:
        """Get the link that owns an expanded URL.

        Args:
            expanded_url: The full expanded URL (base_url + "/" + token)

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(
        self,
        original_url: str,
        expanded_url: str,
        description: str,
    ) -> Link:
        """Insert a link, or replace the expanded URL of an existing one.

        Links are keyed by ``original_url``. An existing link keeps its
        ``created_at`` and gets a fresh ``updated_at``.

        Args:
            original_url: The destination URL
            expanded_url: The newly generated expanded URL
            description: Human-readable description

        Returns:
            The stored link, with ``previous_expanded_url`` set to the
            expanded URL this write replaced (None for an insert)

        Raises:
            ExpandedUrlCollision: If expanded_url belongs to a different link
            StoreUnavailable: If the backend cannot be reached
        """
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 100) -> List[Link]:
        """List most recently updated links.

        Args:
            limit: Maximum number of links to return

        Returns:
            Links ordered by updated_at, newest first
        """
        pass

    @abstractmethod
    async def count_links(self) -> int:
        """Count stored links."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store resources."""
        pass
