"""In-memory link store."""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ..errors import ExpandedUrlCollision
from .base import LinkStoreBase
from .models import Link


class InMemoryLinkStore(LinkStoreBase):
    """Process-local link store.

    Used for development when no database is configured, and in tests.
    Contents are lost when the process exits.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__(None)
        self.logger = logger or logging.getLogger(__name__)
        self._by_original: Dict[str, Link] = {}
        self._by_expanded: Dict[str, Link] = {}
        # Write sequence per original URL; orders list_recent when timestamps tie
        self._write_seq: Dict[str, int] = {}
        self._seq = 0
        self._next_id = 1
        self._lock = asyncio.Lock()

    @property
    def backend_name(self) -> str:
        return "memory"

    async def find_by_original(self, original_url: str) -> Optional[Link]:
        link = self._by_original.get(original_url)
        return replace(link) if link else None

    async def find_by_expanded(self, expanded_url: str) -> Optional[Link]:
        link = self._by_expanded.get(expanded_url)
        return replace(link) if link else None

    async def upsert(
        self,
        original_url: str,
        expanded_url: str,
        description: str,
    ) -> Link:
        async with self._lock:
            owner = self._by_expanded.get(expanded_url)
            if owner is not None and owner.original_url != original_url:
                raise ExpandedUrlCollision(expanded_url)

            now = datetime.now(timezone.utc)
            existing = self._by_original.get(original_url)
            replaced = existing.expanded_url if existing is not None else None

            if existing is not None:
                self._by_expanded.pop(existing.expanded_url, None)
                link = replace(
                    existing,
                    expanded_url=expanded_url,
                    description=description,
                    updated_at=now,
                )
                self.logger.debug(f"Updated link {link.id}: {original_url} -> {expanded_url}")
            else:
                link = Link(
                    id=self._next_id,
                    original_url=original_url,
                    expanded_url=expanded_url,
                    description=description,
                    created_at=now,
                    updated_at=now,
                )
                self._next_id += 1
                self.logger.debug(f"Inserted link {link.id}: {original_url} -> {expanded_url}")

            self._seq += 1
            self._write_seq[original_url] = self._seq
            self._by_original[original_url] = link
            self._by_expanded[expanded_url] = link
            return replace(link, previous_expanded_url=replaced)

    async def list_recent(self, limit: int = 100) -> List[Link]:
        links = sorted(
            self._by_original.values(),
            key=lambda link: self._write_seq[link.original_url],
            reverse=True,
        )
        return [replace(link) for link in links[:limit]]

    async def count_links(self) -> int:
        return len(self._by_original)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
