"""Data models for URL expander."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


def _as_utc(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Link:
    """Represents an original URL and its current expanded URL."""

    original_url: str
    expanded_url: str
    description: str
    created_at: datetime
    updated_at: datetime
    id: Optional[int] = None
    # Set by upsert: the expanded URL this write replaced. Not persisted.
    previous_expanded_url: Optional[str] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "original_url": self.original_url,
            "expanded_url": self.expanded_url,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Link":
        """Create from dictionary or database record."""
        return cls(
            id=data.get("id"),
            original_url=data["original_url"],
            expanded_url=data["expanded_url"],
            description=data.get("description") or "",
            created_at=_as_utc(data["created_at"]),
            updated_at=_as_utc(data["updated_at"]),
            previous_expanded_url=data.get("previous_expanded_url"),
        )
